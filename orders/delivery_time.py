"""
Purpose: Delivery time policy per membership tier (the "DeliveryTimeEstimator").
What it does:
- Holds the tier table: min/max minutes, optional express minutes and express surcharge.
- Picks the estimated duration (and surcharge) for an order at dispatch time.

Rules:
- Unknown tiers are treated as NONE.
- PLATINUM is already the fastest baseline: always its max time, no surcharge, express ignored.
- GOLD may opt into express (express minutes + surcharge).
- Everyone else gets the tier's max time with no surcharge.

The output seeds DeliveryProgressState.estimated_minutes exactly once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .models import DeliveryEstimate, MembershipTier


@dataclass(frozen=True)
class TierTiming:
    min_minutes: int
    max_minutes: int
    express_minutes: Optional[int] = None
    express_surcharge: float = 0

    def validate(self) -> None:
        if self.min_minutes <= 0 or self.max_minutes <= 0:
            raise ValueError("tier minutes must be > 0")

        if self.min_minutes > self.max_minutes:
            raise ValueError("min_minutes must be <= max_minutes")

        if self.express_minutes is not None and self.express_minutes <= 0:
            raise ValueError("express_minutes must be > 0")

        if self.express_surcharge < 0:
            raise ValueError("express_surcharge must be >= 0")


DEFAULT_TIER_TIMINGS: Dict[MembershipTier, TierTiming] = {
    MembershipTier.NONE: TierTiming(min_minutes=25, max_minutes=30),
    MembershipTier.SILVER: TierTiming(min_minutes=20, max_minutes=25),
    MembershipTier.GOLD: TierTiming(min_minutes=20, max_minutes=25, express_minutes=16, express_surcharge=10),
    MembershipTier.PLATINUM: TierTiming(min_minutes=10, max_minutes=12),
}


class DeliveryTimeEstimator:
    """
    Table-driven estimate of how long a delivery should take.
    """

    def __init__(self, timings: Optional[Mapping[MembershipTier, TierTiming]] = None):
        self.timings = dict(timings or DEFAULT_TIER_TIMINGS)

        if MembershipTier.NONE not in self.timings:
            raise ValueError("timings must define the NONE tier (fallback for unknown tiers)")
        for timing in self.timings.values():
            timing.validate()

    def timing_for(self, tier: MembershipTier) -> TierTiming:
        return self.timings.get(tier, self.timings[MembershipTier.NONE])

    def estimate(self, tier: Any, express_delivery: bool = False) -> DeliveryEstimate:
        tier = MembershipTier.parse(tier)
        timing = self.timing_for(tier)

        if tier == MembershipTier.PLATINUM:
            return DeliveryEstimate(estimated_minutes=timing.max_minutes, express_surcharge=0)

        if tier == MembershipTier.GOLD and express_delivery and timing.express_minutes:
            return DeliveryEstimate(
                estimated_minutes=timing.express_minutes,
                express_surcharge=timing.express_surcharge,
            )

        return DeliveryEstimate(estimated_minutes=timing.max_minutes, express_surcharge=0)


def estimate_delivery_time(tier: Any = MembershipTier.NONE, express_delivery: bool = False) -> DeliveryEstimate:
    """
    Convenience wrapper over the default tier table.
    """
    return _DEFAULT_ESTIMATOR.estimate(tier, express_delivery)


_DEFAULT_ESTIMATOR = DeliveryTimeEstimator()
