"""
Purpose: Domain models for the Orders capability.
What it does:
- Defines core data structures:
- Order (id, membership tier, express flag, assigned hub, customer coordinates, status, holding info)
- DeliveryEstimate (estimated minutes + express surcharge chosen at dispatch)

Defines enums/constants:
- OrderStatus = PENDING | CONFIRMED | PACKED | OUT_FOR_DELIVERY | DELIVERED | HOLDING | CANCELLED
- MembershipTier = NONE | SILVER | GOLD | PLATINUM

Rule: No distance math, no progress math. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from hubs.models import GeoCoordinate, Hub


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PACKED = "packed"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    HOLDING = "holding"
    CANCELLED = "cancelled"


# HOLDING is only reachable from these
PRE_DISPATCH_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PACKED})
TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})


class MembershipTier(str, Enum):
    """
    Customer service level. Drives the baseline delivery duration
    and whether express delivery can be requested.
    """
    NONE = "none"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"

    @classmethod
    def parse(cls, value: Any) -> MembershipTier:
        """
        Unknown or missing tiers fall back to NONE.
        """
        if isinstance(value, MembershipTier):
            return value
        if not isinstance(value, str):
            return cls.NONE
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.NONE


@dataclass(frozen=True)
class DeliveryEstimate:
    """
    Output of the delivery time estimator, consumed once at dispatch.
    """
    estimated_minutes: int
    express_surcharge: float = 0


@dataclass
class Order:
    """
    The slice of an order this core needs.
    The record itself lives in the external order store.
    """

    id: str
    membership_tier: MembershipTier = MembershipTier.NONE
    express_delivery: bool = False

    assigned_hub: Optional[Hub] = None
    # precise pin dropped by the customer, preferred over the shipping address
    delivery_location: Optional[GeoCoordinate] = None
    shipping_coordinates: Optional[GeoCoordinate] = None

    status: OrderStatus = OrderStatus.PENDING

    # holding bookkeeping, written back from a HoldDecision
    holding_reason: Optional[str] = None
    hub_distance_km: Optional[float] = None
    held_from: Optional[OrderStatus] = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
