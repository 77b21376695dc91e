"""
Purpose: Data models for live delivery tracking.
What it does:
- DeliveryProgressState: the single source of truth for an order's progress,
  created once at dispatch. Only reached_at may change afterwards (set once, never cleared).
- ProgressSnapshot: a recomputed view of that state at one instant. Never stored.
- NoProgress: the "nothing to track yet" answer.
- ProgressColor: the 5-step palette renderers consume.

Also owns the wire shape (to_dict / progress_result_from_dict) the polling surfaces share.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union


class ProgressColor(str, Enum):
    BLUE = "blue"
    CYAN = "cyan"
    ORANGE = "orange"
    GREEN = "green"
    GOLD = "gold"

    @property
    def hex(self) -> str:
        return _COLOR_HEX[self]


_COLOR_HEX = {
    ProgressColor.BLUE: "#3b82f6",
    ProgressColor.CYAN: "#06b6d4",
    ProgressColor.ORANGE: "#f59e0b",
    ProgressColor.GREEN: "#10b981",
    ProgressColor.GOLD: "#eab308",
}


@dataclass(frozen=True)
class DeliveryProgressState:
    """
    Authoritative progress record for one delivery.

    version increases when the delivery is explicitly re-estimated
    (a new state replaces the old one; states are never edited in place).
    """

    order_id: str
    start_time: datetime
    estimated_minutes: float
    reached_at: Optional[datetime] = None
    version: int = 1

    def __post_init__(self):
        if self.estimated_minutes is None or self.estimated_minutes <= 0:
            raise ValueError(f"estimated_minutes must be > 0 (order {self.order_id})")

    @property
    def reached(self) -> bool:
        return self.reached_at is not None


@dataclass(frozen=True)
class ProgressSnapshot:
    """
    Progress of a delivery at one instant. Always a full replacement for the previous one.
    """

    progress_percent: int
    remaining_minutes: int
    remaining_seconds: int
    remaining_time: str
    eta: datetime
    status_message: str
    color: ProgressColor
    is_delayed: bool
    reached: bool
    start_time: datetime
    estimated_minutes: float

    has_progress = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hasProgress": True,
            "progress": self.progress_percent,
            "remainingMinutes": self.remaining_minutes,
            "remainingSeconds": self.remaining_seconds,
            "remainingTime": self.remaining_time,
            "eta": self.eta.isoformat(),
            "message": self.status_message,
            "color": self.color.value,
            "isDelayed": self.is_delayed,
            "reached": self.reached,
            "startTime": self.start_time.isoformat(),
            "estimatedMinutes": self.estimated_minutes,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProgressSnapshot:
        return cls(
            progress_percent=int(data["progress"]),
            remaining_minutes=int(data["remainingMinutes"]),
            remaining_seconds=int(data.get("remainingSeconds", int(data["remainingMinutes"]) * 60)),
            remaining_time=data["remainingTime"],
            eta=datetime.fromisoformat(data["eta"]),
            status_message=data["message"],
            color=ProgressColor(data["color"]),
            is_delayed=bool(data["isDelayed"]),
            reached=bool(data.get("reached", False)),
            start_time=datetime.fromisoformat(data["startTime"]),
            estimated_minutes=data["estimatedMinutes"],
        )


@dataclass(frozen=True)
class NoProgress:
    """
    Not an error: the order simply has nothing to track (yet).
    """

    reason: str

    has_progress = False

    def to_dict(self) -> Dict[str, Any]:
        return {"hasProgress": False, "reason": self.reason}


ProgressResult = Union[ProgressSnapshot, NoProgress]


def progress_result_from_dict(data: Mapping[str, Any]) -> ProgressResult:
    if not data.get("hasProgress"):
        return NoProgress(reason=data.get("reason") or data.get("message") or "No progress available")
    return ProgressSnapshot.from_dict(data)
