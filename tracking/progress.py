"""
Purpose: The progress engine (single shared implementation for every polling surface).
What it does:

Projects (start_time, estimated_minutes, now) into a ProgressSnapshot:

- elapsed minutes since dispatch (fractional)
- progress % (floored at 0, NOT capped at 100: >100 means the delivery is late)
- remaining minutes / seconds (negative when late)
- ETA, delayed flag
- status message + color band

Rule: pure functions only. No clock reads, no counters, no I/O.
Identical inputs must give identical snapshots for every caller, which is what keeps
the operator view and the customer view in agreement.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import List, Tuple

from .models import DeliveryProgressState, ProgressColor, ProgressSnapshot

REACHED_MESSAGE = "Partner has arrived! Share your OTP to complete delivery"
REACHED_REMAINING_TIME = "Waiting for confirmation"

# (lower bound inclusive, message); 0 exactly is handled separately
_STATUS_BANDS: List[Tuple[int, str]] = [
    (95, "Arriving now"),
    (90, "Arriving soon"),
    (75, "Almost there"),
    (50, "Halfway there"),
    (25, "On the way"),
]

_COLOR_BANDS: List[Tuple[int, ProgressColor]] = [
    (95, ProgressColor.GOLD),
    (75, ProgressColor.GREEN),
    (50, ProgressColor.ORANGE),
    (25, ProgressColor.CYAN),
]


def round_half_up(value: float) -> int:
    # ties go towards +inf (2.5 -> 3, -2.5 -> -2), never banker's rounding
    return int(math.floor(value + 0.5))


def elapsed_minutes(start_time: datetime, now: datetime) -> float:
    return (now - start_time).total_seconds() / 60


def get_progress_message(progress: int) -> str:
    if progress <= 0:
        return "Starting delivery"

    for lower_bound, message in _STATUS_BANDS:
        if progress >= lower_bound:
            return message

    return "Just started"


def get_progress_color(progress: int) -> ProgressColor:
    for lower_bound, color in _COLOR_BANDS:
        if progress >= lower_bound:
            return color

    return ProgressColor.BLUE


def format_remaining_time(remaining_minutes: float) -> str:
    if remaining_minutes <= 0:
        return "Arriving now"

    if remaining_minutes < 1:
        return "Less than a minute"

    if remaining_minutes == 1:
        return "1 minute"

    return f"{remaining_minutes} minutes"


def get_estimated_arrival_time(start_time: datetime, estimated_minutes: float) -> datetime:
    return start_time + timedelta(minutes=estimated_minutes)


def compute_progress(start_time: datetime, estimated_minutes: float, now: datetime) -> ProgressSnapshot:
    """
    Snapshot of an in-flight delivery at `now`.

    Args:
        start_time: when the order went out for delivery
        estimated_minutes: duration fixed at dispatch (> 0)
        now: the instant to project to (caller's clock)
    """
    if estimated_minutes is None or estimated_minutes <= 0:
        raise ValueError("estimated_minutes must be > 0")

    elapsed = elapsed_minutes(start_time, now)

    progress = max(0, round_half_up(elapsed / estimated_minutes * 100))
    remaining_minutes = round_half_up(estimated_minutes - elapsed)
    remaining_seconds = round_half_up((estimated_minutes - elapsed) * 60)

    return ProgressSnapshot(
        progress_percent=progress,
        remaining_minutes=remaining_minutes,
        remaining_seconds=remaining_seconds,
        remaining_time=format_remaining_time(remaining_minutes),
        eta=get_estimated_arrival_time(start_time, estimated_minutes),
        status_message=get_progress_message(progress),
        color=get_progress_color(progress),
        is_delayed=remaining_minutes < 0,
        reached=False,
        start_time=start_time,
        estimated_minutes=estimated_minutes,
    )


def reached_snapshot(state: DeliveryProgressState) -> ProgressSnapshot:
    """
    Frozen snapshot once the partner has arrived. Elapsed time no longer matters.
    """
    return ProgressSnapshot(
        progress_percent=100,
        remaining_minutes=0,
        remaining_seconds=0,
        remaining_time=REACHED_REMAINING_TIME,
        eta=get_estimated_arrival_time(state.start_time, state.estimated_minutes),
        status_message=REACHED_MESSAGE,
        color=ProgressColor.ORANGE,
        is_delayed=False,
        reached=True,
        start_time=state.start_time,
        estimated_minutes=state.estimated_minutes,
    )


def snapshot_for(state: DeliveryProgressState, now: datetime) -> ProgressSnapshot:
    if state.reached:
        return reached_snapshot(state)
    return compute_progress(state.start_time, state.estimated_minutes, now)
