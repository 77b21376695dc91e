#Marks tracking as a package.
#Re-exports the public API (TrackingSession, the progress engine, the poller)
#so callers import from tracking without knowing internal file names.
#No business logic.

from .models import (
    DeliveryProgressState,
    ProgressSnapshot,
    NoProgress,
    ProgressColor,
    ProgressResult,
    progress_result_from_dict,
)
from .progress import (
    compute_progress,
    reached_snapshot,
    snapshot_for,
    format_remaining_time,
    get_progress_message,
    get_progress_color,
)
from .policy import TrackingPolicy
from .store import ProgressStore, ProgressStateException
from .session import TrackingSession, OrderNotFound
from .poller import ProgressPoller, HttpProgressSource, TrackingClientError, local_remaining_seconds

__all__ = [
    "DeliveryProgressState",
    "ProgressSnapshot",
    "NoProgress",
    "ProgressColor",
    "ProgressResult",
    "progress_result_from_dict",
    "compute_progress",
    "reached_snapshot",
    "snapshot_for",
    "format_remaining_time",
    "get_progress_message",
    "get_progress_color",
    "TrackingPolicy",
    "ProgressStore",
    "ProgressStateException",
    "TrackingSession",
    "OrderNotFound",
    "ProgressPoller",
    "HttpProgressSource",
    "TrackingClientError",
    "local_remaining_seconds",
]
