"""
Purpose: Central configuration for progress polling.
What it does:

Stores the tunable polling parameters:

POLL_INTERVAL_SECONDS = 30 (how often each surface re-fetches a snapshot)

REQUEST_TIMEOUT_SECONDS = 5

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TrackingPolicy:
    """
    Central configuration for the polling surfaces.
    """

    # --- Polling ---
    # Staleness of any surface is bounded by this interval.
    # Between polls a client may tick its countdown locally.
    poll_interval_seconds: float = 30

    # How long to wait for the progress endpoint before giving up on this poll.
    request_timeout_seconds: float = 5

    # Once the partner has arrived the snapshot is frozen, so polling can stop.
    stop_when_reached: bool = True

    def validate(self) -> None:
        if self.poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be > 0")

        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")

