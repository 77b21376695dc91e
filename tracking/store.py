"""
Purpose: Holder of DeliveryProgressState records, keyed by order id.
What it does:
- create(): once per delivery, at dispatch (single writer)
- mark_reached(): set reached_at only if it is still unset (retries are no-ops)
- replace(): explicit re-estimation, swaps in a new versioned state
- get(): lock-free read of the current immutable state

States are frozen dataclasses. Every write swaps a whole new value in under the lock.
"""

from __future__ import annotations

import threading
import dataclasses
from datetime import datetime
from typing import Dict, Optional, Tuple

from .models import DeliveryProgressState


class ProgressStateException(Exception):
    """Raised when a progress record is written out of its lifecycle."""
    pass


class ProgressStore:
    """
    In-memory DeliveryProgressState registry.
    Persistence of these records belongs to the external workflow.
    """

    def __init__(self):
        self._states: Dict[str, DeliveryProgressState] = {}
        self._lock = threading.Lock()

    def get(self, order_id: str) -> Optional[DeliveryProgressState]:
        return self._states.get(order_id)

    def create(self, state: DeliveryProgressState) -> DeliveryProgressState:
        with self._lock:
            if state.order_id in self._states:
                raise ProgressStateException(f"Progress for order {state.order_id} already exists")
            self._states[state.order_id] = state
        return state

    def mark_reached(self, order_id: str, reached_at: datetime) -> Tuple[Optional[DeliveryProgressState], bool]:
        """
        Compare-and-set on reached_at.

        Returns (state, applied). applied is False when there is no record
        or reached_at was already set; the stored value is left alone in both cases.
        """
        with self._lock:
            state = self._states.get(order_id)
            if state is None or state.reached_at is not None:
                return state, False

            state = dataclasses.replace(state, reached_at=reached_at)
            self._states[order_id] = state
            return state, True

    def replace(self, order_id: str, start_time: datetime, estimated_minutes: float) -> DeliveryProgressState:
        """
        Supersedes the current record with a new version. Refused once the partner has arrived.
        """
        with self._lock:
            current = self._states.get(order_id)
            if current is None:
                raise ProgressStateException(f"No progress for order {order_id} to replace")
            if current.reached:
                raise ProgressStateException(f"Order {order_id} already reached; progress is frozen")

            state = DeliveryProgressState(
                order_id=order_id,
                start_time=start_time,
                estimated_minutes=estimated_minutes,
                version=current.version + 1,
            )
            self._states[order_id] = state
            return state

    def discard(self, order_id: str) -> None:
        with self._lock:
            self._states.pop(order_id, None)
