"""
Purpose: Orchestrator / state-machine glue (the "TrackingSession").
What it does:
Composes hub geofencing, the delivery time estimator and the progress engine
with the order lifecycle:

- evaluate_hub_assignment(): order created / hub (re)assigned -> HoldDecision (+ holding transition)
- dispatch(): confirmed/packed -> out_for_delivery, seeds the DeliveryProgressState
- get_progress(): fresh snapshot from the stored state and the current clock
- mark_reached(): arrival signal, freezes progress (idempotent)
- complete_delivery(): reached -> delivered, once the OTP is confirmed upstream
- cancel(), restart_progress(): terminal cancel / explicit re-estimation

Orders are always fetched from the injected OrderStore per call; nothing is cached here.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Union

from dispatch.state_machines.order_state import (
    apply_hold_decision,
    transition_order_to_cancelled,
    transition_order_to_delivered,
    transition_order_to_out_for_delivery,
)
from hubs.geofence import should_set_holding_status
from hubs.models import HoldDecision
from hubs.policy import GeofencePolicy
from orders.delivery_time import DeliveryTimeEstimator
from orders.models import Order, OrderStatus
from orders.store import OrderStore

from .config import geofence_policy_from_env
from .models import DeliveryProgressState, NoProgress, ProgressResult
from .progress import snapshot_for
from .store import ProgressStateException, ProgressStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OrderNotFound(LookupError):
    """Raised by write operations addressed to an order the store does not know."""
    pass


class TrackingSession:
    """
    Entry point for the workflow and both polling surfaces.
    """

    def __init__(
        self,
        order_store: OrderStore,
        progress_store: Optional[ProgressStore] = None,
        estimator: Optional[DeliveryTimeEstimator] = None,
        geofence_policy: Optional[GeofencePolicy] = None,
        clock: Clock = utc_now,
    ):
        self.order_store = order_store
        self.progress_store = progress_store or ProgressStore()
        self.estimator = estimator or DeliveryTimeEstimator()
        self.geofence_policy = geofence_policy or geofence_policy_from_env()
        self.clock = clock

    def _require_order(self, order_id: str) -> Order:
        order = self.order_store.get_order(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found")
        return order

    # --- Hub assignment ---

    def evaluate_hub_assignment(self, order: Union[Order, str]) -> HoldDecision:
        """
        Run whenever an order is created or its hub is (re)assigned.
        The caller persists the resulting status / holding reason.
        """
        if isinstance(order, str):
            order = self._require_order(order)

        decision = should_set_holding_status(order, self.geofence_policy)
        apply_hold_decision(order, decision)

        if decision.should_hold:
            logger.info(f"Hub check for order {order.id}: hold ({decision.reason})")
        else:
            logger.debug(f"Hub check for order {order.id}: ok ({decision.distance_km}km)")
        return decision

    # --- Dispatch ---

    def dispatch(self, order_id: str) -> DeliveryProgressState:
        """
        Order leaves the hub. The duration is estimated here, exactly once.
        """
        order = self._require_order(order_id)
        if self.progress_store.get(order_id) is not None:
            raise ProgressStateException(f"Order {order_id} was already dispatched")
        transition_order_to_out_for_delivery(order)

        estimate = self.estimator.estimate(order.membership_tier, order.express_delivery)
        state = self.progress_store.create(
            DeliveryProgressState(
                order_id=order.id,
                start_time=self.clock(),
                estimated_minutes=estimate.estimated_minutes,
            )
        )

        logger.info(
            f"Order {order.id} out for delivery: {estimate.estimated_minutes} min "
            f"({order.membership_tier.value}, express={order.express_delivery})"
        )
        return state

    # --- Queries ---

    def get_progress(self, order_id: str) -> ProgressResult:
        order = self.order_store.get_order(order_id)
        if order is None:
            return NoProgress(reason=f"Order {order_id} not found")

        if order.status != OrderStatus.OUT_FOR_DELIVERY:
            return NoProgress(reason=f"Order is {order.status.value}, not out for delivery")

        state = self.progress_store.get(order_id)
        if state is None:
            return NoProgress(reason="Delivery progress tracking not started for this order")

        return snapshot_for(state, self.clock())

    # --- Arrival / completion ---

    def mark_reached(self, order_id: str) -> None:
        """
        Arrival signal. Safe to retry: only the first call sets reached_at.
        """
        state, applied = self.progress_store.mark_reached(order_id, self.clock())

        if state is None:
            logger.warning(f"Arrival signal for order {order_id} without progress record; ignored")
        elif applied:
            logger.info(f"Delivery partner reached customer for order {order_id}")
        else:
            logger.debug(f"Duplicate arrival signal for order {order_id}; already reached at {state.reached_at}")

    def complete_delivery(self, order_id: str) -> Order:
        """
        Called once the OTP has been confirmed (verification itself is external).
        """
        order = self._require_order(order_id)
        state = self.progress_store.get(order_id)
        transition_order_to_delivered(order, reached=state is not None and state.reached)

        logger.info(f"Order {order_id} delivered")
        return order

    def cancel(self, order_id: str) -> Order:
        order = self._require_order(order_id)
        transition_order_to_cancelled(order)
        self.progress_store.discard(order_id)

        logger.info(f"Order {order_id} cancelled")
        return order

    # --- Re-estimation ---

    def restart_progress(self, order_id: str, estimated_minutes: float) -> DeliveryProgressState:
        """
        Explicit re-estimation mid-delivery (e.g. after a hub swap decided upstream).
        Creates a new versioned state starting now; the previous one is never edited.
        """
        order = self._require_order(order_id)
        if order.status != OrderStatus.OUT_FOR_DELIVERY:
            raise ProgressStateException(f"Order {order_id} is {order.status.value}, not out for delivery")

        state = self.progress_store.replace(order_id, self.clock(), estimated_minutes)

        logger.info(f"Order {order_id} re-estimated to {estimated_minutes} min (v{state.version})")
        return state
