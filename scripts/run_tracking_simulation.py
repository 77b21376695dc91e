import os
import sys
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pandas as pd

from hubs.geofence import get_distance_message
from hubs.models import GeoCoordinate
from hubs.registry import get_hub
from orders.models import MembershipTier, Order, OrderStatus
from orders.store import InMemoryOrderStore
from dispatch.state_machines.order_state import transition_order_to_confirmed, transition_order_to_packed
from tracking.poller import ProgressPoller
from tracking.policy import TrackingPolicy
from tracking.session import TrackingSession


class SimulatedClock:
    """
    Wall clock the simulation can fast-forward. Every surface reads the same one.
    """
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, minutes: float) -> None:
        self.now = self.now + timedelta(minutes=minutes)


def load_orders(filepath: str, limit: int = 20) -> List[Order]:
    df = pd.read_csv(filepath).head(limit)

    orders = []
    for row in df.itertuples(index=False):
        customer: Optional[GeoCoordinate] = None
        if not pd.isna(row.customer_lat) and not pd.isna(row.customer_lng):
            customer = GeoCoordinate(lat=float(row.customer_lat), lng=float(row.customer_lng))

        orders.append(
            Order(
                id=row.order_id,
                membership_tier=MembershipTier.parse(row.membership_tier),
                express_delivery=bool(row.express_delivery),
                assigned_hub=get_hub(row.hub_id),
                shipping_coordinates=customer,
            )
        )
    return orders


def sample_orders() -> List[Order]:
    kolkata = get_hub("kolkata")
    delhi = get_hub("delhi")
    return [
        # Howrah, ~10.6 km from the Kolkata hub
        Order("o_howrah", MembershipTier.GOLD, True, kolkata, shipping_coordinates=GeoCoordinate(22.5958, 88.2636)),
        # Mumbai customer bound to the Delhi hub -> holding
        Order("o_far", MembershipTier.SILVER, False, delhi, shipping_coordinates=GeoCoordinate(19.0760, 72.8777)),
        Order("o_platinum", MembershipTier.PLATINUM, True, kolkata, delivery_location=GeoCoordinate(22.5800, 88.4000)),
        # no coordinates at all -> holding
        Order("o_unknown", MembershipTier.NONE, False, kolkata),
    ]


def run_simulation(filepath: Optional[str] = None):
    print("=== STARTING END-TO-END TRACKING SIMULATION ===")

    orders = load_orders(filepath) if filepath and os.path.exists(filepath) else sample_orders()
    store = InMemoryOrderStore()
    for order in orders:
        store.add(order)
    print(f"Loaded {len(orders)} Orders.\n")

    clock = SimulatedClock(datetime.now(timezone.utc))
    session = TrackingSession(store, clock=clock)

    # 1. Hub viability at confirmation time
    print("--- Hub Assignment ---")
    dispatchable = []
    for order in orders:
        transition_order_to_confirmed(order)
        decision = session.evaluate_hub_assignment(order)
        if decision.should_hold:
            print(f"[HOLD] {order.id}: {decision.reason}")
            continue
        print(f"[OK]   {order.id}: hub {order.assigned_hub.name}, {get_distance_message(decision.distance_km)}")
        transition_order_to_packed(order)
        dispatchable.append(order)

    # 2. Dispatch
    print("\n--- Dispatch ---")
    for order in dispatchable:
        state = session.dispatch(order.id)
        print(f"{order.id} -> {state.estimated_minutes} min ({order.membership_tier.value})")

    # 3. Two surfaces poll the same order; the clock jumps 5 minutes per poll
    print("\n--- Live Progress ---")
    policy = TrackingPolicy(poll_interval_seconds=0.01)
    for order in dispatchable:
        operator_view = ProgressPoller(lambda order_id=order.id: session.get_progress(order_id), policy)
        customer_view = ProgressPoller(lambda order_id=order.id: session.get_progress(order_id), policy)

        start = clock.now
        for _ in range(8):
            operator_snapshot = operator_view.poll_once()
            customer_snapshot = customer_view.poll_once()
            assert operator_snapshot == customer_snapshot, "surfaces disagree"
            print(
                f"  {order.id}: {operator_snapshot.progress_percent:>3}% "
                f"{operator_snapshot.status_message:<18} {operator_snapshot.remaining_time}"
            )
            clock.advance(5)

        session.mark_reached(order.id)
        session.mark_reached(order.id)  # retried signal, absorbed
        reached = session.get_progress(order.id)
        print(f"  {order.id}: {reached.status_message}")

        session.complete_delivery(order.id)
        clock.now = start

    print("\n=== SIMULATION COMPLETE ===")
    delivered = store.orders_with_status(OrderStatus.DELIVERED)
    holding = store.orders_with_status(OrderStatus.HOLDING)
    print(f"Delivered: {len(delivered)} / {len(orders)}")
    print(f"Holding:   {len(holding)} / {len(orders)}")


if __name__ == "__main__":
    run_simulation(sys.argv[1] if len(sys.argv) > 1 else None)
