from datetime import datetime, timedelta, timezone

import pytest

from hubs.models import GeoCoordinate
from hubs.registry import get_hub
from orders.models import MembershipTier, Order, OrderStatus
from orders.store import InMemoryOrderStore
from tracking.session import TrackingSession


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, minutes: float = 0, seconds: float = 0) -> None:
        self.now = self.now + timedelta(minutes=minutes, seconds=seconds)


@pytest.fixture
def start_time():
    return datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(start_time):
    return FakeClock(start_time)


@pytest.fixture
def kolkata_hub():
    return get_hub("kolkata")


@pytest.fixture
def howrah():
    # ~10.6 km west of the Kolkata hub
    return GeoCoordinate(lat=22.5958, lng=88.2636)


@pytest.fixture
def order_store():
    return InMemoryOrderStore()


@pytest.fixture
def session(order_store, clock):
    return TrackingSession(order_store, clock=clock)


@pytest.fixture
def make_order(order_store, kolkata_hub, howrah):
    """
    Factory for a confirmed Kolkata order with a Howrah customer, registered in the store.
    """
    def _make(order_id="o_1", **overrides):
        fields = dict(
            id=order_id,
            membership_tier=MembershipTier.NONE,
            assigned_hub=kolkata_hub,
            shipping_coordinates=howrah,
            status=OrderStatus.CONFIRMED,
        )
        fields.update(overrides)
        order = Order(**fields)
        order_store.add(order)
        return order

    return _make
