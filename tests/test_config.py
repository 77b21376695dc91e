import pytest

from hubs.policy import GeofencePolicy
from tracking.config import geofence_policy_from_env, tracking_base_url, tracking_policy_from_env
from tracking.policy import TrackingPolicy
from tracking.poller import HttpProgressSource, ProgressPoller
from tracking.session import TrackingSession

ENV_VARS = [
    "TRACKING_BASE_URL",
    "TRACKING_MAX_HUB_DISTANCE_KM",
    "TRACKING_NEAREST_HUB_RADIUS_KM",
    "TRACKING_POLL_INTERVAL_SECONDS",
    "TRACKING_REQUEST_TIMEOUT_SECONDS",
    "TRACKING_STOP_WHEN_REACHED",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_environment():
    assert geofence_policy_from_env() == GeofencePolicy(max_distance_km=40, nearest_hub_radius_km=30)
    assert tracking_policy_from_env() == TrackingPolicy(poll_interval_seconds=30)
    assert tracking_base_url() == "http://localhost:8000/api"


def test_policies_read_from_environment(monkeypatch):
    monkeypatch.setenv("TRACKING_BASE_URL", "https://shop.example.com/api/")
    monkeypatch.setenv("TRACKING_MAX_HUB_DISTANCE_KM", "25")
    monkeypatch.setenv("TRACKING_POLL_INTERVAL_SECONDS", "10")
    monkeypatch.setenv("TRACKING_STOP_WHEN_REACHED", "false")

    assert tracking_base_url() == "https://shop.example.com/api"
    assert geofence_policy_from_env().max_distance_km == 25
    policy = tracking_policy_from_env()
    assert policy.poll_interval_seconds == 10
    assert policy.stop_when_reached is False


@pytest.mark.parametrize("value", ["forty", "-5", "0"])
def test_bad_values_are_rejected(monkeypatch, value):
    monkeypatch.setenv("TRACKING_MAX_HUB_DISTANCE_KM", value)

    with pytest.raises(ValueError):
        geofence_policy_from_env()


def test_session_uses_distance_limit_from_environment(monkeypatch, order_store, make_order, clock):
    """
    Howrah is ~10.6 km from the Kolkata hub: fine by default, held under a 5 km limit.
    """
    monkeypatch.setenv("TRACKING_MAX_HUB_DISTANCE_KM", "5")
    order = make_order("o_1")

    decision = TrackingSession(order_store, clock=clock).evaluate_hub_assignment(order)

    assert decision.should_hold is True
    assert decision.distance_km == 10.6
    assert decision.reason == "Customer location is 10.6km away from nearest hub (max: 5km)"


def test_pollers_use_intervals_from_environment(monkeypatch):
    monkeypatch.setenv("TRACKING_POLL_INTERVAL_SECONDS", "2")
    monkeypatch.setenv("TRACKING_REQUEST_TIMEOUT_SECONDS", "1")
    monkeypatch.setenv("TRACKING_STOP_WHEN_REACHED", "no")

    poller = ProgressPoller(lambda: None)
    source = HttpProgressSource("o_1", base_url="http://tracking.test")

    assert poller.policy.poll_interval_seconds == 2
    assert poller.policy.stop_when_reached is False
    assert source.timeout == 1


def test_explicit_policy_and_timeout_win_over_environment(monkeypatch):
    monkeypatch.setenv("TRACKING_REQUEST_TIMEOUT_SECONDS", "1")

    from_policy = HttpProgressSource("o_1", base_url="http://tracking.test", policy=TrackingPolicy(request_timeout_seconds=7))
    explicit = HttpProgressSource("o_1", base_url="http://tracking.test", timeout=3)

    assert from_policy.timeout == 7
    assert explicit.timeout == 3
