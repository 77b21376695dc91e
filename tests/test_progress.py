from datetime import timedelta

import pytest

from tracking.models import DeliveryProgressState, ProgressColor
from tracking.progress import (
    REACHED_MESSAGE,
    compute_progress,
    format_remaining_time,
    get_progress_color,
    get_progress_message,
    reached_snapshot,
    round_half_up,
    snapshot_for,
)


def at(start_time, minutes=0, seconds=0):
    return start_time + timedelta(minutes=minutes, seconds=seconds)


def test_progress_at_dispatch_is_zero(start_time):
    snapshot = compute_progress(start_time, 30, now=start_time)

    assert snapshot.progress_percent == 0
    assert snapshot.remaining_minutes == 30
    assert snapshot.remaining_seconds == 1800
    assert snapshot.status_message == "Starting delivery"
    assert snapshot.color == ProgressColor.BLUE
    assert snapshot.is_delayed is False
    assert snapshot.reached is False


def test_halfway_scenario(start_time):
    snapshot = compute_progress(start_time, 30, now=at(start_time, 15))

    assert snapshot.progress_percent == 50
    assert snapshot.remaining_minutes == 15
    assert snapshot.remaining_seconds == 900
    assert snapshot.remaining_time == "15 minutes"
    assert snapshot.status_message == "Halfway there"
    assert snapshot.eta == at(start_time, 30)


def test_late_delivery_is_not_capped(start_time):
    """
    Progress keeps growing past 100 to show lateness.
    """
    snapshot = compute_progress(start_time, 30, now=at(start_time, 40))

    assert snapshot.progress_percent == 133
    assert snapshot.remaining_minutes == -10
    assert snapshot.remaining_seconds == -600
    assert snapshot.is_delayed is True
    assert snapshot.status_message == "Arriving now"
    assert snapshot.remaining_time == "Arriving now"
    assert snapshot.color == ProgressColor.GOLD


def test_progress_at_eta_is_one_hundred_and_not_delayed(start_time):
    snapshot = compute_progress(start_time, 30, now=at(start_time, 30))

    assert snapshot.progress_percent == 100
    assert snapshot.remaining_minutes == 0
    assert snapshot.is_delayed is False


def test_clock_before_start_is_floored_at_zero(start_time):
    snapshot = compute_progress(start_time, 30, now=at(start_time, -5))

    assert snapshot.progress_percent == 0
    assert snapshot.remaining_minutes == 35


def test_rounding_is_half_up(start_time):
    # 1 of 8 minutes = 12.5% -> 13 (banker's rounding would give 12)
    assert compute_progress(start_time, 8, now=at(start_time, 1)).progress_percent == 13
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2


def test_progress_is_monotonic_and_delay_tracks_remaining(start_time):
    previous = -1
    for second in range(0, 50 * 60, 17):
        snapshot = compute_progress(start_time, 30, now=at(start_time, seconds=second))

        assert snapshot.progress_percent >= previous
        assert snapshot.is_delayed == (snapshot.remaining_minutes < 0)
        previous = snapshot.progress_percent


def test_identical_inputs_give_identical_snapshots(start_time):
    now = at(start_time, 7, 13)

    operator_view = compute_progress(start_time, 25, now)
    customer_view = compute_progress(start_time, 25, now)

    assert operator_view == customer_view
    assert operator_view.to_dict() == customer_view.to_dict()


@pytest.mark.parametrize(
    "progress, message, color",
    [
        (0, "Starting delivery", ProgressColor.BLUE),
        (1, "Just started", ProgressColor.BLUE),
        (24, "Just started", ProgressColor.BLUE),
        (25, "On the way", ProgressColor.CYAN),
        (49, "On the way", ProgressColor.CYAN),
        (50, "Halfway there", ProgressColor.ORANGE),
        (74, "Halfway there", ProgressColor.ORANGE),
        (75, "Almost there", ProgressColor.GREEN),
        (89, "Almost there", ProgressColor.GREEN),
        (90, "Arriving soon", ProgressColor.GREEN),
        (94, "Arriving soon", ProgressColor.GREEN),
        (95, "Arriving now", ProgressColor.GOLD),
        (250, "Arriving now", ProgressColor.GOLD),
    ],
)
def test_bands_are_half_open(progress, message, color):
    assert get_progress_message(progress) == message
    assert get_progress_color(progress) == color


def test_colors_carry_hex_values():
    assert ProgressColor.BLUE.hex == "#3b82f6"
    assert ProgressColor.GOLD.hex == "#eab308"


@pytest.mark.parametrize(
    "remaining, text",
    [
        (-3, "Arriving now"),
        (0, "Arriving now"),
        (0.5, "Less than a minute"),
        (1, "1 minute"),
        (12, "12 minutes"),
    ],
)
def test_format_remaining_time(remaining, text):
    assert format_remaining_time(remaining) == text


def test_reached_state_freezes_snapshot(start_time):
    state = DeliveryProgressState("o_1", start_time, 30, reached_at=at(start_time, 20))

    # hours late, still frozen
    snapshot = snapshot_for(state, now=at(start_time, 300))

    assert snapshot == reached_snapshot(state)
    assert snapshot.progress_percent == 100
    assert snapshot.remaining_minutes == 0
    assert snapshot.reached is True
    assert snapshot.is_delayed is False
    assert snapshot.status_message == REACHED_MESSAGE


def test_non_positive_estimate_is_rejected(start_time):
    with pytest.raises(ValueError):
        compute_progress(start_time, 0, now=start_time)

    with pytest.raises(ValueError):
        DeliveryProgressState("o_1", start_time, -5)


def test_wire_shape(start_time):
    snapshot = compute_progress(start_time, 30, now=at(start_time, 15))
    data = snapshot.to_dict()

    assert data["hasProgress"] is True
    assert data["progress"] == 50
    assert data["color"] == "orange"
    assert data["eta"] == at(start_time, 30).isoformat()
    assert type(snapshot).from_dict(data) == snapshot
