#Purpose: Straight-line hub geofencing (the "DistanceValidator").
#Decides whether the hub bound to an order can actually serve the customer.
#Typical responsibilities:
#Great-circle (haversine) distance between hub and customer
#Apply the max-distance threshold (default 40 km)
#Resolve the customer coordinate (precise delivery pin first, then shipping address)
#Decide if the order must be parked in HOLDING, and why
#Pick the nearest hub inside a radius when none is bound yet
#Invalid/missing coordinates are never exceptions here: they surface as a None distance.

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Optional, Sequence

from hubs.models import GeoCoordinate, HoldDecision, Hub, HubValidation, NearestHub
from hubs.policy import EARTH_RADIUS_KM, GeofencePolicy, default_geofence_policy
from hubs.registry import DEFAULT_HUBS

if TYPE_CHECKING:
    from orders.models import Order

DISTANCE_UNAVAILABLE = "Distance unavailable"
NO_HUB_REASON = "No delivery hub available"
NO_CUSTOMER_LOCATION_REASON = "Customer location not available"
INVALID_COORDINATES_REASON = "Unable to calculate distance - invalid coordinates"


def _haversine_km(a: GeoCoordinate, b: GeoCoordinate) -> float:
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    h = min(1.0, h)  # float drift near antipodes
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def _round_to_tenth(value: float) -> float:
    # half-up, so 12.25 -> 12.3 regardless of float banker's rounding
    return math.floor(value * 10 + 0.5) / 10


def _format_km(value: float) -> str:
    # 13.0 -> "13", 13.5 -> "13.5"
    return str(int(value)) if float(value).is_integer() else str(value)


def calculate_distance(a: Any, b: Any) -> Optional[float]:
    """
    Great-circle distance between two coordinates in km, rounded to one decimal.

    Args:
        a, b: GeoCoordinate, {"lat", "lng"} mapping or (lat, lng) pair

    Returns:
        Distance in km, or None when either coordinate is missing or invalid.
        A coordinate of exactly 0 is valid input.
    """
    start = GeoCoordinate.coerce(a)
    end = GeoCoordinate.coerce(b)
    if start is None or end is None:
        return None

    return _round_to_tenth(_haversine_km(start, end))


def validate_hub_distance(hub_location: Any, customer_location: Any, max_distance_km: float = 40) -> HubValidation:
    """
    Valid iff the distance can be computed and is <= max_distance_km.
    """
    distance = calculate_distance(hub_location, customer_location)

    if distance is None:
        return HubValidation(is_valid=False, distance=None, reason=INVALID_COORDINATES_REASON)

    if distance > max_distance_km:
        return HubValidation(
            is_valid=False,
            distance=distance,
            reason=(
                f"Customer location is {_format_km(distance)}km away from nearest hub "
                f"(max: {_format_km(max_distance_km)}km)"
            ),
        )

    return HubValidation(is_valid=True, distance=distance, reason=None)


def resolve_customer_location(order: Order) -> Optional[GeoCoordinate]:
    """
    The precise delivery pin wins; the shipping address coordinate is the fallback.
    """
    for candidate in (order.delivery_location, order.shipping_coordinates):
        coordinate = GeoCoordinate.coerce(candidate)
        if coordinate is not None:
            return coordinate
    return None


def should_set_holding_status(order: Order, policy: Optional[GeofencePolicy] = None) -> HoldDecision:
    """
    Decide whether the order has to be parked in HOLDING.

    Holds when:
    - no hub is assigned, or the hub has no location
    - the customer has no resolvable coordinate
    - the hub is too far from the customer (or the distance cannot be computed)
    """
    policy = policy or default_geofence_policy()

    hub = order.assigned_hub
    if hub is None or hub.location is None:
        return HoldDecision(should_hold=True, reason=NO_HUB_REASON, distance_km=None)

    customer_location = resolve_customer_location(order)
    if customer_location is None:
        return HoldDecision(should_hold=True, reason=NO_CUSTOMER_LOCATION_REASON, distance_km=None)

    validation = validate_hub_distance(hub.location, customer_location, policy.max_distance_km)
    if not validation.is_valid:
        return HoldDecision(should_hold=True, reason=validation.reason, distance_km=validation.distance)

    return HoldDecision(should_hold=False, reason=None, distance_km=validation.distance)


def get_distance_message(distance: Optional[float]) -> str:
    if distance is None:
        return DISTANCE_UNAVAILABLE

    if distance < 1:
        return f"{math.floor(distance * 1000 + 0.5)}m away"

    return f"{_format_km(distance)}km away"


def find_nearest_hub(
    customer_location: Any,
    hubs: Sequence[Hub] = DEFAULT_HUBS,
    *,
    radius_km: Optional[float] = None,
) -> Optional[NearestHub]:
    """
    Closest hub within radius_km of the customer.

    Returns None when the customer location is unknown or no hub is in range.
    Hubs without a location are skipped.
    """
    if radius_km is None:
        radius_km = default_geofence_policy().nearest_hub_radius_km

    customer = GeoCoordinate.coerce(customer_location)
    if customer is None:
        return None

    nearest: Optional[NearestHub] = None
    for hub in hubs:
        if hub.location is None or not hub.location.is_valid():
            continue

        distance = _haversine_km(customer, hub.location)
        if distance > radius_km:
            continue

        if nearest is None or distance < nearest.distance_km:
            nearest = NearestHub(hub=hub, distance_km=distance)

    if nearest is None:
        return None

    # winner picked on unrounded distances
    return NearestHub(hub=nearest.hub, distance_km=_round_to_tenth(nearest.distance_km))
