#Marks hubs as a package.
#Re-exports the public API (GeoCoordinate, Hub, the geofence checks) so other
#modules import from hubs without knowing internal file names.
#No business logic.

from .models import GeoCoordinate, Hub, HubValidation, HoldDecision, NearestHub
from .policy import GeofencePolicy, default_geofence_policy
from .registry import DEFAULT_HUBS, get_hub
from .geofence import (
    calculate_distance,
    validate_hub_distance,
    should_set_holding_status,
    get_distance_message,
    find_nearest_hub,
)

__all__ = [
    "GeoCoordinate",
    "Hub",
    "HubValidation",
    "HoldDecision",
    "NearestHub",
    "GeofencePolicy",
    "default_geofence_policy",
    "DEFAULT_HUBS",
    "get_hub",
    "calculate_distance",
    "validate_hub_distance",
    "should_set_holding_status",
    "get_distance_message",
    "find_nearest_hub",
]
