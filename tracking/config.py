#Purpose: Environment configuration for the tracking core.
#Reads a .env file (if present) and builds the policies from it.
#Example in .env:
#TRACKING_BASE_URL=http://localhost:8000/api
#TRACKING_MAX_HUB_DISTANCE_KM=40
#TRACKING_NEAREST_HUB_RADIUS_KM=30
#TRACKING_POLL_INTERVAL_SECONDS=30
#TRACKING_REQUEST_TIMEOUT_SECONDS=5
#TRACKING_STOP_WHEN_REACHED=true
#Unset variables fall back to the policy defaults.

import os
from typing import Optional

from dotenv import load_dotenv

from hubs.policy import GeofencePolicy
from .policy import TrackingPolicy

load_dotenv()

DEFAULT_BASE_URL = "http://localhost:8000/api"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def tracking_base_url() -> str:
    return (os.getenv("TRACKING_BASE_URL") or DEFAULT_BASE_URL).rstrip("/")


def geofence_policy_from_env() -> GeofencePolicy:
    defaults = GeofencePolicy()
    p = GeofencePolicy(
        max_distance_km=_env_float("TRACKING_MAX_HUB_DISTANCE_KM", defaults.max_distance_km),
        nearest_hub_radius_km=_env_float("TRACKING_NEAREST_HUB_RADIUS_KM", defaults.nearest_hub_radius_km),
    )
    p.validate()
    return p


def tracking_policy_from_env(base: Optional[TrackingPolicy] = None) -> TrackingPolicy:
    defaults = base or TrackingPolicy()
    p = TrackingPolicy(
        poll_interval_seconds=_env_float("TRACKING_POLL_INTERVAL_SECONDS", defaults.poll_interval_seconds),
        request_timeout_seconds=_env_float("TRACKING_REQUEST_TIMEOUT_SECONDS", defaults.request_timeout_seconds),
        stop_when_reached=_env_bool("TRACKING_STOP_WHEN_REACHED", defaults.stop_when_reached),
    )
    p.validate()
    return p
