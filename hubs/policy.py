"""
Purpose: Central configuration for hub geofencing.
What it does:

Stores the tunable distance thresholds:

MAX_HUB_DISTANCE_KM = 40 (hub -> customer, beyond this the order is held)

NEAREST_HUB_RADIUS_KM = 30 (search radius when picking a hub for a customer)

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class GeofencePolicy:
    """
    Central configuration for hub viability checks.
    """

    # --- Hub viability ---
    # A hub farther than this from the customer cannot serve the order,
    # and the order is moved to HOLDING until a hub is reassigned.
    max_distance_km: float = 40.0

    # --- Hub selection ---
    # Only hubs inside this radius are considered when picking the nearest one.
    nearest_hub_radius_km: float = 30.0

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup if you want.
        """
        if self.max_distance_km <= 0:
            raise ValueError("max_distance_km must be > 0")

        if self.nearest_hub_radius_km <= 0:
            raise ValueError("nearest_hub_radius_km must be > 0")


def default_geofence_policy() -> GeofencePolicy:
    """
    Convenience factory for the default policy.
    """
    p = GeofencePolicy()
    p.validate()
    return p
