"""
Purpose: Core data models for the hubs domain.
What it does:
- Defines GeoCoordinate (lat, lng in degrees) and Hub (fixed dispatch point).
- Defines the result shapes of hub validation (HubValidation, NearestHub).

Rule: No distance math here. Models only.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class GeoCoordinate:
    """
    A point on the map, in degrees.

    (0, 0) is a perfectly valid coordinate. "Unknown location" is always
    represented by the absence of a GeoCoordinate (None), never by zeros.
    """

    lat: float
    lng: float

    def is_valid(self) -> bool:
        if not _is_number(self.lat) or not _is_number(self.lng):
            return False
        return -90.0 <= self.lat <= 90.0 and -180.0 <= self.lng <= 180.0

    @classmethod
    def coerce(cls, value: Any) -> Optional[GeoCoordinate]:
        """
        Accepts a GeoCoordinate, a {"lat": .., "lng": ..} mapping or a (lat, lng) pair.
        Returns None when the value is missing, has a missing field, or is out of range.
        """
        if value is None:
            return None

        if isinstance(value, GeoCoordinate):
            coordinate = value
        elif isinstance(value, Mapping):
            lat, lng = value.get("lat"), value.get("lng")
            if lat is None or lng is None:
                return None
            coordinate = cls(lat=lat, lng=lng)
        elif isinstance(value, (tuple, list)) and len(value) == 2:
            coordinate = cls(lat=value[0], lng=value[1])
        else:
            return None

        return coordinate if coordinate.is_valid() else None

    def as_tuple(self):
        return (self.lat, self.lng)


def _is_number(value: Any) -> bool:
    # bool is an int subclass, but True/False are not coordinates
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


@dataclass(frozen=True)
class Hub:
    """
    Fixed physical location an order is dispatched from.
    Bound to an order at confirmation time; reassignment is an external flow.
    """

    id: str
    name: str
    location: Optional[GeoCoordinate] = None

    @classmethod
    def new(cls, hub_id: str, name: str, lat: float, lng: float) -> Hub:
        return cls(id=hub_id, name=name, location=GeoCoordinate(lat=lat, lng=lng))


@dataclass(frozen=True)
class HubValidation:
    """
    Output of validate_hub_distance.
    distance is None iff one of the coordinates could not be resolved.
    """

    is_valid: bool
    distance: Optional[float]
    reason: Optional[str] = None


@dataclass(frozen=True)
class HoldDecision:
    """
    Whether an order must be parked in HOLDING because its hub is not viable.
    Not persisted on its own: the workflow writes it back onto the order.
    """

    should_hold: bool
    reason: Optional[str] = None
    distance_km: Optional[float] = None


@dataclass(frozen=True)
class NearestHub:
    hub: Hub
    distance_km: float
