"""Great-circle distance and geofence checks.

Distances use the Haversine formula on a sphere of mean Earth radius.
Coordinates are degrees and are not range-checked here; request input is
validated by ``common.validators.parse_coordinates`` before it reaches this
module.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..core.constants import EARTH_RADIUS_METERS
from .model import GeofenceConfig


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in meters between two (lat, lon) points."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def is_within_geofence(lat: float, lon: float, config: GeofenceConfig) -> bool:
    return calculate_distance(lat, lon, config.center_lat, config.center_lng) <= config.radius_meters


@dataclass(frozen=True)
class GeofenceCheck:
    distance_meters: int
    is_within: bool

    @property
    def is_out_of_office(self) -> bool:
        return not self.is_within


def evaluate_location(lat: float, lon: float, config: GeofenceConfig) -> GeofenceCheck:
    """Snapshot of one location against ``config``.

    The inside/outside decision uses the exact distance; only the stored
    distance is rounded to whole meters. A disabled geofence still measures
    the distance but always reports the location as inside.
    """
    distance = calculate_distance(lat, lon, config.center_lat, config.center_lng)
    within = distance <= config.radius_meters or not config.is_enabled
    return GeofenceCheck(distance_meters=int(round(distance)), is_within=within)
