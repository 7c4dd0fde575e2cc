from __future__ import annotations

from dataclasses import asdict, dataclass

from ..core.constants import (
    DEFAULT_OFFICE_LAT,
    DEFAULT_OFFICE_LNG,
    DEFAULT_OFFICE_NAME,
    DEFAULT_OFFICE_RADIUS_METERS,
)


@dataclass(frozen=True)
class GeofenceConfig:
    """A circular zone (center + radius) where attendance counts as in-office."""

    center_lat: float
    center_lng: float
    radius_meters: float
    name: str = DEFAULT_OFFICE_NAME
    is_enabled: bool = True
    is_required: bool = True

    def to_dict(self) -> dict:
        return asdict(self)


OFFICE_GEOFENCE = GeofenceConfig(
    center_lat=DEFAULT_OFFICE_LAT,
    center_lng=DEFAULT_OFFICE_LNG,
    radius_meters=DEFAULT_OFFICE_RADIUS_METERS,
)
