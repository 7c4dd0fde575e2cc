from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from .model import OFFICE_GEOFENCE, GeofenceConfig


class GeofenceConfigProvider(Protocol):
    """Supplies the geofence policy that applies to an attendance action."""

    def get_active(self) -> GeofenceConfig:
        raise NotImplementedError


@dataclass(frozen=True)
class StaticGeofenceConfigProvider:
    """One fixed office for the whole process."""

    config: GeofenceConfig = OFFICE_GEOFENCE

    def get_active(self) -> GeofenceConfig:
        return self.config

    @classmethod
    def from_settings(cls, settings: Any) -> "StaticGeofenceConfigProvider":
        """Build from a settings module; missing keys fall back to the default office."""
        default = OFFICE_GEOFENCE
        return cls(
            GeofenceConfig(
                center_lat=float(getattr(settings, "GEOFENCE_CENTER_LAT", default.center_lat)),
                center_lng=float(getattr(settings, "GEOFENCE_CENTER_LNG", default.center_lng)),
                radius_meters=float(getattr(settings, "GEOFENCE_RADIUS_METERS", default.radius_meters)),
                name=str(getattr(settings, "GEOFENCE_NAME", default.name)),
                is_enabled=bool(getattr(settings, "GEOFENCE_ENABLED", default.is_enabled)),
                is_required=bool(getattr(settings, "GEOFENCE_REQUIRED", default.is_required)),
            )
        )
