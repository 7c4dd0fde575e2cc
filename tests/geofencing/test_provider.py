from types import SimpleNamespace

import pytest

from src.hrms.hrms.container import build_container
from src.hrms.hrms.geofencing.model import OFFICE_GEOFENCE, GeofenceConfig
from src.hrms.hrms.geofencing.provider import StaticGeofenceConfigProvider


def test_default_provider_returns_office():
    assert StaticGeofenceConfigProvider().get_active() == OFFICE_GEOFENCE


def test_office_defaults():
    assert OFFICE_GEOFENCE.center_lat == 25.6146835780726
    assert OFFICE_GEOFENCE.center_lng == 85.1126174983296
    assert OFFICE_GEOFENCE.radius_meters == 50
    assert OFFICE_GEOFENCE.name == "Office Location"
    assert OFFICE_GEOFENCE.is_enabled and OFFICE_GEOFENCE.is_required


def test_from_settings_reads_overrides_and_keeps_defaults():
    settings = SimpleNamespace(GEOFENCE_CENTER_LAT="12.97", GEOFENCE_CENTER_LNG=77.59, GEOFENCE_RADIUS_METERS=120)
    config = StaticGeofenceConfigProvider.from_settings(settings).get_active()

    assert config.center_lat == pytest.approx(12.97)
    assert config.center_lng == pytest.approx(77.59)
    assert config.radius_meters == 120
    assert config.name == OFFICE_GEOFENCE.name
    assert config.is_enabled is True


def test_config_is_immutable():
    config = GeofenceConfig(center_lat=1.0, center_lng=2.0, radius_meters=3.0)
    with pytest.raises(AttributeError):
        config.radius_meters = 10.0


def test_container_built_from_settings_uses_configured_office():
    settings = SimpleNamespace(GEOFENCE_RADIUS_METERS=300, GEOFENCE_NAME="Branch")
    container = build_container(
        db_config={"database": "hrms_test"},
        geofence_provider=StaticGeofenceConfigProvider.from_settings(settings),
    )

    active = container.geofence_provider.get_active()
    assert active.radius_meters == 300
    assert active.name == "Branch"
