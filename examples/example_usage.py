"""Example: drive the attendance service directly (no Flask).

Controllers are a thin layer; the check-in rules live in the services.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.hrms.hrms.attendance.model import CheckInput
from src.hrms.hrms.container import build_container
from src.hrms.hrms.core.exceptions import AttendanceError, ReasonRequiredError
from src.hrms.hrms.geofencing.provider import StaticGeofenceConfigProvider


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        geofence_provider=StaticGeofenceConfigProvider.from_settings(settings),
    )

    here = CheckInput(latitude=25.6146835780726, longitude=85.1126174983296, location_name="Front desk")
    try:
        record = container.attendance_service.check_in(1, here)
        print("checked in:", record.to_dict())
    except ReasonRequiredError as e:
        print(f"outside the office ({e.distance_meters}m), a reason is needed")
    except AttendanceError as e:
        print("not checked in:", e)

    print(container.attendance_service.get_status(1).to_dict())


if __name__ == "__main__":
    main()
