"""Settings shared by every environment.

Each value can be overridden from the environment (or a .env file loaded
by python-dotenv before the settings module is imported).
"""

import os


def env_bool(name: str, default: str) -> bool:
    return bool(int(os.getenv(name, default)))


DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hrms_db"),
}

# Office geofence used to validate check-in/check-out coordinates.
GEOFENCE_CENTER_LAT = float(os.getenv("GEOFENCE_CENTER_LAT", "25.6146835780726"))
GEOFENCE_CENTER_LNG = float(os.getenv("GEOFENCE_CENTER_LNG", "85.1126174983296"))
GEOFENCE_RADIUS_METERS = float(os.getenv("GEOFENCE_RADIUS_METERS", "50"))
GEOFENCE_NAME = os.getenv("GEOFENCE_NAME", "Office Location")
GEOFENCE_ENABLED = env_bool("GEOFENCE_ENABLED", "1")
GEOFENCE_REQUIRED = env_bool("GEOFENCE_REQUIRED", "1")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
