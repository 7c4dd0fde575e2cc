"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6371e3

DEFAULT_OFFICE_LAT = 25.6146835780726
DEFAULT_OFFICE_LNG = 85.1126174983296
DEFAULT_OFFICE_RADIUS_METERS = 50.0
DEFAULT_OFFICE_NAME = "Office Location"

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_REPORT_DAYS = 7
DEFAULT_LIST_LIMIT = 200

MAX_EXPENSE_AMOUNT = 99_999_999.99
