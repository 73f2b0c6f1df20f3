"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

TEMPLATE_NAME_MAX_LENGTH = 100
DEFAULT_RANGE_DAYS = 7
TIME_FORMAT = "%H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"
