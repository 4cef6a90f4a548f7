"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_UTC_OFFSET_MINUTES = 180
DEFAULT_CHECKIN_OPEN_MINUTES = 30
DEFAULT_ABSENCE_WARNING_THRESHOLD = 2
DEFAULT_ABSENCE_BLOCK_THRESHOLD = 4
DAY_KEY_FORMAT = "%Y-%m-%d"
CLOCK_FORMAT = "%H:%M"
