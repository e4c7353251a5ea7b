"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DATE_FORMAT = "%Y-%m-%d"
MS_PER_HOUR = 3_600_000

DEFAULT_PAGE_SIZE = 10
DEFAULT_RECENT_LIMIT = 5
DEFAULT_CALENDAR_UTC_OFFSET_MINUTES = 0

# Lexicographic bounds used by an unbounded date range.
MIN_CALENDAR_DATE = "0000-01-01"
MAX_CALENDAR_DATE = "9999-12-31"

ALL = "all"
