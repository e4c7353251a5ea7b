import os

PAGE_SIZE = int(os.getenv("PAGE_SIZE", "10"))

# Calendar dates are derived from UTC shifted by this many minutes
CALENDAR_UTC_OFFSET_MINUTES = int(os.getenv("CALENDAR_UTC_OFFSET_MINUTES", "0"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = bool(int(os.getenv("DEBUG", "1")))
