import os

PAGE_SIZE = int(os.getenv("PAGE_SIZE", "10"))

CALENDAR_UTC_OFFSET_MINUTES = int(os.getenv("CALENDAR_UTC_OFFSET_MINUTES", "0"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = False
