PAGE_SIZE = 10

CALENDAR_UTC_OFFSET_MINUTES = 0

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True
