"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_LIST_LIMIT = 500

MIN_REPORT_YEAR = 2000
MAX_REPORT_YEAR = 2100

CSV_ENCODING = "utf-8-sig"
CSV_MIMETYPE = "text/csv"

NOTIFICATION_QUEUE_LIMIT = 50
