"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_TIMEZONE = "Asia/Kolkata"
DEFAULT_DAILY_TASK_TIME = time(0, 30, 0)
DEFAULT_POOL_SIZE = 5
REPORT_WINDOW_MONTHS = 6
DATE_FORMAT = "%Y-%m-%d"
