import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "club_attendance_test"),
}
DB_POOL_SIZE = 0

TIMEZONE = "Asia/Kolkata"
DAILY_TASK_TIME = "00:30:00"

LOG_LEVEL = "DEBUG"
LOG_FILE = None

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
