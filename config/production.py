import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "club_attendance"),
}
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))

TIMEZONE = os.getenv("TIMEZONE", "Asia/Kolkata")
DAILY_TASK_TIME = os.getenv("DAILY_TASK_TIME", "00:30:00")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "logs/club_attendance.log")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
# Optional override of the bundled database/schema.sql
SCHEMA_PATH = os.getenv("SCHEMA_PATH") or None
