import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "club_attendance"),
}
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))

# Daily bootstrap: seed pending rows at this wall-clock time in TIMEZONE.
TIMEZONE = os.getenv("TIMEZONE", "Asia/Kolkata")
DAILY_TASK_TIME = os.getenv("DAILY_TASK_TIME", "00:30:00")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE") or None

DEBUG = True

# If enabled, apply the bundled schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional override of the bundled database/schema.sql
SCHEMA_PATH = os.getenv("SCHEMA_PATH") or None
