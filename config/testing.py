import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timekeeping_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

LATE_START_HOUR = 8
LATE_GRACE_MINUTES = 15

DEFAULT_PAGE_LIMIT = 10

AUTO_INIT_DB = False
