import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", "12345"),
    "database": os.getenv("DB_NAME", "worktime_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

HOURS_LIMIT = 40.0

NIGHT_START_WINDOW = (21, 23)
NIGHT_END_WINDOW = (5, 7)
