import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "worktime_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

HOURS_LIMIT = float(os.getenv("HOURS_LIMIT", "40"))

NIGHT_START_WINDOW = (21, 23)
NIGHT_END_WINDOW = (5, 7)
