import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "peopleops_test"),
    "timeout": 2,
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

ATTENDANCE_MODE = "self_service"
ROLE_CACHE_SECONDS = 0

AUTO_INIT_DB = False
AUTO_SEED_DB = False
