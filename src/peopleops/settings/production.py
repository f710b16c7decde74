import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "peopleops"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "peopleops"),
    "timeout": int(os.getenv("DB_TIMEOUT_SECONDS", "5")),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

ATTENDANCE_MODE = os.getenv("ATTENDANCE_MODE", "self_service")
ROLE_CACHE_SECONDS = int(os.getenv("ROLE_CACHE_SECONDS", "60"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
