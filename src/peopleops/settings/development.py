import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "peopleops"),
    "timeout": int(os.getenv("DB_TIMEOUT_SECONDS", "5")),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# "self_service" or "admin_marks"
ATTENDANCE_MODE = os.getenv("ATTENDANCE_MODE", "self_service")
ROLE_CACHE_SECONDS = int(os.getenv("ROLE_CACHE_SECONDS", "60"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also create demo accounts on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
