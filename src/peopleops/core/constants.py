"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_ACTIVITY_LIMIT = 10
DEFAULT_ROLE_CACHE_SECONDS = 60
DEFAULT_DB_TIMEOUT_SECONDS = 5

MIN_PASSWORD_LENGTH = 6
MIN_NAME_LENGTH = 2
MIN_PROFILE_FIELD_LENGTH = 2

# MySQL ER_DUP_ENTRY
MYSQL_DUPLICATE_ENTRY = 1062
