import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "production_tracking_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

TARGET_STATION_NAME = "Sewing"
TIME_CREDIT_POLICY = "workflow_gated"

BACKFILL_STALENESS_DAYS = 30
BACKFILL_FALLBACK_OFFSET_HOURS = 2
OFFICE_WINDOW_DAYS = 7

QUERY_TIMEOUT_SECONDS = 5
# Reports are never cached in tests unless a test builds its own cache
REPORT_CACHE_TTL_SECONDS = 0
REPORT_CACHE_MAX_ENTRIES = 0

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
