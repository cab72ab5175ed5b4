import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "production_tracking"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Station whose missing scans the backfill workflow repairs
TARGET_STATION_NAME = os.getenv("TARGET_STATION_NAME", "Sewing")
# workflow_gated | unconditional_forward | scan_gap
TIME_CREDIT_POLICY = os.getenv("TIME_CREDIT_POLICY", "workflow_gated")

BACKFILL_STALENESS_DAYS = int(os.getenv("BACKFILL_STALENESS_DAYS", "30"))
BACKFILL_FALLBACK_OFFSET_HOURS = float(os.getenv("BACKFILL_FALLBACK_OFFSET_HOURS", "2"))
OFFICE_WINDOW_DAYS = int(os.getenv("OFFICE_WINDOW_DAYS", "7"))

QUERY_TIMEOUT_SECONDS = float(os.getenv("QUERY_TIMEOUT_SECONDS", "30"))
REPORT_CACHE_TTL_SECONDS = float(os.getenv("REPORT_CACHE_TTL_SECONDS", "60"))
REPORT_CACHE_MAX_ENTRIES = int(os.getenv("REPORT_CACHE_MAX_ENTRIES", "128"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
