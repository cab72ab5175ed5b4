"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MAX_EVENT_SECONDS = 24 * 60 * 60
DURATION_TOLERANCE_SECONDS = 1

DEFAULT_TARGET_STATION = "Sewing"
DEFAULT_TIME_CREDIT_POLICY = "workflow_gated"
DEFAULT_BACKFILL_STALENESS_DAYS = 30
DEFAULT_BACKFILL_FALLBACK_OFFSET_HOURS = 2
DEFAULT_OFFICE_WINDOW_DAYS = 7
DEFAULT_QUERY_TIMEOUT_SECONDS = 30
DEFAULT_REPORT_CACHE_TTL_SECONDS = 300
DEFAULT_REPORT_CACHE_MAX_ENTRIES = 128

DEFAULT_PAGE_LIMIT = 50
MAX_PAGE_LIMIT = 100

MANUAL_ATTRIBUTION_PREFIX = "Manually attributed"
