from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    DEFAULT_BACKFILL_FALLBACK_OFFSET_HOURS,
    DEFAULT_BACKFILL_STALENESS_DAYS,
    DEFAULT_OFFICE_WINDOW_DAYS,
    DEFAULT_QUERY_TIMEOUT_SECONDS,
    DEFAULT_REPORT_CACHE_MAX_ENTRIES,
    DEFAULT_REPORT_CACHE_TTL_SECONDS,
    DEFAULT_TARGET_STATION,
    DEFAULT_TIME_CREDIT_POLICY,
)


@dataclass(frozen=True)
class EngineSettings:
    target_station_name: str = DEFAULT_TARGET_STATION
    time_credit_policy: str = DEFAULT_TIME_CREDIT_POLICY
    backfill_staleness_days: int = DEFAULT_BACKFILL_STALENESS_DAYS
    backfill_fallback_offset_hours: float = DEFAULT_BACKFILL_FALLBACK_OFFSET_HOURS
    office_window_days: int = DEFAULT_OFFICE_WINDOW_DAYS
    query_timeout_seconds: float = DEFAULT_QUERY_TIMEOUT_SECONDS
    report_cache_ttl_seconds: float = DEFAULT_REPORT_CACHE_TTL_SECONDS
    report_cache_max_entries: int = DEFAULT_REPORT_CACHE_MAX_ENTRIES

    @classmethod
    def from_module(cls, settings) -> "EngineSettings":
        """Read engine settings from a ``config.*`` settings module, falling back to defaults."""
        defaults = cls()
        return cls(
            target_station_name=str(getattr(settings, "TARGET_STATION_NAME", defaults.target_station_name)),
            time_credit_policy=str(getattr(settings, "TIME_CREDIT_POLICY", defaults.time_credit_policy)),
            backfill_staleness_days=int(getattr(settings, "BACKFILL_STALENESS_DAYS", defaults.backfill_staleness_days)),
            backfill_fallback_offset_hours=float(
                getattr(settings, "BACKFILL_FALLBACK_OFFSET_HOURS", defaults.backfill_fallback_offset_hours)
            ),
            office_window_days=int(getattr(settings, "OFFICE_WINDOW_DAYS", defaults.office_window_days)),
            query_timeout_seconds=float(getattr(settings, "QUERY_TIMEOUT_SECONDS", defaults.query_timeout_seconds)),
            report_cache_ttl_seconds=float(
                getattr(settings, "REPORT_CACHE_TTL_SECONDS", defaults.report_cache_ttl_seconds)
            ),
            report_cache_max_entries=int(
                getattr(settings, "REPORT_CACHE_MAX_ENTRIES", defaults.report_cache_max_entries)
            ),
        )
