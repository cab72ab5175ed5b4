from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_report_datetime(value: Optional[str], field_name: str, *, end_of_day: bool = False) -> Optional[datetime]:
    """Parse a report boundary given as YYYY-MM-DD or an ISO datetime.

    A bare date used as an upper bound covers the whole day.
    """
    v = (value or "").strip()
    if not v:
        return None
    try:
        if len(v) == 10:
            d = parse_iso_date(v)
            if end_of_day:
                return datetime(d.year, d.month, d.day, 23, 59, 59, 999999)
            return datetime(d.year, d.month, d.day)
        parsed = datetime.fromisoformat(v.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid date (YYYY-MM-DD or ISO datetime)")
    # Storage uses naive local datetimes.
    return parsed.replace(tzinfo=None)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def format_duration(seconds: int) -> str:
    """Human readable duration, e.g. ``1h 2m 3s``."""
    seconds = max(int(seconds or 0), 0)
    if seconds < 60:
        return f"{seconds}s"

    minutes, secs = divmod(seconds, 60)
    if minutes < 60:
        return f"{minutes}m {secs}s" if secs else f"{minutes}m"

    hours, minutes = divmod(minutes, 60)
    parts = [f"{hours}h"]
    if minutes:
        parts.append(f"{minutes}m")
    if secs:
        parts.append(f"{secs}s")
    return " ".join(parts)
