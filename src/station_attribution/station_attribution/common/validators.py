from __future__ import annotations

from typing import Optional

from ..core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def optional_id(value: Optional[str]) -> Optional[str]:
    v = (value or "").strip()
    return v or None


def parse_page(page: Optional[str], limit: Optional[str]) -> tuple[int, int]:
    try:
        p = int(page) if page not in (None, "") else 1
        lim = int(limit) if limit not in (None, "") else DEFAULT_PAGE_LIMIT
    except (TypeError, ValueError):
        raise ValidationError("page and limit must be integers")
    if p < 1:
        raise ValidationError("page must be at least 1")
    if lim < 1:
        raise ValidationError("limit must be at least 1")
    return p, min(lim, MAX_PAGE_LIMIT)
