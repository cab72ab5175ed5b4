from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Any, Optional

from ..core.constants import MANUAL_ATTRIBUTION_PREFIX
from ..core.enums import ExclusionReason


@dataclass(frozen=True)
class RawScanEvent:
    """A processing-log row exactly as storage returned it (nothing validated yet)."""

    event_id: Any = None
    item_id: Any = None
    station_id: Any = None
    employee_id: Any = None
    start_time: Any = None
    end_time: Any = None
    duration_seconds: Any = None
    note: Any = None
    item_is_product: Optional[bool] = None

    @classmethod
    def from_row(cls, row: dict) -> "RawScanEvent":
        return cls(
            event_id=row.get("event_id"),
            item_id=row.get("item_id"),
            station_id=row.get("station_id"),
            employee_id=row.get("employee_id"),
            start_time=row.get("start_time"),
            end_time=row.get("end_time"),
            duration_seconds=row.get("duration_seconds"),
            note=row.get("note"),
            item_is_product=None if row.get("is_product") is None else bool(row.get("is_product")),
        )


@dataclass(frozen=True)
class ScanEvent:
    """Domain entity: an employee marking an item done at their station.

    ``end_time``/``duration_seconds`` are both absent while work is in progress.
    """

    event_id: str
    item_id: str
    station_id: str
    employee_id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    duration_seconds: Optional[int] = None
    note: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    @property
    def completed_seconds(self) -> int:
        if self.end_time is None or not self.duration_seconds or self.duration_seconds <= 0:
            return 0
        return int(self.duration_seconds)

    @property
    def is_manual(self) -> bool:
        return bool(self.note and self.note.startswith(MANUAL_ATTRIBUTION_PREFIX))


@dataclass(frozen=True)
class EventFilter:
    """Report filter; the date range applies to the event start time."""

    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    station_id: Optional[str] = None
    employee_id: Optional[str] = None

    def widened(self, days: int) -> "EventFilter":
        pad = timedelta(days=days)
        return replace(
            self,
            date_from=self.date_from - pad if self.date_from else None,
            date_to=self.date_to + pad if self.date_to else None,
        )

    def window_only(self) -> "EventFilter":
        return EventFilter(date_from=self.date_from, date_to=self.date_to)

    def as_params(self) -> dict:
        return {
            "date_from": self.date_from.isoformat() if self.date_from else None,
            "date_to": self.date_to.isoformat() if self.date_to else None,
            "station_id": self.station_id,
            "employee_id": self.employee_id,
        }


@dataclass(frozen=True)
class ExcludedEvent:
    raw: RawScanEvent
    reason: ExclusionReason
    message: str


@dataclass(frozen=True)
class NormalizationResult:
    valid: list[ScanEvent] = field(default_factory=list)
    invalid: list[ExcludedEvent] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.valid

    @property
    def open_count(self) -> int:
        return sum(1 for e in self.valid if e.is_open)
