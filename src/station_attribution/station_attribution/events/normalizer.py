from __future__ import annotations

import logging
import math
from collections import Counter
from datetime import datetime
from typing import Any, Iterable, Optional

from ..core.constants import DURATION_TOLERANCE_SECONDS, MAX_EVENT_SECONDS
from ..core.enums import ExclusionReason
from ..stations.catalog import StationCatalog
from .model import ExcludedEvent, NormalizationResult, RawScanEvent, ScanEvent

logger = logging.getLogger(__name__)


class _Excluded(Exception):
    def __init__(self, reason: ExclusionReason, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


def _as_id(value: Any) -> Optional[str]:
    if value is None:
        return None
    v = str(value).strip()
    return v or None


def _as_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).replace(tzinfo=None)
        except ValueError:
            return None
    return None


def _as_seconds(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class EventNormalizer:
    """Validates raw scan events into the typed working set.

    Problems never abort the run: each bad row is excluded with a reason and
    a warning, and the caller decides what an empty result means.
    """

    def __init__(self, catalog: StationCatalog):
        self._catalog = catalog

    def normalize(self, raw_events: Iterable[RawScanEvent]) -> NormalizationResult:
        valid: list[ScanEvent] = []
        invalid: list[ExcludedEvent] = []
        warnings: list[str] = []
        seen_ids: set[str] = set()

        for raw in raw_events:
            event_id = _as_id(raw.event_id)
            if event_id is not None:
                if event_id in seen_ids:
                    continue
                seen_ids.add(event_id)

            try:
                valid.append(self._normalize_one(raw, event_id))
            except _Excluded as exc:
                invalid.append(ExcludedEvent(raw=raw, reason=exc.reason, message=exc.message))
                warnings.append(exc.message)

        if invalid:
            by_reason = Counter(e.reason.value for e in invalid)
            logger.warning(f"Excluded {len(invalid)} of {len(valid) + len(invalid)} scan events: {dict(by_reason)}")

        return NormalizationResult(valid=valid, invalid=invalid, warnings=warnings)

    def _normalize_one(self, raw: RawScanEvent, event_id: Optional[str]) -> ScanEvent:
        item_id = _as_id(raw.item_id)
        label = f"Scan event {event_id or '?'}"
        if item_id is None:
            raise _Excluded(ExclusionReason.MISSING_ITEM, f"{label} missing item id - excluded")

        label = f"Scan event {event_id or '?'} for item {item_id}"
        employee_id = _as_id(raw.employee_id)
        if employee_id is None:
            raise _Excluded(ExclusionReason.MISSING_EMPLOYEE, f"{label} missing employee id - excluded")

        station_id = _as_id(raw.station_id)
        if station_id is None:
            raise _Excluded(ExclusionReason.MISSING_STATION, f"{label} missing station id - excluded")

        start = _as_datetime(raw.start_time)
        if start is None:
            raise _Excluded(ExclusionReason.MISSING_START_TIME, f"{label} missing start time - excluded")

        if self._catalog.get(station_id) is None:
            raise _Excluded(ExclusionReason.UNKNOWN_STATION, f"{label} references unknown station {station_id} - excluded")

        if raw.item_is_product is False:
            raise _Excluded(ExclusionReason.NOT_PRODUCTION_ITEM, f"{label} is not a production item - excluded")

        note = str(raw.note) if raw.note else None
        end = _as_datetime(raw.end_time)
        if end is None:
            # In progress: counts as an item scan, carries no duration.
            return ScanEvent(
                event_id=event_id or "",
                item_id=item_id,
                station_id=station_id,
                employee_id=employee_id,
                start_time=start,
                note=note,
            )

        duration = _as_seconds(raw.duration_seconds)
        if duration is None:
            raise _Excluded(ExclusionReason.MISSING_DURATION, f"{label} is completed but has no duration - excluded")
        if end <= start:
            raise _Excluded(ExclusionReason.INVALID_TIME_RANGE, f"{label} has invalid time range (start >= end) - excluded")
        if not math.isfinite(duration) or duration <= 0 or duration > MAX_EVENT_SECONDS:
            raise _Excluded(
                ExclusionReason.IMPLAUSIBLE_DURATION,
                f"{label} has implausible duration ({duration:g}s) - excluded",
            )

        span = (end - start).total_seconds()
        if abs(span - duration) > DURATION_TOLERANCE_SECONDS:
            raise _Excluded(
                ExclusionReason.DURATION_MISMATCH,
                f"{label} duration {duration:g}s does not match its time range ({span:g}s) - excluded",
            )

        return ScanEvent(
            event_id=event_id or "",
            item_id=item_id,
            station_id=station_id,
            employee_id=employee_id,
            start_time=start,
            end_time=end,
            duration_seconds=int(round(duration)),
            note=note,
        )
