from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime
from typing import Sequence

from ..attribution.timeline import build_timelines
from ..core.enums import ItemStatus
from ..employees.repository import EmployeeRepository
from ..events.model import RawScanEvent
from ..events.normalizer import EventNormalizer
from ..items.model import ItemFilter
from ..items.repository import ItemRepository
from ..stations.catalog import StationCatalog
from ..stations.model import Station
from .model import MissingAttributionItem, TimelineEntry

logger = logging.getLogger(__name__)


class MissingAttributionDetector:
    """Finds items whose status says ``target`` was done but no scan names it."""

    def __init__(self, items: ItemRepository, employees: EmployeeRepository):
        self._items = items
        self._employees = employees

    def candidate_statuses(self, target: Station) -> list[ItemStatus]:
        return ItemStatus.beyond(target.stage)

    def detect(
        self,
        *,
        catalog: StationCatalog,
        target: Station,
        item_filter: ItemFilter,
        fetch_events,
    ) -> list[MissingAttributionItem]:
        """``fetch_events(item_ids)`` returns the raw events of the given items."""
        candidates = [
            item
            for item in self._items.find_candidate_items(
                statuses=self.candidate_statuses(target),
                item_filter=item_filter,
            )
            if item.is_product
        ]
        if not candidates:
            return []

        raw: Sequence[RawScanEvent] = fetch_events([i.item_id for i in candidates])
        # Any recorded scan at the target counts, valid or not; the backfill guard sees the same rows.
        attributed = {str(r.item_id) for r in raw if r.item_id is not None and str(r.station_id) == target.station_id}

        normalized = EventNormalizer(catalog).normalize(raw)
        timelines = {t.item_id: t for t in build_timelines(normalized.valid)}
        employees = self._employees.get_many(e.employee_id for e in normalized.valid)

        missing = []
        for item in candidates:
            if item.item_id in attributed:
                continue
            timeline = timelines.get(item.item_id)
            events = list(timeline.events) if timeline else []
            entries = [
                TimelineEntry(
                    event_id=e.event_id,
                    station_id=e.station_id,
                    station_name=catalog.get(e.station_id).name,
                    employee_id=e.employee_id,
                    employee_name=employees[e.employee_id].name if e.employee_id in employees else "Unknown",
                    start_time=e.start_time,
                    end_time=e.end_time,
                    manual=e.is_manual,
                )
                for e in events
            ]
            latest = entries[-1] if entries else None
            missing.append(
                MissingAttributionItem(
                    item=item,
                    target_station_name=target.name,
                    current_station_name=latest.station_name if latest else "Unknown",
                    current_employee_name=latest.employee_name if latest else "Unknown",
                    last_processed_at=latest.start_time if latest else None,
                    events=entries,
                )
            )

        missing.sort(key=lambda m: m.item.order_created_at or datetime.min, reverse=True)
        logger.info(f"{len(missing)} of {len(candidates)} candidate items are missing {target.name} attribution")
        return missing


def summarize_missing(items: Sequence[MissingAttributionItem]) -> dict:
    breakdown = Counter(m.item.status.value for m in items)
    return {"total_missing_items": len(items), "status_breakdown": dict(breakdown)}
