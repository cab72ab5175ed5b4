from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Callable, Optional

from ..common.budget import run_with_budget
from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import MANUAL_ATTRIBUTION_PREFIX
from ..core.exceptions import DuplicateAttribution, EmployeeInvalid, ItemNotFound
from ..core.settings import EngineSettings
from ..employees.repository import EmployeeRepository
from ..events.model import ScanEvent
from ..events.normalizer import EventNormalizer
from ..events.repository import EventStore
from ..items.model import ItemFilter
from ..items.repository import ItemRepository
from ..stations.catalog import StationCatalog
from ..stations.repository import StationRepository
from .detector import MissingAttributionDetector
from .model import MissingAttributionItem
from .synthesizer import BackfillSynthesizer

logger = logging.getLogger(__name__)


class BackfillService:
    """Detects forgotten station scans and inserts synthetic replacements."""

    def __init__(
        self,
        events: EventStore,
        stations: StationRepository,
        employees: EmployeeRepository,
        items: ItemRepository,
        *,
        settings: Optional[EngineSettings] = None,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self._events = events
        self._stations = stations
        self._employees = employees
        self._items = items
        self._settings = settings or EngineSettings()
        self._on_change = on_change
        self._detector = MissingAttributionDetector(items, employees)

    def _fetch_item_events(self, item_ids):
        return run_with_budget(
            lambda: list(self._events.fetch_events_for_items(item_ids)),
            budget_seconds=self._settings.query_timeout_seconds,
            label="item event fetch",
        )

    def detect_missing_attribution(
        self,
        target_station_id: Optional[str] = None,
        item_filter: Optional[ItemFilter] = None,
    ) -> list[MissingAttributionItem]:
        catalog = StationCatalog.load(self._stations)
        target = catalog.resolve_target(station_id=target_station_id, default_name=self._settings.target_station_name)
        return self._detector.detect(
            catalog=catalog,
            target=target,
            item_filter=item_filter or ItemFilter(),
            fetch_events=self._fetch_item_events,
        )

    def backfill_attribution(
        self,
        *,
        item_id: str,
        employee_id: str,
        actor_id: str,
        target_station_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ScanEvent:
        item_id = require_non_empty(item_id, "item_id")
        employee_id = require_non_empty(employee_id, "employee_id")
        actor_id = require_non_empty(actor_id, "actor_id")
        now = now or now_local()

        catalog = StationCatalog.load(self._stations)
        target = catalog.resolve_target(station_id=target_station_id, default_name=self._settings.target_station_name)

        item = self._items.get_by_id(item_id)
        if item is None or not item.is_product:
            raise ItemNotFound(f"Production item {item_id} not found")

        raw_events = self._fetch_item_events([item_id])
        if any(str(r.station_id) == target.station_id for r in raw_events):
            raise DuplicateAttribution(f"Item {item_id} already has {target.name} attribution")

        employee = self._employees.get_by_id(employee_id)
        if employee is None or not employee.is_active:
            raise EmployeeInvalid(f"Employee {employee_id} not found or not active")

        valid = EventNormalizer(catalog).normalize(raw_events).valid
        synthesizer = BackfillSynthesizer(
            catalog,
            staleness_days=self._settings.backfill_staleness_days,
            fallback_offset_hours=self._settings.backfill_fallback_offset_hours,
        )
        window = synthesizer.plan(valid, target.stage, now=now)

        actor = self._employees.get_by_id(actor_id)
        actor_name = actor.name if actor else actor_id
        event = ScanEvent(
            event_id=uuid.uuid4().hex,
            item_id=item_id,
            station_id=target.station_id,
            employee_id=employee_id,
            start_time=window.start,
            end_time=window.end,
            duration_seconds=window.duration_seconds,
            note=f"{MANUAL_ATTRIBUTION_PREFIX} by {actor_name} on {now.isoformat()}",
        )

        stored = self._events.insert_event_if_absent(event)
        if stored is None:
            raise DuplicateAttribution(f"Item {item_id} already has {target.name} attribution")

        logger.info(
            f"Backfilled {target.name} for item {item_id}: employee={employee_id} "
            f"window={window.start.isoformat()}..{window.end.isoformat()} ({window.duration_seconds}s) actor={actor_id}"
        )
        if self._on_change is not None:
            self._on_change()
        return stored
