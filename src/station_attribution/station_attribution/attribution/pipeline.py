from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..common.budget import run_with_budget
from ..core.settings import EngineSettings
from ..events.model import EventFilter, NormalizationResult, RawScanEvent
from ..events.normalizer import EventNormalizer
from ..events.repository import EventStore
from ..stations.catalog import StationCatalog
from ..stations.repository import StationRepository
from .engine import AttributionEngine
from .model import AttributionResult, ItemTimeline
from .policies.base import TimeCreditPolicy
from .timeline import build_timelines

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttributionRun:
    catalog: StationCatalog
    normalized: NormalizationResult
    timelines: list[ItemTimeline]
    result: AttributionResult


class AttributionPipeline:
    """Event store -> normalizer -> timelines -> attribution, for one report window.

    Station/employee filters are not pushed into the fetch: credit for a pair
    depends on the whole item timeline, so callers filter the credits instead.
    """

    def __init__(
        self,
        events: EventStore,
        stations: StationRepository,
        *,
        policy: TimeCreditPolicy,
        settings: Optional[EngineSettings] = None,
    ):
        self._events = events
        self._stations = stations
        self._policy = policy
        self._settings = settings or EngineSettings()

    @property
    def policy(self) -> TimeCreditPolicy:
        return self._policy

    def load_catalog(self) -> StationCatalog:
        return StationCatalog.load(self._stations)

    def fetch_window(self, event_filter: EventFilter, catalog: StationCatalog) -> list[RawScanEvent]:
        window = event_filter.window_only()
        office = catalog.office_station()

        def _fetch() -> list[RawScanEvent]:
            rows = list(self._events.fetch_events(window))
            if office is not None:
                office_filter = window.widened(self._settings.office_window_days)
                office_filter = EventFilter(
                    date_from=office_filter.date_from,
                    date_to=office_filter.date_to,
                    station_id=office.station_id,
                )
                rows.extend(self._events.fetch_events(office_filter))
            return rows

        return run_with_budget(_fetch, budget_seconds=self._settings.query_timeout_seconds, label="event fetch")

    def run(self, event_filter: EventFilter) -> AttributionRun:
        catalog = self.load_catalog()
        raw = self.fetch_window(event_filter, catalog)
        normalized = EventNormalizer(catalog).normalize(raw)
        timelines = build_timelines(normalized.valid)
        result = AttributionEngine(catalog, self._policy).attribute(timelines)
        logger.info(
            f"Attributed {len(normalized.valid)} events across {len(timelines)} items "
            f"({len(normalized.invalid)} excluded, {normalized.open_count} open, {len(result.credits)} credits)"
        )
        return AttributionRun(catalog=catalog, normalized=normalized, timelines=timelines, result=result)
