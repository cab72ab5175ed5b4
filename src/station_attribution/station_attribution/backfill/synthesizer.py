from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional

from ..core.constants import MAX_EVENT_SECONDS
from ..core.enums import WorkflowStage
from ..core.exceptions import SynthesisUnsafeWindow
from ..events.model import ScanEvent
from ..stations.catalog import StationCatalog
from .model import SynthesisWindow

logger = logging.getLogger(__name__)

_ONE_SECOND = timedelta(seconds=1)
_MAX_SPAN = timedelta(seconds=MAX_EVENT_SECONDS)


class BackfillSynthesizer:
    """Computes a safe time window for a synthetic scan at ``target``.

    The window starts where the nearest upstream station finished (if that is
    recent enough to show up in current reports) and ends where the nearest
    downstream station started; it always has a positive duration no longer
    than a plausible scan.
    """

    def __init__(self, catalog: StationCatalog, *, staleness_days: int, fallback_offset_hours: float):
        self._catalog = catalog
        self._staleness = timedelta(days=staleness_days)
        self._fallback_offset = timedelta(hours=fallback_offset_hours)

    def plan(self, events: Iterable[ScanEvent], target: WorkflowStage, *, now: datetime) -> SynthesisWindow:
        events = list(events)
        preceding = self._nearest_preceding(events, target)
        following = self._nearest_following(events, target)

        anchored = preceding is not None and preceding.end_time >= now - self._staleness
        start = preceding.end_time if anchored else now - self._fallback_offset

        if following is not None and following.start_time > start:
            end = following.start_time
        else:
            end = start + _ONE_SECOND

        clamped = False
        if end - start < _ONE_SECOND:
            end = start + _ONE_SECOND
            clamped = True
        elif end - start > _MAX_SPAN:
            end = start + _MAX_SPAN
            clamped = True

        window = SynthesisWindow(start=start, end=end, anchored_on_preceding=anchored, clamped=clamped)
        if window.end <= window.start or window.duration_seconds <= 0:
            raise SynthesisUnsafeWindow(f"Synthetic window {start.isoformat()} - {end.isoformat()} is not positive")
        if clamped:
            logger.warning(f"Synthetic {target.value} window clamped to {window.duration_seconds}s")
        return window

    def _nearest_preceding(self, events: list[ScanEvent], target: WorkflowStage) -> Optional[ScanEvent]:
        best: Optional[tuple[int, datetime, ScanEvent]] = None
        for e in events:
            stage = self._catalog.stage_of(e.station_id)
            if stage is None or stage.index >= target.index or e.end_time is None:
                continue
            key = (stage.index, e.end_time, e)
            if best is None or key[:2] > best[:2]:
                best = key
        return best[2] if best else None

    def _nearest_following(self, events: list[ScanEvent], target: WorkflowStage) -> Optional[ScanEvent]:
        best: Optional[tuple[int, datetime, ScanEvent]] = None
        for e in events:
            stage = self._catalog.stage_of(e.station_id)
            if stage is None or stage.index <= target.index:
                continue
            key = (stage.index, e.start_time, e)
            if best is None or key[:2] < best[:2]:
                best = key
        return best[2] if best else None
