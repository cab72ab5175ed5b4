from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..core.enums import WorkflowStage
from ..stations.catalog import StationCatalog
from .model import AttributionCredit, AttributionResult, ItemTimeline
from .policies.base import TimeCreditPolicy
from .policies.workflow_gated import WorkflowGatedPolicy

logger = logging.getLogger(__name__)

_PairKey = tuple[str, str, str]


class AttributionEngine:
    """Walks item timelines and assigns item-count and time credit.

    Item count goes to whoever scanned (Office excluded). An event's completed
    duration is credited forward to the next scanner on the same item, subject
    to the time-credit policy. Office is never an endpoint: a scan handed to
    Office forwards nothing, and the Office entry's own duration goes on to the
    next non-Office scanner. The final event of a timeline forwards nothing.
    """

    def __init__(self, catalog: StationCatalog, policy: Optional[TimeCreditPolicy] = None):
        self._catalog = catalog
        self._policy = policy or WorkflowGatedPolicy()

    @property
    def policy(self) -> TimeCreditPolicy:
        return self._policy

    def attribute(self, timelines: Iterable[ItemTimeline]) -> AttributionResult:
        result = AttributionResult()
        for timeline in timelines:
            result.timelines += 1
            self._attribute_item(timeline, result)

        if result.suppressed_transitions:
            logger.warning(
                f"Suppressed time credit on {result.suppressed_transitions} transitions ({self._policy.name})"
            )
        if result.office_absorbed_seconds:
            logger.info(f"{result.office_absorbed_seconds}s of scan time ended at Office and was not forwarded")
        return result

    def _attribute_item(self, timeline: ItemTimeline, result: AttributionResult) -> None:
        events = timeline.events
        seconds_by_pair: dict[_PairKey, int] = {}
        office = [self._catalog.is_office(e.station_id) for e in events]

        for e, is_office in zip(events, office):
            if not is_office:
                seconds_by_pair.setdefault((e.employee_id, e.station_id, timeline.item_id), 0)

        last_stage: Optional[WorkflowStage] = None
        for i, source in enumerate(events):
            if office[i]:
                source_stage = last_stage
            else:
                source_stage = self._catalog.stage_of(source.station_id)
                last_stage = source_stage

            if source.completed_seconds <= 0:
                continue

            if not office[i] and i + 1 < len(events) and office[i + 1]:
                # Handed to Office: only the Office entry's own time travels on.
                result.office_absorbed_seconds += source.completed_seconds
                continue

            j = self._next_non_office(office, i)
            if j is None:
                continue
            endpoint = events[j]

            decision = self._policy.decide(
                source=source,
                source_stage=source_stage,
                endpoint=endpoint,
                endpoint_stage=self._catalog.stage_of(endpoint.station_id),
            )
            if decision.warning:
                result.warnings.append(decision.warning)
                result.suppressed_transitions += 1
            if decision.seconds > 0:
                key = (endpoint.employee_id, endpoint.station_id, timeline.item_id)
                seconds_by_pair[key] = seconds_by_pair.get(key, 0) + decision.seconds

        result.credits.extend(
            AttributionCredit(
                employee_id=employee_id,
                station_id=station_id,
                item_id=item_id,
                credited_duration_seconds=seconds,
            )
            for (employee_id, station_id, item_id), seconds in seconds_by_pair.items()
        )

    @staticmethod
    def _next_non_office(office: list[bool], i: int) -> Optional[int]:
        for j in range(i + 1, len(office)):
            if not office[j]:
                return j
        return None
