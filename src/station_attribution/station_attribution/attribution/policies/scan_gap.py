from __future__ import annotations

from typing import Optional

from ...core.constants import MAX_EVENT_SECONDS
from ...core.enums import WorkflowStage
from ...events.model import ScanEvent
from .base import CreditDecision, TimeCreditPolicy, backward_warning, is_forward


class ScanGapPolicy(TimeCreditPolicy):
    """Credit the start-to-start gap between two scans, forward moves only."""

    name = "scan_gap"

    def decide(
        self,
        *,
        source: ScanEvent,
        source_stage: Optional[WorkflowStage],
        endpoint: ScanEvent,
        endpoint_stage: Optional[WorkflowStage],
    ) -> CreditDecision:
        if not is_forward(source_stage, endpoint_stage):
            return CreditDecision(warning=backward_warning(source, source_stage, endpoint_stage))

        gap = int((endpoint.start_time - source.start_time).total_seconds())
        if gap <= 0 or gap > MAX_EVENT_SECONDS:
            return CreditDecision(
                warning=f"Item {source.item_id}: implausible scan gap of {gap}s after event {source.event_id or '?'}; not credited"
            )
        return CreditDecision(seconds=gap)
