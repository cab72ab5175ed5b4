from __future__ import annotations

from typing import Optional

from ...core.enums import WorkflowStage
from ...events.model import ScanEvent
from .base import CreditDecision, TimeCreditPolicy, backward_warning, is_forward


class WorkflowGatedPolicy(TimeCreditPolicy):
    """Forward the source's own duration, only across strictly forward moves."""

    name = "workflow_gated"

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
        return CreditDecision(seconds=source.completed_seconds)
