from __future__ import annotations

from typing import Optional

from ...core.enums import WorkflowStage
from ...events.model import ScanEvent
from .base import CreditDecision, TimeCreditPolicy


class UnconditionalForwardPolicy(TimeCreditPolicy):
    """Forward the source's own duration regardless of workflow order."""

    name = "unconditional_forward"

    def decide(
        self,
        *,
        source: ScanEvent,
        source_stage: Optional[WorkflowStage],
        endpoint: ScanEvent,
        endpoint_stage: Optional[WorkflowStage],
    ) -> CreditDecision:
        return CreditDecision(seconds=source.completed_seconds)
