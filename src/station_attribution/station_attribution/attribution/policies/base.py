from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import WorkflowStage
from ...events.model import ScanEvent


@dataclass(frozen=True)
class CreditDecision:
    seconds: int = 0
    warning: Optional[str] = None


def is_forward(source: Optional[WorkflowStage], endpoint: Optional[WorkflowStage]) -> bool:
    """Strictly forward move in the workflow; an unknown source (intake) allows anything."""
    if endpoint is None:
        return False
    if source is None:
        return True
    return endpoint.index > source.index


def backward_warning(source_event: ScanEvent, source: Optional[WorkflowStage], endpoint: Optional[WorkflowStage]) -> str:
    src = source.value if source else "?"
    dst = endpoint.value if endpoint else "?"
    kind = "repeated station" if source is not None and source == endpoint else "non-forward transition"
    return (
        f"Item {source_event.item_id}: {kind} {src} -> {dst} after event "
        f"{source_event.event_id or '?'}; {source_event.completed_seconds}s not credited"
    )


class TimeCreditPolicy(ABC):
    """Strategy Pattern: how much upstream time the next scanner is credited with."""

    name: str = ""

    @abstractmethod
    def decide(
        self,
        *,
        source: ScanEvent,
        source_stage: Optional[WorkflowStage],
        endpoint: ScanEvent,
        endpoint_stage: Optional[WorkflowStage],
    ) -> CreditDecision:
        raise NotImplementedError
