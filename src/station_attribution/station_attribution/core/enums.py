from __future__ import annotations

from enum import Enum
from typing import Optional


class WorkflowStage(str, Enum):
    """Canonical production workflow; declaration order is the workflow order."""

    CUTTING = "Cutting"
    SEWING = "Sewing"
    FOAM_CUTTING = "Foam Cutting"
    STUFFING = "Stuffing"
    PACKAGING = "Packaging"

    @property
    def index(self) -> int:
        return _STAGE_ORDER.index(self)

    @property
    def item_status(self) -> "ItemStatus":
        return ItemStatus[self.name]

    @classmethod
    def from_station_name(cls, name: Optional[str]) -> Optional["WorkflowStage"]:
        if not name:
            return None
        key = " ".join(name.split()).lower()
        for stage in cls:
            if stage.value.lower() == key:
                return stage
        return None


_STAGE_ORDER = list(WorkflowStage)

OFFICE_STATION_NAME = "Office"


class ItemStatus(str, Enum):
    """Lifecycle status of a production item; declaration order is lifecycle order."""

    NOT_STARTED_PRODUCTION = "NOT_STARTED_PRODUCTION"
    CUTTING = "CUTTING"
    SEWING = "SEWING"
    FOAM_CUTTING = "FOAM_CUTTING"
    STUFFING = "STUFFING"
    PACKAGING = "PACKAGING"
    PRODUCT_FINISHED = "PRODUCT_FINISHED"
    READY = "READY"

    @property
    def index(self) -> int:
        return _STATUS_ORDER.index(self)

    @classmethod
    def beyond(cls, stage: WorkflowStage) -> list["ItemStatus"]:
        """Statuses that imply ``stage`` was already completed."""
        pivot = stage.item_status.index
        return [s for s in _STATUS_ORDER if s.index > pivot]


_STATUS_ORDER = list(ItemStatus)


class ExclusionReason(str, Enum):
    """Why the normalizer dropped a raw scan event."""

    MISSING_ITEM = "MISSING_ITEM"
    MISSING_EMPLOYEE = "MISSING_EMPLOYEE"
    MISSING_STATION = "MISSING_STATION"
    MISSING_START_TIME = "MISSING_START_TIME"
    UNKNOWN_STATION = "UNKNOWN_STATION"
    NOT_PRODUCTION_ITEM = "NOT_PRODUCTION_ITEM"
    MISSING_DURATION = "MISSING_DURATION"
    INVALID_TIME_RANGE = "INVALID_TIME_RANGE"
    IMPLAUSIBLE_DURATION = "IMPLAUSIBLE_DURATION"
    DURATION_MISMATCH = "DURATION_MISMATCH"


class ReportStatus(str, Enum):
    OK = "OK"
    NO_DATA = "NO_DATA"
