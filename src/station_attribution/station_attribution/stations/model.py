from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import OFFICE_STATION_NAME, WorkflowStage


@dataclass(frozen=True)
class Station:
    """Domain entity: a production or administrative station."""

    station_id: str
    name: str

    @property
    def is_office(self) -> bool:
        return " ".join(self.name.split()).lower() == OFFICE_STATION_NAME.lower()

    @property
    def stage(self) -> Optional[WorkflowStage]:
        return WorkflowStage.from_station_name(self.name)
