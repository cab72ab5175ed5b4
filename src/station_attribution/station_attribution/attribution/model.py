from __future__ import annotations

from dataclasses import dataclass, field

from ..events.model import ScanEvent


@dataclass(frozen=True)
class ItemTimeline:
    """Believed chronological path of one item through the stations."""

    item_id: str
    events: tuple[ScanEvent, ...]

    @property
    def latest(self) -> ScanEvent:
        return self.events[-1]

    def has_station(self, station_id: str) -> bool:
        return any(e.station_id == station_id for e in self.events)


@dataclass(frozen=True)
class AttributionCredit:
    """Credit for one (employee, station) pair on one item. Never persisted."""

    employee_id: str
    station_id: str
    item_id: str
    credited_duration_seconds: int = 0


@dataclass
class AttributionResult:
    credits: list[AttributionCredit] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suppressed_transitions: int = 0
    office_absorbed_seconds: int = 0
    timelines: int = 0
