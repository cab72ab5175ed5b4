from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..core.enums import WorkflowStage
from ..core.exceptions import StationNotConfigured
from .model import Station
from .repository import StationRepository


@dataclass(frozen=True)
class StationCatalog:
    """Snapshot of configured stations with workflow lookups.

    Built once per computation so the attribution pass never touches storage.
    """

    stations: tuple[Station, ...]
    _by_id: dict[str, Station] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_by_id", {s.station_id: s for s in self.stations})

    @classmethod
    def of(cls, stations: Iterable[Station]) -> "StationCatalog":
        return cls(tuple(stations))

    @classmethod
    def load(cls, repo: StationRepository) -> "StationCatalog":
        return cls.of(repo.list_all())

    def get(self, station_id: Optional[str]) -> Optional[Station]:
        if station_id is None:
            return None
        return self._by_id.get(station_id)

    def find_by_name(self, name: str) -> Optional[Station]:
        key = " ".join(name.split()).lower()
        for s in self.stations:
            if " ".join(s.name.split()).lower() == key:
                return s
        return None

    def is_office(self, station_id: str) -> bool:
        s = self.get(station_id)
        return bool(s and s.is_office)

    def stage_of(self, station_id: str) -> Optional[WorkflowStage]:
        s = self.get(station_id)
        return s.stage if s else None

    def office_station(self) -> Optional[Station]:
        return next((s for s in self.stations if s.is_office), None)

    def resolve_target(self, *, station_id: Optional[str], default_name: str) -> Station:
        """Resolve the station a detection/backfill targets.

        The target must be a workflow stage; anything else is a setup defect.
        """
        station = self.get(station_id) if station_id else self.find_by_name(default_name)
        if station is None:
            raise StationNotConfigured(
                f"Station {station_id or default_name!r} is not configured in the system"
            )
        if station.stage is None:
            raise StationNotConfigured(
                f"Station {station.name!r} is not part of the production workflow"
            )
        return station
