from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Station


class StationRepository(Protocol):
    def list_all(self) -> Sequence[Station]:
        raise NotImplementedError

    def get_by_id(self, station_id: str) -> Optional[Station]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Station]:
        raise NotImplementedError
