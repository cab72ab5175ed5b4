from __future__ import annotations

import threading
import time as _time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional, Sequence

from src.station_attribution.station_attribution.core.enums import ItemStatus
from src.station_attribution.station_attribution.employees.model import Employee
from src.station_attribution.station_attribution.events.model import EventFilter, RawScanEvent, ScanEvent
from src.station_attribution.station_attribution.items.model import ItemFilter, ProductionItem
from src.station_attribution.station_attribution.stations.catalog import StationCatalog
from src.station_attribution.station_attribution.stations.model import Station

OFFICE = "st-office"
CUTTING = "st-cut"
SEWING = "st-sew"
FOAM = "st-foam"
STUFFING = "st-stuff"
PACKAGING = "st-pack"

STATIONS = [
    Station(station_id=OFFICE, name="Office"),
    Station(station_id=CUTTING, name="Cutting"),
    Station(station_id=SEWING, name="Sewing"),
    Station(station_id=FOAM, name="Foam Cutting"),
    Station(station_id=STUFFING, name="Stuffing"),
    Station(station_id=PACKAGING, name="Packaging"),
]


def catalog(stations: Optional[Sequence[Station]] = None) -> StationCatalog:
    return StationCatalog.of(STATIONS if stations is None else stations)


def at(hour: int, minute: int = 0, second: int = 0, *, day: int = 1) -> datetime:
    return datetime(2025, 3, day, hour, minute, second)


def scan(
    event_id: str,
    item_id: str,
    station_id: str,
    employee_id: str,
    start: datetime,
    end: Optional[datetime] = None,
    *,
    duration=None,
    is_product: bool = True,
    note: Optional[str] = None,
) -> RawScanEvent:
    """Raw row as storage would return it; duration defaults to end - start."""
    if duration is None and end is not None:
        duration = int((end - start).total_seconds())
    return RawScanEvent(
        event_id=event_id,
        item_id=item_id,
        station_id=station_id,
        employee_id=employee_id,
        start_time=start,
        end_time=end,
        duration_seconds=duration,
        note=note,
        item_is_product=is_product,
    )


def event(
    event_id: str,
    item_id: str,
    station_id: str,
    employee_id: str,
    start: datetime,
    end: Optional[datetime] = None,
) -> ScanEvent:
    return ScanEvent(
        event_id=event_id,
        item_id=item_id,
        station_id=station_id,
        employee_id=employee_id,
        start_time=start,
        end_time=end,
        duration_seconds=int((end - start).total_seconds()) if end else None,
    )


@dataclass
class InMemoryStations:
    stations: list[Station] = field(default_factory=lambda: list(STATIONS))

    def list_all(self) -> Sequence[Station]:
        return list(self.stations)

    def get_by_id(self, station_id: str) -> Optional[Station]:
        return next((s for s in self.stations if s.station_id == station_id), None)

    def get_by_name(self, name: str) -> Optional[Station]:
        return next((s for s in self.stations if s.name == name), None)


@dataclass
class InMemoryEmployees:
    employees: dict[str, Employee] = field(default_factory=dict)

    @classmethod
    def of(cls, *employees: Employee) -> "InMemoryEmployees":
        return cls({e.employee_id: e for e in employees})

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self.employees.get(employee_id)

    def get_many(self, employee_ids: Iterable[str]) -> dict[str, Employee]:
        return {i: self.employees[i] for i in set(employee_ids) if i in self.employees}


@dataclass
class InMemoryItems:
    items: dict[str, ProductionItem] = field(default_factory=dict)

    @classmethod
    def of(cls, *items: ProductionItem) -> "InMemoryItems":
        return cls({i.item_id: i for i in items})

    def get_by_id(self, item_id: str) -> Optional[ProductionItem]:
        return self.items.get(item_id)

    def get_many(self, item_ids: Iterable[str]) -> dict[str, ProductionItem]:
        return {i: self.items[i] for i in set(item_ids) if i in self.items}

    def find_candidate_items(self, *, statuses: Sequence[ItemStatus], item_filter: ItemFilter):
        out = []
        for item in self.items.values():
            if item.status not in statuses:
                continue
            if item_filter.status is not None and item.status != item_filter.status:
                continue
            created = item.order_created_at
            if item_filter.date_from and (created is None or created < item_filter.date_from):
                continue
            if item_filter.date_to and (created is None or created > item_filter.date_to):
                continue
            out.append(item)
        return out


class InMemoryEventStore:
    def __init__(self, events: Iterable[RawScanEvent] = (), *, delay_seconds: float = 0.0):
        self.events: list[RawScanEvent] = list(events)
        self.delay_seconds = delay_seconds
        self.fetch_calls: list[EventFilter] = []
        self._lock = threading.Lock()

    def fetch_events(self, event_filter: EventFilter) -> Sequence[RawScanEvent]:
        self.fetch_calls.append(event_filter)
        if self.delay_seconds:
            _time.sleep(self.delay_seconds)
        out = []
        for e in self.events:
            start = e.start_time
            if event_filter.date_from and start < event_filter.date_from:
                continue
            if event_filter.date_to and start > event_filter.date_to:
                continue
            if event_filter.station_id and e.station_id != event_filter.station_id:
                continue
            if event_filter.employee_id and e.employee_id != event_filter.employee_id:
                continue
            out.append(e)
        return out

    def fetch_events_for_items(self, item_ids: Iterable[str]) -> Sequence[RawScanEvent]:
        wanted = set(item_ids)
        return [e for e in self.events if e.item_id in wanted]

    def insert_event_if_absent(self, event: ScanEvent) -> Optional[ScanEvent]:
        with self._lock:
            if any(e.item_id == event.item_id and e.station_id == event.station_id for e in self.events):
                return None
            self.events.append(
                RawScanEvent(
                    event_id=event.event_id,
                    item_id=event.item_id,
                    station_id=event.station_id,
                    employee_id=event.employee_id,
                    start_time=event.start_time,
                    end_time=event.end_time,
                    duration_seconds=event.duration_seconds,
                    note=event.note,
                    item_is_product=True,
                )
            )
            return event
