from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..items.model import ProductionItem


@dataclass(frozen=True)
class TimelineEntry:
    event_id: str
    station_id: str
    station_name: str
    employee_id: str
    employee_name: str
    start_time: datetime
    end_time: Optional[datetime] = None
    manual: bool = False

    def to_dict(self) -> dict:
        return {
            "event_id": self.event_id,
            "station_name": self.station_name,
            "employee_name": self.employee_name,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "manual": self.manual,
        }


@dataclass(frozen=True)
class MissingAttributionItem:
    """Read-model for operator review of an item with no scan at the target station."""

    item: ProductionItem
    target_station_name: str
    current_station_name: str = "Unknown"
    current_employee_name: str = "Unknown"
    last_processed_at: Optional[datetime] = None
    events: list[TimelineEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        item = self.item
        return {
            "item_id": item.item_id,
            "product_number": item.product_number,
            "item_name": item.item_name or "Unknown Item",
            "item_status": item.status.value,
            "order_id": item.order_id,
            "order_number": item.order_number,
            "order_created_at": item.order_created_at.isoformat() if item.order_created_at else None,
            "customer_name": item.customer_name or "Unknown Customer",
            "target_station": self.target_station_name,
            "current_station": self.current_station_name,
            "current_employee": self.current_employee_name,
            "last_processed_at": self.last_processed_at.isoformat() if self.last_processed_at else None,
            "events": [e.to_dict() for e in self.events],
        }


@dataclass(frozen=True)
class SynthesisWindow:
    start: datetime
    end: datetime
    anchored_on_preceding: bool = False
    clamped: bool = False

    @property
    def duration_seconds(self) -> int:
        return int((self.end - self.start).total_seconds())
