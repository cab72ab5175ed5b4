from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_duration
from ..core.enums import ReportStatus
from ..events.quality import DataQuality


@dataclass(frozen=True)
class EmployeeStationMetric:
    """Read-model: productivity of one employee at one station."""

    employee_id: str
    station_id: str
    items_processed: int
    total_duration_seconds: int
    avg_duration_seconds: float
    efficiency_items_per_hour: float
    employee_name: Optional[str] = None
    station_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "employee_name": self.employee_name or "Unknown Employee",
            "station_id": self.station_id,
            "station_name": self.station_name or "Unknown Station",
            "items_processed": self.items_processed,
            "total_duration_seconds": self.total_duration_seconds,
            "total_duration": format_duration(self.total_duration_seconds),
            "avg_duration_seconds": round(self.avg_duration_seconds, 2),
            "efficiency_items_per_hour": round(self.efficiency_items_per_hour, 2),
        }


@dataclass(frozen=True)
class ProductivitySummary:
    employee_count: int = 0
    total_items: int = 0
    unique_items: int = 0
    total_duration_seconds: int = 0

    def to_dict(self) -> dict:
        return {
            "employee_count": self.employee_count,
            "total_items": self.total_items,
            "unique_items": self.unique_items,
            "total_duration_seconds": self.total_duration_seconds,
            "total_duration": format_duration(self.total_duration_seconds),
        }


@dataclass(frozen=True)
class ProductivityReport:
    status: ReportStatus
    rows: list[EmployeeStationMetric] = field(default_factory=list)
    summary: ProductivitySummary = field(default_factory=ProductivitySummary)
    warnings: list[str] = field(default_factory=list)
    data_quality: Optional[DataQuality] = None
    message: Optional[str] = None
    policy: Optional[str] = None

    @property
    def has_data(self) -> bool:
        return self.status == ReportStatus.OK

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "message": self.message,
            "rows": [r.to_dict() for r in self.rows],
            "summary": self.summary.to_dict(),
            "warnings": list(self.warnings),
            "data_quality": self.data_quality.to_dict() if self.data_quality else None,
            "policy": self.policy,
        }


@dataclass(frozen=True)
class EmployeeItemRow:
    """One credited item/station for an employee (drill-down)."""

    item_id: str
    station_id: str
    station_name: str
    started_at: datetime
    finished_at: Optional[datetime]
    credited_duration_seconds: int
    product_number: Optional[str] = None
    item_name: Optional[str] = None
    order_number: Optional[str] = None
    customer_name: Optional[str] = None
    item_status: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "item_id": self.item_id,
            "station_id": self.station_id,
            "station_name": self.station_name,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "credited_duration_seconds": self.credited_duration_seconds,
            "credited_duration": format_duration(self.credited_duration_seconds),
            "product_number": self.product_number,
            "item_name": self.item_name or "Unknown Item",
            "order_number": self.order_number,
            "customer_name": self.customer_name or "Unknown Customer",
            "item_status": self.item_status,
        }


@dataclass(frozen=True)
class EmployeeItemsPage:
    status: ReportStatus
    employee_id: str
    rows: list[EmployeeItemRow] = field(default_factory=list)
    page: int = 1
    limit: int = 50
    total_count: int = 0
    total_credited_seconds: int = 0
    employee_name: Optional[str] = None
    message: Optional[str] = None
    warnings: list[str] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return (self.total_count + self.limit - 1) // self.limit if self.limit else 0

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "message": self.message,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "data": [r.to_dict() for r in self.rows],
            "pagination": {
                "page": self.page,
                "limit": self.limit,
                "total_count": self.total_count,
                "total_pages": self.total_pages,
                "has_next_page": self.page < self.total_pages,
                "has_previous_page": self.page > 1,
            },
            "summary": {
                "total_items": self.total_count,
                "total_credited_seconds": self.total_credited_seconds,
                "total_credited": format_duration(self.total_credited_seconds),
            },
            "warnings": list(self.warnings),
        }
