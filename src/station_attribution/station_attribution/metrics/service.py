from __future__ import annotations

import logging
from typing import Optional

from ..attribution.model import AttributionCredit
from ..attribution.pipeline import AttributionPipeline, AttributionRun
from ..common.cache import ReportCache, filter_cache_key
from ..core.constants import DEFAULT_PAGE_LIMIT
from ..core.enums import ReportStatus
from ..common.validators import require_non_empty
from ..employees.repository import EmployeeRepository
from ..events.model import EventFilter
from ..events.quality import assess_data_quality
from ..items.repository import ItemRepository
from .aggregator import aggregate_credits, summarize
from .model import EmployeeItemRow, EmployeeItemsPage, EmployeeStationMetric, ProductivityReport

logger = logging.getLogger(__name__)

NO_EVENTS_MESSAGE = "No scan events found for the selected date range and filters"
NO_CREDITS_MESSAGE = "No completed station work matches the selected station/employee filters"


def _filter_credits(credits: list[AttributionCredit], event_filter: EventFilter) -> list[AttributionCredit]:
    return [
        c
        for c in credits
        if (event_filter.station_id is None or c.station_id == event_filter.station_id)
        and (event_filter.employee_id is None or c.employee_id == event_filter.employee_id)
    ]


class ProductivityService:
    """Report-layer entry point for productivity metrics and drill-downs."""

    def __init__(
        self,
        pipeline: AttributionPipeline,
        employees: EmployeeRepository,
        items: ItemRepository,
        *,
        cache: Optional[ReportCache] = None,
    ):
        self._pipeline = pipeline
        self._employees = employees
        self._items = items
        self._cache = cache

    def compute_productivity(self, event_filter: EventFilter) -> ProductivityReport:
        key = filter_cache_key("productivity", {**event_filter.as_params(), "policy": self._pipeline.policy.name})
        if self._cache is not None:
            cached = self._cache.get(key)
            if cached is not None:
                return cached

        report = self._build_report(event_filter)
        if self._cache is not None:
            self._cache.set(key, report)
        return report

    def _build_report(self, event_filter: EventFilter) -> ProductivityReport:
        run = self._pipeline.run(event_filter)
        warnings = run.normalized.warnings + run.result.warnings
        quality = assess_data_quality(run.normalized, suppressed_transitions=run.result.suppressed_transitions)
        policy = self._pipeline.policy.name

        if run.normalized.is_empty:
            return ProductivityReport(
                status=ReportStatus.NO_DATA,
                warnings=warnings,
                data_quality=quality,
                message=NO_EVENTS_MESSAGE,
                policy=policy,
            )

        credits = _filter_credits(run.result.credits, event_filter)
        if not credits:
            return ProductivityReport(
                status=ReportStatus.NO_DATA,
                warnings=warnings,
                data_quality=quality,
                message=NO_CREDITS_MESSAGE,
                policy=policy,
            )

        rows = self._with_names(aggregate_credits(credits), run)
        summary = summarize(rows, credits)
        logger.info(
            f"Productivity report: {len(rows)} rows, {summary.employee_count} employees, "
            f"{summary.total_items} items, {len(warnings)} warnings"
        )
        return ProductivityReport(
            status=ReportStatus.OK,
            rows=rows,
            summary=summary,
            warnings=warnings,
            data_quality=quality,
            policy=policy,
        )

    def _with_names(self, rows: list[EmployeeStationMetric], run: AttributionRun) -> list[EmployeeStationMetric]:
        employees = self._employees.get_many(r.employee_id for r in rows)
        out = []
        for r in rows:
            emp = employees.get(r.employee_id)
            station = run.catalog.get(r.station_id)
            out.append(
                EmployeeStationMetric(
                    employee_id=r.employee_id,
                    station_id=r.station_id,
                    items_processed=r.items_processed,
                    total_duration_seconds=r.total_duration_seconds,
                    avg_duration_seconds=r.avg_duration_seconds,
                    efficiency_items_per_hour=r.efficiency_items_per_hour,
                    employee_name=emp.name if emp else None,
                    station_name=station.name if station else None,
                )
            )
        return out

    def compute_items_for_employee(
        self,
        employee_id: str,
        event_filter: EventFilter,
        *,
        page: int = 1,
        limit: int = DEFAULT_PAGE_LIMIT,
    ) -> EmployeeItemsPage:
        """Items credited to one employee, consistent with the productivity rows."""
        employee_id = require_non_empty(employee_id, "employee_id")
        scoped = EventFilter(
            date_from=event_filter.date_from,
            date_to=event_filter.date_to,
            station_id=event_filter.station_id,
            employee_id=employee_id,
        )
        run = self._pipeline.run(scoped)
        employee = self._employees.get_by_id(employee_id)
        credits = _filter_credits(run.result.credits, scoped)

        if not credits:
            return EmployeeItemsPage(
                status=ReportStatus.NO_DATA,
                employee_id=employee_id,
                employee_name=employee.name if employee else None,
                page=1,
                limit=limit,
                message="No processed items found for this employee in the selected range",
                warnings=run.normalized.warnings,
            )

        own_events: dict[tuple[str, str], list] = {}
        for e in run.normalized.valid:
            if e.employee_id == employee_id:
                own_events.setdefault((e.item_id, e.station_id), []).append(e)

        items = self._items.get_many(c.item_id for c in credits)
        rows = []
        for c in credits:
            events = own_events.get((c.item_id, c.station_id), [])
            started_at = min(e.start_time for e in events)
            finished_at = None if any(e.is_open for e in events) else max(e.end_time for e in events)
            item = items.get(c.item_id)
            station = run.catalog.get(c.station_id)
            rows.append(
                EmployeeItemRow(
                    item_id=c.item_id,
                    station_id=c.station_id,
                    station_name=station.name if station else "Unknown Station",
                    started_at=started_at,
                    finished_at=finished_at,
                    credited_duration_seconds=c.credited_duration_seconds,
                    product_number=item.product_number if item else None,
                    item_name=item.item_name if item else None,
                    order_number=item.order_number if item else None,
                    customer_name=item.customer_name if item else None,
                    item_status=item.status.value if item else None,
                )
            )

        rows.sort(key=lambda r: r.finished_at or r.started_at, reverse=True)
        offset = (page - 1) * limit
        return EmployeeItemsPage(
            status=ReportStatus.OK,
            employee_id=employee_id,
            employee_name=employee.name if employee else None,
            rows=rows[offset : offset + limit],
            page=page,
            limit=limit,
            total_count=len(rows),
            total_credited_seconds=sum(r.credited_duration_seconds for r in rows),
            warnings=run.normalized.warnings,
        )

    def invalidate_cache(self) -> None:
        if self._cache is not None:
            dropped = self._cache.invalidate_prefix("productivity:")
            logger.debug(f"Dropped {dropped} cached productivity reports")
