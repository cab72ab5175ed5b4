from __future__ import annotations

from typing import Iterable, Sequence

from ..attribution.model import AttributionCredit
from .model import EmployeeStationMetric, ProductivitySummary


def aggregate_credits(credits: Iterable[AttributionCredit]) -> list[EmployeeStationMetric]:
    """Reduce per-item credits to one metric row per (employee, station).

    Item count is the number of distinct items, so repeated scans of the same
    item by the same employee at the same station count once.
    """
    items: dict[tuple[str, str], set[str]] = {}
    seconds: dict[tuple[str, str], int] = {}
    for c in credits:
        key = (c.employee_id, c.station_id)
        items.setdefault(key, set()).add(c.item_id)
        seconds[key] = seconds.get(key, 0) + int(c.credited_duration_seconds)

    rows = []
    for key, item_ids in items.items():
        n = len(item_ids)
        total = seconds[key]
        rows.append(
            EmployeeStationMetric(
                employee_id=key[0],
                station_id=key[1],
                items_processed=n,
                total_duration_seconds=total,
                avg_duration_seconds=total / n if n else 0.0,
                efficiency_items_per_hour=n * 3600 / total if total else 0.0,
            )
        )
    return sort_metrics(rows)


def sort_metrics(rows: Iterable[EmployeeStationMetric]) -> list[EmployeeStationMetric]:
    return sorted(
        rows,
        key=lambda r: (-r.items_processed, -r.efficiency_items_per_hour, r.employee_id, r.station_id),
    )


def summarize(rows: Sequence[EmployeeStationMetric], credits: Iterable[AttributionCredit]) -> ProductivitySummary:
    return ProductivitySummary(
        employee_count=len({r.employee_id for r in rows}),
        total_items=sum(r.items_processed for r in rows),
        unique_items=len({c.item_id for c in credits}),
        total_duration_seconds=sum(r.total_duration_seconds for r in rows),
    )
