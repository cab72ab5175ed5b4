from __future__ import annotations

from datetime import timedelta

import pytest

from src.station_attribution.station_attribution.attribution.pipeline import AttributionPipeline
from src.station_attribution.station_attribution.attribution.policies.workflow_gated import WorkflowGatedPolicy
from src.station_attribution.station_attribution.common.cache import ReportCache
from src.station_attribution.station_attribution.core.enums import ItemStatus, ReportStatus
from src.station_attribution.station_attribution.core.exceptions import QueryTimeout
from src.station_attribution.station_attribution.core.settings import EngineSettings
from src.station_attribution.station_attribution.employees.model import Employee
from src.station_attribution.station_attribution.events.model import EventFilter
from src.station_attribution.station_attribution.items.model import ProductionItem
from src.station_attribution.station_attribution.metrics.service import (
    NO_CREDITS_MESSAGE,
    NO_EVENTS_MESSAGE,
    ProductivityService,
)

from tests.fakes import (
    CUTTING,
    FOAM,
    OFFICE,
    SEWING,
    InMemoryEmployees,
    InMemoryEventStore,
    InMemoryItems,
    InMemoryStations,
    at,
    scan,
)

DAY = EventFilter(date_from=at(0), date_to=at(23, 59, 59))


def _service(events, *, cache=None, settings=None):
    store = InMemoryEventStore(events)
    pipeline = AttributionPipeline(
        store,
        InMemoryStations(),
        policy=WorkflowGatedPolicy(),
        settings=settings or EngineSettings(),
    )
    employees = InMemoryEmployees.of(
        Employee(employee_id="A", name="Alice"),
        Employee(employee_id="B", name="Bao"),
        Employee(employee_id="C", name="Chen"),
    )
    items = InMemoryItems.of(
        ProductionItem(item_id="i1", status=ItemStatus.FOAM_CUTTING, product_number="P-1", order_number="SO-1"),
        ProductionItem(item_id="i2", status=ItemStatus.SEWING, product_number="P-2", order_number="SO-2"),
    )
    return ProductivityService(pipeline, employees, items, cache=cache), store


def _scenario():
    return [
        scan("e1", "i1", CUTTING, "A", at(9), at(9, 10)),
        scan("e2", "i1", SEWING, "B", at(9, 10), at(9, 12)),
        scan("e3", "i1", FOAM, "C", at(9, 12), at(9, 20)),
    ]


def test_no_events_reports_no_data():
    service, _ = _service([])

    report = service.compute_productivity(DAY)

    assert report.status == ReportStatus.NO_DATA
    assert report.message == NO_EVENTS_MESSAGE
    assert report.rows == []
    assert report.data_quality.score == 0


def test_report_rows_carry_names_and_forwarded_time():
    service, _ = _service(_scenario())

    report = service.compute_productivity(DAY)

    assert report.status == ReportStatus.OK
    rows = {r.employee_id: r for r in report.rows}
    assert rows["B"].employee_name == "Bao"
    assert rows["B"].station_name == "Sewing"
    assert rows["B"].total_duration_seconds == 600
    assert rows["C"].total_duration_seconds == 120
    assert rows["A"].total_duration_seconds == 0
    assert report.summary.unique_items == 1
    assert report.policy == "workflow_gated"
    assert report.to_dict()["status"] == "OK"


def test_station_filter_keeps_time_forwarded_from_other_stations():
    service, _ = _service(_scenario())

    report = service.compute_productivity(EventFilter(date_from=DAY.date_from, date_to=DAY.date_to, station_id=SEWING))

    assert [(r.employee_id, r.total_duration_seconds) for r in report.rows] == [("B", 600)]


def test_filters_matching_nothing_report_no_data():
    service, _ = _service(_scenario())

    report = service.compute_productivity(EventFilter(date_from=DAY.date_from, date_to=DAY.date_to, employee_id="Z"))

    assert report.status == ReportStatus.NO_DATA
    assert report.message == NO_CREDITS_MESSAGE


def test_office_scans_before_the_window_still_forward_time():
    events = [
        scan("o1", "i1", OFFICE, "X", at(8, day=1), at(8, 30, day=1)),
        scan("e1", "i1", CUTTING, "A", at(9, day=2), at(9, 10, day=2)),
        scan("e2", "i1", SEWING, "B", at(9, 10, day=2), at(9, 12, day=2)),
    ]
    service, store = _service(events, settings=EngineSettings(office_window_days=7))
    window = EventFilter(date_from=at(0, day=2), date_to=at(23, day=2))

    report = service.compute_productivity(window)

    rows = {r.employee_id: r for r in report.rows}
    assert rows["A"].total_duration_seconds == 1800
    assert "X" not in rows
    office_fetch = store.fetch_calls[-1]
    assert office_fetch.station_id == OFFICE
    assert office_fetch.date_from == window.date_from - timedelta(days=7)


def test_cached_report_is_reused_until_invalidated():
    cache = ReportCache(ttl_seconds=60, max_entries=8)
    service, store = _service(_scenario(), cache=cache)

    first = service.compute_productivity(DAY)
    calls = len(store.fetch_calls)
    second = service.compute_productivity(DAY)

    assert second is first
    assert len(store.fetch_calls) == calls
    assert cache.hits == 1

    cache.set("stations:all", ["kept"])
    service.invalidate_cache()
    third = service.compute_productivity(DAY)
    assert third is not first
    assert len(store.fetch_calls) > calls
    assert cache.get("stations:all") == ["kept"]


def test_slow_event_store_raises_retryable_timeout():
    service, store = _service(_scenario(), settings=EngineSettings(query_timeout_seconds=0.05))
    store.delay_seconds = 0.5

    with pytest.raises(QueryTimeout) as exc:
        service.compute_productivity(DAY)

    assert exc.value.retryable is True


def test_employee_drill_down_matches_report_rows():
    events = _scenario() + [
        scan("e4", "i2", CUTTING, "A", at(10), at(10, 5)),
        scan("e5", "i2", SEWING, "B", at(10, 5)),
    ]
    service, _ = _service(events)

    page = service.compute_items_for_employee("B", DAY, page=1, limit=1)

    assert page.status == ReportStatus.OK
    assert page.total_count == 2
    assert page.total_pages == 2
    assert page.total_credited_seconds == 600 + 300
    # Newest activity first: the open i2 scan started at 10:05.
    row = page.rows[0]
    assert row.item_id == "i2"
    assert row.finished_at is None
    assert row.credited_duration_seconds == 300
    d = page.to_dict()
    assert d["pagination"]["has_next_page"] is True
    assert d["data"][0]["credited_duration"] == "5m"


def test_employee_drill_down_without_credits_is_no_data():
    service, _ = _service(_scenario())

    page = service.compute_items_for_employee("Z", DAY)

    assert page.status == ReportStatus.NO_DATA
    assert page.rows == []
