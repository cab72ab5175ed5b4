from __future__ import annotations

import pytest

from src.station_attribution.station_attribution.attribution.model import AttributionCredit
from src.station_attribution.station_attribution.metrics.aggregator import aggregate_credits, summarize


def _credit(emp, station, item, seconds=0):
    return AttributionCredit(employee_id=emp, station_id=station, item_id=item, credited_duration_seconds=seconds)


def test_rows_count_distinct_items_and_sum_time():
    credits = [
        _credit("B", "sew", "i1", 600),
        _credit("B", "sew", "i2", 1200),
        _credit("A", "cut", "i1", 0),
    ]

    rows = aggregate_credits(credits)

    b = next(r for r in rows if r.employee_id == "B")
    assert b.items_processed == 2
    assert b.total_duration_seconds == 1800
    assert b.avg_duration_seconds == 900
    assert b.efficiency_items_per_hour == pytest.approx(4.0)

    a = next(r for r in rows if r.employee_id == "A")
    assert a.efficiency_items_per_hour == 0
    assert a.avg_duration_seconds == 0


def test_rows_sorted_by_items_then_efficiency():
    credits = [
        _credit("slow", "sew", "i1", 3600),
        _credit("fast", "sew", "i2", 600),
        _credit("busy", "cut", "i3", 600),
        _credit("busy", "cut", "i4", 600),
    ]

    rows = aggregate_credits(credits)

    assert [r.employee_id for r in rows] == ["busy", "fast", "slow"]


def test_summary_counts_unique_items_across_stations():
    credits = [_credit("A", "cut", "i1"), _credit("B", "sew", "i1", 60), _credit("B", "sew", "i2", 60)]
    rows = aggregate_credits(credits)

    summary = summarize(rows, credits)

    assert summary.employee_count == 2
    assert summary.total_items == 3
    assert summary.unique_items == 2
    assert summary.total_duration_seconds == 120


def test_metric_dict_rounds_to_two_decimals():
    rows = aggregate_credits([_credit("A", "cut", "i1", 7)])

    d = rows[0].to_dict()

    assert d["efficiency_items_per_hour"] == round(3600 / 7, 2)
