from __future__ import annotations

from datetime import datetime, timedelta

from src.station_attribution.station_attribution.backfill.synthesizer import BackfillSynthesizer
from src.station_attribution.station_attribution.core.enums import WorkflowStage

from tests.fakes import CUTTING, FOAM, OFFICE, PACKAGING, SEWING, at, catalog, event

NOW = at(12, day=10)


def _plan(events, target=WorkflowStage.SEWING, now=NOW):
    synthesizer = BackfillSynthesizer(catalog(), staleness_days=30, fallback_offset_hours=2)
    return synthesizer.plan(events, target, now=now)


def test_window_sits_between_neighbouring_stations():
    window = _plan(
        [
            event("c", "i1", CUTTING, "A", at(9, day=10), at(9, 10, day=10)),
            event("f", "i1", FOAM, "C", at(9, 30, day=10), at(9, 40, day=10)),
        ]
    )

    assert window.start == at(9, 10, day=10)
    assert window.end == at(9, 30, day=10)
    assert window.duration_seconds == 1200
    assert window.anchored_on_preceding
    assert not window.clamped


def test_stale_upstream_scan_falls_back_to_recent_time():
    window = _plan([event("c", "i1", CUTTING, "A", datetime(2025, 1, 1, 9), datetime(2025, 1, 1, 9, 10))])

    assert not window.anchored_on_preceding
    assert window.start == NOW - timedelta(hours=2)
    assert window.end == window.start + timedelta(seconds=1)


def test_out_of_order_neighbours_still_give_positive_window():
    window = _plan(
        [
            event("c", "i1", CUTTING, "A", at(9, day=10), at(9, 50, day=10)),
            event("p", "i1", PACKAGING, "D", at(9, 20, day=10), at(9, 30, day=10)),
        ]
    )

    assert window.start == at(9, 50, day=10)
    assert window.end > window.start
    assert window.duration_seconds == 1


def test_long_gap_is_clamped_to_one_day():
    window = _plan(
        [
            event("c", "i1", CUTTING, "A", at(9, day=5), at(9, 10, day=5)),
            event("f", "i1", FOAM, "C", at(9, day=8), at(9, 10, day=8)),
        ]
    )

    assert window.clamped
    assert window.duration_seconds == 24 * 60 * 60


def test_nearest_upstream_stage_wins_and_office_is_ignored():
    window = _plan(
        [
            event("c", "i1", CUTTING, "A", at(9, day=10), at(9, 10, day=10)),
            event("s", "i1", SEWING, "B", at(9, 10, day=10), at(9, 40, day=10)),
            event("o", "i1", OFFICE, "X", at(9, 40, day=10), at(10, 30, day=10)),
        ],
        target=WorkflowStage.FOAM_CUTTING,
    )

    assert window.start == at(9, 40, day=10)
    assert window.duration_seconds == 1
