from __future__ import annotations

from src.station_attribution.station_attribution.attribution.timeline import build_timelines

from tests.fakes import CUTTING, SEWING, at, event


def test_events_are_grouped_per_item_and_sorted_by_start():
    timelines = build_timelines(
        [
            event("e2", "i1", SEWING, "B", at(9, 10), at(9, 12)),
            event("e3", "i2", CUTTING, "A", at(8), at(8, 5)),
            event("e1", "i1", CUTTING, "A", at(9), at(9, 10)),
        ]
    )

    by_item = {t.item_id: t for t in timelines}
    assert [e.event_id for e in by_item["i1"].events] == ["e1", "e2"]
    assert by_item["i1"].latest.event_id == "e2"
    assert by_item["i2"].has_station(CUTTING)
    assert not by_item["i2"].has_station(SEWING)


def test_equal_start_times_keep_input_order():
    timelines = build_timelines(
        [
            event("first", "i1", CUTTING, "A", at(9), at(9, 1)),
            event("second", "i1", SEWING, "B", at(9), at(9, 2)),
        ]
    )

    assert [e.event_id for e in timelines[0].events] == ["first", "second"]
