from __future__ import annotations

from src.station_attribution.station_attribution.attribution.engine import AttributionEngine
from src.station_attribution.station_attribution.attribution.policies.scan_gap import ScanGapPolicy
from src.station_attribution.station_attribution.attribution.policies.unconditional_forward import (
    UnconditionalForwardPolicy,
)
from src.station_attribution.station_attribution.attribution.timeline import build_timelines

from tests.fakes import CUTTING, FOAM, OFFICE, PACKAGING, SEWING, STUFFING, at, catalog, event


def _credits(events, policy=None):
    result = AttributionEngine(catalog(), policy).attribute(build_timelines(events))
    return {(c.employee_id, c.station_id): c.credited_duration_seconds for c in result.credits}, result


def _three_station_item():
    return [
        event("e1", "i1", CUTTING, "A", at(9), at(9, 10)),
        event("e2", "i1", SEWING, "B", at(9, 10), at(9, 12)),
        event("e3", "i1", FOAM, "C", at(9, 12), at(9, 20)),
    ]


def test_time_is_credited_forward_to_the_next_scanner():
    credits, result = _credits(_three_station_item())

    assert credits == {("A", CUTTING): 0, ("B", SEWING): 600, ("C", FOAM): 120}
    assert result.warnings == []


def test_duplicate_scan_at_same_station_counts_item_once():
    events = _three_station_item() + [event("e2b", "i1", SEWING, "B", at(9, 11), at(9, 13))]

    credits, result = _credits(events)

    sewing = [c for c in result.credits if c.station_id == SEWING]
    assert len(sewing) == 1
    assert credits[("B", SEWING)] == 600
    assert credits[("C", FOAM)] == 120
    assert result.suppressed_transitions == 1
    assert "repeated station" in result.warnings[0]


def test_single_event_item_gets_count_but_no_time():
    credits, result = _credits([event("e1", "i1", CUTTING, "A", at(9), at(9, 10))])

    assert credits == {("A", CUTTING): 0}
    assert result.timelines == 1


def test_backward_transition_is_not_credited():
    credits, result = _credits(
        [
            event("e1", "i1", SEWING, "B", at(9), at(9, 10)),
            event("e2", "i1", CUTTING, "A", at(9, 10), at(9, 20)),
        ]
    )

    assert credits == {("B", SEWING): 0, ("A", CUTTING): 0}
    assert result.suppressed_transitions == 1
    assert "non-forward transition" in result.warnings[0]


def test_office_forwards_its_own_time_and_never_earns_credit():
    credits, result = _credits(
        [
            event("o1", "i1", OFFICE, "X", at(8), at(8, 30)),
            event("e1", "i1", CUTTING, "A", at(9), at(9, 10)),
            event("o2", "i1", OFFICE, "X", at(9, 10), at(9, 15)),
            event("e2", "i1", SEWING, "B", at(9, 15), at(9, 20)),
        ]
    )

    assert ("X", OFFICE) not in credits
    # Intake Office time reaches the first scanner; Cutting's time stops at Office.
    assert credits == {("A", CUTTING): 1800, ("B", SEWING): 300}
    assert result.office_absorbed_seconds == 600
    assert result.warnings == []


def test_scan_handed_to_office_forwards_nothing():
    credits, result = _credits(
        [
            event("e1", "i1", CUTTING, "A", at(9), at(9, 10)),
            event("o1", "i1", OFFICE, "X", at(9, 10), at(9, 15)),
            event("e2", "i1", SEWING, "B", at(9, 15)),
        ]
    )

    assert credits == {("A", CUTTING): 0, ("B", SEWING): 300}
    assert result.office_absorbed_seconds == 600


def test_office_after_office_passes_on_to_next_scanner():
    credits, _ = _credits(
        [
            event("e1", "i1", CUTTING, "A", at(9), at(9, 10)),
            event("o1", "i1", OFFICE, "X", at(9, 10), at(9, 15)),
            event("o2", "i1", OFFICE, "Y", at(9, 15), at(9, 17)),
            event("e2", "i1", SEWING, "B", at(9, 17)),
        ]
    )

    assert credits == {("A", CUTTING): 0, ("B", SEWING): 300 + 120}


def test_open_event_counts_the_item_but_forwards_nothing():
    credits, _ = _credits(
        [
            event("e1", "i1", CUTTING, "A", at(9)),
            event("e2", "i1", SEWING, "B", at(9, 10), at(9, 12)),
        ]
    )

    assert credits == {("A", CUTTING): 0, ("B", SEWING): 0}


def test_credited_time_never_exceeds_recorded_durations():
    events = [
        event("e1", "i1", CUTTING, "A", at(9), at(9, 10)),
        event("e2", "i1", SEWING, "B", at(9, 10), at(9, 40)),
        event("e3", "i1", STUFFING, "C", at(9, 40), at(10)),
        event("e4", "i1", PACKAGING, "D", at(10), at(10, 5)),
        event("e5", "i2", CUTTING, "A", at(11), at(11, 3)),
    ]

    credits, _ = _credits(events)

    assert sum(credits.values()) <= sum(e.duration_seconds for e in events)
    assert credits[("D", PACKAGING)] == 1200


def test_unconditional_policy_forwards_backward_moves():
    credits, result = _credits(
        [
            event("e1", "i1", SEWING, "B", at(9), at(9, 10)),
            event("e2", "i1", CUTTING, "A", at(9, 10), at(9, 20)),
        ],
        UnconditionalForwardPolicy(),
    )

    assert credits[("A", CUTTING)] == 600
    assert result.warnings == []


def test_scan_gap_policy_credits_start_to_start_gap():
    credits, _ = _credits(
        [
            event("e1", "i1", CUTTING, "A", at(9), at(9, 10)),
            event("e2", "i1", SEWING, "B", at(9, 45), at(9, 50)),
        ],
        ScanGapPolicy(),
    )

    assert credits[("B", SEWING)] == 45 * 60
