from __future__ import annotations

from typing import Iterable

from ..events.model import ScanEvent
from .model import ItemTimeline


def build_timelines(events: Iterable[ScanEvent]) -> list[ItemTimeline]:
    """Group events per item and order each group by start time.

    Events carry no sequence number, so start time is the best available
    ordering; ties keep their input order.
    """
    grouped: dict[str, list[ScanEvent]] = {}
    for e in events:
        grouped.setdefault(e.item_id, []).append(e)

    return [
        ItemTimeline(item_id=item_id, events=tuple(sorted(group, key=lambda e: e.start_time)))
        for item_id, group in grouped.items()
    ]
