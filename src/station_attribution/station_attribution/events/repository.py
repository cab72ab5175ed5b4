from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import EventFilter, RawScanEvent, ScanEvent


class EventStore(Protocol):
    """Read/write boundary to the processing-log storage.

    The engine only reads; the single write is the guarded backfill insert.
    """

    def fetch_events(self, event_filter: EventFilter) -> Sequence[RawScanEvent]:
        raise NotImplementedError

    def fetch_events_for_items(self, item_ids: Iterable[str]) -> Sequence[RawScanEvent]:
        raise NotImplementedError

    def insert_event_if_absent(self, event: ScanEvent) -> Optional[ScanEvent]:
        """Insert ``event`` unless the item already has an event at its station.

        The check and the insert must be one atomic unit. Returns the stored
        event, or None when an event for that item/station already exists;
        raises ItemNotFound when the item itself is gone.
        """

        raise NotImplementedError
