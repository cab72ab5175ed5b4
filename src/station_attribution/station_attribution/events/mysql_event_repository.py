from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.exceptions import ItemNotFound
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import EventFilter, RawScanEvent, ScanEvent
from .repository import EventStore

_EVENT_SELECT = """
    SELECT
        l.event_id, l.item_id, l.station_id, l.employee_id,
        l.start_time, l.end_time, l.duration_seconds, l.note,
        oi.is_product
    FROM item_processing_logs l
    JOIN order_items oi ON oi.item_id = l.item_id
"""


class MySQLEventStore(EventStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_events(self, event_filter: EventFilter) -> Sequence[RawScanEvent]:
        clauses = ["oi.is_product = 1"]
        params: list[object] = []

        if event_filter.date_from is not None:
            clauses.append("l.start_time >= %s")
            params.append(event_filter.date_from)
        if event_filter.date_to is not None:
            clauses.append("l.start_time <= %s")
            params.append(event_filter.date_to)
        if event_filter.station_id is not None:
            clauses.append("l.station_id=%s")
            params.append(event_filter.station_id)
        if event_filter.employee_id is not None:
            clauses.append("l.employee_id=%s")
            params.append(event_filter.employee_id)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_EVENT_SELECT} WHERE {where} ORDER BY l.start_time ASC", tuple(params))
            return [RawScanEvent.from_row(r) for r in fetchall(cur)]

    def fetch_events_for_items(self, item_ids: Iterable[str]) -> Sequence[RawScanEvent]:
        ids = sorted(set(item_ids))
        if not ids:
            return []
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_EVENT_SELECT} WHERE l.item_id IN ({placeholders}) ORDER BY l.start_time ASC",
                tuple(ids),
            )
            return [RawScanEvent.from_row(r) for r in fetchall(cur)]

    def insert_event_if_absent(self, event: ScanEvent) -> Optional[ScanEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            # Row lock on the item serializes concurrent backfills for it.
            cur.execute("SELECT item_id FROM order_items WHERE item_id=%s FOR UPDATE", (event.item_id,))
            if not fetchone(cur):
                raise ItemNotFound(f"Production item {event.item_id} not found")

            cur.execute(
                "SELECT event_id FROM item_processing_logs WHERE item_id=%s AND station_id=%s LIMIT 1",
                (event.item_id, event.station_id),
            )
            if fetchone(cur):
                return None

            cur.execute(
                """
                INSERT INTO item_processing_logs(
                    event_id, item_id, station_id, employee_id,
                    start_time, end_time, duration_seconds, note
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    event.event_id,
                    event.item_id,
                    event.station_id,
                    event.employee_id,
                    event.start_time,
                    event.end_time,
                    event.duration_seconds,
                    event.note,
                ),
            )
            return event
