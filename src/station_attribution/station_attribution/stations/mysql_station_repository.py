from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Station
from .repository import StationRepository


class MySQLStationRepository(StationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Station]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT station_id, name FROM stations ORDER BY name")
            return [Station(station_id=str(r["station_id"]), name=r["name"]) for r in fetchall(cur)]

    def get_by_id(self, station_id: str) -> Optional[Station]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT station_id, name FROM stations WHERE station_id=%s", (station_id,))
            r = fetchone(cur)
            return Station(station_id=str(r["station_id"]), name=r["name"]) if r else None

    def get_by_name(self, name: str) -> Optional[Station]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT station_id, name FROM stations WHERE name=%s LIMIT 1", (name,))
            r = fetchone(cur)
            return Station(station_id=str(r["station_id"]), name=r["name"]) if r else None
