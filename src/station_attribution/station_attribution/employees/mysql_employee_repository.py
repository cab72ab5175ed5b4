from __future__ import annotations

from typing import Iterable, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository


def _to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=str(r["employee_id"]),
        name=r["name"],
        is_active=str(r.get("status") or "").upper() == "ACTIVE",
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT employee_id, name, status FROM employees WHERE employee_id=%s",
                (employee_id,),
            )
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def get_many(self, employee_ids: Iterable[str]) -> dict[str, Employee]:
        ids = sorted(set(employee_ids))
        if not ids:
            return {}
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT employee_id, name, status FROM employees WHERE employee_id IN ({placeholders})",
                tuple(ids),
            )
            return {str(r["employee_id"]): _to_employee(r) for r in fetchall(cur)}
