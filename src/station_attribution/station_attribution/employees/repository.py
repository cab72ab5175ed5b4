from __future__ import annotations

from typing import Iterable, Optional, Protocol

from .model import Employee


class EmployeeRepository(Protocol):
    """Reference-data lookups for employees.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_many(self, employee_ids: Iterable[str]) -> dict[str, Employee]:
        raise NotImplementedError
