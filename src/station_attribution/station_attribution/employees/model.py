from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Employee:
    """Domain entity: a warehouse employee who scans items at stations."""

    employee_id: str
    name: str
    is_active: bool = True
