from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.enums import ItemStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ItemFilter, ProductionItem
from .repository import ItemRepository

_ITEM_COLUMNS = """
    oi.item_id, oi.item_status, oi.is_product, oi.product_number, oi.item_name,
    o.order_id, COALESCE(o.sales_order_number, o.purchase_order_number) AS order_number,
    o.created_at AS order_created_at, c.name AS customer_name
"""

_ITEM_JOINS = """
    FROM order_items oi
    LEFT JOIN orders o ON o.order_id = oi.order_id
    LEFT JOIN customers c ON c.customer_id = o.customer_id
"""


def _to_item(r: dict) -> ProductionItem:
    order_id = r.get("order_id")
    order_number = r.get("order_number") or (f"Order-{str(order_id)[-8:]}" if order_id else None)
    return ProductionItem(
        item_id=str(r["item_id"]),
        status=ItemStatus(r["item_status"]),
        is_product=bool(r.get("is_product")),
        product_number=r.get("product_number"),
        item_name=r.get("item_name"),
        order_id=str(order_id) if order_id else None,
        order_number=order_number,
        order_created_at=r.get("order_created_at"),
        customer_name=r.get("customer_name"),
    )


class MySQLItemRepository(ItemRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, item_id: str) -> Optional[ProductionItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_ITEM_COLUMNS} {_ITEM_JOINS} WHERE oi.item_id=%s", (item_id,))
            r = fetchone(cur)
            return _to_item(r) if r else None

    def get_many(self, item_ids: Iterable[str]) -> dict[str, ProductionItem]:
        ids = sorted(set(item_ids))
        if not ids:
            return {}
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_ITEM_COLUMNS} {_ITEM_JOINS} WHERE oi.item_id IN ({placeholders})",
                tuple(ids),
            )
            return {str(r["item_id"]): _to_item(r) for r in fetchall(cur)}

    def find_candidate_items(
        self,
        *,
        statuses: Sequence[ItemStatus],
        item_filter: ItemFilter,
    ) -> Sequence[ProductionItem]:
        if item_filter.status is not None:
            wanted = [item_filter.status] if item_filter.status in statuses else []
        else:
            wanted = list(statuses)
        if not wanted:
            return []

        clauses = ["oi.is_product = 1", f"oi.item_status IN ({','.join(['%s'] * len(wanted))})"]
        params: list[object] = [s.value for s in wanted]
        if item_filter.date_from is not None:
            clauses.append("o.created_at >= %s")
            params.append(item_filter.date_from)
        if item_filter.date_to is not None:
            clauses.append("o.created_at <= %s")
            params.append(item_filter.date_to)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_ITEM_COLUMNS}
                {_ITEM_JOINS}
                WHERE {where}
                ORDER BY o.created_at DESC
                """,
                tuple(params),
            )
            return [_to_item(r) for r in fetchall(cur)]
