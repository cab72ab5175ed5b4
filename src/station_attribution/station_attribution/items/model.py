from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ItemStatus


@dataclass(frozen=True)
class ProductionItem:
    """Domain entity: one order line item moving through production.

    Carries the order/customer context operators need when reviewing it.
    """

    item_id: str
    status: ItemStatus
    is_product: bool = True
    product_number: Optional[str] = None
    item_name: Optional[str] = None
    order_id: Optional[str] = None
    order_number: Optional[str] = None
    order_created_at: Optional[datetime] = None
    customer_name: Optional[str] = None


@dataclass(frozen=True)
class ItemFilter:
    """Candidate-item filter; the date range applies to order creation."""

    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    status: Optional[ItemStatus] = None
