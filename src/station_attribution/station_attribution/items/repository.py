from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import ItemStatus
from .model import ItemFilter, ProductionItem


class ItemRepository(Protocol):
    def get_by_id(self, item_id: str) -> Optional[ProductionItem]:
        raise NotImplementedError

    def get_many(self, item_ids: Iterable[str]) -> dict[str, ProductionItem]:
        raise NotImplementedError

    def find_candidate_items(
        self,
        *,
        statuses: Sequence[ItemStatus],
        item_filter: ItemFilter,
    ) -> Sequence[ProductionItem]:
        """Production items whose status is one of ``statuses``."""

        raise NotImplementedError
