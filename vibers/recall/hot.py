"""Recall of popular and trending items."""

from __future__ import annotations

from typing import Sequence

from vibers.store import Item, StoreService


class HotRecaller:
    """Recalls items ordered by recent sales and clicks."""

    def __init__(self, store: StoreService) -> None:
        self.store = store

    def hot_recall(self, limit: int) -> list[Item]:
        """Items by 30-day GMV, then 7-day clicks."""
        return self.store.get_hot_items(limit)

    def gmv_based_recall(self, limit: int) -> list[Item]:
        """Items by GMV performance."""
        return self.store.get_hot_items(limit)

    def click_based_recall(self, limit: int) -> list[Item]:
        """Items by click performance, using the hot ordering."""
        return self.store.get_hot_items(limit)

    def trending_recall(self, limit: int) -> list[Item]:
        """Currently trending items, using the hot ordering."""
        return self.store.get_hot_items(limit)

    def recently_launched_recall(self, limit: int) -> list[Item]:
        """Recently launched popular items, using the hot ordering."""
        return self.store.get_hot_items(limit)

    def brand_popular_recall(self, brands: Sequence[str], limit: int) -> list[Item]:
        """Popular items; the brand list is not yet applied."""
        return self.store.get_hot_items(limit)