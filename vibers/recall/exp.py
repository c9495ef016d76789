"""Exploration recall strategies that surface items outside the usual results."""

from __future__ import annotations

from vibers.store import Item, StoreService


class ExpRecaller:
    """Recalls a random sample of the catalogue for exploration."""

    def __init__(self, store: StoreService) -> None:
        self.store = store

    def random_recall(self, limit: int) -> list[Item]:
        """Random in-stock items."""
        return self.store.get_random_items(limit)

    def diversity_recall(self, limit: int) -> list[Item]:
        """Diverse items; random selection gives natural diversity."""
        return self.store.get_random_items(limit)

    def long_tail_recall(self, limit: int) -> list[Item]:
        """Less popular items, drawn at random."""
        return self.store.get_random_items(limit)

    def serendipity_recall(self, limit: int) -> list[Item]:
        """Unexpected items, drawn at random."""
        return self.store.get_random_items(limit)

    def new_items_recall(self, limit: int) -> list[Item]:
        """Items for discovery of new arrivals, drawn at random."""
        return self.store.get_random_items(limit)

    def budget_friendly_recall(self, limit: int) -> list[Item]:
        """Items for budget exploration, drawn at random."""
        return self.store.get_random_items(limit)

    def under_the_radar_recall(self, limit: int) -> list[Item]:
        """Possibly overlooked items, drawn at random."""
        return self.store.get_random_items(limit)