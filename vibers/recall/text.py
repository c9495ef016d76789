"""Text-based recall: keyword, prefix and brand search."""

from __future__ import annotations

import sqlite3

from vibers.store import Item, StoreService


class TextRecaller:
    """Recalls items whose title or brand matches the query text."""

    def __init__(self, store: StoreService) -> None:
        self.store = store

    def fuzzy_text_search(self, query: str, limit: int) -> list[Item]:
        """Items containing every keyword of the query."""
        return self.store.get_items_by_text_search(query, limit)

    def exact_search(self, query: str, limit: int) -> list[Item]:
        """Items matching the query as given."""
        return self.store.get_items_by_text_search(query, limit)

    def prefix_search(self, query: str, limit: int) -> list[Item]:
        """Items whose title or brand starts with the query."""
        query = query.strip()
        if not query:
            return []
        return self.store.get_items_by_prefix_search(query + "%", limit)

    def brand_search(self, brand: str, limit: int) -> list[Item]:
        """Items of the given brand."""
        return self.store.get_items_by_filter(brand, 0, 0.0, limit)

    def multi_strategy_text_recall(self, query: str, limit: int) -> list[Item]:
        """Keyword search, topped up by prefix search when it finds fewer than three items.

        Failing strategies contribute nothing rather than raising.
        """
        results: dict[int, Item] = {}
        try:
            for item in self.fuzzy_text_search(query, limit):
                results.setdefault(item.item_id, item)
        except sqlite3.Error:
            pass

        if len(results) < 3:
            try:
                for item in self.prefix_search(query, limit - len(results)):
                    results.setdefault(item.item_id, item)
            except sqlite3.Error:
                pass

        return list(results.values())[:limit]