"""Recall orchestration: text search first, then several strategies run in parallel."""

from __future__ import annotations

import logging
import sqlite3
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Iterable

from vibers.recall.ann import ANNRecaller
from vibers.recall.attr import AttrRecaller
from vibers.recall.exp import ExpRecaller
from vibers.recall.hot import HotRecaller
from vibers.recall.text import TextRecaller
from vibers.store import Item, StoreService

logger = logging.getLogger(__name__)

_EMPTY_QUERY_LIMIT = 100
_TEXT_LIMIT = 1000
_DIVERSITY_POOL = 20
_MAX_DIVERSITY = 2


@dataclass
class RecallResult:
    """Items returned by one recall strategy."""

    items: list[Item] = field(default_factory=list)
    source: str = ""
    score: float = 0.0


def _merge_unique(results: Iterable[RecallResult]) -> list[Item]:
    merged: dict[int, Item] = {}
    for result in results:
        for item in result.items:
            merged.setdefault(item.item_id, item)
    return list(merged.values())


class RecallService:
    """Combines the text, attribute, hot, exploration and vector recallers."""

    def __init__(self, store: StoreService) -> None:
        self.store = store
        self.text_recaller = TextRecaller(store)
        self.attr_recaller = AttrRecaller(store)
        self.hot_recaller = HotRecaller(store)
        self.exp_recaller = ExpRecaller(store)
        self.ann_recaller = ANNRecaller(store)
        try:
            self.ann_recaller.build()
        except sqlite3.Error as exc:
            logger.warning("Could not build vector index: %s", exc)

    def parallel_recall(self, query: str) -> list[Item]:
        """Candidate items for a query, without duplicates.

        An empty query yields the hot items. When text search finds matches they
        lead, with at most two hot items added for diversity (none for a single
        match). Otherwise every strategy runs in parallel and the results are merged.
        """
        query = query.strip()
        if not query:
            return self.hot_recaller.hot_recall(_EMPTY_QUERY_LIMIT)

        try:
            text_items = self.text_recaller.multi_strategy_text_recall(query, _TEXT_LIMIT)
        except sqlite3.Error:
            text_items = []

        if text_items:
            return self._with_diversity(text_items)

        strategies: list[tuple[str, float, Callable[[], list[Item]]]] = [
            ("hot", 0.4, lambda: self.hot_recaller.hot_recall(300)),
            ("explore", 0.2, lambda: self.exp_recaller.random_recall(200)),
            (
                "ann",
                0.5,
                lambda: self.ann_recaller.vector_similarity_recall(
                    [0.0] * self.ann_recaller.dim, 200
                ),
            ),
        ]
        if self.attr_recaller.might_contain_brand(query):
            strategies.append(
                ("attr", 0.6, lambda: self.attr_recaller.smart_attr_recall(query, 300))
            )

        results = [RecallResult(items=text_items, source="text", score=1.0)]
        with ThreadPoolExecutor(max_workers=len(strategies)) as pool:
            futures = [
                pool.submit(self._run_strategy, source, score, recall)
                for source, score, recall in strategies
            ]
            results.extend(future.result() for future in futures)
        return _merge_unique(results)

    def _with_diversity(self, text_items: list[Item]) -> list[Item]:
        seen = {item.item_id for item in text_items}
        combined = list(text_items)
        try:
            hot_items = self.hot_recaller.hot_recall(_DIVERSITY_POOL)
        except sqlite3.Error:
            return combined
        max_diversity = 0 if len(text_items) == 1 else _MAX_DIVERSITY
        added = 0
        for item in hot_items:
            if added >= max_diversity:
                break
            if item.item_id not in seen:
                combined.append(item)
                seen.add(item.item_id)
                added += 1
        return combined

    @staticmethod
    def _run_strategy(
        source: str, score: float, recall: Callable[[], list[Item]]
    ) -> RecallResult:
        try:
            items = recall()
        except sqlite3.Error as exc:
            logger.warning("Recall strategy %s failed: %s", source, exc)
            items = []
        return RecallResult(items=items, source=source, score=score)