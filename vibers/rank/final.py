"""Final ranking: greedy selection that balances relevance against brand diversity."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Mapping

from vibers.store import Item


@dataclass
class FinalRanker:
    """Applies business adjustments and a per-brand cap while ordering items."""

    max_same_brand: int = 3
    diversity_weight: float = 0.15
    new_item_boost: float = 1.1

    def rank(self, items: Iterable[Item]) -> list[Item]:
        """Greedily pick the best remaining item whose brand is still under the cap."""
        remaining = list(items)
        if len(remaining) <= 1:
            return remaining
        result: list[Item] = []
        brand_count: Counter[str] = Counter()
        while remaining:
            best = self._select_best(remaining, brand_count)
            if best is None:
                # Every remaining brand is at its cap; keep the rest in their order.
                result.extend(remaining)
                break
            selected = remaining.pop(best)
            result.append(selected)
            brand_count[selected.brand] += 1
        return result

    def _select_best(self, items: list[Item], brand_count: Mapping[str, int]) -> int | None:
        best_index = None
        best_score = -1.0
        for index, item in enumerate(items):
            if brand_count.get(item.brand, 0) >= self.max_same_brand:
                continue
            score = self.final_score(item, brand_count)
            if score > best_score:
                best_score = score
                best_index = index
        return best_index

    def final_score(self, item: Item, brand_count: Mapping[str, int]) -> float:
        """Simulated relevance adjusted for freshness, diversity, GMV and stock."""
        score = self.simulated_ltr_score(item)
        if 0 < item.click_7d < 50:
            score *= self.new_item_boost
        current = brand_count.get(item.brand, 0)
        if current > 0:
            penalty = 1.0 - self.diversity_weight * current
            score *= max(penalty, 0.5)
        score *= 1.0 + item.gmv_30d / 10_000_000.0 * 0.1
        if 0 < item.stock <= 3:
            score *= 1.05
        return score

    def simulated_ltr_score(self, item: Item) -> float:
        """Stand-in for the learning-to-rank output, built from item signals."""
        score = item.rating / 5.0 * 40.0
        score += item.gmv_30d / 1_000_000.0 * 30.0
        score += item.click_7d / 100.0 * 20.0
        score += (1.0 - item.discount) * 10.0
        return score