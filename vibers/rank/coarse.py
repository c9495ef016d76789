"""Coarse ranking: hard business rules followed by a simple composite score."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from vibers.store import Item


@dataclass
class CoarseRanker:
    """Filters out ineligible items and orders the rest by a coarse score."""

    min_stock: int = 1
    max_price_cents: int = 2_000_000
    min_rating: float = 3.0

    def rank(self, items: Iterable[Item]) -> list[Item]:
        """Eligible items, highest coarse score first."""
        eligible = [item for item in items if self.passes_hard_rules(item)]
        return sorted(eligible, key=self.score, reverse=True)

    def passes_hard_rules(self, item: Item) -> bool:
        """Whether the item meets the stock, price and rating limits."""
        return (
            item.stock >= self.min_stock
            and item.price_cents <= self.max_price_cents
            and item.rating >= self.min_rating
        )

    def score(self, item: Item) -> float:
        """Composite of rating, GMV, stock, discount and clicks."""
        score = item.rating * 20.0
        score += item.gmv_30d / 100000.0
        if item.stock > 5:
            score += 10.0
        elif item.stock > 0:
            score += 5.0
        if item.discount > 0.3:
            score -= 5.0
        score += item.click_7d / 10.0
        return score