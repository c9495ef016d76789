"""Learning-to-rank stage: orders items by a predicted buy probability."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from vibers.store import Item

_WEIGHTS = {
    "rating": 0.25,
    "normalized_price": 0.15,
    "stock_level": 0.10,
    "click_rate": 0.20,
    "conversion_rate": 0.30,
}


@dataclass
class LTRRanker:
    """Scores items with a linear model over extracted features."""

    def rank(self, items: Iterable[Item]) -> list[Item]:
        """Items ordered by predicted buy probability, highest first."""
        return sorted(items, key=self.predict_buy_probability, reverse=True)

    def predict_buy_probability(self, item: Item) -> float:
        """Squash the weighted feature sum into a probability-like score."""
        features = self.extract_features(item)
        score = sum(features.get(name, 0.0) * weight for name, weight in _WEIGHTS.items())
        denominator = 1.0 + (-score)
        if denominator == 0.0:
            return math.inf
        return 1.0 / denominator

    def extract_features(self, item: Item) -> dict[str, float]:
        """Normalised model features for an item."""
        features = {
            "rating": item.rating / 5.0,
            "normalized_price": item.price_cents / 1_000_000.0,
            "discount": item.discount,
            "stock_level": item.stock / 100.0,
        }
        if item.click_7d > 0:
            features["click_rate"] = item.click_7d / 1000.0
            features["conversion_rate"] = item.buy_7d / item.click_7d
        features["gmv_normalized"] = item.gmv_30d / 10_000_000.0
        return features