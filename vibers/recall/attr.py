"""Attribute-based recall: brand, price and rating filters."""

from __future__ import annotations

import unicodedata

from vibers.store import Item, StoreService

_KNOWN_BRANDS = (
    "Gucci",
    "Louis Vuitton",
    "Chanel",
    "Hermès",
    "Prada",
    "Saint Laurent",
    "Bottega Veneta",
    "Fendi",
    "Dior",
    "Balenciaga",
    "Celine",
    "Givenchy",
    "Valentino",
    "Loewe",
    "Jacquemus",
    "Staud",
    "Mansur Gavriel",
    "Cult Gaia",
    "Polene",
    "Wandler",
)


def _search_key(name: str) -> str:
    """Lower-case, accent-free form of a brand name as it is matched in queries."""
    decomposed = unicodedata.normalize("NFKD", name)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).lower()


_BRAND_BY_KEY: dict[str, str] = {_search_key(name): name for name in _KNOWN_BRANDS}


class AttrRecaller:
    """Recalls items by filtering on their attributes."""

    def __init__(self, store: StoreService) -> None:
        self.store = store

    def filter_recall(
        self, brand: str, max_price: int, min_rating: float, limit: int
    ) -> list[Item]:
        """Items matching brand, price cap and minimum rating."""
        return self.store.get_items_by_filter(brand, max_price, min_rating, limit)

    def brand_recall(self, brand: str, limit: int) -> list[Item]:
        """Items of one brand."""
        return self.filter_recall(brand, 0, 0.0, limit)

    def price_range_recall(self, min_price: int, max_price: int, limit: int) -> list[Item]:
        """Items priced at most ``max_price``; the lower bound is not applied."""
        return self.filter_recall("", max_price, 0.0, limit)

    def rating_recall(self, min_rating: float, limit: int) -> list[Item]:
        """Items rated at least ``min_rating``."""
        return self.filter_recall("", 0, min_rating, limit)

    def smart_attr_recall(self, query: str, limit: int) -> list[Item]:
        """Recall by the brand named in the query, or nothing if none is named."""
        brand = self.extract_brand(query)
        return self.brand_recall(brand, limit) if brand else []

    def extract_brand(self, query: str) -> str:
        """The canonical name of the first known brand found in the query, or ""."""
        lowered = query.lower()
        return next(
            (name for key, name in _BRAND_BY_KEY.items() if key in lowered), ""
        )

    def might_contain_brand(self, query: str) -> bool:
        """Whether the query mentions any known brand."""
        lowered = query.lower()
        return any(key in lowered for key in _BRAND_BY_KEY)