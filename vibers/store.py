"""SQLite-backed item catalogue and the vector helpers used by recall."""

from __future__ import annotations

import math
import sqlite3
import struct
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Sequence

_ITEM_COLUMNS = (
    "item_id, title, brand, price_cents, discount, "
    "rating, stock, launched_at, click_7d, buy_7d, gmv_30d"
)


@dataclass
class Item:
    """A product item in the catalogue."""

    item_id: int
    title: str = ""
    brand: str = ""
    price_cents: int = 0
    discount: float = 0.0
    rating: float = 0.0
    stock: int = 0
    launched_at: datetime | None = None
    click_7d: int = 0
    buy_7d: int = 0
    gmv_30d: int = 0
    embedding: list[float] = field(default_factory=list, repr=False)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form of the item, without its embedding."""
        return {
            "item_id": self.item_id,
            "title": self.title,
            "brand": self.brand,
            "price_cents": self.price_cents,
            "discount": self.discount,
            "rating": self.rating,
            "stock": self.stock,
            "launched_at": self.launched_at.isoformat() if self.launched_at else None,
            "click_7d": self.click_7d,
            "buy_7d": self.buy_7d,
            "gmv_30d": self.gmv_30d,
        }


def bytes_to_float32(data: bytes) -> list[float]:
    """Decode little-endian float32 values; an odd-sized buffer gives an empty list."""
    if len(data) % 4:
        return []
    return list(struct.unpack(f"<{len(data) // 4}f", data))


def float32_to_bytes(vec: Iterable[float]) -> bytes:
    """Encode values as little-endian float32."""
    values = list(vec)
    return struct.pack(f"<{len(values)}f", *values)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between two vectors; 0.0 for mismatched or zero vectors."""
    if len(a) != len(b):
        return 0.0
    dot = sum(x * y for x, y in zip(a, b))
    norm_a = sum(x * x for x in a)
    norm_b = sum(y * y for y in b)
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return dot / (math.sqrt(norm_a) * math.sqrt(norm_b))


def _sql_cosine(first: Any, second: Any) -> float:
    if not isinstance(first, (bytes, memoryview)) or not isinstance(second, (bytes, memoryview)):
        return 0.0
    first, second = bytes(first), bytes(second)
    if len(first) != len(second):
        return 0.0
    return cosine_similarity(bytes_to_float32(first), bytes_to_float32(second))


def init_db(db_path: str) -> sqlite3.Connection:
    """Open the database and register the ``Cosine`` SQL function."""
    conn = sqlite3.connect(db_path, check_same_thread=False)
    try:
        conn.create_function("Cosine", 2, _sql_cosine, deterministic=True)
    except sqlite3.Error:
        conn.close()
        raise
    return conn


def _parse_time(value: Any) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, bytes):
        value = value.decode()
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _row_to_item(row: Sequence[Any]) -> Item:
    (item_id, title, brand, price_cents, discount, rating, stock,
     launched_at, click_7d, buy_7d, gmv_30d) = row
    return Item(
        item_id=item_id,
        title=title,
        brand=brand,
        price_cents=price_cents,
        discount=discount,
        rating=rating,
        stock=stock,
        launched_at=_parse_time(launched_at),
        click_7d=click_7d or 0,
        buy_7d=buy_7d or 0,
        gmv_30d=gmv_30d or 0,
    )


class StoreService:
    """Queries over the ``items`` table."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self.db = db

    def _query_items(self, sql: str, params: Sequence[Any] = ()) -> list[Item]:
        return [_row_to_item(row) for row in self.db.execute(sql, params).fetchall()]

    def get_items_by_text_search(self, query: str, limit: int) -> list[Item]:
        """Items in stock whose title or brand contains every keyword of the query."""
        keywords = query.lower().split()
        if not keywords:
            return []
        conditions = " AND ".join(
            "(LOWER(title) LIKE ? OR LOWER(brand) LIKE ?)" for _ in keywords
        )
        params: list[Any] = []
        for keyword in keywords:
            pattern = f"%{keyword}%"
            params.extend((pattern, pattern))
        params.extend((query, query, limit))
        sql = f"""
            SELECT {_ITEM_COLUMNS}
            FROM items
            WHERE {conditions} AND stock > 0
            ORDER BY
                CASE WHEN LOWER(title) = LOWER(?) THEN 1 ELSE 2 END,
                CASE WHEN LOWER(brand) = LOWER(?) THEN 1 ELSE 2 END,
                (rating * gmv_30d) DESC,
                rating DESC
            LIMIT ?
        """
        return self._query_items(sql, params)

    def get_items_by_filter(
        self, brand: str, max_price: int, min_rating: float, limit: int
    ) -> list[Item]:
        """Items in stock matching brand, price cap and minimum rating (empty/zero means any)."""
        sql = f"""
            SELECT {_ITEM_COLUMNS}
            FROM items
            WHERE (?1 = '' OR brand = ?1)
              AND (?2 = 0 OR price_cents <= ?2)
              AND rating >= ?3
              AND stock > 0
            ORDER BY rating DESC, gmv_30d DESC
            LIMIT ?4
        """
        return self._query_items(sql, (brand, max_price, min_rating, limit))

    def get_hot_items(self, limit: int) -> list[Item]:
        """Items in stock by 30-day GMV, then 7-day clicks, highest first."""
        sql = f"""
            SELECT {_ITEM_COLUMNS}
            FROM items
            WHERE stock > 0
            ORDER BY gmv_30d DESC, click_7d DESC
            LIMIT ?
        """
        return self._query_items(sql, (limit,))

    def get_random_items(self, limit: int) -> list[Item]:
        """A random selection of items in stock."""
        sql = f"""
            SELECT {_ITEM_COLUMNS}
            FROM items
            WHERE stock > 0
            ORDER BY RANDOM()
            LIMIT ?
        """
        return self._query_items(sql, (limit,))

    def get_items_by_ids(self, ids: Sequence[int]) -> list[Item]:
        """Items whose id is among ``ids``."""
        ids = list(ids)
        if not ids:
            return []
        placeholders = ",".join("?" for _ in ids)
        sql = f"SELECT {_ITEM_COLUMNS} FROM items WHERE item_id IN ({placeholders})"
        return self._query_items(sql, ids)

    def get_all_item_embeddings(self) -> list[Item]:
        """Every item that has an embedding, carrying only its id and vector."""
        rows = self.db.execute(
            "SELECT item_id, embedding FROM items WHERE embedding IS NOT NULL"
        ).fetchall()
        return [
            Item(item_id=item_id, embedding=bytes_to_float32(bytes(blob)))
            for item_id, blob in rows
        ]

    def get_items_by_prefix_search(self, prefix: str, limit: int) -> list[Item]:
        """Items in stock whose title or brand matches the LIKE pattern ``prefix``."""
        sql = f"""
            SELECT {_ITEM_COLUMNS}
            FROM items
            WHERE (LOWER(title) LIKE LOWER(?) OR LOWER(brand) LIKE LOWER(?))
              AND stock > 0
            ORDER BY
                CASE WHEN LOWER(title) LIKE LOWER(?) THEN 1 ELSE 2 END,
                CASE WHEN LOWER(brand) LIKE LOWER(?) THEN 1 ELSE 2 END,
                rating DESC, gmv_30d DESC
            LIMIT ?
        """
        return self._query_items(sql, (prefix, prefix, prefix, prefix, limit))