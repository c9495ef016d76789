"""Vector-similarity recall over item embeddings held in memory."""

from __future__ import annotations

from typing import Sequence

from vibers.store import Item, StoreService, cosine_similarity


class ANNRecaller:
    """Brute-force nearest-neighbour search over the catalogue's embeddings."""

    def __init__(self, store: StoreService) -> None:
        self.store = store
        self.items: list[Item] = []
        self.dim = 0

    def build(self) -> None:
        """Load every item embedding from the store."""
        data = self.store.get_all_item_embeddings()
        if not data:
            self.items = []
            return
        self.dim = len(data[0].embedding)
        self.items = data

    def vector_similarity_recall(self, query_embedding: Sequence[float], limit: int) -> list[Item]:
        """Items whose embeddings are most similar to the query, up to ``limit``."""
        if len(query_embedding) != self.dim or not self.items:
            return []
        scored = [
            (cosine_similarity(item.embedding, query_embedding), item.item_id)
            for item in self.items
            if len(item.embedding) == self.dim
        ]
        scored.sort(key=lambda pair: pair[0], reverse=True)
        ids = [item_id for _, item_id in scored[:max(limit, 0)]]
        return self.store.get_items_by_ids(ids)