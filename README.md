# vibers

A small product search library built on a SQLite catalogue. It gathers
candidate items for a query from several recall strategies and orders them
through three ranking stages.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## The catalogue

Items live in an `items` table with the columns `item_id`, `title`, `brand`,
`price_cents`, `discount`, `rating`, `stock`, `launched_at`, `click_7d`,
`buy_7d`, `gmv_30d` and an optional `embedding` blob of little-endian float32
values.

`vibers.store.init_db(path)` opens the database and registers a `Cosine` SQL
function over two embedding blobs. `vibers.store.StoreService` runs the
queries: text search, attribute filters, hot items, random items, lookup by
id, prefix search and loading all embeddings. Only items with stock above zero
are returned by the searches. `bytes_to_float32`, `float32_to_bytes` and
`cosine_similarity` are the vector helpers behind it. Each row becomes an
`Item` dataclass; `Item.to_dict()` gives its JSON-ready form without the
embedding.

## Recall

`vibers.recall.service.RecallService(store).parallel_recall(query)` returns
candidate items without duplicates:

- an empty query gives the 100 hottest items;
- when text search finds matches, they lead, followed by up to two hot items
  for diversity (none when there is a single match);
- otherwise hot items, random items, embedding similarity and, for queries
  that name a known brand, brand filtering run in parallel threads and their
  results are merged.

The individual strategies are also usable on their own:
`TextRecaller`, `AttrRecaller`, `HotRecaller`, `ExpRecaller` and
`ANNRecaller` in the `vibers.recall` sub-package.

## Ranking

- `vibers.rank.coarse.CoarseRanker` drops items out of stock, priced above
  2,000,000 cents or rated below 3.0, and sorts the rest by a composite score.
- `vibers.rank.ltr.LTRRanker` sorts by a predicted buy probability computed
  from normalised item features.
- `vibers.rank.final.FinalRanker` picks items greedily by an adjusted score,
  allowing at most three items per brand before the rest are appended in
  their current order.

## Example

```python
from vibers.store import init_db, StoreService
from vibers.recall.service import RecallService
from vibers.rank.coarse import CoarseRanker
from vibers.rank.ltr import LTRRanker
from vibers.rank.final import FinalRanker

db = init_db("./data/vibers.db")
store = StoreService(db)
items = RecallService(store).parallel_recall("prada")
items = FinalRanker().rank(LTRRanker().rank(CoarseRanker().rank(items)))
page = items[:20]
```

## What it does not do

This package is a library only. It has no HTTP server and no command-line
program, does not create the `items` table or load data into it, and does no
pagination of its own; slicing the ranked list is left to the caller.