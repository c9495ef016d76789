import sqlite3

import pytest

from vibers.recall.ann import ANNRecaller
from vibers.recall.attr import AttrRecaller
from vibers.recall.exp import ExpRecaller
from vibers.recall.hot import HotRecaller
from vibers.recall.service import RecallResult, RecallService
from vibers.recall.text import TextRecaller
from vibers.store import StoreService, float32_to_bytes, init_db

SCHEMA = """CREATE TABLE items (
    item_id INTEGER PRIMARY KEY,
    title TEXT,
    brand TEXT,
    price_cents INTEGER,
    discount REAL,
    rating REAL,
    stock INTEGER,
    launched_at DATETIME,
    click_7d INTEGER,
    buy_7d INTEGER,
    gmv_30d INTEGER,
    embedding BLOB
)"""

ROWS = [
    (1, "Gucci Marmont Bag", "Gucci", 200000, 0.0, 4.5, 5, 30, 3, 900000),
    (2, "Prada Re-Edition", "Prada", 150000, 0.1, 4.2, 3, 20, 2, 800000),
    (3, "Dior Saddle Bag", "Dior", 300000, 0.0, 4.8, 10, 40, 4, 700000),
    (4, "Staud Shirley", "Staud", 40000, 0.2, 4.0, 0, 10, 1, 1000000),
    (5, "Loewe Puzzle", "Loewe", 250000, 0.0, 3.5, 2, 5, 1, 100000),
]


@pytest.fixture
def db():
    conn = init_db(":memory:")
    conn.execute(SCHEMA)
    for row in ROWS:
        conn.execute(
            "INSERT INTO items (item_id, title, brand, price_cents, discount, rating, "
            "stock, click_7d, buy_7d, gmv_30d, embedding) VALUES (?,?,?,?,?,?,?,?,?,?,?)",
            (*row, float32_to_bytes([1.0, float(row[0]), 0.5])),
        )
    conn.commit()
    yield conn
    conn.close()


@pytest.fixture
def store(db):
    return StoreService(db)


@pytest.fixture
def service(store):
    return RecallService(store)


def _in_stock_ids(db):
    return {row[0] for row in db.execute("SELECT item_id FROM items WHERE stock > 0")}


def test_empty_query_returns_hot_items(service, store):
    result = service.parallel_recall("")
    assert [i.item_id for i in result] == [i.item_id for i in store.get_hot_items(100)]


def test_whitespace_query_is_treated_as_empty(service, store):
    result = service.parallel_recall("   \t ")
    assert [i.item_id for i in result] == [i.item_id for i in store.get_hot_items(100)]


def test_single_text_match_gets_no_diversity_items(service):
    result = service.parallel_recall("marmont")
    assert [i.item_id for i in result] == [1]


def test_multiple_text_matches_get_two_hot_items(service):
    result = service.parallel_recall("bag")
    ids = [i.item_id for i in result]
    assert ids[:2] == [1, 3]
    assert len(ids) == 4
    assert ids == [1, 3, 2, 5]


def test_no_text_match_merges_all_strategies_without_duplicates(service, db):
    result = service.parallel_recall("zzzqqq")
    ids = [i.item_id for i in result]
    assert len(ids) == len(set(ids))
    assert set(ids) == _in_stock_ids(db)


def test_brand_query_without_text_match_includes_brand_items(service, db):
    result = service.parallel_recall("gucci zzzqqq")
    ids = [i.item_id for i in result]
    assert 1 in ids
    assert len(ids) == len(set(ids))
    assert set(ids) == _in_stock_ids(db)


def test_missing_table_on_text_query_yields_empty(tmp_path):
    conn = init_db(str(tmp_path / "empty.db"))
    try:
        service = RecallService(StoreService(conn))
        assert service.parallel_recall("bag") == []
    finally:
        conn.close()


def test_missing_table_on_empty_query_raises(tmp_path):
    conn = init_db(str(tmp_path / "empty.db"))
    try:
        service = RecallService(StoreService(conn))
        with pytest.raises(sqlite3.Error):
            service.parallel_recall("")
    finally:
        conn.close()


def test_recallers_are_exposed(service):
    assert isinstance(service.text_recaller, TextRecaller)
    assert isinstance(service.attr_recaller, AttrRecaller)
    assert isinstance(service.hot_recaller, HotRecaller)
    assert isinstance(service.exp_recaller, ExpRecaller)
    assert isinstance(service.ann_recaller, ANNRecaller)
    assert service.ann_recaller.dim == 3


def test_recall_result_defaults_and_fields():
    default = RecallResult()
    assert default.items == []
    assert default.source == ""
    result = RecallResult(items=[], source="hot", score=0.4)
    assert (result.source, result.score) == ("hot", 0.4)