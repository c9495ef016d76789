import sqlite3

import pytest

from vibers.recall.text import TextRecaller
from vibers.store import StoreService, init_db

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
    (1, "Classic Flap", "Chanel", 500000, 0.0, 4.8, 3, 10, 1, 900000),
    (2, "Marmont Bag", "Gucci", 250000, 0.0, 4.5, 5, 20, 2, 500000),
    (3, "Jackie Bag", "Gucci", 300000, 0.1, 4.9, 2, 30, 3, 300000),
    (4, "Dionysus", "Gucci", 200000, 0.0, 4.0, 0, 40, 4, 800000),
    (5, "Le Chiquito", "Jacquemus", 60000, 0.2, 3.5, 10, 50, 5, 100000),
    (6, "Jackie Bag Large", "Gucci", 350000, 0.0, 4.9, 4, 60, 6, 2000000),
]


@pytest.fixture
def recaller():
    conn = init_db(":memory:")
    conn.execute(SCHEMA)
    conn.executemany(
        "INSERT INTO items (item_id, title, brand, price_cents, discount, rating, "
        "stock, click_7d, buy_7d, gmv_30d) VALUES (?,?,?,?,?,?,?,?,?,?)",
        ROWS,
    )
    conn.commit()
    yield TextRecaller(StoreService(conn))
    conn.close()


@pytest.fixture
def broken_recaller():
    conn = init_db(":memory:")
    yield TextRecaller(StoreService(conn))
    conn.close()


def ids(items):
    return [item.item_id for item in items]


def test_fuzzy_exact_title_first(recaller):
    assert ids(recaller.fuzzy_text_search("Jackie Bag", 10)) == [3, 6]


def test_fuzzy_requires_every_keyword(recaller):
    result = recaller.fuzzy_text_search("gucci marmont", 10)
    assert ids(result) == [2]


def test_fuzzy_skips_out_of_stock(recaller):
    assert recaller.fuzzy_text_search("dionysus", 10) == []


def test_exact_search_matches_fuzzy(recaller):
    assert ids(recaller.exact_search("bag", 10)) == ids(recaller.fuzzy_text_search("bag", 10))


def test_prefix_search_blank_query(recaller):
    assert recaller.prefix_search("   ", 10) == []


def test_prefix_search_title(recaller):
    assert ids(recaller.prefix_search("  marm ", 10)) == [2]


def test_prefix_search_brand(recaller):
    result = recaller.prefix_search("guc", 10)
    assert sorted(ids(result)) == [2, 3, 6]
    assert all(item.brand == "Gucci" for item in result)


def test_brand_search(recaller):
    result = recaller.brand_search("Gucci", 10)
    assert sorted(ids(result)) == [2, 3, 6]
    assert all(item.stock > 0 for item in result)


def test_multi_strategy_unique_results(recaller):
    result = recaller.multi_strategy_text_recall("jackie", 10)
    assert sorted(ids(result)) == [3, 6]
    assert len(set(ids(result))) == len(result)


def test_multi_strategy_respects_limit(recaller):
    result = recaller.multi_strategy_text_recall("gucci", 2)
    assert ids(result) == ids(recaller.fuzzy_text_search("gucci", 2))
    assert len(result) == 2


def test_multi_strategy_no_match(recaller):
    assert recaller.multi_strategy_text_recall("nothing matches", 10) == []


def test_search_errors_raise(broken_recaller):
    with pytest.raises(sqlite3.OperationalError):
        broken_recaller.fuzzy_text_search("bag", 10)


def test_multi_strategy_swallows_errors(broken_recaller):
    assert broken_recaller.multi_strategy_text_recall("bag", 10) == []