# ---------------------------------------------------------------------------
# Tests configuration
# ---------------------------------------------------------------------------

import pytest
import pandas as pd

from basketcast.core.connection import DuckDBConnection


# T1: milk, bread (milk listed twice)
# T2: milk, bread
# T3: milk
# T4: milk
# T5: bread
# T6: milk, bread
# T7: bread, beer, diapers
# T8: bread, beer, diapers
# T9: milk, bread
# T10: beer, diapers
ORDER_LINES = [
    ("T1", "milk"), ("T1", "bread"), ("T1", "milk"),
    ("T2", "milk"), ("T2", "bread"),
    ("T3", "milk"),
    ("T4", "milk"),
    ("T5", "bread"),
    ("T6", "milk"), ("T6", "bread"),
    ("T7", "bread"), ("T7", "beer"), ("T7", "diapers"),
    ("T8", "bread"), ("T8", "beer"), ("T8", "diapers"),
    ("T9", "milk"), ("T9", "bread"),
    ("T10", "beer"), ("T10", "diapers"),
]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def conn():
    """In-memory DuckDB connection for each test."""
    db = DuckDBConnection()  # :memory:
    yield db
    db.close()


@pytest.fixture
def order_lines():
    """Order lines as plain dict records."""
    return [{"order_id": o, "product_name": p} for o, p in ORDER_LINES]


@pytest.fixture
def order_lines_df():
    """Standard order-line dataset as a pandas DataFrame."""
    return pd.DataFrame(ORDER_LINES, columns=["order_id", "product_name"])


@pytest.fixture
def order_lines_polars():
    """Polars version of the order-line dataset."""
    import polars as pl
    return pl.DataFrame(ORDER_LINES, schema=["order_id", "product_name"], orient="row")


@pytest.fixture
def loaded_conn(conn, order_lines_df):
    """Connection with the transactions table already built."""
    from basketcast.core.ingestion import load_order_lines
    load_order_lines(conn, order_lines_df)
    return conn


@pytest.fixture
def engine(order_lines_df):
    """Basketcast engine with order lines loaded."""
    from basketcast.api import Basketcast
    db = Basketcast()
    db.load_order_lines(order_lines_df)
    yield db
    db.close()


@pytest.fixture
def linear_series():
    """sales = 100 * day for the first three days of the month."""
    return [{"day": 1, "sales": 100}, {"day": 2, "sales": 200}, {"day": 3, "sales": 300}]
