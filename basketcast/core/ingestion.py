from __future__ import annotations
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional
import narwhals as nw
import pyarrow as pa
from basketcast.core.connection import DuckDBConnection

logger = logging.getLogger(__name__)

_STAGING = "_tmp_order_lines"
_STAGING_SCHEMA = pa.schema([("set_id", pa.string()), ("node_id", pa.string())])


@dataclass(frozen=True)
class OrderLine:
    """One line of an order as handed over by the ingestion stage."""
    order_id: Any
    product_name: Any


def _is_missing(value: Any) -> bool:
    if value is None: return True
    if isinstance(value, float) and math.isnan(value): return True
    return isinstance(value, str) and not value


def _read_field(record: Any, name: str, position: int) -> Any:
    if isinstance(record, Mapping): return record.get(name)
    if isinstance(record, (tuple, list)): return record[position] if len(record) > position else None
    return getattr(record, name, None)


def _records_to_arrow(records: Iterable[Any], order_col: str, product_col: str) -> pa.Table:
    set_ids: List[str] = []
    node_ids: List[str] = []
    skipped = 0
    for record in records:
        order_id = _read_field(record, order_col, 0)
        product = _read_field(record, product_col, 1)
        if _is_missing(order_id) or _is_missing(product):
            skipped += 1
            continue
        set_ids.append(str(order_id))
        node_ids.append(str(product))
    if skipped:
        logger.debug("Skipped %d order lines without order id or product name", skipped)
    return pa.table({"set_id": set_ids, "node_id": node_ids}, schema=_STAGING_SCHEMA)


def _as_frame(source: Any) -> Optional[Any]:
    if source is None or isinstance(source, (list, tuple, Mapping)): return None
    try: df = nw.from_native(source)
    except TypeError: return None
    if isinstance(df, nw.LazyFrame): df = df.collect()
    return df


def _frame_to_native(df: Any, order_col: str, product_col: str) -> Any:
    if order_col not in df.columns or product_col not in df.columns:
        raise ValueError(f"Missing columns: expected '{order_col}' and '{product_col}', got {list(df.columns)}")
    staged = df.select(nw.col(order_col).alias("set_id"), nw.col(product_col).alias("node_id"))
    return staged.drop_nulls().to_native()


def _staging_data(source: Any, order_col: str, product_col: str) -> Any:
    df = _as_frame(source)
    if df is None:
        return _records_to_arrow(source or [], order_col, product_col)
    return _frame_to_native(df, order_col, product_col)


_SELECT_DISTINCT = f"""
    SELECT DISTINCT set_id::VARCHAR AS set_id, node_id::VARCHAR AS node_id
    FROM {_STAGING}
    WHERE set_id IS NOT NULL AND node_id IS NOT NULL
      AND set_id::VARCHAR <> '' AND node_id::VARCHAR <> ''
"""


def _upsert(conn: DuckDBConnection, table_name: str, append: bool) -> None:
    if append and conn.table_exists(table_name):
        conn.execute(f"INSERT INTO {table_name} {_SELECT_DISTINCT} EXCEPT SELECT set_id, node_id FROM {table_name}")
    else:
        conn.execute(f"CREATE OR REPLACE TABLE {table_name} AS {_SELECT_DISTINCT}")


def load_order_lines(
    conn: DuckDBConnection,
    source: Any,
    order_col: str = "order_id",
    product_col: str = "product_name",
    table_name: str = "transactions",
    append: bool = False,
) -> int:
    """
    Group order lines into deduplicated transactions.

    ``source`` may be a pandas / polars / pyarrow frame (lazy frames are
    collected), or an iterable of mappings, ``OrderLine`` objects or
    ``(order_id, product_name)`` tuples. Lines missing either field are
    skipped. The resulting table holds one ``(set_id, node_id)`` row per
    distinct product of an order.

    Returns
    -------
    int
        Number of distinct transactions in ``table_name``.
    """
    with conn.staged(_STAGING, _staging_data(source, order_col, product_col)):
        _upsert(conn, table_name, append)
    n = conn.execute(f"SELECT COUNT(DISTINCT set_id) FROM {table_name}").fetchone()[0]
    logger.debug("Loaded %d transactions into %s", n, table_name)
    return n


_PRODUCT_NAME_KEYS = ("full_name", "name", "description", "descripcion", "product_name")


def product_label(product: Any) -> str:
    """Display name of a product given as a string or a mapping."""
    if isinstance(product, Mapping):
        for key in _PRODUCT_NAME_KEYS:
            if not _is_missing(product.get(key)): return str(product[key])
        raise ValueError(f"Product has none of the name fields {_PRODUCT_NAME_KEYS}: {product!r}")
    return str(product)
