from __future__ import annotations
import logging
import pyarrow as pa
from typing import Dict
from basketcast.core.connection import DuckDBConnection

logger = logging.getLogger(__name__)

class FrequentPairs:
    SCHEMA = pa.schema([("item_a", pa.string()), ("item_b", pa.string()), ("count", pa.int64()), ("support", pa.float64())])

    def __init__(
        self,
        conn: DuckDBConnection,
        table_name: str = "transactions",
        min_support: float = 0.02,
    ):
        if min_support <= 0 or min_support > 1: raise ValueError("min_support must be in (0, 1]")
        self.conn = conn
        self.table_name = table_name
        self.min_support = min_support
        self.last_sql_ = ""

    def total_transactions(self) -> int:
        if not self.conn.table_exists(self.table_name): return 0
        return self.conn.execute(f"SELECT COUNT(DISTINCT set_id) FROM {self.table_name}").fetchone()[0]

    def item_counts(self) -> Dict[str, int]:
        """Number of transactions containing each item."""
        if not self.conn.table_exists(self.table_name): return {}
        rows = self.conn.execute(f"SELECT node_id, COUNT(DISTINCT set_id) FROM {self.table_name} GROUP BY 1").fetchall()
        return {item: count for item, count in rows}

    def fit(self) -> pa.Table:
        total_n = self.total_transactions()
        if total_n == 0:
            logger.info("No transactions in %s; no pairs to mine", self.table_name)
            return pa.Table.from_pylist([], schema=self.SCHEMA)

        # a.node_id < b.node_id gives every unordered pair a single canonical key
        self.last_sql_ = f"""
            WITH pair_counts AS (
                SELECT a.node_id AS item_a, b.node_id AS item_b, COUNT(*) AS "count"
                FROM {self.table_name} a
                JOIN {self.table_name} b ON a.set_id = b.set_id AND a.node_id < b.node_id
                GROUP BY 1, 2
            )
            SELECT item_a, item_b, "count"::BIGINT AS "count", ("count"::DOUBLE / {total_n}) AS support
            FROM pair_counts
            WHERE ("count"::DOUBLE / {total_n}) >= ?
            ORDER BY support DESC, item_a, item_b
        """
        pairs = self.conn.query(self.last_sql_, [float(self.min_support)])
        logger.debug("Mined %d frequent pairs from %d transactions (min_support=%s)", pairs.num_rows, total_n, self.min_support)
        return pairs
