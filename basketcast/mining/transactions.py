from __future__ import annotations
import pyarrow as pa
from basketcast.core.connection import DuckDBConnection

class TransactionExtractor:
    """Read access to the per-order item sets built by ``load_order_lines``."""

    SCHEMA = pa.schema([("set_id", pa.string()), ("items", pa.list_(pa.string()))])

    def __init__(self, conn: DuckDBConnection, table_name: str = "transactions"):
        self.conn = conn
        self.table_name = table_name

    def count(self) -> int:
        if not self.conn.table_exists(self.table_name): return 0
        return self.conn.execute(f"SELECT COUNT(DISTINCT set_id) FROM {self.table_name}").fetchone()[0]

    def fit(self) -> pa.Table:
        if not self.conn.table_exists(self.table_name):
            return pa.Table.from_pylist([], schema=self.SCHEMA)
        return self.conn.query(f"""
            SELECT set_id, list(node_id ORDER BY node_id) AS items
            FROM {self.table_name}
            GROUP BY set_id
            ORDER BY set_id
        """)

    def to_sets(self) -> list:
        return [frozenset(row["items"]) for row in self.fit().to_pylist()]
