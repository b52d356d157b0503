from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence
import duckdb
import pyarrow as pa

logger = logging.getLogger(__name__)

class DuckDBConnection:
    """
    In-memory DuckDB session scoped to one analysis.

    Nothing is written to disk; closing the session discards every table
    built during the analysis.
    """

    def __init__(self):
        self.conn = duckdb.connect(":memory:")
        self.closed = False
        logger.debug("Opened in-memory analysis session")

    def execute(self, sql: str, params: Optional[Sequence[Any]] = None) -> duckdb.DuckDBPyConnection:
        return self.conn.execute(sql, params)

    def query(self, sql: str, params: Optional[Sequence[Any]] = None) -> pa.Table:
        result = self.execute(sql, params).arrow()
        # recent duckdb releases return a RecordBatchReader here
        return result.read_all() if hasattr(result, "read_all") else result

    def table_exists(self, table_name: str) -> bool:
        try:
            self.conn.execute(f"SELECT 1 FROM {table_name} LIMIT 0")
        except duckdb.Error:
            return False
        return True

    def register(self, name: str, data: Any):
        self.conn.register(name, data)

    def unregister(self, name: str):
        self.conn.unregister(name)

    @contextmanager
    def staged(self, name: str, data: Any) -> Iterator[str]:
        """Expose ``data`` as view ``name`` for the duration of the block."""
        self.register(name, data)
        try:
            yield name
        finally:
            self.unregister(name)

    def close(self):
        if self.closed: return
        self.conn.close()
        self.closed = True
        logger.debug("Closed in-memory analysis session")

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()

    def __repr__(self) -> str:
        return f"DuckDBConnection(closed={self.closed})"
