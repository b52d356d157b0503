from __future__ import annotations
from typing import Any, Optional, Sequence
import pyarrow as pa
from basketcast.config import BasketOptions
from basketcast.core.connection import DuckDBConnection
from basketcast.core.ingestion import load_order_lines
from basketcast.mining.association_rules import AssociationRules
from basketcast.mining.basket_report import BasketReport, build_report
from basketcast.mining.frequent_pairs import FrequentPairs
from basketcast.mining.transactions import TransactionExtractor
from basketcast.recommenders.affinity import create_affinity_matrix
from basketcast.recommenders.cross_sell import CrossSellRecommender

class Basketcast:
    """Basket analysis engine over an in-memory DuckDB session."""

    def __init__(self, options: Optional[BasketOptions] = None) -> None:
        self.conn = DuckDBConnection()
        self.table_name = "transactions"
        self.options = options or BasketOptions()
        self._rules: Optional[pa.Table] = None

    def _opts(self, overrides: dict) -> BasketOptions:
        return self.options.with_overrides(**overrides)

    def _require_loaded(self):
        if not self.conn.table_exists(self.table_name): raise RuntimeError("Call load_order_lines() first.")

    def load(self, data: Any, **kwargs) -> Basketcast:
        self.load_order_lines(data, **kwargs)
        return self

    def load_order_lines(self, *args, **kwargs) -> int:
        self._rules = None
        return load_order_lines(self.conn, *args, table_name=self.table_name, **kwargs)

    def transactions(self) -> pa.Table:
        self._require_loaded()
        return TransactionExtractor(self.conn, table_name=self.table_name).fit()

    def frequent_pairs(self, **kwargs) -> pa.Table:
        self._require_loaded()
        return FrequentPairs(self.conn, table_name=self.table_name, min_support=self._opts(kwargs).min_support).fit()

    def association_rules(self, **kwargs) -> pa.Table:
        self._require_loaded()
        opts = self._opts(kwargs)
        self._rules = AssociationRules(
            self.conn, table_name=self.table_name,
            min_support=opts.min_support, min_confidence=opts.min_confidence,
        ).fit()
        return self._rules

    def recommend(self, **kwargs) -> pa.Table:
        rules = self.association_rules(**kwargs)
        return CrossSellRecommender(rules, top_n=self._opts(kwargs).top_n).recommend()

    def report(self, **kwargs) -> BasketReport:
        self._require_loaded()
        return build_report(self.conn, table_name=self.table_name, options=self._opts(kwargs))

    def affinity_matrix(self, products: Sequence[Any]) -> pa.Table:
        if self._rules is None: raise RuntimeError("Call association_rules() first.")
        return create_affinity_matrix(products, self._rules)

    def sql(self, query: str) -> pa.Table: return self.conn.query(query)
    def close(self): self.conn.close()
    def __enter__(self): return self
    def __exit__(self, *_): self.close()
    def __repr__(self) -> str: return f"Basketcast(table_name={self.table_name!r}, closed={self.conn.closed})"
