"""
End-to-end market basket analysis.

``analyze_basket`` extracts transactions, mines frequent pairs, derives
rules, ranks cross-sell recommendations and summarises the baskets, all on a
private in-memory DuckDB connection that is discarded before returning.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional
import pyarrow as pa
from basketcast.config import BasketOptions
from basketcast.core.connection import DuckDBConnection
from basketcast.core.ingestion import load_order_lines
from basketcast.core.numeric import round_half_up, safe_div
from basketcast.mining.association_rules import AssociationRules
from basketcast.mining.frequent_pairs import FrequentPairs
from basketcast.mining.transactions import TransactionExtractor
from basketcast.recommenders.cross_sell import CrossSellRecommender

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BasketStats:
    total_transactions: int = 0
    avg_items_per_transaction: float = 0.0
    unique_products: int = 0


@dataclass(frozen=True)
class BasketReport:
    transactions: pa.Table
    frequent_pairs: pa.Table
    rules: pa.Table
    recommendations: pa.Table
    stats: BasketStats

    @property
    def is_empty(self) -> bool:
        return self.stats.total_transactions == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transactions": self.transactions.to_pylist(),
            "frequent_pairs": self.frequent_pairs.to_pylist(),
            "rules": self.rules.to_pylist(),
            "recommendations": self.recommendations.to_pylist(),
            "stats": asdict(self.stats),
        }


def empty_report() -> BasketReport:
    return BasketReport(
        transactions=pa.Table.from_pylist([], schema=TransactionExtractor.SCHEMA),
        frequent_pairs=pa.Table.from_pylist([], schema=FrequentPairs.SCHEMA),
        rules=pa.Table.from_pylist([], schema=AssociationRules.SCHEMA),
        recommendations=pa.Table.from_pylist([], schema=CrossSellRecommender.SCHEMA),
        stats=BasketStats(),
    )


def basket_stats(conn: DuckDBConnection, table_name: str = "transactions") -> BasketStats:
    n_sets, n_items, n_unique = conn.execute(
        f"SELECT COUNT(DISTINCT set_id), COUNT(*), COUNT(DISTINCT node_id) FROM {table_name}"
    ).fetchone()
    return BasketStats(
        total_transactions=n_sets,
        avg_items_per_transaction=round_half_up(safe_div(n_items, n_sets), 1),
        unique_products=n_unique,
    )


def build_report(conn: DuckDBConnection, table_name: str = "transactions", options: Optional[BasketOptions] = None) -> BasketReport:
    """Run the mining pipeline over an already loaded transaction table."""
    options = options or BasketOptions()
    extractor = TransactionExtractor(conn, table_name=table_name)
    if extractor.count() == 0:
        logger.info("No transactions to analyze; returning an empty report")
        return empty_report()

    pairs = FrequentPairs(conn, table_name=table_name, min_support=options.min_support).fit()
    rules = AssociationRules(
        conn, table_name=table_name,
        min_support=options.min_support, min_confidence=options.min_confidence,
    ).fit(frequent_pairs=pairs)
    recommendations = CrossSellRecommender(rules, top_n=options.top_n).recommend()
    stats = basket_stats(conn, table_name)
    logger.info(
        "Basket analysis: %d transactions, %d pairs, %d rules, %d recommendations",
        stats.total_transactions, pairs.num_rows, rules.num_rows, recommendations.num_rows,
    )
    return BasketReport(
        transactions=extractor.fit(),
        frequent_pairs=pairs.slice(0, options.top_n),
        rules=rules.slice(0, options.top_n * 2),
        recommendations=recommendations,
        stats=stats,
    )


def analyze_basket(
    records: Any,
    options: Optional[BasketOptions] = None,
    order_col: str = "order_id",
    product_col: str = "product_name",
    **overrides,
) -> BasketReport:
    """
    Analyze order lines and return pairs, rules, recommendations and stats.

    Parameters
    ----------
    records : frame or iterable
        Order lines; see :func:`basketcast.core.ingestion.load_order_lines`.
    options : BasketOptions, optional
        Thresholds; keyword ``overrides`` (``min_support``, ``min_confidence``,
        ``top_n``) are applied on top.

    Returns
    -------
    BasketReport
        ``report.stats.total_transactions == 0`` when nothing was usable.

    Example
    -------
    >>> report = analyze_basket([("o1", "A"), ("o1", "B"), ("o2", "A")], min_support=0.3)
    >>> report.stats.total_transactions
    2
    """
    options = (options or BasketOptions()).with_overrides(**overrides)
    with DuckDBConnection() as conn:
        load_order_lines(conn, records, order_col=order_col, product_col=product_col)
        return build_report(conn, options=options)
