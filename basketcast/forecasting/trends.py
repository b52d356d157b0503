"""
Product trend ranking.

Growth is computed by a pluggable strategy ``(product, points) -> float``
returning a percentage. The default, :func:`half_split_growth`, compares the
average of the second half of a series with the first half. It uses the
product's own ``daily`` series when the product carries one and falls back to
the store-wide daily series otherwise.

:func:`random_growth` reproduces the legacy dashboard behaviour, a uniform
draw in ``[-10, 50)`` unrelated to the data. It is a placeholder pending a
product decision on the intended growth signal and must not drive real
decisions.
"""

from __future__ import annotations
import logging
from collections.abc import Mapping
from typing import Any, Callable, List, Optional, Sequence
import numpy as np
import pyarrow as pa
from basketcast.core.ingestion import product_label
from basketcast.forecasting.series import DailySalesPoint, to_daily_points

logger = logging.getLogger(__name__)

GrowthStrategy = Callable[[Any, List[DailySalesPoint]], float]

SCHEMA = pa.schema([("name", pa.string()), ("value", pa.float64()), ("growth", pa.float64()), ("trend", pa.string())])

_VALUE_KEYS = ("value", "quantity", "cantidad")
# fields that feed the ranking itself and are not copied onto the output row
_CONSUMED_KEYS = frozenset(SCHEMA.names) | frozenset(_VALUE_KEYS) | {"daily"}


def trend_label(growth: float) -> str:
    if growth > 15: return "up"
    if growth < -5: return "down"
    return "stable"


def series_growth(values: Sequence[float]) -> float:
    """Percent change of the second-half mean over the first-half mean."""
    mid = len(values) // 2
    if mid == 0: return 0.0
    first, second = float(np.mean(values[:mid])), float(np.mean(values[mid:]))
    return (second - first) / first * 100 if first > 0 else 0.0


def half_split_growth(product: Any, points: List[DailySalesPoint]) -> float:
    own = product.get("daily") if isinstance(product, Mapping) else None
    series = to_daily_points(own) if own is not None else points
    return series_growth([p.sales for p in series])


def random_growth(seed: Optional[int] = None) -> GrowthStrategy:
    logger.warning("random_growth ignores the sales data; use it only as a placeholder")
    rng = np.random.default_rng(seed)

    def _draw(product: Any, points: List[DailySalesPoint]) -> float:
        return float(rng.uniform(-10, 50))
    return _draw


def _product_value(product: Any) -> float:
    if not isinstance(product, Mapping): return 0.0
    for key in _VALUE_KEYS:
        if product.get(key) is not None: return float(product[key])
    return 0.0


def _extra_fields(product: Any) -> dict:
    if not isinstance(product, Mapping): return {}
    return {k: v for k, v in product.items() if k not in _CONSUMED_KEYS}


def predict_top_products(
    points: Any,
    top_products: Sequence[Any],
    strategy: Optional[GrowthStrategy] = None,
    limit: int = 5,
) -> pa.Table:
    """
    Rank products by growth and tag each with an ``up`` / ``down`` / ``stable`` trend.

    Any other fields of a mapping product (``id``, ``category`` ...) are
    carried through as extra columns after the ranking columns; the
    ``daily`` series and the raw value field are not.
    """
    if limit < 1: raise ValueError("limit must be a positive integer")
    if not top_products: return pa.Table.from_pylist([], schema=SCHEMA)
    strategy = strategy or half_split_growth
    series = to_daily_points(points)
    ranked = []
    for product in top_products:
        growth = float(strategy(product, series))
        row = {"name": product_label(product), "value": _product_value(product), "growth": growth, "trend": trend_label(growth)}
        ranked.append((row, _extra_fields(product)))
    ranked.sort(key=lambda r: (-r[0]["growth"], -r[0]["value"], r[0]["name"]))
    top = ranked[:limit]
    table = pa.Table.from_pylist([row for row, _ in top], schema=SCHEMA)
    for key in dict.fromkeys(k for _, extras in top for k in extras):
        table = table.append_column(key, pa.array([extras.get(key) for _, extras in top]))
    return table
