"""
basketcast.datasets.retail — Synthetic order lines for basket analysis.
"""
from __future__ import annotations
import pandas as pd
from typing import Optional


def generate_order_lines(seed: Optional[int] = None) -> pd.DataFrame:
    """
    Generate order lines with known co-purchase signals.

    - **Coffee → Croissant**: bought together in 4 of the 5 coffee orders
    - **Pasta → Tomato Sauce**: always together (lift well above 1)
    - **Water**: popular on its own, no useful affinity
    - Order ``O3`` lists Coffee twice to exercise per-order deduplication

    Columns: ``order_id``, ``product_name``

    Returns
    -------
    pd.DataFrame
        21 rows across 10 orders.

    Example
    -------
    >>> from basketcast.datasets import generate_order_lines
    >>> df = generate_order_lines()
    >>> df.head()
    """
    lines = [
        ("O1", "Coffee"), ("O1", "Croissant"),
        ("O2", "Coffee"), ("O2", "Croissant"), ("O2", "Water"),
        ("O3", "Coffee"), ("O3", "Croissant"), ("O3", "Coffee"),
        ("O4", "Coffee"), ("O4", "Croissant"),
        ("O5", "Coffee"), ("O5", "Water"),
        ("O6", "Pasta"), ("O6", "Tomato Sauce"),
        ("O7", "Pasta"), ("O7", "Tomato Sauce"), ("O7", "Water"),
        ("O8", "Pasta"), ("O8", "Tomato Sauce"),
        ("O9", "Water"),
        ("O10", "Water"),
    ]
    return pd.DataFrame(lines, columns=["order_id", "product_name"])
