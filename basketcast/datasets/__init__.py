"""
basketcast.datasets — Synthetic dataset generators.

Each generator produces a ready-to-use ``pd.DataFrame`` with documented
columns and known ground-truth patterns.

- **retail**: order lines with deliberate co-purchase signals
- **sales**: linear daily sales series, optionally noisy
"""

from .retail import generate_order_lines
from .sales import generate_daily_sales

__all__ = [
    "generate_order_lines",
    "generate_daily_sales",
]
