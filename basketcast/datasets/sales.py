"""
basketcast.datasets.sales — Synthetic daily sales series for forecasting.
"""
from __future__ import annotations
import numpy as np
import pandas as pd
from typing import Optional


def generate_daily_sales(
    days: int = 15,
    slope: float = 100.0,
    intercept: float = 1000.0,
    noise: float = 0.0,
    seed: Optional[int] = None,
) -> pd.DataFrame:
    """
    Generate a linear daily sales series with optional Gaussian noise.

    Sales are ``slope * day + intercept + N(0, noise)`` floored at zero, for
    days ``1..days``. With ``noise=0`` the series is exactly linear.

    Columns: ``day``, ``sales``
    """
    if days < 1: raise ValueError("days must be a positive integer")
    rng = np.random.default_rng(seed)
    day = np.arange(1, days + 1)
    sales = slope * day + intercept
    if noise > 0: sales = sales + rng.normal(0.0, noise, size=days)
    return pd.DataFrame({"day": day, "sales": np.maximum(sales, 0.0)})
