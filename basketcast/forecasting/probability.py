from __future__ import annotations
from datetime import date
from typing import Any, Optional
from basketcast.core.numeric import clamp, round_half_up
from basketcast.forecasting.regression import Projection, calculate_month_end_projection


def achievement_rate(projected_total: float, target_amount: float) -> float:
    """Projected total as a percentage of the target; 0 for a zero target."""
    if target_amount <= 0: return 0.0
    return projected_total / target_amount * 100


def target_probability(projection: Projection, budget: float, meta_percent: float = 100) -> int:
    """
    Likelihood (0-100) of reaching ``meta_percent`` % of ``budget``.

    Below target the probability ramps linearly from 0 to 50; above it, every
    two points of over-achievement add one, saturating at 100. The result is
    scaled by the projection confidence.
    """
    if meta_percent < 0: raise ValueError("meta_percent must be non-negative")
    target = budget * meta_percent / 100
    rate = achievement_rate(projection.projected_total, target)
    if rate <= 0: return 0
    if rate >= 100:
        raw = 50 + min(50, (rate - 100) / 2)
    else:
        raw = rate / 100 * 50
    return round_half_up(clamp(raw * projection.confidence / 100))


def calculate_target_probability(
    points: Any,
    budget: float,
    meta_percent: float = 100,
    days_in_month: Optional[int] = None,
    today: Optional[date] = None,
) -> int:
    projection = calculate_month_end_projection(points, budget, days_in_month=days_in_month, today=today)
    return target_probability(projection, budget, meta_percent)
