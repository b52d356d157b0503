"""
Month-end projection from a single-variable least-squares trend.

The fit is ordinary least squares of ``sales = slope * day + intercept`` over
the observed days. Observed days keep their actual sales; every day after the
last observed one is filled from the line, floored at zero. R² over the
observed points, scaled to 0-100, serves as the forecast confidence.
"""

from __future__ import annotations
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional
import numpy as np
import pyarrow as pa
from basketcast.core.numeric import clamp, round_half_up, safe_div
from basketcast.forecasting.series import DailySalesPoint, month_days, to_daily_points

logger = logging.getLogger(__name__)

DAILY_SCHEMA = pa.schema([("day", pa.int64()), ("sales", pa.float64()), ("type", pa.string())])


@dataclass(frozen=True)
class RegressionModel:
    slope: float = 0.0
    intercept: float = 0.0

    def predict(self, day: float) -> float:
        return self.slope * day + self.intercept


@dataclass(frozen=True)
class Projection:
    projected_total: int = 0
    confidence: int = 0
    days_observed: int = 0
    daily_average: int = 0
    model: RegressionModel = field(default_factory=RegressionModel)
    days_in_month: int = 0

    @property
    def slope(self) -> float: return self.model.slope

    @property
    def intercept(self) -> float: return self.model.intercept

    def to_dict(self) -> Dict[str, Any]:
        return {
            "projected_total": self.projected_total, "confidence": self.confidence,
            "days_observed": self.days_observed, "daily_average": self.daily_average,
            "slope": self.slope, "intercept": self.intercept, "days_in_month": self.days_in_month,
        }


def _arrays(points: List[DailySalesPoint]):
    return np.array([p.day for p in points], dtype=float), np.array([p.sales for p in points], dtype=float)


def linear_regression(points: Any) -> RegressionModel:
    pts = to_daily_points(points)
    n = len(pts)
    if n < 2: return RegressionModel()

    x, y = _arrays(pts)
    sum_x, sum_y, sum_xy, sum_xx = x.sum(), y.sum(), (x * y).sum(), (x * x).sum()
    denom = n * sum_xx - sum_x * sum_x
    if denom == 0: return RegressionModel(0.0, float(sum_y / n))
    slope = (n * sum_xy - sum_x * sum_y) / denom
    intercept = (sum_y - slope * sum_x) / n
    return RegressionModel(float(slope), float(intercept))


def r_squared(points: Any, model: RegressionModel) -> float:
    """Coefficient of determination over the observed points; 0 for a flat series."""
    pts = to_daily_points(points)
    if not pts: return 0.0
    x, y = _arrays(pts)
    ss_tot = float(((y - y.mean()) ** 2).sum())
    if ss_tot == 0: return 0.0
    ss_res = float(((y - (model.slope * x + model.intercept)) ** 2).sum())
    return 1 - ss_res / ss_tot


def _month_total(points: List[DailySalesPoint], model: RegressionModel, days_in_month: int) -> float:
    last_day = points[-1].day if points else 0
    actual = sum(p.sales for p in points if p.day <= days_in_month)
    tail = np.arange(last_day + 1, days_in_month + 1, dtype=float)
    projected = np.maximum(0.0, model.slope * tail + model.intercept).sum() if tail.size else 0.0
    return actual + float(projected)


def calculate_month_end_projection(
    points: Any,
    budget: float = 0,
    days_in_month: Optional[int] = None,
    today: Optional[date] = None,
) -> Projection:
    """
    Project the month-end sales total from the observed daily trend.

    ``budget`` does not enter the fit; a negative budget is rejected.
    ``days_in_month`` defaults to the length of the month containing ``today``.
    Fewer than two observed days yields the all-zero projection.
    """
    if budget < 0: raise ValueError("budget must be non-negative")
    dim = days_in_month or month_days(today)
    pts = to_daily_points(points)
    if len(pts) < 2:
        logger.info("Need at least two observed days to project, got %d", len(pts))
        return Projection(days_in_month=dim)

    model = linear_regression(pts)
    total = _month_total(pts, model, dim)
    confidence = clamp(r_squared(pts, model) * 100)
    logger.debug("Projected %.2f over %d days (slope=%.4f, intercept=%.4f, r2=%.4f)", total, dim, model.slope, model.intercept, confidence / 100)
    return Projection(
        projected_total=round_half_up(total),
        confidence=round_half_up(confidence),
        days_observed=pts[-1].day,
        daily_average=round_half_up(safe_div(total, dim)),
        model=model,
        days_in_month=dim,
    )


def _coerce_model(regression: Any) -> RegressionModel:
    if isinstance(regression, RegressionModel): return regression
    if isinstance(regression, Projection): return regression.model
    if isinstance(regression, Mapping): return RegressionModel(float(regression["slope"]), float(regression["intercept"]))
    return RegressionModel(float(regression.slope), float(regression.intercept))


def get_daily_projections(points: Any, regression: Any, days_in_month: int) -> pa.Table:
    """
    Full-month series for charting.

    Days up to the last observed day are ``actual`` (0 where no data was
    recorded); later days are ``projected`` from ``regression``, rounded and
    never negative.
    """
    if days_in_month < 1: raise ValueError("days_in_month must be a positive integer")
    model = _coerce_model(regression)
    pts = to_daily_points(points)
    actual = {p.day: p.sales for p in pts}
    last_day = pts[-1].day if pts else 0
    rows = []
    for day in range(1, days_in_month + 1):
        if day <= last_day:
            rows.append({"day": day, "sales": actual.get(day, 0.0), "type": "actual"})
        else:
            rows.append({"day": day, "sales": float(round_half_up(max(0.0, model.predict(day)))), "type": "projected"})
    return pa.Table.from_pylist(rows, schema=DAILY_SCHEMA)
