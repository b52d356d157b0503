"""
basketcast.forecasting — month-end sales projection.

- **series**: daily sales normalization and month length
- **regression**: least-squares trend, month-end projection, daily completion
- **probability**: likelihood of reaching a budget target
- **scenarios**: pessimistic / realistic / optimistic bands
- **trends**: product growth ranking with pluggable strategies
- **report**: all of the above in one call
"""

from .series import DailySalesPoint, month_days, to_daily_points
from .regression import (
    RegressionModel,
    Projection,
    linear_regression,
    r_squared,
    calculate_month_end_projection,
    get_daily_projections,
)
from .probability import achievement_rate, target_probability, calculate_target_probability
from .scenarios import ScenarioSet, generate_scenarios
from .trends import predict_top_products, half_split_growth, random_growth, series_growth, trend_label
from .report import ForecastReport, forecast_month

__all__ = [
    "DailySalesPoint",
    "month_days",
    "to_daily_points",
    "RegressionModel",
    "Projection",
    "linear_regression",
    "r_squared",
    "calculate_month_end_projection",
    "get_daily_projections",
    "achievement_rate",
    "target_probability",
    "calculate_target_probability",
    "ScenarioSet",
    "generate_scenarios",
    "predict_top_products",
    "half_split_growth",
    "random_growth",
    "series_growth",
    "trend_label",
    "ForecastReport",
    "forecast_month",
]
