from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional
import pyarrow as pa
from basketcast.config import ForecastOptions
from basketcast.forecasting.probability import target_probability
from basketcast.forecasting.regression import Projection, calculate_month_end_projection, get_daily_projections
from basketcast.forecasting.scenarios import ScenarioSet, generate_scenarios

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForecastReport:
    projection: Projection
    probability: int
    scenarios: ScenarioSet
    daily: pa.Table

    def to_dict(self) -> Dict[str, Any]:
        return {
            "projection": self.projection.to_dict(),
            "probability": self.probability,
            "scenarios": self.scenarios.to_dict(),
            "daily": self.daily.to_pylist(),
        }


def forecast_month(
    points: Any,
    budget: float,
    options: Optional[ForecastOptions] = None,
    today: Optional[date] = None,
    **overrides,
) -> ForecastReport:
    """Projection, target probability, scenario bands and the full-month series in one pass."""
    options = (options or ForecastOptions()).with_overrides(**overrides)
    projection = calculate_month_end_projection(points, budget, days_in_month=options.days_in_month, today=today)
    probability = target_probability(projection, budget, options.meta_percent)
    logger.debug("Forecast: projected=%d probability=%d", projection.projected_total, probability)
    return ForecastReport(
        projection=projection,
        probability=probability,
        scenarios=generate_scenarios(projection.projected_total, options.variance_percent),
        daily=get_daily_projections(points, projection.model, projection.days_in_month),
    )
