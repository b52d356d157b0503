import logging

from .api import Basketcast
from .config import BasketOptions, ForecastOptions, configure_logging
from .core.connection import DuckDBConnection
from .core.ingestion import OrderLine, load_order_lines
from .mining.transactions import TransactionExtractor
from .mining.frequent_pairs import FrequentPairs
from .mining.association_rules import AssociationRules
from .mining.basket_report import BasketReport, BasketStats, analyze_basket
from .recommenders.cross_sell import CrossSellRecommender
from .recommenders.affinity import create_affinity_matrix
from .forecasting import (
    DailySalesPoint,
    RegressionModel,
    Projection,
    ScenarioSet,
    ForecastReport,
    linear_regression,
    calculate_month_end_projection,
    calculate_target_probability,
    target_probability,
    generate_scenarios,
    get_daily_projections,
    predict_top_products,
    half_split_growth,
    random_growth,
    forecast_month,
)
from .datasets import generate_order_lines, generate_daily_sales

logging.getLogger(__name__).addHandler(logging.NullHandler())

def load(data, **kwargs) -> Basketcast:
    engine = Basketcast()
    engine.load(data, **kwargs)
    return engine

def connect(**kwargs) -> Basketcast:
    return Basketcast(**kwargs)

__all__ = [
    "Basketcast",
    "load",
    "connect",
    "BasketOptions",
    "ForecastOptions",
    "configure_logging",
    "DuckDBConnection",
    "OrderLine",
    "load_order_lines",
    # Basket analysis
    "TransactionExtractor",
    "FrequentPairs",
    "AssociationRules",
    "CrossSellRecommender",
    "BasketReport",
    "BasketStats",
    "analyze_basket",
    "create_affinity_matrix",
    # Forecasting
    "DailySalesPoint",
    "RegressionModel",
    "Projection",
    "ScenarioSet",
    "ForecastReport",
    "linear_regression",
    "calculate_month_end_projection",
    "calculate_target_probability",
    "target_probability",
    "generate_scenarios",
    "get_daily_projections",
    "predict_top_products",
    "half_split_growth",
    "random_growth",
    "forecast_month",
    # Datasets
    "generate_order_lines",
    "generate_daily_sales",
]
