"""
Tunable thresholds for the basket and forecast pipelines.

Options are frozen dataclasses validated on construction, so a malformed
threshold fails where it is built rather than deep inside a computation.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _from_mapping(cls, values: Mapping[str, Any]):
    known = {f.name for f in fields(cls)}
    unknown = set(values) - known
    if unknown: raise ValueError(f"Unknown {cls.__name__} fields: {sorted(unknown)}")
    return cls(**values)


@dataclass(frozen=True)
class BasketOptions:
    """
    Parameters
    ----------
    min_support : float
        Minimum fraction of transactions a pair must appear in, in ``(0, 1]``.
    min_confidence : float
        Minimum conditional probability of a rule, in ``(0, 1]``.
    top_n : int
        Cap on returned pairs and recommendations (rules are capped at ``2 * top_n``).
    """
    min_support: float = 0.02
    min_confidence: float = 0.3
    top_n: int = 10

    def __post_init__(self):
        if not (0 < self.min_support <= 1): raise ValueError("min_support must be in (0, 1]")
        if not (0 < self.min_confidence <= 1): raise ValueError("min_confidence must be in (0, 1]")
        if isinstance(self.top_n, bool) or not isinstance(self.top_n, int) or self.top_n < 1:
            raise ValueError("top_n must be a positive integer")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "BasketOptions":
        return _from_mapping(cls, values)

    def with_overrides(self, **overrides) -> "BasketOptions":
        return replace(self, **overrides) if overrides else self


@dataclass(frozen=True)
class ForecastOptions:
    """
    Parameters
    ----------
    variance_percent : float
        Symmetric spread of the pessimistic / optimistic scenarios.
    meta_percent : float
        Share of the budget that counts as the target (100 = whole budget).
    days_in_month : int, optional
        Month length; ``None`` means the length of the current calendar month.
    """
    variance_percent: float = 20
    meta_percent: float = 100
    days_in_month: Optional[int] = None

    def __post_init__(self):
        if self.variance_percent < 0: raise ValueError("variance_percent must be non-negative")
        if self.meta_percent < 0: raise ValueError("meta_percent must be non-negative")
        if self.days_in_month is not None and self.days_in_month < 1:
            raise ValueError("days_in_month must be a positive integer")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ForecastOptions":
        return _from_mapping(cls, values)

    def with_overrides(self, **overrides) -> "ForecastOptions":
        return replace(self, **overrides) if overrides else self


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Send ``basketcast`` log records to stderr."""
    logger = logging.getLogger("basketcast")
    logger.setLevel(level)
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
