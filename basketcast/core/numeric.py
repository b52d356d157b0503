"""
Numeric helpers shared by the mining and forecasting stages.

Presentation figures are rounded half-up (``2.5 -> 3``, ``-2.5 -> -2``) so that
the same input always renders the same way, regardless of Python's
banker's rounding in :func:`round`.
"""

from __future__ import annotations
import math
from typing import Union

Number = Union[int, float]


def round_half_up(value: Number, ndigits: int = 0) -> Number:
    if ndigits == 0:
        return int(math.floor(value + 0.5))
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def safe_div(numerator: Number, denominator: Number) -> float:
    return numerator / denominator if denominator else 0.0


def clamp(value: Number, lower: Number = 0, upper: Number = 100) -> Number:
    return max(lower, min(upper, value))
