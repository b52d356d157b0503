from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Dict
from basketcast.core.numeric import round_half_up


@dataclass(frozen=True)
class ScenarioSet:
    pessimistic: int
    realistic: int
    optimistic: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def generate_scenarios(base_projection: float, variance_percent: float = 20) -> ScenarioSet:
    """Pessimistic / realistic / optimistic month-end figures at +/- ``variance_percent``."""
    if variance_percent < 0: raise ValueError("variance_percent must be non-negative")
    v = variance_percent / 100
    return ScenarioSet(
        pessimistic=round_half_up(base_projection * (1 - v)),
        realistic=round_half_up(base_projection),
        optimistic=round_half_up(base_projection * (1 + v)),
    )
