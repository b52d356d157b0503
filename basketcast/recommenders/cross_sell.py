from __future__ import annotations
import logging
import pyarrow as pa
from typing import Dict, Any
from basketcast.core.numeric import round_half_up
from basketcast.mining.association_rules import AssociationRules

logger = logging.getLogger(__name__)


def strength_label(confidence: float) -> str:
    """Tier for a confidence expressed as a percentage."""
    if confidence > 70: return "High"
    if confidence > 50: return "Medium"
    return "Low"

class CrossSellRecommender:
    """
    Ranks association rules into cross-sell suggestions.

    Only positively correlated rules (``lift > 1``) survive; the input order
    (confidence descending) is kept and the first ``top_n`` are returned.
    """

    SCHEMA = pa.schema(list(AssociationRules.SCHEMA) + [
        pa.field("strength", pa.string()),
        pa.field("uplift_potential", pa.int64()),
        pa.field("recommendation", pa.string()),
    ])

    def __init__(self, rules: pa.Table, top_n: int = 10):
        if top_n < 1: raise ValueError("top_n must be a positive integer")
        self.rules = rules
        self.top_n = top_n

    def _enrich(self, rule: Dict[str, Any]) -> Dict[str, Any]:
        return {
            **rule,
            "strength": strength_label(rule["confidence"]),
            "uplift_potential": round_half_up((rule["lift"] - 1) * 100),
            "recommendation": f'Customers who buy "{rule["antecedent"]}" also buy "{rule["consequent"]}"',
        }

    def recommend(self) -> pa.Table:
        positive = [r for r in self.rules.to_pylist() if r["lift"] > 1]
        logger.debug("%d of %d rules have lift > 1", len(positive), self.rules.num_rows)
        recs = [self._enrich(r) for r in positive[:self.top_n]]
        return pa.Table.from_pylist(recs, schema=self.SCHEMA)
