from __future__ import annotations
import logging
import pyarrow as pa
from typing import Optional, List, Dict, Any
from basketcast.core.connection import DuckDBConnection
from basketcast.core.numeric import round_half_up
from basketcast.mining.frequent_pairs import FrequentPairs

logger = logging.getLogger(__name__)

class AssociationRules:
    """
    Directional rules ``A -> B`` and ``B -> A`` derived from frequent pairs.

    Rounding policy: ``confidence`` is reported as a percentage rounded half-up
    to one decimal and ``lift`` is rounded half-up to two decimals. The
    ``min_confidence`` threshold is applied to the unrounded fraction.
    ``support`` is the exact pair support fraction and ``transactions`` the
    number of orders containing both items.
    """

    SCHEMA = pa.schema([
        ("antecedent", pa.string()), ("consequent", pa.string()),
        ("confidence", pa.float64()), ("lift", pa.float64()),
        ("support", pa.float64()), ("transactions", pa.int64()),
    ])

    def __init__(
        self,
        conn: DuckDBConnection,
        table_name: str = "transactions",
        min_support: float = 0.02,
        min_confidence: float = 0.3,
    ):
        if not (0 < min_support <= 1): raise ValueError("min_support must be in (0, 1]")
        if not (0 < min_confidence <= 1): raise ValueError("min_confidence must be in (0, 1]")

        self.conn, self.table_name = conn, table_name
        self.min_support, self.min_confidence = min_support, min_confidence

    @staticmethod
    def _lift(count_ab: int, count_a: int, count_b: int, total_n: int) -> float:
        # support(AB) / (support(A) * support(B)) with the totals cancelled out
        denom = count_a * count_b
        return count_ab * total_n / denom if denom > 0 else 0.0

    def _build_rule(self, antecedent: str, consequent: str, count_ab: int, count_a: int, lift: float, support: float) -> Optional[Dict[str, Any]]:
        conf = count_ab / count_a if count_a > 0 else 0.0
        if conf < self.min_confidence: return None
        return {
            "antecedent": antecedent, "consequent": consequent,
            "confidence": round_half_up(conf * 100, 1), "lift": round_half_up(lift, 2),
            "support": support, "transactions": count_ab,
        }

    def _process_pair(self, row: Dict[str, Any], item_counts: Dict[str, int], total_n: int) -> List[Dict[str, Any]]:
        a, b, count_ab = row["item_a"], row["item_b"], row["count"]
        count_a, count_b = item_counts.get(a, 0), item_counts.get(b, 0)
        lift = self._lift(count_ab, count_a, count_b, total_n)
        candidates = (
            self._build_rule(a, b, count_ab, count_a, lift, row["support"]),
            self._build_rule(b, a, count_ab, count_b, lift, row["support"]),
        )
        return [r for r in candidates if r]

    def _get_empty_table(self) -> pa.Table:
        return pa.Table.from_pylist([], schema=self.SCHEMA)

    def _fit_pairs(self, pairs: Optional[pa.Table]) -> pa.Table:
        if pairs is None: return FrequentPairs(self.conn, table_name=self.table_name, min_support=self.min_support).fit()
        return pairs

    def fit(self, frequent_pairs: Optional[pa.Table] = None) -> pa.Table:
        pairs = self._fit_pairs(frequent_pairs)
        if pairs.num_rows == 0: return self._get_empty_table()

        miner = FrequentPairs(self.conn, table_name=self.table_name, min_support=self.min_support)
        item_counts, total_n = miner.item_counts(), miner.total_transactions()
        processed = [rule for row in pairs.to_pylist() for rule in self._process_pair(row, item_counts, total_n)]
        logger.debug("Generated %d rules from %d pairs (min_confidence=%s)", len(processed), pairs.num_rows, self.min_confidence)
        if not processed: return self._get_empty_table()

        processed.sort(key=lambda r: (-r["confidence"], -r["lift"], r["antecedent"], r["consequent"]))
        return pa.Table.from_pylist(processed, schema=self.SCHEMA)
