"""Tests for association rule generation."""

import pytest
import pyarrow as pa

from basketcast.core.ingestion import load_order_lines
from basketcast.mining.association_rules import AssociationRules
from basketcast.mining.frequent_pairs import FrequentPairs


def _rule(rules, antecedent, consequent):
    return next((r for r in rules.to_pylist() if r["antecedent"] == antecedent and r["consequent"] == consequent), None)


class TestAssociationRules:

    def test_returns_table_with_schema(self, loaded_conn):
        rules = AssociationRules(loaded_conn, min_support=0.1, min_confidence=0.1).fit()
        assert isinstance(rules, pa.Table)
        assert rules.schema == AssociationRules.SCHEMA

    def test_confidence_formula(self, loaded_conn):
        # milk -> bread: 4 joint orders / 6 milk orders
        rules = AssociationRules(loaded_conn, min_support=0.1, min_confidence=0.1).fit()
        assert _rule(rules, "milk", "bread")["confidence"] == 66.7
        # bread -> milk: 4 / 7
        assert _rule(rules, "bread", "milk")["confidence"] == 57.1

    def test_lift_formula(self, loaded_conn):
        # lift = 0.4 / (0.6 * 0.7) = 0.952...
        rules = AssociationRules(loaded_conn, min_support=0.1, min_confidence=0.1).fit()
        assert _rule(rules, "milk", "bread")["lift"] == 0.95
        assert _rule(rules, "beer", "diapers")["lift"] == 3.33

    def test_lift_is_symmetric(self, loaded_conn):
        rules = AssociationRules(loaded_conn, min_support=0.1, min_confidence=0.01).fit()
        for r in rules.to_pylist():
            reverse = _rule(rules, r["consequent"], r["antecedent"])
            if reverse is not None:
                assert reverse["lift"] == r["lift"]

    def test_support_and_transactions_carried(self, loaded_conn):
        rules = AssociationRules(loaded_conn, min_support=0.1, min_confidence=0.1).fit()
        row = _rule(rules, "beer", "diapers")
        assert row["support"] == 0.3
        assert row["transactions"] == 3

    def test_min_confidence_drops_single_direction(self, loaded_conn):
        # bread -> beer is 2/7 < 0.3 while beer -> bread is 2/3
        rules = AssociationRules(loaded_conn, min_support=0.1, min_confidence=0.3).fit()
        assert _rule(rules, "bread", "beer") is None
        assert _rule(rules, "beer", "bread") is not None

    def test_min_confidence_respected(self, loaded_conn):
        rules = AssociationRules(loaded_conn, min_support=0.05, min_confidence=0.6).fit()
        for val in rules.column("confidence").to_pylist():
            assert val >= 60

    def test_sorted_by_confidence_descending(self, loaded_conn):
        rules = AssociationRules(loaded_conn, min_support=0.05, min_confidence=0.01).fit()
        conf = rules.column("confidence").to_pylist()
        assert conf == sorted(conf, reverse=True)

    def test_known_rule_set(self, loaded_conn):
        rules = AssociationRules(loaded_conn, min_support=0.1, min_confidence=0.3).fit()
        pairs = [(r["antecedent"], r["consequent"]) for r in rules.to_pylist()]
        assert pairs == [
            ("beer", "diapers"), ("diapers", "beer"),
            ("beer", "bread"), ("diapers", "bread"), ("milk", "bread"),
            ("bread", "milk"),
        ]

    def test_accepts_precomputed_pairs(self, loaded_conn):
        pairs = FrequentPairs(loaded_conn, min_support=0.3).fit()
        rules = AssociationRules(loaded_conn, min_support=0.1, min_confidence=0.1).fit(frequent_pairs=pairs)
        assert {r["antecedent"] for r in rules.to_pylist()} == {"bread", "milk", "beer", "diapers"}
        assert rules.num_rows == 4

    def test_empty_when_no_pairs(self, loaded_conn):
        rules = AssociationRules(loaded_conn, min_support=0.99, min_confidence=0.99).fit()
        assert rules.num_rows == 0
        assert rules.schema == AssociationRules.SCHEMA

    def test_empty_transactions(self, conn):
        load_order_lines(conn, [])
        assert AssociationRules(conn).fit().num_rows == 0

    def test_three_transaction_example(self, conn):
        load_order_lines(conn, [("t1", "A"), ("t1", "B"), ("t2", "A"), ("t2", "B"), ("t3", "A"), ("t3", "C")])
        rules = AssociationRules(conn, min_support=0.3, min_confidence=0.3).fit()
        a_b = _rule(rules, "A", "B")
        assert a_b["confidence"] == 66.7
        assert a_b["lift"] == 1.0
        assert a_b["support"] == pytest.approx(2 / 3)
        assert _rule(rules, "A", "C")["confidence"] == 33.3
        assert _rule(rules, "C", "A")["confidence"] == 100.0

    def test_invalid_min_support_raises(self, loaded_conn):
        with pytest.raises(ValueError):
            AssociationRules(loaded_conn, min_support=-0.1)

    def test_invalid_min_confidence_raises(self, loaded_conn):
        with pytest.raises(ValueError):
            AssociationRules(loaded_conn, min_confidence=0)
        with pytest.raises(ValueError):
            AssociationRules(loaded_conn, min_confidence=1.2)

    def test_lift_zero_when_counts_missing(self):
        assert AssociationRules._lift(2, 0, 3, 10) == 0.0
