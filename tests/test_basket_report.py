"""Tests for the end-to-end basket analysis."""

import pytest
import pyarrow as pa

from basketcast.config import BasketOptions
from basketcast.mining.basket_report import BasketReport, BasketStats, analyze_basket


class TestAnalyzeBasket:

    def test_stats(self, order_lines_df):
        report = analyze_basket(order_lines_df, min_support=0.1)
        # 20 distinct (order, product) rows over 10 orders
        assert report.stats == BasketStats(total_transactions=10, avg_items_per_transaction=2.0, unique_products=4)

    def test_recommendations(self, order_lines_df):
        report = analyze_basket(order_lines_df, min_support=0.1)
        recs = report.recommendations.to_pylist()
        assert [(r["antecedent"], r["consequent"]) for r in recs] == [("beer", "diapers"), ("diapers", "beer")]
        assert {r["strength"] for r in recs} == {"High"}
        assert recs[0]["uplift_potential"] == 233

    def test_three_transaction_round_trip(self):
        records = [("t1", "A"), ("t1", "B"), ("t2", "A"), ("t2", "B"), ("t3", "A"), ("t3", "C")]
        report = analyze_basket(records, min_support=0.3, min_confidence=0.3)
        pairs = {(p["item_a"], p["item_b"]): p for p in report.frequent_pairs.to_pylist()}
        assert pairs[("A", "B")]["count"] == 2
        assert round(pairs[("A", "B")]["support"] * 100, 1) == 66.7
        assert pairs[("A", "C")]["count"] == 1
        assert round(pairs[("A", "C")]["support"] * 100, 1) == 33.3
        # every rule has lift exactly 1, so nothing qualifies as a cross-sell
        assert set(report.rules.column("lift").to_pylist()) == {1.0}
        assert report.recommendations.num_rows == 0

    def test_average_basket_size_rounded(self):
        report = analyze_basket([("a", "X"), ("a", "Y"), ("b", "X"), ("c", "Z")])
        assert report.stats.avg_items_per_transaction == 1.3

    def test_empty_input(self):
        report = analyze_basket([])
        assert report.is_empty
        assert report.stats.total_transactions == 0
        assert report.stats.avg_items_per_transaction == 0
        assert report.recommendations.num_rows == 0
        assert report.frequent_pairs.num_rows == 0
        assert report.rules.num_rows == 0

    def test_only_unusable_lines(self):
        report = analyze_basket([{"order_id": None, "product_name": "A"}])
        assert report.is_empty

    def test_top_n_caps(self, order_lines_df):
        report = analyze_basket(order_lines_df, min_support=0.05, min_confidence=0.01, top_n=1)
        assert report.frequent_pairs.num_rows == 1
        assert report.rules.num_rows == 2
        assert report.recommendations.num_rows == 1

    def test_transactions_included(self, order_lines_df):
        report = analyze_basket(order_lines_df)
        assert report.transactions.num_rows == 10

    def test_options_object(self, order_lines_df):
        report = analyze_basket(order_lines_df, BasketOptions(min_support=0.3, top_n=5))
        assert report.frequent_pairs.num_rows == 2

    def test_invalid_options_raise(self, order_lines_df):
        with pytest.raises(ValueError):
            analyze_basket(order_lines_df, min_support=0)
        with pytest.raises(ValueError):
            analyze_basket(order_lines_df, min_confidence=1.5)

    def test_calls_are_independent(self, order_lines_df):
        first = analyze_basket(order_lines_df, min_support=0.1)
        analyze_basket([("x", "P"), ("x", "Q")])
        again = analyze_basket(order_lines_df, min_support=0.1)
        assert first.to_dict() == again.to_dict()

    def test_to_dict(self, order_lines_df):
        data = analyze_basket(order_lines_df, min_support=0.1).to_dict()
        assert set(data) == {"transactions", "frequent_pairs", "rules", "recommendations", "stats"}
        assert data["stats"]["total_transactions"] == 10
        assert isinstance(data["recommendations"], list)
