import pandas as pd
import pytest

from basketcast.datasets import generate_daily_sales, generate_order_lines
from basketcast.mining.basket_report import analyze_basket


def test_generate_order_lines():
    df = generate_order_lines()
    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == ["order_id", "product_name"]
    assert len(df) == 21
    assert df["order_id"].nunique() == 10


def test_order_lines_known_signals():
    report = analyze_basket(generate_order_lines(), min_support=0.1)
    assert report.stats.total_transactions == 10
    assert report.stats.unique_products == 5
    recs = {(r["antecedent"], r["consequent"]): r for r in report.recommendations.to_pylist()}
    assert set(recs) == {("Pasta", "Tomato Sauce"), ("Tomato Sauce", "Pasta"), ("Croissant", "Coffee"), ("Coffee", "Croissant")}
    assert recs[("Coffee", "Croissant")]["confidence"] == 80.0
    assert recs[("Pasta", "Tomato Sauce")]["lift"] == 3.33
    # Water sells on its own and never makes the cut
    assert all("Water" not in pair for pair in recs)


def test_generate_daily_sales_linear():
    df = generate_daily_sales(days=5, slope=10, intercept=100)
    assert list(df.columns) == ["day", "sales"]
    assert df["day"].tolist() == [1, 2, 3, 4, 5]
    assert df["sales"].tolist() == [110.0, 120.0, 130.0, 140.0, 150.0]


def test_generate_daily_sales_noise_reproducible():
    a = generate_daily_sales(days=20, noise=50, seed=1)
    b = generate_daily_sales(days=20, noise=50, seed=1)
    pd.testing.assert_frame_equal(a, b)
    assert (a["sales"] >= 0).all()


def test_generate_daily_sales_invalid_days():
    with pytest.raises(ValueError):
        generate_daily_sales(days=0)
