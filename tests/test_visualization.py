from datetime import date

from expense_dashboard import visualization as viz
from expense_dashboard.models import CategoryShare, PeriodSummary


def test_pie_chart_has_one_slice_per_category():
    shares = [
        CategoryShare("Food", 400.0, 66.67),
        CategoryShare("Transport", 200.0, 33.33),
    ]
    fig = viz.create_category_pie_chart(shares, title="Expenses")

    assert fig.layout.title.text == "Expenses"
    assert list(fig.data[0].labels) == ["Food", "Transport"]
    assert list(fig.data[0].values) == [400.0, 200.0]


def test_pie_chart_empty_or_zero():
    assert viz.create_category_pie_chart([]).layout.title.text == "No data to display"
    zero = [CategoryShare("Food", 0.0, 0.0)]
    assert viz.create_category_pie_chart(zero).layout.title.text == "No data to display"


def test_income_expense_bar_chart():
    fig = viz.create_income_expense_bar_chart(2000, 600)
    assert list(fig.data[0].x) == ["Income", "Expenses"]
    assert list(fig.data[0].y) == [2000, 600]


def test_monthly_trend_chart():
    periods = [
        PeriodSummary(date(2025, 2, 1), "Feb 2025", 900.0, 1800.0, 900.0),
        PeriodSummary(date(2025, 3, 1), "Mar 2025", 600.0, 2000.0, 1400.0),
    ]
    fig = viz.create_monthly_trend_chart(periods)

    assert [trace.name for trace in fig.data] == ["Expenses", "Income"]
    assert list(fig.data[0].x) == ["Feb 2025", "Mar 2025"]
    assert list(fig.data[0].y) == [900.0, 600.0]


def test_monthly_trend_chart_empty():
    assert viz.create_monthly_trend_chart([]).layout.title.text == "No data to display"
