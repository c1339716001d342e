import pytest

from analysis import (
    budget_status,
    expenses_frame,
    percent_used,
    remaining,
    summary_frame,
    total_spent,
    totals,
    SUMMARY_COLUMNS,
)
from models import Category, Expense


def expenses(*amounts):
    return [Expense(amount=a) for a in amounts]


def test_total_spent():
    assert total_spent([]) == 0
    assert total_spent(expenses(10, 20, 30)) == 60


@pytest.mark.parametrize("budget, amounts, expected", [
    (100, (30, 20), 50),
    (100, (), 100),
    (0, (40,), -40),
    (50, (60, 10), -20),
])
def test_remaining_can_go_negative(budget, amounts, expected):
    assert remaining(budget, expenses(*amounts)) == expected
    assert remaining(budget, expenses(*amounts)) == budget - total_spent(expenses(*amounts))


def test_percent_used():
    assert percent_used(200, expenses(50)) == 25
    assert percent_used(100, expenses(150)) == 150
    assert percent_used(0, expenses(1000)) == 0
    assert percent_used(0, []) == 0


def test_budget_status_thresholds():
    assert budget_status(100, expenses(80)) == "ok"
    assert budget_status(100, expenses(81)) == "warning"
    assert budget_status(100, expenses(100)) == "warning"
    assert budget_status(100, expenses(101)) == "over"
    assert budget_status(0, expenses(5)) == "ok"


def test_totals_across_categories():
    categories = [
        Category(name="Food", budget=1000, expenses=expenses(300, 200)),
        Category(name="Transport", budget=100, expenses=expenses(250)),
        Category(name="Empty"),
    ]
    t = totals(categories)
    assert (t.budget, t.spent, t.remaining) == (1100, 750, 350)
    assert totals([]) == (0, 0, 0)


def test_summary_frame():
    categories = [
        Category(id="food", name="Food", budget=1000, expenses=expenses(250, 250)),
        Category(id="bus", name="Bus", budget=0, expenses=expenses(40)),
        Category(id="rent", name="Rent", budget=200, expenses=expenses(300)),
    ]
    df = summary_frame(categories)
    assert list(df.columns) == SUMMARY_COLUMNS
    assert df["id"].tolist() == ["food", "bus", "rent"]
    assert df["spent"].tolist() == [500, 40, 300]
    assert df["remaining"].tolist() == [500, -40, -100]
    assert df["percent_used"].tolist() == [50.0, 0.0, 150.0]
    assert df["expenses"].tolist() == [2, 1, 1]
    assert df["status"].tolist() == ["ok", "ok", "over"]


def test_summary_frame_empty():
    df = summary_frame([])
    assert df.empty
    assert list(df.columns) == SUMMARY_COLUMNS


def test_expenses_frame_newest_first():
    category = Category(name="Food", expenses=[
        Expense(amount=1, id="first"),
        Expense(amount=2, id="second", description="tea"),
    ])
    df = expenses_frame(category)
    assert df["id"].tolist() == ["second", "first"]
    assert df["description"].tolist() == ["tea", ""]
    assert expenses_frame(Category(name="Empty")).empty
