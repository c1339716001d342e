# analysis.py
from typing import Iterable, NamedTuple

import numpy as np
import pandas as pd

from models import Category, Expense

SUMMARY_COLUMNS = ["id", "name", "budget", "spent", "remaining", "percent_used", "expenses", "status"]
EXPENSE_COLUMNS = ["id", "date", "amount", "description"]

WARNING_PERCENT = 80
OVER_PERCENT = 100


class Totals(NamedTuple):
    budget: int
    spent: int
    remaining: int


def total_spent(expenses: Iterable[Expense]) -> int:
    return sum(e.amount for e in expenses)


def remaining(budget: int, expenses: Iterable[Expense]) -> int:
    return budget - total_spent(expenses)


def percent_used(budget: int, expenses: Iterable[Expense]) -> float:
    if budget <= 0:
        return 0.0
    return total_spent(expenses) / budget * 100


def _status(percent: float) -> str:
    if percent > OVER_PERCENT:
        return "over"
    if percent > WARNING_PERCENT:
        return "warning"
    return "ok"


def budget_status(budget: int, expenses: Iterable[Expense]) -> str:
    """'over' past 100% of the budget, 'warning' past 80%, else 'ok'."""
    return _status(percent_used(budget, expenses))


def totals(categories: Iterable[Category]) -> Totals:
    budget = spent = 0
    for c in categories:
        budget += c.budget
        spent += total_spent(c.expenses)
    return Totals(budget=budget, spent=spent, remaining=budget - spent)


def summary_frame(categories: Iterable[Category]) -> pd.DataFrame:
    """
    One row per category in store order with its derived values.
    """
    rows = [
        {
            "id": c.id,
            "name": c.name,
            "budget": c.budget,
            "spent": total_spent(c.expenses),
            "expenses": len(c.expenses),
        }
        for c in categories
    ]
    if not rows:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = pd.DataFrame(rows)
    df["remaining"] = df["budget"] - df["spent"]
    budget = df["budget"].astype(float)
    safe_budget = budget.where(budget > 0, 1.0)
    df["percent_used"] = np.where(budget > 0, df["spent"] / safe_budget * 100, 0.0)
    df["status"] = df["percent_used"].map(_status)
    return df[SUMMARY_COLUMNS]


def expenses_frame(category: Category) -> pd.DataFrame:
    """The category's expenses, newest first."""
    if not category.expenses:
        return pd.DataFrame(columns=EXPENSE_COLUMNS)
    df = pd.DataFrame(
        [
            {"id": e.id, "date": e.date, "amount": e.amount, "description": e.description or ""}
            for e in category.expenses
        ]
    )
    return df.iloc[::-1].reset_index(drop=True)[EXPENSE_COLUMNS]
