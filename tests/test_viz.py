import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from analysis import summary_frame
from models import Category, Expense
from viz import plot_budget_vs_spent, plot_spent_pie


def sample():
    return summary_frame([
        Category(name="Food", budget=100, expenses=[Expense(amount=150)]),
        Category(name="Bus", budget=50, expenses=[Expense(amount=10)]),
        Category(name="Rent", budget=500),
    ])


def test_budget_vs_spent_draws_two_bars_per_category():
    ax = plot_budget_vs_spent(sample())
    assert len(ax.patches) == 6
    assert [t.get_text() for t in ax.get_xticklabels()] == ["Food", "Bus", "Rent"]
    plt.close("all")


def test_pie_skips_categories_without_spending():
    ax = plot_spent_pie(sample())
    labels = [t.get_text() for t in ax.texts]
    assert "Food" in labels and "Bus" in labels
    assert "Rent" not in labels
    plt.close("all")


def test_pie_without_expenses():
    ax = plot_spent_pie(summary_frame([Category(name="Food")]))
    assert ax.texts[0].get_text() == "No expenses yet"
    plt.close("all")
