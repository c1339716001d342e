# viz.py
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd


def plot_budget_vs_spent(df: pd.DataFrame, ax=None, title="Budget vs. spent"):
    """Grouped bars per category; takes analysis.summary_frame output."""
    if ax is None:
        fig, ax = plt.subplots(figsize=(10,4))
    x = np.arange(len(df))
    width = 0.4
    ax.bar(x - width / 2, df["budget"], width, label="Budget")
    ax.bar(x + width / 2, df["spent"], width, label="Spent")
    over = df[df["status"] == "over"]
    if not over.empty:
        ax.scatter(x[(df["status"] == "over").to_numpy()] + width / 2, over["spent"], color="red", zorder=3, label="Over budget")
    ax.set_xticks(x)
    ax.set_xticklabels(df["name"])
    ax.set_title(title)
    ax.set_ylabel("Amount")
    ax.legend()
    plt.tight_layout()
    return ax


def plot_spent_pie(df: pd.DataFrame, ax=None, title="Spending by category"):
    if ax is None:
        fig, ax = plt.subplots(figsize=(6,6))
    spent = df[df["spent"] > 0]
    if spent.empty:
        ax.text(0.5, 0.5, "No expenses yet", ha="center", va="center")
        ax.set_axis_off()
    else:
        ax.pie(spent["spent"], labels=spent["name"], autopct="%1.1f%%")
    ax.set_title(title)
    return ax
