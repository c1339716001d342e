# cli.py
import argparse
import logging
import sys
from pathlib import Path

from filelock import Timeout

import config
from analysis import expenses_frame, summary_frame, totals
from session import TrackerSession
from store import Store

logger = logging.getLogger(__name__)


def format_amount(value) -> str:
    return f"{int(value):,} {config.CURRENCY}"


def confirm(prompt: str, assume_yes: bool = False) -> bool:
    if assume_yes:
        return True
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def fail(message: str) -> int:
    print(message, file=sys.stderr)
    return 1


def cmd_list(session, args):
    df = summary_frame(session.store)
    if df.empty:
        print("No categories yet.")
        return 0
    for _, row in df.iterrows():
        print(
            f"{row['id']:<38} {row['name']:<20} "
            f"budget {format_amount(row['budget'])}  "
            f"spent {format_amount(row['spent'])}  "
            f"remaining {format_amount(row['remaining'])}  "
            f"{row['percent_used']:.0f}% ({row['status']})"
        )
    t = totals(session.store)
    print()
    print(f"Total budget:    {format_amount(t.budget)}")
    print(f"Total spent:     {format_amount(t.spent)}")
    print(f"Total remaining: {format_amount(t.remaining)}")
    return 0


def cmd_expenses(session, args):
    category = session.store.get_category(args.category_id)
    if category is None:
        return fail(f"Unknown category: {args.category_id}")
    df = expenses_frame(category)
    print(f"{category.name}: {len(df)} expenses")
    if df.empty:
        print("No expenses yet.")
        return 0
    for _, row in df.iterrows():
        desc = f"  {row['description']}" if row["description"] else ""
        print(f"{row['id']}  {row['date']:%Y-%m-%d}  {format_amount(row['amount'])}{desc}")
    return 0


def cmd_add_category(session, args):
    category = session.add_category(args.name)
    if category is None:
        return fail("Category name is empty, nothing added.")
    print(f"Added category {category.name} ({category.id})")
    return 0


def cmd_delete_category(session, args):
    if not session.request_delete_category(args.category_id):
        return fail(f"Unknown category: {args.category_id}")
    name = session.store.get_category(args.category_id).name
    if not confirm(f"Are you sure you want to delete the category '{name}'?", args.yes):
        session.cancel_delete_category()
        print("Cancelled.")
        return 0
    session.confirm_delete_category()
    print(f"Deleted category {name}")
    return 0


def cmd_set_budget(session, args):
    if session.begin_budget_edit(args.category_id) is None:
        return fail(f"Unknown category: {args.category_id}")
    session.commit_budget_edit(args.amount)
    category = session.store.get_category(args.category_id)
    print(f"Budget of {category.name} set to {format_amount(category.budget)}")
    return 0


def cmd_add_expense(session, args):
    if session.store.get_category(args.category_id) is None:
        return fail(f"Unknown category: {args.category_id}")
    expense = session.add_expense(args.category_id, args.amount, args.description)
    if expense is None:
        print("Amount is not a positive number, nothing added.")
        return 0
    print(f"Saved: {format_amount(expense.amount)} ({expense.id})")
    return 0


def cmd_delete_expense(session, args):
    if not session.delete_expense(args.category_id, args.expense_id):
        return fail(f"Expense {args.expense_id} not found in {args.category_id}")
    print(f"Deleted expense {args.expense_id}")
    return 0


def cmd_reset(session, args):
    session.open_reset()
    prompt = "Delete everything? All categories, budgets and expenses will be permanently deleted."
    if not confirm(prompt, args.yes):
        session.cancel_reset()
        print("Cancelled.")
        return 0
    session.confirm_reset()
    print("All data removed, default categories restored.")
    return 0


def cmd_chart(session, args):
    import matplotlib
    if args.output:
        matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    from viz import plot_budget_vs_spent, plot_spent_pie

    df = summary_frame(session.store)
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14,5))
    plot_budget_vs_spent(df, ax=ax1)
    plot_spent_pie(df, ax=ax2)
    if args.output:
        fig.savefig(args.output)
        plt.close(fig)
        print(f"Chart written to {args.output}")
    else:
        plt.show()
    return 0


def build_parser():
    p = argparse.ArgumentParser("finance-tracker", description="Track category budgets and expenses.")
    p.add_argument("--data", type=Path, default=None,
                   help=f"Path of the data file (default: {config.DATA_PATH})")
    p.add_argument("-v", "--verbose", action="count", default=0, help="More log output (-vv for debug)")
    sub = p.add_subparsers(dest="cmd")

    sub.add_parser("list", help="Show categories and totals")

    e = sub.add_parser("expenses", help="Show the expenses of a category")
    e.add_argument("category_id")

    a = sub.add_parser("add-category", help="Add a category")
    a.add_argument("name")

    d = sub.add_parser("delete-category", help="Delete a category and its expenses")
    d.add_argument("category_id")
    d.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    b = sub.add_parser("set-budget", help="Set the budget of a category")
    b.add_argument("category_id")
    b.add_argument("amount", help="Whole amount, thousands separators allowed, e.g. 1,000,000")

    x = sub.add_parser("add-expense", help="Log an expense")
    x.add_argument("category_id")
    x.add_argument("amount", help="Whole amount, thousands separators allowed")
    x.add_argument("--description", default="", help="Optional description")

    r = sub.add_parser("delete-expense", help="Delete an expense")
    r.add_argument("category_id")
    r.add_argument("expense_id")

    z = sub.add_parser("reset", help="Delete all data and restore the default categories")
    z.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    c = sub.add_parser("chart", help="Plot budget vs. spent")
    c.add_argument("--output", type=Path, default=None, help="Save the chart to a file instead of showing it")
    return p


COMMANDS = {
    "list": cmd_list,
    "expenses": cmd_expenses,
    "add-category": cmd_add_category,
    "delete-category": cmd_delete_category,
    "set-budget": cmd_set_budget,
    "add-expense": cmd_add_expense,
    "delete-expense": cmd_delete_expense,
    "reset": cmd_reset,
    "chart": cmd_chart,
}


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        config.configure_logging(logging.DEBUG if args.verbose > 1 else logging.INFO)
    else:
        config.configure_logging()
    handler = COMMANDS.get(args.cmd)
    if handler is None:
        parser.print_help()
        return 0
    try:
        session = TrackerSession(Store.open(args.data))
        return handler(session, args)
    except Timeout as exc:
        raise SystemExit(f"Data file is locked by another process: {exc.lock_file}")
    except OSError as exc:
        raise SystemExit(f"Failed to access data file: {exc}")


if __name__ == "__main__":
    sys.exit(main())
