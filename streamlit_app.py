# streamlit_app.py
"""
Finance Tracker (Streamlit).

One card per category with its budget, spending and expenses, plus a summary
of all categories. Reads and writes the JSON data file through Store;
run with `streamlit run streamlit_app.py`.
"""

import streamlit as st
import plotly.express as px

import config
from analysis import budget_status, expenses_frame, percent_used, remaining, summary_frame, total_spent, totals
from session import TrackerSession
from store import Store

st.set_page_config(page_title="Finance Tracker", layout="wide")
config.configure_logging()

if "tracker" not in st.session_state:
    st.session_state.tracker = TrackerSession(Store.open())
tracker: TrackerSession = st.session_state.tracker


def money(value) -> str:
    return f"{int(value):,} {config.CURRENCY}"


# -----------------------
# Header & reset
# -----------------------
head_left, head_right = st.columns([5, 1])
with head_left:
    st.title("💰 Finance Tracker")
with head_right:
    if st.button("Reset All", help="Hard Reset - Clear All Data"):
        tracker.open_reset()
        st.rerun()

if tracker.reset_pending:
    with st.container(border=True):
        st.subheader("⚠️ Delete Everything?")
        st.write("All categories, budgets, and expenses will be permanently deleted. This action cannot be undone.")
        col1, col2 = st.columns(2)
        if col1.button("Cancel", key="reset_cancel"):
            tracker.cancel_reset()
            st.rerun()
        if col2.button("Delete All", key="reset_confirm", type="primary"):
            tracker.confirm_reset()
            st.rerun()

# -----------------------
# Add category
# -----------------------
with st.expander("+ Add Category"):
    with st.form("add_cat_form", clear_on_submit=True):
        new_cat = st.text_input("Category name")
        if st.form_submit_button("Add") and tracker.add_category(new_cat):
            st.rerun()


# -----------------------
# Category cards
# -----------------------
def category_card(category):
    spent = total_spent(category.expenses)
    left = remaining(category.budget, category.expenses)
    pct = percent_used(category.budget, category.expenses)
    status = budget_status(category.budget, category.expenses)

    top, close = st.columns([5, 1])
    top.subheader(category.name)
    if close.button("×", key=f"del_cat_{category.id}", help="Delete category"):
        tracker.request_delete_category(category.id)
        st.rerun()

    if tracker.pending_delete == category.id:
        st.warning("Are you sure you want to delete this category?")
        c1, c2 = st.columns(2)
        if c1.button("Cancel", key=f"del_cancel_{category.id}"):
            tracker.cancel_delete_category()
            st.rerun()
        if c2.button("Delete", key=f"del_confirm_{category.id}", type="primary"):
            tracker.confirm_delete_category()
            st.rerun()

    # budget
    if tracker.editing_budget == category.id:
        with st.form(f"budget_{category.id}"):
            raw = st.text_input("Budget", value=str(category.budget), placeholder="Enter budget", key=f"budget_input_{category.id}")
            b1, b2 = st.columns(2)
            if b1.form_submit_button("Set"):
                tracker.commit_budget_edit(raw)
                st.rerun()
            if b2.form_submit_button("Cancel"):
                tracker.cancel_budget_edit()
                st.rerun()
    else:
        st.caption("Budget")
        if st.button(money(category.budget), key=f"edit_budget_{category.id}"):
            tracker.begin_budget_edit(category.id)
            st.rerun()

    # stats
    s1, s2 = st.columns(2)
    s1.metric("Spent", f"{spent:,}")
    s2.metric("Remaining", f"{left:,}")
    st.progress(min(pct, 100) / 100)
    label = f"{pct:.0f}%"
    if status == "over":
        st.error(label)
    elif status == "warning":
        st.warning(label)
    else:
        st.caption(label)

    # add expense
    with st.form(f"expense_{category.id}", clear_on_submit=True):
        description = st.text_input("Description", key=f"desc_{category.id}")
        amount = st.text_input("Amount", key=f"amount_{category.id}")
        if st.form_submit_button("Add"):
            tracker.add_expense(category.id, amount, description)
            st.rerun()

    # expenses, newest first
    df = expenses_frame(category)
    st.caption(f"Expenses ({len(df)})")
    if df.empty:
        st.caption("No expenses yet")
    for _, row in df.iterrows():
        e1, e2 = st.columns([5, 1])
        text = f"**{money(row['amount'])}** · {row['date']:%Y-%m-%d}"
        if row["description"]:
            text = f"{row['description']}  \n" + text
        e1.markdown(text)
        if e2.button("×", key=f"del_exp_{category.id}_{row['id']}", help="Delete expense"):
            tracker.delete_expense(category.id, row["id"])
            st.rerun()


categories = list(tracker.store)
for start in range(0, len(categories), 3):
    cols = st.columns(3)
    for col, category in zip(cols, categories[start:start + 3]):
        with col:
            with st.container(border=True):
                category_card(category)

# -----------------------
# Summary
# -----------------------
if categories:
    st.markdown("---")
    st.subheader("Summary")
    t = totals(categories)
    m1, m2, m3 = st.columns(3)
    m1.metric("Total Budget", money(t.budget))
    m2.metric("Total Spent", money(t.spent))
    m3.metric("Total Remaining", money(t.remaining))

    summary = summary_frame(categories)
    chart_df = summary.melt(id_vars=["name"], value_vars=["budget", "spent"], var_name="kind", value_name="amount")
    fig = px.bar(chart_df, x="name", y="amount", color="kind", barmode="group",
                 title="Budget vs. spent", labels={"name": "Category", "amount": "Amount"})
    st.plotly_chart(fig, use_container_width=True)
