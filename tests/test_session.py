from session import ConfirmationGate, GateState, TrackerSession


def make_session(store):
    return TrackerSession(store)


def test_gate_transitions():
    gate = ConfirmationGate()
    assert gate.state is GateState.IDLE
    assert gate.confirm() is None

    gate.request("food")
    assert gate.state is GateState.PENDING
    gate.cancel()
    assert gate.state is GateState.IDLE
    assert gate.confirm() is None

    gate.request("food")
    assert gate.confirm() == "food"
    assert gate.state is GateState.IDLE


def test_delete_category_requires_confirmation(store):
    session = make_session(store)
    assert session.request_delete_category("food")
    assert session.pending_delete == "food"
    assert store.get_category("food") is not None

    assert session.confirm_delete_category()
    assert store.get_category("food") is None
    assert session.pending_delete is None


def test_cancelled_delete_has_no_effect(store):
    session = make_session(store)
    session.request_delete_category("food")
    session.cancel_delete_category()
    assert session.confirm_delete_category() is False
    assert len(store) == 3


def test_request_delete_unknown_category(store):
    session = make_session(store)
    assert session.request_delete_category("nope") is False
    assert session.pending_delete is None


def test_budget_edit(store):
    session = make_session(store)
    store.set_budget("food", "700")
    assert session.begin_budget_edit("food") == "700"
    assert session.editing_budget == "food"
    assert session.commit_budget_edit("1,500")
    assert store.get_category("food").budget == 1500
    assert session.editing_budget is None


def test_cancelled_budget_edit(store):
    session = make_session(store)
    session.begin_budget_edit("food")
    session.cancel_budget_edit()
    assert session.commit_budget_edit("99") is False
    assert store.get_category("food").budget == 0


def test_only_one_budget_edit_at_a_time(store):
    session = make_session(store)
    session.begin_budget_edit("food")
    session.begin_budget_edit("transport")
    session.commit_budget_edit("40")
    assert store.get_category("transport").budget == 40
    assert store.get_category("food").budget == 0
    assert session.begin_budget_edit("nope") is None


def test_reset_requires_confirmation(store):
    session = make_session(store)
    session.add_category("Rent")
    session.add_expense("food", "100", "bread")

    session.open_reset()
    assert session.reset_pending
    session.cancel_reset()
    assert session.confirm_reset() is False
    assert len(store) == 4

    session.open_reset()
    session.begin_budget_edit("food")
    assert session.confirm_reset()
    assert not session.reset_pending
    assert session.editing_budget is None
    assert [c.id for c in store] == ["food", "supermarket", "transport"]
    assert store.get_category("food").expenses == []


def test_forwarded_mutations(store):
    session = make_session(store)
    category = session.add_category("Gifts")
    expense = session.add_expense(category.id, "2,000", "flowers")
    assert expense.amount == 2000
    assert session.delete_expense(category.id, expense.id)
    assert store.get_category(category.id).expenses == []
