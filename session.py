# session.py
"""
User-facing actions on top of a Store.

Deleting a category and resetting everything both go through a
ConfirmationGate: the request only arms the gate, nothing changes until
confirm() is called, and cancel() drops the request.
"""

import logging
from enum import Enum
from typing import Optional

from models import Category, Expense
from store import Store

logger = logging.getLogger(__name__)


class GateState(Enum):
    IDLE = "idle"
    PENDING = "pending"


class ConfirmationGate:
    def __init__(self):
        self.state = GateState.IDLE
        self.target = None

    @property
    def pending(self) -> bool:
        return self.state is GateState.PENDING

    def request(self, target=True):
        self.state = GateState.PENDING
        self.target = target

    def cancel(self):
        self.state = GateState.IDLE
        self.target = None

    def confirm(self):
        """Returns the pending target, or None when nothing was requested."""
        if self.state is not GateState.PENDING:
            return None
        target = self.target
        self.cancel()
        return target


class TrackerSession:
    def __init__(self, store: Store):
        self.store = store
        self.delete_gate = ConfirmationGate()
        self.reset_gate = ConfirmationGate()
        self._editing_budget: Optional[str] = None

    @property
    def editing_budget(self) -> Optional[str]:
        return self._editing_budget

    @property
    def pending_delete(self) -> Optional[str]:
        return self.delete_gate.target if self.delete_gate.pending else None

    @property
    def reset_pending(self) -> bool:
        return self.reset_gate.pending

    # plain mutations

    def add_category(self, name: str) -> Optional[Category]:
        return self.store.add_category(name)

    def add_expense(self, category_id: str, raw_amount, description: Optional[str] = None) -> Optional[Expense]:
        return self.store.add_expense(category_id, raw_amount, description)

    def delete_expense(self, category_id: str, expense_id: str) -> bool:
        return self.store.delete_expense(category_id, expense_id)

    # delete category

    def request_delete_category(self, category_id: str) -> bool:
        if self.store.get_category(category_id) is None:
            return False
        self.delete_gate.request(category_id)
        return True

    def confirm_delete_category(self) -> bool:
        category_id = self.delete_gate.confirm()
        if category_id is None:
            return False
        if self._editing_budget == category_id:
            self._editing_budget = None
        return self.store.delete_category(category_id)

    def cancel_delete_category(self):
        self.delete_gate.cancel()

    # budget editing

    def begin_budget_edit(self, category_id: str) -> Optional[str]:
        category = self.store.get_category(category_id)
        if category is None:
            return None
        self._editing_budget = category_id
        return str(category.budget)

    def commit_budget_edit(self, raw) -> bool:
        category_id = self._editing_budget
        if category_id is None:
            return False
        self._editing_budget = None
        return self.store.set_budget(category_id, raw)

    def cancel_budget_edit(self):
        self._editing_budget = None

    # hard reset

    def open_reset(self):
        self.reset_gate.request()

    def confirm_reset(self) -> bool:
        if not self.reset_gate.confirm():
            return False
        self.delete_gate.cancel()
        self._editing_budget = None
        self.store.hard_reset()
        logger.info("Session reset")
        return True

    def cancel_reset(self):
        self.reset_gate.cancel()
