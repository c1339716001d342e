# store.py
"""
In-memory store of categories and the mutations allowed on it.

A Store is owned by whoever opened it (the CLI run or the Streamlit session)
and is the only writer of its data file. Every mutation that changes the
contents is persisted before the method returns.
"""

import logging
from typing import Iterator, List, Optional

from models import Category, Expense, parse_amount
from storage import clear_categories, load_categories, save_categories

logger = logging.getLogger(__name__)


class Store:
    def __init__(self, path=None, categories: Optional[List[Category]] = None):
        self.path = path
        self.categories: List[Category] = list(categories or [])

    @classmethod
    def open(cls, path=None) -> "Store":
        return cls(path, load_categories(path))

    def __iter__(self) -> Iterator[Category]:
        return iter(self.categories)

    def __len__(self) -> int:
        return len(self.categories)

    def get_category(self, category_id: str) -> Optional[Category]:
        for c in self.categories:
            if c.id == category_id:
                return c
        return None

    def _persist(self):
        # an empty store never overwrites the document
        if not self.categories:
            logger.debug("Store is empty, skipping save")
            return
        save_categories(self.categories, self.path)

    def add_category(self, name: str) -> Optional[Category]:
        name = (name or "").strip()
        if not name:
            logger.debug("Ignoring category with empty name")
            return None
        category = Category(name=name)
        self.categories.append(category)
        self._persist()
        logger.info("Added category %s (%s)", category.name, category.id)
        return category

    def delete_category(self, category_id: str) -> bool:
        category = self.get_category(category_id)
        if category is None:
            logger.debug("delete_category: unknown category %s", category_id)
            return False
        self.categories.remove(category)
        self._persist()
        logger.info("Deleted category %s with %d expenses", category_id, len(category.expenses))
        return True

    def set_budget(self, category_id: str, raw) -> bool:
        category = self.get_category(category_id)
        if category is None:
            logger.debug("set_budget: unknown category %s", category_id)
            return False
        category.budget = parse_amount(raw)
        self._persist()
        logger.info("Budget of %s set to %d", category_id, category.budget)
        return True

    def add_expense(self, category_id: str, raw_amount, description: Optional[str] = None) -> Optional[Expense]:
        amount = parse_amount(raw_amount)
        if amount <= 0:
            logger.debug("add_expense: discarding non-positive amount %r", raw_amount)
            return None
        category = self.get_category(category_id)
        if category is None:
            logger.debug("add_expense: unknown category %s", category_id)
            return None
        expense = Expense(amount=amount, description=(description or "").strip() or None)
        category.expenses.append(expense)
        self._persist()
        logger.info("Added expense %s of %d to %s", expense.id, amount, category_id)
        return expense

    def delete_expense(self, category_id: str, expense_id: str) -> bool:
        category = self.get_category(category_id)
        expense = category.find_expense(expense_id) if category else None
        if expense is None:
            logger.debug("delete_expense: %s not found in %s", expense_id, category_id)
            return False
        category.expenses.remove(expense)
        self._persist()
        logger.info("Deleted expense %s from %s", expense_id, category_id)
        return True

    def hard_reset(self):
        """Wipes the data file and starts over from the default categories."""
        clear_categories(self.path)
        self.categories = load_categories(self.path)
        logger.info("Hard reset: %d default categories restored", len(self.categories))
