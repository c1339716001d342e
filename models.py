# models.py

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

# leading, optionally signed integer once thousands separators are gone
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_THOUSANDS_SEPARATORS = (",", "٬")


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def parse_amount(raw) -> int:
    """
    Lenient integer parsing for user input.
    "1,000,000" -> 1000000, "12abc" -> 12, "abc" -> 0, "-50" -> 0.
    Any Unicode decimal digits count, so Persian "۱٬۲۰۰" -> 1200 too.
    Never raises; anything unusable becomes 0.
    """
    if isinstance(raw, bool) or raw is None:
        return 0
    if isinstance(raw, (int, float)):
        if raw != raw or raw in (float("inf"), float("-inf")):
            return 0
        return max(0, int(raw))
    if not isinstance(raw, str):
        return 0
    text = raw
    for sep in _THOUSANDS_SEPARATORS:
        text = text.replace(sep, "")
    m = _LEADING_INT.match(text)
    if not m:
        return 0
    try:
        value = int(m.group(1))
    except ValueError:
        return 0
    return max(0, value)


# values read back from disk go through the same rules as user input
normalize_amount = parse_amount


def format_timestamp(ts: datetime) -> str:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    ts = ts.astimezone(timezone.utc)
    return ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value) -> datetime:
    if isinstance(value, datetime):
        ts = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        ts = datetime.fromisoformat(text)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


@dataclass
class Expense:
    amount: int
    date: datetime = field(default_factory=utc_now)
    description: Optional[str] = None
    id: str = field(default_factory=new_id)

    def to_dict(self) -> Dict[str, Any]:
        d = {
            "id": self.id,
            "amount": int(self.amount),
            "date": format_timestamp(self.date),
        }
        if self.description:
            d["description"] = self.description
        return d

    @staticmethod
    def from_dict(d):
        raw_date = d.get("date")
        try:
            date = parse_timestamp(raw_date) if raw_date else utc_now()
        except (TypeError, ValueError):
            date = utc_now()
        description = d.get("description") or None
        return Expense(
            id=str(d.get("id") or new_id()),
            amount=normalize_amount(d.get("amount")),
            date=date,
            description=str(description) if description is not None else None,
        )


@dataclass
class Category:
    name: str
    budget: int = 0
    expenses: List[Expense] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    def find_expense(self, expense_id: str) -> Optional[Expense]:
        for e in self.expenses:
            if e.id == expense_id:
                return e
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "budget": int(self.budget),
            "expenses": [e.to_dict() for e in self.expenses],
        }

    @staticmethod
    def from_dict(d):
        expenses = d.get("expenses") or []
        if not isinstance(expenses, list):
            expenses = []
        return Category(
            id=str(d.get("id") or new_id()),
            name=str(d.get("name") or ""),
            budget=normalize_amount(d.get("budget", 0)),
            expenses=[Expense.from_dict(e) for e in expenses if isinstance(e, dict)],
        )
