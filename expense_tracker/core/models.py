# expense_tracker/core/models.py
from dataclasses import dataclass
from datetime import date as _date, datetime
from typing import Optional


@dataclass
class Expense:
    id: int
    amount: float
    category: str
    note: Optional[str] = None
    date: Optional[str] = None

    @property
    def day(self) -> Optional[_date]:
        """The stored date parsed, or None when absent or malformed."""
        if not self.date:
            return None
        try:
            return datetime.strptime(str(self.date).strip(), "%Y-%m-%d").date()
        except ValueError:
            return None


@dataclass
class ExpenseInput:
    amount: float
    category: str
    note: Optional[str] = None
