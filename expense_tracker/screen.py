"""In-memory state for a single expense screen session.

The screen owns the loaded expense list, the form fields as the user typed
them, the active filter window and the expense being edited, if any. Every
successful mutation resets the form and reloads the full list from SQLite.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, List, Optional, Union

from expense_tracker import database
from expense_tracker.config import validate_edit_date_policy
from expense_tracker.core.models import Expense
from expense_tracker.core.validation import parse_date, validate_expense_input
from expense_tracker.errors import StoreError, ValidationError
from expense_tracker.utils import ALL, normalize_filter, summarize

logger = logging.getLogger(__name__)

OK = "ok"
INVALID = "invalid"
STORE_ERROR = "store_error"
NOT_FOUND = "not_found"


@dataclass
class SubmitResult:
    status: str
    expense_id: Optional[int] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status == OK

    @property
    def message(self) -> str:
        if self.error is None:
            return ""
        return getattr(self.error, "message", None) or str(self.error)


@dataclass
class FormState:
    amount: str = ""
    category: str = ""
    note: str = ""


@dataclass
class ScreenView:
    filter: str
    label: str
    expenses: List[Expense] = field(default_factory=list)
    total: float = 0.0
    categories: Dict[str, float] = field(default_factory=dict)
    editing: bool = False
    submit_label: str = "Add Expense"


class ExpenseScreen:
    def __init__(
        self,
        db_path: str,
        edit_date_policy: str = "preserve",
        today: Callable[[], date] = date.today,
        default_filter: str = ALL,
    ):
        self.db_path = db_path
        self.edit_date_policy = validate_edit_date_policy(edit_date_policy)
        self._today = today
        self.expenses: List[Expense] = []
        self.form = FormState()
        self.filter = normalize_filter(default_filter)
        self.editing: Optional[Expense] = None

    def open(self) -> None:
        database.create_schema(self.db_path)
        self.reload()

    def reload(self) -> None:
        self.expenses = database.list_expenses(self.db_path)

    def set_filter(self, window: str) -> None:
        self.filter = normalize_filter(window)

    def find(self, expense_id: int) -> Optional[Expense]:
        return next((e for e in self.expenses if e.id == expense_id), None)

    def start_editing(self, expense_id: int) -> Expense:
        """Bind the form to a loaded expense so the next submit updates it."""
        expense = self.find(expense_id) or database.get_expense(self.db_path, expense_id)
        if expense is None:
            raise KeyError(expense_id)
        self.editing = expense
        self.form = FormState(
            amount=_format_amount_input(expense.amount),
            category=expense.category or "",
            note=expense.note or "",
        )
        return expense

    def cancel_editing(self) -> None:
        self.editing = None
        self.form = FormState()

    def _resolve_date(self, requested: Optional[str]) -> str:
        today = self._today().isoformat()
        if self.editing is None:
            return requested or today
        if self.edit_date_policy == "today":
            return today
        if self.edit_date_policy == "explicit" and requested:
            return requested
        return self.editing.date or today

    def submit(self, date: Union[str, date, None] = None) -> SubmitResult:
        """Insert a new expense or save the one being edited.

        Validation failures leave the form untouched and nothing is written.
        Store failures are reported in the result rather than raised.
        """
        try:
            values = validate_expense_input(
                self.form.amount, self.form.category, self.form.note
            )
            requested = parse_date(date)
        except ValidationError as exc:
            logger.info("Rejected expense input (%s): %s", exc.field, exc.message)
            return SubmitResult(INVALID, error=exc)

        target = self.editing
        stored_date = self._resolve_date(requested)
        try:
            if target is None:
                expense_id = database.insert_expense(
                    self.db_path, values.amount, values.category, values.note, stored_date
                )
            else:
                expense_id = target.id
                updated = database.update_expense(
                    self.db_path, expense_id, values.amount, values.category, values.note, stored_date
                )
        except StoreError as exc:
            logger.warning("Could not save expense: %s", exc)
            return SubmitResult(STORE_ERROR, expense_id=target.id if target else None, error=exc)

        if target is not None and not updated:
            logger.warning("Expense %s vanished before it could be saved", expense_id)
            self.cancel_editing()
            self.reload()
            return SubmitResult(NOT_FOUND, expense_id=expense_id)

        self.cancel_editing()
        self.reload()
        return SubmitResult(OK, expense_id=expense_id)

    def delete(self, expense_id: int) -> SubmitResult:
        try:
            removed = database.delete_expense(self.db_path, expense_id)
        except StoreError as exc:
            logger.warning("Could not delete expense %s: %s", expense_id, exc)
            return SubmitResult(STORE_ERROR, expense_id=expense_id, error=exc)
        if not removed:
            return SubmitResult(NOT_FOUND, expense_id=expense_id)
        if self.editing is not None and self.editing.id == expense_id:
            self.cancel_editing()
        self.reload()
        return SubmitResult(OK, expense_id=expense_id)

    def view(self) -> ScreenView:
        summary = summarize(self.expenses, self.filter, self._today())
        return ScreenView(
            filter=summary.window,
            label=summary.label,
            expenses=summary.expenses,
            total=summary.total,
            categories=summary.categories,
            editing=self.editing is not None,
            submit_label="Save Changes" if self.editing is not None else "Add Expense",
        )


def _format_amount_input(amount: float) -> str:
    # 12.0 -> "12", 12.5 -> "12.5"
    text = repr(float(amount))
    return text[:-2] if text.endswith(".0") else text
