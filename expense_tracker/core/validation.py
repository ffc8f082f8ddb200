# expense_tracker/core/validation.py
import math
from datetime import date, datetime
from typing import Optional, Union

from expense_tracker.core.models import ExpenseInput
from expense_tracker.errors import ValidationError


def parse_amount(value) -> float:
    """Parse an entered amount, rejecting anything that is not a positive number."""
    if value is None:
        raise ValidationError("amount", "Amount is required.")
    if isinstance(value, bool):
        raise ValidationError("amount", f"Amount must be a number, got {value!r}.")
    text = str(value).strip()
    # float() also takes "1_000"
    if "_" in text:
        raise ValidationError("amount", f"Amount must be a number, got {value!r}.")
    try:
        amount = float(text)
    except ValueError:
        raise ValidationError("amount", f"Amount must be a number, got {value!r}.") from None
    if math.isnan(amount) or math.isinf(amount):
        raise ValidationError("amount", f"Amount must be a finite number, got {value!r}.")
    if amount <= 0:
        raise ValidationError("amount", "Amount must be greater than zero.")
    return amount


def parse_date(value: Union[str, date, None]) -> Optional[str]:
    """Normalize a user supplied date to ``YYYY-MM-DD`` text."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value).strip()
    if not text:
        return None
    try:
        return datetime.strptime(text, "%Y-%m-%d").date().isoformat()
    except ValueError:
        raise ValidationError("date", f"Date must be YYYY-MM-DD, got {value!r}.") from None


def validate_expense_input(amount, category, note=None) -> ExpenseInput:
    """Check form values before an insert or update.

    The category is trimmed and must not be empty; a blank note is stored as
    ``None``.
    """
    parsed = parse_amount(amount)
    trimmed_category = (category or "").strip()
    if not trimmed_category:
        raise ValidationError("category", "Category must not be empty.")
    trimmed_note = (note or "").strip()
    return ExpenseInput(
        amount=parsed,
        category=trimmed_category,
        note=trimmed_note or None,
    )
