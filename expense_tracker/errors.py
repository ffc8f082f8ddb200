# expense_tracker/errors.py


class ExpenseError(Exception):
    """Base class for expense tracker failures."""


class ValidationError(ExpenseError, ValueError):
    """Raised when form input cannot become an expense."""

    def __init__(self, field, message):
        super().__init__(message)
        self.field = field
        self.message = message


class StoreError(ExpenseError):
    """Raised when the SQLite store rejects a statement."""
