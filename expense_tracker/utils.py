# expense_tracker/utils.py
from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from expense_tracker.core.models import Expense

ALL = "ALL"
WEEK = "WEEK"
MONTH = "MONTH"

FILTER_LABELS: Dict[str, str] = {
    ALL: "All",
    WEEK: "This Week",
    MONTH: "This Month",
}

OTHER_CATEGORY = "Other"


def normalize_filter(window: str) -> str:
    """Return the canonical filter name, accepting any letter case."""
    name = str(window or "").strip().upper()
    if name not in FILTER_LABELS:
        raise ValueError(
            f"Unknown filter '{window}'. Expected one of: {', '.join(FILTER_LABELS)}."
        )
    return name


def week_bounds(today: date) -> Tuple[date, date]:
    """
    Return the Sunday and Saturday of the calendar week containing *today*.
    """
    # date.weekday() counts from Monday == 0
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def month_bounds(today: date) -> Tuple[date, date]:
    """
    Return the first and last day of the calendar month containing *today*.
    """
    last_day = monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def window_bounds(window: str, today: Optional[date] = None) -> Optional[Tuple[date, date]]:
    window = normalize_filter(window)
    today = today or date.today()
    if window == WEEK:
        return week_bounds(today)
    if window == MONTH:
        return month_bounds(today)
    return None


def filter_expenses(
    expenses: Iterable[Expense],
    window: str,
    today: Optional[date] = None,
) -> List[Expense]:
    """
    Return only those expenses whose date falls in the given filter window.

    ``ALL`` keeps every expense, including ones without a usable date. The
    ``WEEK`` and ``MONTH`` windows drop expenses whose date is missing or
    cannot be parsed.
    """
    bounds = window_bounds(window, today)
    if bounds is None:
        return list(expenses)
    start, end = bounds
    kept = []
    for expense in expenses:
        day = expense.day
        if day is not None and start <= day <= end:
            kept.append(expense)
    return kept


def _amount(expense: Expense) -> float:
    try:
        return float(expense.amount or 0)
    except (TypeError, ValueError):
        return 0.0


def total_spending(expenses: Iterable[Expense]) -> float:
    return sum((_amount(e) for e in expenses), 0.0)


def category_totals(expenses: Iterable[Expense]) -> Dict[str, float]:
    """
    Sum amounts per category in first-encounter order.

    Expenses without a category are grouped under ``Other``.
    """
    totals: Dict[str, float] = {}
    for expense in expenses:
        cat = expense.category or OTHER_CATEGORY
        totals[cat] = totals.get(cat, 0.0) + _amount(expense)
    return totals


@dataclass
class Summary:
    window: str
    label: str
    expenses: List[Expense] = field(default_factory=list)
    total: float = 0.0
    categories: Dict[str, float] = field(default_factory=dict)


def summarize(
    expenses: Iterable[Expense],
    window: str = ALL,
    today: Optional[date] = None,
) -> Summary:
    window = normalize_filter(window)
    filtered = filter_expenses(expenses, window, today)
    return Summary(
        window=window,
        label=FILTER_LABELS[window],
        expenses=filtered,
        total=total_spending(filtered),
        categories=category_totals(filtered),
    )
