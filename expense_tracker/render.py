# expense_tracker/render.py
from typing import List

from expense_tracker.core.models import Expense
from expense_tracker.screen import ScreenView

HEADING = "Student Expense Tracker"
EMPTY_CATEGORIES = "No data for this filter."
EMPTY_LIST = "No expenses yet."


def format_amount(amount) -> str:
    return f"${float(amount or 0):.2f}"


def render_totals(view: ScreenView) -> List[str]:
    lines = [
        f"Total Spending ({view.label}):",
        format_amount(view.total),
        "By Category:",
    ]
    if not view.categories:
        lines.append(f"  {EMPTY_CATEGORIES}")
    for cat, amt in view.categories.items():
        lines.append(f"  {cat}: {format_amount(amt)}")
    return lines


def render_expense(expense: Expense) -> str:
    line = f"#{expense.id:<4} {format_amount(expense.amount):>10}  {expense.category}  {expense.date or '-'}"
    if expense.note:
        line += f"  ({expense.note})"
    return line


def render_screen(view: ScreenView) -> str:
    """Render the whole screen: heading, totals card, then the expense list."""
    lines = [HEADING, ""]
    lines.extend(render_totals(view))
    lines.append("")
    if not view.expenses:
        lines.append(EMPTY_LIST)
    lines.extend(render_expense(e) for e in view.expenses)
    return "\n".join(lines)
