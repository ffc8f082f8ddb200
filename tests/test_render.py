from expense_tracker.core.models import Expense
from expense_tracker.render import format_amount, render_expense, render_screen
from expense_tracker.screen import ScreenView


def test_format_amount():
    assert format_amount(12.5) == '$12.50'
    assert format_amount(None) == '$0.00'


def test_render_expense_includes_note_only_when_present():
    with_note = render_expense(Expense(id=3, amount=4, category='Food', note='tea', date='2025-11-22'))
    assert '$4.00' in with_note and 'Food' in with_note and '(tea)' in with_note
    without = render_expense(Expense(id=4, amount=4, category='Food', note=None, date='2025-11-22'))
    assert '(' not in without


def test_render_screen_lists_categories_in_order():
    view = ScreenView(
        filter='ALL',
        label='All',
        expenses=[Expense(id=1, amount=115, category='Food', date='2025-11-22')],
        total=115.0,
        categories={'Rent': 100.0, 'Food': 15.0},
    )
    lines = render_screen(view).splitlines()
    assert lines[0] == 'Student Expense Tracker'
    assert 'Total Spending (All):' in lines
    assert '$115.00' in lines
    assert lines.index('  Rent: $100.00') < lines.index('  Food: $15.00')
    assert 'No expenses yet.' not in lines
