# expense_tracker/cli.py
import logging
import os

import click
from dotenv import load_dotenv

from expense_tracker.config import EDIT_DATE_POLICIES, load_config, save_config
from expense_tracker.database import create_schema
from expense_tracker.errors import StoreError
from expense_tracker.render import render_screen, render_totals
from expense_tracker.screen import INVALID, NOT_FOUND, ExpenseScreen
from expense_tracker.utils import FILTER_LABELS

FILTER_CHOICE = click.Choice([name.lower() for name in FILTER_LABELS], case_sensitive=False)


def _configure_logging(verbose):
    level = "DEBUG" if verbose else os.getenv("EXPENSE_TRACKER_LOG", "WARNING").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "WARNING"
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _open_screen(ctx):
    cfg = ctx.obj
    screen = ExpenseScreen(
        cfg['db_path'],
        edit_date_policy=cfg['edit_date_policy'],
        default_filter=cfg['default_filter'],
    )
    try:
        screen.open()
    except StoreError as e:
        click.echo(f"Error opening {cfg['db_path']}: {e}", err=True)
        ctx.exit(2)
    return screen


def _finish(ctx, result, done_message):
    if result.ok:
        click.echo(done_message)
        return
    if result.status == INVALID:
        click.echo(f"Invalid expense: {result.message}", err=True)
        ctx.exit(1)
    if result.status == NOT_FOUND:
        click.echo(f"No expense with id {result.expense_id}.", err=True)
        ctx.exit(1)
    click.echo(f"Error saving expense: {result.message}", err=True)
    ctx.exit(2)


@click.group()
@click.option(
    '--db', 'db_path',
    default=None,
    type=click.Path(dir_okay=False),
    help='SQLite database file holding the expenses (overrides config)'
)
@click.option(
    '--config', 'config_path',
    default=None,
    type=click.Path(dir_okay=False),
    help='Optional config.yaml'
)
@click.option(
    '--env-file', 'env_file',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Optional .env file with EXPENSE_TRACKER_* settings'
)
@click.option(
    '--edit-date-policy',
    default=None,
    type=click.Choice(EDIT_DATE_POLICIES),
    help='Which date an edited expense keeps: preserve, today or explicit'
)
@click.option('--verbose', '-v', is_flag=True, default=False, help='Log debug output')
@click.pass_context
def main(ctx, db_path, config_path, env_file, edit_date_policy, verbose):
    """
    Record, edit, delete and total discretionary expenses kept in a local
    SQLite database.
    """
    if env_file:
        load_dotenv(env_file)
    _configure_logging(verbose)
    try:
        cfg = load_config(config_path)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='--config')
    if db_path:
        cfg['db_path'] = db_path
    if edit_date_policy:
        cfg['edit_date_policy'] = edit_date_policy
    cfg['config_path'] = config_path
    ctx.obj = cfg


@main.command()
@click.option(
    '--write-config',
    is_flag=True,
    default=False,
    help='Also write the effective settings to the --config path'
)
@click.pass_context
def init(ctx, write_config):
    """Create the expenses table if it does not exist."""
    cfg = ctx.obj
    try:
        create_schema(cfg['db_path'])
    except StoreError as e:
        click.echo(f"Error creating schema: {e}", err=True)
        ctx.exit(2)
    if write_config:
        if not cfg['config_path']:
            raise click.UsageError('--write-config needs --config')
        save_config(
            {k: v for k, v in cfg.items() if k != 'config_path'},
            cfg['config_path'],
        )
        click.echo(f"Wrote settings to {cfg['config_path']}.")
    click.echo(f"Expense store ready at {cfg['db_path']}.")


@main.command('list')
@click.option('--filter', 'window', default=None, type=FILTER_CHOICE, help='all, week or month')
@click.pass_context
def list_cmd(ctx, window):
    """Show totals and the expenses in the chosen filter window."""
    screen = _open_screen(ctx)
    if window:
        screen.set_filter(window)
    click.echo(render_screen(screen.view()))


@main.command()
@click.option('--filter', 'window', default=None, type=FILTER_CHOICE, help='all, week or month')
@click.pass_context
def summary(ctx, window):
    """Show only the total and per-category totals."""
    screen = _open_screen(ctx)
    if window:
        screen.set_filter(window)
    click.echo("\n".join(render_totals(screen.view())))


@main.command()
@click.argument('amount')
@click.argument('category')
@click.option('--note', default='', help='Optional note')
@click.option('--date', 'date_str', default=None, help='YYYY-MM-DD (default: today)')
@click.pass_context
def add(ctx, amount, category, note, date_str):
    """Record a new expense."""
    screen = _open_screen(ctx)
    screen.form.amount = amount
    screen.form.category = category
    screen.form.note = note
    result = screen.submit(date=date_str)
    _finish(ctx, result, f"Added expense #{result.expense_id}.")


@main.command()
@click.argument('expense_id', type=int)
@click.option('--amount', default=None, help='New amount')
@click.option('--category', default=None, help='New category')
@click.option('--note', default=None, help='New note (empty string clears it)')
@click.option('--date', 'date_str', default=None, help='New date, used with --edit-date-policy explicit')
@click.pass_context
def edit(ctx, expense_id, amount, category, note, date_str):
    """Change an existing expense in place."""
    screen = _open_screen(ctx)
    try:
        screen.start_editing(expense_id)
    except KeyError:
        click.echo(f"No expense with id {expense_id}.", err=True)
        ctx.exit(1)
    except StoreError as e:
        click.echo(f"Error loading expense {expense_id}: {e}", err=True)
        ctx.exit(2)
    if amount is not None:
        screen.form.amount = amount
    if category is not None:
        screen.form.category = category
    if note is not None:
        screen.form.note = note
    result = screen.submit(date=date_str)
    _finish(ctx, result, f"Saved expense #{expense_id}.")


@main.command()
@click.argument('expense_id', type=int)
@click.pass_context
def delete(ctx, expense_id):
    """Remove an expense by id."""
    screen = _open_screen(ctx)
    result = screen.delete(expense_id)
    _finish(ctx, result, f"Deleted expense #{expense_id}.")
