import logging
import sqlite3
from pathlib import Path
from typing import List, Optional

from expense_tracker.core.models import Expense
from expense_tracker.errors import StoreError

logger = logging.getLogger(__name__)

_COLUMNS = "id, amount, category, note, date"


def _init_db(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS expenses (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            amount REAL NOT NULL,
            category TEXT NOT NULL,
            note TEXT,
            date TEXT NOT NULL
        )
        """
    )
    conn.commit()


def _connect(db_path: str) -> sqlite3.Connection:
    path = Path(db_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(path)
        _init_db(conn)
    except (sqlite3.Error, OSError) as exc:
        raise StoreError(f"Could not open expense store {db_path}: {exc}") from exc
    return conn


def _row_to_expense(row) -> Expense:
    return Expense(
        id=int(row[0]),
        amount=float(row[1]) if row[1] is not None else 0.0,
        category=row[2],
        note=row[3],
        date=row[4],
    )


def create_schema(db_path: str) -> None:
    """Create the ``expenses`` table in ``db_path`` when it does not exist."""
    conn = _connect(db_path)
    conn.close()


def list_expenses(db_path: str) -> List[Expense]:
    """Return every stored expense, newest insertion first."""
    conn = _connect(db_path)
    try:
        rows = conn.execute(
            f"SELECT {_COLUMNS} FROM expenses ORDER BY id DESC"
        ).fetchall()
    except sqlite3.Error as exc:
        raise StoreError(f"Could not load expenses: {exc}") from exc
    finally:
        conn.close()
    return [_row_to_expense(r) for r in rows]


def get_expense(db_path: str, expense_id: int) -> Optional[Expense]:
    conn = _connect(db_path)
    try:
        row = conn.execute(
            f"SELECT {_COLUMNS} FROM expenses WHERE id = ?", (expense_id,)
        ).fetchone()
    except sqlite3.Error as exc:
        raise StoreError(f"Could not load expense {expense_id}: {exc}") from exc
    finally:
        conn.close()
    return _row_to_expense(row) if row else None


def count_expenses(db_path: str) -> int:
    conn = _connect(db_path)
    try:
        row = conn.execute("SELECT COUNT(*) FROM expenses").fetchone()
    except sqlite3.Error as exc:
        raise StoreError(f"Could not count expenses: {exc}") from exc
    finally:
        conn.close()
    return int(row[0] or 0)


def insert_expense(
    db_path: str,
    amount: float,
    category: str,
    note: Optional[str],
    date: str,
) -> int:
    """Store a new expense and return the id assigned by SQLite.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.
    amount, category, note:
        Already validated form values; ``note`` may be ``None``.
    date:
        ``YYYY-MM-DD`` text.
    """
    conn = _connect(db_path)
    try:
        cur = conn.execute(
            "INSERT INTO expenses (amount, category, note, date) VALUES (?, ?, ?, ?)",
            (float(amount), category, note, date),
        )
        conn.commit()
    except sqlite3.Error as exc:
        raise StoreError(f"Could not insert expense: {exc}") from exc
    finally:
        conn.close()
    logger.debug("Inserted expense %s (%s, %.2f) on %s", cur.lastrowid, category, amount, date)
    return int(cur.lastrowid)


def update_expense(
    db_path: str,
    expense_id: int,
    amount: float,
    category: str,
    note: Optional[str],
    date: str,
) -> bool:
    """Overwrite the fields of expense ``expense_id``.

    Returns ``True`` when a row matched the id.
    """
    conn = _connect(db_path)
    try:
        cur = conn.execute(
            """
            UPDATE expenses
            SET amount = ?, category = ?, note = ?, date = ?
            WHERE id = ?
            """,
            (float(amount), category, note, date, expense_id),
        )
        conn.commit()
    except sqlite3.Error as exc:
        raise StoreError(f"Could not update expense {expense_id}: {exc}") from exc
    finally:
        conn.close()
    logger.debug("Updated expense %s: %d row(s)", expense_id, cur.rowcount)
    return cur.rowcount > 0


def delete_expense(db_path: str, expense_id: int) -> bool:
    """Remove expense ``expense_id``; ``True`` when a row was deleted."""
    conn = _connect(db_path)
    try:
        cur = conn.execute("DELETE FROM expenses WHERE id = ?", (expense_id,))
        conn.commit()
    except sqlite3.Error as exc:
        raise StoreError(f"Could not delete expense {expense_id}: {exc}") from exc
    finally:
        conn.close()
    logger.debug("Deleted expense %s: %d row(s)", expense_id, cur.rowcount)
    return cur.rowcount > 0
