"""Database query functions."""

import json
import sqlite3
from pathlib import Path
from typing import Any, Sequence

from famfin.domain.periods import Period
from famfin.store.codec import universe_from_list, universe_to_list
from famfin.store.schema import get_db_path


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def save_snapshot(periods: Sequence[Period], reason: str, db_path: Path | None = None) -> int:
    """Store a complete universe as the new latest snapshot.

    Args:
        periods: Universe to store.
        reason: Short description of the change that produced it.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID of the new snapshot.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    payload = json.dumps(universe_to_list(periods))
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO snapshots (reason, payload) VALUES (?, ?)",
                (reason, payload),
            )
            conn.commit()
            return int(cursor.lastrowid or 0)
        except sqlite3.Error:
            conn.rollback()
            raise


def load_latest_snapshot(db_path: Path | None = None) -> tuple[Period, ...] | None:
    """Load the current universe.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Sorted universe, or None if nothing has been stored yet.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT payload FROM snapshots ORDER BY id DESC LIMIT 1")
        row = cursor.fetchone()
        if row is None:
            return None
        return universe_from_list(json.loads(row["payload"]))


def get_snapshot_history(db_path: Path | None = None, limit: int | None = None) -> list[dict[str, Any]]:
    """Get snapshot metadata, newest first.

    Args:
        db_path: Path to the database file. If None, uses default location.
        limit: Maximum number of entries. If None, returns all.

    Returns:
        List of dicts with id, created_at and reason.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        query = "SELECT id, created_at, reason FROM snapshots ORDER BY id DESC"
        params: list[Any] = []

        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        cursor.execute(query, params)
        return [dict(row) for row in cursor.fetchall()]


def count_snapshots(db_path: Path | None = None) -> int:
    """Count stored snapshots.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT COUNT(*) FROM snapshots")
        return int(cursor.fetchone()[0])


def delete_latest_snapshot(db_path: Path | None = None) -> str | None:
    """Drop the latest snapshot so the previous one becomes current.

    The initial snapshot is never removed.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Reason of the removed snapshot, or None if there was nothing to undo.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("SELECT id, reason FROM snapshots ORDER BY id DESC LIMIT 2")
            rows = cursor.fetchall()
            if len(rows) < 2:
                return None

            latest = rows[0]
            cursor.execute("DELETE FROM snapshots WHERE id = ?", (latest["id"],))
            conn.commit()
            return str(latest["reason"])
        except sqlite3.Error:
            conn.rollback()
            raise
