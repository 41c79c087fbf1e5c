"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from famfin.store.queries import (
    count_snapshots,
    delete_latest_snapshot,
    get_snapshot_history,
    load_latest_snapshot,
    save_snapshot,
)
from famfin.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "count_snapshots",
    "delete_latest_snapshot",
    "get_snapshot_history",
    "load_latest_snapshot",
    "save_snapshot",
]
