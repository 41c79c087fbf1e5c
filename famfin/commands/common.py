"""Input normalization and load/save helpers shared by commands."""

import math
import sqlite3
import sys
from datetime import date
from pathlib import Path

import pandas as pd
from rich.console import Console

from famfin.dates import parse_period
from famfin.domain.models import Money
from famfin.domain.periods import Period, PeriodKey
from famfin.store.queries import load_latest_snapshot, save_snapshot
from famfin.store.schema import database_exists, get_db_path

console = Console()


def parse_money(amount_str: str) -> Money:
    """Parse a money string, normalizing invalid input to zero.

    Accepts a comma as decimal separator (e.g. "1234,56").

    Args:
        amount_str: String containing an amount.

    Returns:
        Parsed amount, or 0.0 if the input is not numeric.
    """
    cleaned = amount_str.strip().replace(",", ".")
    try:
        value = float(cleaned)
    except ValueError:
        return Money(0.0)
    if not math.isfinite(value):
        return Money(0.0)
    return Money(value)


def parse_expense_date(raw_date: str) -> date:
    """Parse a user-entered date.

    Strict ISO (YYYY-MM-DD) is tried first; anything else is read day-first
    (DD/MM/YYYY and similar).

    Args:
        raw_date: Raw date string.

    Returns:
        Parsed date.

    Raises:
        ValueError: If date cannot be parsed.
    """
    try:
        return date.fromisoformat(raw_date.strip())
    except ValueError:
        pass

    try:
        parsed = pd.to_datetime(raw_date, dayfirst=True)
    except (ValueError, pd.errors.ParserError) as e:
        raise ValueError(f"Could not parse date '{raw_date}': {e}") from e
    if pd.isna(parsed):
        raise ValueError(f"Could not parse date '{raw_date}'")
    return parsed.date()


def resolve_period_option(month: str | None) -> PeriodKey:
    """Turn a --month option into a PeriodKey, defaulting to today's month.

    Exits with an error message on an invalid month.
    """
    if month is None:
        return PeriodKey.from_date(date.today())
    try:
        year, month_index = parse_period(month)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    return PeriodKey(year, month_index)


def load_universe(db_path: Path | None = None) -> tuple[Period, ...]:
    """Load the current universe or exit if the ledger is not initialized."""
    if db_path is None:
        db_path = get_db_path()

    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'famfin init' first.[/red]", style="bold")
        sys.exit(1)

    try:
        periods = load_latest_snapshot(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if periods is None:
        console.print("[red]No ledger stored. Run 'famfin init --force' to provision periods.[/red]", style="bold")
        sys.exit(1)

    return periods


def store_universe(periods: tuple[Period, ...], reason: str, db_path: Path | None = None) -> None:
    """Persist a new universe snapshot or exit on database failure."""
    if db_path is None:
        db_path = get_db_path()

    try:
        save_snapshot(periods, reason, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
