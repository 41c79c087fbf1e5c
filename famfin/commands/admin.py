"""Admin commands for init, backup, period listing and undo."""

import shutil
import sqlite3
import sys
import tomllib
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.table import Table

from famfin.commands.common import load_universe
from famfin.config import create_default_config, get_config_path, load_config
from famfin.domain.ledger import seed_universe
from famfin.domain.models import IncomeSource, Money
from famfin.domain.periods import PeriodKey
from famfin.store.queries import delete_latest_snapshot, get_snapshot_history, save_snapshot
from famfin.store.schema import get_db_path, init_database

console = Console()


def backup_command(
    output_dir: str | None = None,
) -> None:
    """Backup database and configuration files."""
    db_path = get_db_path()
    config_path = get_config_path()

    if not db_path.exists():
        console.print("[red]Database not found. Run 'famfin init' first.[/red]", style="bold")
        sys.exit(1)

    if output_dir:
        backup_dir = Path(output_dir).expanduser()
    else:
        backup_dir = Path.home() / ".famfin" / "backups"

    backup_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    db_backup = backup_dir / f"famfin_{timestamp}.db"
    config_backup = backup_dir / f"config_{timestamp}.toml"

    try:
        shutil.copy2(db_path, db_backup)
        console.print(f"[green]✓[/green] Database backed up to: {db_backup}")

        if config_path.exists():
            shutil.copy2(config_path, config_backup)
            console.print(f"[green]✓[/green] Config backed up to: {config_backup}")

        console.print("\n[green]Backup complete![/green]", style="bold")
        console.print(f"[dim]Backup directory: {backup_dir}[/dim]")

    except OSError as e:
        console.print(f"[red]Backup failed: {e}[/red]", style="bold")
        sys.exit(1)


def run_full_init(db_path: Path, config_path: Path, keep_config: bool) -> None:
    """Initialize database and config, then provision the period universe."""
    if not keep_config:
        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

    config = load_config(config_path)

    if db_path.exists():
        db_path.unlink()

    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    init_database(db_path)
    console.print("[green]✓[/green] Database initialized")

    start = PeriodKey(int(config["start_year"]), int(config["start_month"]) - 1)
    months = int(config["months"])
    income = {IncomeSource(name): Money(float(value)) for name, value in config["income"].items()}

    periods = seed_universe(start, months, income)
    save_snapshot(periods, "init", db_path)
    console.print(f"[green]✓[/green] Provisioned {months} periods: {periods[0].key.label} to {periods[-1].key.label}")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False, keep_config: bool = False) -> None:
    """Initialize famfin database, configuration and periods."""
    db_path = get_db_path()
    config_path = get_config_path()

    try:
        if not force and db_path.exists():
            console.print("[red]Initialization failed:[/red]", style="bold")
            console.print(f"  Database already exists: {db_path}")
            console.print("\n[yellow]Use 'famfin init --force' to start a new ledger[/yellow]")
            sys.exit(1)

        if keep_config and not config_path.exists():
            console.print(f"[red]No config to keep at {config_path}[/red]", style="bold")
            sys.exit(1)

        run_full_init(db_path, config_path, keep_config)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except (tomllib.TOMLDecodeError, ValueError) as e:
        console.print(f"[red]Config error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def periods_command() -> None:
    """List provisioned periods."""
    periods = load_universe()

    table = Table(title=f"Periods ({len(periods)})")
    table.add_column("Month", style="cyan")
    table.add_column("Id", style="dim")
    table.add_column("Income", justify="right", style="green")
    table.add_column("Budget", justify="right")
    table.add_column("Expenses", justify="right")

    for period in periods:
        table.add_row(
            period.key.label,
            period.display_id,
            f"{period.total_income:,.2f}",
            f"{period.budget.total:,.2f}",
            str(len(period.expenses)),
        )

    console.print(table)


def history_command(limit: int = 20) -> None:
    """Show recent ledger changes."""
    db_path = get_db_path()
    load_universe(db_path)

    try:
        entries = get_snapshot_history(db_path, limit)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    table = Table(title="History")
    table.add_column("#", justify="right", style="dim")
    table.add_column("When", style="cyan")
    table.add_column("Change", style="white")

    for entry in entries:
        table.add_row(str(entry["id"]), entry["created_at"], entry["reason"])

    console.print(table)


def undo_command() -> None:
    """Revert the last change."""
    db_path = get_db_path()
    load_universe(db_path)

    try:
        reason = delete_latest_snapshot(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if reason is None:
        console.print("[yellow]Nothing to undo[/yellow]")
        return

    console.print(f"[green]✓[/green] Reverted: {reason}")
