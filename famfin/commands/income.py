"""Income commands: edit a contribution, replicate income forward."""

import sys

from rich.console import Console

from famfin.commands.common import load_universe, parse_money, resolve_period_option, store_universe
from famfin.domain.ledger import change_income, replicate_income
from famfin.domain.models import IncomeSource
from famfin.domain.periods import PeriodIndex

console = Console()


def income_command(source: str, amount: str, month: str | None = None) -> None:
    """Set one income contribution; the month's budget is recalculated 50/30/20.

    Args:
        source: Income contribution name.
        amount: New value; non-numeric input counts as zero.
        month: Month to edit (YYYY-MM); defaults to the current month.
    """
    key = resolve_period_option(month)
    periods = load_universe()

    new_periods, error = change_income(periods, key, IncomeSource(source), parse_money(amount))
    if error:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)

    store_universe(new_periods, f"set income {source} in {key.display_id}")

    period = PeriodIndex(new_periods).find_key(key)
    assert period is not None
    console.print(f"[green]✓[/green] {source} set for {key.label}")
    console.print(f"[dim]Total income: {period.total_income:,.2f}[/dim]")
    console.print(
        f"[dim]Budget reset to essential {period.budget.essential:,.2f} / "
        f"desire {period.budget.desire:,.2f} / investment {period.budget.investment:,.2f}[/dim]"
    )
    console.print("[yellow]Manual budget overrides for this month were replaced[/yellow]")


def replicate_command(month: str | None = None) -> None:
    """Copy a month's income into every later month."""
    key = resolve_period_option(month)
    periods = load_universe()

    new_periods, error = replicate_income(periods, key)
    if error:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)

    later = PeriodIndex(new_periods).from_chronological(key.chronological_value + 1)
    if not later:
        console.print(f"[yellow]No periods after {key.label}[/yellow]")
        return

    store_universe(new_periods, f"replicate income from {key.display_id}")
    console.print(f"[green]✓[/green] Income from {key.label} copied to {len(later)} later periods")
    console.print("[yellow]Their budgets were recalculated from the copied income[/yellow]")
