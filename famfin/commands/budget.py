"""Budget command for overriding category targets."""

import sys

from rich.console import Console
from rich.table import Table

from famfin.commands.common import load_universe, parse_money, resolve_period_option, store_universe
from famfin.commands.expenses import parse_category
from famfin.domain.budget import BUDGET_SPLIT
from famfin.domain.ledger import set_budget
from famfin.domain.periods import PeriodIndex

console = Console()


def budget_command(category: str | None = None, amount: str | None = None, month: str | None = None) -> None:
    """Show budget targets, or override one target.

    Overrides last until the month's income changes, which recalculates
    all three targets.

    Args:
        category: Category to override. If None, shows the budget.
        amount: New target; non-numeric input counts as zero.
        month: Month (YYYY-MM); defaults to the current month.
    """
    key = resolve_period_option(month)
    periods = load_universe()

    if category is not None:
        if amount is None:
            console.print("[red]--amount is required when setting a category[/red]")
            sys.exit(1)

        periods, error = set_budget(periods, key, parse_category(category), parse_money(amount))
        if error:
            console.print(f"[red]{error}[/red]")
            sys.exit(1)

        store_universe(periods, f"set budget {category} in {key.display_id}")
        console.print(f"[green]✓[/green] {category} budget for {key.label} set to {parse_money(amount):,.2f}")

    period = PeriodIndex(periods).find_key(key)
    if period is None:
        console.print(f"[red]Period not provisioned: {key.label}[/red]")
        sys.exit(1)

    table = Table(title=f"Budget - {key.label}")
    table.add_column("Category", style="magenta")
    table.add_column("Target", justify="right")
    table.add_column("Suggested", justify="right", style="dim")

    for cat, target in period.budget.as_dict().items():
        suggested = period.total_income * BUDGET_SPLIT[cat]
        table.add_row(cat.value, f"{target:,.2f}", f"{suggested:,.2f} ({BUDGET_SPLIT[cat]:.0%})")

    console.print(table)
    console.print(f"[dim]Total planned: {period.budget.total:,.2f} of income {period.total_income:,.2f}[/dim]")
