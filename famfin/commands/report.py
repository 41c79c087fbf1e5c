"""Report, timeline and AI analysis commands."""

import sys

import requests
from rich.console import Console
from rich.table import Table

from famfin.commands.common import load_universe, resolve_period_option
from famfin.config import load_config
from famfin.domain.periods import PeriodIndex
from famfin.domain.report import (
    CategoryStatus,
    build_timeline,
    calculate_histogram_bar_length,
    summarize_period,
)
from famfin.summary import build_summary_prompt, get_api_key, request_summary

console = Console()


def format_budget_display_with_color(percentage: float) -> str:
    """Format budget usage with color based on percentage.

    Args:
        percentage: Budget usage percentage.

    Returns:
        Colored string for budget display.
    """
    budget_text = f"({percentage:.0f}%)"
    if percentage > 100:
        return f"[red]{budget_text}[/red]"
    elif percentage > 90:
        return f"[yellow]{budget_text}[/yellow]"
    else:
        return f"[green]{budget_text}[/green]"


def render_category_line(status: CategoryStatus, bar_width: int) -> None:
    """Render one category's spending against its target."""
    bar_length = calculate_histogram_bar_length(status.spent, status.budget, bar_width) if status.budget else 0
    bar = "█" * min(bar_length, bar_width)
    usage = format_budget_display_with_color(status.percentage)
    console.print(
        f"  {status.category.value:12} {status.spent:>12,.2f} / {status.budget:>12,.2f} {usage:24} {bar}"
    )


def report_command(month: str | None = None) -> None:
    """Show income, spending by category and balance for a month."""
    key = resolve_period_option(month)
    period = PeriodIndex(load_universe()).find_key(key)
    if period is None:
        console.print(f"[red]Period not provisioned: {key.label}[/red]")
        sys.exit(1)

    summary = summarize_period(period)

    console.print(f"\n[bold]{key.label}[/bold]\n")
    console.print(f"[green]Income:   {summary.total_income:>12,.2f}[/green]")
    console.print(f"[red]Expenses: {summary.total_expenses:>12,.2f}[/red]")
    balance_style = "green" if summary.balance >= 0 else "red"
    console.print(f"[{balance_style}]Balance:  {summary.balance:>12,.2f}[/{balance_style}]\n")

    console.print("[bold]Budget[/bold]")
    for status in summary.categories:
        render_category_line(status, bar_width=30)


def timeline_command() -> None:
    """Show income versus expenses for every period."""
    timeline = build_timeline(load_universe())

    table = Table(title="Timeline")
    table.add_column("Month", style="cyan")
    table.add_column("Income", justify="right", style="green")
    table.add_column("Expenses", justify="right", style="red")
    table.add_column("Balance", justify="right")

    for entry in timeline:
        balance = f"{entry.balance:,.2f}"
        table.add_row(
            entry.key.label,
            f"{entry.income:,.2f}",
            f"{entry.expenses:,.2f}",
            f"[green]{balance}[/green]" if entry.balance >= 0 else f"[red]{balance}[/red]",
        )

    console.print(table)


def analyze_command(month: str | None = None) -> None:
    """Ask the AI model for a written analysis of a month."""
    api_key = get_api_key()
    if not api_key:
        console.print("[red]GEMINI_API_KEY is not set[/red]", style="bold")
        sys.exit(1)

    key = resolve_period_option(month)
    period = PeriodIndex(load_universe()).find_key(key)
    if period is None:
        console.print(f"[red]Period not provisioned: {key.label}[/red]")
        sys.exit(1)

    try:
        model = load_config()["ai_model"]
    except (OSError, ValueError) as e:
        console.print(f"[red]Config error: {e}[/red]", style="bold")
        sys.exit(1)

    prompt = build_summary_prompt(period, summarize_period(period))

    console.print(f"[cyan]Analyzing {key.label}...[/cyan]")
    try:
        text = request_summary(api_key, prompt, model)
    except requests.RequestException as e:
        console.print(f"[red]AI request failed: {e}[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]AI response error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"\n[bold]Insight - {key.label}[/bold]\n")
    console.print(text)
