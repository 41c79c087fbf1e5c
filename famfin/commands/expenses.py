"""Expense commands (add, edit, delete, list)."""

import sys
from datetime import date

from rich.console import Console
from rich.table import Table

from famfin.commands.common import (
    load_universe,
    parse_expense_date,
    parse_money,
    resolve_period_option,
    store_universe,
)
from famfin.dates import days_in_month
from famfin.domain.distribution import DistributionMode, DistributionResult, ExpenseRequest
from famfin.domain.ledger import add_expense, delete_expense, edit_expense
from famfin.domain.models import Category, Description, PaymentMethod
from famfin.domain.periods import PeriodIndex, PeriodKey
from famfin.domain.report import filter_expenses

console = Console()


def parse_category(value: str) -> Category:
    """Parse a category name, exiting on unknown values."""
    try:
        return Category(value.strip().lower())
    except ValueError:
        choices = ", ".join(c.value for c in Category)
        console.print(f"[red]Unknown category '{value}'. Choose one of: {choices}[/red]")
        sys.exit(1)


def parse_payment_method(value: str) -> PaymentMethod:
    """Parse a payment method name, exiting on unknown values."""
    try:
        return PaymentMethod(value.strip().lower())
    except ValueError:
        choices = ", ".join(m.value for m in PaymentMethod)
        console.print(f"[red]Unknown payment method '{value}'. Choose one of: {choices}[/red]")
        sys.exit(1)


def default_expense_date(key: PeriodKey, today: date) -> date:
    """Today's day of month, placed in the viewed period."""
    day = min(today.day, days_in_month(key.year, key.month_index))
    return date(key.year, key.month_index + 1, day)


def report_distribution(result: DistributionResult) -> None:
    """Print what a distribution placed and dropped."""
    if result.mode is DistributionMode.INSTALLMENT:
        console.print(f"[green]✓[/green] Added {len(result.placements)} installments:")
    elif result.mode is DistributionMode.RECURRING:
        console.print(f"[green]✓[/green] Added recurring expense to {len(result.placements)} periods:")
    else:
        console.print("[green]✓[/green] Expense added:")

    for placement in result.placements:
        expense = placement.expense
        label = f" ({expense.installment})" if expense.installment else ""
        console.print(f"  {expense.date.isoformat()}  {expense.amount:,.2f}{label}  [dim]{expense.id}[/dim]")

    if result.dropped:
        console.print(f"[yellow]⚠ {len(result.dropped)} installments fall outside provisioned periods:[/yellow]")
        for dropped in result.dropped:
            console.print(f"  [yellow]{dropped.installment} {dropped.key.label} ({dropped.amount:,.2f})[/yellow]")


def add_command(
    description: str,
    amount: str,
    category: str,
    payment_method: str = "debit",
    expense_date: str | None = None,
    month: str | None = None,
    responsible: str | None = None,
    recurring: bool = False,
    installments: int | None = None,
) -> None:
    """Add an expense, spreading installments or recurrences across periods.

    Args:
        description: Expense description.
        amount: Total amount.
        category: Budget category name.
        payment_method: Payment method name.
        expense_date: Expense date; defaults to today's day in the viewed month.
        month: Month being viewed (YYYY-MM); defaults to the current month.
        responsible: Household member responsible for the expense.
        recurring: Repeat the full amount in every later period.
        installments: Number of monthly installments.
    """
    if expense_date:
        try:
            when = parse_expense_date(expense_date)
        except ValueError as e:
            console.print(f"[red]Invalid date: {e}[/red]")
            console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
            sys.exit(1)
    else:
        when = default_expense_date(resolve_period_option(month), date.today())

    request = ExpenseRequest(
        description=Description(description),
        amount=parse_money(amount),
        category=parse_category(category),
        date=when,
        payment_method=parse_payment_method(payment_method),
        responsible=responsible or None,
        is_recurring=recurring,
        total_installments=installments,
    )

    periods = load_universe()
    new_periods, result = add_expense(periods, request)

    if result.error:
        console.print(f"[red]{result.error}[/red]")
        sys.exit(1)

    store_universe(new_periods, f"add {result.mode.value} expense '{request.description}'")
    report_distribution(result)


def delete_command(expense_id: str, month: str | None = None) -> None:
    """Delete an expense from one period."""
    key = resolve_period_option(month)
    periods = load_universe()

    new_periods, error = delete_expense(periods, key, expense_id)
    if error:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)

    store_universe(new_periods, f"delete expense {expense_id} from {key.display_id}")
    console.print(f"[green]✓[/green] Deleted expense {expense_id} from {key.label}")


def edit_command(
    expense_id: str,
    month: str | None = None,
    description: str | None = None,
    amount: str | None = None,
    category: str | None = None,
    payment_method: str | None = None,
    expense_date: str | None = None,
    responsible: str | None = None,
) -> None:
    """Edit fields of one expense in place."""
    key = resolve_period_option(month)

    changes: dict[str, object] = {}
    if description is not None:
        changes["description"] = Description(description)
    if amount is not None:
        changes["amount"] = parse_money(amount)
    if category is not None:
        changes["category"] = parse_category(category)
    if payment_method is not None:
        changes["payment_method"] = parse_payment_method(payment_method)
    if responsible is not None:
        changes["responsible"] = responsible or None
    if expense_date is not None:
        try:
            changes["date"] = parse_expense_date(expense_date)
        except ValueError as e:
            console.print(f"[red]Invalid date: {e}[/red]")
            sys.exit(1)

    if not changes:
        console.print("[yellow]Nothing to change[/yellow]")
        return

    periods = load_universe()
    new_periods, error = edit_expense(periods, key, expense_id, **changes)
    if error:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)

    store_universe(new_periods, f"edit expense {expense_id} in {key.display_id}")
    console.print(f"[green]✓[/green] Updated expense {expense_id}")
    new_date = changes.get("date")
    if isinstance(new_date, date) and PeriodKey.from_date(new_date) != key:
        console.print(f"[dim]Expense stays in {key.label}[/dim]")


def list_command(month: str | None = None, category: str | None = None) -> None:
    """List a period's expenses."""
    key = resolve_period_option(month)
    category_filter = parse_category(category) if category else None

    period = PeriodIndex(load_universe()).find_key(key)
    if period is None:
        console.print(f"[red]Period not provisioned: {key.label}[/red]")
        sys.exit(1)

    expenses = filter_expenses(period, category_filter)
    if not expenses:
        console.print(f"[yellow]No expenses in {key.label}[/yellow]")
        return

    table = Table(title=f"Expenses - {key.label}")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Payment", style="dim")
    table.add_column("Who", style="dim")
    table.add_column("Installment", justify="center")
    table.add_column("Amount", justify="right", style="red")
    table.add_column("Id", style="dim")

    for expense in expenses:
        table.add_row(
            expense.date.isoformat(),
            expense.description,
            expense.category.value,
            expense.payment_method.value,
            expense.responsible or "[dim]-[/dim]",
            expense.installment or ("↻" if expense.recurring else ""),
            f"{expense.amount:,.2f}",
            expense.id,
        )

    console.print(table)
    console.print(f"[bold]Total: {sum(e.amount for e in expenses):,.2f}[/bold]")
