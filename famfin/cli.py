"""CLI entry point for famfin."""

import typer

from famfin.commands.admin import backup_command, history_command, init_command, periods_command, undo_command
from famfin.commands.budget import budget_command
from famfin.commands.expenses import add_command, delete_command, edit_command, list_command
from famfin.commands.income import income_command, replicate_command
from famfin.commands.report import analyze_command, report_command, timeline_command

app = typer.Typer(
    name="famfin",
    help="Household income, 50/30/20 budgets and expenses, month by month",
    add_completion=False,
)

MONTH_HELP = "Month (YYYY-MM, default: current month)"


@app.callback()
def main() -> None:
    """Household income, 50/30/20 budgets and expenses, month by month."""
    pass


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Discard the existing ledger and start over"),
    keep_config: bool = typer.Option(False, "--keep-config", help="Reuse the existing config file"),
) -> None:
    """Initialize the database, config and the months of the ledger."""
    init_command(force, keep_config)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: ~/.famfin/backups)"),
) -> None:
    """Backup your database and configuration files."""
    backup_command(output_dir)


@app.command(name="periods")
def periods() -> None:
    """List the months of your ledger."""
    periods_command()


@app.command(name="history")
def history(
    limit: int = typer.Option(20, help="Maximum entries to show"),
) -> None:
    """Show recent changes to your ledger."""
    history_command(limit)


@app.command(name="undo")
def undo() -> None:
    """Revert the last change."""
    undo_command()


@app.command(name="add")
def add(
    description: str,
    amount: str,
    category: str = typer.Option(..., "--category", "-c", help="essential, desire or investment"),
    payment_method: str = typer.Option("debit", "--payment", "-p", help="credit, debit, pix, cash or transfer"),
    expense_date: str = typer.Option(None, "--date", "-d", help="Expense date (default: today's day in --month)"),
    month: str = typer.Option(None, "--month", help=MONTH_HELP),
    responsible: str = typer.Option(None, "--who", help="Household member responsible"),
    recurring: bool = typer.Option(False, "--recurring", "-r", help="Repeat in every later month"),
    installments: int = typer.Option(None, "--installments", "-i", help="Split into N monthly installments"),
) -> None:
    """Add an expense."""
    add_command(description, amount, category, payment_method, expense_date, month, responsible, recurring, installments)


@app.command(name="edit")
def edit(
    expense_id: str,
    month: str = typer.Option(None, "--month", help=MONTH_HELP),
    description: str = typer.Option(None, "--description", help="New description"),
    amount: str = typer.Option(None, "--amount", help="New amount"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
    payment_method: str = typer.Option(None, "--payment", "-p", help="New payment method"),
    expense_date: str = typer.Option(None, "--date", "-d", help="New date (the expense stays in its month)"),
    responsible: str = typer.Option(None, "--who", help="New responsible member"),
) -> None:
    """Edit an expense."""
    edit_command(expense_id, month, description, amount, category, payment_method, expense_date, responsible)


@app.command(name="delete")
def delete(
    expense_id: str,
    month: str = typer.Option(None, "--month", help=MONTH_HELP),
) -> None:
    """Delete an expense from a month."""
    delete_command(expense_id, month)


@app.command(name="expenses")
def expenses(
    month: str = typer.Option(None, "--month", help=MONTH_HELP),
    category: str = typer.Option(None, "--category", "-c", help="Only this category"),
) -> None:
    """List a month's expenses."""
    list_command(month, category)


@app.command(name="income")
def income(
    source: str,
    amount: str,
    month: str = typer.Option(None, "--month", help=MONTH_HELP),
) -> None:
    """Set an income contribution (recalculates the month's budget)."""
    income_command(source, amount, month)


@app.command(name="replicate-income")
def replicate_income(
    month: str = typer.Option(None, "--month", help=MONTH_HELP),
) -> None:
    """Copy a month's income to every later month."""
    replicate_command(month)


@app.command(name="budget")
def budget(
    category: str = typer.Option(None, "--category", "-c", help="Category to override"),
    amount: str = typer.Option(None, "--amount", help="New target for the category"),
    month: str = typer.Option(None, "--month", help=MONTH_HELP),
) -> None:
    """Show or override your budget targets."""
    budget_command(category, amount, month)


@app.command(name="report")
def report(
    month: str = typer.Option(None, "--month", help=MONTH_HELP),
) -> None:
    """Show your income, spending and balance for a month."""
    report_command(month)


@app.command(name="timeline")
def timeline() -> None:
    """Show income versus expenses across all months."""
    timeline_command()


@app.command(name="analyze")
def analyze(
    month: str = typer.Option(None, "--month", help=MONTH_HELP),
) -> None:
    """Get an AI-written analysis of a month."""
    analyze_command(month)


if __name__ == "__main__":
    app()
