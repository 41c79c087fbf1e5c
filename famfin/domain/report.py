"""Pure functions for report calculations and aggregations.

This module contains the functional core for reporting operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test
"""

from dataclasses import dataclass
from typing import Sequence

from famfin.domain.models import Category, Money
from famfin.domain.periods import Expense, Period, PeriodKey


@dataclass(frozen=True)
class CategoryStatus:
    """Immutable spending status of one category in a Period."""

    category: Category
    budget: Money
    spent: Money
    available: Money
    percentage: float


@dataclass(frozen=True)
class PeriodSummary:
    """Immutable summary of one Period."""

    key: PeriodKey
    total_income: Money
    total_expenses: Money
    balance: Money
    categories: list[CategoryStatus]


@dataclass(frozen=True)
class TimelineEntry:
    """Immutable income/expense totals for one Period."""

    key: PeriodKey
    income: Money
    expenses: Money
    balance: Money


def calculate_budget_percentage(spent: Money, budget: Money) -> float:
    """Calculate percentage of budget used.

    Args:
        spent: Amount spent.
        budget: Budget target.

    Returns:
        Percentage of budget used (0-100+). Zero when there is no budget.
    """
    if budget <= 0:
        return 0.0
    return (spent / budget) * 100


def spending_by_category(expenses: Sequence[Expense]) -> dict[Category, Money]:
    """Total expense amounts per category, zero for unused categories."""
    totals = {category: Money(0.0) for category in Category}
    for expense in expenses:
        totals[expense.category] = Money(totals[expense.category] + expense.amount)
    return totals


def summarize_period(period: Period) -> PeriodSummary:
    """Compute income, spending and budget status for a Period.

    Args:
        period: Period to summarize.

    Returns:
        PeriodSummary with one CategoryStatus per category.
    """
    spending = spending_by_category(period.expenses)

    categories = []
    for category in Category:
        budget = period.budget.target(category)
        spent = spending[category]
        categories.append(
            CategoryStatus(
                category=category,
                budget=budget,
                spent=spent,
                available=Money(budget - spent),
                percentage=calculate_budget_percentage(spent, budget),
            )
        )

    total_income = period.total_income
    total_expenses = Money(sum(spending.values()))

    return PeriodSummary(
        key=period.key,
        total_income=total_income,
        total_expenses=total_expenses,
        balance=Money(total_income - total_expenses),
        categories=categories,
    )


def build_timeline(periods: Sequence[Period]) -> list[TimelineEntry]:
    """Income versus expenses for every Period, in the given order."""
    timeline = []
    for period in periods:
        income = period.total_income
        expenses = Money(sum(e.amount for e in period.expenses))
        timeline.append(TimelineEntry(key=period.key, income=income, expenses=expenses, balance=Money(income - expenses)))
    return timeline


def filter_expenses(period: Period, category: Category | None = None) -> list[Expense]:
    """List a Period's expenses, optionally for one category, ordered by date.

    Args:
        period: Period to list.
        category: Optional category filter.

    Returns:
        Expenses sorted by date; entry order breaks ties.
    """
    expenses = [e for e in period.expenses if category is None or e.category == category]
    return sorted(expenses, key=lambda e: e.date)


def calculate_histogram_bar_length(
    amount: Money,
    max_amount: Money,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
