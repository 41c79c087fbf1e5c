"""Pure functions for budget calculations.

This module contains the functional core for budget operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Budgets follow the 50/30/20 rule: half of total income for essentials,
30% for desires and 20% for investments. Recalculation happens only when
income changes and overwrites any manually customized targets.
"""

from dataclasses import replace

from famfin.domain.models import Category, IncomeSource, Money
from famfin.domain.periods import Budget, Period

BUDGET_SPLIT: dict[Category, float] = {
    Category.ESSENTIAL: 0.50,
    Category.DESIRE: 0.30,
    Category.INVESTMENT: 0.20,
}


def calculate_total_income(income: dict[IncomeSource, Money]) -> Money:
    """Sum all income contributions.

    Args:
        income: Named income contributions.

    Returns:
        Total income.
    """
    return Money(sum(income.values()))


def recalculate_budget(income: dict[IncomeSource, Money]) -> Budget:
    """Derive 50/30/20 budget targets from income.

    Args:
        income: Named income contributions.

    Returns:
        Budget with each category set to its share of total income.
    """
    total = calculate_total_income(income)
    return Budget(
        essential=Money(total * BUDGET_SPLIT[Category.ESSENTIAL]),
        desire=Money(total * BUDGET_SPLIT[Category.DESIRE]),
        investment=Money(total * BUDGET_SPLIT[Category.INVESTMENT]),
    )


def apply_income_change(period: Period, source: IncomeSource, value: Money) -> Period:
    """Set one income contribution and recalculate the budget.

    The previous budget is discarded, including manual overrides.

    Args:
        period: Period being edited.
        source: Income contribution name.
        value: New contribution value.

    Returns:
        New Period with updated income and budget.
    """
    income = {**period.income, source: value}
    return replace(period, income=income, budget=recalculate_budget(income))


def override_budget(budget: Budget, category: Category, value: Money) -> tuple[Budget, str | None]:
    """Set one budget target directly, without recalculation.

    Args:
        budget: Current budget.
        category: Category to override.
        value: New target.

    Returns:
        Tuple of (new_budget, error_message).
    """
    if value < 0:
        return budget, "Amount must be positive"

    return replace(budget, **{category.name.lower(): value}), None
