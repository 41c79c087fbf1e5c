"""Pure transformations of the period universe.

Every function takes a universe snapshot and returns a complete new one; the
input is never modified. Business errors are returned alongside the
unchanged input rather than raised, so the caller decides whether to persist.
"""

from dataclasses import replace
from typing import Any, Callable, Sequence

from famfin.domain.budget import apply_income_change, override_budget, recalculate_budget
from famfin.domain.distribution import (
    DistributionResult,
    ExpenseRequest,
    distribute_expense,
    generate_expense_id,
)
from famfin.domain.models import Category, IncomeSource, Money
from famfin.domain.periods import Expense, Period, PeriodIndex, PeriodKey, build_universe, sort_periods

Universe = tuple[Period, ...]

EDITABLE_EXPENSE_FIELDS = frozenset(
    {"description", "amount", "category", "date", "payment_method", "responsible", "recurring", "installment"}
)


def seed_universe(start: PeriodKey, months: int, income: dict[IncomeSource, Money]) -> Universe:
    """Provision a new universe with budgets derived from income.

    Args:
        start: First period.
        months: Number of consecutive months.
        income: Default income contributions for every Period.

    Returns:
        Sorted universe of empty Periods.
    """
    return build_universe(start, months, income, recalculate_budget(income))


def _replace_period(universe: Sequence[Period], period: Period) -> Universe:
    return sort_periods([period if p.key == period.key else p for p in universe])


def place_expenses(universe: Sequence[Period], result: DistributionResult) -> Universe:
    """Append a distribution result's placements to their Periods.

    Placements whose Period is absent are ignored; the distributor only
    emits placements for provisioned Periods.

    Args:
        universe: Current universe.
        result: Distributor output.

    Returns:
        New universe with affected expense lists extended.
    """
    additions: dict[PeriodKey, list[Expense]] = {}
    for placement in result.placements:
        additions.setdefault(placement.key, []).append(placement.expense)

    updated = []
    for period in universe:
        new_expenses = additions.get(period.key)
        if new_expenses:
            period = replace(period, expenses=period.expenses + tuple(new_expenses))
        updated.append(period)

    return sort_periods(updated)


def add_expense(
    universe: Sequence[Period],
    request: ExpenseRequest,
    new_id: Callable[[], str] = generate_expense_id,
) -> tuple[Universe, DistributionResult]:
    """Distribute an expense request and apply it.

    Args:
        universe: Current universe.
        request: Expense request.
        new_id: Factory for the request's base id.

    Returns:
        Tuple of (new_universe, result). When result.error is set the
        universe is returned unchanged.
    """
    current = sort_periods(universe)
    result = distribute_expense(request, PeriodIndex(current), new_id)
    if result.error:
        return current, result
    return place_expenses(current, result), result


def change_income(
    universe: Sequence[Period],
    key: PeriodKey,
    source: IncomeSource,
    value: Money,
) -> tuple[Universe, str | None]:
    """Edit one income contribution and recalculate that Period's budget.

    Args:
        universe: Current universe.
        key: Period to edit.
        source: Income contribution name.
        value: New contribution value.

    Returns:
        Tuple of (new_universe, error_message).
    """
    current = sort_periods(universe)
    period = PeriodIndex(current).find_key(key)
    if period is None:
        return current, f"Period not provisioned: {key.label}"
    if value < 0:
        return current, "Amount must be positive"

    return _replace_period(current, apply_income_change(period, source, value)), None


def replicate_income(universe: Sequence[Period], key: PeriodKey) -> tuple[Universe, str | None]:
    """Copy a Period's income into every later Period.

    Each later Period's budget is recalculated from the copied income.

    Args:
        universe: Current universe.
        key: Source Period.

    Returns:
        Tuple of (new_universe, error_message).
    """
    current = sort_periods(universe)
    source = PeriodIndex(current).find_key(key)
    if source is None:
        return current, f"Period not provisioned: {key.label}"

    budget = recalculate_budget(source.income)
    updated = []
    for period in current:
        if period.key.chronological_value > key.chronological_value:
            period = replace(period, income=dict(source.income), budget=budget)
        updated.append(period)

    return tuple(updated), None


def set_budget(
    universe: Sequence[Period],
    key: PeriodKey,
    category: Category,
    value: Money,
) -> tuple[Universe, str | None]:
    """Override one budget target directly.

    Args:
        universe: Current universe.
        key: Period to edit.
        category: Budget category.
        value: New target.

    Returns:
        Tuple of (new_universe, error_message).
    """
    current = sort_periods(universe)
    period = PeriodIndex(current).find_key(key)
    if period is None:
        return current, f"Period not provisioned: {key.label}"

    budget, error = override_budget(period.budget, category, value)
    if error:
        return current, error

    return _replace_period(current, replace(period, budget=budget)), None


def delete_expense(universe: Sequence[Period], key: PeriodKey, expense_id: str) -> tuple[Universe, str | None]:
    """Remove one Expense from one Period.

    Args:
        universe: Current universe.
        key: Period holding the Expense.
        expense_id: Expense id.

    Returns:
        Tuple of (new_universe, error_message).
    """
    current = sort_periods(universe)
    period = PeriodIndex(current).find_key(key)
    if period is None:
        return current, f"Period not provisioned: {key.label}"
    if period.find_expense(expense_id) is None:
        return current, f"Expense {expense_id} not found in {key.label}"

    remaining = tuple(e for e in period.expenses if e.id != expense_id)
    return _replace_period(current, replace(period, expenses=remaining)), None


def edit_expense(
    universe: Sequence[Period],
    key: PeriodKey,
    expense_id: str,
    **changes: Any,
) -> tuple[Universe, str | None]:
    """Edit an Expense in place.

    The Expense stays in its Period even when its date moves to another month.

    Args:
        universe: Current universe.
        key: Period holding the Expense.
        expense_id: Expense id.
        **changes: Expense fields to replace.

    Returns:
        Tuple of (new_universe, error_message).
    """
    current = sort_periods(universe)
    period = PeriodIndex(current).find_key(key)
    if period is None:
        return current, f"Period not provisioned: {key.label}"

    expense = period.find_expense(expense_id)
    if expense is None:
        return current, f"Expense {expense_id} not found in {key.label}"

    unknown = set(changes) - EDITABLE_EXPENSE_FIELDS
    if unknown:
        return current, f"Cannot edit fields: {', '.join(sorted(unknown))}"
    if "amount" in changes and changes["amount"] <= 0:
        return current, "Amount must be positive"

    edited = replace(expense, **changes)
    expenses = tuple(edited if e.id == expense_id else e for e in period.expenses)
    return _replace_period(current, replace(period, expenses=expenses)), None
