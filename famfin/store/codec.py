"""Conversion between the period universe and plain JSON-ready dicts."""

from datetime import date
from typing import Any, Sequence

from famfin.domain.models import Category, Description, IncomeSource, Money, PaymentMethod
from famfin.domain.periods import Budget, Expense, Period, PeriodKey, sort_periods


def expense_to_dict(expense: Expense) -> dict[str, Any]:
    return {
        "id": expense.id,
        "description": expense.description,
        "amount": expense.amount,
        "category": expense.category.value,
        "date": expense.date.isoformat(),
        "payment_method": expense.payment_method.value,
        "responsible": expense.responsible,
        "recurring": expense.recurring,
        "installment": expense.installment,
    }


def expense_from_dict(data: dict[str, Any]) -> Expense:
    return Expense(
        id=str(data["id"]),
        description=Description(data["description"]),
        amount=Money(float(data["amount"])),
        category=Category(data["category"]),
        date=date.fromisoformat(data["date"]),
        payment_method=PaymentMethod(data["payment_method"]),
        responsible=data.get("responsible"),
        recurring=bool(data.get("recurring", False)),
        installment=data.get("installment"),
    )


def period_to_dict(period: Period) -> dict[str, Any]:
    """Convert a Period to a JSON-ready dict.

    The cosmetic display id is written for readability only and ignored on load.
    """
    return {
        "id": period.display_id,
        "year": period.key.year,
        "month_index": period.key.month_index,
        "income": dict(period.income),
        "budget": {category.value: amount for category, amount in period.budget.as_dict().items()},
        "expenses": [expense_to_dict(e) for e in period.expenses],
    }


def period_from_dict(data: dict[str, Any]) -> Period:
    budget = data.get("budget", {})
    return Period(
        key=PeriodKey(int(data["year"]), int(data["month_index"])),
        income={IncomeSource(name): Money(float(value)) for name, value in data.get("income", {}).items()},
        budget=Budget(
            essential=Money(float(budget.get(Category.ESSENTIAL.value, 0.0))),
            desire=Money(float(budget.get(Category.DESIRE.value, 0.0))),
            investment=Money(float(budget.get(Category.INVESTMENT.value, 0.0))),
        ),
        expenses=tuple(expense_from_dict(e) for e in data.get("expenses", [])),
    )


def universe_to_list(periods: Sequence[Period]) -> list[dict[str, Any]]:
    return [period_to_dict(p) for p in sort_periods(periods)]


def universe_from_list(data: list[dict[str, Any]]) -> tuple[Period, ...]:
    """Rebuild a sorted universe.

    Raises:
        ValueError: If the data holds duplicate periods or invalid values.
        KeyError: If required fields are missing.
    """
    return sort_periods([period_from_dict(item) for item in data])
