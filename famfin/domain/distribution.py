"""Expense distribution across the period universe.

One expense request expands into one or more dated Expense records, each
placed into the Period matching its date. Three shapes are supported, checked
in this order:

- Installments: the amount is split evenly over N consecutive months.
- Recurring: the full amount repeats in every Period from the start onward.
- Single: one record in the Period of the expense's own date.

The distributor only computes placements; applying them to the universe is
the ledger's job (see famfin.domain.ledger).
"""

import uuid
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable

from famfin.dates import resolve
from famfin.domain.models import Category, Description, Money, PaymentMethod
from famfin.domain.periods import Expense, PeriodIndex, PeriodKey

MAX_INSTALLMENTS = 360


class DistributionMode(str, Enum):
    """Temporal shape of an expense request."""

    INSTALLMENT = "installment"
    RECURRING = "recurring"
    SINGLE = "single"


@dataclass(frozen=True)
class ExpenseRequest:
    """Immutable user-entered expense before distribution."""

    description: Description
    amount: Money
    category: Category
    date: date
    payment_method: PaymentMethod
    responsible: str | None = None
    is_recurring: bool = False
    total_installments: int | None = None


@dataclass(frozen=True)
class Placement:
    """An Expense and the Period it goes into."""

    key: PeriodKey
    expense: Expense


@dataclass(frozen=True)
class DroppedInstallment:
    """An installment whose month is not in the universe."""

    key: PeriodKey
    installment: str
    amount: Money


@dataclass(frozen=True)
class DistributionResult:
    """Immutable outcome of distributing one request."""

    mode: DistributionMode
    placements: tuple[Placement, ...] = ()
    dropped: tuple[DroppedInstallment, ...] = ()
    error: str | None = None

    @property
    def total_placed(self) -> Money:
        return Money(sum(p.expense.amount for p in self.placements))


def generate_expense_id() -> str:
    """Mint a new base id for one request."""
    return uuid.uuid4().hex[:12]


def select_mode(request: ExpenseRequest) -> DistributionMode:
    """Classify a request into its distribution mode.

    Args:
        request: Expense request.

    Returns:
        INSTALLMENT when more than one installment is requested, otherwise
        RECURRING when flagged recurring, otherwise SINGLE.
    """
    if request.total_installments is not None and request.total_installments > 1:
        return DistributionMode.INSTALLMENT
    if request.is_recurring:
        return DistributionMode.RECURRING
    return DistributionMode.SINGLE


def validate_request(request: ExpenseRequest) -> str | None:
    """Validate an expense request.

    Args:
        request: Expense request.

    Returns:
        Error message, or None if the request is valid.
    """
    if request.amount <= 0:
        return "Amount must be positive"
    if not request.description.strip():
        return "Description is required"
    if request.total_installments is not None and request.total_installments < 1:
        return "Installments must be at least 1"
    if request.total_installments is not None and request.total_installments > MAX_INSTALLMENTS:
        return f"Installments must be at most {MAX_INSTALLMENTS}"
    return None


def _make_expense(
    request: ExpenseRequest,
    expense_id: str,
    amount: Money,
    expense_date: date,
    recurring: bool = False,
    installment: str | None = None,
) -> Expense:
    return Expense(
        id=expense_id,
        description=Description(request.description.strip()),
        amount=amount,
        category=request.category,
        date=expense_date,
        payment_method=request.payment_method,
        responsible=request.responsible,
        recurring=recurring,
        installment=installment,
    )


def distribute_installments(request: ExpenseRequest, index: PeriodIndex, base_id: str) -> DistributionResult:
    """Split a request into equal monthly installments.

    The amount is divided evenly with no remainder adjustment. Installments
    landing outside the universe are reported in the result's dropped list.

    Args:
        request: Expense request with total_installments > 1.
        index: Period universe.
        base_id: Id shared by all installments of this request.

    Returns:
        DistributionResult with one placement per provisioned month.
    """
    total = request.total_installments or 1
    monthly_amount = Money(request.amount / total)

    placements: list[Placement] = []
    dropped: list[DroppedInstallment] = []

    for i in range(total):
        year, month_index, target_date = resolve(request.date, request.date.day, i)
        key = PeriodKey(year, month_index)
        label = f"{i + 1}/{total}"

        if index.find_key(key) is None:
            dropped.append(DroppedInstallment(key=key, installment=label, amount=monthly_amount))
            continue

        expense = _make_expense(request, f"{base_id}-{i}", monthly_amount, target_date, installment=label)
        placements.append(Placement(key=key, expense=expense))

    return DistributionResult(
        mode=DistributionMode.INSTALLMENT,
        placements=tuple(placements),
        dropped=tuple(dropped),
    )


def distribute_recurring(request: ExpenseRequest, index: PeriodIndex, base_id: str) -> DistributionResult:
    """Repeat the full amount in every Period from the request's month onward.

    Args:
        request: Expense request flagged recurring.
        index: Period universe.
        base_id: Id shared by all occurrences of this request.

    Returns:
        DistributionResult with one placement per Period from the start month.
    """
    start_key = PeriodKey.from_date(request.date)

    placements = []
    for period in index.from_chronological(start_key.chronological_value):
        offset = period.key.chronological_value - start_key.chronological_value
        _, _, target_date = resolve(request.date, request.date.day, offset)
        expense = _make_expense(
            request,
            f"{base_id}-{period.display_id}",
            request.amount,
            target_date,
            recurring=True,
        )
        placements.append(Placement(key=period.key, expense=expense))

    return DistributionResult(mode=DistributionMode.RECURRING, placements=tuple(placements))


def distribute_single(request: ExpenseRequest, index: PeriodIndex, base_id: str) -> DistributionResult:
    """Place one Expense into the Period of the request's own date.

    Args:
        request: Expense request.
        index: Period universe.
        base_id: Id for the Expense.

    Returns:
        DistributionResult with one placement, or an error and no placements
        when the date's Period is not provisioned.
    """
    key = PeriodKey.from_date(request.date)
    if index.find_key(key) is None:
        return DistributionResult(
            mode=DistributionMode.SINGLE,
            error=f"Period not provisioned: {key.label}",
        )

    expense = _make_expense(request, base_id, request.amount, request.date)
    return DistributionResult(mode=DistributionMode.SINGLE, placements=(Placement(key=key, expense=expense),))


def distribute_expense(
    request: ExpenseRequest,
    index: PeriodIndex,
    new_id: Callable[[], str] = generate_expense_id,
) -> DistributionResult:
    """Expand an expense request into placements over the universe.

    Args:
        request: Expense request.
        index: Period universe.
        new_id: Factory for the request's base id.

    Returns:
        DistributionResult. On validation failure, no placements and an error.
    """
    mode = select_mode(request)

    error = validate_request(request)
    if error:
        return DistributionResult(mode=mode, error=error)

    base_id = new_id()

    if mode is DistributionMode.INSTALLMENT:
        return distribute_installments(request, index, base_id)
    elif mode is DistributionMode.RECURRING:
        return distribute_recurring(request, index, base_id)
    else:
        return distribute_single(request, index, base_id)
