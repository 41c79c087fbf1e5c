"""Period buckets and the read-only period index.

A Period is one calendar month of the ledger: its income contributions,
its budget targets and the expenses placed into it. The universe of
Periods is provisioned up front and only ever read or replaced as a whole.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterator, Sequence

from famfin.dates import format_period_id, format_period_label, shift_month
from famfin.domain.models import Category, Description, IncomeSource, Money, PaymentMethod


@dataclass(frozen=True, order=True)
class PeriodKey:
    """Identity of a Period: (year, month_index 0-11)."""

    year: int
    month_index: int

    def __post_init__(self) -> None:
        if not 0 <= self.month_index <= 11:
            raise ValueError(f"Month index must be 0-11, got {self.month_index}")

    @classmethod
    def from_date(cls, value: date) -> "PeriodKey":
        return cls(value.year, value.month - 1)

    @property
    def chronological_value(self) -> int:
        return self.year * 12 + self.month_index

    @property
    def display_id(self) -> str:
        return format_period_id(self.year, self.month_index)

    @property
    def label(self) -> str:
        return format_period_label(self.year, self.month_index)


@dataclass(frozen=True)
class Expense:
    """Immutable dated ledger line."""

    id: str
    description: Description
    amount: Money
    category: Category
    date: date
    payment_method: PaymentMethod
    responsible: str | None = None
    recurring: bool = False
    installment: str | None = None  # "i/total"


@dataclass(frozen=True)
class Budget:
    """Immutable budget targets, one per category."""

    essential: Money = Money(0.0)
    desire: Money = Money(0.0)
    investment: Money = Money(0.0)

    @property
    def total(self) -> Money:
        return Money(self.essential + self.desire + self.investment)

    def target(self, category: Category) -> Money:
        return getattr(self, category.name.lower())

    def as_dict(self) -> dict[Category, Money]:
        return {category: self.target(category) for category in Category}


@dataclass(frozen=True)
class Period:
    """Immutable month bucket."""

    key: PeriodKey
    income: dict[IncomeSource, Money] = field(default_factory=dict, hash=False)
    budget: Budget = field(default_factory=Budget)
    expenses: tuple[Expense, ...] = ()

    @property
    def display_id(self) -> str:
        return self.key.display_id

    @property
    def total_income(self) -> Money:
        return Money(sum(self.income.values()))

    def find_expense(self, expense_id: str) -> Expense | None:
        for expense in self.expenses:
            if expense.id == expense_id:
                return expense
        return None


def sort_periods(periods: Sequence[Period]) -> tuple[Period, ...]:
    """Sort Periods chronologically.

    Raises:
        ValueError: If two Periods share a key.
    """
    ordered = tuple(sorted(periods, key=lambda p: p.key.chronological_value))
    for previous, current in zip(ordered, ordered[1:]):
        if previous.key == current.key:
            raise ValueError(f"Duplicate period in universe: {current.display_id}")
    return ordered


class PeriodIndex:
    """Read-only chronological projection over a universe of Periods."""

    def __init__(self, periods: Sequence[Period]) -> None:
        self._periods = sort_periods(periods)
        self._by_key = {period.key: period for period in self._periods}

    def __len__(self) -> int:
        return len(self._periods)

    def __iter__(self) -> Iterator[Period]:
        return iter(self._periods)

    def find(self, year: int, month_index: int) -> Period | None:
        return self._by_key.get(PeriodKey(year, month_index))

    def find_key(self, key: PeriodKey) -> Period | None:
        return self._by_key.get(key)

    def ordered_view(self) -> tuple[Period, ...]:
        return self._periods

    def keys(self) -> tuple[PeriodKey, ...]:
        return tuple(period.key for period in self._periods)

    def from_chronological(self, start: int) -> tuple[Period, ...]:
        """Periods whose chronological value is >= start, in order."""
        return tuple(p for p in self._periods if p.key.chronological_value >= start)


def build_universe(
    start: PeriodKey,
    months: int,
    income: dict[IncomeSource, Money],
    budget: Budget | None = None,
) -> tuple[Period, ...]:
    """Provision consecutive empty Periods starting at start.

    Args:
        start: First period of the universe.
        months: Number of consecutive months to create.
        income: Income contributions copied into every Period.
        budget: Budget for every Period. If None, starts at zero targets.

    Returns:
        Chronologically ordered tuple of Periods.

    Raises:
        ValueError: If months is not positive.
    """
    if months <= 0:
        raise ValueError(f"Universe needs at least one month, got {months}")

    periods = []
    for offset in range(months):
        year, month_index = shift_month(start.year, start.month_index, offset)
        periods.append(
            Period(
                key=PeriodKey(year, month_index),
                income=dict(income),
                budget=budget or Budget(),
            )
        )
    return tuple(periods)
