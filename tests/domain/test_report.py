"""Tests for famfin.domain.report pure functions."""

from datetime import date

import pytest

from famfin.domain.models import Category, Description, IncomeSource, Money, PaymentMethod
from famfin.domain.periods import Budget, Expense, Period, PeriodKey
from famfin.domain.report import (
    build_timeline,
    calculate_budget_percentage,
    calculate_histogram_bar_length,
    filter_expenses,
    spending_by_category,
    summarize_period,
)


def make_expense(expense_id: str, amount: float, category: Category, day: int = 1) -> Expense:
    return Expense(
        id=expense_id,
        description=Description(expense_id),
        amount=Money(amount),
        category=category,
        date=date(2026, 1, day),
        payment_method=PaymentMethod.DEBIT,
    )


@pytest.fixture
def period() -> Period:
    return Period(
        key=PeriodKey(2026, 0),
        income={IncomeSource("salary"): Money(10000.0)},
        budget=Budget(Money(5000.0), Money(3000.0), Money(2000.0)),
        expenses=(
            make_expense("rent", 2500.0, Category.ESSENTIAL, day=5),
            make_expense("dinner", 3300.0, Category.DESIRE, day=2),
            make_expense("market", 500.0, Category.ESSENTIAL, day=9),
        ),
    )


class TestCalculateBudgetPercentage:
    """Tests for calculate_budget_percentage."""

    def test_percentage(self) -> None:
        assert calculate_budget_percentage(Money(250.0), Money(1000.0)) == pytest.approx(25.0)

    def test_zero_budget(self) -> None:
        """Should return zero instead of dividing by zero."""
        assert calculate_budget_percentage(Money(250.0), Money(0.0)) == 0.0


class TestSpendingByCategory:
    """Tests for spending_by_category."""

    def test_includes_unused_categories(self, period: Period) -> None:
        totals = spending_by_category(period.expenses)

        assert totals == {
            Category.ESSENTIAL: 3000.0,
            Category.DESIRE: 3300.0,
            Category.INVESTMENT: 0.0,
        }


class TestSummarizePeriod:
    """Tests for summarize_period."""

    def test_totals_and_balance(self, period: Period) -> None:
        summary = summarize_period(period)

        assert summary.total_income == pytest.approx(10000.0)
        assert summary.total_expenses == pytest.approx(6300.0)
        assert summary.balance == pytest.approx(3700.0)

    def test_category_status(self, period: Period) -> None:
        """Should report overspending as negative available."""
        statuses = {s.category: s for s in summarize_period(period).categories}

        assert statuses[Category.ESSENTIAL].available == pytest.approx(2000.0)
        assert statuses[Category.ESSENTIAL].percentage == pytest.approx(60.0)
        assert statuses[Category.DESIRE].available == pytest.approx(-300.0)
        assert statuses[Category.DESIRE].percentage == pytest.approx(110.0)
        assert statuses[Category.INVESTMENT].spent == 0.0

    def test_empty_period(self) -> None:
        summary = summarize_period(Period(key=PeriodKey(2026, 0)))

        assert summary.total_expenses == 0
        assert summary.balance == 0
        assert all(s.percentage == 0.0 for s in summary.categories)


class TestBuildTimeline:
    """Tests for build_timeline."""

    def test_entry_per_period(self, period: Period) -> None:
        empty = Period(key=PeriodKey(2026, 1), income={IncomeSource("salary"): Money(100.0)})

        timeline = build_timeline([period, empty])

        assert [e.key for e in timeline] == [PeriodKey(2026, 0), PeriodKey(2026, 1)]
        assert timeline[0].balance == pytest.approx(3700.0)
        assert timeline[1].expenses == 0
        assert timeline[1].balance == pytest.approx(100.0)


class TestFilterExpenses:
    """Tests for filter_expenses."""

    def test_sorted_by_date(self, period: Period) -> None:
        assert [e.id for e in filter_expenses(period)] == ["dinner", "rent", "market"]

    def test_category_filter(self, period: Period) -> None:
        assert [e.id for e in filter_expenses(period, Category.ESSENTIAL)] == ["rent", "market"]


class TestCalculateHistogramBarLength:
    """Tests for calculate_histogram_bar_length."""

    def test_scales_to_width(self) -> None:
        assert calculate_histogram_bar_length(Money(50.0), Money(100.0), 30) == 15

    def test_zero_max(self) -> None:
        assert calculate_histogram_bar_length(Money(50.0), Money(0.0), 30) == 0
