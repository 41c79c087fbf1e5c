"""Tests for famfin.domain.periods."""

from datetime import date

import pytest

from famfin.domain.models import Category, IncomeSource, Money
from famfin.domain.periods import Budget, Period, PeriodIndex, PeriodKey, build_universe, sort_periods


def make_period(year: int, month_index: int) -> Period:
    return Period(key=PeriodKey(year, month_index))


class TestPeriodKey:
    """Tests for PeriodKey."""

    def test_chronological_value(self) -> None:
        assert PeriodKey(2026, 1).chronological_value == 2026 * 12 + 1

    def test_from_date(self) -> None:
        """Should map a date to its 0-based month."""
        assert PeriodKey.from_date(date(2025, 11, 3)) == PeriodKey(2025, 10)

    def test_display_id_is_cosmetic(self) -> None:
        """Should compare by (year, month_index) only."""
        key = PeriodKey(2025, 10)
        assert key.display_id == "nov-2025"
        assert key == PeriodKey(2025, 10)

    def test_invalid_month_index_raises_valueerror(self) -> None:
        with pytest.raises(ValueError):
            PeriodKey(2025, 12)


class TestBudget:
    """Tests for Budget."""

    def test_total_and_target(self) -> None:
        budget = Budget(essential=Money(500.0), desire=Money(300.0), investment=Money(200.0))

        assert budget.total == 1000.0
        assert budget.target(Category.DESIRE) == 300.0
        assert budget.as_dict() == {
            Category.ESSENTIAL: 500.0,
            Category.DESIRE: 300.0,
            Category.INVESTMENT: 200.0,
        }


class TestPeriod:
    """Tests for Period."""

    def test_hashable_despite_income_dict(self) -> None:
        """Should hash by key, budget and expenses so equal Periods hash equal."""
        first = Period(key=PeriodKey(2026, 0), income={IncomeSource("salary"): Money(100.0)})
        second = Period(key=PeriodKey(2026, 0), income={IncomeSource("salary"): Money(100.0)})

        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1


class TestPeriodIndex:
    """Tests for PeriodIndex."""

    def test_ordered_view_sorts_chronologically(self) -> None:
        """Should order by year*12+month_index regardless of input order."""
        index = PeriodIndex([make_period(2026, 1), make_period(2025, 11), make_period(2026, 0)])

        assert [p.key for p in index.ordered_view()] == [
            PeriodKey(2025, 11),
            PeriodKey(2026, 0),
            PeriodKey(2026, 1),
        ]

    def test_find_existing(self) -> None:
        period = make_period(2026, 0)
        index = PeriodIndex([period])

        assert index.find(2026, 0) is period
        assert index.find_key(PeriodKey(2026, 0)) is period

    def test_find_absent_returns_none(self) -> None:
        index = PeriodIndex([make_period(2026, 0)])

        assert index.find(2026, 1) is None

    def test_duplicate_periods_raise_valueerror(self) -> None:
        """Should refuse two Periods with the same key."""
        with pytest.raises(ValueError, match="Duplicate"):
            PeriodIndex([make_period(2026, 0), make_period(2026, 0)])

    def test_from_chronological(self) -> None:
        """Should include the start Period and everything after it."""
        index = PeriodIndex([make_period(2026, m) for m in range(4)])

        result = index.from_chronological(PeriodKey(2026, 1).chronological_value)

        assert [p.key.month_index for p in result] == [1, 2, 3]

    def test_len_and_iter(self) -> None:
        index = PeriodIndex([make_period(2026, 1), make_period(2026, 0)])

        assert len(index) == 2
        assert [p.key.month_index for p in index] == [0, 1]


class TestSortPeriods:
    """Tests for sort_periods."""

    def test_returns_tuple(self) -> None:
        result = sort_periods([make_period(2026, 2), make_period(2026, 1)])

        assert isinstance(result, tuple)
        assert [p.key.month_index for p in result] == [1, 2]


class TestBuildUniverse:
    """Tests for build_universe."""

    def test_builds_consecutive_months_across_year(self) -> None:
        """Should create November 2025 through October 2026."""
        universe = build_universe(PeriodKey(2025, 10), 12, {IncomeSource("salary"): Money(1000.0)})

        assert len(universe) == 12
        assert universe[0].key == PeriodKey(2025, 10)
        assert universe[2].key == PeriodKey(2026, 0)
        assert universe[-1].key == PeriodKey(2026, 9)

    def test_income_is_copied_per_period(self) -> None:
        """Should give every Period its own income dict."""
        income = {IncomeSource("salary"): Money(1000.0)}
        universe = build_universe(PeriodKey(2026, 0), 2, income)

        assert universe[0].income == income
        assert universe[0].income is not universe[1].income
        assert universe[0].income is not income

    def test_periods_start_empty(self) -> None:
        universe = build_universe(PeriodKey(2026, 0), 3, {})

        assert all(p.expenses == () for p in universe)

    def test_zero_months_raises_valueerror(self) -> None:
        with pytest.raises(ValueError):
            build_universe(PeriodKey(2026, 0), 0, {})
