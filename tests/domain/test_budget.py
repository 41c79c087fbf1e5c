"""Tests for famfin.domain.budget pure functions."""

import pytest

from famfin.domain.budget import (
    apply_income_change,
    calculate_total_income,
    override_budget,
    recalculate_budget,
)
from famfin.domain.models import Category, IncomeSource, Money
from famfin.domain.periods import Budget, Period, PeriodKey


class TestCalculateTotalIncome:
    """Tests for calculate_total_income."""

    def test_sums_all_sources(self) -> None:
        income = {IncomeSource("salary"): Money(3500.0), IncomeSource("bonus"): Money(250.5)}
        assert calculate_total_income(income) == pytest.approx(3750.5)

    def test_empty_income_is_zero(self) -> None:
        assert calculate_total_income({}) == 0


class TestRecalculateBudget:
    """Tests for recalculate_budget."""

    def test_fifty_thirty_twenty_split(self) -> None:
        """Should split 10000 into 5000/3000/2000."""
        budget = recalculate_budget({IncomeSource("salary"): Money(10000.0)})

        assert budget.essential == pytest.approx(5000.0)
        assert budget.desire == pytest.approx(3000.0)
        assert budget.investment == pytest.approx(2000.0)

    def test_targets_add_up_to_income(self) -> None:
        """Should always sum back to total income."""
        for total in (0.0, 1.0, 999.99, 12345.67, 1e7 / 3):
            budget = recalculate_budget({IncomeSource("salary"): Money(total)})
            assert budget.total == pytest.approx(total)

    def test_zero_income(self) -> None:
        assert recalculate_budget({}) == Budget()


class TestApplyIncomeChange:
    """Tests for apply_income_change."""

    def test_income_change_overwrites_manual_budget(self) -> None:
        """Should replace a customized budget with the 50/30/20 split."""
        period = Period(
            key=PeriodKey(2026, 0),
            income={IncomeSource("salary"): Money(0.0)},
            budget=Budget(essential=Money(1.0), desire=Money(2.0), investment=Money(3.0)),
        )

        updated = apply_income_change(period, IncomeSource("salary"), Money(10000.0))

        assert updated.income == {"salary": 10000.0}
        assert updated.budget.essential == pytest.approx(5000.0)
        assert updated.budget.desire == pytest.approx(3000.0)
        assert updated.budget.investment == pytest.approx(2000.0)

    def test_adds_new_source(self) -> None:
        period = Period(key=PeriodKey(2026, 0), income={IncomeSource("salary"): Money(1000.0)})

        updated = apply_income_change(period, IncomeSource("freelance"), Money(1000.0))

        assert updated.total_income == pytest.approx(2000.0)
        assert updated.budget.essential == pytest.approx(1000.0)

    def test_does_not_modify_input(self) -> None:
        period = Period(key=PeriodKey(2026, 0), income={IncomeSource("salary"): Money(1000.0)})

        apply_income_change(period, IncomeSource("salary"), Money(5.0))

        assert period.income == {"salary": 1000.0}
        assert period.budget == Budget()


class TestOverrideBudget:
    """Tests for override_budget."""

    def test_sets_one_category(self) -> None:
        budget = Budget(essential=Money(500.0), desire=Money(300.0), investment=Money(200.0))

        new_budget, error = override_budget(budget, Category.DESIRE, Money(450.0))

        assert error is None
        assert new_budget == Budget(essential=Money(500.0), desire=Money(450.0), investment=Money(200.0))

    def test_zero_is_allowed(self) -> None:
        new_budget, error = override_budget(Budget(), Category.INVESTMENT, Money(0.0))

        assert error is None
        assert new_budget.investment == 0.0

    def test_negative_is_rejected(self) -> None:
        budget = Budget(essential=Money(500.0))

        new_budget, error = override_budget(budget, Category.ESSENTIAL, Money(-1.0))

        assert new_budget is budget  # Unchanged
        assert error == "Amount must be positive"
