"""
Property-based tests for the projector and accountant.

Hypothesis generates obligations and budgets across every cadence and
a wide date range, and checks that the invariants hold for each.
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from hypothesis import HealthCheck, assume, given, settings
from hypothesis import strategies as st
from hypothesis.strategies import composite

from finance_engine.budget.accountant import evaluate, percent_used
from finance_engine.models.budget import BudgetSnapshot, BudgetStatus
from finance_engine.models.obligation import Cadence, RecurringObligation
from finance_engine.schedule.projector import (
    next_occurrence,
    normalized_monthly_cost,
    normalized_yearly_cost,
    record_payment,
)

PROPERTY_SETTINGS = settings(
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)

dates = st.dates(min_value=date(2015, 1, 1), max_value=date(2035, 12, 31))
amounts = st.decimals(
    min_value=Decimal("0"),
    max_value=Decimal("1000000"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)
limits = st.decimals(
    min_value=Decimal("0.01"),
    max_value=Decimal("1000000"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)


@composite
def obligations(draw):
    """Active obligations with an optional due day and last payment."""
    start = draw(dates)
    last_payment = draw(st.one_of(
        st.none(),
        st.integers(min_value=0, max_value=3000).map(lambda d: start + timedelta(days=d)),
    ))
    return RecurringObligation(
        name="Generated",
        amount=draw(amounts),
        cadence=draw(st.sampled_from(list(Cadence))),
        due_day_of_month=draw(st.one_of(st.none(), st.integers(min_value=1, max_value=28))),
        start_date=start,
        last_payment_date=last_payment,
    )


class TestScheduleProperties:
    """Invariants of next_occurrence and cost normalization."""

    @PROPERTY_SETTINGS
    @given(obligation=obligations(), today=dates)
    def test_next_occurrence_is_in_the_future(self, obligation, today):
        """Test the next date is after today, or the start date before the first payment."""
        result = next_occurrence(obligation, today)

        if obligation.last_payment_date is None and obligation.start_date > today:
            assert result == obligation.start_date
        else:
            assert result > today

    @PROPERTY_SETTINGS
    @given(obligation=obligations(), today=dates)
    def test_paying_the_next_occurrence_moves_forward(self, obligation, today):
        """Test paying the projected date always yields a later projection."""
        first = next_occurrence(obligation, today)
        paid = record_payment(obligation, first)

        assert next_occurrence(paid, today) > first

    @PROPERTY_SETTINGS
    @given(
        amount=amounts,
        cadence=st.sampled_from([Cadence.DAILY, Cadence.WEEKLY, Cadence.MONTHLY]),
    )
    def test_yearly_close_to_twelve_months(self, amount, cadence):
        """Test yearly cost stays within 2% of twelve monthly costs."""
        monthly = normalized_monthly_cost(amount, cadence)
        yearly = normalized_yearly_cost(amount, cadence)

        assert abs(yearly - monthly * 12) <= yearly * Decimal("0.02")

    @PROPERTY_SETTINGS
    @given(amount=amounts, cadence=st.sampled_from(list(Cadence)))
    def test_costs_are_never_negative(self, amount, cadence):
        """Test non-negative amounts give non-negative costs."""
        assert normalized_monthly_cost(amount, cadence) >= 0
        assert normalized_yearly_cost(amount, cadence) >= 0


class TestBudgetProperties:
    """Invariants of evaluate."""

    @PROPERTY_SETTINGS
    @given(limit=limits, extra=amounts, threshold=st.integers(min_value=0, max_value=100))
    def test_spent_at_or_over_limit_is_exceeded(self, limit, extra, threshold):
        """Test spending the whole limit is always exceeded."""
        snapshot = BudgetSnapshot(
            limit=limit,
            spent=limit + extra,
            alert_threshold_percent=threshold,
        )
        assert evaluate(snapshot).status == BudgetStatus.EXCEEDED

    @PROPERTY_SETTINGS
    @given(limit=limits, data=st.data())
    def test_ninety_percent_and_over_is_danger(self, limit, data):
        """Test the top tenth below the limit is danger."""
        spent = data.draw(st.decimals(
            min_value=limit * Decimal("0.9"),
            max_value=limit,
            places=2,
            allow_nan=False,
            allow_infinity=False,
        ))
        assume(spent >= limit * Decimal("0.9"))
        # Ratios of 0.99995 and above round up to 100%
        assume(spent / limit < Decimal("0.99995"))

        snapshot = BudgetSnapshot(limit=limit, spent=spent)
        assert evaluate(snapshot).status == BudgetStatus.DANGER

    @PROPERTY_SETTINGS
    @given(limit=limits, first=amounts, second=amounts)
    def test_percent_used_is_monotonic(self, limit, first, second):
        """Test spending more never lowers the percentage."""
        low, high = sorted([first, second])
        assert percent_used(low, limit) <= percent_used(high, limit)

    @PROPERTY_SETTINGS
    @given(spent=amounts, threshold=st.integers(min_value=0, max_value=100))
    def test_zero_limit_never_divides(self, spent, threshold):
        """Test a zero limit always reports zero percent."""
        snapshot = BudgetSnapshot(
            limit=Decimal("0"),
            spent=spent,
            alert_threshold_percent=threshold,
        )
        assert evaluate(snapshot).percent_used == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
