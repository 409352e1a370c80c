"""
Tests for portfolio summaries.
"""

import pytest
from datetime import date
from decimal import Decimal

from finance_engine.errors import CurrencyMismatchError
from finance_engine.models.budget import BudgetSnapshot, BudgetStatus
from finance_engine.models.obligation import Cadence, RecurringObligation, UrgencyTier
from finance_engine.reports.summary import summarize_budgets, summarize_obligations

TODAY = date(2024, 2, 1)


@pytest.fixture
def bills():
    """A small household: rent, a streaming plan, insurance and an old gym plan."""
    return [
        RecurringObligation(
            name="Rent",
            amount=Decimal("1200"),
            cadence=Cadence.MONTHLY,
            due_day_of_month=3,
            start_date=date(2023, 1, 1),
            last_payment_date=date(2024, 1, 3),
        ),
        RecurringObligation(
            name="Streaming",
            amount=Decimal("5"),
            cadence=Cadence.WEEKLY,
            start_date=date(2023, 1, 1),
            last_payment_date=date(2024, 1, 28),
        ),
        RecurringObligation(
            name="Insurance",
            amount=Decimal("600"),
            cadence=Cadence.YEARLY,
            start_date=date(2023, 6, 1),
            last_payment_date=date(2023, 6, 1),
        ),
        RecurringObligation(
            name="Gym",
            amount=Decimal("40"),
            cadence=Cadence.MONTHLY,
            start_date=date(2023, 1, 1),
            end_date=date(2023, 12, 31),
        ),
    ]


class TestObligationSummary:
    """Tests for summarize_obligations."""

    def test_totals_exclude_expired(self, bills):
        """Test only billable obligations contribute to the totals."""
        summary = summarize_obligations(bills, TODAY)

        # 1200 + 5 * 4.33 + 600 / 12
        assert summary.total_monthly_cost == Decimal("1271.65")
        # 14400 + 260 + 600
        assert summary.total_yearly_cost == Decimal("15260")
        assert summary.currency == "INR"

    def test_counts_per_tier(self, bills):
        """Test every obligation is counted once."""
        summary = summarize_obligations(bills, TODAY)

        assert summary.count(UrgencyTier.DUE_SOON) == 2
        assert summary.count(UrgencyTier.UPCOMING) == 1
        assert summary.count(UrgencyTier.EXPIRED) == 1
        assert summary.count(UrgencyTier.OVERDUE) == 0

    def test_needs_attention_sorted_by_due_date(self, bills):
        """Test the attention list is earliest first."""
        summary = summarize_obligations(bills, TODAY)
        names = [row.obligation.name for row in summary.needs_attention]

        # Rent is due on the 3rd, streaming on the 4th
        assert names == ["Rent", "Streaming"]

    def test_inactive_obligations_cost_nothing(self):
        """Test paused bills are counted but not totalled."""
        paused = RecurringObligation(
            name="Paused",
            amount=Decimal("99"),
            start_date=date(2023, 1, 1),
            is_active=False,
        )
        summary = summarize_obligations([paused], TODAY)

        assert summary.total_monthly_cost == Decimal("0")
        assert summary.count(UrgencyTier.INACTIVE) == 1

    def test_empty_portfolio(self):
        """Test an empty list gives zero totals and no currency."""
        summary = summarize_obligations([], TODAY)

        assert summary.total_yearly_cost == Decimal("0")
        assert summary.currency is None
        assert summary.needs_attention == []

    def test_mixed_currencies_rejected(self, bills):
        """Test amounts in different currencies are never added."""
        foreign = RecurringObligation(
            name="VPN",
            amount=Decimal("5"),
            currency="USD",
            start_date=date(2023, 1, 1),
        )
        with pytest.raises(CurrencyMismatchError) as exc_info:
            summarize_obligations(bills + [foreign], TODAY)

        assert exc_info.value.expected == "INR"
        assert exc_info.value.found == "USD"

    def test_foreign_currency_ignored_when_not_billed(self, bills):
        """Test a cancelled or ended foreign subscription does not block the summary."""
        cancelled = RecurringObligation(
            name="VPN",
            amount=Decimal("5"),
            currency="USD",
            start_date=date(2023, 1, 1),
            is_active=False,
        )
        ended = RecurringObligation(
            name="Cloud storage",
            amount=Decimal("2"),
            currency="EUR",
            start_date=date(2023, 1, 1),
            end_date=date(2023, 6, 30),
        )
        summary = summarize_obligations(bills + [cancelled, ended], TODAY)

        assert summary.currency == "INR"
        assert summary.total_monthly_cost == Decimal("1271.65")
        assert summary.count(UrgencyTier.INACTIVE) == 1
        assert summary.count(UrgencyTier.EXPIRED) == 2


class TestBudgetSummary:
    """Tests for summarize_budgets."""

    def test_totals_and_counts(self):
        """Test limits, spending and tiers are aggregated."""
        snapshots = [
            BudgetSnapshot(name="Groceries", limit=Decimal("500"), spent=Decimal("475")),
            BudgetSnapshot(name="Dining", limit=Decimal("200"), spent=Decimal("250")),
            BudgetSnapshot(name="Travel", limit=Decimal("1000"), spent=Decimal("100")),
        ]
        summary = summarize_budgets(snapshots)

        assert summary.total_limit == Decimal("1700")
        assert summary.total_spent == Decimal("825")
        assert summary.total_remaining == Decimal("875")
        assert summary.count(BudgetStatus.DANGER) == 1
        assert summary.count(BudgetStatus.EXCEEDED) == 1
        assert summary.count(BudgetStatus.OK) == 1
        assert summary.count(BudgetStatus.WARNING) == 0
        assert [row.snapshot.name for row in summary.budgets] == ["Groceries", "Dining", "Travel"]

    def test_mixed_currencies_rejected(self):
        """Test budgets in different currencies are never summed."""
        snapshots = [
            BudgetSnapshot(limit=Decimal("500"), currency="INR"),
            BudgetSnapshot(limit=Decimal("500"), currency="EUR"),
        ]
        with pytest.raises(CurrencyMismatchError):
            summarize_budgets(snapshots)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
