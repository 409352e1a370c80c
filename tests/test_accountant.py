"""
Tests for the budget accountant.
"""

import pytest
from decimal import Decimal

from finance_engine.budget.accountant import evaluate, percent_used, status_for
from finance_engine.models.budget import BudgetSnapshot, BudgetStatus


def make_budget(limit="500", spent="0", threshold=80) -> BudgetSnapshot:
    return BudgetSnapshot(
        name="Groceries",
        limit=Decimal(limit),
        spent=Decimal(spent),
        alert_threshold_percent=threshold,
    )


class TestEvaluate:
    """Tests for evaluate."""

    def test_scenario_danger(self):
        """Test 475 of 500 is 95% used and in the danger tier."""
        result = evaluate(make_budget(limit="500", spent="475"))

        assert result.percent_used == Decimal("95")
        assert result.status == BudgetStatus.DANGER
        assert result.remaining == Decimal("25")
        assert result.is_over_budget is False

    @pytest.mark.parametrize("spent, expected", [
        ("0", BudgetStatus.OK),
        ("399.90", BudgetStatus.OK),
        ("400", BudgetStatus.WARNING),
        ("449.90", BudgetStatus.WARNING),
        ("450", BudgetStatus.DANGER),
        ("499.90", BudgetStatus.DANGER),
        ("500", BudgetStatus.EXCEEDED),
        ("750", BudgetStatus.EXCEEDED),
    ])
    def test_tier_boundaries(self, spent, expected):
        """Test each tier begins exactly at its boundary."""
        assert evaluate(make_budget(spent=spent)).status == expected

    def test_remaining_is_not_clamped(self):
        """Test overspending shows as negative remaining."""
        result = evaluate(make_budget(limit="500", spent="620"))

        assert result.remaining == Decimal("-120")
        assert result.percent_used == Decimal("124")
        assert result.is_over_budget is True

    def test_threshold_above_danger_is_shadowed(self):
        """Test a 95% threshold never produces WARNING below the danger tier."""
        result = evaluate(make_budget(spent="460", threshold=95))
        assert result.status == BudgetStatus.DANGER

    def test_threshold_zero_warns_immediately(self):
        """Test a zero threshold puts an unspent budget in the warning tier."""
        assert evaluate(make_budget(spent="0", threshold=0)).status == BudgetStatus.WARNING

    def test_threshold_hundred_skips_warning(self):
        """Test a 100% threshold goes straight from OK to DANGER."""
        assert evaluate(make_budget(spent="440", threshold=100)).status == BudgetStatus.OK
        assert evaluate(make_budget(spent="450", threshold=100)).status == BudgetStatus.DANGER

    def test_zero_limit_reports_zero_percent(self):
        """Test a zero limit never divides."""
        result = evaluate(make_budget(limit="0", spent="25"))

        assert result.percent_used == Decimal("0")
        assert result.remaining == Decimal("-25")
        assert result.status == BudgetStatus.OK

    def test_zero_limit_with_zero_threshold(self):
        """Test zero percent still meets a zero threshold."""
        result = evaluate(make_budget(limit="0", spent="25", threshold=0))
        assert result.status == BudgetStatus.WARNING

    def test_currency_carried_through(self):
        """Test the evaluation keeps the snapshot's currency."""
        snapshot = BudgetSnapshot(limit=Decimal("100"), currency="eur")
        assert evaluate(snapshot).currency == "EUR"


class TestPercentUsed:
    """Tests for the ratio rounding policy."""

    def test_ratio_rounded_to_four_places(self):
        """Test 1/3 is 33.33%, from a ratio of 0.3333."""
        assert percent_used(Decimal("1"), Decimal("3")) == Decimal("33.33")

    def test_ratio_rounds_half_up(self):
        """Test a ratio of exactly 0.00005 rounds up to 0.0001."""
        assert percent_used(Decimal("1"), Decimal("20000")) == Decimal("0.01")

    def test_ratio_rounding_can_reach_hundred(self):
        """Test a ratio of 0.99995 rounds up to 100% and counts as exceeded."""
        percent = percent_used(Decimal("19999"), Decimal("20000"))
        assert percent == Decimal("100")
        assert status_for(percent, 80) == BudgetStatus.EXCEEDED

    def test_accepts_strings(self):
        """Test stored text amounts are accepted."""
        assert percent_used("475", "500") == Decimal("95")

    def test_rejects_floats(self):
        """Test floats never enter the engine."""
        with pytest.raises(TypeError):
            percent_used(475.0, Decimal("500"))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
