"""
Budget Accountant

Derives remaining headroom, percent used and a status tier from a
budget snapshot.

Status tiers are evaluated in a strict order, first match wins:

    percent_used >= 100                      -> EXCEEDED
    percent_used >= 90                       -> DANGER
    percent_used >= alert_threshold_percent  -> WARNING
    otherwise                                -> OK

The danger tier is fixed; only the warning tier follows the caller's
threshold.
"""

from decimal import Decimal

from finance_engine.models.budget import (
    BudgetEvaluation,
    BudgetSnapshot,
    BudgetStatus,
)
from finance_engine.money import HUNDRED, RATIO_PLACES, ZERO, Number, round_half_up, to_decimal

EXCEEDED_PERCENT = Decimal("100")
DANGER_PERCENT = Decimal("90")


def percent_used(spent: Number, limit: Number) -> Decimal:
    """
    Percent of the limit consumed.

    The ratio spent/limit is rounded half-up to 4 places before being
    scaled to a percentage. A zero limit yields 0 instead of dividing.
    """
    spent = to_decimal(spent)
    limit = to_decimal(limit)
    if limit <= 0:
        return ZERO
    return round_half_up(spent / limit, RATIO_PLACES) * HUNDRED


def status_for(percent: Decimal, alert_threshold_percent: int) -> BudgetStatus:
    if percent >= EXCEEDED_PERCENT:
        return BudgetStatus.EXCEEDED
    if percent >= DANGER_PERCENT:
        return BudgetStatus.DANGER
    if percent >= alert_threshold_percent:
        return BudgetStatus.WARNING
    return BudgetStatus.OK


def evaluate(snapshot: BudgetSnapshot) -> BudgetEvaluation:
    """
    Evaluate a budget snapshot.

    remaining is not clamped: an over-budget snapshot has a negative
    remaining amount.
    """
    assert snapshot.limit >= 0, "limit must be validated before evaluation"
    assert 0 <= snapshot.alert_threshold_percent <= 100

    percent = percent_used(snapshot.spent, snapshot.limit)
    return BudgetEvaluation(
        remaining=snapshot.limit - snapshot.spent,
        percent_used=percent,
        status=status_for(percent, snapshot.alert_threshold_percent),
        currency=snapshot.currency,
    )
