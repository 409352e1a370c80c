"""
Portfolio Summaries

Aggregates over many obligations or budgets for dashboard figures:
total monthly/yearly cost of active bills, bills needing attention,
total budget limit and counts per tier.

DESIGN DECISION: Summaries are computed from the same pure functions as
single evaluations, so a dashboard total always equals the sum of the
rows shown next to it. Nothing is fetched from storage; the caller
passes in the records it loaded.

Amounts in different currencies are never added together.
"""

from collections import Counter
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from finance_engine.budget.accountant import evaluate
from finance_engine.errors import CurrencyMismatchError
from finance_engine.models.budget import BudgetEvaluation, BudgetSnapshot, BudgetStatus
from finance_engine.models.obligation import (
    ObligationProjection,
    RecurringObligation,
    UrgencyTier,
)
from finance_engine.money import ZERO
from finance_engine.schedule.projector import project

# Tiers whose cost still counts towards the running totals
_BILLABLE_TIERS = {
    UrgencyTier.OVERDUE,
    UrgencyTier.DUE_TODAY,
    UrgencyTier.DUE_SOON,
    UrgencyTier.UPCOMING,
}
_ATTENTION_TIERS = {UrgencyTier.DUE_TODAY, UrgencyTier.DUE_SOON, UrgencyTier.OVERDUE}


class ProjectedObligation(BaseModel):
    """An obligation alongside its projection."""
    model_config = ConfigDict(frozen=True)

    obligation: RecurringObligation
    projection: ObligationProjection


class ObligationSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    currency: Optional[str] = None
    total_monthly_cost: Decimal = ZERO
    total_yearly_cost: Decimal = ZERO
    counts: dict[UrgencyTier, int] = Field(default_factory=dict)
    needs_attention: list[ProjectedObligation] = Field(default_factory=list)

    def count(self, tier: UrgencyTier) -> int:
        return self.counts.get(tier, 0)


class EvaluatedBudget(BaseModel):
    """A budget snapshot alongside its evaluation."""
    model_config = ConfigDict(frozen=True)

    snapshot: BudgetSnapshot
    evaluation: BudgetEvaluation


class BudgetSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    currency: Optional[str] = None
    total_limit: Decimal = ZERO
    total_spent: Decimal = ZERO
    counts: dict[BudgetStatus, int] = Field(default_factory=dict)
    budgets: list[EvaluatedBudget] = Field(default_factory=list)

    @property
    def total_remaining(self) -> Decimal:
        return self.total_limit - self.total_spent

    def count(self, status: BudgetStatus) -> int:
        return self.counts.get(status, 0)


def _common_currency(currencies: Iterable[str]) -> Optional[str]:
    expected = None
    for currency in currencies:
        if expected is None:
            expected = currency
        elif currency != expected:
            raise CurrencyMismatchError(expected, currency)
    return expected


def summarize_obligations(
    obligations: Iterable[RecurringObligation],
    today: date,
) -> ObligationSummary:
    """
    Summarize a set of obligations as of today.

    Inactive and expired obligations are counted but contribute nothing
    to the cost totals, so their currency is not checked. needs_attention
    lists overdue, due-today and due-soon obligations, earliest due date
    first.
    """
    rows = [ProjectedObligation(obligation=o, projection=project(o, today)) for o in obligations]

    billable = [row.projection for row in rows if row.projection.urgency in _BILLABLE_TIERS]
    currency = _common_currency(p.currency for p in billable)
    attention = sorted(
        (row for row in rows if row.projection.urgency in _ATTENTION_TIERS),
        key=lambda row: row.projection.next_due_date,
    )

    return ObligationSummary(
        currency=currency,
        total_monthly_cost=sum((p.monthly_cost for p in billable), ZERO),
        total_yearly_cost=sum((p.yearly_cost for p in billable), ZERO),
        counts=dict(Counter(row.projection.urgency for row in rows)),
        needs_attention=attention,
    )


def summarize_budgets(snapshots: Iterable[BudgetSnapshot]) -> BudgetSummary:
    """Summarize a set of budget snapshots for the current period."""
    snapshots = list(snapshots)
    currency = _common_currency(s.currency for s in snapshots)

    rows = [EvaluatedBudget(snapshot=s, evaluation=evaluate(s)) for s in snapshots]

    return BudgetSummary(
        currency=currency,
        total_limit=sum((s.limit for s in snapshots), ZERO),
        total_spent=sum((s.spent for s in snapshots), ZERO),
        counts=dict(Counter(row.evaluation.status for row in rows)),
        budgets=rows,
    )
