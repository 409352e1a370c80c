"""Portfolio summary package."""

from finance_engine.reports.summary import (
    BudgetSummary,
    EvaluatedBudget,
    ObligationSummary,
    ProjectedObligation,
    summarize_budgets,
    summarize_obligations,
)

__all__ = [
    "BudgetSummary",
    "EvaluatedBudget",
    "ObligationSummary",
    "ProjectedObligation",
    "summarize_budgets",
    "summarize_obligations",
]
