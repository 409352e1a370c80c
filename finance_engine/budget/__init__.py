"""Budget accounting package."""

from finance_engine.budget.accountant import evaluate, percent_used, status_for

__all__ = ["evaluate", "percent_used", "status_for"]
