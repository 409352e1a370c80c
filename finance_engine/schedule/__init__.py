"""Recurring obligation scheduling package."""

from finance_engine.schedule.projector import (
    advance,
    classify_urgency,
    days_until,
    next_occurrence,
    normalized_monthly_cost,
    normalized_yearly_cost,
    project,
    record_payment,
    upcoming_occurrences,
)

__all__ = [
    "advance",
    "classify_urgency",
    "days_until",
    "next_occurrence",
    "normalized_monthly_cost",
    "normalized_yearly_cost",
    "project",
    "record_payment",
    "upcoming_occurrences",
]
