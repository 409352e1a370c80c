"""
Data Models Package

This package contains all Pydantic models used by the finance engine.
All values flowing into and out of the engine conform to these schemas.
"""

from finance_engine.models.obligation import (
    Cadence,
    ObligationProjection,
    RecurringObligation,
    UrgencyTier,
)
from finance_engine.models.budget import (
    BudgetEvaluation,
    BudgetSnapshot,
    BudgetStatus,
)
from finance_engine.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from finance_engine.models.validation import (
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Obligation models
    "Cadence",
    "ObligationProjection",
    "RecurringObligation",
    "UrgencyTier",
    # Budget models
    "BudgetEvaluation",
    "BudgetSnapshot",
    "BudgetStatus",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
]
