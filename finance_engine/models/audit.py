"""
Audit Models for the Finance Engine

Every evaluation handed to the reporting layer can be traced back to
the inputs that produced it. This provides:
1. Reproducibility of historical reports
2. Debugging information when a figure looks wrong
3. A record of precondition failures reaching the engine

DESIGN DECISION: Audit events are values. The engine core never emits
them; the orchestration flows do, after the pure computation returns.
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from finance_engine.models.budget import BudgetEvaluation, BudgetSnapshot
from finance_engine.models.obligation import ObligationProjection, RecurringObligation


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Obligations
    OBLIGATION_PROJECTED = "obligation_projected"
    PAYMENT_RECORDED = "payment_recorded"

    # Budgets
    BUDGET_EVALUATED = "budget_evaluated"
    BUDGET_THRESHOLD_CROSSED = "budget_threshold_crossed"

    # Reporting
    PORTFOLIO_SUMMARIZED = "portfolio_summarized"

    # Failures
    PRECONDITION_FAILED = "precondition_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    details only ever holds JSON-friendly values (strings, ints, bools);
    Decimals and dates are stringified by the builder.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'obligation', 'budget')"
    )
    entity_name: Optional[str] = None
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID tying together the events of one reporting pass"
    )

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)

    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_name": self.entity_name,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.obligation_projected(obligation, projection, today, cid)
        event = AuditEventBuilder.budget_evaluated(snapshot, evaluation, cid)
    """

    @staticmethod
    def obligation_projected(
        obligation: RecurringObligation,
        projection: ObligationProjection,
        today: date,
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.OBLIGATION_PROJECTED,
            entity_type="obligation",
            entity_name=obligation.name or None,
            correlation_id=correlation_id,
            description=(
                f"Next due {projection.next_due_date.isoformat()} "
                f"({projection.urgency.display_name})"
            ),
            details={
                "today": today.isoformat(),
                "cadence": obligation.cadence.value,
                "amount": str(obligation.amount),
                "currency": projection.currency,
                "last_payment_date": (
                    obligation.last_payment_date.isoformat()
                    if obligation.last_payment_date else None
                ),
                "next_due_date": projection.next_due_date.isoformat(),
                "days_until_due": projection.days_until_due,
                "urgency": projection.urgency.value,
                "monthly_cost": str(projection.monthly_cost),
                "yearly_cost": str(projection.yearly_cost),
            },
        )

    @staticmethod
    def payment_recorded(
        obligation: RecurringObligation,
        paid_on: date,
        next_due_date: date,
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PAYMENT_RECORDED,
            entity_type="obligation",
            entity_name=obligation.name or None,
            correlation_id=correlation_id,
            description=f"Payment recorded on {paid_on.isoformat()}",
            details={
                "paid_on": paid_on.isoformat(),
                "amount": str(obligation.amount),
                "currency": obligation.currency,
                "next_due_date": next_due_date.isoformat(),
            },
        )

    @staticmethod
    def budget_evaluated(
        snapshot: BudgetSnapshot,
        evaluation: BudgetEvaluation,
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_EVALUATED,
            entity_type="budget",
            entity_name=snapshot.name or None,
            correlation_id=correlation_id,
            description=f"Budget {evaluation.percent_used.normalize():f}% used",
            details={
                "limit": str(snapshot.limit),
                "spent": str(snapshot.spent),
                "alert_threshold_percent": snapshot.alert_threshold_percent,
                "remaining": str(evaluation.remaining),
                "percent_used": str(evaluation.percent_used),
                "status": evaluation.status.value,
                "currency": evaluation.currency,
            },
        )

    @staticmethod
    def budget_threshold_crossed(
        snapshot: BudgetSnapshot,
        evaluation: BudgetEvaluation,
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_THRESHOLD_CROSSED,
            severity=AuditSeverity.WARNING,
            entity_type="budget",
            entity_name=snapshot.name or None,
            correlation_id=correlation_id,
            description=f"Budget is in {evaluation.status.value} tier",
            details={
                "status": evaluation.status.value,
                "percent_used": str(evaluation.percent_used),
                "remaining": str(evaluation.remaining),
            },
        )

    @staticmethod
    def portfolio_summarized(
        entity_type: str,
        counts: dict[str, int],
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PORTFOLIO_SUMMARIZED,
            entity_type=entity_type,
            correlation_id=correlation_id,
            description=f"Summarized {sum(counts.values())} {entity_type} records",
            details={"counts": counts},
        )

    @staticmethod
    def precondition_failed(
        entity_type: str,
        error: Exception,
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PRECONDITION_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type=entity_type,
            correlation_id=correlation_id,
            description=f"Rejected {entity_type} input",
            error_code=type(error).__name__,
            error_message=str(error),
        )
