"""
Main Orchestrator for the Finance Engine

This module ties the pure engine functions to the audit trail and
defines the entry points the reporting layer calls:
1. Obligations (project, mark as paid)
2. Budgets (evaluate)
3. Dashboards (summarize many obligations or budgets)

DESIGN DECISION: The orchestrator enforces the boundaries:
- The pure functions compute, the flows audit
- Either a full result is returned or the error propagates
- Every rejected input is audited before it propagates

Nothing here stores state between calls; a flow can be shared across
threads.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional
from uuid import UUID

from finance_engine.audit import AuditLogger, AuditSink, configure_logging, create_correlation_id
from finance_engine.budget.accountant import evaluate
from finance_engine.config import get_settings
from finance_engine.errors import EngineError
from finance_engine.models.budget import BudgetEvaluation, BudgetSnapshot, BudgetStatus
from finance_engine.models.obligation import ObligationProjection, RecurringObligation
from finance_engine.reports.summary import (
    BudgetSummary,
    ObligationSummary,
    summarize_budgets,
    summarize_obligations,
)
from finance_engine.schedule.projector import project, record_payment

_ALERT_STATUSES = {BudgetStatus.WARNING, BudgetStatus.DANGER, BudgetStatus.EXCEEDED}


class ObligationFlow:
    """
    Evaluates recurring obligations for display.

    Flow:
    1. Project → next due date, urgency, normalized costs
    2. Audit → one event per projection
    """

    def __init__(self, audit_logger: Optional[AuditLogger] = None):
        self._audit_logger = audit_logger

    def evaluate(
        self,
        obligation: RecurringObligation,
        today: date,
        correlation_id: Optional[UUID] = None,
    ) -> ObligationProjection:
        """Project one obligation as of today."""
        correlation_id = correlation_id or create_correlation_id()

        try:
            projection = project(obligation, today)
        except EngineError as e:
            if self._audit_logger:
                self._audit_logger.log_precondition_failed(
                    entity_type="obligation",
                    error=e,
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            self._audit_logger.log_obligation_projected(
                obligation=obligation,
                projection=projection,
                today=today,
                correlation_id=correlation_id,
            )

        return projection

    def mark_paid(
        self,
        obligation: RecurringObligation,
        paid_on: date,
        today: Optional[date] = None,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[RecurringObligation, ObligationProjection]:
        """
        Record a payment and project the next due date.

        Returns:
            (updated_obligation, projection)

        The caller persists the updated obligation; the input is unchanged.
        """
        correlation_id = correlation_id or create_correlation_id()
        today = today or paid_on

        updated = record_payment(obligation, paid_on)
        projection = self.evaluate(updated, today, correlation_id=correlation_id)

        if self._audit_logger:
            self._audit_logger.log_payment_recorded(
                obligation=updated,
                paid_on=paid_on,
                next_due_date=projection.next_due_date,
                correlation_id=correlation_id,
            )

        return updated, projection

    def summarize(
        self,
        obligations: Iterable[RecurringObligation],
        today: date,
        correlation_id: Optional[UUID] = None,
    ) -> ObligationSummary:
        """Summarize obligations for the bills dashboard."""
        correlation_id = correlation_id or create_correlation_id()

        try:
            summary = summarize_obligations(obligations, today)
        except EngineError as e:
            if self._audit_logger:
                self._audit_logger.log_precondition_failed(
                    entity_type="obligation",
                    error=e,
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            self._audit_logger.log_portfolio_summarized(
                entity_type="obligation",
                counts={tier.value: n for tier, n in summary.counts.items()},
                correlation_id=correlation_id,
            )

        return summary


class BudgetFlow:
    """
    Evaluates budget snapshots for display.

    Budgets in the warning, danger or exceeded tier get an extra
    warning-level audit event so alerts can be traced.
    """

    def __init__(self, audit_logger: Optional[AuditLogger] = None):
        self._audit_logger = audit_logger

    def evaluate(
        self,
        snapshot: BudgetSnapshot,
        correlation_id: Optional[UUID] = None,
    ) -> BudgetEvaluation:
        """Evaluate one budget snapshot."""
        correlation_id = correlation_id or create_correlation_id()

        evaluation = evaluate(snapshot)

        if self._audit_logger:
            self._audit_logger.log_budget_evaluated(
                snapshot=snapshot,
                evaluation=evaluation,
                correlation_id=correlation_id,
            )
            if evaluation.status in _ALERT_STATUSES:
                self._audit_logger.log_budget_threshold_crossed(
                    snapshot=snapshot,
                    evaluation=evaluation,
                    correlation_id=correlation_id,
                )

        return evaluation

    def summarize(
        self,
        snapshots: Iterable[BudgetSnapshot],
        correlation_id: Optional[UUID] = None,
    ) -> BudgetSummary:
        """Summarize budgets for the budgets dashboard."""
        correlation_id = correlation_id or create_correlation_id()

        try:
            summary = summarize_budgets(snapshots)
        except EngineError as e:
            if self._audit_logger:
                self._audit_logger.log_precondition_failed(
                    entity_type="budget",
                    error=e,
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            self._audit_logger.log_portfolio_summarized(
                entity_type="budget",
                counts={status.value: n for status, n in summary.counts.items()},
                correlation_id=correlation_id,
            )

        return summary


@dataclass(frozen=True)
class EngineComponents:
    audit_logger: AuditLogger
    obligations: ObligationFlow
    budgets: BudgetFlow


def create_engine_components(sink: Optional[AuditSink] = None) -> EngineComponents:
    """
    Create all engine components.

    Configures structlog from the engine settings before the audit
    logger is built.

    Args:
        sink: Optional persistence backend for audit events

    Returns:
        EngineComponents with the shared audit logger and both flows
    """
    configure_logging(get_settings().engine)

    audit_logger = AuditLogger(sink)
    return EngineComponents(
        audit_logger=audit_logger,
        obligations=ObligationFlow(audit_logger),
        budgets=BudgetFlow(audit_logger),
    )
