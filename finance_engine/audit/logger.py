"""
Audit Logger

DESIGN DECISION: Every evaluation handed to the reporting layer is logged.
This provides:
1. Reproducible figures (inputs and outputs side by side)
2. Debugging capability
3. A trail of rejected input reaching the engine

The audit logger:
- Is synchronous, the engine does no I/O of its own to wait on
- Gracefully handles sink failures (never crashes an evaluation)
- Supports correlation IDs to tie together one reporting pass
"""

import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import Optional
from uuid import UUID, uuid4

import structlog

from finance_engine.config import EngineSettings, get_settings
from finance_engine.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from finance_engine.models.budget import BudgetEvaluation, BudgetSnapshot
from finance_engine.models.obligation import ObligationProjection, RecurringObligation


def configure_logging(settings: Optional[EngineSettings] = None) -> None:
    """
    Configure structlog for engine events.

    JSON output by default; the console renderer is easier to read
    while developing.
    """
    settings = settings or get_settings().engine
    level = logging.DEBUG if settings.debug_mode else getattr(logging, settings.log_level)
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger("finance_engine").setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditSink(ABC):
    """
    Somewhere audit events are persisted.

    Implemented by the storage layer, which lives outside the engine.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """Persist one event. Return True on success."""
        ...


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An optional sink (for persistence)
    """

    def __init__(self, sink: Optional[AuditSink] = None):
        """
        Initialize audit logger.

        Args:
            sink: Backend for persistence.
                  If None, only logs locally.
        """
        self._sink = sink
        self._logger = structlog.get_logger("finance_engine.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to the sink if available.

        Returns True if the sink write succeeded (or no sink configured).
        """
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._sink:
            try:
                return self._sink.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_sink_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_obligation_projected(
        self,
        obligation: RecurringObligation,
        projection: ObligationProjection,
        today: date,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an obligation projection."""
        self.log(AuditEventBuilder.obligation_projected(
            obligation=obligation,
            projection=projection,
            today=today,
            correlation_id=correlation_id,
        ))

    def log_payment_recorded(
        self,
        obligation: RecurringObligation,
        paid_on: date,
        next_due_date: date,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a recorded payment."""
        self.log(AuditEventBuilder.payment_recorded(
            obligation=obligation,
            paid_on=paid_on,
            next_due_date=next_due_date,
            correlation_id=correlation_id,
        ))

    def log_budget_evaluated(
        self,
        snapshot: BudgetSnapshot,
        evaluation: BudgetEvaluation,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a budget evaluation."""
        self.log(AuditEventBuilder.budget_evaluated(
            snapshot=snapshot,
            evaluation=evaluation,
            correlation_id=correlation_id,
        ))

    def log_budget_threshold_crossed(
        self,
        snapshot: BudgetSnapshot,
        evaluation: BudgetEvaluation,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a budget entering the warning, danger or exceeded tier."""
        self.log(AuditEventBuilder.budget_threshold_crossed(
            snapshot=snapshot,
            evaluation=evaluation,
            correlation_id=correlation_id,
        ))

    def log_portfolio_summarized(
        self,
        entity_type: str,
        counts: dict[str, int],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a portfolio summary."""
        self.log(AuditEventBuilder.portfolio_summarized(
            entity_type=entity_type,
            counts=counts,
            correlation_id=correlation_id,
        ))

    def log_precondition_failed(
        self,
        entity_type: str,
        error: Exception,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log input the engine rejected."""
        self.log(AuditEventBuilder.precondition_failed(
            entity_type=entity_type,
            error=error,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a reporting pass and pass it to every
    evaluation in that pass.
    """
    return uuid4()
