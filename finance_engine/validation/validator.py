"""
Two-Stage Validation for Obligation and Budget Records

The engine rejects malformed input by raising. The data-entry layer
needs more than the first error, so this module turns raw field dicts
into a report it can show next to the form.

STAGE 1 - CONSTRUCTION:
- Build the frozen model
- Map the engine's error taxonomy and Pydantic errors to issues
- Any issue here is an error: the record cannot be evaluated

STAGE 2 - SEMANTIC CHECKS:
- Values that are legal but probably not what the user meant
- Due day on a non-monthly cadence (ignored by the projector)
- Payment dates outside the obligation's life
- Alert thresholds the fixed danger tier would shadow
- These are warnings only

IMPORTANT: Validation NEVER silently fixes issues.
It reports them for human review.
"""

from datetime import date
from typing import Any, Optional

from pydantic import ValidationError

from finance_engine.budget.accountant import DANGER_PERCENT
from finance_engine.errors import (
    EngineError,
    InvalidCadenceError,
    InvalidDueDayError,
    InvalidThresholdError,
    NegativeAmountError,
    NegativeLimitError,
)
from finance_engine.models.budget import BudgetSnapshot
from finance_engine.models.obligation import Cadence, RecurringObligation
from finance_engine.models.validation import ValidationIssue, ValidationResult


def _field_for(error: EngineError) -> str:
    if isinstance(error, InvalidCadenceError):
        return "cadence"
    if isinstance(error, InvalidDueDayError):
        return "due_day_of_month"
    if isinstance(error, NegativeAmountError):
        return error.field
    if isinstance(error, NegativeLimitError):
        return "limit"
    if isinstance(error, InvalidThresholdError):
        return "alert_threshold_percent"
    return "record"


class RecordValidator:
    """
    Validates raw obligation and budget records through a two-stage pipeline.

    Stage 2 only runs when stage 1 produced a model.
    """

    def _construct(
        self,
        model_cls: type,
        raw: dict[str, Any],
    ) -> tuple[Optional[Any], list[ValidationIssue]]:
        """
        Stage 1: Build the model.

        Returns: (model_or_None, list_of_issues)
        """
        try:
            return model_cls.model_validate(raw), []
        except EngineError as e:
            return None, [ValidationIssue(
                field=_field_for(e),
                issue_type="invalid_value",
                message=str(e),
                severity="error",
            )]
        except ValidationError as e:
            issues = []
            for err in e.errors():
                field = ".".join(str(part) for part in err["loc"]) or "record"
                issues.append(ValidationIssue(
                    field=field,
                    issue_type=err["type"],
                    message=err["msg"],
                    severity="error",
                ))
            return None, issues

    def _check_obligation(
        self,
        obligation: RecurringObligation,
        today: date,
    ) -> list[ValidationIssue]:
        """Stage 2 for obligations."""
        issues = []

        if obligation.due_day_of_month is not None and obligation.cadence != Cadence.MONTHLY:
            issues.append(ValidationIssue(
                field="due_day_of_month",
                issue_type="ignored",
                message=(
                    f"Due day is only used for monthly bills; "
                    f"it is ignored for {obligation.cadence.value} bills"
                ),
                severity="warning",
                suggested_fix="Clear the due day or switch the bill to monthly",
            ))

        last_paid = obligation.last_payment_date
        if last_paid and last_paid < obligation.start_date:
            issues.append(ValidationIssue(
                field="last_payment_date",
                issue_type="inconsistent",
                message="Last payment is before the start date",
                severity="warning",
                suggested_fix="Please verify both dates",
            ))

        if last_paid and last_paid > today:
            issues.append(ValidationIssue(
                field="last_payment_date",
                issue_type="future_date",
                message=f"Last payment date ({last_paid}) is in the future",
                severity="warning",
                suggested_fix="Please verify the payment date",
            ))

        if obligation.end_date and obligation.end_date < today:
            issues.append(ValidationIssue(
                field="end_date",
                issue_type="expired",
                message=f"This bill ended on {obligation.end_date}",
                severity="warning",
                suggested_fix="Deactivate the bill or extend its end date",
            ))

        return issues

    def _check_budget(self, snapshot: BudgetSnapshot) -> list[ValidationIssue]:
        """Stage 2 for budgets."""
        issues = []

        if snapshot.limit == 0:
            issues.append(ValidationIssue(
                field="limit",
                issue_type="suspicious_value",
                message="Budget limit is zero, usage will always show 0%",
                severity="warning",
                suggested_fix="Set a limit greater than zero",
            ))

        if snapshot.alert_threshold_percent >= DANGER_PERCENT:
            issues.append(ValidationIssue(
                field="alert_threshold_percent",
                issue_type="shadowed",
                message=(
                    f"Alert threshold of {snapshot.alert_threshold_percent}% is at or "
                    f"above the {DANGER_PERCENT}% danger level, so no warning will show"
                ),
                severity="warning",
                suggested_fix=f"Use a threshold below {DANGER_PERCENT}%",
            ))

        return issues

    def _result(
        self,
        entity_type: str,
        schema_issues: list[ValidationIssue],
        semantic_issues: list[ValidationIssue],
    ) -> ValidationResult:
        schema_valid = not any(issue.severity == "error" for issue in schema_issues)
        semantic_valid = schema_valid and not any(
            issue.severity == "error" for issue in semantic_issues
        )
        all_issues = schema_issues + semantic_issues

        return ValidationResult(
            entity_type=entity_type,
            schema_valid=schema_valid,
            semantic_valid=semantic_valid,
            is_valid=schema_valid and semantic_valid,
            issues=all_issues,
            warnings=[i.message for i in all_issues if i.severity == "warning"],
        )

    def validate_obligation(self, raw: dict[str, Any], today: date) -> ValidationResult:
        """
        Run full two-stage validation on a raw obligation record.

        Args:
            raw: Field values as loaded from storage or a form
            today: The caller's current date

        Returns:
            ValidationResult with all issues found
        """
        obligation, schema_issues = self._construct(RecurringObligation, raw)
        semantic_issues = []
        if obligation is not None:
            semantic_issues = self._check_obligation(obligation, today)
        return self._result("obligation", schema_issues, semantic_issues)

    def validate_budget(self, raw: dict[str, Any]) -> ValidationResult:
        """Run full two-stage validation on a raw budget record."""
        snapshot, schema_issues = self._construct(BudgetSnapshot, raw)
        semantic_issues = []
        if snapshot is not None:
            semantic_issues = self._check_budget(snapshot)
        return self._result("budget", schema_issues, semantic_issues)

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """
        Generate a user-friendly summary of validation results.

        This is what we show next to the entry form.
        """
        if result.is_valid and not result.warnings:
            return "✅ All checks passed!"

        lines = []

        if not result.schema_valid:
            lines.append(f"❌ This {result.entity_type} cannot be saved:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.field}: {issue.message}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please verify the following:")
            for issue in result.issues:
                if issue.severity == "warning":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     💡 {issue.suggested_fix}")

        return "\n".join(lines)
