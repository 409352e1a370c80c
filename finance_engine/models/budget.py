"""
Budget Models

A budget snapshot is the limit / spent / threshold triple for one
spending category in the current period. The evaluation derived from it
is a separate value, never stored on the snapshot.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finance_engine.config import get_settings
from finance_engine.errors import (
    InvalidThresholdError,
    NegativeAmountError,
    NegativeLimitError,
)


class BudgetStatus(str, Enum):
    """
    How close a budget is to, or past, its limit.

    Only WARNING depends on the configurable alert threshold.
    DANGER and EXCEEDED are fixed at 90% and 100%.
    """
    OK = "ok"
    WARNING = "warning"
    DANGER = "danger"
    EXCEEDED = "exceeded"


def _default_currency() -> str:
    return get_settings().engine.default_currency


def _default_alert_threshold() -> int:
    return get_settings().engine.default_alert_threshold


class BudgetSnapshot(BaseModel):
    """Limit, alert threshold and spent total for one budget."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(
        default="",
        max_length=200,
        description="Budget name"
    )
    limit: Decimal = Field(
        ...,
        description="Spending limit for the period"
    )
    alert_threshold_percent: int = Field(
        default_factory=_default_alert_threshold,
        description="Percent of the limit at which the warning tier begins"
    )
    spent: Decimal = Field(
        default=Decimal("0"),
        description="Amount already spent this period"
    )
    currency: str = Field(
        default_factory=_default_currency,
        min_length=3,
        max_length=3,
    )

    @field_validator('limit')
    @classmethod
    def validate_limit(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise NegativeLimitError(v)
        return v

    @field_validator('spent')
    @classmethod
    def validate_spent(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise NegativeAmountError("spent", v)
        return v

    @field_validator('alert_threshold_percent')
    @classmethod
    def validate_threshold(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise InvalidThresholdError(v)
        return v

    @field_validator('currency')
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.upper()


class BudgetEvaluation(BaseModel):
    """Result of evaluating a snapshot. remaining may be negative."""
    model_config = ConfigDict(frozen=True)

    remaining: Decimal
    percent_used: Decimal
    status: BudgetStatus
    currency: str

    @property
    def is_over_budget(self) -> bool:
        return self.remaining < 0
