"""
Recurring Obligation Models

A recurring obligation is a bill or subscription that falls due on a
fixed cadence. These models are the read-only input and output of the
schedule projector.

DESIGN DECISION: Models are frozen Pydantic v2 models.
The projector never mutates an obligation; "marking as paid" returns a
new obligation instead. Derived values (next due date, urgency) are
never stored on the obligation, they are recomputed per evaluation.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from finance_engine.config import get_settings
from finance_engine.errors import (
    InvalidCadenceError,
    InvalidDueDayError,
    NegativeAmountError,
)

MIN_DUE_DAY = 1
MAX_DUE_DAY = 28


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Cadence(str, Enum):
    """
    Billing cadence of an obligation.

    Stored records may carry upper-case names ("MONTHLY"), so parsing is
    case-insensitive.
    """
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value: Any) -> "Cadence":
        """Parse a cadence from an enum member or a name, raising InvalidCadenceError."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidCadenceError(value)


class UrgencyTier(str, Enum):
    """
    How imminent or overdue the next payment is.

    Inactive and expired take precedence over the date-based tiers.
    """
    INACTIVE = "inactive"
    EXPIRED = "expired"
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    DUE_SOON = "due_soon"
    UPCOMING = "upcoming"

    @property
    def display_name(self) -> str:
        """Label shown in bill lists, e.g. "DUE SOON"."""
        return self.value.replace("_", " ").upper()


# =============================================================================
# OBLIGATION MODEL
# =============================================================================

def _default_currency() -> str:
    return get_settings().engine.default_currency


def _default_reminder_days() -> int:
    return get_settings().engine.default_reminder_days


class RecurringObligation(BaseModel):
    """
    A recurring bill or subscription.

    due_day_of_month only matters for monthly cadence. For monthly
    obligations it must be within [1, 28] so a snapped date is always a
    valid calendar date; 0 is read as "no due day" like stored rows use it.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(
        default="",
        max_length=200,
        description="Bill or subscription name"
    )
    amount: Decimal = Field(
        ...,
        description="Amount per cadence step"
    )
    currency: str = Field(
        default_factory=_default_currency,
        min_length=3,
        max_length=3,
        description="Currency tag (no conversion is performed)"
    )
    cadence: Cadence = Field(
        default=Cadence.MONTHLY,
        description="Billing cadence"
    )
    due_day_of_month: Optional[int] = Field(
        default=None,
        description="Day of month monthly bills fall due on"
    )
    start_date: date = Field(
        ...,
        description="Date the obligation becomes active"
    )
    end_date: Optional[date] = Field(
        default=None,
        description="Date after which the obligation is expired"
    )
    last_payment_date: Optional[date] = Field(
        default=None,
        description="Most recent recorded payment"
    )
    reminder_window_days: int = Field(
        default_factory=_default_reminder_days,
        ge=0,
        description="Days before the due date at which the bill is due soon"
    )
    is_active: bool = True

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise NegativeAmountError("amount", v)
        return v

    @field_validator('currency')
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.upper()

    @field_validator('cadence', mode='before')
    @classmethod
    def parse_cadence(cls, v: Any) -> Cadence:
        return Cadence.parse(v)

    @field_validator('due_day_of_month')
    @classmethod
    def unset_zero_due_day(cls, v: Optional[int]) -> Optional[int]:
        return None if v == 0 else v

    @model_validator(mode='after')
    def validate_schedule(self) -> 'RecurringObligation':
        """Validate due day and date relationships."""
        if self.cadence == Cadence.MONTHLY and self.due_day_of_month is not None:
            if not MIN_DUE_DAY <= self.due_day_of_month <= MAX_DUE_DAY:
                raise InvalidDueDayError(self.due_day_of_month)

        if self.end_date and self.end_date < self.start_date:
            raise ValueError("End date cannot be before start date")

        return self

    @property
    def snap_day(self) -> Optional[int]:
        """Due day the first monthly advance snaps to, if any."""
        if self.cadence != Cadence.MONTHLY:
            return None
        return self.due_day_of_month


class ObligationProjection(BaseModel):
    """
    Everything the presentation layer shows for one obligation.

    Produced whole by the projector; there are no partial projections.
    """
    model_config = ConfigDict(frozen=True)

    next_due_date: date
    days_until_due: int
    urgency: UrgencyTier
    monthly_cost: Decimal
    yearly_cost: Decimal
    currency: str
