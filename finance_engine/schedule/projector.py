"""
Schedule Projector

Projects the next due date of a recurring obligation, classifies how
urgent it is, and normalizes its amount to monthly and yearly figures.

DESIGN DECISION: Everything here is a pure function.
"today" is always passed in by the caller, never read from a clock,
so every evaluation in one reporting pass agrees with the others.

The next due date is always in the future relative to today. A bill
that was missed for three months is fast-forwarded to its next future
occurrence rather than reported at its oldest missed date.
"""

from datetime import date, timedelta
from decimal import Decimal

from dateutil.relativedelta import relativedelta

from finance_engine.errors import NegativeAmountError
from finance_engine.models.obligation import (
    Cadence,
    ObligationProjection,
    RecurringObligation,
    UrgencyTier,
)
from finance_engine.money import Number, divide_rounded, to_decimal


# Multipliers never round; divisors round to cents half-up.
# Keep both tables in sync with historical reports.
_MONTHLY_MULTIPLIERS = {
    Cadence.DAILY: Decimal("30"),
    Cadence.WEEKLY: Decimal("4.33"),
    Cadence.MONTHLY: Decimal("1"),
}
_MONTHLY_DIVISORS = {
    Cadence.QUARTERLY: 3,
    Cadence.YEARLY: 12,
}
_YEARLY_MULTIPLIERS = {
    Cadence.DAILY: Decimal("365"),
    Cadence.WEEKLY: Decimal("52"),
    Cadence.MONTHLY: Decimal("12"),
    Cadence.QUARTERLY: Decimal("4"),
    Cadence.YEARLY: Decimal("1"),
}

_STEPS = {
    Cadence.DAILY: timedelta(days=1),
    Cadence.WEEKLY: timedelta(weeks=1),
    Cadence.MONTHLY: relativedelta(months=1),
    Cadence.QUARTERLY: relativedelta(months=3),
    Cadence.YEARLY: relativedelta(years=1),
}


def advance(when: date, cadence: Cadence) -> date:
    """
    Move a date forward by one cadence step.

    Month and year steps clamp to the last day of the target month
    (31 Jan + 1 month = 28/29 Feb).
    """
    return when + _STEPS[Cadence.parse(cadence)]


def next_occurrence(obligation: RecurringObligation, today: date) -> date:
    """
    Next due date strictly after today.

    The one exception is an obligation that was never paid and has not
    started yet: its first occurrence is its start date.

    Args:
        obligation: The obligation to project
        today: The caller's current date

    Returns:
        The projected next due date
    """
    if obligation.last_payment_date is not None:
        candidate = obligation.last_payment_date
    elif obligation.start_date > today:
        return obligation.start_date
    else:
        candidate = today

    candidate = advance(candidate, obligation.cadence)

    # Snap once, on the first advance only
    snap_day = obligation.snap_day
    if snap_day is not None:
        candidate = candidate.replace(day=snap_day)

    while candidate <= today:
        candidate = advance(candidate, obligation.cadence)

    return candidate


def upcoming_occurrences(
    obligation: RecurringObligation,
    today: date,
    count: int,
) -> list[date]:
    """
    The next `count` due dates, one cadence step apart.

    Stops early at the obligation's end date. Inactive obligations have
    no upcoming due dates.
    """
    if count < 0:
        raise ValueError("count cannot be negative")

    occurrences: list[date] = []
    if count == 0 or not obligation.is_active:
        return occurrences

    current = next_occurrence(obligation, today)
    while len(occurrences) < count:
        if obligation.end_date and current > obligation.end_date:
            break
        occurrences.append(current)
        current = advance(current, obligation.cadence)
    return occurrences


def days_until(next_due_date: date, today: date) -> int:
    """Signed number of days from today to the due date."""
    return (next_due_date - today).days


def classify_urgency(
    obligation: RecurringObligation,
    next_due_date: date,
    today: date,
) -> UrgencyTier:
    """
    Classify how urgent the next payment is.

    Order matters: inactive, then expired, then the date-based tiers.
    """
    if not obligation.is_active:
        return UrgencyTier.INACTIVE
    if obligation.end_date is not None and obligation.end_date < today:
        return UrgencyTier.EXPIRED

    remaining_days = days_until(next_due_date, today)
    if remaining_days < 0:
        return UrgencyTier.OVERDUE
    if remaining_days == 0:
        return UrgencyTier.DUE_TODAY
    if remaining_days <= obligation.reminder_window_days:
        return UrgencyTier.DUE_SOON
    return UrgencyTier.UPCOMING


def _checked_amount(amount: Number) -> Decimal:
    value = to_decimal(amount)
    if value < 0:
        raise NegativeAmountError("amount", value)
    return value


def normalized_monthly_cost(amount: Number, cadence: Cadence) -> Decimal:
    """
    Amount expressed per month.

    Quarterly and yearly amounts are divided and rounded to cents
    half-up. Daily and weekly amounts are multiplied and left unrounded.
    """
    value = _checked_amount(amount)
    cadence = Cadence.parse(cadence)

    if cadence in _MONTHLY_DIVISORS:
        return divide_rounded(value, _MONTHLY_DIVISORS[cadence])
    return value * _MONTHLY_MULTIPLIERS[cadence]


def normalized_yearly_cost(amount: Number, cadence: Cadence) -> Decimal:
    """Amount expressed per year. Always a multiplication, never rounded."""
    value = _checked_amount(amount)
    return value * _YEARLY_MULTIPLIERS[Cadence.parse(cadence)]


def record_payment(
    obligation: RecurringObligation,
    paid_on: date,
) -> RecurringObligation:
    """Return a copy of the obligation with paid_on as its last payment."""
    return obligation.model_copy(update={"last_payment_date": paid_on})


def project(obligation: RecurringObligation, today: date) -> ObligationProjection:
    """Compute the full projection for one obligation."""
    next_due = next_occurrence(obligation, today)
    return ObligationProjection(
        next_due_date=next_due,
        days_until_due=days_until(next_due, today),
        urgency=classify_urgency(obligation, next_due, today),
        monthly_cost=normalized_monthly_cost(obligation.amount, obligation.cadence),
        yearly_cost=normalized_yearly_cost(obligation.amount, obligation.cadence),
        currency=obligation.currency,
    )
