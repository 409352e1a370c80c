"""
Engine Error Taxonomy

Every error here is a precondition failure surfaced synchronously to
the immediate caller. Nothing is transient, so nothing is retried.

DESIGN DECISION: These derive from Exception, not ValueError.
Pydantic wraps ValueError raised inside validators into a
ValidationError; anything else propagates unchanged, so the caller
sees the exact taxonomy class.
"""

from typing import Any


class EngineError(Exception):
    """Base exception for engine precondition failures."""
    pass


class InvalidCadenceError(EngineError):
    """Cadence is not one of the supported billing cycles."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"Invalid cadence: {value!r}. "
            "Expected one of: daily, weekly, monthly, quarterly, yearly"
        )


class InvalidDueDayError(EngineError):
    """Monthly due day outside [1, 28]."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"Invalid due day of month: {value!r}. Must be between 1 and 28"
        )


class NegativeAmountError(EngineError):
    """An amount (obligation amount or spent total) is negative."""

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(f"{field} cannot be negative (got {value})")


class NegativeLimitError(EngineError):
    """Budget limit is negative."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Budget limit cannot be negative (got {value})")


class InvalidThresholdError(EngineError):
    """Alert threshold percent outside [0, 100]."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"Alert threshold must be between 0 and 100 percent (got {value})"
        )


class CurrencyMismatchError(EngineError):
    """Values with different currency tags were combined."""

    def __init__(self, expected: str, found: str):
        self.expected = expected
        self.found = found
        super().__init__(
            f"Cannot combine amounts in {found} with amounts in {expected}"
        )
