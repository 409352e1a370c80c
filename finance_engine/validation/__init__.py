"""Record validation package."""

from finance_engine.validation.validator import RecordValidator

__all__ = ["RecordValidator"]
