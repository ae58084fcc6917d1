"""
Calculation engine errors.

All engine errors derive from ValueError so callers that already guard
numeric input with ``except ValueError`` keep working.
"""


class CalculationError(ValueError):
    """Base class for errors raised by the calculation engine."""


class InvalidInputError(CalculationError):
    """An input would make the result undefined (zero divisor, empty loan term)."""


class CurrencyMismatchError(CalculationError):
    """Arithmetic was attempted between amounts in different currencies."""
