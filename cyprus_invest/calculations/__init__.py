"""
Financial Calculation Engine

Pure calculation modules for Cyprus property investment analysis.
Nothing here touches storage, HTTP or shared state.
"""

from cyprus_invest.calculations import amortization, analysis, currency, taxes, yields
from cyprus_invest.calculations.errors import (
    CalculationError,
    CurrencyMismatchError,
    InvalidInputError,
)

__all__ = [
    "amortization",
    "analysis",
    "currency",
    "taxes",
    "yields",
    "CalculationError",
    "CurrencyMismatchError",
    "InvalidInputError",
]
