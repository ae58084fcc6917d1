"""
Yield and Cash Flow Calculations

Rental yield, return ratios, monthly cash flow and rent growth projections.
Rates are percentages (8 for 8%) and returned ratios are percentages too.
"""

import math

from cyprus_invest.calculations.errors import InvalidInputError

DEFAULT_MANAGEMENT_FEE_PERCENT = 8
DEFAULT_RENT_INCREASE_RATE = 3
DEFAULT_PROJECTION_YEARS = 5


def _percent_of(numerator: float, denominator: float, name: str) -> float:
    """Return numerator / denominator as a percentage; the denominator must be finite and positive."""
    if not math.isfinite(denominator) or denominator <= 0:
        raise InvalidInputError(f"{name} must be a positive number, got {denominator}")
    return (numerator / denominator) * 100


def calculate_potential_yield(annual_rent: float, total_investment: float) -> float:
    """
    Calculate gross rental yield.

    Args:
        annual_rent: Annual rental income in EUR
        total_investment: Total acquisition cost in EUR

    Returns:
        Yield as a percentage

    Raises:
        InvalidInputError: If total_investment is zero or negative
    """
    return _percent_of(annual_rent, total_investment, "total_investment")


def calculate_monthly_cash_flow(
    monthly_rent: float,
    monthly_mortgage_payment: float = 0,
    monthly_management_fee: float = 0,
    monthly_expenses: float = 0,
) -> float:
    """
    Calculate net monthly cash flow.

    A negative result means the property costs more than it earns each month.
    """
    return (
        monthly_rent
        - monthly_mortgage_payment
        - monthly_management_fee
        - monthly_expenses
    )


def calculate_management_fee(
    monthly_rent: float, fee_percent: float = DEFAULT_MANAGEMENT_FEE_PERCENT
) -> float:
    """Calculate the monthly property management fee charged on rent."""
    return monthly_rent * fee_percent / 100


def calculate_return_on_equity(annual_cash_flow: float, equity_amount: float) -> float:
    """
    Calculate annual return on the investor's own equity.

    Raises:
        InvalidInputError: If equity_amount is zero or negative
    """
    return _percent_of(annual_cash_flow, equity_amount, "equity_amount")


def calculate_roi(annual_income: float, total_investment: float) -> float:
    """Calculate return on investment as a percentage."""
    return _percent_of(annual_income, total_investment, "total_investment")


def calculate_cash_on_cash(annual_cash_flow: float, cash_invested: float) -> float:
    """Calculate cash-on-cash return as a percentage."""
    return _percent_of(annual_cash_flow, cash_invested, "cash_invested")


def calculate_cap_rate(annual_noi: float, property_value: float) -> float:
    """Calculate capitalization rate (NOI / value) as a percentage."""
    return _percent_of(annual_noi, property_value, "property_value")


def calculate_future_rent(
    current_rent: float,
    annual_increase_rate: float = DEFAULT_RENT_INCREASE_RATE,
    years: float = DEFAULT_PROJECTION_YEARS,
) -> float:
    """
    Project rent forward with annual compounding.

    Args:
        current_rent: Rent today
        annual_increase_rate: Annual growth as a percentage
        years: Projection horizon, may be fractional

    Returns:
        Projected rent after ``years``
    """
    return current_rent * (1 + annual_increase_rate / 100) ** years
