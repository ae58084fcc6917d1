"""
Mortgage Calculations

Fixed-rate amortizing loan payment, total interest, remaining balance and
month-by-month amortization schedule. Interest rates are annual percentages
(3.5 for 3.5%).
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from dateutil.relativedelta import relativedelta

from cyprus_invest.calculations.errors import InvalidInputError

DEFAULT_MAX_LTV = 60


@dataclass(frozen=True)
class MortgageTerms:
    """Loan parameters."""

    loan_amount: float
    annual_interest_rate: float
    loan_term_years: int


@dataclass(frozen=True)
class MortgageSummary:
    """Payment and cost of a loan over its full term."""

    terms: MortgageTerms
    monthly_payment: float
    number_of_payments: int = field(init=False)
    total_paid: float = field(init=False)
    total_interest: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "number_of_payments", self.terms.loan_term_years * 12)
        object.__setattr__(
            self, "total_paid", self.monthly_payment * self.number_of_payments
        )
        object.__setattr__(
            self,
            "total_interest",
            calculate_total_interest(
                self.terms.loan_amount, self.monthly_payment, self.terms.loan_term_years
            ),
        )


def _validate_loan(loan_amount: float, loan_term_years: float) -> None:
    if loan_term_years <= 0:
        raise InvalidInputError(
            f"loan_term_years must be positive, got {loan_term_years}"
        )
    if loan_amount < 0:
        raise InvalidInputError(f"loan_amount cannot be negative, got {loan_amount}")


def calculate_monthly_payment(
    loan_amount: float, annual_interest_rate: float, loan_term_years: int
) -> float:
    """
    Calculate the fixed monthly payment of an amortizing loan.

    Uses the annuity formula P * r * (1+r)^n / ((1+r)^n - 1). The formula is
    undefined at r = 0, where the payment is simply P / n.

    Args:
        loan_amount: Loan principal in EUR
        annual_interest_rate: Annual rate as a percentage (may be 0)
        loan_term_years: Loan term in years

    Returns:
        Monthly payment in EUR

    Raises:
        InvalidInputError: If the term is not positive, the amount is negative, or
            the term is too long for the payment to be computed
    """
    _validate_loan(loan_amount, loan_term_years)

    monthly_rate = annual_interest_rate / 100 / 12
    number_of_payments = loan_term_years * 12

    if monthly_rate == 0:
        return loan_amount / number_of_payments

    try:
        growth = (1 + monthly_rate) ** number_of_payments
    except OverflowError:
        raise InvalidInputError(
            f"loan_term_years {loan_term_years} is too long for rate {annual_interest_rate}"
        ) from None
    return loan_amount * (monthly_rate * growth) / (growth - 1)


def calculate_total_interest(
    loan_amount: float, monthly_payment: float, loan_term_years: int
) -> float:
    """Calculate interest paid over the life of the loan."""
    return monthly_payment * loan_term_years * 12 - loan_amount


def summarize_mortgage(terms: MortgageTerms) -> MortgageSummary:
    """Calculate payment, total paid and total interest for a set of terms."""
    payment = calculate_monthly_payment(
        terms.loan_amount, terms.annual_interest_rate, terms.loan_term_years
    )
    return MortgageSummary(terms=terms, monthly_payment=payment)


def calculate_optimal_mortgage_amount(
    property_value: float, max_ltv: float = DEFAULT_MAX_LTV
) -> float:
    """
    Calculate the largest loan allowed by a loan-to-value limit.

    Args:
        property_value: Property value in EUR
        max_ltv: Maximum loan-to-value as a percentage
    """
    return property_value * (max_ltv / 100)


def calculate_remaining_balance(
    loan_amount: float,
    annual_interest_rate: float,
    loan_term_years: int,
    payments_completed: int,
) -> float:
    """Calculate outstanding principal after N monthly payments."""
    monthly_rate = annual_interest_rate / 100 / 12
    payment = calculate_monthly_payment(loan_amount, annual_interest_rate, loan_term_years)

    if monthly_rate == 0:
        return max(0.0, loan_amount - payment * payments_completed)

    balance = loan_amount * ((1 + monthly_rate) ** payments_completed) - payment * (
        ((1 + monthly_rate) ** payments_completed - 1) / monthly_rate
    )

    return max(0.0, balance)


def generate_amortization_schedule(
    loan_amount: float,
    annual_interest_rate: float,
    loan_term_years: int,
    start_date: Optional[date] = None,
) -> List[Dict]:
    """
    Generate a month-by-month amortization schedule.

    Args:
        loan_amount: Loan principal in EUR
        annual_interest_rate: Annual rate as a percentage
        loan_term_years: Loan term in years
        start_date: Date of first payment (defaults to today)

    Returns:
        List of amortization rows, amounts rounded to cents
    """
    payment = calculate_monthly_payment(loan_amount, annual_interest_rate, loan_term_years)
    monthly_rate = annual_interest_rate / 100 / 12
    total_months = loan_term_years * 12

    if start_date is None:
        start_date = date.today()

    schedule = []
    balance = float(loan_amount)

    for period in range(1, total_months + 1):
        period_date = start_date + relativedelta(months=period - 1)

        interest = balance * monthly_rate

        if period == total_months:
            # Final payment clears any rounding residue
            principal_pmt = balance
        else:
            principal_pmt = min(payment - interest, balance)

        ending_balance = balance - principal_pmt

        schedule.append(
            {
                "period": period,
                "date": period_date.isoformat(),
                "beginning_balance": round(balance, 2),
                "payment": round(principal_pmt + interest, 2),
                "interest": round(interest, 2),
                "principal": round(principal_pmt, 2),
                "ending_balance": round(max(0.0, ending_balance), 2),
            }
        )

        balance = max(0.0, ending_balance)

    return schedule
