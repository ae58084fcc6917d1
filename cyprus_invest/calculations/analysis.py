"""
Property Investment Analysis

Composes the tax, yield, mortgage and currency calculations into the two
views an advisor works with:

1. Property analysis - acquisition cost, rental yield and unleveraged cash flow
   for a single listing.
2. Financed investment - the same property bought with the investor's own
   equity (held in ILS) plus a Cyprus mortgage capped by loan-to-value.

All amounts are EUR unless the field name says otherwise. Results keep full
precision; rounding is left to whoever displays them.
"""

from dataclasses import dataclass

from cyprus_invest.calculations.amortization import (
    DEFAULT_MAX_LTV,
    MortgageSummary,
    MortgageTerms,
    calculate_optimal_mortgage_amount,
    summarize_mortgage,
)
from cyprus_invest.calculations.currency import (
    DEFAULT_EXCHANGE_RATE,
    Currency,
    convert_currency,
)
from cyprus_invest.calculations.taxes import (
    DEFAULT_VAT_RATE,
    TotalAcquisitionCost,
    calculate_total_acquisition_cost,
)
from cyprus_invest.calculations.yields import (
    DEFAULT_MANAGEMENT_FEE_PERCENT,
    calculate_management_fee,
    calculate_monthly_cash_flow,
    calculate_potential_yield,
    calculate_return_on_equity,
)


@dataclass(frozen=True)
class PropertyAnalysis:
    """Acquisition cost, yield and cash flow of a property bought outright."""

    acquisition: TotalAcquisitionCost
    total_cost_ils: float
    exchange_rate: float
    monthly_rent: float
    annual_rent: float
    potential_yield: float
    guaranteed_rent: float
    guaranteed_yield: float
    management_fees: float
    operating_expenses: float
    monthly_cash_flow: float
    annual_cash_flow: float


@dataclass(frozen=True)
class FinancedInvestment:
    """A property analysis with mortgage financing applied."""

    analysis: PropertyAnalysis
    self_equity_ils: float
    self_equity: float
    required_loan: float
    max_loan: float
    loan_amount: float
    equity_shortfall: float
    mortgage_fees: float
    equity_invested: float
    mortgage: MortgageSummary
    monthly_cash_flow: float
    annual_cash_flow: float
    return_on_equity: float


def analyze_property(
    price_without_vat: float,
    expected_monthly_rent: float,
    vat_rate: float = DEFAULT_VAT_RATE,
    bedroom_count: int = 2,
    has_furniture: bool = False,
    has_real_estate_agent: bool = True,
    guaranteed_rent: float = 0,
    has_property_management: bool = True,
    management_fee_percent: float = DEFAULT_MANAGEMENT_FEE_PERCENT,
    exchange_rate: float = DEFAULT_EXCHANGE_RATE,
) -> PropertyAnalysis:
    """
    Analyze a property purchased without financing.

    Yields are measured against the total acquisition cost. The guaranteed
    yield is 0 when no guaranteed rent is offered. Management fees are a
    percentage of the expected rent and are the only operating expense.

    Args:
        price_without_vat: Net listing price in EUR
        expected_monthly_rent: Expected monthly rent in EUR
        guaranteed_rent: Contractually guaranteed monthly rent in EUR
        management_fee_percent: Management fee as a percentage of rent
        exchange_rate: ILS per 1 EUR, used for the ILS total

    Returns:
        PropertyAnalysis
    """
    acquisition = calculate_total_acquisition_cost(
        price_without_vat,
        vat_rate=vat_rate,
        bedroom_count=bedroom_count,
        has_furniture=has_furniture,
        has_real_estate_agent=has_real_estate_agent,
    )

    annual_rent = expected_monthly_rent * 12
    potential_yield = calculate_potential_yield(annual_rent, acquisition.total_cost)

    guaranteed_yield = 0.0
    if guaranteed_rent > 0:
        guaranteed_yield = calculate_potential_yield(
            guaranteed_rent * 12, acquisition.total_cost
        )

    management_fees = (
        calculate_management_fee(expected_monthly_rent, management_fee_percent)
        if has_property_management
        else 0.0
    )
    operating_expenses = management_fees

    monthly_cash_flow = calculate_monthly_cash_flow(
        expected_monthly_rent, monthly_management_fee=operating_expenses
    )

    return PropertyAnalysis(
        acquisition=acquisition,
        total_cost_ils=convert_currency(
            acquisition.total_cost, Currency.EUR, Currency.ILS, exchange_rate
        ),
        exchange_rate=exchange_rate,
        monthly_rent=expected_monthly_rent,
        annual_rent=annual_rent,
        potential_yield=potential_yield,
        guaranteed_rent=guaranteed_rent,
        guaranteed_yield=guaranteed_yield,
        management_fees=management_fees,
        operating_expenses=operating_expenses,
        monthly_cash_flow=monthly_cash_flow,
        annual_cash_flow=monthly_cash_flow * 12,
    )


def analyze_financed_investment(
    analysis: PropertyAnalysis,
    self_equity_ils: float,
    annual_interest_rate: float,
    loan_term_years: int,
    max_ltv: float = DEFAULT_MAX_LTV,
    mortgage_fee_rate: float = 0,
) -> FinancedInvestment:
    """
    Apply equity and mortgage financing to a property analysis.

    The investor's equity (ILS) is converted at the analysis exchange rate.
    Whatever it does not cover is borrowed, up to ``max_ltv`` percent of the
    price without VAT; any remainder is reported as ``equity_shortfall``.
    Mortgage fees (``mortgage_fee_rate`` percent of the loan) are paid from
    equity.

    Raises:
        InvalidInputError: If the loan term is not positive, or no equity
            ends up invested so the return on equity is undefined
    """
    acquisition = analysis.acquisition
    self_equity = convert_currency(
        self_equity_ils, Currency.ILS, Currency.EUR, analysis.exchange_rate
    )

    required_loan = max(0.0, acquisition.total_cost - self_equity)
    max_loan = calculate_optimal_mortgage_amount(acquisition.price_without_vat, max_ltv)
    loan_amount = min(required_loan, max_loan)
    equity_shortfall = required_loan - loan_amount
    mortgage_fees = loan_amount * mortgage_fee_rate / 100

    mortgage = summarize_mortgage(
        MortgageTerms(
            loan_amount=loan_amount,
            annual_interest_rate=annual_interest_rate,
            loan_term_years=loan_term_years,
        )
    )

    monthly_cash_flow = calculate_monthly_cash_flow(
        analysis.monthly_rent,
        monthly_mortgage_payment=mortgage.monthly_payment,
        monthly_management_fee=analysis.management_fees,
    )
    annual_cash_flow = monthly_cash_flow * 12

    equity_invested = acquisition.total_cost + mortgage_fees - loan_amount

    return FinancedInvestment(
        analysis=analysis,
        self_equity_ils=self_equity_ils,
        self_equity=self_equity,
        required_loan=required_loan,
        max_loan=max_loan,
        loan_amount=loan_amount,
        equity_shortfall=equity_shortfall,
        mortgage_fees=mortgage_fees,
        equity_invested=equity_invested,
        mortgage=mortgage,
        monthly_cash_flow=monthly_cash_flow,
        annual_cash_flow=annual_cash_flow,
        return_on_equity=calculate_return_on_equity(annual_cash_flow, equity_invested),
    )
