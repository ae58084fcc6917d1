"""
Financial calculation API endpoints.

These endpoints validate inputs, call the calculation engine and return the
results as JSON. Range checks on prices, rates and counts live in the request
models; the engine itself only rejects inputs that make a result undefined,
which surface here as 400 responses.
"""

import logging
from dataclasses import asdict
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from cyprus_invest.calculations import amortization, analysis, currency, taxes, yields
from cyprus_invest.calculations.currency import Currency
from cyprus_invest.config import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_LOAN_TERM_YEARS = 50


def _pick(value, default):
    return default if value is None else value


def _bad_request(e: ValueError) -> HTTPException:
    logger.warning(f"Rejected calculation input: {e}")
    return HTTPException(status_code=400, detail=str(e))


class CalculationInput(BaseModel):
    """Base for request bodies. NaN and Infinity are rejected as 422."""

    model_config = ConfigDict(allow_inf_nan=False)


# =============================================================================
# Acquisition costs
# =============================================================================


class AcquisitionInput(CalculationInput):
    """Input for total acquisition cost."""

    price_without_vat: float = Field(gt=0)
    vat_rate: Optional[float] = Field(default=None, ge=0, le=100)
    bedroom_count: int = Field(default=2, ge=0, le=10)
    has_furniture: bool = False
    has_real_estate_agent: bool = True


class StampDutyInput(CalculationInput):
    property_value: float = Field(ge=0)


class FurnitureInput(CalculationInput):
    bedroom_count: int = Field(ge=0, le=10)
    has_furniture: bool = False


@router.post("/acquisition-cost")
async def calculate_acquisition_cost(
    inputs: AcquisitionInput, settings: Settings = Depends(get_settings)
):
    """Calculate price with VAT, stamp duty, furniture, fees and total cost."""
    logger.debug(f"Acquisition cost for price {inputs.price_without_vat}")

    result = taxes.calculate_total_acquisition_cost(
        inputs.price_without_vat,
        vat_rate=_pick(inputs.vat_rate, settings.vat_rate),
        bedroom_count=inputs.bedroom_count,
        has_furniture=inputs.has_furniture,
        has_real_estate_agent=inputs.has_real_estate_agent,
    )
    return asdict(result)


@router.post("/stamp-duty")
async def calculate_stamp_duty(inputs: StampDutyInput):
    """Calculate Cyprus stamp duty for a property value."""
    return {
        "property_value": inputs.property_value,
        "stamp_duty": taxes.calculate_stamp_duty(inputs.property_value),
    }


@router.post("/furniture-cost")
async def calculate_furniture_cost(inputs: FurnitureInput):
    """Estimate furniture cost by bedroom count."""
    return {
        "bedroom_count": inputs.bedroom_count,
        "has_furniture": inputs.has_furniture,
        "furniture_cost": taxes.calculate_furniture_cost(
            inputs.bedroom_count, inputs.has_furniture
        ),
    }


# =============================================================================
# Yield and cash flow
# =============================================================================


class YieldInput(CalculationInput):
    annual_rent: float = Field(ge=0)
    total_investment: float


class CashFlowInput(CalculationInput):
    """Input for monthly cash flow."""

    monthly_rent: float
    monthly_mortgage_payment: float = 0
    monthly_management_fee: float = 0
    monthly_expenses: float = 0


class ReturnOnEquityInput(CalculationInput):
    annual_cash_flow: float
    equity_amount: float


class FutureRentInput(CalculationInput):
    current_rent: float = Field(ge=0)
    annual_increase_rate: Optional[float] = None
    years: float = Field(default=5, ge=0)


@router.post("/yield")
async def calculate_yield(inputs: YieldInput):
    """Calculate potential rental yield."""
    try:
        potential_yield = yields.calculate_potential_yield(
            inputs.annual_rent, inputs.total_investment
        )
    except ValueError as e:
        raise _bad_request(e)

    return {"potential_yield": potential_yield}


@router.post("/cash-flow")
async def calculate_cash_flow(inputs: CashFlowInput):
    """Calculate monthly and annual cash flow."""
    monthly = yields.calculate_monthly_cash_flow(
        inputs.monthly_rent,
        monthly_mortgage_payment=inputs.monthly_mortgage_payment,
        monthly_management_fee=inputs.monthly_management_fee,
        monthly_expenses=inputs.monthly_expenses,
    )
    return {"monthly_cash_flow": monthly, "annual_cash_flow": monthly * 12}


@router.post("/return-on-equity")
async def calculate_return_on_equity(inputs: ReturnOnEquityInput):
    """Calculate return on equity."""
    try:
        roe = yields.calculate_return_on_equity(
            inputs.annual_cash_flow, inputs.equity_amount
        )
    except ValueError as e:
        raise _bad_request(e)

    return {"return_on_equity": roe}


@router.post("/future-rent")
async def calculate_future_rent(
    inputs: FutureRentInput, settings: Settings = Depends(get_settings)
):
    """Project rent forward with compound growth."""
    rate = _pick(inputs.annual_increase_rate, settings.rent_increase_rate)
    return {
        "current_rent": inputs.current_rent,
        "annual_increase_rate": rate,
        "years": inputs.years,
        "future_rent": yields.calculate_future_rent(
            inputs.current_rent, annual_increase_rate=rate, years=inputs.years
        ),
    }


# =============================================================================
# Mortgage
# =============================================================================


class MortgageInput(CalculationInput):
    """Input for mortgage payment and amortization."""

    loan_amount: float
    annual_interest_rate: float = Field(ge=0)
    loan_term_years: int = Field(gt=0, le=MAX_LOAN_TERM_YEARS)


class AmortizationInput(MortgageInput):
    start_date: Optional[date] = None


class OptimalMortgageInput(CalculationInput):
    property_value: float = Field(ge=0)
    max_ltv: Optional[float] = Field(default=None, ge=0, le=100)


@router.post("/mortgage")
async def calculate_mortgage(inputs: MortgageInput):
    """Calculate monthly payment and total interest."""
    try:
        summary = amortization.summarize_mortgage(
            amortization.MortgageTerms(
                loan_amount=inputs.loan_amount,
                annual_interest_rate=inputs.annual_interest_rate,
                loan_term_years=inputs.loan_term_years,
            )
        )
    except ValueError as e:
        raise _bad_request(e)

    return asdict(summary)


@router.post("/amortization")
async def calculate_amortization(inputs: AmortizationInput):
    """Generate loan amortization schedule."""
    try:
        schedule = amortization.generate_amortization_schedule(
            loan_amount=inputs.loan_amount,
            annual_interest_rate=inputs.annual_interest_rate,
            loan_term_years=inputs.loan_term_years,
            start_date=inputs.start_date,
        )
    except ValueError as e:
        raise _bad_request(e)

    return {
        "schedule": schedule,
        "total_interest": sum(row["interest"] for row in schedule),
        "total_principal": sum(row["principal"] for row in schedule),
    }


@router.post("/optimal-mortgage")
async def calculate_optimal_mortgage(
    inputs: OptimalMortgageInput, settings: Settings = Depends(get_settings)
):
    """Calculate the maximum loan for a loan-to-value limit."""
    max_ltv = _pick(inputs.max_ltv, settings.max_ltv)
    return {
        "property_value": inputs.property_value,
        "max_ltv": max_ltv,
        "loan_amount": amortization.calculate_optimal_mortgage_amount(
            inputs.property_value, max_ltv
        ),
    }


# =============================================================================
# Currency
# =============================================================================


class ConversionInput(CalculationInput):
    amount: float
    from_currency: Currency
    to_currency: Currency
    exchange_rate: Optional[float] = None


@router.post("/convert")
async def convert(inputs: ConversionInput, settings: Settings = Depends(get_settings)):
    """Convert an amount between EUR and ILS."""
    rate = _pick(inputs.exchange_rate, settings.exchange_rate)
    try:
        converted = currency.convert_currency(
            inputs.amount, inputs.from_currency, inputs.to_currency, rate
        )
    except ValueError as e:
        raise _bad_request(e)

    return {
        "amount": inputs.amount,
        "from_currency": inputs.from_currency.value,
        "to_currency": inputs.to_currency.value,
        "exchange_rate": rate,
        "converted_amount": converted,
        "formatted": currency.format_currency(converted, inputs.to_currency),
    }


# =============================================================================
# Property analysis
# =============================================================================


class PropertyAnalysisInput(AcquisitionInput):
    """Input for a full property analysis."""

    expected_monthly_rent: float = Field(ge=0)
    guaranteed_rent: float = Field(default=0, ge=0)
    has_property_management: bool = True
    management_fee_percent: Optional[float] = Field(default=None, ge=0, le=100)
    exchange_rate: Optional[float] = Field(default=None, gt=0)


class FinancedInvestmentInput(PropertyAnalysisInput):
    """Input for a property analysis with mortgage financing."""

    self_equity_ils: float = Field(ge=0)
    annual_interest_rate: float = Field(ge=0)
    loan_term_years: int = Field(gt=0, le=MAX_LOAN_TERM_YEARS)
    max_ltv: Optional[float] = Field(default=None, ge=0, le=100)
    mortgage_fee_rate: float = Field(default=0, ge=0, le=100)


def _analyze(inputs: PropertyAnalysisInput, settings: Settings) -> analysis.PropertyAnalysis:
    return analysis.analyze_property(
        inputs.price_without_vat,
        inputs.expected_monthly_rent,
        vat_rate=_pick(inputs.vat_rate, settings.vat_rate),
        bedroom_count=inputs.bedroom_count,
        has_furniture=inputs.has_furniture,
        has_real_estate_agent=inputs.has_real_estate_agent,
        guaranteed_rent=inputs.guaranteed_rent,
        has_property_management=inputs.has_property_management,
        management_fee_percent=_pick(
            inputs.management_fee_percent, settings.management_fee_percent
        ),
        exchange_rate=_pick(inputs.exchange_rate, settings.exchange_rate),
    )


@router.post("/property-analysis")
async def calculate_property_analysis(
    inputs: PropertyAnalysisInput, settings: Settings = Depends(get_settings)
):
    """Analyze acquisition cost, yield and cash flow of a property."""
    logger.debug(f"Property analysis for price {inputs.price_without_vat}")

    try:
        result = _analyze(inputs, settings)
    except ValueError as e:
        raise _bad_request(e)

    return asdict(result)


@router.post("/financed-investment")
async def calculate_financed_investment(
    inputs: FinancedInvestmentInput, settings: Settings = Depends(get_settings)
):
    """Analyze a property bought with equity plus a mortgage."""
    logger.debug(
        f"Financed investment for price {inputs.price_without_vat}, "
        f"equity {inputs.self_equity_ils} ILS"
    )

    try:
        result = analysis.analyze_financed_investment(
            _analyze(inputs, settings),
            self_equity_ils=inputs.self_equity_ils,
            annual_interest_rate=inputs.annual_interest_rate,
            loan_term_years=inputs.loan_term_years,
            max_ltv=_pick(inputs.max_ltv, settings.max_ltv),
            mortgage_fee_rate=inputs.mortgage_fee_rate,
        )
    except ValueError as e:
        raise _bad_request(e)

    return asdict(result)
