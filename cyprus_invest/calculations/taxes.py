"""
Acquisition Tax and Cost Calculations

Implements the purchase-side costs of a Cyprus property: VAT, the progressive
stamp duty schedule, furniture allowance and the fees paid on completion.

These functions trust their inputs. Negative prices, VAT rates outside
[0, 100] and negative bedroom counts are rejected by the API layer before
any of this is called.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

DEFAULT_VAT_RATE = 19

# (upper bound of band in EUR, rate). None marks the open top band.
STAMP_DUTY_BANDS: Tuple[Tuple[Optional[float], float], ...] = (
    (85_000, 0.03),
    (170_000, 0.05),
    (None, 0.08),
)

# Furniture allowance by bedroom count (0 = studio)
FURNITURE_COSTS = {0: 5000, 1: 8000, 2: 12000, 3: 16000, 4: 22000}
FURNITURE_BASE_LARGE = 25000  # 5 bedrooms
FURNITURE_PER_EXTRA_BEDROOM = 5000

LEGAL_FEE_RATE = 0.01
AGENT_FEE_RATE = 0.03
LAND_REGISTRY_FEE_RATE = 0.005
BANK_FEES = 1000
OTHER_FEES = 500


@dataclass(frozen=True)
class AcquisitionCosts:
    """Fees paid on top of the purchase price. ``total`` is always derived."""

    legal_fees: float
    agent_fees: float
    land_registry_fees: float
    bank_fees: float
    other_fees: float
    total: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(
            self,
            "total",
            self.legal_fees
            + self.agent_fees
            + self.land_registry_fees
            + self.bank_fees
            + self.other_fees,
        )


@dataclass(frozen=True)
class TotalAcquisitionCost:
    """Full cost of acquiring a property, in EUR."""

    price_without_vat: float
    price_with_vat: float
    stamp_duty: float
    furniture_cost: float
    acquisition_costs: AcquisitionCosts
    vat_amount: float = field(init=False)
    total_cost: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(
            self, "vat_amount", self.price_with_vat - self.price_without_vat
        )
        object.__setattr__(
            self,
            "total_cost",
            self.price_with_vat
            + self.stamp_duty
            + self.furniture_cost
            + self.acquisition_costs.total,
        )


def calculate_price_with_vat(
    price_without_vat: float, vat_rate: float = DEFAULT_VAT_RATE
) -> float:
    """
    Calculate the VAT-inclusive price.

    Args:
        price_without_vat: Net price in EUR
        vat_rate: VAT as a percentage (19 for 19%)

    Returns:
        Gross price in EUR
    """
    return price_without_vat * (1 + vat_rate / 100)


def calculate_stamp_duty(property_value: float) -> float:
    """
    Calculate Cyprus stamp duty on a property purchase.

    Progressive schedule:
        - up to 85,000: 3%
        - 85,000 to 170,000: 5%
        - above 170,000: 8%

    A value sitting exactly on a band boundary is taxed entirely in the
    lower band.

    Args:
        property_value: Property value in EUR

    Returns:
        Stamp duty in EUR
    """
    stamp_duty = 0.0
    lower = 0

    for upper, rate in STAMP_DUTY_BANDS:
        if upper is None or property_value <= upper:
            stamp_duty += (property_value - lower) * rate
            break
        stamp_duty += (upper - lower) * rate
        lower = upper

    return stamp_duty


def calculate_furniture_cost(bedroom_count: int, has_furniture: bool) -> float:
    """
    Estimate the cost of furnishing an unfurnished property.

    Args:
        bedroom_count: Number of bedrooms (0 for a studio)
        has_furniture: True if the property is sold furnished

    Returns:
        Furniture cost in EUR (0 when already furnished)
    """
    if has_furniture:
        return 0

    if bedroom_count in FURNITURE_COSTS:
        return FURNITURE_COSTS[bedroom_count]

    return FURNITURE_BASE_LARGE + (bedroom_count - 5) * FURNITURE_PER_EXTRA_BEDROOM


def calculate_acquisition_costs(
    property_value: float, has_real_estate_agent: bool = True
) -> AcquisitionCosts:
    """
    Calculate legal, agent, registry, bank and other fees.

    Args:
        property_value: Property value in EUR
        has_real_estate_agent: Whether an agent commission is due

    Returns:
        AcquisitionCosts breakdown
    """
    return AcquisitionCosts(
        legal_fees=property_value * LEGAL_FEE_RATE,
        agent_fees=property_value * AGENT_FEE_RATE if has_real_estate_agent else 0,
        land_registry_fees=property_value * LAND_REGISTRY_FEE_RATE,
        bank_fees=BANK_FEES,
        other_fees=OTHER_FEES,
    )


def calculate_total_acquisition_cost(
    price_without_vat: float,
    vat_rate: float = DEFAULT_VAT_RATE,
    bedroom_count: int = 2,
    has_furniture: bool = False,
    has_real_estate_agent: bool = True,
) -> TotalAcquisitionCost:
    """
    Combine price, VAT, stamp duty, furniture and fees into one total.

    Stamp duty and fees are assessed on the price without VAT.
    """
    return TotalAcquisitionCost(
        price_without_vat=price_without_vat,
        price_with_vat=calculate_price_with_vat(price_without_vat, vat_rate),
        stamp_duty=calculate_stamp_duty(price_without_vat),
        furniture_cost=calculate_furniture_cost(bedroom_count, has_furniture),
        acquisition_costs=calculate_acquisition_costs(
            price_without_vat, has_real_estate_agent
        ),
    )
