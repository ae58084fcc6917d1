"""
Currency Conversion

EUR/ILS conversion at a caller-supplied rate, plus a Money type that keeps
the currency attached to an amount so EUR and ILS values are never mixed
by accident.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union

from cyprus_invest.calculations.errors import CurrencyMismatchError, InvalidInputError

# ILS per 1 EUR
DEFAULT_EXCHANGE_RATE = 3.95


class Currency(str, Enum):
    """Supported currencies."""

    EUR = "EUR"
    ILS = "ILS"


CurrencyLike = Union[Currency, str]


def _as_currency(value: CurrencyLike) -> Currency:
    try:
        return Currency(value)
    except ValueError:
        raise InvalidInputError(f"Unsupported currency: {value!r}") from None


def convert_currency(
    amount: float,
    from_currency: CurrencyLike,
    to_currency: CurrencyLike,
    exchange_rate: float,
) -> float:
    """
    Convert an amount between EUR and ILS.

    Args:
        amount: Amount in ``from_currency``
        from_currency: Source currency
        to_currency: Target currency
        exchange_rate: ILS per 1 EUR

    Returns:
        Amount in ``to_currency``

    Raises:
        InvalidInputError: If the rate is not a positive finite number or a currency is unknown
    """
    source = _as_currency(from_currency)
    target = _as_currency(to_currency)

    if not math.isfinite(exchange_rate) or exchange_rate <= 0:
        raise InvalidInputError(f"exchange_rate must be positive, got {exchange_rate}")

    if source == target:
        return amount
    if source == Currency.EUR:
        return amount * exchange_rate
    return amount / exchange_rate


def _format_amount(amount: float) -> str:
    text = f"{amount:,.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_currency(amount: float, currency: CurrencyLike) -> str:
    """Format an amount for display: ``€1,250`` or ``4,937.5 ₪``."""
    if _as_currency(currency) == Currency.EUR:
        return f"€{_format_amount(amount)}"
    return f"{_format_amount(amount)} ₪"


@dataclass(frozen=True)
class Money:
    """An amount tagged with its currency."""

    amount: float
    currency: Currency

    def __post_init__(self):
        object.__setattr__(self, "currency", _as_currency(self.currency))

    @classmethod
    def eur(cls, amount: float) -> "Money":
        return cls(amount, Currency.EUR)

    @classmethod
    def ils(cls, amount: float) -> "Money":
        return cls(amount, Currency.ILS)

    def _check_same_currency(self, other: "Money") -> None:
        if not isinstance(other, Money):
            raise TypeError(f"Expected Money, got {type(other).__name__}")
        if other.currency != self.currency:
            raise CurrencyMismatchError(
                f"Cannot combine {self.currency.value} and {other.currency.value}"
            )

    def __add__(self, other: "Money") -> "Money":
        self._check_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: "Money") -> "Money":
        self._check_same_currency(other)
        return Money(self.amount - other.amount, self.currency)

    def __neg__(self) -> "Money":
        return Money(-self.amount, self.currency)

    def __mul__(self, factor: float) -> "Money":
        if isinstance(factor, Money):
            return NotImplemented
        return Money(self.amount * factor, self.currency)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> "Money":
        if isinstance(divisor, Money):
            return NotImplemented
        return Money(self.amount / divisor, self.currency)

    def __lt__(self, other: "Money") -> bool:
        self._check_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: "Money") -> bool:
        self._check_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: "Money") -> bool:
        self._check_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: "Money") -> bool:
        self._check_same_currency(other)
        return self.amount >= other.amount

    def convert_to(self, currency: CurrencyLike, exchange_rate: float) -> "Money":
        """Convert to another currency at ``exchange_rate`` ILS per EUR."""
        target = _as_currency(currency)
        return Money(
            convert_currency(self.amount, self.currency, target, exchange_rate), target
        )

    def format(self) -> str:
        return format_currency(self.amount, self.currency)
