"""
money.py — Money port for basket reconciliation

================================================================================
DESIGN PRINCIPLES
================================================================================

1. INTERNAL REPRESENTATION
   Integers in minor units (pence for GBP, cents for EUR/USD, ...).
   Never floating point internally.

2. CURRENCY SAFETY
   Operations across currencies raise CurrencyMismatchError.
   Operations with bare float/int raise TypeError (explicit conversion).

3. IMMUTABILITY
   Frozen dataclass. Every operation returns a new instance.

4. EXPLICIT ROUNDING
   Nothing is rounded implicitly. Scaling by a rate rounds exactly once,
   with the strategy chosen by the caller. The rate is turned into an
   exact fraction first, so 0.15 means 15/100 and not the nearest double.

5. BOUNDED
   Amounts live inside a signed 64-bit range. Anything outside raises
   InvalidOperationError instead of silently growing.

================================================================================
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from numbers import Rational
import math

from .exceptions import CurrencyMismatchError, InvalidOperationError


# ==============================================================================
# CURRENCY DEFINITIONS (ISO 4217)
# ==============================================================================

class Currency(Enum):
    """
    Supported currencies with their minor-unit precision.

    Only the alphabetic code and the number of decimals are modelled.
    """
    EUR = ("EUR", 2)
    USD = ("USD", 2)
    GBP = ("GBP", 2)
    JPY = ("JPY", 0)
    KWD = ("KWD", 3)
    BTC = ("BTC", 8)

    def __init__(self, code: str, decimals: int):
        self._code = code
        self._decimals = decimals

    @property
    def code(self) -> str:
        return self._code

    @property
    def decimals(self) -> int:
        return self._decimals

    @property
    def multiplier(self) -> int:
        """Conversion factor major -> minor unit."""
        return 10 ** self._decimals


# ==============================================================================
# ROUNDING STRATEGIES
# ==============================================================================

class RoundingMode(Enum):
    """
    Rounding strategies.

    - HALF_UP: commercial rounding (0.5 -> 1), the default for tax
    - HALF_EVEN: banker's rounding
    - DOWN: towards zero
    - UP: away from zero
    - HALF_DOWN: 0.5 -> 0
    """
    HALF_UP = "half_up"
    HALF_EVEN = "half_even"
    DOWN = "down"
    UP = "up"
    HALF_DOWN = "half_down"


def _apply_rounding(value: Fraction, mode: RoundingMode) -> int:
    """Round an exact fraction to an int with the given strategy."""

    def _half_up(v: Fraction) -> int:
        if v < 0:
            return -math.floor(-v + Fraction(1, 2))
        return math.floor(v + Fraction(1, 2))

    def _half_even(v: Fraction) -> int:
        return round(v)

    def _down(v: Fraction) -> int:
        return int(v) if v >= 0 else math.ceil(v)

    def _up(v: Fraction) -> int:
        return math.ceil(v) if v >= 0 else math.floor(v)

    def _half_down(v: Fraction) -> int:
        return math.ceil(v - Fraction(1, 2)) if v >= 0 else math.floor(v + Fraction(1, 2))

    strategies = {
        RoundingMode.HALF_UP: _half_up,
        RoundingMode.HALF_EVEN: _half_even,
        RoundingMode.DOWN: _down,
        RoundingMode.UP: _up,
        RoundingMode.HALF_DOWN: _half_down,
    }

    strategy = strategies.get(mode)
    if strategy is None:
        raise ValueError(f"Unknown rounding mode: {mode}")

    return strategy(value)


def _as_fraction(multiplier: int | float | Decimal | Rational) -> Fraction:
    if isinstance(multiplier, bool) or not isinstance(multiplier, (float, Decimal, Rational)):
        raise TypeError(f"Rate must be a number, not {type(multiplier).__name__}")
    if isinstance(multiplier, float):
        if not math.isfinite(multiplier):
            raise InvalidOperationError(f"Rate must be finite, got: {multiplier}")
        # str() keeps the decimal the caller wrote (0.2 -> 1/5)
        return Fraction(str(multiplier))
    if isinstance(multiplier, Decimal) and not multiplier.is_finite():
        raise InvalidOperationError(f"Rate must be finite, got: {multiplier}")
    return Fraction(multiplier)


# ==============================================================================
# MONEY CLASS
# ==============================================================================

@dataclass(frozen=True, slots=True, order=False)
class Money:
    """
    Amount in minor units paired with a currency.

    INVARIANTS:
    1. _minor_units is always an int within +/- MAX_MINOR_UNITS
    2. _currency is always a Currency
    3. Arithmetic and ordering across currencies raise CurrencyMismatchError

    USAGE:
        price = Money.gbp(10)          # 10.00 GBP
        line = price * 3               # 30.00 GBP
        tax = line.apply_rate(0.2)     # 6.00 GBP
    """
    _minor_units: int
    _currency: Currency

    MAX_MINOR_UNITS = 2 ** 63 - 1

    def __post_init__(self) -> None:
        if isinstance(self._minor_units, bool) or not isinstance(self._minor_units, int):
            raise TypeError(
                f"Minor units must be int, not {type(self._minor_units).__name__}"
            )
        if not isinstance(self._currency, Currency):
            raise TypeError(
                f"Currency must be Currency, not {type(self._currency).__name__}"
            )
        if abs(self._minor_units) > self.MAX_MINOR_UNITS:
            raise InvalidOperationError(
                f"Amount {self._minor_units} {self._currency.code} exceeds "
                f"the supported range (+/- {self.MAX_MINOR_UNITS})"
            )

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def of(cls, major_units: int, currency: Currency) -> Money:
        """Whole major units (pounds, euros, ...)."""
        return cls(
            _minor_units=major_units * currency.multiplier,
            _currency=currency
        )

    @classmethod
    def of_minor(cls, minor_units: int, currency: Currency) -> Money:
        return cls(_minor_units=minor_units, _currency=currency)

    @classmethod
    def zero(cls, currency: Currency) -> Money:
        """Zero for a currency. Start value for sums."""
        return cls(_minor_units=0, _currency=currency)

    @classmethod
    def euro(cls, value: int) -> Money:
        return cls.of(value, Currency.EUR)

    @classmethod
    def euro_cents(cls, cents: int) -> Money:
        return cls.of_minor(cents, Currency.EUR)

    @classmethod
    def usd(cls, value: int) -> Money:
        return cls.of(value, Currency.USD)

    @classmethod
    def usd_cents(cls, cents: int) -> Money:
        return cls.of_minor(cents, Currency.USD)

    @classmethod
    def gbp(cls, value: int) -> Money:
        return cls.of(value, Currency.GBP)

    @classmethod
    def pence(cls, pence: int) -> Money:
        return cls.of_minor(pence, Currency.GBP)

    # -------------------------------------------------------------------------
    # Scaling
    # -------------------------------------------------------------------------

    def apply_rate(
        self,
        multiplier: int | float | Decimal | Rational,
        rounding: RoundingMode = RoundingMode.HALF_UP
    ) -> Money:
        """
        Scale by a rate and round once.

        Example: line.apply_rate(0.2) for 20% tax.
        """
        result = self._minor_units * _as_fraction(multiplier)
        return Money.of_minor(_apply_rounding(result, rounding), self._currency)

    def apply_percentage(
        self,
        percent: int | float | Decimal | Rational,
        rounding: RoundingMode = RoundingMode.HALF_UP
    ) -> Money:
        """
        Scale by a percentage.

        Example: amount.apply_percentage(15) for 15% of amount.
        """
        result = self._minor_units * _as_fraction(percent) / 100
        return Money.of_minor(_apply_rounding(result, rounding), self._currency)

    # -------------------------------------------------------------------------
    # Arithmetic (currency checked)
    # -------------------------------------------------------------------------

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            raise TypeError(
                f"Operation not allowed: Money + {type(other).__name__}. "
                f"Use Money.of() or Money.of_minor() to convert."
            )
        self._check_same_currency(other, "addition")
        return Money.of_minor(
            self._minor_units + other._minor_units,
            self._currency
        )

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            raise TypeError(
                f"Operation not allowed: Money - {type(other).__name__}."
            )
        self._check_same_currency(other, "subtraction")
        return Money.of_minor(
            self._minor_units - other._minor_units,
            self._currency
        )

    def __neg__(self) -> Money:
        return Money.of_minor(-self._minor_units, self._currency)

    def __abs__(self) -> Money:
        return Money.of_minor(abs(self._minor_units), self._currency)

    def __mul__(self, factor: int) -> Money:
        """
        Multiply by an int (quantity).

        For rates use apply_rate() or apply_percentage().
        """
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(
                f"Money can only be multiplied by int (quantity), "
                f"not {type(factor).__name__}. For rates, use apply_rate()."
            )
        return Money.of_minor(self._minor_units * factor, self._currency)

    def __rmul__(self, factor: int) -> Money:
        return self.__mul__(factor)

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Money):
            return (
                self._minor_units == other._minor_units
                and self._currency == other._currency
            )
        return NotImplemented

    def __lt__(self, other: Money) -> bool:
        self._check_same_currency(other, "comparison")
        return self._minor_units < other._minor_units

    def __le__(self, other: Money) -> bool:
        self._check_same_currency(other, "comparison")
        return self._minor_units <= other._minor_units

    def __gt__(self, other: Money) -> bool:
        self._check_same_currency(other, "comparison")
        return self._minor_units > other._minor_units

    def __ge__(self, other: Money) -> bool:
        self._check_same_currency(other, "comparison")
        return self._minor_units >= other._minor_units

    def _check_same_currency(self, other: Money, context: str) -> None:
        if not isinstance(other, Money):
            raise TypeError(f"Cannot combine Money with {type(other).__name__}")
        if self._currency != other._currency:
            raise CurrencyMismatchError(
                self._currency.code, other._currency.code, context
            )

    def is_same_currency(self, other: Money) -> bool:
        return self._currency == other._currency

    # -------------------------------------------------------------------------
    # Properties and output
    # -------------------------------------------------------------------------

    @property
    def minor_units(self) -> int:
        return self._minor_units

    @property
    def currency(self) -> Currency:
        return self._currency

    def is_positive(self) -> bool:
        return self._minor_units > 0

    def is_negative(self) -> bool:
        return self._minor_units < 0

    def is_zero(self) -> bool:
        return self._minor_units == 0

    def __repr__(self) -> str:
        sign = "-" if self._minor_units < 0 else ""
        abs_minor = abs(self._minor_units)
        decimals = self._currency.decimals

        if decimals == 0:
            return f"{sign}{abs_minor} {self._currency.code}"

        major = abs_minor // self._currency.multiplier
        minor = abs_minor % self._currency.multiplier

        return f"{sign}{major}.{minor:0{decimals}d} {self._currency.code}"

    def __str__(self) -> str:
        return self.__repr__()

    def __hash__(self) -> int:
        return hash((self._minor_units, self._currency))
