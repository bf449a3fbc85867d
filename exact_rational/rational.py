"""
Rational Value Module

Immutable exact-fraction value type for money and other decimal quantities
that must never pass through binary floating point.

Every operation returns a new Rational carrying the receiver's display
precision. Precision only affects str(); equality, ordering and hashing look
at the fraction alone.
"""

import math
import numbers
from dataclasses import dataclass, InitVar, replace
from decimal import Decimal
from fractions import Fraction
from typing import Optional

from .coercion import RationalLike, to_fraction
from .config import RationalConfig, resolve_precision
from .errors import (
    DivisionByZeroError, ParseError, RationalOverflowError, UnsupportedTypeError
)
from .formatting import exact_decimal_digits, format_canonical, format_decimal
from .parser import parse_fraction

HALF = Fraction(1, 2)
ONE = Fraction(1)


@dataclass(frozen=True, eq=False)
class Rational:
    """
    Exact rational number with a display precision.

    `value` may be given as any supported kind (int, float, Decimal,
    Fraction, Rational or text); it is stored as a reduced Fraction.
    When `precision` is omitted it is read from `config`, or from the
    global configuration when no config is passed. A Rational given as
    `value` with neither keeps its own precision.
    """
    value: Fraction = Fraction(0)
    precision: Optional[int] = None
    config: InitVar[Optional[RationalConfig]] = None

    def __post_init__(self, config):
        if isinstance(self.value, Rational) and self.precision is None and config is None:
            object.__setattr__(self, 'precision', self.value.precision)
        if not isinstance(self.value, Fraction):
            object.__setattr__(self, 'value', to_fraction(self.value))
        object.__setattr__(self, 'precision', resolve_precision(self.precision, config))

    # Construction

    @classmethod
    def from_pair(cls, numerator: int, denominator: int = 1,
                  precision: Optional[int] = None,
                  config: Optional[RationalConfig] = None) -> 'Rational':
        """
        Build a value from an integer numerator/denominator pair.

        Raises:
            UnsupportedTypeError: If either part is not an integer
            DivisionByZeroError: If denominator is zero
        """
        for part in (numerator, denominator):
            if isinstance(part, bool) or not isinstance(part, numbers.Integral):
                raise UnsupportedTypeError(part, f"fraction parts must be integers, got {type(part).__name__}")
        if denominator == 0:
            raise DivisionByZeroError(f"zero denominator in {numerator}/{denominator}")
        return cls(Fraction(int(numerator), int(denominator)), precision, config)

    @classmethod
    def zero(cls, precision: Optional[int] = None,
             config: Optional[RationalConfig] = None) -> 'Rational':
        """The additive identity"""
        return cls(Fraction(0), precision, config)

    def clone(self) -> 'Rational':
        """Distinct copy with the same fraction and precision"""
        return Rational(self.value, self.precision)

    def with_precision(self, precision: int) -> 'Rational':
        """Copy with another display precision; the fraction is unchanged"""
        return replace(self, precision=precision)

    def _derive(self, value: Fraction) -> 'Rational':
        return Rational(value, self.precision)

    # Fraction parts

    @property
    def numerator(self) -> int:
        return self.value.numerator

    @property
    def denominator(self) -> int:
        return self.value.denominator

    def to_fraction(self) -> Fraction:
        return self.value

    # Arithmetic

    def add(self, *operands: RationalLike) -> 'Rational':
        """Sum of the receiver and every operand, applied left to right"""
        total = self.value
        for operand in operands:
            total += to_fraction(operand)
        return self._derive(total)

    def sub(self, *operands: RationalLike) -> 'Rational':
        """Receiver minus every operand, applied left to right"""
        total = self.value
        for operand in operands:
            total -= to_fraction(operand)
        return self._derive(total)

    def mul(self, operand: RationalLike) -> 'Rational':
        return self._derive(self.value * to_fraction(operand))

    def quo(self, operand: RationalLike) -> 'Rational':
        """
        Exact quotient.

        Raises:
            DivisionByZeroError: If operand is zero
        """
        divisor = to_fraction(operand)
        if divisor == 0:
            raise DivisionByZeroError(f"cannot divide {self} by zero")
        return self._derive(self.value / divisor)

    def neg(self) -> 'Rational':
        return self._derive(-self.value)

    def abs(self) -> 'Rational':
        return self._derive(abs(self.value))

    def pow_int(self, exp: int) -> 'Rational':
        """
        Integer power by repeated squaring.

        Any base to the power 0 is 1, including zero. Negative exponents
        give the reciprocal of the positive power.

        Raises:
            UnsupportedTypeError: If exp is not an integer
            DivisionByZeroError: If exp is negative and the base is zero
        """
        if isinstance(exp, bool) or not isinstance(exp, numbers.Integral):
            raise UnsupportedTypeError(exp, f"exponent must be an integer, got {type(exp).__name__}")
        exp = int(exp)

        if exp == 0:
            return self._derive(ONE)
        if exp < 0:
            if self.value == 0:
                raise DivisionByZeroError("zero cannot be raised to a negative power")
            return self._derive(ONE / self._pow_positive(-exp))
        return self._derive(self._pow_positive(exp))

    def _pow_positive(self, exp: int) -> Fraction:
        result = ONE
        base = self.value
        while exp > 0:
            if exp & 1:
                result *= base
            base *= base
            exp >>= 1
        return result

    # Comparison

    def cmp(self, other: RationalLike) -> int:
        """-1, 0 or 1 as the receiver is less than, equal to or greater than other"""
        theirs = to_fraction(other)
        # Denominators are positive, so cross-multiplying keeps the order
        left = self.value.numerator * theirs.denominator
        right = theirs.numerator * self.value.denominator
        return (left > right) - (left < right)

    def equal(self, other: RationalLike) -> bool:
        return self.cmp(other) == 0

    def less(self, other: RationalLike) -> bool:
        return self.cmp(other) < 0

    def greater(self, other: RationalLike) -> bool:
        return self.cmp(other) > 0

    def less_or_equal(self, other: RationalLike) -> bool:
        return self.cmp(other) <= 0

    def greater_or_equal(self, other: RationalLike) -> bool:
        return self.cmp(other) >= 0

    def is_zero(self) -> bool:
        return self.value == 0

    def is_positive(self) -> bool:
        return self.value > 0

    def is_negative(self) -> bool:
        return self.value < 0

    def is_integer(self) -> bool:
        return self.value.denominator == 1

    def sign(self) -> int:
        return (self.value > 0) - (self.value < 0)

    # Rounding

    def floor_int(self) -> int:
        """Largest integer not greater than the value"""
        # Integer floor division rounds toward negative infinity exactly
        return self.value.numerator // self.value.denominator

    def floor(self) -> 'Rational':
        return self._derive(Fraction(self.floor_int()))

    def ceil(self) -> 'Rational':
        if self.is_integer():
            return self.clone()
        return self._derive(Fraction(self.floor_int() + 1))

    def round(self) -> 'Rational':
        """Nearest integer, halves rounded up (toward positive infinity)"""
        return self._derive(Fraction(math.floor(self.value + HALF)))

    def round_to(self, places: int) -> 'Rational':
        """Round half-up to a number of decimal places"""
        if isinstance(places, bool) or not isinstance(places, int) or places < 0:
            raise ValueError(f"places must be a non-negative integer, got {places!r}")
        scale = 10 ** places
        return self._derive(Fraction(math.floor(self.value * scale + HALF), scale))

    def int_string(self) -> str:
        return str(self.floor_int())

    def to_int(self, bits: int = 64, signed: bool = True) -> int:
        """
        Floor of the value checked against a fixed-width integer range.

        Raises:
            ValueError: If bits is not a positive integer
            RationalOverflowError: If the floor does not fit in `bits` bits
        """
        if isinstance(bits, bool) or not isinstance(bits, int) or bits < 1:
            raise ValueError(f"bits must be a positive integer, got {bits!r}")
        result = self.floor_int()
        if signed:
            low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        else:
            low, high = 0, (1 << bits) - 1
        if not low <= result <= high:
            kind = "int" if signed else "uint"
            raise RationalOverflowError(f"{self} does not fit in {kind}{bits}")
        return result

    def to_float(self) -> float:
        """Nearest double; precision may be lost"""
        return float(self.value)

    # Formatting

    def exact_digits(self) -> Optional[int]:
        """Decimal places needed to write the value exactly, None if it repeats"""
        return exact_decimal_digits(self.value)

    def decimal_string(self, precision: Optional[int] = None) -> str:
        """
        Decimal form truncated to exactly `precision` places (the instance
        precision by default), even when the value repeats.
        """
        if precision is None:
            precision = self.precision
        return format_decimal(self.value, precision)

    def to_decimal(self, precision: Optional[int] = None) -> Decimal:
        return Decimal(self.decimal_string(precision))

    def __str__(self) -> str:
        return format_canonical(self.value, self.precision)

    # Python numeric protocol

    def _numeric_operand(self, other) -> Optional[Fraction]:
        # Operators only take numbers; text goes through the named methods
        if isinstance(other, str):
            return None
        try:
            return to_fraction(other)
        except (UnsupportedTypeError, ParseError):
            return None

    def __add__(self, other):
        theirs = self._numeric_operand(other)
        if theirs is None:
            return NotImplemented
        return self._derive(self.value + theirs)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        theirs = self._numeric_operand(other)
        if theirs is None:
            return NotImplemented
        return self._derive(self.value - theirs)

    def __rsub__(self, other):
        theirs = self._numeric_operand(other)
        if theirs is None:
            return NotImplemented
        return self._derive(theirs - self.value)

    def __mul__(self, other):
        theirs = self._numeric_operand(other)
        if theirs is None:
            return NotImplemented
        return self._derive(self.value * theirs)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        theirs = self._numeric_operand(other)
        if theirs is None:
            return NotImplemented
        return self.quo(theirs)

    def __rtruediv__(self, other):
        theirs = self._numeric_operand(other)
        if theirs is None:
            return NotImplemented
        if self.value == 0:
            raise DivisionByZeroError(f"cannot divide {other} by zero")
        return self._derive(theirs / self.value)

    def __pow__(self, exp, modulo=None):
        if modulo is not None or isinstance(exp, bool) or not isinstance(exp, numbers.Integral):
            return NotImplemented
        return self.pow_int(exp)

    def __neg__(self):
        return self.neg()

    def __pos__(self):
        return self

    def __abs__(self):
        return self.abs()

    def __eq__(self, other):
        theirs = self._numeric_operand(other)
        if theirs is None:
            return NotImplemented
        return self.value == theirs

    def __lt__(self, other):
        theirs = self._numeric_operand(other)
        if theirs is None:
            return NotImplemented
        return self.value < theirs

    def __le__(self, other):
        theirs = self._numeric_operand(other)
        if theirs is None:
            return NotImplemented
        return self.value <= theirs

    def __gt__(self, other):
        theirs = self._numeric_operand(other)
        if theirs is None:
            return NotImplemented
        return self.value > theirs

    def __ge__(self, other):
        theirs = self._numeric_operand(other)
        if theirs is None:
            return NotImplemented
        return self.value >= theirs

    def __hash__(self):
        return hash(self.value)

    def __bool__(self):
        return self.value != 0

    def __float__(self):
        return self.to_float()

    def __int__(self):
        return int(self.value)

    def __trunc__(self):
        return int(self.value)

    def __floor__(self):
        return self.floor_int()

    def __ceil__(self):
        return self.ceil().numerator

    def __round__(self, ndigits=None):
        if ndigits is None:
            return self.round().numerator
        return self.round_to(ndigits)

    # Serialization hooks

    def __reduce__(self):
        from .serialization import decode_binary, encode_binary
        return (decode_binary, (encode_binary(self),))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler):
        from .serialization import rational_core_schema
        return rational_core_schema()


numbers.Rational.register(Rational)


def rat(value: RationalLike, precision: Optional[int] = None,
        config: Optional[RationalConfig] = None) -> Rational:
    """
    Coerce any supported value to a Rational.

    An existing Rational is returned as is; other kinds are converted exactly
    (floats from their binary value) and get the requested or default precision.
    """
    if isinstance(value, Rational):
        return value
    return Rational(to_fraction(value), precision, config)


coerce = rat


def parse(text: str, precision: Optional[int] = None,
          config: Optional[RationalConfig] = None) -> Rational:
    """
    Parse numeral, fraction or percentage text into a Rational.

    Raises:
        ParseError: If the text is malformed
        DivisionByZeroError: If a fraction has a zero denominator
    """
    return Rational(parse_fraction(text), precision, config)


def rat_zero(precision: Optional[int] = None,
             config: Optional[RationalConfig] = None) -> Rational:
    return Rational.zero(precision, config)


def rat_min(first: RationalLike, *others: RationalLike) -> Rational:
    """Smallest of the values; the earliest wins on ties"""
    best = rat(first)
    for other in others:
        candidate = rat(other)
        if best.greater(candidate):
            best = candidate
    return best


def rat_max(first: RationalLike, *others: RationalLike) -> Rational:
    """Largest of the values; the earliest wins on ties"""
    best = rat(first)
    for other in others:
        candidate = rat(other)
        if best.less(candidate):
            best = candidate
    return best


def rat_add(a: RationalLike, b: RationalLike) -> Rational:
    return rat(a).add(b)


def rat_mul(a: RationalLike, b: RationalLike) -> Rational:
    return rat(a).mul(b)


def rat_quo(a: RationalLike, b: RationalLike) -> Rational:
    return rat(a).quo(b)


def rat_neg(a: RationalLike) -> Rational:
    return rat(a).neg()


def rat_clone(a: Rational) -> Rational:
    return a.clone()
