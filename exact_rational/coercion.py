"""
Coercion Module

Converts every supported numeric kind to an exact Fraction. The set of kinds
is closed; anything outside it raises UnsupportedTypeError.

Floats are converted from their exact binary value, so ``0.1`` becomes
3602879701896397/36028797018963968 rather than 1/10. Pass text when the
decimal literal is what you mean.
"""

import logging
import math
import numbers
from decimal import Decimal
from fractions import Fraction
from typing import Union

from .errors import ParseError, UnsupportedTypeError
from .logging_config import log_operation
from .parser import parse_fraction

logger = logging.getLogger(__name__)

# Anything registered as numbers.Rational (including Rational itself) is accepted too
RationalLike = Union[int, float, str, Decimal, Fraction, numbers.Rational]


def to_fraction(value: RationalLike) -> Fraction:
    """
    Convert a supported value to an exact Fraction.

    Args:
        value: int (any width), float, Decimal, Fraction, Rational or text

    Returns:
        Fraction equal to the value

    Raises:
        UnsupportedTypeError: If the kind of value is not supported
        ParseError: If text is malformed or a float/Decimal is not finite
        DivisionByZeroError: If text is a fraction with a zero denominator
    """
    if isinstance(value, Fraction):
        return value
    if isinstance(value, bool):
        raise UnsupportedTypeError(value, "bool is not a numeric amount")
    if isinstance(value, numbers.Integral):
        return Fraction(int(value))
    if isinstance(value, numbers.Rational):
        return Fraction(int(value.numerator), int(value.denominator))
    if isinstance(value, str):
        return parse_fraction(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ParseError(f"{value} has no exact rational value")
        return Fraction(value)
    if isinstance(value, float) or (isinstance(value, numbers.Real) and hasattr(value, "as_integer_ratio")):
        if not math.isfinite(value):
            raise ParseError(f"{value} has no exact rational value")
        return Fraction(*value.as_integer_ratio())

    log_operation(logger, "debug", "Rejected operand", operation="coerce", operand=type(value).__name__)
    raise UnsupportedTypeError(value)
