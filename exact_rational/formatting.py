"""
Formatting Module

Renders fractions as canonical strings. A reduced fraction has a terminating
decimal expansion iff its denominator has no prime factors other than 2 and 5;
those are written as decimals, all others as "numerator/denominator" so that
no digits are silently dropped.
"""

from fractions import Fraction
from typing import Optional


def exact_decimal_digits(value: Fraction) -> Optional[int]:
    """
    Minimal number of decimal places needed to write value exactly.

    Returns:
        Digit count, or None for a repeating decimal
    """
    denominator = value.denominator
    twos = 0
    while denominator % 2 == 0:
        denominator //= 2
        twos += 1
    fives = 0
    while denominator % 5 == 0:
        denominator //= 5
        fives += 1
    if denominator != 1:
        return None
    # 1 / (2**a * 5**b) needs max(a, b) places
    return max(twos, fives)


def format_decimal(value: Fraction, precision: int) -> str:
    """
    Write value as a decimal with exactly `precision` places, truncated
    toward zero. Digits beyond `precision` are discarded.
    """
    if precision < 0:
        raise ValueError(f"Precision must be non-negative, got {precision}")

    scaled = abs(value.numerator) * 10 ** precision // value.denominator
    digits = str(scaled)
    if precision:
        digits = digits.rjust(precision + 1, "0")
        text = f"{digits[:-precision]}.{digits[-precision:]}"
    else:
        text = digits

    if value < 0 and scaled != 0:
        return "-" + text
    return text


def format_canonical(value: Fraction, precision: int) -> str:
    """
    Canonical string for value at a display precision.

    Integers are written bare, terminating decimals with
    min(precision, exact digits) places, repeating decimals as a fraction.
    """
    if value.denominator == 1:
        return str(value.numerator)

    digits = exact_decimal_digits(value)
    if digits is None:
        return f"{value.numerator}/{value.denominator}"
    return format_decimal(value, min(precision, digits))
