"""
Parser Module

Reads numeral, fraction and percentage text into an exact Fraction.

Precedence: a trailing ``%`` is stripped first and the rest divided by 100,
then a single ``/`` splits the text into two sides, and anything else must be
a plain decimal numeral.
"""

import logging
import re
from fractions import Fraction

from .errors import ParseError, DivisionByZeroError, UnsupportedTypeError
from .logging_config import log_operation

logger = logging.getLogger(__name__)

# [sign] digits [. digits] | [sign] . digits, then an optional exponent
_NUMERAL = re.compile(
    r"(?P<sign>[+-]?)"
    r"(?:(?P<int>[0-9]+)(?:\.(?P<frac>[0-9]*))?|\.(?P<lead_frac>[0-9]+))"
    r"(?:[eE](?P<exp>[+-]?[0-9]+))?"
)

# Guards against "1e999999999" allocating a huge power of ten
MAX_EXPONENT = 10000

HUNDRED = Fraction(100)


def parse_fraction(text: str) -> Fraction:
    """
    Parse text into an exact fraction.

    Args:
        text: A decimal numeral ("-7.004"), a fraction ("1/3", "0.5/1")
            or a percentage ("3%", "1/8%")

    Returns:
        Fraction in lowest terms

    Raises:
        ParseError: If the text is malformed
        DivisionByZeroError: If a fraction has a zero denominator
        UnsupportedTypeError: If text is not a string
    """
    if not isinstance(text, str):
        raise UnsupportedTypeError(text, f"parser expects str, got {type(text).__name__}")

    if text.endswith("%"):
        base = text[:-1]
        if not base:
            log_operation(logger, "debug", "Percentage without a base", operation="parse", operand=text)
            raise ParseError(f"unsupported percentage base in {text!r}")
        return parse_fraction(base) / HUNDRED

    if "/" in text:
        parts = text.split("/")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            log_operation(logger, "debug", "Malformed fraction", operation="parse", operand=text)
            raise ParseError(f"invalid fraction {text!r}: expected exactly one '/' between two values")
        numerator = parse_fraction(parts[0])
        denominator = parse_fraction(parts[1])
        if denominator == 0:
            raise DivisionByZeroError(f"zero denominator in {text!r}")
        return numerator / denominator

    return _parse_numeral(text)


def _parse_numeral(text: str) -> Fraction:
    match = _NUMERAL.fullmatch(text)
    if match is None:
        log_operation(logger, "debug", "Malformed numeral", operation="parse", operand=text)
        raise ParseError(f"invalid numeral {text!r}")

    whole = match.group("int") or ""
    frac = match.group("frac") or match.group("lead_frac") or ""
    exponent = int(match.group("exp") or 0)
    if abs(exponent) > MAX_EXPONENT:
        raise ParseError(f"exponent out of range in {text!r}")

    # 7.004 -> 7004 / 10**3
    value = Fraction(int(whole + frac or "0"), 10 ** len(frac))
    if exponent > 0:
        value *= 10 ** exponent
    elif exponent < 0:
        value /= 10 ** -exponent

    if match.group("sign") == "-":
        value = -value
    return value
