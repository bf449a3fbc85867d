"""
Error Types Module

Every failure raised by the package derives from RationalError and from the
builtin exception it refines, so callers can catch either.
"""


class RationalError(Exception):
    """Base class for all exact_rational errors"""


class ParseError(RationalError, ValueError):
    """Text could not be read as a numeral, fraction or percentage"""


class UnsupportedTypeError(RationalError, TypeError):
    """Value is not one of the supported numeric kinds"""

    def __init__(self, value, message: str = None):
        self.value_type = type(value).__name__
        super().__init__(message or f"unsupported value type: {self.value_type}")


class DivisionByZeroError(RationalError, ZeroDivisionError):
    """Division (or negative power) with a zero divisor"""


class RationalOverflowError(RationalError, OverflowError):
    """Exact value does not fit the requested fixed-width integer"""


class DeserializationError(RationalError, ValueError):
    """Marshalled or stored data could not be turned back into a value"""
