"""
Accumulator Module

RationalAccumulator is the one mutable type in the package. It keeps a
running Fraction total so long summations avoid building an intermediate
Rational per step. It is not synchronized; share it between threads only
behind your own lock.
"""

from fractions import Fraction
from typing import Iterable, Optional

from .coercion import RationalLike, to_fraction
from .config import RationalConfig, resolve_precision
from .rational import Rational


class RationalAccumulator:
    """Running exact total, mutated in place"""

    def __init__(self, start: RationalLike = 0, precision: Optional[int] = None,
                 config: Optional[RationalConfig] = None):
        self._total = to_fraction(start)
        self._precision = resolve_precision(precision, config)

    def add(self, *operands: RationalLike) -> 'RationalAccumulator':
        """Add operands to the total in place"""
        for operand in operands:
            self._total += to_fraction(operand)
        return self

    def sub(self, *operands: RationalLike) -> 'RationalAccumulator':
        """Subtract operands from the total in place"""
        for operand in operands:
            self._total -= to_fraction(operand)
        return self

    def set(self, value: RationalLike) -> 'RationalAccumulator':
        """Overwrite the total in place"""
        self._total = to_fraction(value)
        return self

    def reset(self) -> 'RationalAccumulator':
        self._total = Fraction(0)
        return self

    def __iadd__(self, other):
        return self.add(other)

    def __isub__(self, other):
        return self.sub(other)

    @property
    def value(self) -> Rational:
        """Immutable snapshot of the current total"""
        return Rational(self._total, self._precision)

    def __repr__(self):
        return f"RationalAccumulator({self._total!s})"


def rational_sum(values: Iterable[RationalLike], start: RationalLike = 0,
                 precision: Optional[int] = None,
                 config: Optional[RationalConfig] = None) -> Rational:
    """Exact sum of an iterable of supported values"""
    accumulator = RationalAccumulator(start, precision, config)
    for value in values:
        accumulator.add(value)
    return accumulator.value
