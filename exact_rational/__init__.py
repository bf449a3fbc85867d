"""
Exact Rational

Arbitrary-precision rational numbers for financial and exact-decimal
arithmetic: parsing of numerals, fractions and percentages, exact arithmetic,
negative-safe rounding and canonical decimal/fraction formatting.
"""

from .accumulator import RationalAccumulator, rational_sum
from .config import RationalConfig, configure, get_config, reload_config
from .errors import (
    DeserializationError, DivisionByZeroError, ParseError, RationalError,
    RationalOverflowError, UnsupportedTypeError
)
from .rational import (
    Rational, coerce, parse, rat, rat_add, rat_clone, rat_max, rat_min,
    rat_mul, rat_neg, rat_quo, rat_zero
)
from .serialization import (
    RationalJSONEncoder, decode_binary, encode_binary, from_scalar,
    marshal_json, register_sqlite, to_scalar, unmarshal_json
)

__version__ = "1.0.0"
