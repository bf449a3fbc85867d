"""
Serialization Module

Adapters between Rational and its external forms:

- JSON text: the canonical string in quotes (marshal_json / unmarshal_json,
  RationalJSONEncoder, pydantic model fields)
- storage scalars: the unquoted canonical string (to_scalar / from_scalar,
  sqlite3 adapter and converter)
- binary: the exact numerator/denominator pair (encode_binary /
  decode_binary, also used by pickle)

Display precision is never persisted; decoded values take the configured
default.
"""

import json
import logging
import numbers
import sqlite3
import struct
from decimal import Decimal
from fractions import Fraction
from typing import Optional, Union

from pydantic_core import core_schema

from .config import RationalConfig
from .errors import DeserializationError, RationalError, UnsupportedTypeError
from .logging_config import log_operation
from .rational import Rational, parse, rat

logger = logging.getLogger(__name__)

BINARY_VERSION = 1
_LENGTH = struct.Struct(">I")

SQLITE_TYPE = "RATIONAL"


# JSON text

def marshal_json(value: Rational) -> str:
    """Canonical string wrapped in double quotes"""
    return json.dumps(str(value))


def unmarshal_json(data: Union[str, bytes], precision: Optional[int] = None,
                   config: Optional[RationalConfig] = None) -> Rational:
    """
    Read a Rational from a JSON token.

    Quoted strings and bare numbers are both read as text, so
    1386929.37231066771348207123 keeps every digit.

    Raises:
        DeserializationError: If the token is not a valid value
    """
    if not isinstance(data, (str, bytes, bytearray)):
        raise DeserializationError(f"cannot unmarshal JSON from {type(data).__name__}")
    try:
        if isinstance(data, (bytes, bytearray)):
            data = bytes(data).decode("utf-8")
        text = data.strip()
        if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
            text = text[1:-1]
        return parse(text, precision, config)
    except (RationalError, UnicodeDecodeError) as e:
        log_operation(logger, "warning", f"Failed to unmarshal JSON value: {e}",
                      operation="unmarshal_json", operand=data)
        raise DeserializationError(f"cannot unmarshal {data!r}: {e}") from e


class RationalJSONEncoder(json.JSONEncoder):
    """json encoder that writes Rational values as canonical strings"""

    def default(self, o):
        if isinstance(o, Rational):
            return str(o)
        return super().default(o)


def _validate_field(value) -> Rational:
    try:
        return rat(value)
    except RationalError as e:
        # pydantic reports ValueError as a ValidationError
        raise ValueError(str(e)) from e


def _serialize_field(value: Rational, info) -> Union[str, Fraction]:
    if info.mode_is_json():
        return to_scalar(value)
    # Python mode: the exact Fraction, which validates back unchanged
    return value.to_fraction()


def rational_core_schema() -> core_schema.CoreSchema:
    """
    pydantic-core schema: accept any supported kind, serialize as the
    canonical string in JSON mode and as the exact Fraction in python mode.
    """
    return core_schema.no_info_plain_validator_function(
        _validate_field,
        serialization=core_schema.plain_serializer_function_ser_schema(
            _serialize_field, info_arg=True, when_used="always"
        ),
    )


# Storage scalars

def to_scalar(value: Rational) -> str:
    """Unquoted canonical string for a storage column"""
    return str(value)


def from_scalar(src, precision: Optional[int] = None,
                config: Optional[RationalConfig] = None) -> Rational:
    """
    Read a Rational from a value returned by a storage driver.

    Args:
        src: str, bytes-like text, any integer or real number, or Decimal

    Raises:
        UnsupportedTypeError: If src is another kind
        DeserializationError: If text or bytes do not hold a valid value
    """
    if isinstance(src, (bytes, bytearray, memoryview)):
        try:
            src = bytes(src).decode("utf-8")
        except UnicodeDecodeError as e:
            raise DeserializationError(f"cannot scan non UTF-8 bytes: {e}") from e

    if isinstance(src, str):
        try:
            return parse(src, precision, config)
        except RationalError as e:
            log_operation(logger, "warning", f"Failed to scan stored value: {e}",
                          operation="from_scalar", operand=src)
            raise DeserializationError(f"cannot scan {src!r}: {e}") from e

    # Same numeric kinds coercion accepts, including numpy scalars
    if isinstance(src, (numbers.Integral, numbers.Real, Decimal)) and not isinstance(src, bool):
        return Rational(src, precision, config)

    log_operation(logger, "warning", "Unsupported scan input",
                  operation="from_scalar", operand=type(src).__name__)
    raise UnsupportedTypeError(src, f"cannot scan value of type {type(src).__name__}")


def register_sqlite() -> None:
    """
    Let sqlite3 store Rational values and read back RATIONAL columns.

    Connections must be opened with detect_types=sqlite3.PARSE_DECLTYPES.
    Declare columns as "RATIONAL TEXT": a bare RATIONAL column gets NUMERIC
    affinity and sqlite would store long decimals as REAL.
    """
    sqlite3.register_adapter(Rational, to_scalar)
    sqlite3.register_converter(SQLITE_TYPE, from_scalar)


# Binary

def encode_binary(value: Rational) -> bytes:
    """
    Exact binary form: header byte (version << 1 | sign), 4-byte big-endian
    numerator length, numerator magnitude, denominator, all big-endian.
    """
    numerator = value.numerator
    header = (BINARY_VERSION << 1) | (1 if numerator < 0 else 0)
    magnitude = abs(numerator)
    num_bytes = magnitude.to_bytes((magnitude.bit_length() + 7) // 8, "big")
    denominator = value.denominator
    den_bytes = denominator.to_bytes((denominator.bit_length() + 7) // 8, "big")
    return bytes([header]) + _LENGTH.pack(len(num_bytes)) + num_bytes + den_bytes


def decode_binary(data: bytes, config: Optional[RationalConfig] = None) -> Rational:
    """
    Inverse of encode_binary. The precision is the configured default.

    Raises:
        DeserializationError: If data is truncated, of another version or
            has a zero denominator
    """
    data = bytes(data)
    if len(data) < 1 + _LENGTH.size:
        raise DeserializationError(f"binary rational too short: {len(data)} bytes")

    header = data[0]
    if header >> 1 != BINARY_VERSION:
        raise DeserializationError(f"unsupported binary rational version {header >> 1}")

    (length,) = _LENGTH.unpack_from(data, 1)
    start = 1 + _LENGTH.size
    if len(data) < start + length:
        raise DeserializationError("binary rational truncated in numerator")

    numerator = int.from_bytes(data[start:start + length], "big")
    if header & 1:
        numerator = -numerator
    den_bytes = data[start + length:]
    # An empty denominator means an integer
    denominator = int.from_bytes(den_bytes, "big") if den_bytes else 1
    if denominator == 0:
        raise DeserializationError("binary rational has a zero denominator")

    return Rational(Fraction(numerator, denominator), config=config)
