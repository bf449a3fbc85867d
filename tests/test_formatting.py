"""
Test suite for formatting module

Tests canonical strings, forced decimal strings and exactness detection.
"""

import pytest
from decimal import Decimal
from fractions import Fraction

from exact_rational.formatting import exact_decimal_digits, format_canonical, format_decimal
from exact_rational.rational import parse, rat


class TestExactDigits:
    """Test terminating decimal detection"""

    @pytest.mark.parametrize("value,expected", [
        (Fraction(5), 0),
        (Fraction(1, 2), 1),
        (Fraction(1, 4), 2),
        (Fraction(1, 8), 3),
        (Fraction(1, 5), 1),
        (Fraction(3, 40), 3),
        (Fraction(1751, 250), 3),
        (Fraction(1, 3), None),
        (Fraction(1, 6), None),
        (Fraction(1, 7), None),
        (Fraction(3602879701896397, 36028797018963968), 55),
    ])
    def test_exact_decimal_digits(self, value, expected):
        """Test the count of decimal places for terminating values"""
        assert exact_decimal_digits(value) == expected

    def test_rational_accessor(self):
        """Test exact_digits on Rational"""
        assert parse("7.004").exact_digits() == 3
        assert parse("10/3").exact_digits() is None


class TestCanonical:
    """Test canonical string output"""

    @pytest.mark.parametrize("text,precision,expected", [
        ("1347", 8, "1347"),
        ("-42", 0, "-42"),
        ("10.5", 8, "10.5"),
        ("-123.456", 8, "-123.456"),
        ("1/2", 8, "0.5"),
        ("0.5/1", 8, "0.5"),
        ("1/0.5", 8, "2"),
        ("25%", 8, "0.25"),
        ("1/3", 8, "1/3"),
        ("-1/3", 8, "-1/3"),
        ("10/3", 3, "10/3"),
        ("123456789.987654321", 8, "123456789.98765432"),
        ("1386929.37231066771348207123", 20, "1386929.37231066771348207123"),
        ("1/8", 2, "0.12"),
        ("2.5", 0, "2"),
        ("-0.001", 2, "0.00"),
    ])
    def test_str(self, text, precision, expected):
        """Test canonical strings"""
        assert str(parse(text, precision=precision)) == expected

    @pytest.mark.parametrize("text", [
        "0", "1", "-1", "0.5", "-7.004", "3.14159", "100.25", "0.00001", "123456789.12345678",
    ])
    def test_round_trip(self, text):
        """Test exactly representable decimals read back as written"""
        assert str(parse(text, precision=8)) == text
        assert parse(str(parse(text))) == parse(text)

    def test_float_input_shows_binary_value(self):
        """Test a float is shown at the display precision, not as its literal"""
        assert str(rat(0.1, precision=8)) == "0.10000000"
        assert str(rat(0.5, precision=8)) == "0.5"

    def test_precision_change_keeps_value(self):
        """Test changing precision only changes display"""
        value = parse("123456789.987654321", precision=8)
        wider = value.with_precision(20)
        assert str(wider) == "123456789.987654321"
        assert wider == value
        assert str(value) == "123456789.98765432"

    def test_format_canonical_function(self):
        """Test format_canonical on plain Fractions"""
        assert format_canonical(Fraction(10, 3), 8) == "10/3"
        assert format_canonical(Fraction(-5), 8) == "-5"
        assert format_canonical(Fraction(1, 4), 1) == "0.2"


class TestDecimalString:
    """Test forced decimal output"""

    @pytest.mark.parametrize("text,precision,expected", [
        ("1/2", 8, "0.50000000"),
        ("1/3", 8, "0.33333333"),
        ("1/3", 3, "0.333"),
        ("2/3", 2, "0.66"),
        ("5", 8, "5.00000000"),
        ("5", 0, "5"),
        ("3.14", 2, "3.14"),
        ("10/3", 8, "3.33333333"),
        ("10/3", 2, "3.33"),
        ("-1/3", 4, "-0.3333"),
        ("-10/3", 0, "-3"),
        ("-0.001", 2, "0.00"),
        ("0.001", 3, "0.001"),
    ])
    def test_decimal_string(self, text, precision, expected):
        """Test forced decimal strings"""
        assert parse(text).decimal_string(precision) == expected

    def test_uses_instance_precision(self):
        """Test decimal_string defaults to the value's precision"""
        value = parse("10").quo(3).with_precision(8)
        assert str(value) == "10/3"
        assert value.decimal_string() == "3.33333333"

    def test_canonical_unaffected(self):
        """Test decimal_string leaves canonical output alone"""
        value = parse("10/3", precision=3)
        assert value.decimal_string() == "3.333"
        assert str(value) == "10/3"

    def test_to_decimal(self):
        """Test conversion to Decimal"""
        assert parse("1/3").to_decimal(4) == Decimal("0.3333")
        assert parse("2.5").to_decimal(1) == Decimal("2.5")

    def test_negative_precision(self):
        """Test negative precision is rejected"""
        with pytest.raises(ValueError):
            format_decimal(Fraction(1, 3), -1)
