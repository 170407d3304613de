"""
Test suite for money module

Tests Money rounding and arithmetic plus strict parsing of command amounts.
"""

import pytest
from decimal import Decimal

from portfolio_demos.money import (
    Money, parse_decimal, has_at_most_two_decimals, format_rate
)


class TestMoney:
    """Test Money class operations"""

    def test_money_rounds_to_cents(self):
        """Test amounts are quantized half-up to two decimals"""
        assert Money(Decimal('100.555')).amount == Decimal('100.56')
        assert Money(Decimal('100.554')).amount == Decimal('100.55')
        assert Money(Decimal('0.005')).amount == Decimal('0.01')

    def test_money_from_values(self):
        """Test construction from ints and strings"""
        assert Money.of(10).amount == Decimal('10.00')
        assert Money.of('2.5').amount == Decimal('2.50')
        assert Money.zero().is_zero()

    def test_money_arithmetic(self):
        """Test Money arithmetic operations"""
        a = Money(Decimal('100.50'))
        b = Money(Decimal('50.25'))

        assert (a + b).amount == Decimal('150.75')
        assert (a - b).amount == Decimal('50.25')
        assert (b - a).is_negative()
        assert (a * Decimal('0.005')).amount == Decimal('0.50')
        assert (a * 2).amount == Decimal('201.00')

    def test_money_comparison(self):
        """Test ordering and equality"""
        small = Money.of('1.00')
        large = Money.of('2.00')

        assert small < large
        assert large >= small
        assert min(small, large) == small
        assert Money.of('1') == Money.of('1.00')
        assert Money.of('1') != Decimal('1')

    def test_money_formatting(self):
        """Test two-decimal display"""
        assert Money.of('1500.5').to_string() == "1500.50"
        assert str(Money.zero()) == "0.00"


class TestParsing:
    """Test command amount parsing"""

    def test_parse_valid_numbers(self):
        """Test plain numbers parse"""
        assert parse_decimal("500") == Decimal('500')
        assert parse_decimal("2.75") == Decimal('2.75')
        assert parse_decimal("-5") == Decimal('-5')

    @pytest.mark.parametrize("text", ["abc", "", "1.2.3", "NaN", "Infinity", "-inf", "12a", "1_0", "1_000.50", "١٢", "0x10"])
    def test_parse_rejects_garbage(self, text):
        """Test non-numbers and non-finite values are rejected"""
        assert parse_decimal(text) is None

    def test_two_decimal_check(self):
        """Test precision beyond cents is detected"""
        assert has_at_most_two_decimals(Decimal('1.25'))
        assert has_at_most_two_decimals(Decimal('3'))
        assert not has_at_most_two_decimals(Decimal('1.255'))

    def test_format_rate(self):
        """Test APR display"""
        assert format_rate(Decimal('1')) == "1.00"
        assert format_rate(Decimal('2.5')) == "2.50"

    def test_parse_exponent(self):
        """Test scientific notation is still a plain number"""
        assert parse_decimal("1e3") == Decimal('1000')
        assert parse_decimal(".5") == Decimal('0.5')


class TestMoneyRange:
    """Test amounts that cannot be held in cents"""

    def test_too_large_amount_raises_value_error(self):
        """Test amounts beyond decimal precision fail as ValueError"""
        with pytest.raises(ValueError, match="Invalid amount"):
            Money(Decimal('1e30'))

    def test_non_numeric_raises_value_error(self):
        """Test non-numeric input fails as ValueError"""
        with pytest.raises(ValueError):
            Money.of("abc")
