"""
Tests for Brazilian Real formatting, parsing and input masking
"""
import logging
from decimal import Decimal

import pytest
from sparkboard.utils.currency import apply_mask, format_currency, parse_currency


class TestFormatCurrency:
    """Test suite for format_currency"""

    @pytest.mark.parametrize('value, expected', [
        (0, 'R$ 0,00'),
        (5, 'R$ 5,00'),
        (1234.56, 'R$ 1.234,56'),
        (1234567.891, 'R$ 1.234.567,89'),
        (Decimal('999.999'), 'R$ 1.000,00'),
        (-1500, 'R$ -1.500,00'),
    ])
    def test_numbers(self, value, expected):
        """Test pt-BR grouping and two fraction digits"""
        assert format_currency(value) == expected

    def test_rounds_half_away_from_zero(self):
        """Test that halves round up in magnitude"""
        assert format_currency(2.005) == 'R$ 2,01'
        assert format_currency(-2.005) == 'R$ -2,01'

    def test_text_input(self):
        """Test formatting already formatted text"""
        assert format_currency('R$ 1.234,56') == 'R$ 1.234,56'
        assert format_currency('42') == 'R$ 42,00'

    def test_without_symbol(self):
        """Test show_symbol=False"""
        assert format_currency(10, show_symbol=False) == '10,00'
        assert format_currency(float('nan'), show_symbol=False) == '0,00'

    def test_fraction_digit_range(self):
        """Test trailing zeros dropped down to the minimum"""
        assert format_currency(10, min_fraction_digits=0) == 'R$ 10'
        assert format_currency(10.5, min_fraction_digits=0) == 'R$ 10,5'
        assert format_currency(1.23456, max_fraction_digits=4) == 'R$ 1,2346'

    def test_fraction_digit_options_are_clamped(self):
        """Test out-of-range and non-numeric options"""
        assert format_currency(1, min_fraction_digits=-3, max_fraction_digits=-1) == 'R$ 1'
        assert format_currency(1, min_fraction_digits='x', max_fraction_digits=None) == 'R$ 1,00'
        assert format_currency(1, min_fraction_digits=25, max_fraction_digits=25) == 'R$ 1,' + '0' * 20

    def test_large_values_keep_full_precision(self):
        """Test values whose digits exceed the default decimal precision"""
        assert format_currency(1e30) == 'R$ 1' + '.000' * 10 + ',00'
        assert format_currency(1234567890.5, max_fraction_digits=20) == 'R$ 1.234.567.890,50'
        assert format_currency(Decimal('12345678901234567890.123'), max_fraction_digits=20) == \
            'R$ 12.345.678.901.234.567.890,123'

    @pytest.mark.parametrize('value', [
        float('nan'), float('inf'), float('-inf'), Decimal('NaN'), 'abc', '', None, True, [1], {'a': 1},
    ])
    def test_unformattable_values_degrade_to_zero(self, value):
        """Test that nothing raises"""
        assert format_currency(value) == 'R$ 0,00'

    def test_min_greater_than_max_degrades_and_logs(self, caplog):
        """Test that a bad option pair logs a warning"""
        with caplog.at_level(logging.WARNING, logger='sparkboard.utils.currency'):
            assert format_currency(10, min_fraction_digits=4, max_fraction_digits=1) == 'R$ 0,00'

        assert 'Error formatting currency' in caplog.text


class TestParseCurrency:
    """Test suite for parse_currency"""

    @pytest.mark.parametrize('text, expected', [
        ('R$ 1.234,56', 1234.56),
        ('R$ 0,01', 0.01),
        ('1.000', 1000.0),
        ('-50,5', -50.5),
        ('', 0.0),
        (None, 0.0),
        ('R$', 0.0),
        ('abc', 0.0),
        ('1,2,3', 1.2),
    ])
    def test_parse(self, text, expected):
        """Test reading numbers back out of formatted text"""
        assert parse_currency(text) == pytest.approx(expected)

    @pytest.mark.parametrize('value', [
        0, 0.01, 1234.56, 1234567.89, -0.01, -1234.56, -9876543210.12, 1e15, 1e30, -1e30,
    ])
    def test_parse_reads_back_formatted_value(self, value):
        """Test that formatted values parse back to the same amount"""
        assert parse_currency(format_currency(value)) == pytest.approx(value)


class TestApplyMask:
    """Test suite for keypad-style masking"""

    @pytest.mark.parametrize('typed, expected', [
        ('', ''),
        (None, ''),
        ('abc', ''),
        ('0', 'R$ 0,00'),
        ('1', 'R$ 0,01'),
        ('12', 'R$ 0,12'),
        ('12345', 'R$ 123,45'),
        ('123456789', 'R$ 1.234.567,89'),
        ('R$ 1,23', 'R$ 1,23'),
    ])
    def test_mask(self, typed, expected):
        """Test that each typed digit shifts the value left"""
        assert apply_mask(typed) == expected

    def test_typing_another_digit(self):
        """Test masking the previous output plus one digit"""
        assert apply_mask(apply_mask('123') + '4') == 'R$ 12,34'
