import math

import pytest

from fuel_map.price_map.pricing import (
    DEFAULT_COLOR,
    display_price_for,
    display_price_value_for,
    extract_prices,
    format_price_label,
    format_price_value,
    parse_number,
    price_range,
    price_to_color,
    to_pounds,
)


class TestParseNumber:
    """Leading-number parsing used for coordinates and prices."""

    @pytest.mark.parametrize(
        'value, expected',
        [
            ('53.8', 53.8),
            ('-1.55', -1.55),
            ('  51.45', 51.45),
            ('142.9p', 142.9),
            ('.5', 0.5),
            ('1e2', 100.0),
        ],
    )
    def test_reads_leading_number(self, value, expected):
        assert parse_number(value) == expected

    @pytest.mark.parametrize('value', ['', None, 'abc', 'NaN', 'Infinity', '-', 'p142'])
    def test_rejects_non_numbers(self, value):
        assert parse_number(value) is None


class TestPriceFormatting:
    """Pence to pounds conversion and labels."""

    def test_label_uses_two_decimals(self):
        assert format_price_label('142.9') == '£1.43'
        assert format_price_label('150') == '£1.50'

    def test_value_uses_three_decimals(self):
        assert format_price_value('142.9') == '£1.429'
        assert format_price_value('150') == '£1.500'

    def test_non_numeric_passes_through(self):
        assert format_price_label('n/a') == 'n/a'
        assert format_price_value('n/a') == 'n/a'

    def test_to_pounds(self):
        assert to_pounds('150') == 1.5
        assert to_pounds('unknown') is None

    def test_extract_prices_strips_apostrophes_and_skips_blanks(self):
        row = {
            'forecourts.fuel_price.E5': "'152.9",
            'forecourts.fuel_price.E10': '142.9',
            'forecourts.fuel_price.B7P': '',
            'forecourts.trading_name': 'Ignored',
        }
        assert extract_prices(row) == {'E5': '152.9', 'E10': '142.9'}


class TestPreferredFuel:
    """The marker shows one fuel, picked in a fixed order."""

    def test_e10_preferred_over_e5(self):
        prices = {'E5': '150', 'E10': '140'}
        assert display_price_for(prices) == '£1.40'
        assert display_price_value_for(prices) == 1.4

    def test_e5_when_no_e10(self):
        prices = {'B7S': '160', 'E5': '150'}
        assert display_price_for(prices) == '£1.50'

    def test_b7s_before_b7p(self):
        prices = {'B7P': '170', 'B7S': '160', 'HVO': '180'}
        assert display_price_for(prices) == '£1.60'

    def test_hvo_last(self):
        assert display_price_for({'HVO': '180'}) == '£1.80'

    def test_first_value_wins_even_when_not_numeric(self):
        prices = {'E10': 'tbc', 'E5': '150'}
        assert display_price_for(prices) == 'tbc'
        assert display_price_value_for(prices) is None

    def test_no_prices(self):
        assert display_price_for({}) is None
        assert display_price_value_for({}) is None


class TestPriceScale:
    """Percentile range and hue mapping."""

    def test_empty_range(self):
        assert price_range([]) is None

    def test_single_value(self):
        assert price_range([1.45]) == (1.45, 1.45)

    def test_tenth_and_ninetieth_percentile(self):
        values = [10.0, 1.0, 9.0, 2.0, 8.0, 3.0, 7.0, 4.0, 6.0, 5.0]
        # floor(0.1 * 9) = 0, floor(0.9 * 9) = 8
        assert price_range(values) == (1.0, 9.0)

    def test_cheapest_is_green_and_dearest_is_red(self):
        assert price_to_color(1.0, 1.0, 2.0) == 'hsl(120, 70%, 45%)'
        assert price_to_color(2.0, 1.0, 2.0) == 'hsl(0, 70%, 45%)'
        assert price_to_color(1.5, 1.0, 2.0) == 'hsl(60, 70%, 45%)'

    def test_values_outside_range_are_clamped(self):
        assert price_to_color(0.5, 1.0, 2.0) == 'hsl(120, 70%, 45%)'
        assert price_to_color(5.0, 1.0, 2.0) == 'hsl(0, 70%, 45%)'

    def test_flat_range_uses_default(self):
        assert price_to_color(1.5, 1.5, 1.5) == DEFAULT_COLOR

    def test_non_finite_uses_default(self):
        assert price_to_color(math.nan, 1.0, 2.0) == DEFAULT_COLOR
