"""
Price parsing, formatting and the percentile color scale.

Prices in the forecourt CSV are pence per litre, sometimes prefixed with an
apostrophe by spreadsheet exports (e.g. "'142.9").
"""
import math
import re
from typing import Dict, List, Optional, Sequence, Tuple

PRICE_COLUMNS = [
    'forecourts.fuel_price.E5',
    'forecourts.fuel_price.E10',
    'forecourts.fuel_price.B7P',
    'forecourts.fuel_price.B7S',
    'forecourts.fuel_price.B10',
    'forecourts.fuel_price.HVO',
]

# Fuel used for the marker label, first match wins
PREFERRED_FUEL_TYPES = ['E10', 'E5', 'B7S', 'B7P', 'B10', 'HVO']

DEFAULT_COLOR = '#16a34a'
LOW_PERCENTILE = 0.1
HIGH_PERCENTILE = 0.9

_NUMBER_PREFIX = re.compile(r'\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')


def parse_number(value: Optional[str]) -> Optional[float]:
    """
    Read the leading decimal number of a string.

    Trailing text is ignored ("142.9p" -> 142.9). Returns None when there is
    no number or it is not finite.
    """
    if not value:
        return None
    match = _NUMBER_PREFIX.match(value)
    if not match:
        return None
    number = float(match.group(1))
    return number if math.isfinite(number) else None


def format_number(value: float) -> str:
    """Render a float without a trailing '.0' for whole numbers."""
    text = repr(float(value))
    return text[:-2] if text.endswith('.0') else text


def normalize_price(value: str) -> str:
    return value.lstrip("'")


def fuel_code(column: str) -> str:
    """'forecourts.fuel_price.E10' -> 'E10'"""
    return column.rsplit('.', 1)[-1]


def extract_prices(row: Dict[str, str]) -> Dict[str, str]:
    """Collect the non-empty price cells of a row, keyed by fuel code."""
    prices = {}
    for column in PRICE_COLUMNS:
        value = row.get(column)
        if value:
            prices[fuel_code(column)] = normalize_price(value)
    return prices


def to_pounds(value: str) -> Optional[float]:
    pence = parse_number(value)
    if pence is None:
        return None
    return pence / 100


def format_price_label(value: str) -> str:
    """Pence to a two decimal pound label; non-numeric values pass through."""
    pounds = to_pounds(value)
    if pounds is None:
        return value
    return f'£{pounds:.2f}'


def format_price_value(value: str) -> str:
    """Pence to a three decimal pound value; non-numeric values pass through."""
    pounds = to_pounds(value)
    if pounds is None:
        return value
    return f'£{pounds:.3f}'


def _preferred_price(prices: Dict[str, str]) -> Optional[str]:
    for code in PREFERRED_FUEL_TYPES:
        value = prices.get(code)
        if value:
            return value
    return None


def display_price_for(prices: Dict[str, str]) -> Optional[str]:
    value = _preferred_price(prices)
    return format_price_label(value) if value is not None else None


def display_price_value_for(prices: Dict[str, str]) -> Optional[float]:
    value = _preferred_price(prices)
    return to_pounds(value) if value is not None else None


def price_range(values: Sequence[float]) -> Optional[Tuple[float, float]]:
    """
    10th and 90th percentile of the given prices.

    Uses the lower nearest-rank value: sorted[floor(p * (n - 1))].
    """
    if not values:
        return None
    ordered: List[float] = sorted(values)

    def pick(p):
        return ordered[math.floor(p * (len(ordered) - 1))]

    return pick(LOW_PERCENTILE), pick(HIGH_PERCENTILE)


def price_to_color(value: float, low: float, high: float) -> str:
    """
    Map a price onto a green (cheap) to red (expensive) hue.

    Prices outside [low, high] are clamped to the ends of the scale.
    """
    if value is None or not math.isfinite(value) or low == high:
        return DEFAULT_COLOR
    t = min(1.0, max(0.0, (value - low) / (high - low)))
    hue = 120 - 120 * t
    return f'hsl({format_number(hue)}, 70%, 45%)'
