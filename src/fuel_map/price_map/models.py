"""
Forecourt records built from the uploaded CSV.

These are plain dataclasses, not database models: an upload only lives for
the request that carries it.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .pricing import display_price_for, display_price_value_for, price_range


@dataclass
class ForecourtPoint:
    """One fuel station site with a valid location"""

    id: str
    lat: float
    lng: float
    trading_name: str
    brand: str
    address: str
    postcode: str
    updated: str
    prices: Dict[str, str] = field(default_factory=dict)

    @property
    def has_prices(self) -> bool:
        return bool(self.prices)

    @property
    def display_price(self) -> Optional[str]:
        """Two decimal label of the preferred fuel, e.g. '£1.43'"""
        return display_price_for(self.prices) if self.has_prices else None

    @property
    def display_price_value(self) -> Optional[float]:
        """Preferred fuel price in pounds"""
        return display_price_value_for(self.prices) if self.has_prices else None

    @property
    def coordinates(self):
        """(lat, lng) pair, the order Leaflet expects"""
        return (self.lat, self.lng)


@dataclass
class PriceRange:
    """Low and high ends of the price color scale, in pounds"""

    low: float
    high: float


@dataclass
class ForecourtStats:
    """Site and distinct brand counts for an upload"""

    count: int
    brands: int


@dataclass
class ParseResult:
    """Outcome of reading one uploaded CSV file."""

    file_name: str
    points: List[ForecourtPoint] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def stats(self) -> Optional[ForecourtStats]:
        if not self.points:
            return None
        return ForecourtStats(
            count=len(self.points),
            brands=len({point.brand for point in self.points}),
        )

    @property
    def price_range(self) -> Optional[PriceRange]:
        values = [
            point.display_price_value
            for point in self.points
            if point.display_price_value is not None
        ]
        bounds = price_range(values)
        if bounds is None:
            return None
        return PriceRange(low=bounds[0], high=bounds[1])
