"""
Folium map of forecourts, labeled and colored by price.
"""
import logging
from typing import Iterable, List, Optional

import folium
from django.conf import settings
from django.template.loader import render_to_string
from django.utils.html import format_html
from jinja2 import Template

from .models import ForecourtPoint, PriceRange
from .pricing import DEFAULT_COLOR, PRICE_COLUMNS, fuel_code, format_price_value, price_to_color

logger = logging.getLogger('price_map')

MAP_HEIGHT = '100%'

MARKER_CSS = """
<style>
  .price-marker { background: transparent; border: none; }
  .marker-stack { display: flex; flex-direction: column; align-items: center; gap: 2px; }
  .marker-label {
    color: #fff; font: 600 11px/1.4 system-ui, sans-serif; padding: 1px 5px;
    border-radius: 9px; white-space: nowrap; box-shadow: 0 1px 3px rgba(0, 0, 0, 0.35);
  }
  .marker-dot {
    width: 12px; height: 12px; border-radius: 50%; border: 2px solid #fff;
    box-shadow: 0 1px 3px rgba(0, 0, 0, 0.35);
  }
  .marker-dot--grey { background: #9ca3af; }
  .tile-counter {
    background: rgba(255, 255, 255, 0.9); padding: 2px 8px; border-radius: 4px;
    font: 12px system-ui, sans-serif;
  }
  .popup h3 { margin: 0 0 4px; }
  .popup p { margin: 2px 0; }
</style>
"""


class TileCounter(folium.MacroElement):
    """Leaflet control counting tiles loaded and failed by a tile layer."""

    _template = Template(
        """
        {% macro script(this, kwargs) %}
            (function() {
                var counts = {loaded: 0, error: 0};
                var control = L.control({position: "{{ this.position }}"});
                control.onAdd = function() {
                    this._div = L.DomUtil.create('div', 'tile-counter');
                    this.update();
                    return this._div;
                };
                control.update = function() {
                    if (this._div) {
                        this._div.innerHTML = 'Tiles: ' + counts.loaded + ' loaded, '
                            + counts.error + ' errors';
                    }
                };
                control.addTo({{ this._parent.get_name() }});
                {{ this.tile_layer.get_name() }}.on('tileload', function() {
                    counts.loaded += 1;
                    control.update();
                });
                {{ this.tile_layer.get_name() }}.on('tileerror', function() {
                    counts.error += 1;
                    control.update();
                });
            })();
        {% endmacro %}
        """
    )

    def __init__(self, tile_layer, position='bottomleft'):
        super().__init__()
        self._name = 'TileCounter'
        self.tile_layer = tile_layer
        self.position = position


def marker_color(point: ForecourtPoint, bounds: Optional[PriceRange]) -> str:
    value = point.display_price_value
    if value is None or bounds is None:
        return DEFAULT_COLOR
    return price_to_color(value, bounds.low, bounds.high)


def build_price_icon(point: ForecourtPoint, color: str) -> folium.DivIcon:
    if not point.has_prices:
        return folium.DivIcon(
            html='<div class="marker-dot marker-dot--grey"></div>',
            icon_size=(16, 16),
            icon_anchor=(8, 8),
            popup_anchor=(0, -18),
            class_name='price-marker',
        )
    html = format_html(
        '<div class="marker-stack">'
        '<div class="marker-label" style="background:{}">{}</div>'
        '<div class="marker-dot" style="background:{}"></div>'
        '</div>',
        color,
        point.display_price or '',
        color,
    )
    return folium.DivIcon(
        html=html,
        icon_size=(48, 40),
        icon_anchor=(24, 24),
        popup_anchor=(0, -18),
        class_name='price-marker',
    )


def price_lines(point: ForecourtPoint) -> List[str]:
    """'E10: £1.429' entries in price column order"""
    lines = []
    for column in PRICE_COLUMNS:
        code = fuel_code(column)
        if code in point.prices:
            lines.append(f"{code}: {format_price_value(point.prices[code])}")
    return lines


def build_popup_html(point: ForecourtPoint) -> str:
    return render_to_string(
        'price_map/popup.html',
        {'point': point, 'price_lines': price_lines(point)},
    )


def build_price_map(
    points: Iterable[ForecourtPoint],
    bounds: Optional[PriceRange] = None,
) -> folium.Map:
    """
    Build the forecourt map.

    Args:
        points: forecourts to plot
        bounds: price color scale; markers fall back to green without one

    Returns:
        folium.Map centered on the UK, or fitted to the points when any
    """
    points = list(points)

    price_map = folium.Map(
        location=list(settings.PRICE_MAP_CENTER),
        zoom_start=settings.PRICE_MAP_ZOOM,
        tiles=None,
        width='100%',
        height=MAP_HEIGHT,
    )
    tile_layer = folium.TileLayer(
        tiles=settings.PRICE_MAP_TILE_URL,
        attr=settings.PRICE_MAP_TILE_ATTRIBUTION,
        name='OpenStreetMap',
    )
    tile_layer.add_to(price_map)
    price_map.get_root().header.add_child(folium.Element(MARKER_CSS))
    TileCounter(tile_layer).add_to(price_map)

    for point in points:
        folium.Marker(
            location=list(point.coordinates),
            icon=build_price_icon(point, marker_color(point, bounds)),
            popup=folium.Popup(build_popup_html(point), max_width=320),
        ).add_to(price_map)

    if points:
        lats, lngs = zip(*(point.coordinates for point in points))
        padding = settings.PRICE_MAP_FIT_PADDING
        price_map.fit_bounds(
            [[min(lats), min(lngs)], [max(lats), max(lngs)]],
            padding=(padding, padding),
        )

    logger.debug(f"Built price map with {len(points)} markers")
    return price_map


def render_map_document(price_map: folium.Map) -> str:
    """Full standalone HTML document for the map."""
    return price_map.get_root().render()
