"""Route map built on folium (Leaflet).

A single map instance is created on first use and reused for every lookup.
Each update replaces the previous markers, route line and fitted bounds.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import folium
from folium.map import FitBounds

from .airports import Coords, lookup_coords
from .models import FlightRecord

logger = logging.getLogger(__name__)

WORLD_CENTER: Coords = (20.0, 0.0)
WORLD_ZOOM = 2

TILES_URL = "https://{s}.basemaps.cartocdn.com/dark_all/{z}/{x}/{y}{r}.png"
TILES_ATTRIBUTION = (
    '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> '
    'contributors &copy; <a href="https://carto.com/attributions">CARTO</a>'
)

ROUTE_STYLE = {
    "color": "#6366f1",
    "weight": 3,
    "opacity": 0.8,
    "dash_array": "10, 10",
    "line_cap": "round",
}
FIT_PADDING = (50, 50)


class MapAdapter:
    def __init__(self) -> None:
        self._map: Optional[folium.Map] = None
        self.markers: List[folium.Marker] = []
        self.route: Optional[folium.PolyLine] = None
        self._fit: Optional[FitBounds] = None
        self.bounds: Optional[Tuple[Coords, Coords]] = None

    @property
    def map(self) -> folium.Map:
        """The map instance, created on first access."""
        if self._map is None:
            self._map = folium.Map(
                location=list(WORLD_CENTER),
                zoom_start=WORLD_ZOOM,
                tiles=None,
                zoom_control=False,
            )
            folium.TileLayer(
                tiles=TILES_URL,
                attr=TILES_ATTRIBUTION,
                name="CartoDB Dark Matter",
                subdomains="abcd",
                max_zoom=19,
            ).add_to(self._map)
        return self._map

    def _remove(self, element) -> None:
        # folium has no public removal API; children are keyed by get_name()
        # in branca's Element._children
        self.map._children.pop(element.get_name(), None)

    def clear(self) -> None:
        """Remove markers, the route line and any fitted bounds."""
        for marker in self.markers:
            self._remove(marker)
        self.markers = []
        if self.route is not None:
            self._remove(self.route)
            self.route = None
        if self._fit is not None:
            self._remove(self._fit)
            self._fit = None
        self.bounds = None

    def reset_view(self) -> None:
        m = self.map
        m.location = list(WORLD_CENTER)
        m.options["zoom"] = WORLD_ZOOM

    def update(self, record: FlightRecord) -> None:
        """Draw the route of *record*, replacing whatever was drawn before."""
        m = self.map
        self.clear()

        dep_code = record.departure.iata
        arr_code = record.arrival.iata
        dep = lookup_coords(dep_code)
        arr = lookup_coords(arr_code)

        if dep is None or arr is None:
            self.reset_view()
            logger.warning(
                "Map coordinates missing for route: %s -> %s", dep_code, arr_code
            )
            return

        self.markers = [
            folium.Marker(list(dep), popup=f"<b>Departure</b><br>{dep_code}").add_to(m),
            folium.Marker(list(arr), popup=f"<b>Arrival</b><br>{arr_code}").add_to(m),
        ]
        self.route = folium.PolyLine([list(dep), list(arr)], **ROUTE_STYLE).add_to(m)

        self.bounds = (dep, arr)
        self._fit = FitBounds([list(dep), list(arr)], padding=FIT_PADDING)
        m.add_child(self._fit)

    def save(self, path: str | Path) -> None:
        self.map.save(str(path))
        logger.info("Map written to %s", path)


__all__ = ["MapAdapter", "WORLD_CENTER", "WORLD_ZOOM"]
