"""Sentinel-2 tile registry (MGRS grid).

ESA publishes the Sentinel-2 tiling grid as a KML document with one
Placemark per MGRS tile. The placemark name is the tile code (``31TGM``)
and its MultiGeometry holds the tile footprint polygon(s) plus a label
point. The tile rectangle is the envelope of all footprint polygons.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from tile_registry.core.constants import SENTINEL2
from tile_registry.kml import KmlValidationError
from tile_registry.registry.base import TileRegistry

if TYPE_CHECKING:
    from tile_registry.models.placemark import Placemark
    from tile_registry.models.rectangle import Rectangle

# UTM zone, latitude band (C-X without I/O), 100 km square column and row letters
MGRS_TILE_PATTERN = re.compile(r"^(\d{2})[C-HJ-NP-X][A-HJ-NP-Z][A-HJ-NP-V]$")

MIN_UTM_ZONE = 1
MAX_UTM_ZONE = 60


class Sentinel2TileRegistry(TileRegistry):
    """Tile registry for the Sentinel-2 MGRS tiling grid."""

    mission = SENTINEL2

    def _tile_from_placemark(self, placemark: Placemark) -> tuple[str, Rectangle]:
        tile_id = mgrs_tile_id(placemark.name)
        return tile_id, self._placemark_envelope(placemark)


def mgrs_tile_id(name: str) -> str:
    """Normalise a placemark name to an MGRS tile code.

    Raises:
        KmlValidationError: If *name* is not a valid MGRS tile code.
    """
    code = name.strip().upper()
    match = MGRS_TILE_PATTERN.match(code)
    if match is None or not MIN_UTM_ZONE <= int(match.group(1)) <= MAX_UTM_ZONE:
        msg = f"Placemark name {name!r} is not an MGRS tile code (e.g. '31TGM')"
        raise KmlValidationError(msg)
    return code
