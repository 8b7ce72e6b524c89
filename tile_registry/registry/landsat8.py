"""Landsat-8 tile registry (WRS-2 grid).

USGS publishes the WRS-2 descending grid as KML with one Placemark per
path/row scene footprint. Path and row are read from the placemark's
ExtendedData (``PATH``/``ROW``, typically SchemaData fields) and, when
those are absent, from a ``<path>_<row>`` placemark name.

Tiles are identified by the six-digit ``PPPRRR`` code, e.g. ``198030``.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from tile_registry.core.constants import LANDSAT8
from tile_registry.kml import KmlValidationError
from tile_registry.registry.base import TileRegistry

if TYPE_CHECKING:
    from tile_registry.models.placemark import Placemark
    from tile_registry.models.rectangle import Rectangle

PATH_ROW_NAME_PATTERN = re.compile(r"^\s*(\d{1,3})\s*[_/-]\s*(\d{1,3})\s*$")

MAX_WRS_PATH = 233
MAX_WRS_ROW = 248


class Landsat8TileRegistry(TileRegistry):
    """Tile registry for the Landsat-8 WRS-2 path/row grid."""

    mission = LANDSAT8

    def _tile_from_placemark(self, placemark: Placemark) -> tuple[str, Rectangle]:
        path, row = _path_row(placemark)
        return wrs_tile_id(path, row), self._placemark_envelope(placemark)


def wrs_tile_id(path: int, row: int) -> str:
    """Format a WRS-2 path/row pair as ``PPPRRR``.

    Raises:
        KmlValidationError: If path or row is outside the WRS-2 grid.
    """
    if not 1 <= path <= MAX_WRS_PATH:
        msg = f"WRS-2 path {path} out of range [1, {MAX_WRS_PATH}]"
        raise KmlValidationError(msg)
    if not 1 <= row <= MAX_WRS_ROW:
        msg = f"WRS-2 row {row} out of range [1, {MAX_WRS_ROW}]"
        raise KmlValidationError(msg)
    return f"{path:03d}{row:03d}"


def _path_row(placemark: Placemark) -> tuple[int, int]:
    path_text = placemark.metadata_value("PATH")
    row_text = placemark.metadata_value("ROW")
    if path_text and row_text:
        return (
            _as_int(path_text, "PATH", placemark),
            _as_int(row_text, "ROW", placemark),
        )

    match = PATH_ROW_NAME_PATTERN.match(placemark.name)
    if match is None:
        msg = (
            f"Placemark '{placemark.display_name}' has neither PATH/ROW data "
            f"nor a '<path>_<row>' name"
        )
        raise KmlValidationError(msg)
    return int(match.group(1)), int(match.group(2))


def _as_int(text: str, key: str, placemark: Placemark) -> int:
    try:
        value = float(text)
    except ValueError as exc:
        msg = f"{key} value {text!r} in Placemark '{placemark.display_name}' is not a number"
        raise KmlValidationError(msg) from exc
    if not value.is_integer():
        msg = f"{key} value {text!r} in Placemark '{placemark.display_name}' is not an integer"
        raise KmlValidationError(msg)
    return int(value)
