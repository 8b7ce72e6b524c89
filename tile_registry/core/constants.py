"""Shared registry constants, single source of truth.

Centralises mission names, the persisted line grammar keys and the
corner-convention switch used by the four-corner AOI query.
"""

from __future__ import annotations

import enum

# ---------------------------------------------------------------------------
# Mission names
# ---------------------------------------------------------------------------

SENTINEL2: str = "sentinel2"
"""Sentinel-2 MGRS tiling grid."""

LANDSAT8: str = "landsat8"
"""Landsat-8 WRS-2 path/row grid."""

KNOWN_MISSIONS: frozenset[str] = frozenset({SENTINEL2, LANDSAT8})

# ---------------------------------------------------------------------------
# Persisted text format
# ---------------------------------------------------------------------------

FIELD_KEYS: tuple[str, str, str, str] = ("x=", "y=", "w=", "h=")
"""Fixed key prefixes of the four rectangle fields, in line order."""

FIELD_NAMES: tuple[str, str, str, str] = ("x", "y", "w", "h")

FIELD_SEPARATOR: str = ","
TILE_SEPARATOR: str = " "
TILE_MAP_ENCODING: str = "utf-8"

# ---------------------------------------------------------------------------
# KML backends
# ---------------------------------------------------------------------------

KML_BACKEND_LXML: str = "lxml"
KML_BACKEND_FIONA: str = "fiona"

KNOWN_KML_BACKENDS: frozenset[str] = frozenset({KML_BACKEND_LXML, KML_BACKEND_FIONA})


class CornerConvention(enum.StrEnum):
    """How ``(ulx, uly, lrx, lry)`` corners become a query rectangle.

    ``LITERAL`` keeps the historic ``width = ulx - lrx``, ``height = uly - lry``
    arithmetic. For ordinary lon/lat corners that width is negative, so the
    query rectangle is empty and matches no tile.

    ``CORRECTED`` anchors the rectangle at the minimum corner with
    non-negative extents.
    """

    LITERAL = "literal"
    CORRECTED = "corrected"
