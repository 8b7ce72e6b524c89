"""Satellite tile registry.

Maps Sentinel-2 and Landsat-8 grid tile identifiers to their bounding
rectangles, persists them in a line-oriented text format, ingests vendor
KML tiling grids, and answers bounding-box and AOI intersection queries.
"""

from tile_registry.core.config import RegistryConfig
from tile_registry.core.constants import CornerConvention
from tile_registry.models.rectangle import Rectangle
from tile_registry.registry import (
    Landsat8TileRegistry,
    Sentinel2TileRegistry,
    TileRegistry,
    create_registry,
)

__version__ = "0.1.0"

__all__ = [
    "CornerConvention",
    "Landsat8TileRegistry",
    "Rectangle",
    "RegistryConfig",
    "Sentinel2TileRegistry",
    "TileRegistry",
    "create_registry",
]
