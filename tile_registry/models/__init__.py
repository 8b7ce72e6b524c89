"""Data models.

- Rectangle: Axis-aligned tile extent / area of interest
- Placemark: Polygon placemark extracted from a KML tiling grid
"""

from tile_registry.models.placemark import Placemark
from tile_registry.models.rectangle import Rectangle

__all__ = [
    "Placemark",
    "Rectangle",
]
