"""Mission tile registries.

Provides the ``TileRegistry`` base class, the Sentinel-2 and Landsat-8
variants, and the mission factory.
"""

from tile_registry.registry.base import TileRegistry
from tile_registry.registry.factory import (
    UnknownMissionError,
    create_registry,
    list_missions,
    register_mission,
)
from tile_registry.registry.landsat8 import Landsat8TileRegistry
from tile_registry.registry.sentinel2 import Sentinel2TileRegistry

__all__ = [
    "Landsat8TileRegistry",
    "Sentinel2TileRegistry",
    "TileRegistry",
    "UnknownMissionError",
    "create_registry",
    "list_missions",
    "register_mission",
]
