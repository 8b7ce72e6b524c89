"""Registry factory: selects the tile registry class by mission name.

The factory maintains a table of known mission registries. New grids are
registered by adding an entry to ``_REGISTRY_CLASSES`` or by calling
``register_mission``.

Usage::

    from tile_registry.registry.factory import create_registry

    registry = create_registry("sentinel2")
    registry.read_file("s2_tiles.txt")

When no mission is given, ``RegistryConfig.mission`` decides.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tile_registry.core.config import RegistryConfig
from tile_registry.core.constants import LANDSAT8, SENTINEL2
from tile_registry.core.exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from tile_registry.registry.base import TileRegistry

logger = logging.getLogger("tile_registry.registry")


class UnknownMissionError(ValidationError):
    """Raised when no registry is registered for the requested mission."""

    default_stage = "create_registry"
    default_code = "UNKNOWN_MISSION"

    def __init__(self, mission: str, message: str) -> None:
        self.mission = mission
        super().__init__(message)


# ---------------------------------------------------------------------------
# Mission registry table
# ---------------------------------------------------------------------------

# Each entry maps a mission name to a zero-argument callable that returns
# the registry *class*.
_REGISTRY_CLASSES: dict[str, Callable[[], type[TileRegistry]]] = {}


def _register_builtin_missions() -> None:
    """Register the built-in mission registries."""

    def _sentinel2() -> type[TileRegistry]:
        from tile_registry.registry.sentinel2 import Sentinel2TileRegistry

        return Sentinel2TileRegistry

    def _landsat8() -> type[TileRegistry]:
        from tile_registry.registry.landsat8 import Landsat8TileRegistry

        return Landsat8TileRegistry

    _REGISTRY_CLASSES[SENTINEL2] = _sentinel2
    _REGISTRY_CLASSES[LANDSAT8] = _landsat8


def _ensure_missions() -> None:
    """Initialise the mission table once (idempotent)."""
    if not _REGISTRY_CLASSES:
        _register_builtin_missions()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def register_mission(name: str, loader: Callable[[], type[TileRegistry]]) -> None:
    """Register a custom mission registry.

    Args:
        name: Mission name (e.g. ``"sentinel1"``).
        loader: A zero-argument callable that returns the registry class.

    Raises:
        ValueError: If the name is empty.
    """
    if not name:
        msg = "Mission name must be non-empty"
        raise ValueError(msg)
    _ensure_missions()
    _REGISTRY_CLASSES[name] = loader
    logger.debug("Registered tile registry for mission: %s", name)


def create_registry(
    mission: str | None = None,
    config: RegistryConfig | None = None,
) -> TileRegistry:
    """Create an empty tile registry for *mission*.

    Args:
        mission: Mission identifier (``"sentinel2"``, ``"landsat8"``). Defaults
            to ``config.mission``.
        config: Optional ``RegistryConfig``; defaults to ``RegistryConfig()``.

    Raises:
        UnknownMissionError: If the mission is not registered.
    """
    _ensure_missions()
    if config is None:
        config = RegistryConfig()
    name = mission or config.mission

    loader = _REGISTRY_CLASSES.get(name)
    if loader is None:
        available = ", ".join(sorted(_REGISTRY_CLASSES))
        msg = f"Unknown mission: {name!r}. Available: {available}"
        raise UnknownMissionError(name, msg)

    logger.debug("Creating %s tile registry", name)
    return loader()(config)


def list_missions() -> list[str]:
    """Return the names of all registered missions."""
    _ensure_missions()
    return sorted(_REGISTRY_CLASSES)
