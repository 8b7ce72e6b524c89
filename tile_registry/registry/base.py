"""TileRegistry abstract base class.

A registry owns one mapping from tile identifier to ``Rectangle`` for a
single mission grid. The mapping is private to the instance and always
kept sorted by tile identifier, which is the canonical iteration and
serialization order.

Population paths:
    1. ``read(stream)`` / ``read_file(path)``: the persisted text format.
    2. ``ingest_from_kml(stream)`` / ``ingest_from_file(path)``: a vendor
       KML tiling grid, mapped to tiles by the mission variant.

Both paths stage their entries and commit only when the whole input has
been parsed: on any error the registry keeps its previous contents.
Duplicate identifiers within one input resolve last-one-wins.

Each concrete registry (``Sentinel2TileRegistry``, ``Landsat8TileRegistry``)
implements ``_tile_from_placemark`` with its grid's naming rule.
"""

from __future__ import annotations

import abc
import logging
from pathlib import Path
from typing import IO, TYPE_CHECKING, ClassVar

from tile_registry.core.config import RegistryConfig
from tile_registry.core.constants import TILE_MAP_ENCODING, CornerConvention
from tile_registry.core.exceptions import TileMapParseError
from tile_registry.kml import (
    KmlValidationError,
    parse_kml,
    validate_coordinates,
    validate_polygon_ring,
)
from tile_registry.models.rectangle import Rectangle
from tile_registry.utils.tile_lines import format_tile_line, parse_tile_line

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from tile_registry.models.placemark import Placemark

logger = logging.getLogger("tile_registry.registry")


class TileRegistry(abc.ABC):
    """Abstract base class for mission tile registries.

    Example usage::

        registry = create_registry("sentinel2")
        registry.ingest_from_file("S2_tiling_grid.kml")
        registry.write("s2_tiles.txt")
        box = registry.bounding_box({"31TGM", "32TLR"})
        hits = registry.intersecting_tiles(Rectangle(2.0, 40.0, 1.0, 1.0))
    """

    #: Mission name, matching the factory key.
    mission: ClassVar[str] = ""

    def __init__(self, config: RegistryConfig | None = None) -> None:
        self._config = config or RegistryConfig()
        self._tiles: dict[str, Rectangle] = {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(count={len(self._tiles)})"

    @property
    def config(self) -> RegistryConfig:
        """Return the registry configuration (read-only)."""
        return self._config

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def read(self, stream: IO[str] | IO[bytes]) -> int:
        """Populate the registry from a tile-map text stream.

        Accepts text or binary streams (bytes are decoded as UTF-8).
        Whitespace-only lines are skipped. The stream is closed on every
        exit path.

        Returns:
            Number of lines committed.

        Raises:
            TileMapParseError: On the first malformed line. The registry is
                left unchanged.
            OSError: If the stream cannot be read.
        """
        staged: dict[str, Rectangle] = {}
        try:
            for line_number, raw in enumerate(stream, start=1):
                line = _decode_line(raw, line_number)
                if not line.strip():
                    continue
                tile_id, rectangle = parse_tile_line(line, line_number)
                staged[tile_id] = rectangle
        finally:
            stream.close()

        self._commit(staged)
        logger.info("Read %d tile(s); registry now holds %d", len(staged), len(self._tiles))
        return len(staged)

    def read_file(self, path: Path | str) -> int:
        """Open *path* as UTF-8 text and ``read`` it."""
        path = Path(path)
        logger.debug("Reading tile map %s", path)
        return self.read(path.open(encoding=TILE_MAP_ENCODING))

    def write(self, path: Path | str) -> int:
        """Serialise the registry to *path*, one line per tile, sorted by id.

        The file is created or truncated. Each line is flushed as soon as
        it is written.

        Returns:
            Number of lines written.

        Raises:
            OSError: If the file cannot be opened or written.
        """
        path = Path(path)
        written = 0
        with path.open("w", encoding=TILE_MAP_ENCODING, newline="\n") as handle:
            for tile_id, rectangle in self._tiles.items():
                handle.write(format_tile_line(tile_id, rectangle))
                handle.flush()
                written += 1
        logger.info("Wrote %d tile(s) to %s", written, path)
        return written

    # ------------------------------------------------------------------
    # KML ingestion
    # ------------------------------------------------------------------

    def ingest_from_file(self, path: Path | str) -> int:
        """Ingest a KML tiling-grid file.

        A missing file is not an error: nothing is ingested and 0 is
        returned.
        """
        path = Path(path)
        if not path.exists():
            logger.debug("KML file %s does not exist; nothing to ingest", path)
            return 0
        return self.ingest_from_kml(path.open("rb"), source_name=path.name)

    def ingest_from_kml(self, stream: IO[str] | IO[bytes], *, source_name: str = "") -> int:
        """Read a whole KML document and register one tile per placemark.

        The stream is closed on every exit path.

        Returns:
            Number of placemarks committed as tiles.

        Raises:
            KmlParseError: If the document is not valid KML.
            KmlValidationError: If a tile placemark is invalid and
                ``config.strict_kml`` is set. The registry is left unchanged.
            OSError: If the stream cannot be read.
        """
        try:
            content = stream.read()
        finally:
            stream.close()
        if isinstance(content, str):
            content = content.encode("utf-8")

        label = source_name or f"{self.mission} KML"
        placemarks = parse_kml(
            content,
            backend=self._config.kml_backend,
            source_name=label,
            strict=self._config.strict_kml,
        )

        staged: dict[str, Rectangle] = {}
        for placemark in placemarks:
            try:
                tile_id, rectangle = self._tile_from_placemark(placemark)
            except KmlValidationError as exc:
                if self._config.strict_kml:
                    raise
                logger.warning(
                    "Skipping invalid placemark '%s' in %s: %s",
                    placemark.display_name,
                    label,
                    exc,
                )
                continue
            staged[tile_id] = rectangle

        self._commit(staged)
        logger.info(
            "Ingested %d %s tile(s) from %s; registry now holds %d",
            len(staged),
            self.mission,
            label,
            len(self._tiles),
        )
        return len(staged)

    @abc.abstractmethod
    def _tile_from_placemark(self, placemark: Placemark) -> tuple[str, Rectangle]:
        """Map a KML placemark to ``(tile_id, rectangle)`` for this mission.

        Raises:
            KmlValidationError: If the placemark does not describe a valid
                tile of this grid.
        """

    def _placemark_envelope(self, placemark: Placemark) -> Rectangle:
        """Bounding rectangle of all polygons of *placemark*.

        Raises:
            KmlValidationError: If a ring is degenerate.
            InvalidCoordinateError: If coordinate validation is enabled and a
                vertex lies outside WGS 84 bounds.
        """
        from shapely.geometry import Polygon

        name = placemark.display_name
        rectangles: list[Rectangle] = []
        for ring in placemark.polygons:
            if self._config.validate_coordinates:
                validate_coordinates(ring, name)
            ring = validate_polygon_ring(ring, name)
            rectangles.append(Rectangle.from_bounds(*Polygon(ring).bounds))

        envelope = self._enclosing(*rectangles)
        if envelope is None:
            msg = f"Placemark '{name}' has no polygon geometry"
            raise KmlValidationError(msg)
        return envelope

    @staticmethod
    def _enclosing(*rectangles: Rectangle) -> Rectangle | None:
        """Union of *rectangles*; ``None`` when called with none."""
        return Rectangle.enclosing(rectangles)

    def _commit(self, staged: dict[str, Rectangle]) -> None:
        """Merge *staged* entries (overwriting) and restore key order."""
        if not staged:
            return
        merged = {**self._tiles, **staged}
        self._tiles = dict(sorted(merged.items()))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def tile_names(self) -> list[str]:
        """Return a snapshot of all tile identifiers in sorted order."""
        return list(self._tiles)

    def count(self) -> int:
        """Return the number of tiles in this registry."""
        return len(self._tiles)

    def __len__(self) -> int:
        return len(self._tiles)

    def __contains__(self, tile_id: object) -> bool:
        return tile_id in self._tiles

    def __iter__(self) -> Iterator[str]:
        return iter(self.tile_names())

    def tile_rectangle(self, tile_id: str) -> Rectangle | None:
        """Return the rectangle of *tile_id*, or ``None`` if not registered."""
        return self._tiles.get(tile_id)

    def to_dict(self) -> dict[str, Rectangle]:
        """Return a sorted snapshot of the tile mapping."""
        return dict(self._tiles)

    def bounding_box(self, tile_ids: Iterable[str] | None) -> Rectangle | None:
        """Compute the bounding box of the given tiles.

        Unknown identifiers are skipped.

        Args:
            tile_ids: Tile identifiers to enclose.

        Returns:
            The union of the matching tiles' rectangles; the tile's own
            rectangle when exactly one matches; ``None`` when *tile_ids* is
            ``None`` or nothing matches.

        Raises:
            TypeError: If *tile_ids* is a single string rather than a
                collection of identifiers.
        """
        if tile_ids is None:
            return None
        if isinstance(tile_ids, str):
            msg = f"tile_ids must be a collection of tile ids, not a str ({tile_ids!r})"
            raise TypeError(msg)
        return Rectangle.enclosing(
            self._tiles[tile_id] for tile_id in set(tile_ids) if tile_id in self._tiles
        )

    def intersecting_tiles(self, aoi: Rectangle) -> set[str]:
        """Return the identifiers of all tiles overlapping *aoi*.

        Overlap must have a non-zero area; tiles touching *aoi* only along
        an edge or at a corner are excluded.
        """
        return {tile_id for tile_id, rectangle in self._tiles.items() if rectangle.intersects(aoi)}

    def intersecting_tiles_from_corners(
        self,
        ulx: float,
        uly: float,
        lrx: float,
        lry: float,
        *,
        convention: CornerConvention | None = None,
    ) -> set[str]:
        """Return tiles overlapping the AOI given by its corners.

        Args:
            ulx: Upper-left corner longitude (degrees).
            uly: Upper-left corner latitude (degrees).
            lrx: Lower-right corner longitude (degrees).
            lry: Lower-right corner latitude (degrees).
            convention: How the corners become a rectangle; defaults to
                ``config.corner_convention``. See ``Rectangle.from_corners``.
        """
        if convention is None:
            convention = self._config.corner_convention
        return self.intersecting_tiles(Rectangle.from_corners(ulx, uly, lrx, lry, convention))


def _decode_line(raw: str | bytes, line_number: int) -> str:
    if isinstance(raw, str):
        return raw
    try:
        return raw.decode(TILE_MAP_ENCODING)
    except UnicodeDecodeError as exc:
        msg = f"Line {line_number}: not valid {TILE_MAP_ENCODING} text: {exc}"
        raise TileMapParseError(msg, line_number=line_number) from exc
