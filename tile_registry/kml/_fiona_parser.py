"""Fiona-based KML parser (optional backend).

Reads the KML document through fiona's OGR KML driver from an in-memory
file. OGR exposes each Folder as a separate layer, so every layer is
read. Polygon, MultiPolygon and GeometryCollection geometries contribute
their exterior rings; everything else is ignored.
"""

from __future__ import annotations

import logging

from tile_registry.kml._normalization import (
    coords_to_tuples,
    extract_metadata_from_props,
)
from tile_registry.kml._validation import KmlValidationError
from tile_registry.models.placemark import Placemark

logger = logging.getLogger("tile_registry.kml")


def parse_with_fiona(
    content: bytes, source_name: str = "", *, strict: bool = True
) -> list[Placemark]:
    """Extract polygon placemarks from KML *content* using fiona.

    With *strict* unset, a record with malformed coordinates is logged and
    left out instead of failing the whole document.

    Raises:
        KmlValidationError: If a geometry's coordinates are malformed and
            *strict* is set.
        Exception: Any fiona/OGR failure propagates so the caller can fall
            back to the lxml parser.
    """
    import fiona

    placemarks: list[Placemark] = []
    index = 0

    with fiona.MemoryFile(content, ext=".kml") as memfile:
        for layer in fiona.listlayers(memfile.name):
            with memfile.open(driver="KML", layer=layer) as collection:
                for record in collection:
                    geom = record.get("geometry")
                    props = dict(record.get("properties", {}) or {})
                    try:
                        rings = _exterior_rings(geom)
                    except KmlValidationError as exc:
                        if strict:
                            raise
                        logger.warning(
                            "Skipping invalid placemark '%s' in %s: %s",
                            _record_name(props) or f"Placemark {index}",
                            source_name or "KML input",
                            exc,
                        )
                        index += 1
                        continue
                    if rings:
                        placemarks.append(_to_placemark(rings, props, index))
                    index += 1

    logger.debug("fiona read %d polygon placemark(s) from %s", len(placemarks), source_name)
    return placemarks


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _exterior_rings(geom: object) -> list[list[tuple[float, float]]]:
    """Collect the exterior ring of every polygon in a GeoJSON-like geometry."""
    if not geom:
        return []

    geom_type = geom.get("type", "")  # type: ignore[attr-defined]

    if geom_type == "Polygon":
        coords = geom.get("coordinates") or []  # type: ignore[attr-defined]
        return [coords_to_tuples(coords[0])] if coords else []

    if geom_type == "MultiPolygon":
        return [
            coords_to_tuples(poly[0])
            for poly in geom.get("coordinates") or []  # type: ignore[attr-defined]
            if poly
        ]

    if geom_type == "GeometryCollection":
        rings: list[list[tuple[float, float]]] = []
        for sub_geom in geom.get("geometries") or []:  # type: ignore[attr-defined]
            rings.extend(_exterior_rings(sub_geom))
        return rings

    return []


def _to_placemark(
    rings: list[list[tuple[float, float]]], props: dict[str, object], index: int
) -> Placemark:
    name = _record_name(props)
    description = str(props.get("Description", "") or props.get("description", "") or "")
    return Placemark(
        name=name,
        description=description.strip(),
        polygons=rings,
        metadata=extract_metadata_from_props(props),
        index=index,
    )


def _record_name(props: dict[str, object]) -> str:
    return str(props.get("Name", "") or props.get("name", "") or "").strip()
