"""lxml-based KML parser (default backend).

Walks the element tree and collects every Placemark that carries at least
one Polygon, including polygons nested in MultiGeometry and Placemarks
nested in Folder hierarchies. Label points and other non-polygon
placemarks are ignored.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tile_registry.kml._normalization import (
    extract_extended_data_lxml,
    parse_coordinates_text,
)
from tile_registry.kml._validation import KmlValidationError
from tile_registry.models.placemark import Placemark

if TYPE_CHECKING:
    from lxml.etree import _Element

logger = logging.getLogger("tile_registry.kml")

_RING_PATH = ".//kml:Polygon/kml:outerBoundaryIs/kml:LinearRing/kml:coordinates"


def parse_with_lxml(
    root: _Element, source_name: str = "", *, strict: bool = True
) -> list[Placemark]:
    """Extract polygon placemarks from a parsed KML root element.

    The namespace is taken from the root element, so both KML 2.2 and
    older Google Earth namespaces are accepted.

    Args:
        root: Root ``<kml>`` element.
        source_name: Label for log messages.
        strict: When false, a placemark with malformed coordinate text is
            logged and left out instead of failing the whole document.

    Raises:
        KmlValidationError: If a polygon's coordinate text is malformed and
            *strict* is set.
    """
    from lxml import etree  # type: ignore[attr-defined]

    ns = {"kml": etree.QName(root).namespace or ""}
    label = source_name or "KML input"

    placemarks: list[Placemark] = []
    skipped = 0
    for idx, pm in enumerate(root.iterfind(".//kml:Placemark", ns)):
        name_elem = pm.find("kml:name", ns)
        desc_elem = pm.find("kml:description", ns)
        placemark_name = (name_elem.text or "").strip() if name_elem is not None else ""
        description = (desc_elem.text or "").strip() if desc_elem is not None else ""
        display_name = placemark_name or f"Placemark {idx}"

        try:
            rings = _exterior_rings(pm, ns, display_name)
        except KmlValidationError as exc:
            if strict:
                raise
            logger.warning("Skipping invalid placemark '%s' in %s: %s", display_name, label, exc)
            continue

        if not rings:
            skipped += 1
            continue

        placemarks.append(
            Placemark(
                name=placemark_name,
                description=description,
                polygons=rings,
                metadata=extract_extended_data_lxml(pm, ns),
                index=idx,
            )
        )

    if skipped:
        logger.debug("Ignored %d placemark(s) without polygons in %s", skipped, label)
    return placemarks


def _exterior_rings(
    placemark_elem: _Element, ns: dict[str, str], display_name: str
) -> list[list[tuple[float, float]]]:
    rings: list[list[tuple[float, float]]] = []
    for coords_elem in placemark_elem.iterfind(_RING_PATH, ns):
        ring = parse_coordinates_text(coords_elem.text or "", display_name)
        if ring:
            rings.append(ring)
    return rings
