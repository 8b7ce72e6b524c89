"""Validation helpers for KML parsing.

Responsibilities:
- XML structure and KML namespace validation
- Coordinate bounds checking (WGS 84)
- Polygon ring structure validation (distinct point count)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tile_registry.core.exceptions import ParseError
from tile_registry.kml._constants import (
    KML_NAMESPACE,
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
    MIN_RING_POINTS,
)

if TYPE_CHECKING:
    from lxml.etree import _Element

logger = logging.getLogger("tile_registry.kml")


# ---------------------------------------------------------------------------
# Exceptions (public API, re-exported from __init__)
# ---------------------------------------------------------------------------


class KmlParseError(ParseError):
    """Raised when a KML document cannot be parsed."""

    default_stage = "ingest_kml"
    default_code = "KML_PARSE_FAILED"


class KmlValidationError(KmlParseError):
    """Raised when a KML document is well-formed but carries invalid tile data."""

    default_code = "KML_VALIDATION_FAILED"


class InvalidCoordinateError(KmlValidationError):
    """Raised when coordinates are outside valid WGS 84 bounds."""

    default_code = "KML_COORDINATE_INVALID"


# ---------------------------------------------------------------------------
# XML / KML namespace validation
# ---------------------------------------------------------------------------


def validate_xml(content: bytes, source_name: str = "") -> _Element:
    """Check that *content* is well-formed XML with a KML root element.

    Returns:
        The parsed root element, so callers do not parse twice.

    Raises:
        KmlParseError: If the content is empty, not valid XML, or not KML.
    """
    from lxml import etree  # type: ignore[attr-defined]

    label = source_name or "KML input"

    if not content.strip():
        msg = f"{label} is empty"
        raise KmlParseError(msg)

    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)
    try:
        root = etree.fromstring(content, parser=parser)
    except etree.XMLSyntaxError as exc:
        msg = f"{label} is not valid XML: {exc}"
        raise KmlParseError(msg) from exc

    qname = etree.QName(root)
    if qname.localname != "kml" or not qname.namespace:
        msg = f"{label} is not a KML document: root element is <{root.tag}>"
        raise KmlParseError(msg)
    if qname.namespace != KML_NAMESPACE:
        logger.info("%s uses non-standard KML namespace %s", label, qname.namespace)

    return root


# ---------------------------------------------------------------------------
# Coordinate validation
# ---------------------------------------------------------------------------


def validate_coordinates(coords: list[tuple[float, float]], placemark_name: str) -> None:
    """Validate that all coordinates are within WGS 84 bounds.

    Raises:
        InvalidCoordinateError: If any coordinate is out of bounds.
    """
    for lon, lat in coords:
        if not (MIN_LONGITUDE <= lon <= MAX_LONGITUDE):
            msg = (
                f"Longitude {lon} out of WGS 84 range [{MIN_LONGITUDE}, {MAX_LONGITUDE}] "
                f"in Placemark '{placemark_name}'"
            )
            raise InvalidCoordinateError(msg)
        if not (MIN_LATITUDE <= lat <= MAX_LATITUDE):
            msg = (
                f"Latitude {lat} out of WGS 84 range [{MIN_LATITUDE}, {MAX_LATITUDE}] "
                f"in Placemark '{placemark_name}'"
            )
            raise InvalidCoordinateError(msg)


# ---------------------------------------------------------------------------
# Polygon ring validation
# ---------------------------------------------------------------------------


def validate_polygon_ring(
    coords: list[tuple[float, float]], placemark_name: str
) -> list[tuple[float, float]]:
    """Validate a polygon ring has enough distinct points and close it.

    Returns the (possibly auto-closed) coordinate list.

    Raises:
        KmlValidationError: If the ring has fewer than 3 distinct points.
    """
    if len(set(coords)) < MIN_RING_POINTS:
        msg = (
            f"Polygon ring has fewer than {MIN_RING_POINTS} distinct points "
            f"in Placemark '{placemark_name}'"
        )
        raise KmlValidationError(msg)

    if coords[0] != coords[-1]:
        logger.debug("Auto-closing unclosed ring in Placemark '%s'", placemark_name)
        coords = [*coords, coords[0]]

    return coords
