"""KML parsing for tile-grid ingestion.

Turns a vendor KML tiling-grid document into mission-neutral
``Placemark`` records. The document is validated with lxml first; the
placemarks are then read by the configured backend:

- **lxml** (default): walks the element tree, reads ExtendedData
  ``Data`` and ``SchemaData`` metadata.
- **fiona**: OGR KML driver over an in-memory file. If OGR fails for any
  reason other than invalid tile data, the lxml parser is used instead.

The parsing pipeline is split into focused stages:
- **_validation**: XML/KML check, coordinate bounds, polygon ring
- **_normalization**: raw coord → tuple, metadata extraction (fiona + lxml)
- **_lxml_parser**: default parser using lxml element tree
- **_fiona_parser**: optional parser using fiona/OGR
"""

from __future__ import annotations

import logging

from tile_registry.core.constants import KML_BACKEND_FIONA, KML_BACKEND_LXML, KNOWN_KML_BACKENDS
from tile_registry.kml._constants import (
    KML_NAMESPACE,
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
    MIN_RING_POINTS,
)
from tile_registry.kml._fiona_parser import parse_with_fiona
from tile_registry.kml._lxml_parser import parse_with_lxml
from tile_registry.kml._normalization import (
    coords_to_tuples,
    extract_extended_data_lxml,
    extract_metadata_from_props,
    parse_coordinates_text,
)
from tile_registry.kml._validation import (
    InvalidCoordinateError,
    KmlParseError,
    KmlValidationError,
    validate_coordinates,
    validate_polygon_ring,
    validate_xml,
)
from tile_registry.models.placemark import Placemark

logger = logging.getLogger("tile_registry.kml")

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "KML_NAMESPACE",
    "MAX_LATITUDE",
    "MAX_LONGITUDE",
    "MIN_LATITUDE",
    "MIN_LONGITUDE",
    "MIN_RING_POINTS",
    "InvalidCoordinateError",
    "KmlParseError",
    "KmlValidationError",
    "coords_to_tuples",
    "extract_extended_data_lxml",
    "extract_metadata_from_props",
    "parse_coordinates_text",
    "parse_kml",
    "parse_with_fiona",
    "parse_with_lxml",
    "validate_coordinates",
    "validate_polygon_ring",
    "validate_xml",
]


def parse_kml(
    content: bytes,
    *,
    backend: str = KML_BACKEND_LXML,
    source_name: str = "",
    strict: bool = True,
) -> list[Placemark]:
    """Parse a KML document and extract its polygon placemarks.

    Args:
        content: The raw KML document.
        backend: ``"lxml"`` or ``"fiona"``.
        source_name: Label for log and error messages.
        strict: When false, placemarks with malformed coordinates are logged
            and left out instead of failing the document.

    Returns:
        One ``Placemark`` per polygon-bearing KML Placemark, in document
        order. Empty list if the document has none.

    Raises:
        ValueError: If *backend* is not a known KML backend.
        KmlParseError: If the content is not valid XML or not KML.
        KmlValidationError: If a polygon's coordinates are malformed and
            *strict* is set.
    """
    if backend not in KNOWN_KML_BACKENDS:
        available = ", ".join(sorted(KNOWN_KML_BACKENDS))
        msg = f"Unknown KML backend: {backend!r}. Available: {available}"
        raise ValueError(msg)

    label = source_name or "KML input"
    root = validate_xml(content, label)

    if backend == KML_BACKEND_FIONA:
        try:
            placemarks = parse_with_fiona(content, label, strict=strict)
        except KmlParseError:
            raise
        except Exception as fiona_err:
            logger.warning(
                "Fiona parse failed for %s, trying lxml fallback: %s",
                label,
                fiona_err,
            )
            placemarks = parse_with_lxml(root, label, strict=strict)
    else:
        placemarks = parse_with_lxml(root, label, strict=strict)

    logger.info("Parsed %d polygon placemark(s) from %s", len(placemarks), label)
    return placemarks
