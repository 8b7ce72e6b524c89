"""Data model for a parsed KML placemark.

A Placemark is the mission-neutral output of the KML parsers: the
placemark name, the exterior rings of every polygon it carries, and any
ExtendedData metadata. Mission registries turn it into a tile identifier
and a bounding rectangle.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Placemark:
    """A single polygon-bearing placemark extracted from a KML document.

    Attributes:
        name: Placemark ``<name>`` text, stripped (e.g. ``"31TGM"``).
        description: Placemark ``<description>`` text.
        polygons: Exterior ring of each polygon, as lists of ``(lon, lat)``
            tuples. A MultiGeometry placemark carries several rings.
        metadata: Key-value pairs from ``ExtendedData/Data`` and
            ``ExtendedData/SchemaData/SimpleData`` elements.
        index: Zero-based index of the placemark within the document.
    """

    name: str
    description: str = ""
    polygons: list[list[tuple[float, float]]] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)
    index: int = 0

    @property
    def display_name(self) -> str:
        """Name used in log and error messages."""
        return self.name or f"Placemark {self.index}"

    def metadata_value(self, key: str) -> str:
        """Case-insensitive metadata lookup; empty string when absent."""
        wanted = key.lower()
        for name, value in self.metadata.items():
            if name.lower() == wanted:
                return value
        return ""
