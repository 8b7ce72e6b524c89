"""Axis-aligned rectangle used for tile extents and areas of interest.

A rectangle is stored exactly as the source data gives it: an origin
``(x, y)`` at the minimum corner plus a ``width`` and ``height``. Extents are
never normalised, so a rectangle read from a tile map is written back
unchanged even if its width or height is negative.

Geometric semantics:
- ``min_x = x``, ``max_x = x + width`` (likewise for y).
- A rectangle with ``width <= 0`` or ``height <= 0`` is *empty*; an empty
  rectangle intersects nothing.
- Intersection is strict: rectangles that only share an edge or a corner
  (zero-area overlap) do not intersect.
- Union is the smallest rectangle spanning both operands' extents.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tile_registry.core.constants import CornerConvention

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True, slots=True)
class Rectangle:
    """An immutable double-precision rectangle.

    Attributes:
        x: Origin x (longitude or projected X of the minimum corner).
        y: Origin y (latitude or projected Y of the minimum corner).
        width: Extent along x, as given by the source.
        height: Extent along y, as given by the source.
    """

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_bounds(cls, min_x: float, min_y: float, max_x: float, max_y: float) -> Rectangle:
        """Build a rectangle from ``(min_x, min_y, max_x, max_y)`` bounds.

        The tuple order matches shapely's ``geometry.bounds``.
        """
        return cls(min_x, min_y, max_x - min_x, max_y - min_y)

    @classmethod
    def from_corners(
        cls,
        ulx: float,
        uly: float,
        lrx: float,
        lry: float,
        convention: CornerConvention = CornerConvention.LITERAL,
    ) -> Rectangle:
        """Build a rectangle from upper-left and lower-right corners.

        ``LITERAL`` reproduces the historic tile-map arithmetic,
        ``Rectangle(ulx, uly, ulx - lrx, uly - lry)``. With ``lrx > ulx``
        the width is negative and the result is empty.

        ``CORRECTED`` returns the box actually spanned by the two corners,
        anchored at its minimum corner.
        """
        if convention == CornerConvention.LITERAL:
            return cls(ulx, uly, ulx - lrx, uly - lry)
        return cls.from_bounds(min(ulx, lrx), min(uly, lry), max(ulx, lrx), max(uly, lry))

    @classmethod
    def enclosing(cls, rectangles: Iterable[Rectangle]) -> Rectangle | None:
        """Return the union of *rectangles*, or ``None`` if there are none.

        A single rectangle is returned as-is. Extremes are collected over all
        inputs before the result is built, so the outcome does not depend on
        iteration order.
        """
        items = list(rectangles)
        if not items:
            return None
        if len(items) == 1:
            return items[0]
        return cls.from_bounds(
            min(r.min_x for r in items),
            min(r.min_y for r in items),
            max(r.max_x for r in items),
            max(r.max_y for r in items),
        )

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        """Whether the rectangle encloses no area."""
        return self.width <= 0 or self.height <= 0

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """Return ``(min_x, min_y, max_x, max_y)``."""
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    def union(self, other: Rectangle) -> Rectangle:
        """Return the smallest rectangle containing both *self* and *other*."""
        return Rectangle.from_bounds(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def intersects(self, other: Rectangle) -> bool:
        """Whether the two rectangles overlap with a non-zero area."""
        if self.is_empty or other.is_empty:
            return False
        return (
            self.min_x < other.max_x
            and self.max_x > other.min_x
            and self.min_y < other.max_y
            and self.max_y > other.min_y
        )

    def to_dict(self) -> dict[str, float]:
        """Serialise to a plain dict keyed like the tile-map fields."""
        return {"x": self.x, "y": self.y, "w": self.width, "h": self.height}
