"""Line codec for the persisted tile-map text format.

Grammar, one tile per line::

    <tile_id> x=<float>,y=<float>,w=<float>,h=<float>

The tile identifier is everything before the first space. Only that
leading token is removed from the line before the fields are split, so a
tile identifier that happens to reappear inside the numeric fields cannot
corrupt them.

Floats are written with ``repr()``, the shortest text that reads back to
the same IEEE-754 double, so a read/write/read cycle is bit-exact.
"""

from __future__ import annotations

import re

from tile_registry.core.constants import (
    FIELD_KEYS,
    FIELD_NAMES,
    FIELD_SEPARATOR,
    TILE_SEPARATOR,
)
from tile_registry.core.exceptions import TileMapParseError
from tile_registry.models.rectangle import Rectangle

# Decimal or exponent literal as written by repr(float), plus inf and nan.
# Rejects the underscores and embedded whitespace that float() tolerates.
_DOUBLE_PATTERN = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def parse_tile_line(line: str, line_number: int = 0) -> tuple[str, Rectangle]:
    """Parse one tile-map line into ``(tile_id, rectangle)``.

    Args:
        line: The line text, with or without its trailing newline.
        line_number: 1-based position used in error messages.

    Raises:
        TileMapParseError: If the separator space is missing, the tile id is
            empty, the field count or a field key is wrong, or a value is
            not a number.
    """
    text = line.rstrip("\r\n")
    tile_id, separator, remainder = text.partition(TILE_SEPARATOR)
    if not separator:
        msg = f"Line {line_number}: missing space between tile id and fields: {text!r}"
        raise TileMapParseError(msg, line_number=line_number, field="tile_id")
    if not tile_id:
        msg = f"Line {line_number}: empty tile id: {text!r}"
        raise TileMapParseError(msg, line_number=line_number, field="tile_id")

    tokens = remainder.strip().split(FIELD_SEPARATOR)
    if len(tokens) != len(FIELD_KEYS):
        msg = (
            f"Line {line_number}: tile '{tile_id}' has {len(tokens)} field(s), "
            f"expected {len(FIELD_KEYS)} (x, y, w, h)"
        )
        raise TileMapParseError(msg, line_number=line_number)

    values: list[float] = []
    for token, key, name in zip(tokens, FIELD_KEYS, FIELD_NAMES, strict=True):
        token = token.strip()
        if not token.startswith(key):
            msg = f"Line {line_number}: tile '{tile_id}' expected field '{key}...', got {token!r}"
            raise TileMapParseError(msg, line_number=line_number, field=name)
        raw = token[len(key) :]
        try:
            values.append(_parse_double(raw))
        except ValueError as exc:
            msg = f"Line {line_number}: tile '{tile_id}' field '{name}' is not a number: {raw!r}"
            raise TileMapParseError(msg, line_number=line_number, field=name) from exc

    x, y, width, height = values
    return tile_id, Rectangle(x, y, width, height)


def format_tile_line(tile_id: str, rectangle: Rectangle) -> str:
    """Render one tile-map line, including the trailing newline."""
    x_key, y_key, w_key, h_key = FIELD_KEYS
    fields = FIELD_SEPARATOR.join(
        (
            f"{x_key}{float(rectangle.x)!r}",
            f"{y_key}{float(rectangle.y)!r}",
            f"{w_key}{float(rectangle.width)!r}",
            f"{h_key}{float(rectangle.height)!r}",
        )
    )
    return f"{tile_id}{TILE_SEPARATOR}{fields}\n"


def _parse_double(text: str) -> float:
    if _DOUBLE_PATTERN.fullmatch(text) is None:
        msg = f"not a decimal floating-point literal: {text!r}"
        raise ValueError(msg)
    return float(text)
