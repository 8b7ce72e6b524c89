"""Tests for the tile-map line codec.

Covers:
- Well-formed lines, with and without trailing newline
- Split on the first space only (tile id repeated inside fields)
- Each malformed-line failure mode names its line and field
- Formatting with shortest round-trip float text
"""

from __future__ import annotations

import pytest

from tile_registry.core.exceptions import TileMapParseError
from tile_registry.models.rectangle import Rectangle
from tile_registry.utils.tile_lines import format_tile_line, parse_tile_line


class TestParseTileLine:
    """Parsing of single lines."""

    def test_valid_line(self) -> None:
        tile_id, rect = parse_tile_line("31TGM x=2.0,y=40.0,w=1.0,h=1.0\n", 1)
        assert tile_id == "31TGM"
        assert rect == Rectangle(2.0, 40.0, 1.0, 1.0)

    def test_no_trailing_newline(self) -> None:
        _, rect = parse_tile_line("31TGM x=2.0,y=40.0,w=1.0,h=1.0")
        assert rect == Rectangle(2.0, 40.0, 1.0, 1.0)

    def test_crlf_line_ending(self) -> None:
        _, rect = parse_tile_line("31TGM x=2.0,y=40.0,w=1.0,h=1.0\r\n")
        assert rect.height == 1.0

    def test_scientific_and_negative_values(self) -> None:
        _, rect = parse_tile_line("198030 x=-1.5E2,y=4.0e-3,w=-0.5,h=1.0E10")
        assert rect == Rectangle(-150.0, 0.004, -0.5, 1e10)

    def test_tile_id_repeated_in_fields_is_only_stripped_once(self) -> None:
        """A numeric tile id that also appears in a value must not be removed from it.

        Historically the id was removed with a global replace, which turned
        ``x=11.0`` into ``x=.0`` for tile ``11``. Only the leading token is
        stripped now.
        """
        tile_id, rect = parse_tile_line("11 x=11.0,y=1.0,w=11.5,h=0.11")
        assert tile_id == "11"
        assert rect == Rectangle(11.0, 1.0, 11.5, 0.11)

    def test_extra_spaces_after_tile_id_are_trimmed(self) -> None:
        _, rect = parse_tile_line("31TGM   x=2.0,y=40.0,w=1.0,h=1.0  ")
        assert rect == Rectangle(2.0, 40.0, 1.0, 1.0)

    def test_missing_space(self) -> None:
        with pytest.raises(TileMapParseError) as exc_info:
            parse_tile_line("31TGMx=2.0,y=40.0,w=1.0,h=1.0", 7)
        assert exc_info.value.line_number == 7
        assert exc_info.value.field == "tile_id"
        assert "Line 7" in str(exc_info.value)

    def test_empty_tile_id(self) -> None:
        with pytest.raises(TileMapParseError) as exc_info:
            parse_tile_line(" x=2.0,y=40.0,w=1.0,h=1.0", 2)
        assert exc_info.value.field == "tile_id"

    def test_missing_height_field(self) -> None:
        with pytest.raises(TileMapParseError) as exc_info:
            parse_tile_line("31TGM x=2.0,y=40.0,w=1.0", 3)
        assert "3 field(s)" in str(exc_info.value)
        assert exc_info.value.line_number == 3

    def test_too_many_fields(self) -> None:
        with pytest.raises(TileMapParseError):
            parse_tile_line("31TGM x=2.0,y=40.0,w=1.0,h=1.0,z=5.0")

    def test_fields_out_of_order(self) -> None:
        with pytest.raises(TileMapParseError) as exc_info:
            parse_tile_line("31TGM y=40.0,x=2.0,w=1.0,h=1.0")
        assert exc_info.value.field == "x"

    def test_non_numeric_value(self) -> None:
        with pytest.raises(TileMapParseError) as exc_info:
            parse_tile_line("31TGM x=2.0,y=forty,w=1.0,h=1.0", 4)
        assert exc_info.value.field == "y"
        assert isinstance(exc_info.value.__cause__, ValueError)

    @pytest.mark.parametrize("value", ["1_0", "1_000.5", "1. 5", " 1.0", "0x10", "1e", "--1"])
    def test_non_decimal_literals_rejected(self, value: str) -> None:
        """Forms float() tolerates but the tile-map grammar never writes."""
        with pytest.raises(TileMapParseError) as exc_info:
            parse_tile_line(f"31TGM x={value},y=40.0,w=1.0,h=1.0", 5)
        assert exc_info.value.field == "x"
        assert exc_info.value.line_number == 5

    @pytest.mark.parametrize("value", ["+1.5", ".5", "5.", "1E+3", "inf", "-inf", "nan"])
    def test_decimal_literal_variants_accepted(self, value: str) -> None:
        _, rect = parse_tile_line(f"31TGM x={value},y=40.0,w=1.0,h=1.0")
        assert repr(rect.x) == repr(float(value))

    def test_empty_value(self) -> None:
        with pytest.raises(TileMapParseError) as exc_info:
            parse_tile_line("31TGM x=2.0,y=40.0,w=,h=1.0")
        assert exc_info.value.field == "w"


class TestFormatTileLine:
    """Rendering of single lines."""

    def test_format(self) -> None:
        line = format_tile_line("31TGM", Rectangle(2.0, 40.0, 1.0, 1.0))
        assert line == "31TGM x=2.0,y=40.0,w=1.0,h=1.0\n"

    def test_integers_render_as_floats(self) -> None:
        line = format_tile_line("31TGM", Rectangle(2, 40, 1, 1))
        assert line == "31TGM x=2.0,y=40.0,w=1.0,h=1.0\n"

    def test_precision_preserved(self) -> None:
        rect = Rectangle(0.1 + 0.2, 1 / 3, -2.220446049250313e-16, 123456789.123456789)
        tile_id, parsed = parse_tile_line(format_tile_line("X", rect))
        assert tile_id == "X"
        assert parsed == rect
