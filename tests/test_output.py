"""Unit tests for escape codes, border glyphs and the character surface."""
import pytest

from termdesk import ansi
from termdesk.ansi import Color
from termdesk.borders import Border
from termdesk.geometry import Geometry
from termdesk.surface import Surface


class TestAnsi:
    """Escape code lookup."""

    def test_cursor_is_one_based(self):
        assert ansi.move_cursor(0, 0) == "\x1b[1;1H"
        assert ansi.move_cursor(9, 4) == "\x1b[5;10H"

    def test_base_and_bright_colors(self):
        assert Color.RED.fg() == "\x1b[31m"
        assert Color.RED.bg() == "\x1b[41m"
        assert Color.BRIGHT_WHITE.fg() == "\x1b[97m"
        assert Color.GRAY.fg() == "\x1b[38;5;245m"

    @pytest.mark.parametrize("rgb, index", [
        ((0, 0, 0), 16),
        ((255, 255, 255), 231),
        ((255, 0, 0), 196),
        ((0, 128, 255), 16 + 6 * 2 + 5),
    ])
    def test_rgb_quantisation(self, rgb, index):
        assert ansi.rgb_to_index(*rgb) == index

    def test_hex(self):
        assert ansi.hex_to_rgb("#ff8000") == (255, 128, 0)
        assert ansi.hex_color("ff0000") == "\x1b[38;5;196m"
        assert ansi.hex_background("#000000") == "\x1b[48;5;16m"

    def test_color_tokens(self):
        assert ansi.fg_code("bright-cyan") == Color.BRIGHT_CYAN.fg()
        assert ansi.bg_code(Color.BLUE) == "\x1b[44m"
        assert ansi.fg_code(200) == "\x1b[38;5;200m"
        assert ansi.fg_code((255, 0, 0)) == "\x1b[38;5;196m"
        assert ansi.bg_code((255, 0, 0)) == "\x1b[48;5;196m"
        assert ansi.bg_code("#000000") == ansi.hex_background("#000000")
        assert ansi.fg_code("#ff0000") == ansi.hex_color("#ff0000")

    def test_unknown_token_is_empty(self):
        assert ansi.fg_code("no-such-color") == ""
        assert ansi.bg_code(None) == ""
        assert ansi.fg_code("#nothex") == ""


class TestBorder:
    """Glyph sets are immutable values."""

    def test_with_returns_new_value(self):
        base = Border.double()
        changed = base.with_top_left('+')
        assert changed.top_left == '+'
        assert base.top_left == '╔'
        assert changed.top == base.top

    def test_from_name_falls_back_to_single(self):
        assert Border.from_name('rounded') == Border.rounded()
        assert Border.from_name('DOUBLE') == Border.double()
        assert Border.from_name('wavy') == Border.single()

    def test_rows(self):
        b = Border.ascii()
        assert b.top_row(5) == "+---+"
        assert b.bottom_row(5) == "+---+"

    def test_rows_never_shorter_than_corners(self):
        assert Border.single().top_row(1) == "┌┐"
        assert Border.double().bottom_row(2) == "╚╝"


class TestSurface:
    """Back buffer writes, clipping and serialisation."""

    def test_put_clips_to_grid(self):
        s = Surface(5, 2)
        assert s.put(3, 0, "abcd") == 2
        assert s.row_text(0) == "   ab"
        assert s.put(-2, 1, "xyz") == 1
        assert s.row_text(1) == "z    "

    def test_put_outside_rows_is_dropped(self):
        s = Surface(5, 2)
        assert s.put(0, 5, "abc") == 0

    def test_clip_rectangle(self):
        s = Surface(10, 3)
        s.set_clip(Geometry(2, 1, 3, 1))
        s.put(0, 1, "0123456789")
        s.put(0, 0, "xxxx")
        assert s.row_text(1) == "  234     "
        assert s.row_text(0) == " " * 10
        s.set_clip(None)
        s.put(0, 0, "x")
        assert s.char_at(0, 0) == "x"

    def test_fill_rect_and_attrs(self):
        s = Surface(4, 4)
        s.fill_rect(Geometry(1, 1, 2, 2), '#', 'A')
        assert s.lines() == ["    ", " ## ", " ## ", "    "]
        assert s.attrs_at(1, 1) == 'A'
        assert s.attrs_at(0, 0) == ''

    def test_out_of_range_reads(self):
        s = Surface(2, 2)
        assert s.char_at(5, 5) == ' '
        assert s.attrs_at(-1, 0) == ''

    def test_resize_clears(self):
        s = Surface(2, 2)
        s.put(0, 0, "ab")
        s.resize(3, 1)
        assert s.lines() == ["   "]

    def test_to_ansi_positions_each_row(self):
        s = Surface(3, 2)
        s.put(0, 0, "hi", Color.RED.fg())
        frame = s.to_ansi()
        assert frame.startswith(ansi.RESET + ansi.CURSOR_HOME)
        assert ansi.move_cursor(0, 1) in frame
        assert Color.RED.fg() + "hi" in frame
        assert frame.endswith(ansi.RESET)
