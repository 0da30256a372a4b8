"""Unit tests for UIWindow painting, clipping, shortcuts and closing."""
from termdesk import ansi
from termdesk.ansi import Color
from termdesk.borders import Border
from termdesk.elements import UINode
from termdesk.events import KeyEvent, Keys
from termdesk.geometry import Geometry
from termdesk.styles import StyleRules
from termdesk.surface import Surface
from termdesk.widgets import UIWindow


class Painter(UINode):
    """Fills its own rectangle with one character."""

    def __init__(self, bounds, char='X', name=None):
        super().__init__(bounds, name)
        self.char = char

    def paint(self, surface):
        surface.fill_rect(self.absolute_geometry(), self.char)


class Grabber(UINode):
    """Focusable child that consumes one key."""

    def __init__(self, name, key):
        super().__init__(Geometry(0, 0, 3, 1), name)
        self.key = key

    def on_event(self, event):
        return event.key == self.key


class TestPaint:

    def test_frame_and_title(self):
        surface = Surface(20, 6)
        UIWindow(Geometry(0, 0, 12, 4), "Hi").draw(surface)
        assert surface.row_text(0)[:12] == "┌─── Hi ───┐"
        assert surface.row_text(1)[:12] == "│          │"
        assert surface.row_text(3)[:12] == "└──────────┘"

    def test_title_is_bold_in_title_color(self):
        surface = Surface(20, 6)
        UIWindow(Geometry(0, 0, 12, 4), "Hi").draw(surface)
        assert surface.attrs_at(5, 0) == Color.BRIGHT_WHITE.fg() + ansi.BOLD

    def test_hidden_title(self):
        surface = Surface(20, 6)
        window = UIWindow(Geometry(0, 0, 12, 4), "Hi").set_show_title(False)
        window.draw(surface)
        assert surface.row_text(0)[:12] == "┌──────────┐"

    def test_long_title_stays_inside_corners(self):
        surface = Surface(20, 6)
        UIWindow(Geometry(0, 0, 8, 3), "A very long title").draw(surface)
        row = surface.row_text(0)
        assert row[0] == "┌" and row[7] == "┐"

    def test_border_from_style(self):
        window = UIWindow(StyleRules(width=10, height=5, border='double', border_color=Color.CYAN))
        assert window.border == Border.double()
        surface = Surface(12, 6)
        window.draw(surface)
        assert surface.row_text(0)[0] == "╔"
        assert surface.attrs_at(0, 0) == Color.CYAN.fg()

    def test_children_are_clipped_to_content(self):
        surface = Surface(20, 6)
        window = UIWindow(Geometry(0, 0, 12, 4), "")
        window.add(Painter(Geometry(1, 1, 30, 5)))
        window.draw(surface)
        assert surface.row_text(1)[:13] == "│XXXXXXXXXX│ "
        assert surface.row_text(2)[:12] == "│XXXXXXXXXX│"
        assert surface.row_text(3)[:12] == "└──────────┘"
        assert surface.get_clip() is None

    def test_clip_nests_with_outer_clip(self):
        surface = Surface(20, 6)
        surface.set_clip(Geometry(0, 0, 5, 6))
        window = UIWindow(Geometry(0, 0, 12, 4), "")
        window.add(Painter(Geometry(1, 1, 30, 5)))
        window.draw(surface)
        assert surface.row_text(1)[:6] == "│XXXX "
        assert surface.get_clip() == Geometry(0, 0, 5, 6)

    def test_hidden_window_paints_nothing(self):
        surface = Surface(20, 6)
        window = UIWindow(Geometry(0, 0, 12, 4), "Hi")
        window.hide()
        window.draw(surface)
        assert surface.lines() == [" " * 20] * 6


class TestLayout:

    def test_content_geometry(self):
        window = UIWindow(Geometry(5, 2, 20, 10))
        assert window.content_geometry() == Geometry(1, 1, 18, 8)

    def test_content_geometry_with_padding(self):
        window = UIWindow(StyleRules(width=20, height=10, padding=1))
        assert window.content_geometry() == Geometry(2, 2, 16, 6)

    def test_style_child_sits_inside_border(self):
        window = UIWindow(Geometry(5, 2, 20, 10))
        child = UINode(StyleRules(top=0, left=0, height=1))
        window.add(child)
        assert child.geometry == Geometry(1, 1, 18, 1)
        assert child.get_absolute_position() == (6, 3)

    def test_maximize_and_restore(self):
        screen = UINode(Geometry(0, 0, 80, 24))
        window = UIWindow(Geometry(5, 5, 20, 10))
        screen.add(window)
        window.maximize()
        assert window.geometry == Geometry(0, 0, 80, 24)
        window.restore()
        assert window.geometry == Geometry(5, 5, 20, 10)
        assert not window.maximized


class TestShortcuts:

    def test_escape_closes(self):
        window = UIWindow(Geometry(0, 0, 10, 5))
        closed = []
        window.add_handler("close", lambda n, e: closed.append(n.name))
        assert window.dispatch(KeyEvent(Keys.ESC))
        assert not window.visible
        assert closed == ["UIWindow"]

    def test_escape_on_non_closable(self):
        window = UIWindow(Geometry(0, 0, 10, 5)).set_closable(False)
        assert not window.dispatch(KeyEvent(Keys.ESC))
        assert window.visible
        assert not window.close()

    def test_focused_child_consumes_escape_first(self):
        window = UIWindow(Geometry(0, 0, 10, 5))
        grabber = Grabber("g", Keys.ESC)
        window.add(grabber)
        grabber.focus()
        assert window.dispatch(KeyEvent(Keys.ESC))
        assert window.visible

    def test_tab_cycles_children(self):
        window = UIWindow(Geometry(0, 0, 10, 5))
        a, b = Grabber("a", None), Grabber("b", None)
        window.add(a)
        window.add(b)
        assert window.dispatch(KeyEvent(Keys.TAB))
        assert window.focused_child() is a
        assert window.dispatch(KeyEvent(Keys.TAB))
        assert window.focused_child() is b
        assert window.dispatch(KeyEvent(Keys.SHIFT_TAB))
        assert window.focused_child() is a

    def test_tab_without_children(self):
        window = UIWindow(Geometry(0, 0, 10, 5))
        assert not window.dispatch(KeyEvent(Keys.TAB))

    def test_close_hook_order(self):
        calls = []

        class Tracked(UIWindow):
            def on_close(self):
                calls.append(("hook", self.visible))

        window = Tracked(Geometry(0, 0, 10, 5))
        window.add_handler("close", lambda n, e: calls.append(("handler", n.visible)))
        assert window.close()
        assert calls == [("hook", False), ("handler", False)]
