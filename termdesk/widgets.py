# widgets.py
from __future__ import annotations

import logging
from typing import Any, Optional

from . import ansi
from .ansi import Color
from .borders import Border
from .elements import Bounds, UINode
from .events import Event, KeyEvent, Keys
from .geometry import Geometry
from .surface import Surface

logger = logging.getLogger(__name__)


# UIWindow

class UIWindow(UINode):
    """
    Bordered, titled container.

    Keys reach the focused descendant first; only what comes back
    unhandled is checked against the window shortcuts (ESC closes, TAB and
    shift-TAB move focus among the direct children). Closing hides the
    window and hands it back to its parent; the subtree is kept.
    """

    def __init__(self, bounds: Bounds = None, title: str = '', name: Optional[str] = None) -> None:
        super().__init__(bounds, name)
        self.title = title

        # chrome
        self.border: Border = Border.from_name(self.style.border())
        self.border_color: Any = self.style.border_color()
        self.title_color: Any = self.style.get('title-color', Color.BRIGHT_WHITE)

        # window states
        self.closable = True
        self.show_title = True
        self.maximized = False

        # restore cache
        self.saved_geometry: Optional[Geometry] = None

    # Public API

    def set_title(self, title: str) -> 'UIWindow':
        self.title = title
        self.invalidate()
        return self

    def set_border(self, border: Border) -> 'UIWindow':
        self.border = border
        self.invalidate()
        return self

    def set_border_color(self, color: Any) -> 'UIWindow':
        self.border_color = color
        self.invalidate()
        return self

    def set_title_color(self, color: Any) -> 'UIWindow':
        self.title_color = color
        self.invalidate()
        return self

    def set_closable(self, closable: bool) -> 'UIWindow':
        self.closable = closable
        return self

    def set_show_title(self, show: bool) -> 'UIWindow':
        self.show_title = show
        self.invalidate()
        return self

    def close(self) -> bool:
        if not self.closable:
            return False
        self.hide()
        self.on_close()
        self.trigger("close")
        logger.debug(f"[{self.name}] closed")

        parent = self.parent
        if parent is not None:
            parent.child_closed(self)
        return True

    def on_close(self) -> None:
        """ Hook for subclasses, runs after the window is hidden """
        pass

    def maximize(self) -> None:
        parent = self.parent
        if self.maximized or parent is None:
            return
        self.saved_geometry = self.geometry
        self.geometry = Geometry(0, 0, parent.geometry.width, parent.geometry.height)
        self.maximized = True
        self.relayout()
        self.invalidate()

    def restore(self) -> None:
        if self.maximized and self.saved_geometry is not None:
            self.geometry = self.saved_geometry
            self.saved_geometry = None
            self.relayout()
        self.maximized = False
        self.invalidate()

    def content_geometry(self) -> Geometry:
        """ Inside the border, then inset by padding; local to the window """
        inner = Geometry(1, 1, self.geometry.width - 2, self.geometry.height - 2)
        return inner.inset(self.style.padding())

    # Drawing

    def paint(self, surface: Surface) -> None:
        ax, ay = self.get_absolute_position()
        self._draw_content(surface, ax, ay)
        self._draw_frame(surface, ax, ay)
        if self.show_title and self.title:
            self._draw_title(surface, ax, ay)

    def draw_children(self, surface: Surface) -> None:
        """ Children are clipped to the content area """
        if not self.children:
            return

        ax, ay = self.get_absolute_position()
        content = self.content_geometry().move(ax, ay)

        original_clip = surface.get_clip()
        clip = content.intersection(original_clip) if original_clip is not None else content
        if clip is None:
            return

        surface.set_clip(clip)
        try:
            super().draw_children(surface)
        finally:
            surface.set_clip(original_clip)

    def _draw_content(self, surface: Surface, ax: int, ay: int) -> None:
        if not self.style.has('background'):
            return
        inner = Geometry(ax + 1, ay + 1, self.geometry.width - 2, self.geometry.height - 2)
        surface.fill_rect(inner, ' ', ansi.bg_code(self.style.background()))

    def _draw_frame(self, surface: Surface, ax: int, ay: int) -> None:
        width, height = self.geometry.size
        attrs = ansi.fg_code(self.border_color)
        b = self.border

        surface.put(ax, ay, b.top_row(width), attrs)
        for row in range(1, height - 1):
            surface.put(ax, ay + row, b.left, attrs)
            surface.put(ax + width - 1, ay + row, b.right, attrs)
        if height > 1:
            surface.put(ax, ay + height - 1, b.bottom_row(width), attrs)

    def _draw_title(self, surface: Surface, ax: int, ay: int) -> None:
        inner = self.geometry.width - 2
        if inner <= 0:
            return
        label = f" {self.title} "[:inner]
        lead = (inner - len(label)) // 2
        surface.put(ax + 1 + lead, ay, label, ansi.fg_code(self.title_color) + ansi.BOLD)

    # Event Handling

    def dispatch(self, event: Event) -> bool:
        if super().dispatch(event):
            return True
        if not (self.visible and self.enabled) or not isinstance(event, KeyEvent):
            return False

        if event.key == Keys.ESC:
            return self.close() if self.closable else False
        if event.key == Keys.TAB:
            return self.focus_next_child()
        if event.key == Keys.SHIFT_TAB:
            return self.focus_prev_child()
        return False

    def get_metadata(self) -> dict:
        md = super().get_metadata()
        md["title"] = self.title
        md["closable"] = self.closable
        md["maximized"] = self.maximized
        return md
