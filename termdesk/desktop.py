# desktop.py
from __future__ import annotations

import logging
import weakref
from typing import TYPE_CHECKING, Dict, List, Optional

from . import ansi
from .elements import UINode
from .events import Event, KeyEvent, Keys
from .geometry import DEFAULT_SCREEN, Geometry
from .surface import Surface
from .widgets import UIWindow

if TYPE_CHECKING:
    from .core import UIApplication

logger = logging.getLogger(__name__)


# ############################################
#
# Desktop
#

class UIDesktop(UINode):
    """
    Window manager root.

    `children` is the z-order (last child is on top). `_windows` keeps the
    registration order and is what window cycling walks; raising a window
    never reorders it. The active window, when there is one, is always the
    top child.
    """

    # key -> method name
    SHORTCUTS: Dict[str, str] = {
        Keys.F6: 'next_window',
        Keys.F5: 'prev_window',
    }

    # cascade layout
    CASCADE_ORIGIN = (5, 2)
    CASCADE_STEP = 3
    CASCADE_SIZE = (60, 20)

    def __init__(self, app: Optional['UIApplication'] = None,
                 geometry: Optional[Geometry] = None, name: str = 'Desktop') -> None:
        super().__init__(geometry or DEFAULT_SCREEN, name)
        self._app           = weakref.ref(app) if app is not None else None
        self._windows       : List[UIWindow] = []
        self._active        : Optional[UIWindow] = None
        self.dirty          = True

    @property
    def app(self) -> Optional['UIApplication']:
        return self._app() if self._app is not None else None

    # Redraw requests

    def invalidate(self) -> None:
        self.dirty = True
        app = self.app
        if app is not None:
            app.request_redraw()

    # Tree

    def add(self, child: UINode) -> 'UIDesktop':
        if child.parent is self:
            # already ours: raise it, registration order stays as it was
            if any(w is child for w in self._windows):
                self.set_active_window(child)
            else:
                child.bring_to_front()
                self._raise_active()
            return self

        super().add(child)
        self._raise_active()
        if child.parent is not self or not isinstance(child, UIWindow):
            return self

        if not any(w is child for w in self._windows):
            self._windows.append(child)
            logger.debug(f"[desktop] registered {child.name} ({len(self._windows)} windows)")
        if self._active is None:
            self.set_active_window(child)
        return self

    def remove(self, child: UINode) -> 'UIDesktop':
        was_active = child is self._active
        super().remove(child)
        self._windows = [w for w in self._windows if w is not child]
        if was_active:
            self._active = None
            self._promote_top()
        return self

    def child_closed(self, child: UINode) -> None:
        if child.parent is self:
            self.remove(child)

    def _raise_active(self) -> None:
        """ New and raised children slot in just below the active window """
        active = self._active
        if active is not None and self.children and self.children[-1] is not active:
            active.bring_to_front()

    def _promote_top(self) -> None:
        for child in reversed(self.children):
            if isinstance(child, UIWindow) and child.visible:
                self.set_active_window(child)
                return
        self.invalidate()

    # Window management

    @property
    def active_window(self) -> Optional[UIWindow]:
        return self._active

    def windows(self) -> List[UIWindow]:
        """ Registered windows in registration order """
        return list(self._windows)

    def window_count(self) -> int:
        return len(self._windows)

    def set_active_window(self, window: UIWindow) -> bool:
        if not any(w is window for w in self._windows):
            return False

        previous = self._active
        if previous is not None and previous is not window:
            previous.blur()

        self._active = window
        window.show()
        window.bring_to_front()
        window.focus()
        logger.debug(f"[desktop] active window is now {window.name}")
        self.invalidate()
        return True

    def close_active_window(self) -> bool:
        window = self._active
        if window is None:
            return False
        # a successful close comes back through child_closed
        if not window.close():
            logger.debug(f"[desktop] {window.name} is not closable, detaching it")
            self.remove(window)
        return True

    def close_all_windows(self) -> None:
        self._active = None
        for window in list(self._windows):
            if not window.close():
                window.hide()
                self.remove(window)
        self.invalidate()

    def next_window(self) -> bool:
        return self._cycle(1)

    def prev_window(self) -> bool:
        return self._cycle(-1)

    def _cycle(self, direction: int) -> bool:
        count = len(self._windows)
        if count <= 1:
            return False

        index = next((i for i, w in enumerate(self._windows) if w is self._active), None)
        if index is None:
            return self.set_active_window(self._windows[0])
        return self.set_active_window(self._windows[(index + direction) % count])

    # Layouts

    def cascade(self) -> None:
        x0, y0 = self.CASCADE_ORIGIN
        width = min(self.CASCADE_SIZE[0], self.geometry.width)
        height = min(self.CASCADE_SIZE[1], self.geometry.height)
        offset = 0
        for window in self._windows:
            window.set_geometry(Geometry(x0 + offset, y0 + offset, width, height))
            window.relayout()
            offset += self.CASCADE_STEP
        self.invalidate()

    def tile_horizontal(self) -> None:
        """ Full-width rows stacked top to bottom """
        count = len(self._windows)
        if count == 0:
            return
        width, height = self.geometry.size
        row = height // count
        for i, window in enumerate(self._windows):
            window.set_geometry(Geometry(0, i * row, width, row))
            window.relayout()
        self.invalidate()

    def tile_vertical(self) -> None:
        """ Full-height columns left to right """
        count = len(self._windows)
        if count == 0:
            return
        width, height = self.geometry.size
        column = width // count
        for i, window in enumerate(self._windows):
            window.set_geometry(Geometry(i * column, 0, column, height))
            window.relayout()
        self.invalidate()

    def resize(self, width: int, height: int) -> None:
        self.geometry = self.geometry.resize(width, height)
        self.relayout()
        logger.info(f"[desktop] resized to {self.geometry.width}x{self.geometry.height}")
        self.invalidate()

    # Drawing

    def paint(self, surface: Surface) -> None:
        if self.style.has('background'):
            surface.fill_rect(self.absolute_geometry(), ' ', ansi.bg_code(self.style.background()))

    # Event Handling

    def dispatch(self, event: Event) -> bool:
        active = self._active
        if active is not None and active.dispatch(event):
            return True

        if isinstance(event, KeyEvent):
            action = self.SHORTCUTS.get(event.key)
            if action is not None:
                return getattr(self, action)()
        return self.on_event(event)

    def get_metadata(self) -> dict:
        md = super().get_metadata()
        md["windows"] = [w.name for w in self._windows]
        md["active"] = self._active.name if self._active is not None else None
        return md
