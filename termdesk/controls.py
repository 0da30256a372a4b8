# controls.py
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from . import ansi
from .ansi import Color
from .borders import Border
from .elements import Bounds, UINode
from .events import Event, KeyEvent, Keys
from .geometry import Geometry, Spacing
from .styles import StyleRules
from .surface import Surface
from .text import ScrollOffset, align_text, truncate, wrap_text

logger = logging.getLogger(__name__)


def _state_color(style: StyleRules, prop: str, focused: bool, default: Any, focus_default: Any) -> Any:
    """ `<prop>-focus` wins while focused, then `<prop>`, then the defaults """
    if focused:
        return style.get(f'{prop}-focus', style.get(prop, focus_default))
    return style.get(prop, default)


# ############################################
#
# Label
#

class UILabel(UINode):
    """ Wrapped, aligned text; never takes focus """

    def __init__(self, text: str, bounds: Bounds = None, name: Optional[str] = None) -> None:
        super().__init__(bounds, name)
        self.text = text
        self.focusable = False

    def set_text(self, text: str) -> 'UILabel':
        self.text = text
        self.invalidate()
        return self

    def lines(self) -> List[str]:
        return wrap_text(self.text, self.geometry.width)[:self.geometry.height]

    def paint(self, surface: Surface) -> None:
        ax, ay = self.get_absolute_position()
        attrs = self.style.attributes()
        align = self.style.text_align()
        for row, line in enumerate(self.lines()):
            surface.put(ax, ay + row, align_text(line, align, self.geometry.width), attrs)


# ############################################
#
# Button
#

ClickHandler = Callable[['UIButton'], Any]


class UIButton(UINode):
    """ One-line push button, activated with ENTER or SPACE """

    def __init__(self, label: str, bounds: Bounds = None, on_click: Optional[ClickHandler] = None,
                 name: Optional[str] = None) -> None:
        super().__init__(bounds, name)
        self.label      = label
        self.on_click   = on_click
        self.clicks     = 0

    def set_label(self, label: str) -> 'UIButton':
        self.label = label
        self.invalidate()
        return self

    def set_on_click(self, handler: ClickHandler) -> 'UIButton':
        self.on_click = handler
        return self

    def caption(self) -> str:
        pad = ' ' * Spacing.parse(self.style.get('padding', 1)).left
        content = f"{pad}{self.label}{pad}"
        if self.style.has('border'):
            return f"[ {content} ]"
        return content

    def paint(self, surface: Surface) -> None:
        ax, ay = self.get_absolute_position()
        bg = _state_color(self.style, 'background', self.focused, Color.BLUE, Color.BLUE)
        fg = _state_color(self.style, 'foreground', self.focused, Color.WHITE, Color.BRIGHT_WHITE)
        attrs = ansi.bg_code(bg) + ansi.fg_code(fg)
        if self.focused:
            attrs += ansi.BOLD
        surface.put(ax, ay, self.caption()[:self.geometry.width], attrs)

    def activate(self) -> bool:
        if not self.enabled:
            return False
        self.clicks += 1
        logger.debug(f"[{self.name}] activated")
        if self.on_click is not None:
            self.on_click(self)
        self.invalidate()
        return True

    def on_event(self, event: Event) -> bool:
        if isinstance(event, KeyEvent) and event.key in (Keys.ENTER, Keys.SPACE):
            return self.activate()
        return super().on_event(event)


# ############################################
#
# Panel
#

class UIPanel(UINode):
    """
    Plain container with an optional background and border. Panels are not
    tab stops themselves; focus one of their children directly.
    """

    def __init__(self, bounds: Bounds = None, name: Optional[str] = None) -> None:
        super().__init__(bounds, name)
        self.border: Optional[Border] = Border.from_name(self.style.border()) if self.style.has('border') else None
        self.focusable = False

    def set_border(self, border: Optional[Border]) -> 'UIPanel':
        self.border = border
        self.invalidate()
        return self

    def content_geometry(self) -> Geometry:
        inset = 1 if self.border is not None else 0
        inner = Geometry(inset, inset, self.geometry.width - 2 * inset, self.geometry.height - 2 * inset)
        return inner.inset(self.style.padding())

    def add_text(self, text: str, x: int = 0, y: int = 0) -> 'UIPanel':
        box = self.content_geometry()
        label = UILabel(text, StyleRules(top=y, left=x, width=box.width - x, height=box.height - y))
        return self.add(label)

    def paint(self, surface: Surface) -> None:
        rect = self.absolute_geometry()
        if self.style.has('background'):
            surface.fill_rect(rect, ' ', ansi.bg_code(self.style.background()))
        if self.border is None:
            return

        attrs = ansi.fg_code(self.style.border_color())
        b = self.border
        surface.put(rect.x, rect.y, b.top_row(rect.width), attrs)
        for row in range(1, rect.height - 1):
            surface.put(rect.x, rect.y + row, b.left, attrs)
            surface.put(rect.x + rect.width - 1, rect.y + row, b.right, attrs)
        if rect.height > 1:
            surface.put(rect.x, rect.y + rect.height - 1, b.bottom_row(rect.width), attrs)


# ############################################
#
# ListBox
#

ItemHandler = Callable[[str, int], Any]


class UIListBox(UINode):
    """
    Scrolling list with a single selection. The selection is clamped to the
    items; moves that cannot happen return False.
    """

    def __init__(self, items: Sequence[str], bounds: Bounds = None, name: Optional[str] = None) -> None:
        super().__init__(bounds, name)
        self.items          : List[str] = list(items)
        self.selected_index = 0
        self.scroll         = ScrollOffset()
        self.on_select      : Optional[ItemHandler] = None
        self.on_activate    : Optional[ItemHandler] = None

    # key -> method name
    KEYMAP: Dict[str, str] = {
        Keys.ARROW_UP: 'select_previous',
        Keys.ARROW_DOWN: 'select_next',
        Keys.HOME: 'select_first',
        Keys.END: 'select_last',
        Keys.PAGE_UP: 'page_up',
        Keys.PAGE_DOWN: 'page_down',
        Keys.ENTER: 'activate_selected',
    }

    # Items

    def set_items(self, items: Sequence[str]) -> 'UIListBox':
        self.items = list(items)
        self.selected_index = 0
        self.scroll.reset()
        self.invalidate()
        return self

    def add_item(self, item: str) -> 'UIListBox':
        self.items.append(item)
        self.invalidate()
        return self

    def remove_item(self, index: int) -> 'UIListBox':
        if 0 <= index < len(self.items):
            del self.items[index]
            if self.selected_index >= len(self.items):
                self.selected_index = max(0, len(self.items) - 1)
            self.invalidate()
        return self

    @property
    def selected_item(self) -> Optional[str]:
        if 0 <= self.selected_index < len(self.items):
            return self.items[self.selected_index]
        return None

    # Selection

    def set_selected_index(self, index: int) -> bool:
        if not 0 <= index < len(self.items) or index == self.selected_index:
            return False
        self.selected_index = index
        self._selected()
        return True

    def select_previous(self) -> bool:
        return self.set_selected_index(self.selected_index - 1)

    def select_next(self) -> bool:
        return self.set_selected_index(self.selected_index + 1)

    def select_first(self) -> bool:
        return self.set_selected_index(0)

    def select_last(self) -> bool:
        return self.set_selected_index(len(self.items) - 1)

    def page_up(self) -> bool:
        return self.set_selected_index(max(0, self.selected_index - self.geometry.height))

    def page_down(self) -> bool:
        return self.set_selected_index(min(len(self.items) - 1, self.selected_index + self.geometry.height))

    def activate_selected(self) -> bool:
        item = self.selected_item
        if item is None or self.on_activate is None:
            return False
        self.on_activate(item, self.selected_index)
        return True

    def _selected(self) -> None:
        if self.on_select is not None:
            self.on_select(self.items[self.selected_index], self.selected_index)
        self.invalidate()

    def visible_range(self) -> range:
        top = self.scroll.follow(self.selected_index, self.geometry.height)
        return range(top, min(len(self.items), top + self.geometry.height))

    # Drawing

    def paint(self, surface: Surface) -> None:
        ax, ay = self.get_absolute_position()
        width, height = self.geometry.size
        normal = ansi.bg_code(self.style.background()) + ansi.fg_code(self.style.foreground())
        selected = (ansi.bg_code(self.style.get('selected-background', Color.BLUE))
                    + ansi.fg_code(self.style.get('selected-foreground', Color.BRIGHT_WHITE))
                    + ansi.BOLD)

        top = self.scroll.follow(self.selected_index, height)
        for row in range(height):
            index = top + row
            if index < len(self.items):
                text = truncate(self.items[index], width).ljust(width)
                attrs = selected if index == self.selected_index and self.focused else normal
            else:
                text, attrs = ' ' * width, normal
            surface.put(ax, ay + row, text, attrs)

    # Event Handling

    def on_event(self, event: Event) -> bool:
        if isinstance(event, KeyEvent):
            action = self.KEYMAP.get(event.key)
            if action is not None and getattr(self, action)():
                return True
        return super().on_event(event)


# ############################################
#
# Input
#

TextHandler = Callable[[str], Any]


class UIInput(UINode):
    """ Single-line text field with a cursor and horizontal scrolling """

    def __init__(self, bounds: Bounds = None, value: str = '', name: Optional[str] = None) -> None:
        super().__init__(bounds, name)
        self.value          = value
        self.cursor         = len(value)
        self.scroll         = ScrollOffset()
        self.placeholder    : Optional[str] = None
        self.password       = False
        self.max_length     : Optional[int] = None
        self.on_change      : Optional[TextHandler] = None
        self.on_submit      : Optional[TextHandler] = None

    KEYMAP: Dict[str, str] = {
        Keys.ENTER: 'submit',
        Keys.BACKSPACE: 'backspace',
        Keys.DELETE: 'delete',
        Keys.ARROW_LEFT: 'move_left',
        Keys.ARROW_RIGHT: 'move_right',
        Keys.HOME: 'move_home',
        Keys.END: 'move_end',
    }

    # Value

    def set_value(self, value: str) -> 'UIInput':
        self.value = value
        self.cursor = len(value)
        self.invalidate()
        return self

    def clear(self) -> 'UIInput':
        self.value = ''
        self.cursor = 0
        self.scroll.reset()
        self.invalidate()
        return self

    def set_placeholder(self, placeholder: Optional[str]) -> 'UIInput':
        self.placeholder = placeholder
        self.invalidate()
        return self

    def set_password(self, enabled: bool) -> 'UIInput':
        self.password = enabled
        self.invalidate()
        return self

    def set_max_length(self, length: Optional[int]) -> 'UIInput':
        self.max_length = length
        return self

    def display_value(self) -> str:
        if not self.value and self.placeholder and not self.focused:
            return self.placeholder
        if self.password:
            return '*' * len(self.value)
        return self.value

    # Editing

    def insert(self, text: str) -> bool:
        if self.max_length is not None and len(self.value) + len(text) > self.max_length:
            return False
        self.value = self.value[:self.cursor] + text + self.value[self.cursor:]
        self.cursor += len(text)
        self._changed()
        return True

    def backspace(self) -> bool:
        if self.cursor == 0:
            return False
        self.value = self.value[:self.cursor - 1] + self.value[self.cursor:]
        self.cursor -= 1
        self._changed()
        return True

    def delete(self) -> bool:
        if self.cursor >= len(self.value):
            return False
        self.value = self.value[:self.cursor] + self.value[self.cursor + 1:]
        self._changed()
        return True

    def move_left(self) -> bool:
        return self._move_to(self.cursor - 1)

    def move_right(self) -> bool:
        return self._move_to(self.cursor + 1)

    def move_home(self) -> bool:
        return self._move_to(0)

    def move_end(self) -> bool:
        return self._move_to(len(self.value))

    def submit(self) -> bool:
        if self.on_submit is None:
            return False
        self.on_submit(self.value)
        return True

    def _move_to(self, position: int) -> bool:
        if not 0 <= position <= len(self.value) or position == self.cursor:
            return False
        self.cursor = position
        self.invalidate()
        return True

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change(self.value)
        self.invalidate()

    # Drawing

    def paint(self, surface: Surface) -> None:
        ax, ay = self.get_absolute_position()
        visible = max(1, self.geometry.width - 2)
        bg = _state_color(self.style, 'background', self.focused, Color.BLACK, Color.BRIGHT_BLACK)
        fg = _state_color(self.style, 'foreground', self.focused, Color.WHITE, Color.BRIGHT_WHITE)
        attrs = ansi.bg_code(bg) + ansi.fg_code(fg)

        offset = self.scroll.follow(self.cursor, visible)
        shown = self.display_value()[offset:offset + visible]
        surface.put(ax, ay, f" {shown.ljust(visible)} "[:self.geometry.width], attrs)

        if self.focused and self.enabled:
            column = 1 + self.cursor - offset
            under = surface.char_at(ax + column, ay)
            surface.put(ax + column, ay, under, attrs + ansi.REVERSE)

    # Event Handling

    def on_event(self, event: Event) -> bool:
        if isinstance(event, KeyEvent):
            action = self.KEYMAP.get(event.key)
            if action is not None:
                if getattr(self, action)():
                    return True
            elif event.is_printable():
                return self.insert(event.key)
        return super().on_event(event)
