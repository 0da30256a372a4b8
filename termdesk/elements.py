# elements.py
from __future__ import annotations

import logging
import weakref
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .events import Event, KeyEvent
from .focus import FocusRing
from .geometry import DEFAULT_SCREEN, Geometry
from .layout import content_box, resolve
from .styles import StyleRules
from .surface import Surface

logger = logging.getLogger(__name__)

Bounds = Union[Geometry, StyleRules, None]
Handler = Callable[['UINode', Optional[Event]], Any]

EVENT_TYPES = ("focus", "blur", "keypress", "close")


# ############################################
#
# Element Chassis
#

class UIChassis:
    __slots__ = ('name', 'geometry', 'style', '_parent', '_style_built', 'children',
                 'visible', 'enabled', 'focused', 'focusable', 'events', '__weakref__')

    def __init__(self, bounds: Bounds = None, name: Optional[str] = None) -> None:
        self.name           = name or self.__class__.__name__

        # geometry (local to the parent), either given or resolved from style
        if isinstance(bounds, Geometry):
            self.geometry       = bounds
            self.style          = StyleRules()
            self._style_built   = False
        elif bounds is None or isinstance(bounds, StyleRules):
            self.style          = bounds if bounds is not None else StyleRules()
            self.geometry       = resolve(self.style, DEFAULT_SCREEN)
            self._style_built   = True
        else:
            raise TypeError(f"{self.name}: expected Geometry or StyleRules, got {type(bounds).__name__}")

        # structures
        self._parent        : Optional[weakref.ReferenceType] = None
        self.children       : List['UINode'] = []
        # states
        self.visible        = True
        self.enabled        = True
        self.focused        = False
        self.focusable      = True
        # event handlers
        self.events         : Dict[str, List[Handler]] = {event: [] for event in EVENT_TYPES}

    # Core routines

    def draw(self, surface: Surface) -> None:
        if not self.visible:
            return
        self.paint(surface)
        self.draw_children(surface)

    def paint(self, surface: Surface) -> None:
        """ Paint this node only; children are drawn afterwards by draw() """
        pass

    def draw_children(self, surface: Surface) -> None:
        # later children paint over earlier ones
        for child in list(self.children):
            if child.visible:
                child.draw(surface)

    # Event Handlers

    def add_handler(self, event_type: str, handler: Handler) -> None:
        if event_type in self.events:
            self.events[event_type].append(handler)

    def remove_handler(self, event_type: str, handler: Handler) -> None:
        if event_type in self.events:
            self.events[event_type] = [h for h in self.events[event_type] if h != handler]

    def trigger(self, event_type: str, event: Optional[Event] = None) -> None:
        for handler in list(self.events.get(event_type, ())):
            handler(self, event)

    # Geometry

    @property
    def parent(self) -> Optional['UINode']:
        return self._parent() if self._parent is not None else None

    def get_absolute_position(self) -> Tuple[int, int]:
        # walked every time so a resized ancestor is always reflected
        x, y = self.geometry.x, self.geometry.y
        node = self.parent
        while node is not None:
            x += node.geometry.x
            y += node.geometry.y
            node = node.parent
        return (x, y)

    def absolute_geometry(self) -> Geometry:
        x, y = self.get_absolute_position()
        return self.geometry.moved_to(x, y)

    def content_geometry(self) -> Geometry:
        """ Inset drawing area for children, in this node's local space """
        return content_box(self.geometry, self.style)

    def resolve_geometry(self, parent_box: Optional[Geometry] = None) -> Geometry:
        if self._style_built:
            if parent_box is None:
                parent = self.parent
                parent_box = parent.content_geometry() if parent is not None else DEFAULT_SCREEN
            self.geometry = resolve(self.style, parent_box)
        return self.geometry

    def contains_point(self, x: int, y: int) -> bool:
        return self.visible and self.absolute_geometry().contains(x, y)

    @property
    def position(self) -> Tuple[int, int]:
        return self.geometry.position

    @property
    def size(self) -> Tuple[int, int]:
        return self.geometry.size


# ############################################
#
# Node Class
#

class UINode(UIChassis):
    """
    Element of the owning UI tree.

    Children are owned through `children`; the parent is only reachable
    through a weak reference, so a detached subtree never keeps its former
    ancestors alive. Focus is tracked per sibling group and events travel
    down the focus path before any ancestor gets a turn.
    """

    # Tree

    def add(self, child: 'UINode') -> 'UINode':
        if child is self or child.is_ancestor_of(self):
            logger.warning(f"[{self.name}] refusing to parent {child.name}: would create a cycle")
            return self

        previous = child.parent
        if previous is not None:
            previous.remove(child)

        self.children.append(child)
        child._parent = weakref.ref(self)
        child.resolve_geometry(self.content_geometry())
        logger.debug(f"[{self.name}] parenting {child.name} at {child.geometry}")
        self.invalidate()
        return self

    def remove(self, child: 'UINode') -> 'UINode':
        if not any(c is child for c in self.children):
            return self
        self.children = [c for c in self.children if c is not child]
        child._parent = None
        child.blur()
        logger.debug(f"[{self.name}] released {child.name}")
        self.invalidate()
        return self

    def remove_all(self) -> 'UINode':
        for child in self.children:
            child._parent = None
            child.blur()
        self.children = []
        self.invalidate()
        return self

    def root(self) -> 'UINode':
        """ Traverse up stream to the tree root """
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def is_ancestor_of(self, node: 'UINode') -> bool:
        current = node.parent
        while current is not None:
            if current is self:
                return True
            current = current.parent
        return False

    def find_child(self, name: str) -> Optional['UINode']:
        """ Depth-first, pre-order; the first match wins when names repeat """
        for child in self.children:
            if child.name == name:
                return child
            found = child.find_child(name)
            if found is not None:
                return found
        return None

    def walk(self):
        for child in self.children:
            yield child
            yield from child.walk()

    # Redraw requests

    def invalidate(self) -> None:
        """ Ask for a repaint on the next frame; forwarded up to the root """
        parent = self.parent
        if parent is not None:
            parent.invalidate()

    def child_closed(self, child: 'UINode') -> None:
        """ Hook for containers that react to a child closing itself """
        pass

    # Focus

    def focus(self) -> None:
        parent = self.parent
        if parent is not None:
            parent.deactivate(self)
        if not self.focused:
            self.focused = True
            self.trigger("focus")
            self.invalidate()

    def blur(self) -> None:
        if self.focused:
            self.focused = False
            self.trigger("blur")
            self.invalidate()

    def deactivate(self, keep: Optional['UINode'] = None) -> None:
        """ Blur every child except `keep` """
        for child in self.children:
            if child is not keep and child.focused:
                child.blur()

    def focused_child(self) -> Optional['UINode']:
        for child in self.children:
            if child.focused:
                return child
        return None

    def focus_next(self) -> bool:
        parent = self.parent
        if parent is None:
            return False
        return FocusRing(parent).next(self) is not None

    def focus_prev(self) -> bool:
        parent = self.parent
        if parent is None:
            return False
        return FocusRing(parent).prev(self) is not None

    def focus_next_child(self) -> bool:
        return FocusRing(self).next() is not None

    def focus_prev_child(self) -> bool:
        return FocusRing(self).prev() is not None

    # Event Handling

    def dispatch(self, event: Event) -> bool:
        if not (self.visible and self.enabled):
            return False
        child = self.focused_child()
        if child is not None and child.dispatch(event):
            return True
        return self.on_event(event)

    def on_event(self, event: Event) -> bool:
        if isinstance(event, KeyEvent) and self.events["keypress"]:
            self.trigger("keypress", event)
        return event.handled

    # State

    def show(self) -> 'UINode':
        if not self.visible:
            self.visible = True
            self.invalidate()
        return self

    def hide(self) -> 'UINode':
        if self.visible:
            self.visible = False
            self.invalidate()
        return self

    def enable(self) -> 'UINode':
        if not self.enabled:
            self.enabled = True
            self.invalidate()
        return self

    def disable(self) -> 'UINode':
        if self.enabled:
            self.enabled = False
            self.invalidate()
        return self

    def set_name(self, name: str) -> 'UINode':
        self.name = name
        return self

    # Bounds & Style

    def set_geometry(self, geometry: Geometry) -> 'UINode':
        """ Place explicitly; later re-parenting keeps this geometry """
        self.geometry = geometry
        self._style_built = False
        self.invalidate()
        return self

    def set_style(self, style: StyleRules) -> 'UINode':
        """ Re-style and re-resolve against the parent's content box """
        self.style = style
        self._style_built = True
        self.resolve_geometry()
        self.invalidate()
        return self

    def relayout(self) -> None:
        """ Re-resolve style-built descendants after this node changed size """
        box = self.content_geometry()
        for child in self.children:
            child.resolve_geometry(box)
            child.relayout()

    # Z-Order controls

    def bring_to_front(self) -> None:
        parent = self.parent
        if parent is None:
            return
        parent.children = [c for c in parent.children if c is not self] + [self]
        parent.invalidate()

    def send_to_back(self) -> None:
        parent = self.parent
        if parent is None:
            return
        parent.children = [self] + [c for c in parent.children if c is not self]
        parent.invalidate()

    # Metadata

    def get_metadata(self) -> dict:
        metadata = {
            "name": self.name,
            "type": self.__class__.__name__,
            "x": self.geometry.x,
            "y": self.geometry.y,
            "width": self.geometry.width,
            "height": self.geometry.height,
            "visible": self.visible,
            "enabled": self.enabled,
            "focused": self.focused,
            "length": len(self.children),
            "container": [c.name for c in self.children],
        }
        parent = self.parent
        if parent is not None:
            metadata["parent"] = parent.name
        return metadata

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__},name={self.name},geometry={self.geometry}>"
