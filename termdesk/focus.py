# focus.py
from __future__ import annotations
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .elements import UINode


class FocusRing:
    """
    Focus cycling over the children of one parent.

    A child is eligible when it is visible, enabled and focusable. Cycling
    wraps around and never lands on the node it started from, so a group
    with no other eligible member yields None.
    """
    __slots__ = ('parent',)

    def __init__(self, parent: 'UINode') -> None:
        self.parent = parent

    @staticmethod
    def is_eligible(node: 'UINode') -> bool:
        return node.visible and node.enabled and node.focusable

    def eligible(self) -> List['UINode']:
        return [c for c in self.parent.children if self.is_eligible(c)]

    def current(self) -> Optional['UINode']:
        return self.parent.focused_child()

    def next(self, start: Optional['UINode'] = None) -> Optional['UINode']:
        return self._step(start, 1)

    def prev(self, start: Optional['UINode'] = None) -> Optional['UINode']:
        return self._step(start, -1)

    def first(self) -> Optional['UINode']:
        candidates = self.eligible()
        if not candidates:
            return None
        candidates[0].focus()
        return candidates[0]

    def _step(self, start: Optional['UINode'], direction: int) -> Optional['UINode']:
        siblings = self.parent.children
        start = start if start is not None else self.current()
        if start is None:
            return self.first() if direction > 0 else self._last()

        try:
            index = next(i for i, c in enumerate(siblings) if c is start)
        except StopIteration:
            return None

        count = len(siblings)
        for offset in range(1, count):
            candidate = siblings[(index + direction * offset) % count]
            if self.is_eligible(candidate):
                candidate.focus()
                return candidate
        return None

    def _last(self) -> Optional['UINode']:
        candidates = self.eligible()
        if not candidates:
            return None
        candidates[-1].focus()
        return candidates[-1]
