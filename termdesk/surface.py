# surface.py
from __future__ import annotations
from typing import List, Optional

from . import ansi
from .geometry import Geometry


class Surface:
    """
    Character grid back buffer.

    Nodes paint into it with absolute coordinates; writes outside the grid
    or outside the active clip rectangle are dropped. `to_ansi` turns the
    whole grid into one escape-sequence frame.
    """
    __slots__ = ('width', 'height', '_chars', '_attrs', '_clip')

    def __init__(self, width: int, height: int) -> None:
        self.width = max(1, int(width))
        self.height = max(1, int(height))
        self._clip: Optional[Geometry] = None
        self._chars: List[List[str]] = []
        self._attrs: List[List[str]] = []
        self.fill()

    def get_rect(self) -> Geometry:
        return Geometry(0, 0, self.width, self.height)

    def resize(self, width: int, height: int) -> None:
        self.width = max(1, int(width))
        self.height = max(1, int(height))
        self._clip = None
        self.fill()

    # Clipping

    def get_clip(self) -> Optional[Geometry]:
        return self._clip

    def set_clip(self, clip: Optional[Geometry]) -> None:
        self._clip = clip

    def _writable(self, x: int, y: int) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height):
            return False
        return self._clip is None or self._clip.contains(x, y)

    # Painting

    def fill(self, char: str = ' ', attrs: str = '') -> None:
        self._chars = [[char] * self.width for _ in range(self.height)]
        self._attrs = [[attrs] * self.width for _ in range(self.height)]

    def put(self, x: int, y: int, text: str, attrs: str = '') -> int:
        written = 0
        for i, ch in enumerate(text):
            cx = x + i
            if self._writable(cx, y):
                self._chars[y][cx] = ch
                self._attrs[y][cx] = attrs
                written += 1
        return written

    def fill_rect(self, rect: Geometry, char: str = ' ', attrs: str = '') -> None:
        row = char * rect.width
        for dy in range(rect.height):
            self.put(rect.x, rect.y + dy, row, attrs)

    # Inspection

    def char_at(self, x: int, y: int) -> str:
        """ Cell content; outside the grid reads as blank """
        if not (0 <= x < self.width and 0 <= y < self.height):
            return ' '
        return self._chars[y][x]

    def attrs_at(self, x: int, y: int) -> str:
        if not (0 <= x < self.width and 0 <= y < self.height):
            return ''
        return self._attrs[y][x]

    def row_text(self, y: int) -> str:
        return ''.join(self._chars[y])

    def lines(self) -> List[str]:
        return [self.row_text(y) for y in range(self.height)]

    # Output

    def to_ansi(self) -> str:
        out = [ansi.RESET, ansi.CURSOR_HOME]
        for y in range(self.height):
            out.append(ansi.move_cursor(0, y))
            current = None
            for x in range(self.width):
                attrs = self._attrs[y][x]
                if attrs != current:
                    out.append(ansi.RESET + attrs)
                    current = attrs
                out.append(self._chars[y][x])
        out.append(ansi.RESET)
        return ''.join(out)
