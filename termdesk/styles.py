# styles.py
from __future__ import annotations
from typing import Any, Dict, Iterator, Optional, Tuple

from . import ansi
from .ansi import Color
from .geometry import Spacing


def parse_size(value: Any, parent_size: int) -> int:
    """ Cells, 'Npx', 'N%' (floored) or 'auto'; anything else falls back to the parent size """
    if isinstance(value, bool):
        return parent_size
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if not isinstance(value, str):
        return parent_size

    text = value.strip()
    try:
        if text.endswith('%'):
            return (parent_size * int(round(float(text[:-1]) * 100))) // 10000
        if text.endswith('px'):
            return int(text[:-2])
        return int(text)
    except ValueError:
        return parent_size


def parse_offset(value: Any, default: Optional[int] = 0) -> Optional[int]:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith('px'):
            text = text[:-2]
        try:
            return int(text)
        except ValueError:
            return default
    return default


class StyleRules:
    """
    Ordered CSS-like property bag.

        StyleRules({'top': 1, 'left': 2, 'width': '50%', 'border': 'double'})

    Every accessor has a default, so a missing or malformed property never
    raises. `merge` is right-biased and returns a new bag.
    """
    __slots__ = ('_rules',)

    def __init__(self, rules: Optional[Dict[str, Any]] = None, **kwargs: Any) -> None:
        self._rules: Dict[str, Any] = dict(rules or {})
        for key, value in kwargs.items():
            self._rules[key.replace('_', '-')] = value

    # Bag access

    def set(self, prop: str, value: Any) -> 'StyleRules':
        self._rules[prop] = value
        return self

    def get(self, prop: str, default: Any = None) -> Any:
        value = self._rules.get(prop)
        return default if value is None else value

    def has(self, prop: str) -> bool:
        return self._rules.get(prop) is not None

    def unset(self, prop: str) -> 'StyleRules':
        self._rules.pop(prop, None)
        return self

    def merge(self, other: 'StyleRules') -> 'StyleRules':
        merged = dict(self._rules)
        merged.update(other._rules)
        return StyleRules(merged)

    def copy(self) -> 'StyleRules':
        return StyleRules(self._rules)

    def all(self) -> Dict[str, Any]:
        return dict(self._rules)

    def __contains__(self, prop: str) -> bool:
        return self.has(prop)

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return iter(self._rules.items())

    def __len__(self) -> int:
        return len(self._rules)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StyleRules):
            return NotImplemented
        return self._rules == other._rules

    # Dimensions

    def width(self, parent_width: int = 120) -> int:
        return parse_size(self.get('width', '100%'), parent_width)

    def height(self, parent_height: int = 30) -> int:
        return parse_size(self.get('height', '100%'), parent_height)

    # Position

    def top(self) -> int:
        return parse_offset(self.get('top', 0))

    def left(self) -> int:
        return parse_offset(self.get('left', 0))

    def right(self) -> Optional[int]:
        return parse_offset(self.get('right'), None) if self.has('right') else None

    def bottom(self) -> Optional[int]:
        return parse_offset(self.get('bottom'), None) if self.has('bottom') else None

    def position(self) -> str:
        return str(self.get('position', 'relative'))

    # Spacing

    def margin(self) -> Spacing:
        return Spacing.parse(self.get('margin', 0))

    def padding(self) -> Spacing:
        return Spacing.parse(self.get('padding', 0))

    # Border

    def border(self) -> str:
        return str(self.get('border', 'single'))

    def border_color(self) -> Any:
        return self.get('border-color', Color.WHITE)

    # Color

    def background(self) -> Any:
        return self.get('background', Color.BLACK)

    def foreground(self) -> Any:
        return self.get('foreground', Color.WHITE)

    def color(self) -> Any:
        return self.foreground()

    # Text

    def font_weight(self) -> str:
        return str(self.get('font-weight', 'normal'))

    def text_align(self) -> str:
        return str(self.get('text-align', 'left'))

    def text_decoration(self) -> str:
        return str(self.get('text-decoration', 'none'))

    # Paint attributes

    def attributes(self, with_background: bool = True) -> str:
        """ Escape prefix for text painted with this style """
        codes = ''
        if with_background and self.has('background'):
            codes += ansi.bg_code(self.background())
        if self.has('foreground'):
            codes += ansi.fg_code(self.foreground())
        if self.font_weight() == 'bold':
            codes += ansi.BOLD
        if self.text_decoration() == 'underline':
            codes += ansi.UNDERLINE
        return codes

    def apply_formatting(self, text: str) -> str:
        codes = ansi.bg_code(self.background()) + ansi.fg_code(self.foreground())
        if self.font_weight() == 'bold':
            codes += ansi.BOLD
        if self.text_decoration() == 'underline':
            codes += ansi.UNDERLINE
        return codes + text + ansi.RESET

    def __repr__(self) -> str:
        body = '; '.join(f"{k}: {v}" for k, v in self._rules.items())
        return '{ ' + body + ' }'
