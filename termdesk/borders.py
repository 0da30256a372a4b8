# borders.py
from __future__ import annotations
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Border:
    """
    Eight border glyphs. Immutable: every `with_*` call returns a new value,
    so presets can be shared and refined freely.

        Border.double().with_top_left('+')
    """
    top: str = '─'
    bottom: str = '─'
    left: str = '│'
    right: str = '│'
    top_left: str = '┌'
    top_right: str = '┐'
    bottom_left: str = '└'
    bottom_right: str = '┘'

    # Builder

    def with_top(self, char: str) -> 'Border':
        return replace(self, top=char)

    def with_bottom(self, char: str) -> 'Border':
        return replace(self, bottom=char)

    def with_left(self, char: str) -> 'Border':
        return replace(self, left=char)

    def with_right(self, char: str) -> 'Border':
        return replace(self, right=char)

    def with_top_left(self, char: str) -> 'Border':
        return replace(self, top_left=char)

    def with_top_right(self, char: str) -> 'Border':
        return replace(self, top_right=char)

    def with_bottom_left(self, char: str) -> 'Border':
        return replace(self, bottom_left=char)

    def with_bottom_right(self, char: str) -> 'Border':
        return replace(self, bottom_right=char)

    # Presets

    @classmethod
    def single(cls) -> 'Border':
        return cls()

    @classmethod
    def double(cls) -> 'Border':
        return cls('═', '═', '║', '║', '╔', '╗', '╚', '╝')

    @classmethod
    def rounded(cls) -> 'Border':
        return cls('─', '─', '│', '│', '╭', '╮', '╰', '╯')

    @classmethod
    def thick(cls) -> 'Border':
        return cls('━', '━', '┃', '┃', '┏', '┓', '┗', '┛')

    @classmethod
    def ascii(cls) -> 'Border':
        return cls('-', '-', '|', '|', '+', '+', '+', '+')

    @classmethod
    def dots(cls) -> 'Border':
        return cls(*('·' * 8))

    @classmethod
    def stars(cls) -> 'Border':
        return cls(*('*' * 8))

    @classmethod
    def none(cls) -> 'Border':
        return cls(*(' ' * 8))

    @classmethod
    def from_name(cls, name: str) -> 'Border':
        """ Preset by name; unknown names fall back to single """
        factory = _PRESETS.get(str(name).strip().lower(), cls.single)
        return factory()

    # Rows

    def top_row(self, width: int) -> str:
        return self.top_left + self.top * max(0, width - 2) + self.top_right

    def bottom_row(self, width: int) -> str:
        return self.bottom_left + self.bottom * max(0, width - 2) + self.bottom_right


_PRESETS = {
    'single': Border.single,
    'double': Border.double,
    'rounded': Border.rounded,
    'thick': Border.thick,
    'ascii': Border.ascii,
    'dots': Border.dots,
    'stars': Border.stars,
    'none': Border.none,
}
