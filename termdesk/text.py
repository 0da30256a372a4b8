# text.py
from __future__ import annotations
from typing import List


def wrap_text(text: str, width: int) -> List[str]:
    """
    Word wrap each paragraph to `width` cells. A single word longer than
    the width is left on its own line; painting clips it.
    """
    width = max(1, width)
    lines: List[str] = []
    for paragraph in text.split("\n"):
        if len(paragraph) <= width:
            lines.append(paragraph)
            continue

        current = ''
        for word in paragraph.split(' '):
            candidate = f"{current} {word}" if current else word
            if len(candidate) <= width:
                current = candidate
            else:
                if current:
                    lines.append(current)
                current = word
        if current:
            lines.append(current)
    return lines


def align_text(text: str, align: str, width: int) -> str:
    pad = max(0, width - len(text))
    if align == 'center':
        return ' ' * (pad // 2) + text
    if align == 'right':
        return ' ' * pad + text
    return text


def truncate(text: str, width: int, ellipsis: str = '...') -> str:
    if len(text) <= width:
        return text
    if width <= len(ellipsis):
        return text[:max(0, width)]
    return text[:width - len(ellipsis)] + ellipsis


class ScrollOffset:
    """
    First visible index of a window of `visible` rows (or columns) that has
    to keep one position in view.
    """
    __slots__ = ('offset',)

    def __init__(self, offset: int = 0) -> None:
        self.offset = max(0, offset)

    def follow(self, position: int, visible: int) -> int:
        visible = max(1, visible)
        if position >= self.offset + visible:
            self.offset = position - visible + 1
        if position < self.offset:
            self.offset = max(0, position)
        return self.offset

    def reset(self) -> None:
        self.offset = 0
