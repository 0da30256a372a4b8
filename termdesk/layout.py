# layout.py
from __future__ import annotations
from typing import Optional

from .geometry import DEFAULT_SCREEN, Geometry
from .styles import StyleRules


def resolve(rules: StyleRules, parent: Optional[Geometry] = None) -> Geometry:
    """
    Resolve style rules against a containing box.

    The result lives in the same coordinate space as `parent`. Setting both
    edges of an axis (`left` + `right`, `top` + `bottom`) derives the size
    on that axis and ignores any explicit width/height. Margin is applied
    after sizing; padding is left to `content_box`.
    """
    parent = parent or DEFAULT_SCREEN

    left = rules.left()
    top = rules.top()

    right = rules.right()
    if right is not None:
        width = parent.width - left - right
    else:
        width = rules.width(parent.width)

    bottom = rules.bottom()
    if bottom is not None:
        height = parent.height - top - bottom
    else:
        height = rules.height(parent.height)

    margin = rules.margin()
    x = parent.x + left + margin.left
    y = parent.y + top + margin.top
    width -= margin.horizontal
    height -= margin.vertical

    # Geometry clamps the size to at least one cell
    return Geometry(x, y, width, height)


def content_box(geometry: Geometry, rules: StyleRules) -> Geometry:
    """ Padding-inset drawing area, in the box's own local space """
    local = Geometry(0, 0, geometry.width, geometry.height)
    return local.inset(rules.padding())
