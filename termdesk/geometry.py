# geometry.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import pygame


# ############################################
#
# Spacing (margin / padding)
#

@dataclass(frozen=True)
class Spacing:
    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0

    @classmethod
    def uniform(cls, value: int) -> 'Spacing':
        return cls(value, value, value, value)

    @classmethod
    def parse(cls, value: Any) -> 'Spacing':
        """ Expand an int or a 1-4 value CSS shorthand string into four sides """
        if isinstance(value, Spacing):
            return value
        if isinstance(value, bool):
            return cls()
        if isinstance(value, int):
            return cls.uniform(value)
        if isinstance(value, (tuple, list)):
            parts = list(value)
        elif isinstance(value, str):
            parts = value.split()
        else:
            return cls()

        try:
            nums = [int(p) for p in parts]
        except (TypeError, ValueError):
            return cls()

        if len(nums) == 1:
            return cls.uniform(nums[0])
        if len(nums) == 2:
            return cls(nums[0], nums[1], nums[0], nums[1])
        if len(nums) == 3:
            return cls(nums[0], nums[1], nums[2], nums[1])
        if len(nums) == 4:
            return cls(nums[0], nums[1], nums[2], nums[3])
        return cls()

    @property
    def horizontal(self) -> int:
        return self.left + self.right

    @property
    def vertical(self) -> int:
        return self.top + self.bottom


# ############################################
#
# Geometry
#

@dataclass(frozen=True)
class Geometry:
    """Rectangle in grid cells. Width and height never drop below 1."""
    x: int = 0
    y: int = 0
    width: int = 1
    height: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, 'x', int(self.x))
        object.__setattr__(self, 'y', int(self.y))
        object.__setattr__(self, 'width', max(1, int(self.width)))
        object.__setattr__(self, 'height', max(1, int(self.height)))

    # Construction

    @classmethod
    def make(cls, x: int, y: int, width: int, height: int) -> 'Geometry':
        return cls(x, y, width, height)

    @classmethod
    def from_points(cls, x1: int, y1: int, x2: int, y2: int) -> 'Geometry':
        """ Two corners in any order, both ends inclusive """
        return cls(
            min(x1, x2),
            min(y1, y2),
            abs(x2 - x1) + 1,
            abs(y2 - y1) + 1,
        )

    @classmethod
    def from_rect(cls, rect: pygame.Rect) -> 'Geometry':
        return cls(rect.x, rect.y, rect.width, rect.height)

    def to_rect(self) -> pygame.Rect:
        return pygame.Rect(self.x, self.y, self.width, self.height)

    # Edges

    @property
    def left(self) -> int:
        return self.x

    @property
    def top(self) -> int:
        return self.y

    @property
    def right(self) -> int:
        return self.x + self.width - 1

    @property
    def bottom(self) -> int:
        return self.y + self.height - 1

    @property
    def center(self) -> Tuple[int, int]:
        return (self.x + self.width // 2, self.y + self.height // 2)

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def area(self) -> int:
        return self.width * self.height

    # Tests

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height

    def intersects(self, other: 'Geometry') -> bool:
        return self.to_rect().colliderect(other.to_rect())

    def intersection(self, other: 'Geometry') -> Optional['Geometry']:
        clipped = self.to_rect().clip(other.to_rect())
        if clipped.width <= 0 or clipped.height <= 0:
            return None
        return Geometry.from_rect(clipped)

    def union(self, other: 'Geometry') -> 'Geometry':
        return Geometry.from_rect(self.to_rect().union(other.to_rect()))

    # Derived rectangles

    def move(self, dx: int, dy: int) -> 'Geometry':
        return Geometry(self.x + dx, self.y + dy, self.width, self.height)

    def moved_to(self, x: int, y: int) -> 'Geometry':
        return Geometry(x, y, self.width, self.height)

    def resize(self, width: int, height: int) -> 'Geometry':
        return Geometry(self.x, self.y, width, height)

    def shrink(self, amount: int) -> 'Geometry':
        return Geometry(
            self.x + amount,
            self.y + amount,
            self.width - amount * 2,
            self.height - amount * 2,
        )

    def expand(self, amount: int) -> 'Geometry':
        return Geometry(
            self.x - amount,
            self.y - amount,
            self.width + amount * 2,
            self.height + amount * 2,
        )

    def inset(self, spacing: Spacing) -> 'Geometry':
        return Geometry(
            self.x + spacing.left,
            self.y + spacing.top,
            self.width - spacing.horizontal,
            self.height - spacing.vertical,
        )

    def __str__(self) -> str:
        return f"Geometry(x={self.x}, y={self.y}, w={self.width}, h={self.height})"


# Fallback box when a node has no parent to resolve against
DEFAULT_SCREEN = Geometry(0, 0, 120, 30)
