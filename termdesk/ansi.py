# ansi.py
from __future__ import annotations
from enum import Enum
from typing import Any, Optional, Tuple

import pygame


ESC = "\x1b"
CSI = ESC + "["

RESET = CSI + "0m"
BOLD = CSI + "1m"
UNDERLINE = CSI + "4m"
REVERSE = CSI + "7m"
CLEAR_SCREEN = CSI + "2J"
CLEAR_LINE = CSI + "K"
CURSOR_HOME = CSI + "H"
HIDE_CURSOR = CSI + "?25l"
SHOW_CURSOR = CSI + "?25h"
ALT_SCREEN_ON = CSI + "?1049h"
ALT_SCREEN_OFF = CSI + "?1049l"


class Color(Enum):
    BLACK = 'black'
    RED = 'red'
    GREEN = 'green'
    YELLOW = 'yellow'
    BLUE = 'blue'
    MAGENTA = 'magenta'
    CYAN = 'cyan'
    WHITE = 'white'

    BRIGHT_BLACK = 'bright_black'
    BRIGHT_RED = 'bright_red'
    BRIGHT_GREEN = 'bright_green'
    BRIGHT_YELLOW = 'bright_yellow'
    BRIGHT_BLUE = 'bright_blue'
    BRIGHT_MAGENTA = 'bright_magenta'
    BRIGHT_CYAN = 'bright_cyan'
    BRIGHT_WHITE = 'bright_white'

    # 256-color grays
    GRAY_DARK = 'gray_dark'
    GRAY = 'gray'
    GRAY_LIGHT = 'gray_light'

    def fg(self) -> str:
        return CSI + _SGR[self][0] + "m"

    def bg(self) -> str:
        return CSI + _SGR[self][1] + "m"


_BASE = ['black', 'red', 'green', 'yellow', 'blue', 'magenta', 'cyan', 'white']

_SGR = {}
for _i, _name in enumerate(_BASE):
    _SGR[Color(_name)] = (str(30 + _i), str(40 + _i))
    _SGR[Color('bright_' + _name)] = (str(90 + _i), str(100 + _i))
_SGR[Color.GRAY_DARK] = ("38;5;235", "48;5;235")
_SGR[Color.GRAY] = ("38;5;245", "48;5;245")
_SGR[Color.GRAY_LIGHT] = ("38;5;250", "48;5;250")


# Cursor

def move_cursor(x: int, y: int) -> str:
    """ Zero-based grid cell to the terminal's one-based row;col form """
    return f"{CSI}{y + 1};{x + 1}H"


# 256 palette

def rgb_to_index(r: int, g: int, b: int) -> int:
    """ Quantise RGB onto the 6x6x6 cube of the 256-color palette """
    r, g, b = (max(0, min(255, int(c))) for c in (r, g, b))
    return 16 + 36 * (r * 5 // 255) + 6 * (g * 5 // 255) + (b * 5 // 255)


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    c = pygame.Color('#' + value.strip().lstrip('#'))
    return (c.r, c.g, c.b)


def index_fg(index: int) -> str:
    return f"{CSI}38;5;{int(index)}m"


def index_bg(index: int) -> str:
    return f"{CSI}48;5;{int(index)}m"


def rgb(r: int, g: int, b: int) -> str:
    return index_fg(rgb_to_index(r, g, b))


def rgb_background(r: int, g: int, b: int) -> str:
    return index_bg(rgb_to_index(r, g, b))


def hex_color(value: str) -> str:
    return rgb(*hex_to_rgb(value))


def hex_background(value: str) -> str:
    return rgb_background(*hex_to_rgb(value))


# Token lookup

def _rgb_of(token: Any) -> Optional[Tuple[int, int, int]]:
    """ RGB triple for a tuple or '#rrggbb' token; None for anything else """
    if isinstance(token, (tuple, list)) and len(token) == 3:
        return (int(token[0]), int(token[1]), int(token[2]))
    if isinstance(token, str) and token.startswith('#'):
        try:
            return hex_to_rgb(token)
        except ValueError:
            return None
    return None


def to_color(token: Any) -> Optional[Color]:
    if isinstance(token, Color):
        return token
    if isinstance(token, str):
        try:
            return Color(token.strip().lower().replace('-', '_').replace(' ', '_'))
        except ValueError:
            return None
    return None


def fg_code(token: Any) -> str:
    """ Foreground escape for a color token; unknown tokens yield an empty string """
    color = to_color(token)
    if color is not None:
        return color.fg()
    if isinstance(token, int) and not isinstance(token, bool):
        return index_fg(max(0, min(255, token)))
    if _rgb_of(token) is None:
        return ""
    return hex_color(token) if isinstance(token, str) else rgb(*token)


def bg_code(token: Any) -> str:
    color = to_color(token)
    if color is not None:
        return color.bg()
    if isinstance(token, int) and not isinstance(token, bool):
        return index_bg(max(0, min(255, token)))
    if _rgb_of(token) is None:
        return ""
    return hex_background(token) if isinstance(token, str) else rgb_background(*token)
