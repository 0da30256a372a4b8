# events.py
from __future__ import annotations
from typing import Dict, Optional, Union


class Keys:
    """ Logical key identities produced by KeyEvent normalisation """
    ESC = "\x1b"
    TAB = "\t"
    SHIFT_TAB = "\x1b[Z"
    ENTER = "\n"
    BACKSPACE = "\x7f"
    SPACE = " "

    ARROW_UP = "\x1b[A"
    ARROW_DOWN = "\x1b[B"
    ARROW_RIGHT = "\x1b[C"
    ARROW_LEFT = "\x1b[D"
    HOME = "\x1b[H"
    END = "\x1b[F"
    INSERT = "\x1b[2~"
    DELETE = "\x1b[3~"
    PAGE_UP = "\x1b[5~"
    PAGE_DOWN = "\x1b[6~"

    F1 = "\x1bOP"
    F2 = "\x1bOQ"
    F3 = "\x1bOR"
    F4 = "\x1bOS"
    F5 = "\x1b[15~"
    F6 = "\x1b[17~"
    F7 = "\x1b[18~"
    F8 = "\x1b[19~"
    F9 = "\x1b[20~"
    F10 = "\x1b[21~"
    F11 = "\x1b[23~"
    F12 = "\x1b[24~"

    CTRL_C = "\x03"
    CTRL_D = "\x04"


# Alternate encodings terminals send for the same key
_ALIASES: Dict[str, str] = {
    "\r": Keys.ENTER,
    "\r\n": Keys.ENTER,
    "\x08": Keys.BACKSPACE,
    "\x1bOA": Keys.ARROW_UP,
    "\x1bOB": Keys.ARROW_DOWN,
    "\x1bOC": Keys.ARROW_RIGHT,
    "\x1bOD": Keys.ARROW_LEFT,
    "\x1bOH": Keys.HOME,
    "\x1bOF": Keys.END,
    "\x1b[1~": Keys.HOME,
    "\x1b[4~": Keys.END,
    "\x1b[7~": Keys.HOME,
    "\x1b[8~": Keys.END,
    "\x1b[11~": Keys.F1,
    "\x1b[12~": Keys.F2,
    "\x1b[13~": Keys.F3,
    "\x1b[14~": Keys.F4,
}

_NAMES: Dict[str, str] = {
    Keys.ESC: 'ESC',
    Keys.TAB: 'TAB',
    Keys.SHIFT_TAB: 'SHIFT_TAB',
    Keys.ENTER: 'ENTER',
    Keys.BACKSPACE: 'BACKSPACE',
    Keys.ARROW_UP: 'UP',
    Keys.ARROW_DOWN: 'DOWN',
    Keys.ARROW_LEFT: 'LEFT',
    Keys.ARROW_RIGHT: 'RIGHT',
    Keys.HOME: 'HOME',
    Keys.END: 'END',
    Keys.INSERT: 'INSERT',
    Keys.DELETE: 'DELETE',
    Keys.PAGE_UP: 'PAGE_UP',
    Keys.PAGE_DOWN: 'PAGE_DOWN',
    Keys.F1: 'F1', Keys.F2: 'F2', Keys.F3: 'F3', Keys.F4: 'F4',
    Keys.F5: 'F5', Keys.F6: 'F6', Keys.F7: 'F7', Keys.F8: 'F8',
    Keys.F9: 'F9', Keys.F10: 'F10', Keys.F11: 'F11', Keys.F12: 'F12',
}

ARROW_KEYS = frozenset((Keys.ARROW_UP, Keys.ARROW_DOWN, Keys.ARROW_LEFT, Keys.ARROW_RIGHT))
FUNCTION_KEYS = frozenset((
    Keys.F1, Keys.F2, Keys.F3, Keys.F4, Keys.F5, Keys.F6,
    Keys.F7, Keys.F8, Keys.F9, Keys.F10, Keys.F11, Keys.F12,
))


def normalize_key(key: str) -> str:
    return _ALIASES.get(key, key)


class Event:
    """Base event; `handled` stops further propagation once set."""

    def __init__(self) -> None:
        self.handled = False

    def set_handled(self, handled: bool = True) -> None:
        self.handled = handled

    def stop_propagation(self) -> None:
        self.handled = True


class KeyEvent(Event):
    """
    One chunk of terminal input as a logical key.

    `raw` keeps the bytes exactly as read. Bytes that are not valid UTF-8
    are kept as an opaque key (named UNKNOWN) rather than rejected.
    """

    def __init__(self, raw: Union[str, bytes]) -> None:
        super().__init__()
        self.raw = raw
        self.valid = True
        if isinstance(raw, bytes):
            try:
                text = raw.decode('utf-8')
            except UnicodeDecodeError:
                text = raw.decode('utf-8', errors='surrogateescape')
                self.valid = False
        else:
            text = raw
        self.key = normalize_key(text)

    def is_printable(self) -> bool:
        return self.valid and len(self.key) == 1 and self.key.isprintable()

    def is_arrow_key(self) -> bool:
        return self.key in ARROW_KEYS

    def is_function_key(self) -> bool:
        return self.key in FUNCTION_KEYS

    def is_ctrl(self) -> bool:
        return len(self.key) == 1 and 1 <= ord(self.key) <= 26

    def ctrl_char(self) -> Optional[str]:
        """ Ctrl+A (1) -> 'a' ... Ctrl+Z (26) -> 'z' """
        if self.is_ctrl():
            return chr(ord(self.key) + 96)
        return None

    @property
    def name(self) -> str:
        if self.key in _NAMES:
            return _NAMES[self.key]
        if self.is_printable():
            return self.key
        return 'UNKNOWN'

    def __repr__(self) -> str:
        return f"<KeyEvent {self.name} raw={self.raw!r}>"
