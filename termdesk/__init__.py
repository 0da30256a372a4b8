"""
termdesk: a retained-mode terminal UI toolkit.

A tree of nodes laid out from CSS-like style rules, a window manager
desktop and a single-threaded polling loop that repaints a character grid
through escape sequences.
"""
import os

# pygame is only used for Rect/Color/Clock here, keep its banner off the screen
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from .ansi import Color
from .borders import Border
from .bus import Packet, Signal, SignalBus
from .config import Config, DEFAULT_CONFIG
from .controls import UIButton, UIInput, UILabel, UIListBox, UIPanel
from .core import AppState, UIApplication
from .desktop import UIDesktop
from .elements import UINode
from .errors import TermdeskError, TerminalError
from .events import Event, KeyEvent, Keys
from .focus import FocusRing
from .geometry import DEFAULT_SCREEN, Geometry, Spacing
from .layout import content_box, resolve
from .styles import StyleRules
from .surface import Surface
from .terminal import Terminal
from .widgets import UIWindow

__version__ = "0.1.0"

__all__ = [
    "AppState", "Border", "Color", "Config", "DEFAULT_CONFIG", "DEFAULT_SCREEN",
    "Event", "FocusRing", "Geometry", "KeyEvent", "Keys", "Packet", "Signal",
    "SignalBus", "Spacing", "StyleRules", "Surface", "Terminal", "TermdeskError",
    "TerminalError", "UIApplication", "UIButton", "UIDesktop", "UIInput",
    "UILabel", "UIListBox", "UINode", "UIPanel", "UIWindow", "content_box", "resolve",
]
