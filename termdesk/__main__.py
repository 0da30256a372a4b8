"""
Demo entry point.

Usage:
    python -m termdesk [options]

Options:
    --dev               Debug logging
    --fps N             Target frame rate [default: 60]
    --size WxH          Fixed screen size instead of the terminal's
    --log-file PATH     Log destination [default: termdesk.log]
    --no-alt-screen     Draw on the main screen buffer

Keys:
    TAB / shift-TAB     move focus inside the active window
    F6 / F5             next / previous window
    ESC                 close the active window
    Ctrl+C / Ctrl+D     quit
"""

import argparse
import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, Sequence

from .ansi import Color
from .config import Config
from .controls import UIButton, UIInput, UILabel, UIListBox, UIPanel
from .core import UIApplication
from .errors import TerminalError
from .geometry import Geometry
from .styles import StyleRules
from .widgets import UIWindow

logger = logging.getLogger("termdesk")


def setup_logging(log_file: str, level: str = "INFO") -> None:
    """Send records to a rotating file; stdout belongs to the screen."""
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )

    handler = RotatingFileHandler(
        log_file,
        maxBytes=1024 * 1024,  # 1 MB
        backupCount=3
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.addHandler(handler)

    logging.info("Logging initialized")


def parse_size(value: str) -> tuple:
    try:
        width, height = (int(part) for part in value.lower().split('x'))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {value!r}")
    return (width, height)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="termdesk",
        description="termdesk - terminal desktop demo"
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=None,
        help="Target frame rate"
    )
    parser.add_argument(
        "--size",
        type=parse_size,
        default=None,
        help="Fixed screen size, e.g. 100x30"
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Log file path"
    )
    parser.add_argument(
        "--no-alt-screen",
        action="store_true",
        help="Draw on the main screen buffer"
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    config = Config(dev_mode=args.dev)
    if args.fps is not None:
        config.target_fps = max(1, args.fps)
    if args.size is not None:
        config.screen_width, config.screen_height = args.size
        config.auto_size = False
    if args.log_file:
        config.log_file = args.log_file
    if args.no_alt_screen:
        config.alternate_screen = False
    return config


def build_demo(app: UIApplication) -> None:
    """Two windows: a form with list, input and buttons, and a notes window."""

    # ─── Main window ──────────────────────────────────────────────────────────

    form = UIWindow(Geometry.from_points(10, 3, 80, 24), "termdesk demo")
    form.set_border_color(Color.CYAN)

    form.add(UILabel("Retained-mode widgets for the terminal", StyleRules(
        top=0, left=1, height=1,
        foreground=Color.BRIGHT_YELLOW, font_weight='bold', text_align='center',
    )))

    info = UIPanel(StyleRules(top=2, left=1, width='45%', height=7, border='rounded',
                              border_color=Color.GREEN, padding=0))
    info.add_text("Geometry.from_points\n(x1, y1, x2, y2)\nlist: left 34, right 1")
    form.add(info)

    items = UIListBox([f"Item {i}" for i in range(1, 21)], StyleRules(
        top=2, left=34, right=1, height=7,
    ), name='items')
    form.add(items)

    status = UILabel("", StyleRules(top=16, left=1, height=1, foreground=Color.GRAY_LIGHT), name='status')
    form.add(status)

    field = UIInput(StyleRules(top=10, left=1, width=30, height=1), name='input')
    field.set_placeholder("type and press enter")
    field.on_submit = lambda value: status.set_text(f"submitted: {value}")
    form.add(field)

    items.on_activate = lambda item, index: status.set_text(f"activated {item} (#{index})")

    button_style = StyleRules(top=12, left=1, height=1, padding='0 2',
                              background=Color.BLUE, foreground=Color.WHITE)
    form.add(UIButton("Cascade", button_style, lambda b: app.desktop.cascade()))
    form.add(UIButton("Tile", button_style.merge(StyleRules(left=16, background=Color.GREEN)),
                      lambda b: app.desktop.tile_vertical()))
    form.add(UIButton("Quit", button_style.merge(StyleRules(left=28, background=Color.RED)),
                      lambda b: app.quit()))

    # ─── Notes window ─────────────────────────────────────────────────────────

    notes = UIWindow(Geometry(60, 8, 50, 12), "notes")
    notes.set_border_color(Color.MAGENTA)
    notes.add(UILabel(
        "F6 and F5 cycle windows. TAB moves focus inside the active window, "
        "ESC closes it. Ctrl+C quits.",
        StyleRules(top=1, left=1, right=1, bottom=1)
    ))

    app.add_window(form)
    app.add_window(notes)
    app.desktop.set_active_window(form)
    form.focus_next_child()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    config = build_config(args)
    setup_logging(config.log_file, config.log_level)

    app = UIApplication(config)
    build_demo(app)
    logger.info(f"[main] starting demo with {len(app.desktop.windows())} windows at {app.fps} fps")

    try:
        return app.run()
    except TerminalError as e:
        print(f"termdesk: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
