# core.py
from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any, Optional

import pygame

from .bus import Packet, Signal, SignalBus
from .config import Config
from .desktop import UIDesktop
from .events import Event, KeyEvent, Keys
from .geometry import Geometry
from .surface import Surface
from .terminal import Terminal
from .widgets import UIWindow

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130


class AppState(IntEnum):
    IDLE = 0
    RUNNING = 1
    STOPPED = 2


class UIApplication:
    """
    Owns the desktop and drives the loop: pump queued signals, read one
    chunk of input, dispatch it, repaint when something asked for it, then
    wait for the next frame. An application runs once.
    """
    __slots__ = ('config', 'terminal', 'clock', 'fps', 'state', 'running',
                 'needs_redraw', 'bus', 'desktop', 'surface', 'frame_count', '__weakref__')

    def __init__(self, config: Optional[Config] = None, terminal: Optional[Terminal] = None,
                 clock: Any = None) -> None:
        self.config         = config if config is not None else Config()
        self.terminal       = terminal if terminal is not None else Terminal(
                                read_size=self.config.read_size,
                                alternate_screen=self.config.alternate_screen)
        self.clock          = clock if clock is not None else pygame.time.Clock()
        self.fps            = max(1, self.config.target_fps)
        self.state          = AppState.IDLE
        self.running        = False
        self.needs_redraw   = True
        self.frame_count    = 0

        width, height = self.config.screen_size
        self.surface        = Surface(width, height)
        self.desktop        = UIDesktop(self, Geometry(0, 0, width, height))

        self.bus            = SignalBus()
        self.bus.subscribe(Signal.S_QUIT, self._on_quit)
        self.bus.subscribe(Signal.S_RESIZE, self._on_resize)
        self.bus.subscribe(Signal.S_REDRAW, self._on_redraw)

    # Lifecycle

    def run(self) -> int:
        if self.state is not AppState.IDLE:
            raise RuntimeError("application has already run; create a new one")

        try:
            self.terminal.enter(self.bus)
        except Exception:
            logger.exception("[root] terminal setup failed")
            self.cleanup()
            self.state = AppState.STOPPED
            raise

        # from here on the terminal is restored on every path
        self.running = True
        self.state = AppState.RUNNING
        exit_code = 0
        try:
            self.initialize()
            while self.running:
                self.process_frame()
                self.clock.tick(self.fps)
        except KeyboardInterrupt:
            logger.info("[root] Interrupted...")
            exit_code = EXIT_INTERRUPTED
        except Exception:
            logger.exception("[root] fatal exception in loop")
            raise
        finally:
            self.running = False
            self.cleanup()
            self.state = AppState.STOPPED
            logger.info(f"[root] quit after {self.frame_count} frames")
        return exit_code

    def initialize(self) -> None:
        """ First-frame setup once the terminal is in cbreak mode """
        if self.config.auto_size:
            width, height = self.terminal.get_size()
            self.resize(width, height)
        self.request_redraw()

    def cleanup(self) -> None:
        try:
            self.terminal.exit()
        except Exception:
            logger.exception("[root] terminal teardown failed")

    def quit(self) -> None:
        if self.running:
            logger.info("[root] quit requested")
        self.running = False

    @property
    def is_running(self) -> bool:
        return self.running

    # Frame

    def process_frame(self) -> None:
        self.bus.pump()

        data = self.terminal.read()
        if data:
            self.handle_event(KeyEvent(data))

        if self.needs_redraw:
            self.draw()

    def handle_event(self, event: Event) -> bool:
        if self.desktop.dispatch(event):
            return True
        if isinstance(event, KeyEvent) and event.key in (Keys.CTRL_C, Keys.CTRL_D):
            self.quit()
            return True
        return False

    def draw(self) -> None:
        self.surface.fill()
        self.desktop.draw(self.surface)
        self.terminal.flip(self.surface)
        self.frame_count += 1
        self.needs_redraw = False

    def request_redraw(self) -> None:
        self.needs_redraw = True

    def resize(self, width: int, height: int) -> None:
        self.surface.resize(width, height)
        self.desktop.resize(self.surface.width, self.surface.height)
        self.request_redraw()

    # Windows

    def add_window(self, window: UIWindow) -> UIWindow:
        self.desktop.add(window)
        return window

    def remove_window(self, window: UIWindow) -> None:
        self.desktop.remove(window)

    # Pacing

    def set_frame_rate(self, fps: int) -> None:
        self.fps = max(1, int(fps))

    @property
    def frame_delay(self) -> int:
        """ Frame interval in microseconds """
        return 1_000_000 // self.fps

    # Signals

    def _on_quit(self, msg: Packet) -> None:
        self.quit()

    def _on_resize(self, msg: Packet) -> None:
        width, height = msg.data
        self.resize(width, height)

    def _on_redraw(self, msg: Packet) -> None:
        self.request_redraw()

    def get_metadata(self) -> dict:
        return {
            "state": self.state.name,
            "fps": self.fps,
            "frame_count": self.frame_count,
            "size": (self.surface.width, self.surface.height),
            "windows": len(self.desktop.windows()),
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__},state={self.state.name},fps={self.fps}>"
