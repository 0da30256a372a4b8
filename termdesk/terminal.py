# terminal.py
from __future__ import annotations

import logging
import os
import select
import shutil
import signal
import sys
import termios
from typing import IO, Any, Dict, Optional, Tuple

from . import ansi
from .bus import Signal, SignalBus
from .errors import TerminalError
from .surface import Surface

logger = logging.getLogger(__name__)

FALLBACK_SIZE = (120, 30)


class Terminal:
    """
    Raw terminal shim: cbreak mode, non-blocking reads, frame output.

    `enter` saves the tty state before changing it and `exit` puts it back;
    `exit` is safe to call more than once and from any teardown path. OS
    signal handlers only post onto the bus, the loop applies them later.
    """
    __slots__ = ('stdin', 'stdout', 'read_size', 'alternate_screen',
                 'active', '_saved_mode', '_saved_handlers', '_bus')

    def __init__(self, stdin: Optional[IO] = None, stdout: Optional[IO] = None,
                 read_size: int = 16, alternate_screen: bool = True) -> None:
        self.stdin              = stdin if stdin is not None else sys.stdin
        self.stdout             = stdout if stdout is not None else sys.stdout
        self.read_size          = max(1, read_size)
        self.alternate_screen   = alternate_screen
        self.active             = False
        self._saved_mode        : Optional[list] = None
        self._saved_handlers    : Dict[int, Any] = {}
        self._bus               : Optional[SignalBus] = None

    # Lifecycle

    def enter(self, bus: Optional[SignalBus] = None) -> None:
        if self.active:
            return
        try:
            fd = self.stdin.fileno()
        except (AttributeError, ValueError, OSError) as e:
            raise TerminalError(f"stdin has no usable file descriptor: {e}") from e
        if not os.isatty(fd):
            raise TerminalError("stdin is not a terminal")

        try:
            self._saved_mode = termios.tcgetattr(fd)
            self._set_cbreak(fd)
        except termios.error as e:
            raise TerminalError(f"could not switch terminal mode: {e}") from e

        self._bus = bus
        self._install_signals()
        self.active = True

        if self.alternate_screen:
            self.write(ansi.ALT_SCREEN_ON)
        self.write(ansi.HIDE_CURSOR + ansi.CLEAR_SCREEN + ansi.CURSOR_HOME)
        self.flush()
        logger.info(f"[terminal] entered cbreak mode ({self.get_size()[0]}x{self.get_size()[1]})")

    def exit(self) -> None:
        if not self.active:
            return
        self.active = False

        self.write(ansi.RESET + ansi.SHOW_CURSOR)
        if self.alternate_screen:
            self.write(ansi.ALT_SCREEN_OFF)
        else:
            self.write(ansi.CLEAR_SCREEN + ansi.CURSOR_HOME)
        self.flush()

        if self._saved_mode is not None:
            try:
                termios.tcsetattr(self.stdin.fileno(), termios.TCSANOW, self._saved_mode)
            except termios.error as e:
                logger.error(f"[terminal] could not restore terminal mode: {e}")
            self._saved_mode = None

        self._restore_signals()
        self._bus = None
        logger.info("[terminal] restored")

    @staticmethod
    def _set_cbreak(fd: int) -> None:
        mode = termios.tcgetattr(fd)
        # keep ISIG so Ctrl-C still raises SIGINT
        mode[3] &= ~(termios.ICANON | termios.ECHO | termios.IEXTEN)
        mode[1] &= ~(termios.IXON | termios.IXOFF | termios.ICRNL | termios.INLCR | termios.IGNCR)
        mode[6][termios.VMIN] = 1
        mode[6][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSANOW, mode)

    # Signals

    def _install_signals(self) -> None:
        handlers = {
            signal.SIGWINCH: self._on_resize_signal,
            signal.SIGINT: self._on_quit_signal,
            signal.SIGTERM: self._on_quit_signal,
        }
        for signum, handler in handlers.items():
            try:
                self._saved_handlers[signum] = signal.getsignal(signum)
                signal.signal(signum, handler)
            except ValueError:
                # not the main thread
                logger.warning(f"[terminal] cannot install handler for {signal.Signals(signum).name}")
                self._saved_handlers.pop(signum, None)

    def _restore_signals(self) -> None:
        for signum, handler in self._saved_handlers.items():
            try:
                signal.signal(signum, handler)
            except (ValueError, TypeError):
                logger.warning(f"[terminal] cannot restore handler for {signal.Signals(signum).name}")
        self._saved_handlers.clear()

    def _on_resize_signal(self, signum, frame) -> None:
        if self._bus is not None:
            self._bus.emit(Signal.S_RESIZE, self.get_size())

    def _on_quit_signal(self, signum, frame) -> None:
        if self._bus is not None:
            self._bus.emit(Signal.S_QUIT, signum)

    # I/O

    def read(self) -> bytes:
        """ One non-blocking read; empty when no input is waiting """
        fd = self.stdin.fileno()
        try:
            ready, _, _ = select.select([fd], [], [], 0)
        except InterruptedError:
            return b''
        if not ready:
            return b''
        return os.read(fd, self.read_size)

    def write(self, data: str) -> None:
        self.stdout.write(data)

    def flush(self) -> None:
        self.stdout.flush()

    def flip(self, surface: Surface) -> None:
        self.write(surface.to_ansi())
        self.flush()

    def get_size(self) -> Tuple[int, int]:
        size = shutil.get_terminal_size(FALLBACK_SIZE)
        return (size.columns, size.lines)

    # Context manager

    def __enter__(self) -> 'Terminal':
        self.enter()
        return self

    def __exit__(self, *exc) -> None:
        self.exit()
