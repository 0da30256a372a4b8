"""Pytest configuration and shared fixtures."""
from collections import deque

import pytest

from termdesk.config import Config
from termdesk.core import UIApplication
from termdesk.geometry import Geometry
from termdesk.widgets import UIWindow


class FakeTerminal:
    """Records frames and serves scripted input; never touches a tty."""

    def __init__(self, inputs=(), size=(80, 24)):
        self.inputs = deque(inputs)
        self.size = size
        self.frames = []
        self.output = []
        self.entered = 0
        self.exited = 0
        self.bus = None
        self.fail_on_enter = None

    def feed(self, *chunks):
        self.inputs.extend(chunks)

    def enter(self, bus=None):
        if self.fail_on_enter is not None:
            raise self.fail_on_enter
        self.entered += 1
        self.bus = bus

    def exit(self):
        self.exited += 1

    def read(self):
        if not self.inputs:
            return b''
        chunk = self.inputs.popleft()
        if isinstance(chunk, BaseException):
            raise chunk
        return chunk

    def write(self, data):
        self.output.append(data)

    def flush(self):
        pass

    def flip(self, surface):
        self.frames.append(surface.lines())

    def get_size(self):
        return self.size


class FakeClock:
    """Counts ticks; calls `on_limit` once `limit` ticks have passed."""

    def __init__(self, limit=50):
        self.ticks = []
        self.limit = limit
        self.on_limit = None

    def tick(self, fps=0):
        self.ticks.append(fps)
        if len(self.ticks) >= self.limit:
            if self.on_limit is None:
                raise RuntimeError("fake clock limit reached")
            self.on_limit()
        return 0


@pytest.fixture
def config():
    """Fixed-size configuration; the terminal size is never queried."""
    return Config(screen_width=80, screen_height=24, auto_size=False)


@pytest.fixture
def terminal():
    return FakeTerminal()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def app(config, terminal, clock):
    application = UIApplication(config, terminal=terminal, clock=clock)
    clock.on_limit = application.quit
    return application


@pytest.fixture
def desktop(app):
    return app.desktop


@pytest.fixture
def make_window(desktop):
    """Create a window and register it with the desktop."""
    def factory(name, geometry=None, title=None):
        window = UIWindow(geometry or Geometry(0, 0, 30, 10), title or name, name=name)
        desktop.add(window)
        return window
    return factory
