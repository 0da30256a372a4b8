"""Unit tests for the terminal shim, configuration and the demo entry point."""
import io
import logging
import os

import pytest

from termdesk import __main__ as entry
from termdesk.bus import Signal, SignalBus
from termdesk.config import DEFAULT_CONFIG, Config
from termdesk.core import UIApplication
from termdesk.errors import TerminalError, TermdeskError
from termdesk.surface import Surface
from termdesk.terminal import Terminal


@pytest.fixture
def pipe():
    read_fd, write_fd = os.pipe()
    reader = os.fdopen(read_fd, "rb", buffering=0)
    yield reader, write_fd
    reader.close()
    os.close(write_fd)


class TestTerminal:

    def test_stream_without_descriptor(self):
        terminal = Terminal(stdin=io.StringIO(), stdout=io.StringIO())
        with pytest.raises(TerminalError):
            terminal.enter()
        assert not terminal.active

    def test_pipe_is_not_a_tty(self, pipe):
        reader, _ = pipe
        terminal = Terminal(stdin=reader, stdout=io.StringIO())
        with pytest.raises(TerminalError, match="not a terminal"):
            terminal.enter()

    def test_terminal_error_is_toolkit_error(self):
        assert issubclass(TerminalError, TermdeskError)

    def test_non_blocking_read(self, pipe):
        reader, write_fd = pipe
        terminal = Terminal(stdin=reader, stdout=io.StringIO(), read_size=4)
        assert terminal.read() == b''
        os.write(write_fd, b"abcdef")
        assert terminal.read() == b"abcd"
        assert terminal.read() == b"ef"
        assert terminal.read() == b''

    def test_flip_writes_frame(self):
        out = io.StringIO()
        terminal = Terminal(stdin=io.StringIO(), stdout=out)
        surface = Surface(3, 1)
        surface.put(0, 0, "abc")
        terminal.flip(surface)
        assert out.getvalue() == surface.to_ansi()

    def test_exit_without_enter_is_a_no_op(self):
        out = io.StringIO()
        terminal = Terminal(stdin=io.StringIO(), stdout=out)
        terminal.exit()
        assert out.getvalue() == ""

    def test_signal_handlers_only_post(self):
        bus = SignalBus()
        terminal = Terminal(stdin=io.StringIO(), stdout=io.StringIO())
        terminal._bus = bus
        terminal._on_quit_signal(15, None)
        terminal._on_resize_signal(28, None)
        assert bus.pending() == 2
        seen = []
        bus.subscribe(Signal.S_QUIT, seen.append)
        bus.subscribe(Signal.S_RESIZE, seen.append)
        bus.pump()
        assert [msg.signal for msg in seen] == [Signal.S_QUIT, Signal.S_RESIZE]
        assert len(seen[1].data) == 2

    def test_size_fallback(self):
        width, height = Terminal(stdin=io.StringIO(), stdout=io.StringIO()).get_size()
        assert width > 0 and height > 0


class TestConfig:

    def test_defaults(self):
        config = Config()
        assert config.screen_size == (120, 30)
        assert config.target_fps == 60
        assert config.read_size == 16
        assert config.frame_delay == 16666
        assert DEFAULT_CONFIG == Config()

    def test_dev_mode_logs_debug(self):
        assert Config(dev_mode=True).log_level == "DEBUG"

    def test_frame_rate_floor(self):
        assert Config(target_fps=0).target_fps == 1


class TestEntryPoint:

    def test_parse_args(self):
        args = entry.parse_args(["--dev", "--fps", "30", "--size", "100x40", "--no-alt-screen"])
        config = entry.build_config(args)
        assert config.dev_mode
        assert config.target_fps == 30
        assert config.screen_size == (100, 40)
        assert not config.auto_size
        assert not config.alternate_screen

    def test_bad_size(self):
        with pytest.raises(SystemExit):
            entry.parse_args(["--size", "big"])

    def test_log_file_override(self, tmp_path):
        args = entry.parse_args(["--log-file", str(tmp_path / "x.log")])
        assert entry.build_config(args).log_file.endswith("x.log")

    def test_demo_builds_windows(self, config):
        app = UIApplication(config, terminal=Terminal(stdin=io.StringIO(), stdout=io.StringIO()))
        entry.build_demo(app)
        windows = app.desktop.windows()
        assert [w.title for w in windows] == ["termdesk demo", "notes"]
        assert app.desktop.active_window is windows[0]
        assert windows[0].find_child("items").focused

    def test_main_reports_terminal_error(self, tmp_path, monkeypatch, capsys):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        monkeypatch.setattr("sys.stdin", io.StringIO())
        try:
            code = entry.main(["--log-file", str(tmp_path / "t.log"), "--size", "80x24"])
        finally:
            for handler in root.handlers[:]:
                if handler not in handlers:
                    root.removeHandler(handler)
                    handler.close()
            root.setLevel(level)
        assert code == 1
        assert "termdesk:" in capsys.readouterr().err
        assert (tmp_path / "t.log").exists()
