"""VtBackend against a pipe and an in-memory output."""

import io
import os
import sys

import pytest
from prompt_toolkit.data_structures import Size
from prompt_toolkit.output.vt100 import Vt100_Output

from sketch_tui import Focus, Key, KeyCode, KeyModifiers, Resize, TerminalError
from sketch_tui.terminal.backend import ENABLE_FOCUS_REPORTING, DISABLE_FOCUS_REPORTING, VtBackend

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="POSIX terminals only")


@pytest.fixture
def pipe():
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    for fd in (read_fd, write_fd):
        try:
            os.close(fd)
        except OSError:
            pass


@pytest.fixture
def screen() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def vt(pipe, screen) -> VtBackend:
    output = Vt100_Output(screen, lambda: Size(rows=24, columns=80))
    backend = VtBackend(pipe[0], output, escape_timeout=0.01)
    yield backend
    backend.close()


class TestInput:
    def test_characters_in_order(self, vt, pipe):
        os.write(pipe[1], b"ab")
        assert vt.read_events() == [Key(code="a"), Key(code="b")]

    def test_multibyte_character(self, vt, pipe):
        os.write(pipe[1], "é".encode())
        assert vt.read_events() == [Key(code="é")]

    def test_arrow_key(self, vt, pipe):
        os.write(pipe[1], b"\x1b[B")
        assert vt.read_events() == [Key(code=KeyCode.DOWN)]

    def test_alt_key(self, vt, pipe):
        os.write(pipe[1], b"\x1bq")
        assert vt.read_events() == [Key(code="q", modifiers=KeyModifiers.ALT)]

    def test_lone_escape_flushed_after_timeout(self, vt, pipe):
        os.write(pipe[1], b"\x1b")
        assert vt.read_events() == [Key(code=KeyCode.ESC)]

    def test_focus_reports(self, vt, pipe):
        os.write(pipe[1], b"x\x1b[Iy")
        assert vt.read_events() == [Key(code="x"), Focus.gained(), Key(code="y")]

    def test_closed_input_raises(self, vt, pipe):
        os.close(pipe[1])
        with pytest.raises(TerminalError):
            vt.read_events()

    def test_resize_notification(self, vt):
        vt.notify_resize()
        assert vt.read_events() == [Resize(width=80, height=24)]


class TestOutput:
    def test_size(self, vt):
        assert vt.size() == (80, 24)

    def test_frame_written_on_flush(self, vt, screen):
        vt.clear()
        vt.move_to_origin()
        vt.write("hello")
        assert screen.getvalue() == ""
        vt.flush()
        assert screen.getvalue().endswith("hello")

    def test_alternate_screen(self, vt, screen):
        vt.enter_alternate_screen()
        assert "\x1b[?1049h" in screen.getvalue()
        vt.leave_alternate_screen()
        assert "\x1b[?1049l" in screen.getvalue()

    def test_reporting_round_trip(self, vt, screen):
        vt.enable_reporting(mouse=False, focus=True, paste=True)
        assert ENABLE_FOCUS_REPORTING in screen.getvalue()
        assert "\x1b[?2004h" in screen.getvalue()
        vt.disable_reporting()
        assert DISABLE_FOCUS_REPORTING in screen.getvalue()
        assert "\x1b[?2004l" in screen.getvalue()

    def test_no_reporting_requested(self, vt, screen):
        vt.enable_reporting()
        vt.disable_reporting()
        assert ENABLE_FOCUS_REPORTING not in screen.getvalue()


def test_close_releases_wake_pipe(vt):
    wake_fds = (vt._wake_r, vt._wake_w)
    vt.close()
    vt.close()
    for fd in wake_fds:
        with pytest.raises(OSError):
            os.fstat(fd)
    vt.notify_resize()
    with pytest.raises(TerminalError):
        vt.read_events()


def test_from_stdio_requires_a_terminal(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO())
    with pytest.raises(TerminalError):
        VtBackend.from_stdio()
