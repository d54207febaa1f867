"""
Terminal backend — the boundary between the runtime and a real terminal.

``TerminalBackend`` lists everything the run loop, the session guard and the
event source need. ``VtBackend`` implements it for POSIX VT100 terminals on top
of prompt_toolkit's raw-mode helper, input parser and output writer.
"""

import codecs
import logging
import os
import select
import signal
import sys
import threading
from abc import ABC, abstractmethod
from typing import Any, Optional

from prompt_toolkit.data_structures import Size
from prompt_toolkit.input.vt100 import raw_mode
from prompt_toolkit.input.vt100_parser import Vt100Parser
from prompt_toolkit.key_binding.key_processor import KeyPress
from prompt_toolkit.output.vt100 import Vt100_Output

from sketch_tui.errors import TerminalError
from sketch_tui.models.envelope import Message
from sketch_tui.models.events import Resize
from sketch_tui.terminal.parser import split_focus, translate

logger = logging.getLogger(__name__)

ENABLE_FOCUS_REPORTING = "\x1b[?1004h"
DISABLE_FOCUS_REPORTING = "\x1b[?1004l"
DEFAULT_ESCAPE_TIMEOUT = 0.05


class TerminalBackend(ABC):
    @abstractmethod
    def enable_raw_mode(self) -> None: ...

    @abstractmethod
    def disable_raw_mode(self) -> None: ...

    @abstractmethod
    def enter_alternate_screen(self) -> None: ...

    @abstractmethod
    def leave_alternate_screen(self) -> None: ...

    def enable_reporting(self, *, mouse: bool = False, focus: bool = False, paste: bool = False) -> None:
        """Turn on optional event reporting. Backends without extras ignore it."""

    def disable_reporting(self) -> None:
        """Undo enable_reporting()."""

    def close(self) -> None:
        """Release resources held by the backend. Called once the session is over."""

    @abstractmethod
    def read_events(self) -> list[Message]:
        """Block until at least one terminal event is available and return them in order."""

    @abstractmethod
    def size(self) -> tuple[int, int]:
        """Return (columns, rows)."""

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def move_to_origin(self) -> None: ...

    @abstractmethod
    def write(self, text: str) -> None: ...

    @abstractmethod
    def flush(self) -> None: ...


class VtBackend(TerminalBackend):
    """POSIX VT100 backend.

    Input is read with ``os.read`` on ``input_fd`` and decoded incrementally,
    focus reports are split off, and the rest goes through prompt_toolkit's
    ``Vt100Parser``. SIGWINCH pokes a wake-up pipe so that ``Resize`` comes out
    of ``read_events`` in arrival order with everything else.
    """

    def __init__(
        self,
        input_fd: int,
        output: Vt100_Output,
        escape_timeout: float = DEFAULT_ESCAPE_TIMEOUT,
    ):
        self._fd = input_fd
        self._output = output
        self._escape_timeout = escape_timeout
        self._decoder = codecs.getincrementaldecoder("utf-8")("surrogateescape")
        self._presses: list[KeyPress] = []
        self._parser = Vt100Parser(self._presses.append)
        self._pending_escape = False
        self._raw: Optional[raw_mode] = None
        self._wake_r, self._wake_w = os.pipe()
        os.set_blocking(self._wake_w, False)
        self._previous_sigwinch: Any = None
        self._reporting: dict[str, bool] = {}
        self._closed = False

    @classmethod
    def from_stdio(cls, escape_timeout: float = DEFAULT_ESCAPE_TIMEOUT) -> "VtBackend":
        if sys.platform == "win32":
            raise TerminalError("Windows consoles are not supported")
        if not sys.stdin.isatty() or not sys.stdout.isatty():
            raise TerminalError("stdin and stdout must be attached to a terminal")
        return cls(sys.stdin.fileno(), Vt100_Output.from_pty(sys.stdout), escape_timeout=escape_timeout)

    # -- session lifecycle --

    def enable_raw_mode(self) -> None:
        if self._raw is not None:
            return
        self._raw = raw_mode(self._fd)
        self._raw.__enter__()

    def disable_raw_mode(self) -> None:
        if self._raw is None:
            return
        raw, self._raw = self._raw, None
        raw.__exit__(None, None, None)

    def enter_alternate_screen(self) -> None:
        self._output.enter_alternate_screen()
        self._output.flush()

    def leave_alternate_screen(self) -> None:
        self._output.quit_alternate_screen()
        self._output.flush()

    def enable_reporting(self, *, mouse: bool = False, focus: bool = False, paste: bool = False) -> None:
        self._reporting = {"mouse": mouse, "focus": focus, "paste": paste}
        if mouse:
            self._output.enable_mouse_support()
        if focus:
            self._output.write_raw(ENABLE_FOCUS_REPORTING)
        if paste:
            self._output.enable_bracketed_paste()
        self._output.flush()
        self._watch_resize()

    def disable_reporting(self) -> None:
        self._unwatch_resize()
        reporting, self._reporting = self._reporting, {}
        if reporting.get("mouse"):
            self._output.disable_mouse_support()
        if reporting.get("focus"):
            self._output.write_raw(DISABLE_FOCUS_REPORTING)
        if reporting.get("paste"):
            self._output.disable_bracketed_paste()
        self._output.flush()

    def _watch_resize(self) -> None:
        # signal.signal() is only allowed from the main thread.
        if not hasattr(signal, "SIGWINCH") or threading.current_thread() is not threading.main_thread():
            return
        self._previous_sigwinch = signal.signal(signal.SIGWINCH, self._on_sigwinch)

    def _unwatch_resize(self) -> None:
        if self._previous_sigwinch is None:
            return
        previous, self._previous_sigwinch = self._previous_sigwinch, None
        if threading.current_thread() is threading.main_thread():
            signal.signal(signal.SIGWINCH, previous)

    def _on_sigwinch(self, signum: int, frame: Any) -> None:
        if self._closed:
            return
        try:
            os.write(self._wake_w, b"\0")
        except BlockingIOError:
            pass  # a wake-up is already pending

    def notify_resize(self) -> None:
        """Ask the reader to emit a Resize message."""
        self._on_sigwinch(0, None)

    def close(self) -> None:
        """Close the resize wake-up pipe. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        for fd in (self._wake_r, self._wake_w):
            try:
                os.close(fd)
            except OSError as e:
                logger.debug(f"Closing wake-up pipe fd {fd} failed: {e}")

    # -- input --

    def read_events(self) -> list[Message]:
        if self._closed:
            raise TerminalError("terminal backend is closed")
        while True:
            timeout = self._escape_timeout if self._pending_escape else None
            try:
                ready, _, _ = select.select([self._fd, self._wake_r], [], [], timeout)
            except InterruptedError:
                continue

            events: list[Message] = []
            if not ready:
                # Nothing followed the ESC: it was a real Escape key press.
                self._parser.flush()
                self._pending_escape = False
                events.extend(self._drain_presses())
            if self._wake_r in ready:
                os.read(self._wake_r, 512)
                columns, rows = self.size()
                events.append(Resize(width=columns, height=rows))
            if self._fd in ready:
                events.extend(self._read_input())
            if events:
                return events

    def _read_input(self) -> list[Message]:
        data = os.read(self._fd, 1024)
        if not data:
            raise TerminalError("terminal input closed")
        text = self._decoder.decode(data)
        events: list[Message] = []
        for part in split_focus(text):
            if isinstance(part, str):
                self._parser.feed(part)
            else:
                events.extend(self._drain_presses())
                events.append(part)
        events.extend(self._drain_presses())
        self._pending_escape = "\x1b" in text
        return events

    def _drain_presses(self) -> list[Message]:
        presses = list(self._presses)
        self._presses.clear()
        return translate(presses)

    # -- output --

    def size(self) -> tuple[int, int]:
        size: Size = self._output.get_size()
        return size.columns, size.rows

    def clear(self) -> None:
        self._output.erase_screen()

    def move_to_origin(self) -> None:
        self._output.cursor_goto(0, 0)

    def write(self, text: str) -> None:
        self._output.write_raw(text)

    def flush(self) -> None:
        self._output.flush()
