"""Shared fixtures: an in-memory terminal backend and a bounded app runner."""

import queue
import threading
from typing import Optional, Union

import pytest

from sketch_tui.app import App
from sketch_tui.models.envelope import Message
from sketch_tui.terminal.backend import TerminalBackend


class FakeBackend(TerminalBackend):
    """Records lifecycle calls and frames; read_events() pops fed events."""

    def __init__(self, size: tuple[int, int] = (80, 24)):
        self._events: "queue.Queue[Union[Message, BaseException]]" = queue.Queue()
        self._size = size
        self._buffer: list[str] = []
        self.calls: list[str] = []
        self.frames: list[str] = []
        self.reporting: Optional[dict] = None
        self.closed = False

    def feed(self, *events: Union[Message, BaseException]) -> None:
        for event in events:
            self._events.put(event)

    def enable_raw_mode(self) -> None:
        self.calls.append("enable_raw_mode")

    def disable_raw_mode(self) -> None:
        self.calls.append("disable_raw_mode")

    def enter_alternate_screen(self) -> None:
        self.calls.append("enter_alternate_screen")

    def leave_alternate_screen(self) -> None:
        self.calls.append("leave_alternate_screen")

    def enable_reporting(self, *, mouse: bool = False, focus: bool = False, paste: bool = False) -> None:
        self.reporting = {"mouse": mouse, "focus": focus, "paste": paste}
        self.calls.append("enable_reporting")

    def disable_reporting(self) -> None:
        self.calls.append("disable_reporting")

    def close(self) -> None:
        self.closed = True

    def read_events(self) -> list[Message]:
        event = self._events.get()
        if isinstance(event, BaseException):
            raise event
        return [event]

    def size(self) -> tuple[int, int]:
        return self._size

    def clear(self) -> None:
        self._buffer.clear()

    def move_to_origin(self) -> None:
        pass

    def write(self, text: str) -> None:
        self._buffer.append(text)

    def flush(self) -> None:
        self.frames.append("".join(self._buffer))
        self._buffer.clear()

    @property
    def restored(self) -> bool:
        return "disable_raw_mode" in self.calls and "leave_alternate_screen" in self.calls


def run_app(app: App, timeout: float = 5.0) -> Optional[BaseException]:
    """Run ``app`` in a worker thread; return whatever it raised (or None)."""
    outcome: dict = {}

    def target() -> None:
        try:
            app.run()
        except BaseException as e:  # handed back to the test
            outcome["error"] = e

    thread = threading.Thread(target=target, daemon=True)
    thread.start()
    thread.join(timeout)
    assert not thread.is_alive(), "App.run() did not finish"
    return outcome.get("error")


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()
