"""
Model contract and run loop.

Loop (per externally received message):
- Chaining: feed the message to ``update``; keep feeding follow-ups until none
  is returned. ``Quit`` anywhere in the chain ends the run.
- Rendering: one full-screen repaint of ``view()`` after the chain has drained.

``startup()``'s message, if any, is chained and drawn before anything is
awaited. Without one, the first frame follows the first external message.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Union

from sketch_tui.channel import Channel, Sender
from sketch_tui.config import AppConfig
from sketch_tui.errors import TerminalError
from sketch_tui.models.envelope import Message, Msg
from sketch_tui.models.events import Quit
from sketch_tui.session import TerminalSession, install_fault_hook
from sketch_tui.terminal.backend import TerminalBackend, VtBackend
from sketch_tui.terminal.source import EventSource

logger = logging.getLogger(__name__)

MaybeMsg = Optional[Union[Msg, Message]]


class Model(ABC):
    """What an App runs.

    ``update`` takes the current model and returns its replacement; the run
    loop drops its reference to the old one, so models should be treated as
    immutable values (frozen pydantic models work well).
    """

    def startup(self) -> MaybeMsg:
        """Message to process before the first frame, if any."""
        return None

    @abstractmethod
    def update(self, msg: Msg) -> "tuple[Model, MaybeMsg]":
        """Return the next model and an optional follow-up message."""

    @abstractmethod
    def view(self) -> str:
        """Render the whole screen. Use "\\n" for line breaks."""


class App:
    """Holds a Model and runs it against the terminal."""

    def __init__(
        self,
        model: Model,
        *,
        config: Optional[AppConfig] = None,
        backend: Optional[TerminalBackend] = None,
    ):
        self._model = model
        self._config = config or AppConfig()
        self._backend = backend
        self._channel = Channel()
        self.frames = 0

    @property
    def model(self) -> Model:
        return self._model

    def sender(self) -> Sender:
        """Handle for injecting messages from other threads."""
        return self._channel.sender()

    def run(self) -> None:
        """Run until a Quit message is seen.

        Raises TerminalError for terminal I/O faults; exceptions from the
        model propagate unchanged. The terminal is restored either way.
        """
        if self._channel.closed:
            raise RuntimeError("App.run() can only be called once")
        backend = self._backend or VtBackend.from_stdio(escape_timeout=self._config.escape_timeout)
        install_fault_hook()

        try:
            with TerminalSession(backend, self._config):
                EventSource(backend, self._channel.sender(), paste=self._config.paste).start()
                self._loop(backend)
        finally:
            self._channel.close()
            # Injected backends belong to the caller.
            if self._backend is None:
                backend.close()
        logger.debug(f"Run loop finished after {self.frames} frames")

    def _loop(self, backend: TerminalBackend) -> None:
        startup = Msg.wrap(self._model.startup())
        if startup is not None:
            if not self._chain(startup):
                return
            self._render(backend)

        while True:
            msg = self._channel.recv()
            if not self._chain(msg):
                return
            self._render(backend)

    def _chain(self, msg: Optional[Msg]) -> bool:
        """Drain one message and its follow-ups. Returns False on Quit."""
        while msg is not None:
            if msg.is_(Quit):
                logger.debug("Quit received")
                return False
            self._model, follow_up = self._model.update(msg)
            msg = Msg.wrap(follow_up)
        return True

    def _render(self, backend: TerminalBackend) -> None:
        frame = self._model.view().replace("\n", "\r\n")
        try:
            backend.clear()
            backend.move_to_origin()
            backend.write(frame)
            backend.flush()
        except OSError as e:
            raise TerminalError(f"Failed to draw frame: {e}") from e
        self.frames += 1
