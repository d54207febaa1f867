"""
Terminal event source — background producer of terminal messages.

Blocks on the backend, wraps every event in a Msg and sends it to the run loop
in arrival order. There is no stop method: the thread is a daemon and may still
be blocked on a read when the process exits.
"""

import logging
import threading

from sketch_tui.channel import Sender
from sketch_tui.errors import ChannelClosedError, TerminalError
from sketch_tui.models.envelope import Msg
from sketch_tui.models.events import Paste
from sketch_tui.terminal.backend import TerminalBackend

logger = logging.getLogger(__name__)


class EventSource(threading.Thread):
    def __init__(self, backend: TerminalBackend, sender: Sender, *, paste: bool = False):
        super().__init__(name="sketch-terminal-events", daemon=True)
        self._backend = backend
        self._sender = sender
        self._paste = paste

    def run(self) -> None:
        logger.debug("Terminal event source started")
        try:
            self._pump()
        except ChannelClosedError:
            logger.debug("Message channel closed, terminal event source stopping")
        except Exception as e:
            logger.exception("Reading terminal events failed")
            error = e if isinstance(e, TerminalError) else TerminalError(f"Failed to read terminal event: {e}")
            if error is not e:
                error.__cause__ = e
            try:
                self._sender.fail(error)
            except ChannelClosedError:
                logger.debug("Run loop already gone, dropping terminal read failure")

    def _pump(self) -> None:
        while True:
            for event in self._backend.read_events():
                if isinstance(event, Paste) and not self._paste:
                    continue
                self._sender.send(Msg(event))
