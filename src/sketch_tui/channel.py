"""
Ordered message channel between producers and the run loop.

Many producers (the terminal event thread, consumer worker threads, signal
handlers) push through ``Sender`` handles; the run loop is the only receiver.
"""

import logging
import queue
import threading
from typing import Union

from sketch_tui.errors import ChannelClosedError
from sketch_tui.models.envelope import Message, Msg

logger = logging.getLogger(__name__)


class _Failure:
    __slots__ = ("error",)

    def __init__(self, error: BaseException):
        self.error = error


class Channel:
    """FIFO, unbounded, multi-producer / single-consumer."""

    def __init__(self) -> None:
        # SimpleQueue.put is reentrant, so senders may run inside signal handlers.
        self._queue: "queue.SimpleQueue[Union[Msg, _Failure]]" = queue.SimpleQueue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def sender(self) -> "Sender":
        return Sender(self)

    def put(self, msg: Union[Msg, Message]) -> None:
        if self._closed.is_set():
            raise ChannelClosedError()
        self._queue.put(Msg.wrap(msg))

    def fail(self, error: BaseException) -> None:
        """Deliver a producer fault; the receiver raises it in arrival order."""
        if self._closed.is_set():
            raise ChannelClosedError()
        self._queue.put(_Failure(error))

    def recv(self) -> Msg:
        """Block until the next message arrives. Raises a delivered fault."""
        if self._closed.is_set():
            raise ChannelClosedError()
        item = self._queue.get()
        if isinstance(item, _Failure):
            raise item.error
        return item

    def close(self) -> None:
        if not self._closed.is_set():
            self._closed.set()
            logger.debug("Message channel closed")


class Sender:
    """Producer handle. Safe to share between threads; ``clone()`` for parity."""

    __slots__ = ("_channel",)

    def __init__(self, channel: Channel):
        self._channel = channel

    @property
    def closed(self) -> bool:
        return self._channel.closed

    def send(self, msg: Union[Msg, Message]) -> None:
        """Queue a message for the run loop. Raises ChannelClosedError after shutdown."""
        self._channel.put(msg)

    def fail(self, error: BaseException) -> None:
        self._channel.fail(error)

    def clone(self) -> "Sender":
        return Sender(self._channel)
