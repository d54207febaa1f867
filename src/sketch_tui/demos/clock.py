"""
Clock — shows how to drive a model from a background thread.

``startup()`` returns the first Tick so the time shows up immediately; a ticker
thread holding a Sender clone keeps sending one Tick per interval.
"""

import logging
import threading
import time
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from sketch_tui.app import Model
from sketch_tui.channel import Sender
from sketch_tui.errors import ChannelClosedError
from sketch_tui.models.envelope import Message, Msg
from sketch_tui.models.events import Key, Quit
from sketch_tui.style import Style

logger = logging.getLogger(__name__)

TIME_STYLE = Style().cyan().bold()
HINT_STYLE = Style().dark_grey()


class Tick(Message):
    at: datetime


class Clock(BaseModel, Model):
    model_config = ConfigDict(frozen=True)

    now: Optional[datetime] = None
    ticks: int = 0

    def startup(self) -> Tick:
        return Tick(at=datetime.now())

    def update(self, msg: Msg) -> "tuple[Clock, Optional[Message]]":
        tick = msg.cast(Tick)
        if tick is not None:
            return self.model_copy(update={"now": tick.at, "ticks": self.ticks + 1}), None
        key = msg.cast(Key)
        if key is not None and key.code == "q":
            return self, Quit()
        return self, None

    def view(self) -> str:
        shown = self.now.strftime("%H:%M:%S") if self.now else "--:--:--"
        return f"{TIME_STYLE.render(shown)}\n{HINT_STYLE.render(f'{self.ticks} ticks, q to quit')}"


def start_ticker(sender: Sender, interval: float = 1.0) -> threading.Thread:
    """Send a Tick every ``interval`` seconds until the app has stopped."""

    def run() -> None:
        while True:
            time.sleep(interval)
            try:
                sender.send(Tick(at=datetime.now()))
            except ChannelClosedError:
                logger.debug("Clock ticker stopping")
                return

    thread = threading.Thread(target=run, name="sketch-clock-ticker", daemon=True)
    thread.start()
    return thread
