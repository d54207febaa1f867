"""Enter increments the counter, q quits."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from sketch_tui.app import Model
from sketch_tui.models.envelope import Message, Msg
from sketch_tui.models.events import Key, KeyCode, Quit
from sketch_tui.style import Style

COUNTER_STYLE = Style().yellow().bold()


class Counter(BaseModel, Model):
    model_config = ConfigDict(frozen=True)

    count: int = 0

    def update(self, msg: Msg) -> "tuple[Counter, Optional[Message]]":
        key = msg.cast(Key)
        if key is not None:
            if key.code == KeyCode.ENTER:
                return self.model_copy(update={"count": self.count + 1}), None
            if key.code == "q":
                return self, Quit()
        return self, None

    def view(self) -> str:
        return COUNTER_STYLE.render(str(self.count))
