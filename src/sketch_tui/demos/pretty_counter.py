"""Centered, styled counter that follows terminal resizes."""

import shutil
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from sketch_tui.app import Model
from sketch_tui.models.envelope import Message, Msg
from sketch_tui.models.events import Key, KeyCode, Quit, Resize
from sketch_tui.style import Style

TITLE_STYLE = Style().bold()
COUNTER_STYLE = Style().yellow().bold()


def _terminal_size() -> tuple[int, int]:
    size = shutil.get_terminal_size()
    return size.columns, size.lines


class PrettyCounter(BaseModel, Model):
    model_config = ConfigDict(frozen=True)

    count: int = 0
    width: int = Field(default_factory=lambda: _terminal_size()[0])
    height: int = Field(default_factory=lambda: _terminal_size()[1])

    def update(self, msg: Msg) -> "tuple[PrettyCounter, Optional[Message]]":
        resize = msg.cast(Resize)
        if resize is not None:
            return self.model_copy(update={"width": resize.width, "height": resize.height}), None

        key = msg.cast(Key)
        if key is None:
            return self, None
        if key.code == KeyCode.ENTER and key.is_press:
            return self.model_copy(update={"count": self.count + 1}), None
        if key.code == "q" or (key.code == "c" and key.with_control):
            return self, Quit()
        return self, None

    def view(self) -> str:
        content = f"{TITLE_STYLE.render('Count:')} {COUNTER_STYLE.render(str(self.count))}"
        return "\n" * (self.height // 2) + Style().center().render(content, width=self.width)
