"""Single-line text input with a movable cursor. Ctrl+C quits."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from sketch_tui.app import Model
from sketch_tui.models.envelope import Message, Msg
from sketch_tui.models.events import Key, KeyCode, Paste, Quit
from sketch_tui.style import Style

CURSOR_STYLE = Style().reverse()


class TextInput(BaseModel, Model):
    model_config = ConfigDict(frozen=True)

    text: str = ""
    cursor: int = 0

    def _insert(self, chars: str) -> "TextInput":
        text = self.text[: self.cursor] + chars + self.text[self.cursor :]
        return self.model_copy(update={"text": text, "cursor": self.cursor + len(chars)})

    def update(self, msg: Msg) -> "tuple[TextInput, Optional[Message]]":
        paste = msg.cast(Paste)
        if paste is not None:
            return self._insert(paste.text.replace("\r", "").replace("\n", " ")), None

        key = msg.cast(Key)
        if key is None:
            return self, None

        if key.code == "c" and key.with_control:
            return self, Quit()
        if key.char is not None and not key.with_control:
            return self._insert(key.char), None
        if key.code == KeyCode.BACKSPACE and self.cursor > 0:
            text = self.text[: self.cursor - 1] + self.text[self.cursor :]
            return self.model_copy(update={"text": text, "cursor": self.cursor - 1}), None
        if key.code == KeyCode.LEFT:
            return self.model_copy(update={"cursor": max(self.cursor - 1, 0)}), None
        if key.code == KeyCode.RIGHT:
            return self.model_copy(update={"cursor": min(self.cursor + 1, len(self.text))}), None
        return self, None

    def view(self) -> str:
        under_cursor = self.text[self.cursor : self.cursor + 1] or " "
        return self.text[: self.cursor] + CURSOR_STYLE.render(under_cursor) + self.text[self.cursor + 1 :]
