"""
Built-in messages — Quit plus one message per terminal event class.

Terminal messages are only produced by the event source; they are read-only
facts about a single input occurrence.
"""

from enum import Enum, IntFlag
from typing import Optional

from sketch_tui.models.envelope import Message


class Quit(Message):
    """Stops the run loop wherever it appears in a message chain."""


class KeyModifiers(IntFlag):
    NONE = 0
    SHIFT = 1
    CONTROL = 2
    ALT = 4
    SUPER = 8
    HYPER = 16
    META = 32


class KeyEventKind(str, Enum):
    PRESS = "press"
    RELEASE = "release"
    REPEAT = "repeat"


class KeyEventState(IntFlag):
    NONE = 0
    KEYPAD = 1
    CAPS_LOCK = 2
    NUM_LOCK = 4


class KeyCode(str, Enum):
    """Names of non-character keys. Character keys use the character itself."""

    BACKSPACE = "backspace"
    ENTER = "enter"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    PAGE_UP = "pageup"
    PAGE_DOWN = "pagedown"
    TAB = "tab"
    BACK_TAB = "backtab"
    DELETE = "delete"
    INSERT = "insert"
    ESC = "esc"
    F1 = "f1"
    F2 = "f2"
    F3 = "f3"
    F4 = "f4"
    F5 = "f5"
    F6 = "f6"
    F7 = "f7"
    F8 = "f8"
    F9 = "f9"
    F10 = "f10"
    F11 = "f11"
    F12 = "f12"


class Key(Message):
    """Keyboard input."""

    code: str
    modifiers: KeyModifiers = KeyModifiers.NONE
    kind: KeyEventKind = KeyEventKind.PRESS
    state: KeyEventState = KeyEventState.NONE

    @property
    def char(self) -> Optional[str]:
        """The typed character, or None for named keys."""
        return self.code if len(self.code) == 1 else None

    @property
    def is_press(self) -> bool:
        return self.kind == KeyEventKind.PRESS

    @property
    def is_release(self) -> bool:
        return self.kind == KeyEventKind.RELEASE

    @property
    def is_repeat(self) -> bool:
        return self.kind == KeyEventKind.REPEAT

    @property
    def with_shift(self) -> bool:
        return bool(self.modifiers & KeyModifiers.SHIFT)

    @property
    def with_control(self) -> bool:
        return bool(self.modifiers & KeyModifiers.CONTROL)

    @property
    def with_alt(self) -> bool:
        return bool(self.modifiers & KeyModifiers.ALT)

    @property
    def with_super(self) -> bool:
        return bool(self.modifiers & KeyModifiers.SUPER)

    @property
    def with_hyper(self) -> bool:
        return bool(self.modifiers & KeyModifiers.HYPER)

    @property
    def with_meta(self) -> bool:
        return bool(self.modifiers & KeyModifiers.META)

    @property
    def from_keypad(self) -> bool:
        return bool(self.state & KeyEventState.KEYPAD)

    @property
    def with_capslock(self) -> bool:
        return bool(self.state & KeyEventState.CAPS_LOCK)

    @property
    def with_numlock(self) -> bool:
        return bool(self.state & KeyEventState.NUM_LOCK)


class MouseButton(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"


class MouseEventKind(str, Enum):
    DOWN = "down"
    UP = "up"
    DRAG = "drag"
    MOVED = "moved"
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"
    SCROLL_LEFT = "scroll_left"
    SCROLL_RIGHT = "scroll_right"


_SCROLL_KINDS = {
    MouseEventKind.SCROLL_UP,
    MouseEventKind.SCROLL_DOWN,
    MouseEventKind.SCROLL_LEFT,
    MouseEventKind.SCROLL_RIGHT,
}


class Mouse(Message):
    """Mouse input. Column and row are zero-based."""

    kind: MouseEventKind
    button: Optional[MouseButton] = None
    modifiers: KeyModifiers = KeyModifiers.NONE
    column: int
    row: int

    @property
    def is_left(self) -> bool:
        return self.button == MouseButton.LEFT

    @property
    def is_right(self) -> bool:
        return self.button == MouseButton.RIGHT

    @property
    def is_middle(self) -> bool:
        return self.button == MouseButton.MIDDLE

    @property
    def is_scroll(self) -> bool:
        return self.kind in _SCROLL_KINDS

    @property
    def is_press(self) -> bool:
        return self.kind == MouseEventKind.DOWN

    @property
    def is_release(self) -> bool:
        return self.kind == MouseEventKind.UP

    @property
    def is_drag(self) -> bool:
        return self.kind == MouseEventKind.DRAG

    @property
    def is_move(self) -> bool:
        return self.kind == MouseEventKind.MOVED

    @property
    def is_scroll_up(self) -> bool:
        return self.kind == MouseEventKind.SCROLL_UP

    @property
    def is_scroll_down(self) -> bool:
        return self.kind == MouseEventKind.SCROLL_DOWN

    @property
    def is_scroll_left(self) -> bool:
        return self.kind == MouseEventKind.SCROLL_LEFT

    @property
    def is_scroll_right(self) -> bool:
        return self.kind == MouseEventKind.SCROLL_RIGHT

    @property
    def with_shift(self) -> bool:
        return bool(self.modifiers & KeyModifiers.SHIFT)

    @property
    def with_control(self) -> bool:
        return bool(self.modifiers & KeyModifiers.CONTROL)

    @property
    def with_alt(self) -> bool:
        return bool(self.modifiers & KeyModifiers.ALT)

    @property
    def with_super(self) -> bool:
        return bool(self.modifiers & KeyModifiers.SUPER)

    @property
    def with_hyper(self) -> bool:
        return bool(self.modifiers & KeyModifiers.HYPER)

    @property
    def with_meta(self) -> bool:
        return bool(self.modifiers & KeyModifiers.META)


class FocusState(str, Enum):
    GAINED = "gained"
    LOST = "lost"


class Focus(Message):
    """Terminal focus change."""

    state: FocusState

    @classmethod
    def gained(cls) -> "Focus":
        return cls(state=FocusState.GAINED)

    @classmethod
    def lost(cls) -> "Focus":
        return cls(state=FocusState.LOST)

    @property
    def is_gained(self) -> bool:
        return self.state == FocusState.GAINED

    @property
    def is_lost(self) -> bool:
        return self.state == FocusState.LOST


class Resize(Message):
    """Terminal window resized."""

    width: int
    height: int


class Paste(Message):
    """Text pasted from the clipboard (bracketed paste)."""

    text: str
