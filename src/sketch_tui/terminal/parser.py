"""
Translation of parsed VT100 input into sketch-tui messages.

prompt_toolkit's Vt100Parser turns raw bytes into KeyPress objects; this module
maps those onto Key / Mouse / Paste messages. Focus reports are split out of the
raw text before parsing because the VT100 parser does not know them.

Alt is reported by terminals as an ESC prefix, so an Escape key press directly
followed by another key in the same read is merged into one Alt+key.
"""

import re
from typing import Iterable, Optional, Union

from prompt_toolkit.key_binding.key_processor import KeyPress
from prompt_toolkit.keys import Keys

from sketch_tui.models.envelope import Message
from sketch_tui.models.events import (
    Focus,
    Key,
    KeyCode,
    KeyModifiers,
    Mouse,
    MouseButton,
    MouseEventKind,
    Paste,
)

# prompt_toolkit key names that don't map one-to-one onto a KeyCode.
_SPECIAL_KEYS: dict[str, tuple[str, KeyModifiers]] = {
    "c-m": (KeyCode.ENTER, KeyModifiers.NONE),
    "c-j": (KeyCode.ENTER, KeyModifiers.NONE),
    "c-i": (KeyCode.TAB, KeyModifiers.NONE),
    "c-h": (KeyCode.BACKSPACE, KeyModifiers.NONE),
    "c-@": (" ", KeyModifiers.CONTROL),
    "s-tab": (KeyCode.BACK_TAB, KeyModifiers.SHIFT),
    "escape": (KeyCode.ESC, KeyModifiers.NONE),
    "s-escape": (KeyCode.ESC, KeyModifiers.SHIFT),
}

_PREFIXES = {"c-": KeyModifiers.CONTROL, "s-": KeyModifiers.SHIFT}

_SGR_MOUSE_RE = re.compile(r"^\x1b\[<(\d+);(\d+);(\d+)([Mm])$")
_URXVT_MOUSE_RE = re.compile(r"^\x1b\[(\d+);(\d+);(\d+)M$")
_FOCUS_RE = re.compile(r"\x1b\[([IO])")

_BUTTONS = {0: MouseButton.LEFT, 1: MouseButton.MIDDLE, 2: MouseButton.RIGHT}
_WHEEL = {
    0: MouseEventKind.SCROLL_UP,
    1: MouseEventKind.SCROLL_DOWN,
    2: MouseEventKind.SCROLL_LEFT,
    3: MouseEventKind.SCROLL_RIGHT,
}


def split_focus(text: str) -> list[Union[str, Focus]]:
    """Split focus-in / focus-out reports out of raw terminal text."""
    parts: list[Union[str, Focus]] = []
    for index, chunk in enumerate(_FOCUS_RE.split(text)):
        if index % 2:
            parts.append(Focus.gained() if chunk == "I" else Focus.lost())
        elif chunk:
            parts.append(chunk)
    return parts


def translate_key(name: str) -> Optional[Key]:
    """Map a prompt_toolkit key name ("c-a", "s-left", "f5", "x") to a Key."""
    if len(name) == 1:
        modifiers = KeyModifiers.SHIFT if name.isupper() else KeyModifiers.NONE
        return Key(code=name, modifiers=modifiers)

    if name in _SPECIAL_KEYS:
        code, modifiers = _SPECIAL_KEYS[name]
        return Key(code=code, modifiers=modifiers)

    if name.startswith("<"):
        # <any>, <cursor-position-response>, <sigint>, ... carry no key.
        return None

    modifiers = KeyModifiers.NONE
    while len(name) > 2 and name[:2] in _PREFIXES:
        modifiers |= _PREFIXES[name[:2]]
        name = name[2:]
    return Key(code=name, modifiers=modifiers)


def parse_mouse(data: str) -> Optional[Mouse]:
    """Decode an SGR, urxvt or X10 mouse report. Returns None if unrecognised."""
    match = _SGR_MOUSE_RE.match(data)
    if match:
        code, x, y = (int(v) for v in match.group(1, 2, 3))
        return _decode_mouse(code, x, y, released=match.group(4) == "m")

    match = _URXVT_MOUSE_RE.match(data)
    if match:
        code, x, y = (int(v) for v in match.group(1, 2, 3))
        return _decode_mouse(code - 32, x, y, released=False)

    if data.startswith("\x1b[M") and len(data) == 6:
        code, x, y = (ord(c) - 32 for c in data[3:])
        return _decode_mouse(code, x, y, released=False)

    return None


def _decode_mouse(code: int, x: int, y: int, released: bool) -> Mouse:
    modifiers = KeyModifiers.NONE
    if code & 4:
        modifiers |= KeyModifiers.SHIFT
    if code & 8:
        modifiers |= KeyModifiers.ALT
    if code & 16:
        modifiers |= KeyModifiers.CONTROL

    low = code & 3
    button: Optional[MouseButton] = None
    if code & 64:
        kind = _WHEEL[low]
    elif code & 32:
        if low == 3:
            kind = MouseEventKind.MOVED
        else:
            kind = MouseEventKind.DRAG
            button = _BUTTONS[low]
    elif low == 3:
        # X10 release: the button is not reported.
        kind = MouseEventKind.UP
    else:
        kind = MouseEventKind.UP if released else MouseEventKind.DOWN
        button = _BUTTONS[low]

    return Mouse(kind=kind, button=button, modifiers=modifiers, column=max(x - 1, 0), row=max(y - 1, 0))


def translate_press(press: KeyPress) -> Optional[Message]:
    """Translate a single KeyPress. Returns None for presses that carry no message."""
    if press.key == Keys.BracketedPaste:
        return Paste(text=press.data)
    if press.key == Keys.Vt100MouseEvent:
        return parse_mouse(press.data)
    name = press.key.value if isinstance(press.key, Keys) else press.key
    return translate_key(name)


def translate(presses: Iterable[KeyPress]) -> list[Message]:
    """Translate one read's worth of key presses, merging ESC prefixes into Alt."""
    out: list[Message] = []
    pending_escape = False
    for press in presses:
        if press.key == Keys.Escape and not pending_escape:
            pending_escape = True
            continue

        msg = translate_press(press)
        if pending_escape:
            pending_escape = False
            if isinstance(msg, Key):
                msg = msg.model_copy(update={"modifiers": msg.modifiers | KeyModifiers.ALT})
            else:
                out.append(Key(code=KeyCode.ESC))
        if msg is not None:
            out.append(msg)

    if pending_escape:
        out.append(Key(code=KeyCode.ESC))
    return out
