"""
sketch-tui — Model-View-Update runtime for full-screen terminal apps.

State changes only through messages; every message (and its follow-ups)
ends in one full repaint of the model's view.
"""

from sketch_tui.app import App, Model
from sketch_tui.channel import Sender
from sketch_tui.config import AppConfig, load_config
from sketch_tui.errors import SketchError, TerminalError, ChannelClosedError, ConfigError
from sketch_tui.models.envelope import Message, Msg
from sketch_tui.models.events import (
    Focus,
    FocusState,
    Key,
    KeyCode,
    KeyEventKind,
    KeyEventState,
    KeyModifiers,
    Mouse,
    MouseButton,
    MouseEventKind,
    Paste,
    Quit,
    Resize,
)
from sketch_tui.style import Align, Blink, Style, visible_length

__version__ = "0.1.0"
__all__ = [
    "App",
    "Model",
    "Sender",
    "AppConfig",
    "load_config",
    "SketchError",
    "TerminalError",
    "ChannelClosedError",
    "ConfigError",
    "Message",
    "Msg",
    "Quit",
    "Key",
    "KeyCode",
    "KeyEventKind",
    "KeyEventState",
    "KeyModifiers",
    "Mouse",
    "MouseButton",
    "MouseEventKind",
    "Focus",
    "FocusState",
    "Paste",
    "Resize",
    "Style",
    "Align",
    "Blink",
    "visible_length",
]
