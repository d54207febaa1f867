"""
Text styling for views.

``Style`` is an immutable builder; every method returns a new Style:

    COUNTER_STYLE = Style().yellow().bold()
    text = COUNTER_STYLE.render("42")

Colours are anything rich understands ("red", "bright_blue", "#ff8800",
"color(208)"). ANSI codes are produced by ``rich.style.Style.render``.
"""

import shutil
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from rich.color import ColorSystem
from rich.style import Style as RichStyle
from rich.text import Text


class Align(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class Blink(str, Enum):
    SLOW = "slow"    # less than 150 per minute
    RAPID = "rapid"  # 150 per minute or more


def visible_length(text: str) -> int:
    """Terminal columns taken by ``text``, not counting ANSI escape sequences.

    Wide characters (CJK, most emoji) count as two columns.
    """
    return Text.from_ansi(text).cell_len


def strip_ansi(text: str) -> str:
    return Text.from_ansi(text).plain


@dataclass(frozen=True)
class Style:
    color: Optional[str] = None
    bgcolor: Optional[str] = None
    is_bold: bool = False
    is_dim: bool = False
    is_italic: bool = False
    is_underline: bool = False
    blinking: Optional[Blink] = None
    is_reverse: bool = False
    is_crossed_out: bool = False
    alignment: Align = Align.LEFT

    def fg(self, color: str) -> "Style":
        """Set the text colour."""
        return replace(self, color=color)

    def bg(self, color: str) -> "Style":
        """Set the background colour."""
        return replace(self, bgcolor=color)

    def blink(self, speed: Blink = Blink.SLOW) -> "Style":
        return replace(self, blinking=speed)

    def slow_blink(self) -> "Style":
        return self.blink(Blink.SLOW)

    def rapid_blink(self) -> "Style":
        return self.blink(Blink.RAPID)

    def align(self, alignment: Align) -> "Style":
        return replace(self, alignment=alignment)

    def left(self) -> "Style":
        return self.align(Align.LEFT)

    def center(self) -> "Style":
        return self.align(Align.CENTER)

    def right(self) -> "Style":
        return self.align(Align.RIGHT)

    def bold(self) -> "Style":
        return replace(self, is_bold=True)

    def dim(self) -> "Style":
        return replace(self, is_dim=True)

    def italic(self) -> "Style":
        return replace(self, is_italic=True)

    def underline(self) -> "Style":
        return replace(self, is_underline=True)

    def reverse(self) -> "Style":
        """Swap the text and background colours."""
        return replace(self, is_reverse=True)

    def crossed_out(self) -> "Style":
        return replace(self, is_crossed_out=True)

    # Colour shortcuts. "dark_*" are the classic 8 colours, the plain names the bright ones.
    def black(self) -> "Style":
        return self.fg("black")

    def dark_grey(self) -> "Style":
        return self.fg("bright_black")

    def red(self) -> "Style":
        return self.fg("bright_red")

    def dark_red(self) -> "Style":
        return self.fg("red")

    def green(self) -> "Style":
        return self.fg("bright_green")

    def dark_green(self) -> "Style":
        return self.fg("green")

    def yellow(self) -> "Style":
        return self.fg("bright_yellow")

    def dark_yellow(self) -> "Style":
        return self.fg("yellow")

    def blue(self) -> "Style":
        return self.fg("bright_blue")

    def dark_blue(self) -> "Style":
        return self.fg("blue")

    def magenta(self) -> "Style":
        return self.fg("bright_magenta")

    def dark_magenta(self) -> "Style":
        return self.fg("magenta")

    def cyan(self) -> "Style":
        return self.fg("bright_cyan")

    def dark_cyan(self) -> "Style":
        return self.fg("cyan")

    def white(self) -> "Style":
        return self.fg("bright_white")

    def grey(self) -> "Style":
        return self.fg("white")

    def on_black(self) -> "Style":
        return self.bg("black")

    def on_dark_grey(self) -> "Style":
        return self.bg("bright_black")

    def on_red(self) -> "Style":
        return self.bg("bright_red")

    def on_dark_red(self) -> "Style":
        return self.bg("red")

    def on_green(self) -> "Style":
        return self.bg("bright_green")

    def on_dark_green(self) -> "Style":
        return self.bg("green")

    def on_yellow(self) -> "Style":
        return self.bg("bright_yellow")

    def on_dark_yellow(self) -> "Style":
        return self.bg("yellow")

    def on_blue(self) -> "Style":
        return self.bg("bright_blue")

    def on_dark_blue(self) -> "Style":
        return self.bg("blue")

    def on_magenta(self) -> "Style":
        return self.bg("bright_magenta")

    def on_dark_magenta(self) -> "Style":
        return self.bg("magenta")

    def on_cyan(self) -> "Style":
        return self.bg("bright_cyan")

    def on_dark_cyan(self) -> "Style":
        return self.bg("cyan")

    def on_white(self) -> "Style":
        return self.bg("bright_white")

    def on_grey(self) -> "Style":
        return self.bg("white")

    def to_rich(self) -> RichStyle:
        return RichStyle(
            color=self.color,
            bgcolor=self.bgcolor,
            bold=self.is_bold or None,
            dim=self.is_dim or None,
            italic=self.is_italic or None,
            underline=self.is_underline or None,
            blink=(self.blinking == Blink.SLOW) or None,
            blink2=(self.blinking == Blink.RAPID) or None,
            reverse=self.is_reverse or None,
            strike=self.is_crossed_out or None,
        )

    def render(self, text: str, width: Optional[int] = None) -> str:
        """Render ``text`` with this style, padded for alignment within ``width`` columns.

        ``width`` defaults to the current terminal width.
        """
        if self.alignment != Align.LEFT:
            if width is None:
                width = shutil.get_terminal_size().columns
            length = visible_length(text)
            if self.alignment == Align.CENTER:
                pad = width // 2 - length // 2
            else:
                pad = width - length
            text = " " * max(pad, 0) + text
        return self.to_rich().render(text, color_system=ColorSystem.TRUECOLOR)
