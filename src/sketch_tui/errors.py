"""
sketch-tui error types.
"""

from typing import Any, Optional


class SketchError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class TerminalError(SketchError):
    """The terminal backend failed (raw mode, screen writes or event reads)."""

    def __init__(self, message: str, code: str = "terminal_error", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)


class ChannelClosedError(SketchError):
    def __init__(self, message: str = "message channel is closed"):
        super().__init__("channel_closed", message)


class ConfigError(SketchError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("config_error", message, details)
