"""
Terminal session guard — raw mode + alternate screen with crash-safe restore.

``TerminalSession`` is a context manager for the normal path. Faults that end
the process or a thread outside that scope are covered by
``install_fault_hook()``, which restores every live session before handing the
original exception to the previous hook.
"""

import logging
import sys
import threading
from typing import Any, Optional

from sketch_tui.config import AppConfig
from sketch_tui.errors import TerminalError
from sketch_tui.terminal.backend import TerminalBackend

logger = logging.getLogger(__name__)

_active_sessions: "list[TerminalSession]" = []
_sessions_lock = threading.Lock()
_hook_installed = False


class TerminalSession:
    def __init__(self, backend: TerminalBackend, config: Optional[AppConfig] = None):
        self._backend = backend
        self._config = config or AppConfig()
        self._undo: list[tuple[str, Any]] = []
        self._lock = threading.Lock()

    @property
    def active(self) -> bool:
        return bool(self._undo)

    def __enter__(self) -> "TerminalSession":
        with _sessions_lock:
            _active_sessions.append(self)
        try:
            self._step("disable_raw_mode", self._backend.enable_raw_mode, self._backend.disable_raw_mode)
            if self._config.alternate_screen:
                self._step(
                    "leave_alternate_screen",
                    self._backend.enter_alternate_screen,
                    self._backend.leave_alternate_screen,
                )
            self._step(
                "disable_reporting",
                lambda: self._backend.enable_reporting(
                    mouse=self._config.mouse, focus=self._config.focus, paste=self._config.paste,
                ),
                self._backend.disable_reporting,
            )
        except BaseException:
            self.restore(strict=False)
            raise
        logger.debug("Terminal session entered")
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        # Don't let a restore failure mask the exception that is already unwinding.
        self.restore(strict=exc is None)

    def _step(self, name: str, do: Any, undo: Any) -> None:
        try:
            do()
        except OSError as e:
            raise TerminalError(f"Failed to set up terminal: {e}") from e
        self._undo.append((name, undo))

    def restore(self, strict: bool = True) -> None:
        """Undo every setup step, newest first. Safe to call more than once.

        With ``strict`` the first failure is raised as TerminalError once all
        steps have been attempted; otherwise failures are only logged.
        """
        with self._lock:
            undo, self._undo = self._undo, []
        with _sessions_lock:
            if self in _active_sessions:
                _active_sessions.remove(self)
        if not undo:
            return

        first_error: Optional[BaseException] = None
        for name, step in reversed(undo):
            try:
                step()
            except Exception as e:
                logger.error(f"Terminal restore step {name} failed: {e}")
                first_error = first_error or e
        logger.debug("Terminal session restored")
        if strict and first_error is not None:
            raise TerminalError(f"Failed to restore terminal: {first_error}") from first_error


def restore_all() -> None:
    """Best-effort restore of every live session."""
    with _sessions_lock:
        sessions = list(_active_sessions)
    for session in sessions:
        session.restore(strict=False)


def install_fault_hook() -> None:
    """Restore the terminal before any unhandled exception is reported. Idempotent."""
    global _hook_installed
    if _hook_installed:
        return
    _hook_installed = True

    previous_excepthook = sys.excepthook
    previous_threading_hook = threading.excepthook

    def excepthook(exc_type: Any, exc: Any, tb: Any) -> None:
        restore_all()
        previous_excepthook(exc_type, exc, tb)

    def threading_excepthook(args: Any) -> None:
        restore_all()
        previous_threading_hook(args)

    sys.excepthook = excepthook
    threading.excepthook = threading_excepthook
