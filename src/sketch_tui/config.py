"""
Runtime configuration.

Read from JSON (``$SKETCH_CONFIG`` or ``~/.sketch/config.json``); every field
has a default so a missing file is fine.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sketch_tui.errors import ConfigError

CONFIG_FILE = Path.home() / ".sketch" / "config.json"
CONFIG_ENV = "SKETCH_CONFIG"


class AppConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    paste: bool = False          # emit Paste messages (bracketed paste mode)
    mouse: bool = False
    focus: bool = False
    alternate_screen: bool = True
    escape_timeout: float = Field(default=0.05, ge=0)
    log_file: Optional[Path] = None
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level

    def merged(self, **overrides: Any) -> "AppConfig":
        """Return a copy with every non-None override applied and validated."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        return AppConfig.model_validate({**self.model_dump(), **updates})


def config_path() -> Path:
    env = os.environ.get(CONFIG_ENV)
    return Path(env).expanduser() if env else CONFIG_FILE


def load_config(path: Optional[Path] = None) -> AppConfig:
    path = path or config_path()
    try:
        text = path.read_text()
    except FileNotFoundError:
        return AppConfig()
    if not text.strip():
        return AppConfig()
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}", details={"path": str(path)})
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a JSON object", details={"path": str(path)})
    try:
        return AppConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}", details={"path": str(path)})


def configure_logging(config: AppConfig) -> None:
    """Route sketch_tui logs to ``config.log_file``; stdout belongs to the screen."""
    logger = logging.getLogger("sketch_tui")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    if config.log_file is None:
        logger.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(config.log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(config.log_level)
    logger.propagate = False
