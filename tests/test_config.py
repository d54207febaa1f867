"""Loading, merging and logging configuration."""

import json
import logging

import pytest

from sketch_tui import AppConfig, ConfigError, load_config
from sketch_tui.config import CONFIG_ENV, config_path, configure_logging


def test_defaults():
    config = AppConfig()
    assert config.paste is False
    assert config.mouse is False
    assert config.focus is False
    assert config.alternate_screen is True
    assert config.escape_timeout == 0.05
    assert config.log_file is None
    assert config.log_level == "WARNING"


def test_load_from_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"mouse": True, "log_level": "debug"}))
    config = load_config(path)
    assert config.mouse is True
    assert config.log_level == "DEBUG"


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "absent.json") == AppConfig()


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("  \n")
    assert load_config(path) == AppConfig()


@pytest.mark.parametrize(
    "content",
    ["{not json", "[1, 2]", '{"mouse": "sometimes"}', '{"unknown": 1}', '{"log_level": "LOUD"}'],
)
def test_invalid_file(tmp_path, content):
    path = tmp_path / "config.json"
    path.write_text(content)
    with pytest.raises(ConfigError) as excinfo:
        load_config(path)
    assert excinfo.value.details == {"path": str(path)}


def test_env_var_location(tmp_path, monkeypatch):
    path = tmp_path / "env.json"
    path.write_text(json.dumps({"focus": True}))
    monkeypatch.setenv(CONFIG_ENV, str(path))
    assert config_path() == path
    assert load_config().focus is True


def test_merged_ignores_none():
    config = AppConfig(mouse=True)
    assert config.merged(mouse=None, paste=None) is config
    merged = config.merged(paste=True, mouse=False)
    assert merged.paste is True
    assert merged.mouse is False


def test_merged_validates():
    with pytest.raises(ValueError):
        AppConfig().merged(log_level="chatty")


class TestLogging:
    @pytest.fixture(autouse=True)
    def reset_logger(self):
        logger = logging.getLogger("sketch_tui")
        yield
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "sketch.log"
        configure_logging(AppConfig(log_file=log_file, log_level="INFO"))
        logging.getLogger("sketch_tui.app").info("frame drawn")
        logging.getLogger("sketch_tui.app").debug("not written")
        for handler in logging.getLogger("sketch_tui").handlers:
            handler.flush()
        content = log_file.read_text()
        assert "INFO sketch_tui.app: frame drawn" in content
        assert "not written" not in content

    def test_no_log_file_installs_null_handler(self):
        configure_logging(AppConfig())
        handlers = logging.getLogger("sketch_tui").handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.NullHandler)

    def test_reconfigure_replaces_handlers(self, tmp_path):
        configure_logging(AppConfig(log_file=tmp_path / "a.log"))
        configure_logging(AppConfig(log_file=tmp_path / "b.log"))
        handlers = logging.getLogger("sketch_tui").handlers
        assert len(handlers) == 1
        assert handlers[0].baseFilename == str(tmp_path / "b.log")
