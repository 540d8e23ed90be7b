import logging

import pytest

from friendkb.config import get_settings
from friendkb.config.settings import Settings
from friendkb.core.logging.builder import make_dict_config, setup_logging, stop_queue_logging
from friendkb.core.logging.formatters import ColorFormatter, JsonFormatter


@pytest.fixture
def restore_logging():
    yield
    stop_queue_logging()
    setup_logging(get_settings())


def test_stdout_mode_uses_error_console(tmp_path):
    config = make_dict_config(Settings(LOG_TO_STDOUT=True, LOG_DIR=tmp_path))

    assert set(config["handlers"]) == {"console", "error_console"}
    assert config["loggers"][""]["handlers"] == ["console", "error_console"]


def test_file_mode_adds_rotating_files(tmp_path):
    config = make_dict_config(Settings(LOG_TO_STDOUT=False, LOG_DIR=tmp_path, LOG_BACKUP_COUNT=2))

    assert set(config["handlers"]) == {"console", "file", "error_file"}
    file_handler = config["handlers"]["file"]
    assert file_handler["class"] == "logging.handlers.RotatingFileHandler"
    assert file_handler["filename"] == str(tmp_path / "friendkb.log")
    assert file_handler["backupCount"] == 2
    assert config["handlers"]["error_file"]["level"] == "ERROR"


def test_every_handler_runs_both_filters(tmp_path):
    config = make_dict_config(Settings(LOG_TO_STDOUT=False, LOG_DIR=tmp_path))
    for handler in config["handlers"].values():
        assert handler["filters"] == ["correlation_id", "redact"]


def test_formatter_selection():
    text = make_dict_config(Settings(LOG_FORMAT="text"))
    assert text["formatters"]["standard"]["()"] is ColorFormatter
    assert text["handlers"]["console"]["formatter"] == "standard"

    as_json = make_dict_config(Settings(LOG_FORMAT="json", ENV="production"))
    assert as_json["formatters"]["json"]["()"] is JsonFormatter
    assert as_json["formatters"]["json"]["env"] == "production"
    assert as_json["handlers"]["console"]["formatter"] == "json"


def test_sql_logging_toggle():
    assert make_dict_config(Settings(ENABLE_SQL_LOGGING=False))["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"
    assert make_dict_config(Settings(ENABLE_SQL_LOGGING=True))["loggers"]["sqlalchemy.engine"]["level"] == "DEBUG"


def test_setup_logging_creates_log_dir(tmp_path, restore_logging):
    log_dir = tmp_path / "nested" / "logs"

    setup_logging(Settings(LOG_TO_STDOUT=False, LOG_DIR=log_dir, LOG_LEVEL="debug"))

    assert log_dir.is_dir()
    assert logging.getLogger().level == logging.DEBUG
