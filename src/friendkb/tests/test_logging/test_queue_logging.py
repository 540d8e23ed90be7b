import logging
from logging.handlers import QueueHandler
from pathlib import Path

import pytest

from friendkb.config import get_settings
from friendkb.config.settings import Settings
from friendkb.core.logging.builder import (
    NonBlockingQueueHandler,
    get_queue_stats,
    setup_logging,
    stop_queue_logging,
)
from friendkb.core.logging.filters import correlation_scope


@pytest.fixture
def restore_logging():
    yield
    stop_queue_logging()
    setup_logging(get_settings())


def make_queue_settings(tmp_path: Path, **overrides) -> Settings:
    values = {
        "ENV": "testing",
        "LOG_LEVEL": "DEBUG",
        "LOG_FORMAT": "json",
        "LOG_TO_STDOUT": False,
        "LOG_DIR": tmp_path,
        "LOG_MAX_BYTES": 1_000_000,
        "LOG_BACKUP_COUNT": 1,
        "LOG_USE_QUEUE": True,
    }
    values.update(overrides)
    return Settings(**values)


def test_queue_listener_writes_file(tmp_path, restore_logging):
    settings = make_queue_settings(tmp_path)
    setup_logging(settings)

    logger = logging.getLogger("friendkb.test.queue")
    with correlation_scope("queue-cid-1"):
        for i in range(10):
            logger.info("test message %d", i, extra={"iteration": i, "password": "hunter2"})

    stop_queue_logging()

    text = (tmp_path / "friendkb.log").read_text()
    assert "test message 0" in text
    assert "test message 9" in text
    assert "iteration" in text
    assert "queue-cid-1" in text
    assert "hunter2" not in text


def test_root_has_only_queue_handler(tmp_path, restore_logging):
    setup_logging(make_queue_settings(tmp_path))

    handlers = logging.getLogger().handlers
    assert [type(h) for h in handlers if isinstance(h, QueueHandler)] == [QueueHandler]
    assert get_queue_stats()["queue_present"] is True


def test_bounded_non_blocking_queue(tmp_path, restore_logging):
    setup_logging(make_queue_settings(tmp_path, LOG_QUEUE_MAX_SIZE=100, LOG_QUEUE_BLOCKING=False))

    assert any(isinstance(h, NonBlockingQueueHandler) for h in logging.getLogger().handlers)


def test_stop_without_listener_is_noop():
    stop_queue_logging()
    stop_queue_logging()
