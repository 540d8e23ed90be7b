"""
Logging builder: build and apply a dictConfig configuration, and optionally move
handler IO onto a background QueueListener.

 - make_dict_config(settings) is a pure function of Settings
 - setup_logging(settings) applies it; with LOG_USE_QUEUE the real handlers run in
   a listener thread while producers only enqueue records
 - NonBlockingQueueHandler drops (and counts) records when a bounded queue is full
   instead of blocking the event loop
 - stop_queue_logging() flushes and stops the listener at shutdown

Producer-side filters (CorrelationIdFilter, RedactFilter) are attached to the queue
handler so the ContextVar is read in the task that logged, not in the listener thread.
"""

from pathlib import Path
import logging
import logging.config
import queue as _queue
import threading
from logging.handlers import QueueHandler, QueueListener

from friendkb.config.settings import Settings
from friendkb.utils.logging import get_project_name

from .formatters import JsonFormatter, ColorFormatter
from .filters import CorrelationIdFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)

STANDARD_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(correlation_id)s | %(message)s"

_QUEUE_LISTENER: QueueListener | None = None
_QUEUE: _queue.Queue | None = None

_DROPPED_LOGS_COUNT = 0
_DROPPED_LOGS_LOCK = threading.Lock()


class NonBlockingQueueHandler(QueueHandler):
    """
    QueueHandler that never blocks the producer: when the bounded queue is full the
    record is dropped and a module-level counter is incremented.
    """

    def emit(self, record: logging.LogRecord) -> None:
        global _DROPPED_LOGS_COUNT
        try:
            self.queue.put_nowait(self.prepare(record))
        except _queue.Full:
            with _DROPPED_LOGS_LOCK:
                _DROPPED_LOGS_COUNT += 1


def get_queue_stats() -> dict:
    """Return small diagnostics about queue usage (dropped logs count)."""
    with _DROPPED_LOGS_LOCK:
        return {"dropped_logs": _DROPPED_LOGS_COUNT, "queue_present": _QUEUE is not None}


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping from settings.

      - formatters: "standard" (colored when LOG_FORMAT=text) and "json"
      - filters: "correlation_id", "redact"
      - handlers: console, plus file/error_file when writing to LOG_DIR,
        otherwise error_console
      - loggers: root, friendkb, sqlalchemy.engine
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": STANDARD_FORMAT,
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(),
        },
    }

    filters = {
        "correlation_id": {"()": CorrelationIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}

    if (not settings.LOG_TO_STDOUT) and settings.LOG_DIR:
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "friendkb": {
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "sqlalchemy.engine": {
                # SQL statements (INFO) and result rows (DEBUG) only on request
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Initialize logging from settings.

      1. Create LOG_DIR when logging to files.
      2. Apply dictConfig(make_dict_config(settings)).
      3. Add a CorrelationIdFilter on the root logger for records that reach
         handlers attached elsewhere.
      4. With LOG_USE_QUEUE, detach the configured handlers, hand them to a
         QueueListener and put a (non-blocking, if bounded) QueueHandler on root.
    """
    global _QUEUE_LISTENER, _QUEUE

    stop_queue_logging()

    if (not settings.LOG_TO_STDOUT) and settings.LOG_DIR:
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))
    logging.getLogger().addFilter(CorrelationIdFilter())

    if not settings.LOG_USE_QUEUE:
        return

    root_logger = logging.getLogger()
    current_handlers = list(root_logger.handlers)
    if not current_handlers:
        return

    handlers_to_move = set(current_handlers)
    for logger_obj in list(logging.Logger.manager.loggerDict.values()):
        if isinstance(logger_obj, logging.Logger):
            for h in list(logger_obj.handlers):
                if h in handlers_to_move:
                    logger_obj.removeHandler(h)
    for h in current_handlers:
        root_logger.removeHandler(h)

    max_size = settings.LOG_QUEUE_MAX_SIZE or 0  # 0 means unbounded
    log_queue: _queue.Queue = _queue.Queue(max_size)

    if max_size > 0 and not settings.LOG_QUEUE_BLOCKING:
        queue_handler: QueueHandler = NonBlockingQueueHandler(log_queue)
    else:
        queue_handler = QueueHandler(log_queue)

    queue_handler.addFilter(CorrelationIdFilter())
    queue_handler.addFilter(RedactFilter())

    listener = QueueListener(log_queue, *current_handlers, respect_handler_level=True)
    listener.start()
    root_logger.addHandler(queue_handler)

    _QUEUE_LISTENER = listener
    _QUEUE = log_queue


def stop_queue_logging() -> None:
    """
    Flush pending records and stop the QueueListener, if one is running.
    """
    global _QUEUE_LISTENER, _QUEUE
    listener = _QUEUE_LISTENER
    if listener is None:
        return

    try:
        listener.stop()  # processes what is queued, then joins the thread
    finally:
        _QUEUE_LISTENER = None
        _QUEUE = None
