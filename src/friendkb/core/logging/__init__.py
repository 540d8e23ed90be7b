# src/friendkb/core/logging/
# ├─ __init__.py      # public API
# ├─ builder.py       # make_dict_config(settings) + setup_logging(settings) + queue mode
# ├─ formatters.py    # JsonFormatter, ColorFormatter
# ├─ filters.py       # CorrelationIdFilter, RedactFilter (+ contextvar helpers)
# └─ handlers.py      # handler dict factories for dictConfig


from .builder import setup_logging, make_dict_config, stop_queue_logging, get_queue_stats
from .filters import (
    set_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    correlation_scope,
    CorrelationIdFilter,
    RedactFilter,
)

__all__ = [
    "setup_logging",
    "make_dict_config",
    "stop_queue_logging",
    "get_queue_stats",
    "set_correlation_id",
    "get_correlation_id",
    "reset_correlation_id",
    "correlation_scope",
    "CorrelationIdFilter",
    "RedactFilter",
]
