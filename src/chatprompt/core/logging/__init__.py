# src/chatprompt/core/logging/
# ├─ __init__.py       public API
# ├─ builder.py        make_dict_config(settings), setup_logging(settings), queue mode
# ├─ formatters.py     JsonFormatter, ColorFormatter
# ├─ filters.py        RequestIdFilter, RedactFilter, request-id contextvar helpers
# └─ handlers.py       handler config factories

from .builder import setup_logging, make_dict_config, stop_queue_logging, get_queue_stats
from .filters import set_request_id, reset_request_id, get_request_id, RequestIdFilter, RedactFilter

__all__ = [
    "setup_logging",
    "make_dict_config",
    "stop_queue_logging",
    "get_queue_stats",
    "set_request_id",
    "reset_request_id",
    "get_request_id",
    "RequestIdFilter",
    "RedactFilter",
]
