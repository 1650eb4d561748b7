"""
Handler factories for logging.dictConfig.

Each function returns a handler config dict; the builder decides which of
them are active. Every handler runs the "request_id" and "redact" filters.

| Name            | Destination        | Levels          | Active when                         |
| --------------- | ------------------ | --------------- | ----------------------------------- |
| `console`       | stderr             | >= LOG_LEVEL    | always                              |
| `file`          | LOG_DIR/app.log    | >= LOG_LEVEL    | LOG_TO_STDOUT=false and LOG_DIR set |
| `error_file`    | LOG_DIR/errors.log | ERROR and above | LOG_TO_STDOUT=false and LOG_DIR set |
| `error_console` | stderr (json)      | ERROR and above | otherwise                           |
"""

from pathlib import Path

from chatprompt.config.settings import Settings

FILTERS = ["request_id", "redact"]


def _formatter_name(settings: Settings) -> str:
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def get_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filters": list(FILTERS),
    }


def get_file_handler(settings: Settings) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filename": str(Path(settings.LOG_DIR) / "app.log"),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": list(FILTERS),
    }


def get_error_file_handler(settings: Settings) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "json",  # error files stay structured for ingestion
        "level": "ERROR",
        "filename": str(Path(settings.LOG_DIR) / "errors.log"),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": list(FILTERS),
    }


def get_error_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": "json",
        "level": "ERROR",
        "filters": list(FILTERS),
    }
