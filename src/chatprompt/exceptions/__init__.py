# chatprompt/exceptions/
# ├── base.py                    # App-level errors (RepositoryError, NotFoundError, MissingCostRecordError, ...)
# ├── provider.py                # Provider dispatch errors (ProviderError, UnknownProviderError)
# ├── integrity_classifier.py    # SQL-level / DB-specific error classification
# └── mapper.py                  # Map SQL-level errors to app-level errors (db_error_handler)

from .base import (
    RepositoryError,
    NotFoundError,
    DuplicateError,
    InvalidFieldError,
    MissingCostRecordError,
)
from .provider import ProviderError, UnknownProviderError

__all__ = [
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "InvalidFieldError",
    "MissingCostRecordError",
    "ProviderError",
    "UnknownProviderError",
]
