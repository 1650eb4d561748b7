import pytest

from chatprompt.config import get_settings
from chatprompt.core.logging.builder import setup_logging, stop_queue_logging


@pytest.fixture
def restore_logging():
    """Put the session logging config back after a test reconfigures it."""
    yield
    stop_queue_logging()
    setup_logging(get_settings())
