import json
import logging
from types import SimpleNamespace
from pathlib import Path

from chatprompt.core.logging.builder import get_queue_stats, setup_logging, stop_queue_logging
from chatprompt.core.logging.filters import reset_request_id, set_request_id


def make_test_settings(tmp_path: Path, **overrides):
    s = SimpleNamespace(
        ENV="testing",
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="json",
        LOG_TO_STDOUT=False,
        LOG_DIR=tmp_path,
        LOG_MAX_BYTES=1_000_000,
        LOG_BACKUP_COUNT=1,
        ENABLE_SQL_LOGGING=False,
        LOG_USE_QUEUE=True,
        LOG_QUEUE_MAX_SIZE=0,
        LOG_QUEUE_BLOCKING=False,
    )
    for key, value in overrides.items():
        setattr(s, key, value)
    return s


def test_queue_listener_writes_file(tmp_path, restore_logging):
    """
    Behavior:
            - Queue mode on, file output on.
            - Records logged by producers reach app.log through the listener,
              with the producer's request id and redacted secrets.
    """
    setup_logging(make_test_settings(tmp_path))
    assert get_queue_stats()["queue_present"] is True

    logger = logging.getLogger("chatprompt.test.queue")
    token = set_request_id("test-req-1")
    try:
        for i in range(5):
            logger.info("queued message %d", i, extra={"iteration": i, "api_key": "sk-secret"})
    finally:
        reset_request_id(token)

    # stop() drains the queue before returning
    stop_queue_logging()
    assert get_queue_stats()["queue_present"] is False

    lines = [json.loads(line) for line in (tmp_path / "app.log").read_text().splitlines()]
    ours = [line for line in lines if line["logger"] == "chatprompt.test.queue"]

    assert [line["message"] for line in ours] == [f"queued message {i}" for i in range(5)]
    assert all(line["request_id"] == "test-req-1" for line in ours)
    assert all(line["api_key"] == "***REDACTED***" for line in ours)
    assert "sk-secret" not in (tmp_path / "app.log").read_text()


def test_stop_queue_logging_without_listener_is_noop():
    stop_queue_logging()
    stop_queue_logging()

    assert get_queue_stats()["queue_present"] is False
