"""Unit tests for umitransfer.core.logging_config module."""

from loguru import logger

from umitransfer.core.logging_config import add_file_handler, setup_logging, timedrun


def test_timedrun_returns_result():
    assert timedrun("done", lambda: 42) == 42


def test_file_handler_receives_messages(temp_output_dir):
    setup_logging(level="INFO")
    log_path = temp_output_dir / "logs" / "umitransfer.log"
    handler_id = add_file_handler(log_path)
    try:
        timedrun("umitransfer finished", lambda: None)
    finally:
        logger.remove(handler_id)
    assert "umitransfer finished in" in log_path.read_text()


def test_only_one_file_handler(temp_output_dir):
    first = temp_output_dir / "first.log"
    second = temp_output_dir / "second.log"
    add_file_handler(first)
    handler_id = add_file_handler(second)
    try:
        logger.info("only in second")
    finally:
        logger.remove(handler_id)
    assert "only in second" not in first.read_text()
    assert "only in second" in second.read_text()
