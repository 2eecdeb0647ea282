import logging

from cosmic_core.logging import (
    RequestFormatter,
    current_request_id,
    request_context,
    setup_logging,
)


def _record(message: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        "cosmic_cms.test", logging.INFO, __file__, 1, message, None, None
    )


def test_formatter_tags_records_with_request_id():
    formatter = RequestFormatter("%(request_tag)s%(message)s")
    with request_context("req-42"):
        assert formatter.format(_record()) == "[req-42] hello"
    assert formatter.format(_record()) == "hello"


def test_formatter_uses_utc_iso_timestamps():
    formatter = RequestFormatter("%(asctime)s")
    stamp = formatter.format(_record())
    assert stamp.endswith("Z")
    assert "T" in stamp


def test_request_context_nests_and_resets():
    assert current_request_id.get() is None
    with request_context("outer"):
        with request_context("inner") as value:
            assert value == "inner"
            assert current_request_id.get() == "inner"
        assert current_request_id.get() == "outer"
    assert current_request_id.get() is None


def test_setup_logging_writes_to_file(tmp_path):
    log_file = tmp_path / "logs" / "cosmic.log"
    logger = setup_logging(level="DEBUG", log_file=log_file, namespace="cosmic_test")
    try:
        logger.info("file logging works")
        for handler in logger.handlers:
            handler.flush()
        assert "file logging works" in log_file.read_text(encoding="utf-8")
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
        assert len(logger.handlers) == 2
    finally:
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        logger.propagate = True


def test_setup_logging_quiets_noisy_loggers():
    logger = setup_logging(level="INFO", namespace="cosmic_quiet", quiet=["cosmic_noisy"])
    try:
        assert logging.getLogger("cosmic_noisy").level == logging.WARNING
        assert len(logger.handlers) == 1
    finally:
        logger.handlers.clear()
        logger.propagate = True


def test_unknown_level_falls_back_to_info():
    logger = setup_logging(level="chatty", namespace="cosmic_level")
    try:
        assert logger.level == logging.INFO
    finally:
        logger.handlers.clear()
        logger.propagate = True
