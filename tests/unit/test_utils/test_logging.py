"""Unit tests for sqlforge logging utilities."""

import io
import logging
import sys
from collections.abc import Generator

import msgspec
import pytest

from sqlforge import MissingPredicateError, Statement, select, update
from sqlforge.utils.logging import (
    CorrelationIDFilter,
    StructuredFormatter,
    configure_logging,
    get_correlation_id,
    get_logger,
    log_with_context,
    set_correlation_id,
)


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    root = logging.getLogger("sqlforge")
    handlers, level, propagate = list(root.handlers), root.level, root.propagate
    set_correlation_id(None)
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    root.propagate = propagate
    set_correlation_id(None)


def _record(message: str = "hello") -> logging.LogRecord:
    return logging.LogRecord("sqlforge.test", logging.INFO, __file__, 10, message, (), None)


def test_get_logger_namespacing() -> None:
    assert get_logger().name == "sqlforge"
    assert get_logger("builder").name == "sqlforge.builder"
    assert get_logger("sqlforge.driver").name == "sqlforge.driver"


def test_get_logger_adds_filter_once() -> None:
    logger = get_logger("test.filters")
    get_logger("test.filters")

    assert sum(isinstance(f, CorrelationIDFilter) for f in logger.filters) == 1


def test_correlation_id_round_trip() -> None:
    set_correlation_id("abc-123")
    assert get_correlation_id() == "abc-123"

    set_correlation_id(None)
    assert get_correlation_id() is None


def test_correlation_filter_sets_attribute() -> None:
    record = _record()
    set_correlation_id("req-1")

    assert CorrelationIDFilter().filter(record) is True
    assert record.correlation_id == "req-1"  # type: ignore[attr-defined]


def test_structured_formatter() -> None:
    """Test records are formatted as JSON with correlation ID and extra fields."""
    record = _record("rendered")
    record.extra_fields = {"kind": "SELECT"}  # type: ignore[attr-defined]
    set_correlation_id("req-2")

    payload = msgspec.json.decode(StructuredFormatter().format(record))

    assert payload["message"] == "rendered"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "sqlforge.test"
    assert payload["correlation_id"] == "req-2"
    assert payload["kind"] == "SELECT"


def test_structured_formatter_includes_exception() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord("sqlforge.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

    payload = msgspec.json.decode(StructuredFormatter().format(record))

    assert "ValueError: boom" in payload["exception"]


def test_configure_logging() -> None:
    handler = _ListHandler()
    configure_logging("DEBUG", structured=False, stream=io.StringIO(), handlers=[handler])
    root = logging.getLogger("sqlforge")

    assert root.level == logging.DEBUG
    assert root.propagate is False
    assert handler in root.handlers
    assert handler.records[-1].getMessage() == "sqlforge logging configured"


def test_configure_logging_writes_json_lines() -> None:
    """Test builder events reach the configured stream as JSON with their fields."""
    stream = io.StringIO()
    configure_logging(logging.DEBUG, stream=stream)

    select("id").from_("t").where("a", 1).get_statement()

    lines = [msgspec.json.decode(line) for line in stream.getvalue().splitlines()]
    rendered = [line for line in lines if line["message"] == "Rendered statement"]
    assert rendered[0]["statement_kind"] == "SELECT"
    assert rendered[0]["parameter_count"] == 1
    assert rendered[0]["logger"] == "sqlforge.builder"


def test_log_with_context() -> None:
    handler = _ListHandler()
    logger = get_logger("test.context")
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    try:
        log_with_context(logger, logging.INFO, "statement rendered", kind="UPDATE")
        log_with_context(logger, logging.DEBUG, "skipped")
    finally:
        logger.removeHandler(handler)

    assert [record.getMessage() for record in handler.records] == ["statement rendered"]
    assert handler.records[0].extra_fields == {"kind": "UPDATE"}  # type: ignore[attr-defined]


def test_missing_predicate_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    """Test the builder logs before refusing an unbounded UPDATE."""
    caplog.set_level(logging.DEBUG, logger="sqlforge.builder")

    with pytest.raises(MissingPredicateError):
        update("t").set("a", 1).get_statement()

    assert any("without a WHERE predicate" in record.getMessage() for record in caplog.records)


def test_merge_is_logged_with_fields(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="sqlforge.builder.merge")

    Statement().where("x", 1).having("y", 2).merge_into(select("*").from_("t"))

    record = next(record for record in caplog.records if record.getMessage() == "Merged statement")
    assert record.extra_fields == {  # type: ignore[attr-defined]
        "source_kind": "EMPTY",
        "target_kind": "SELECT",
        "where_entries": 1,
        "having_entries": 1,
        "join_count": 0,
        "limit_merged": False,
    }


def test_log_with_context_reports_caller_location() -> None:
    handler = _ListHandler()
    logger = get_logger("test.location")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        log_with_context(logger, logging.DEBUG, "here")
    finally:
        logger.removeHandler(handler)

    assert handler.records[0].funcName == "test_log_with_context_reports_caller_location"
