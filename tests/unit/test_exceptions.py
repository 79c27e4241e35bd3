import pytest

from sqlforge.exceptions import (
    CriteriaError,
    MissingPredicateError,
    SQLBuilderError,
    SQLForgeError,
    StatementExecutionError,
    wrap_exceptions,
)


def test_exception_hierarchy() -> None:
    """Test exception classes inherit correctly."""
    assert issubclass(SQLBuilderError, SQLForgeError)
    assert issubclass(MissingPredicateError, SQLBuilderError)
    assert issubclass(CriteriaError, SQLBuilderError)
    assert issubclass(StatementExecutionError, SQLForgeError)


def test_exception_messages() -> None:
    """Test exceptions expose their message as ``detail`` and ``str``."""
    exc = SQLBuilderError("bad column")
    assert str(exc) == "bad column"
    assert exc.detail == "bad column"
    assert repr(exc) == "SQLBuilderError - bad column"

    assert str(SQLBuilderError()) == "Issues building SQL statement."
    assert str(CriteriaError()) == "Invalid criteria."


def test_missing_predicate_error() -> None:
    """Test the statement kind is kept and named in the default message."""
    exc = MissingPredicateError("DELETE")

    assert exc.statement_kind == "DELETE"
    assert str(exc) == "A WHERE predicate is required for DELETE statements."
    assert str(MissingPredicateError("UPDATE", "custom")) == "custom"


def test_statement_execution_error_includes_sql() -> None:
    """Test the failing statement is attached to the error."""
    exc = StatementExecutionError("boom", sql="SELECT 1")

    assert exc.sql == "SELECT 1"
    assert str(exc) == "boom\nSQL: SELECT 1"
    assert str(StatementExecutionError("boom")) == "boom"


def test_wrap_exceptions_wraps_foreign_errors() -> None:
    """Test foreign exceptions are wrapped and chained."""
    with pytest.raises(StatementExecutionError) as exc_info, wrap_exceptions(sql="SELECT 1"):
        raise ValueError("Original error")

    assert isinstance(exc_info.value.__cause__, ValueError)
    assert exc_info.value.sql == "SELECT 1"
    assert "Original error" in str(exc_info.value)


def test_wrap_exceptions_passes_library_errors_through() -> None:
    """Test sqlforge errors propagate unchanged."""
    with pytest.raises(MissingPredicateError), wrap_exceptions():
        raise MissingPredicateError("UPDATE")


def test_wrap_exceptions_disabled() -> None:
    """Test wrapping can be switched off."""
    with pytest.raises(KeyError), wrap_exceptions(wrap_exceptions=False):
        raise KeyError("missing")
