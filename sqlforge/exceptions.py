from collections.abc import Generator
from contextlib import contextmanager
from typing import Any, Optional

__all__ = (
    "CriteriaError",
    "MissingPredicateError",
    "SQLBuilderError",
    "SQLForgeError",
    "StatementExecutionError",
    "wrap_exceptions",
)


class SQLForgeError(Exception):
    """Base exception class from which all sqlforge exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SQLForgeError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class SQLBuilderError(SQLForgeError):
    """Issues Building or Generating SQL statements."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "Issues building SQL statement."
        super().__init__(message)


class MissingPredicateError(SQLBuilderError):
    """An UPDATE or DELETE statement was rendered without any WHERE predicate.

    Unbounded UPDATE and DELETE statements are refused at render time so that
    every intermediate builder state stays legal.
    """

    statement_kind: str

    def __init__(self, statement_kind: str, message: Optional[str] = None) -> None:
        if message is None:
            message = f"A WHERE predicate is required for {statement_kind} statements."
        super().__init__(message)
        self.statement_kind = statement_kind


class CriteriaError(SQLBuilderError):
    """A criteria list failed strict validation (bracket balance or value arity)."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "Invalid criteria."
        super().__init__(message)


class StatementExecutionError(SQLForgeError):
    """The database connection failed to execute a rendered statement."""

    sql: Optional[str]

    def __init__(self, message: str, sql: Optional[str] = None) -> None:
        detail_message = message
        if sql:
            detail_message = f"{message}\nSQL: {sql}"
        super().__init__(detail=detail_message)
        self.sql = sql


@contextmanager
def wrap_exceptions(wrap_exceptions: bool = True, sql: Optional[str] = None) -> Generator[None, None, None]:
    """Re-raise driver exceptions as :class:`StatementExecutionError`.

    Args:
        wrap_exceptions: When False, exceptions propagate unchanged.
        sql: The statement being executed, attached to the raised error.

    Raises:
        StatementExecutionError: Wrapping any exception raised inside the block.
    """
    try:
        yield

    except SQLForgeError:
        raise
    except Exception as exc:
        if wrap_exceptions is False:
            raise
        msg = f"An error occurred while executing the statement: {exc}"
        raise StatementExecutionError(msg, sql=sql) from exc
