"""Executing built statements through a DB-API 2.0 connection.

The builder only produces ``(sql, parameters)``; this module hands that pair
to a connection whose paramstyle accepts the configured positional
placeholder (``qmark`` for the default ``?``).
"""

import logging
from typing import TYPE_CHECKING, Any, Optional, Protocol

from sqlforge.exceptions import SQLBuilderError, wrap_exceptions
from sqlforge.utils.logging import get_logger, log_with_context

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlforge.builder import Statement

__all__ = (
    "DBAPIConnection",
    "DBAPICursor",
    "execute",
    "fetch_all",
    "fetch_one",
)

logger = get_logger("driver")


class DBAPICursor(Protocol):
    def execute(self, operation: str, parameters: "Sequence[Any]", /) -> Any: ...

    def fetchone(self) -> Any: ...

    def fetchall(self) -> "list[Any]": ...


class DBAPIConnection(Protocol):
    def cursor(self) -> DBAPICursor: ...


def execute(statement: "Statement", connection: DBAPIConnection) -> DBAPICursor:
    """Render ``statement`` with placeholders and execute it.

    Args:
        statement: The statement to execute.
        connection: A DB-API 2.0 connection.

    Raises:
        SQLBuilderError: If the statement renders to nothing.
        StatementExecutionError: If the connection fails to execute it.

    Returns:
        The cursor the statement was executed on.
    """
    rendered = statement.to_parameterized_statement()
    if not rendered.sql:
        msg = "Cannot execute an empty statement."
        raise SQLBuilderError(msg)

    log_with_context(
        logger,
        logging.DEBUG,
        "Executing statement",
        statement_kind=statement.kind.value,
        parameter_count=len(rendered.parameters),
    )
    with wrap_exceptions(sql=rendered.sql):
        cursor = connection.cursor()
        cursor.execute(rendered.sql, rendered.parameters)
    return cursor


def fetch_all(statement: "Statement", connection: DBAPIConnection) -> "list[Any]":
    cursor = execute(statement, connection)
    with wrap_exceptions(sql=statement.get_statement()):
        return list(cursor.fetchall())


def fetch_one(statement: "Statement", connection: DBAPIConnection) -> Optional[Any]:
    cursor = execute(statement, connection)
    with wrap_exceptions(sql=statement.get_statement()):
        return cursor.fetchone()
