"""Rendered statement container."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Optional

import sqlglot
from sqlglot import exp
from sqlglot.dialects.dialect import DialectType
from sqlglot.errors import ParseError as SQLGlotParseError

from sqlforge.exceptions import SQLBuilderError

__all__ = ("ParameterizedStatement",)


@dataclass(frozen=True)
class ParameterizedStatement:
    """A rendered SQL statement with its positional parameters.

    ``parameters`` are ordered like the placeholders in ``sql``, so they can be
    bound positionally by a DB-API cursor. Unpacks as ``sql, parameters``.
    """

    sql: str
    parameters: "list[Any]" = field(default_factory=list)
    dialect: Optional[DialectType] = None

    def __iter__(self) -> Iterator[Any]:
        yield self.sql
        yield self.parameters

    def __bool__(self) -> bool:
        return bool(self.sql)

    @property
    def placeholder_count(self) -> int:
        return len(self.parameters)

    def parse(self) -> exp.Expression:
        """Parse the statement back into a sqlglot expression.

        Raises:
            SQLBuilderError: If the statement is empty or sqlglot cannot parse it.

        Returns:
            exp.Expression: The parsed statement.
        """
        if not self.sql:
            msg = "Cannot parse an empty statement."
            raise SQLBuilderError(msg)
        try:
            return sqlglot.parse_one(self.sql, read=self.dialect)
        except SQLGlotParseError as e:
            msg = f"Rendered statement could not be parsed: {e}"
            raise SQLBuilderError(msg) from e
