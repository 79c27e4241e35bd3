"""Value types stored in a statement's clause collections."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from sqlforge.builder._criteria import CriteriaList
from sqlforge.exceptions import SQLBuilderError

__all__ = (
    "Direction",
    "Join",
    "JoinType",
    "Limit",
    "OrderTerm",
    "SelectColumn",
    "SetValue",
    "StatementKind",
    "TableRef",
)


class StatementKind(str, Enum):
    """Statement kinds, derived from whichever target was set on the builder."""

    EMPTY = "EMPTY"
    SELECT = "SELECT"
    INSERT = "INSERT"
    REPLACE = "REPLACE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"

    def __str__(self) -> str:
        return self.value


class JoinType(str, Enum):
    INNER = "INNER JOIN"
    LEFT = "LEFT JOIN"
    RIGHT = "RIGHT JOIN"

    @classmethod
    def coerce(cls, join_type: Union[str, "JoinType"]) -> "JoinType":
        """Accept a member, its SQL text or a bare side such as ``"left"``.

        Raises:
            SQLBuilderError: For unsupported join types.

        Returns:
            The matching join type.
        """
        if isinstance(join_type, JoinType):
            return join_type
        text = " ".join(join_type.split()).upper()
        if not text.endswith("JOIN"):
            text = f"{text} JOIN"
        try:
            return cls(text)
        except ValueError:
            msg = f"Unsupported join type: {join_type}"
            raise SQLBuilderError(msg) from None

    def __str__(self) -> str:
        return self.value


class Direction(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def coerce(cls, direction: Union[str, "Direction"]) -> "Direction":
        if isinstance(direction, Direction):
            return direction
        try:
            return cls(direction.strip().upper())
        except ValueError:
            msg = f"Unsupported sort direction: {direction}"
            raise SQLBuilderError(msg) from None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SelectColumn:
    column: str
    alias: Optional[str] = None

    def sql(self) -> str:
        if self.alias:
            return f"{self.column} AS {self.alias}"
        return self.column


@dataclass(frozen=True)
class TableRef:
    table: str
    alias: Optional[str] = None

    @property
    def reference(self) -> str:
        """Name other clauses use to qualify this table's columns."""
        return self.alias or self.table

    def sql(self) -> str:
        if self.alias:
            return f"{self.table} AS {self.alias}"
        return self.table


@dataclass
class Join:
    """A joined table and its ON criteria.

    ``criteria`` is ``None`` when the join has no ON clause at all.
    """

    table: str
    join_type: JoinType = JoinType.INNER
    alias: Optional[str] = None
    criteria: Optional[CriteriaList] = field(default=None)

    @property
    def ref(self) -> TableRef:
        return TableRef(self.table, self.alias)


@dataclass(frozen=True)
class SetValue:
    """A ``column = value`` assignment for INSERT, REPLACE and UPDATE."""

    column: str
    value: Any
    quote: Optional[bool] = None


@dataclass(frozen=True)
class OrderTerm:
    """A GROUP BY or ORDER BY term; GROUP BY terms may omit the direction."""

    column: str
    direction: Optional[Direction] = None

    def sql(self) -> str:
        if self.direction is None:
            return self.column
        return f"{self.column} {self.direction.value}"


@dataclass(frozen=True)
class Limit:
    limit: int
    offset: int = 0
