"""SQL statement builder.

Statements are assembled through method calls and rendered either as a
parameterized statement plus positional values, or as a fully literal
statement.
"""

from typing import Optional

from sqlforge.builder._base import ParameterizedStatement
from sqlforge.builder._clauses import (
    Direction,
    Join,
    JoinType,
    Limit,
    OrderTerm,
    SelectColumn,
    SetValue,
    StatementKind,
    TableRef,
)
from sqlforge.builder._criteria import (
    Bracket,
    BracketKind,
    Condition,
    Connector,
    CriteriaList,
    Operator,
    Pair,
    RawCondition,
    RenderedFragment,
    Scalar,
    ValueList,
    render_criteria,
)
from sqlforge.builder._statement import Statement
from sqlforge.config import BuilderConfig

__all__ = (
    "Bracket",
    "BracketKind",
    "Condition",
    "Connector",
    "CriteriaList",
    "Direction",
    "Join",
    "JoinType",
    "Limit",
    "Operator",
    "OrderTerm",
    "Pair",
    "ParameterizedStatement",
    "RawCondition",
    "RenderedFragment",
    "Scalar",
    "SelectColumn",
    "SetValue",
    "Statement",
    "StatementKind",
    "TableRef",
    "ValueList",
    "delete_from",
    "insert_into",
    "render_criteria",
    "replace_into",
    "select",
    "update",
)


def select(*columns: str, config: Optional[BuilderConfig] = None) -> Statement:
    """Create a SELECT statement.

    Args:
        *columns: Columns to select.
        config: Optional builder configuration.

    Returns:
        Statement: A new statement with the columns selected.
    """
    statement = Statement(config=config or BuilderConfig())
    for column in columns:
        statement.select(column)
    return statement


def insert_into(table: str, config: Optional[BuilderConfig] = None) -> Statement:
    """Create an INSERT statement targeting ``table``."""
    return Statement(config=config or BuilderConfig()).insert_into(table)


def replace_into(table: str, config: Optional[BuilderConfig] = None) -> Statement:
    """Create a REPLACE statement targeting ``table``."""
    return Statement(config=config or BuilderConfig()).replace_into(table)


def update(table: str, config: Optional[BuilderConfig] = None) -> Statement:
    """Create an UPDATE statement targeting ``table``."""
    return Statement(config=config or BuilderConfig()).update(table)


def delete_from(table: str, alias: Optional[str] = None, config: Optional[BuilderConfig] = None) -> Statement:
    """Create a single-table DELETE statement."""
    return Statement(config=config or BuilderConfig()).delete_from(table, alias)
