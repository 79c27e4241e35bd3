"""sqlforge: assemble SQL statements clause by clause."""

from sqlforge import builder, config, driver, escaping, exceptions, utils
from sqlforge.__metadata__ import __version__
from sqlforge.builder import (
    Connector,
    CriteriaList,
    Direction,
    JoinType,
    Operator,
    ParameterizedStatement,
    Statement,
    StatementKind,
    delete_from,
    insert_into,
    replace_into,
    select,
    update,
)
from sqlforge.config import BuilderConfig, LimitStyle
from sqlforge.escaping import CallableEscaper, Escaper, LiteralEscaper
from sqlforge.exceptions import (
    CriteriaError,
    MissingPredicateError,
    SQLBuilderError,
    SQLForgeError,
    StatementExecutionError,
)

__all__ = (
    "BuilderConfig",
    "CallableEscaper",
    "Connector",
    "CriteriaError",
    "CriteriaList",
    "Direction",
    "Escaper",
    "JoinType",
    "LimitStyle",
    "LiteralEscaper",
    "MissingPredicateError",
    "Operator",
    "ParameterizedStatement",
    "SQLBuilderError",
    "SQLForgeError",
    "Statement",
    "StatementExecutionError",
    "StatementKind",
    "__version__",
    "builder",
    "config",
    "delete_from",
    "driver",
    "escaping",
    "exceptions",
    "insert_into",
    "replace_into",
    "select",
    "update",
    "utils",
)
