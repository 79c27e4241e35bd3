"""Literal escaping used when statements are rendered without placeholders.

The builder never talks to a database itself; it consumes a single
``escape(value) -> str`` capability. :class:`LiteralEscaper` renders Python
scalars with sqlglot for the configured dialect, while
:class:`CallableEscaper` adapts a connection-provided quoting function.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Protocol, runtime_checkable

from sqlglot import exp
from sqlglot.dialects.dialect import DialectType

from sqlforge.config import DEFAULT_DIALECT
from sqlforge.exceptions import SQLBuilderError

__all__ = (
    "CallableEscaper",
    "Escaper",
    "LiteralEscaper",
    "render_keyword",
)


@runtime_checkable
class Escaper(Protocol):
    """Turns a scalar value into a SQL literal."""

    def escape(self, value: Any) -> str: ...


@dataclass(frozen=True)
class LiteralEscaper:
    """Escape values into literals of a sqlglot dialect.

    Numbers bypass escaping, strings are delimited and internally escaped,
    ``None`` and booleans become keywords.
    """

    dialect: DialectType = DEFAULT_DIALECT

    def escape(self, value: Any) -> str:
        """Render ``value`` as a SQL literal.

        Args:
            value: The scalar to escape.

        Raises:
            SQLBuilderError: If the value is a non-finite number or sqlglot cannot
                represent it as a literal.

        Returns:
            The literal text.
        """
        if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
            if (isinstance(value, float) and not math.isfinite(value)) or (
                isinstance(value, Decimal) and not value.is_finite()
            ):
                msg = f"Cannot escape non-finite number: {value!r}"
                raise SQLBuilderError(msg)
            return str(value)
        try:
            return exp.convert(value).sql(dialect=self.dialect)
        except ValueError as e:
            msg = f"Cannot escape value of type {type(value).__name__}: {value!r}"
            raise SQLBuilderError(msg) from e


@dataclass(frozen=True)
class CallableEscaper:
    """Adapt a plain ``quote(value) -> str`` function, e.g. one bound to a connection."""

    quote: Callable[[Any], str]

    def escape(self, value: Any) -> str:
        return self.quote(value)


def render_keyword(value: Any) -> str:
    """Render a value verbatim, mapping Python singletons to SQL keywords.

    Used for IS / IS NOT operands and for values whose quoting is disabled.

    Returns:
        ``NULL``, ``TRUE`` or ``FALSE`` for the matching Python values, else ``str(value)``.
    """
    if value is None:
        return "NULL"
    if value is True:
        return "TRUE"
    if value is False:
        return "FALSE"
    return str(value)
