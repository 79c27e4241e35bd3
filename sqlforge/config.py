"""Builder configuration."""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from sqlglot.dialects.dialect import DialectType

__all__ = (
    "DEFAULT_DIALECT",
    "BuilderConfig",
    "LimitStyle",
)

DEFAULT_DIALECT = "mysql"


class LimitStyle(str, Enum):
    """How a LIMIT clause with a non-zero offset is written."""

    OFFSET = "offset"
    """``LIMIT <limit> OFFSET <offset>``."""
    COMMA = "comma"
    """``LIMIT <offset>, <limit>``."""

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BuilderConfig:
    """Rendering options shared by every clause of a statement.

    Attributes:
        auto_quote: Default quoting behavior for values. Each condition and SET
            entry may override it; the override wins when it is not ``None``.
        limit_style: Ordering of the LIMIT/OFFSET literals.
        dialect: sqlglot dialect used for literal escaping and for parsing
            rendered statements back.
        strict: Validate bracket balance and operator value arity while the
            statement is built instead of emitting malformed SQL.
        placeholder: Positional placeholder marker.
    """

    auto_quote: bool = True
    limit_style: LimitStyle = LimitStyle.OFFSET
    dialect: DialectType = DEFAULT_DIALECT
    strict: bool = False
    placeholder: str = "?"

    def resolve_quote(self, override: Optional[bool]) -> bool:
        """Resolve a tri-state quote override against ``auto_quote``.

        Args:
            override: ``True``/``False`` to force quoting, ``None`` to inherit.

        Returns:
            Whether the value should be quoted (or bound as a placeholder).
        """
        if override is None:
            return self.auto_quote
        return override

    def replace(self, **changes: Any) -> "BuilderConfig":
        """Return a copy of this configuration with ``changes`` applied.

        Returns:
            A new configuration instance.
        """
        return dataclasses.replace(self, **changes)
