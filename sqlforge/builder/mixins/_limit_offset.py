from typing import Optional

from typing_extensions import Self

from sqlforge.builder._clauses import Limit
from sqlforge.exceptions import SQLBuilderError

__all__ = ("LimitOffsetClauseMixin",)


class LimitOffsetClauseMixin:
    """Mixin providing the LIMIT clause and its offset."""

    _limit: Optional[Limit]

    def limit(self, limit: int, offset: int = 0) -> Self:
        """Set the LIMIT, replacing any previous one.

        Args:
            limit: The maximum number of rows.
            offset: The number of rows to skip.

        Raises:
            SQLBuilderError: If either value is negative or not an integer.

        Returns:
            The current builder instance for method chaining.
        """
        for name, value in (("limit", limit), ("offset", offset)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                msg = f"{name.capitalize()} must be a non-negative integer, got {value!r}."
                raise SQLBuilderError(msg)
        self._limit = Limit(limit, offset)
        return self

    def get_limit(self) -> Optional[int]:
        return self._limit.limit if self._limit else None

    def get_offset(self) -> Optional[int]:
        return self._limit.offset if self._limit else None
