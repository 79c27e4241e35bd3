from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

from typing_extensions import Self

from sqlforge.builder._clauses import SetValue
from sqlforge.exceptions import SQLBuilderError

__all__ = ("SetValuesMixin",)

SetRows = Union[Mapping[str, Any], Iterable[Union[SetValue, "tuple[Any, ...]"]]]


class SetValuesMixin:
    """Mixin providing ``SET column = value`` assignments for INSERT, REPLACE and UPDATE.

    Every assignment renders, in the order it was added; setting a column
    twice renders it twice.
    """

    _set: "list[SetValue]"

    def set(self, column: str, value: Any, quote: Optional[bool] = None) -> Self:
        """Assign a value to a column.

        Args:
            column: Column name.
            value: Value to assign.
            quote: Override the builder's quoting default. ``False`` writes the
                value verbatim, e.g. for ``NOW()``.

        Returns:
            The current builder instance for method chaining.
        """
        self._set.append(SetValue(column, value, quote))
        return self

    def set_many(self, values: SetRows) -> Self:
        """Assign several values at once.

        Accepts a mapping of ``column -> value`` where a value may also be a
        ``{"value": ..., "quote": ...}`` mapping, or an iterable of
        :class:`SetValue` instances and ``(column, value[, quote])`` tuples.

        Args:
            values: The assignments.

        Raises:
            SQLBuilderError: If a row has an unsupported shape.

        Returns:
            The current builder instance for method chaining.
        """
        if isinstance(values, Mapping):
            for column, value in values.items():
                if isinstance(value, Mapping) and "value" in value:
                    self.set(column, value["value"], value.get("quote"))
                else:
                    self.set(column, value)
            return self

        for row in values:
            if isinstance(row, SetValue):
                self._set.append(row)
            elif isinstance(row, (tuple, list)) and len(row) in {2, 3}:
                self.set(*row)
            else:
                msg = f"Unsupported SET row: {row!r}"
                raise SQLBuilderError(msg)
        return self

    def get_set(self) -> "list[SetValue]":
        return list(self._set)
