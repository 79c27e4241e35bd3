from typing import Optional

from typing_extensions import Self

from sqlforge.builder._clauses import SelectColumn

__all__ = ("SelectColumnsMixin",)


class SelectColumnsMixin:
    """Mixin providing the SELECT column list."""

    _select: "dict[str, SelectColumn]"

    def select(self, column: str, alias: Optional[str] = None) -> Self:
        """Add a column, table wildcard or expression to the SELECT list.

        Selecting the same column again replaces its alias and keeps its position.

        Args:
            column: Column name, ``table.*`` wildcard or expression.
            alias: Optional alias.

        Returns:
            The current builder instance for method chaining.
        """
        self._select[column] = SelectColumn(column, alias)
        return self

    def get_select(self) -> "dict[str, Optional[str]]":
        """Selected columns mapped to their aliases, in selection order."""
        return {column: item.alias for column, item in self._select.items()}
