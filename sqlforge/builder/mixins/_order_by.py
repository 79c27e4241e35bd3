from typing import Optional, Union

from typing_extensions import Self

from sqlforge.builder._clauses import Direction, OrderTerm

__all__ = ("GroupByMixin", "OrderByMixin")


class GroupByMixin:
    """Mixin providing GROUP BY terms."""

    _group_by: "list[OrderTerm]"

    def group_by(self, column: str, direction: Optional[Union[str, Direction]] = None) -> Self:
        """Add a GROUP BY term.

        Args:
            column: Column name or expression.
            direction: Optional ASC/DESC written after the term.

        Returns:
            The current builder instance for method chaining.
        """
        self._group_by.append(OrderTerm(column, Direction.coerce(direction) if direction is not None else None))
        return self

    def get_group_by(self) -> "list[OrderTerm]":
        return list(self._group_by)


class OrderByMixin:
    """Mixin providing ORDER BY terms."""

    _order_by: "list[OrderTerm]"

    def order_by(self, column: str, direction: Union[str, Direction] = Direction.ASC) -> Self:
        """Add an ORDER BY term.

        Args:
            column: Column name or expression.
            direction: ASC or DESC.

        Returns:
            The current builder instance for method chaining.
        """
        self._order_by.append(OrderTerm(column, Direction.coerce(direction)))
        return self

    def get_order_by(self) -> "list[OrderTerm]":
        return list(self._order_by)
