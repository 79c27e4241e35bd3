from collections.abc import Iterable
from typing import Any, Optional, Union

from typing_extensions import Self

from sqlforge.builder._criteria import Connector, CriteriaList, Operator

__all__ = ("HavingClauseMixin", "WhereClauseMixin")


class WhereClauseMixin:
    """Mixin providing WHERE criteria for SELECT, UPDATE and DELETE statements."""

    _where: CriteriaList

    def open_where(self, connector: Union[str, Connector] = Connector.AND) -> Self:
        """Open a bracketed group of WHERE criteria.

        Args:
            connector: Connector joining the group to its previous sibling.

        Returns:
            The current builder instance for method chaining.
        """
        self._where.open_group(connector)
        return self

    def close_where(self) -> Self:
        self._where.close_group()
        return self

    def where(
        self,
        column: str,
        value: Any,
        operator: Union[str, Operator] = Operator.EQUALS,
        connector: Union[str, Connector] = Connector.AND,
        quote: Optional[bool] = None,
    ) -> Self:
        """Add a WHERE comparison.

        Args:
            column: Column name or expression.
            value: Scalar, ``(low, high)`` pair for BETWEEN or iterable for IN.
            operator: Comparison operator.
            connector: Connector joining this comparison to the previous sibling.
            quote: Override the builder's quoting default for this value.

        Returns:
            The current builder instance for method chaining.
        """
        self._where.add(column, value, operator, connector, quote)
        return self

    def and_where(
        self, column: str, value: Any, operator: Union[str, Operator] = Operator.EQUALS, quote: Optional[bool] = None
    ) -> Self:
        return self.where(column, value, operator, Connector.AND, quote)

    def or_where(
        self, column: str, value: Any, operator: Union[str, Operator] = Operator.EQUALS, quote: Optional[bool] = None
    ) -> Self:
        return self.where(column, value, operator, Connector.OR, quote)

    def where_in(
        self,
        column: str,
        values: Iterable[Any],
        connector: Union[str, Connector] = Connector.AND,
        quote: Optional[bool] = None,
    ) -> Self:
        self._where.add_in(column, values, connector, quote)
        return self

    def where_not_in(
        self,
        column: str,
        values: Iterable[Any],
        connector: Union[str, Connector] = Connector.AND,
        quote: Optional[bool] = None,
    ) -> Self:
        self._where.add_not_in(column, values, connector, quote)
        return self

    def where_between(
        self,
        column: str,
        low: Any,
        high: Any,
        connector: Union[str, Connector] = Connector.AND,
        quote: Optional[bool] = None,
    ) -> Self:
        self._where.add_between(column, low, high, connector, quote)
        return self

    def where_not_between(
        self,
        column: str,
        low: Any,
        high: Any,
        connector: Union[str, Connector] = Connector.AND,
        quote: Optional[bool] = None,
    ) -> Self:
        self._where.add_not_between(column, low, high, connector, quote)
        return self

    def where_like(self, column: str, pattern: str, connector: Union[str, Connector] = Connector.AND) -> Self:
        return self.where(column, pattern, Operator.LIKE, connector)

    def where_null(self, column: str, connector: Union[str, Connector] = Connector.AND) -> Self:
        return self.where(column, None, Operator.IS, connector)

    def where_not_null(self, column: str, connector: Union[str, Connector] = Connector.AND) -> Self:
        return self.where(column, None, Operator.IS_NOT, connector)

    def where_criteria(self, criteria: CriteriaList, connector: Union[str, Connector] = Connector.AND) -> Self:
        """Add a prebuilt criteria list to WHERE as one bracketed group.

        Args:
            criteria: The criteria to nest. Its entries are copied.
            connector: Connector joining the group to the previous sibling.

        Returns:
            The current builder instance for method chaining.
        """
        self._where.add_criteria(criteria, connector)
        return self

    def get_where(self) -> CriteriaList:
        """A copy of the WHERE criteria."""
        return self._where.copy()


class HavingClauseMixin:
    """Mixin providing HAVING criteria for SELECT statements."""

    _having: CriteriaList

    def open_having(self, connector: Union[str, Connector] = Connector.AND) -> Self:
        self._having.open_group(connector)
        return self

    def close_having(self) -> Self:
        self._having.close_group()
        return self

    def having(
        self,
        column: str,
        value: Any,
        operator: Union[str, Operator] = Operator.EQUALS,
        connector: Union[str, Connector] = Connector.AND,
        quote: Optional[bool] = None,
    ) -> Self:
        """Add a HAVING comparison.

        Returns:
            The current builder instance for method chaining.
        """
        self._having.add(column, value, operator, connector, quote)
        return self

    def and_having(
        self, column: str, value: Any, operator: Union[str, Operator] = Operator.EQUALS, quote: Optional[bool] = None
    ) -> Self:
        return self.having(column, value, operator, Connector.AND, quote)

    def or_having(
        self, column: str, value: Any, operator: Union[str, Operator] = Operator.EQUALS, quote: Optional[bool] = None
    ) -> Self:
        return self.having(column, value, operator, Connector.OR, quote)

    def having_in(
        self,
        column: str,
        values: Iterable[Any],
        connector: Union[str, Connector] = Connector.AND,
        quote: Optional[bool] = None,
    ) -> Self:
        self._having.add_in(column, values, connector, quote)
        return self

    def having_not_in(
        self,
        column: str,
        values: Iterable[Any],
        connector: Union[str, Connector] = Connector.AND,
        quote: Optional[bool] = None,
    ) -> Self:
        self._having.add_not_in(column, values, connector, quote)
        return self

    def having_between(
        self,
        column: str,
        low: Any,
        high: Any,
        connector: Union[str, Connector] = Connector.AND,
        quote: Optional[bool] = None,
    ) -> Self:
        self._having.add_between(column, low, high, connector, quote)
        return self

    def having_not_between(
        self,
        column: str,
        low: Any,
        high: Any,
        connector: Union[str, Connector] = Connector.AND,
        quote: Optional[bool] = None,
    ) -> Self:
        self._having.add_not_between(column, low, high, connector, quote)
        return self

    def having_criteria(self, criteria: CriteriaList, connector: Union[str, Connector] = Connector.AND) -> Self:
        self._having.add_criteria(criteria, connector)
        return self

    def get_having(self) -> CriteriaList:
        return self._having.copy()
