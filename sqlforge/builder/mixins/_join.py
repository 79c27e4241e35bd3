from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Optional, Union

from typing_extensions import Self

from sqlforge.builder._clauses import Join, JoinType, TableRef
from sqlforge.builder._criteria import Connector, CriteriaList, Operator
from sqlforge.exceptions import SQLBuilderError

if TYPE_CHECKING:
    from sqlforge.config import BuilderConfig

__all__ = ("FromJoinMixin",)

JoinCriteria = Union[str, Iterable[str], CriteriaList, None]


class FromJoinMixin:
    """Mixin providing the FROM table, JOINs and per-join ON criteria.

    ON criteria given as strings are stored verbatim. A string that is a bare
    column name joins that column against the same column of the preceding
    table (the previous join, or the base table for the first join).
    """

    config: "BuilderConfig"
    _from: Optional[TableRef]
    _joins: "list[Join]"

    def from_(self, table: str, alias: Optional[str] = None) -> Self:
        """Set the FROM table.

        Args:
            table: Table name or derived table expression.
            alias: Optional alias.

        Returns:
            The current builder instance for method chaining.
        """
        self._from = TableRef(table, alias)
        return self

    def get_from(self) -> Optional[str]:
        return self._from.table if self._from else None

    def get_from_alias(self) -> Optional[str]:
        return self._from.alias if self._from else None

    def join(
        self,
        table: str,
        criteria: JoinCriteria = None,
        join_type: Union[str, JoinType] = JoinType.INNER,
        alias: Optional[str] = None,
    ) -> Self:
        """Add a JOIN with optional ON criteria.

        Args:
            table: The table to join.
            criteria: A string, a list of strings joined with AND, or a
                :class:`CriteriaList`. ``None`` renders no ON clause; criteria
                can still be added with :meth:`on` and friends.
            join_type: INNER, LEFT or RIGHT.
            alias: Optional alias for the joined table.

        Returns:
            The current builder instance for method chaining.
        """
        on_criteria: Optional[CriteriaList] = None
        if isinstance(criteria, CriteriaList):
            on_criteria = CriteriaList(criteria, strict=self.config.strict)
        elif isinstance(criteria, str):
            on_criteria = CriteriaList(strict=self.config.strict).add_raw(criteria)
        elif criteria is not None:
            on_criteria = CriteriaList(strict=self.config.strict)
            for criterion in criteria:
                on_criteria.add_raw(criterion)

        self._joins.append(Join(table, JoinType.coerce(join_type), alias, on_criteria))
        return self

    def inner_join(self, table: str, criteria: JoinCriteria = None, alias: Optional[str] = None) -> Self:
        return self.join(table, criteria, JoinType.INNER, alias)

    def left_join(self, table: str, criteria: JoinCriteria = None, alias: Optional[str] = None) -> Self:
        return self.join(table, criteria, JoinType.LEFT, alias)

    def right_join(self, table: str, criteria: JoinCriteria = None, alias: Optional[str] = None) -> Self:
        return self.join(table, criteria, JoinType.RIGHT, alias)

    def get_joins(self) -> "list[Join]":
        """Copies of the JOINs; changing them does not affect the statement."""
        return [
            Join(join.table, join.join_type, join.alias, join.criteria.copy() if join.criteria is not None else None)
            for join in self._joins
        ]

    def _current_on_criteria(self) -> CriteriaList:
        if not self._joins:
            msg = "Cannot add ON criteria before a JOIN."
            raise SQLBuilderError(msg)
        current = self._joins[-1]
        if current.criteria is None:
            current.criteria = CriteriaList(strict=self.config.strict)
        return current.criteria

    def open_on(self, connector: Union[str, Connector] = Connector.AND) -> Self:
        self._current_on_criteria().open_group(connector)
        return self

    def close_on(self) -> Self:
        self._current_on_criteria().close_group()
        return self

    def on(
        self,
        column: str,
        value: Any,
        operator: Union[str, Operator] = Operator.EQUALS,
        connector: Union[str, Connector] = Connector.AND,
        quote: Optional[bool] = None,
    ) -> Self:
        """Add a comparison to the ON criteria of the most recent JOIN.

        Raises:
            SQLBuilderError: If no JOIN has been added yet.

        Returns:
            The current builder instance for method chaining.
        """
        self._current_on_criteria().add(column, value, operator, connector, quote)
        return self

    def and_on(
        self, column: str, value: Any, operator: Union[str, Operator] = Operator.EQUALS, quote: Optional[bool] = None
    ) -> Self:
        return self.on(column, value, operator, Connector.AND, quote)

    def or_on(
        self, column: str, value: Any, operator: Union[str, Operator] = Operator.EQUALS, quote: Optional[bool] = None
    ) -> Self:
        return self.on(column, value, operator, Connector.OR, quote)

    def on_in(
        self,
        column: str,
        values: Iterable[Any],
        connector: Union[str, Connector] = Connector.AND,
        quote: Optional[bool] = None,
    ) -> Self:
        self._current_on_criteria().add_in(column, values, connector, quote)
        return self

    def on_not_in(
        self,
        column: str,
        values: Iterable[Any],
        connector: Union[str, Connector] = Connector.AND,
        quote: Optional[bool] = None,
    ) -> Self:
        self._current_on_criteria().add_not_in(column, values, connector, quote)
        return self

    def on_between(
        self,
        column: str,
        low: Any,
        high: Any,
        connector: Union[str, Connector] = Connector.AND,
        quote: Optional[bool] = None,
    ) -> Self:
        self._current_on_criteria().add_between(column, low, high, connector, quote)
        return self

    def on_criteria(self, criteria: CriteriaList, connector: Union[str, Connector] = Connector.AND) -> Self:
        """Add a prebuilt criteria list to the most recent JOIN as one bracketed group."""
        self._current_on_criteria().add_criteria(criteria, connector)
        return self

    def on_not_between(
        self,
        column: str,
        low: Any,
        high: Any,
        connector: Union[str, Connector] = Connector.AND,
        quote: Optional[bool] = None,
    ) -> Self:
        self._current_on_criteria().add_not_between(column, low, high, connector, quote)
        return self
