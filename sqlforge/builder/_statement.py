# ruff: noqa: PLR0904
"""The statement assembler.

A :class:`Statement` owns one ordered collection per clause. Builder methods
only ever append to those collections; rendering reads them and produces the
clause texts, the full statement and the placeholder values in the order the
placeholders appear in the text.
"""

import logging
import re
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Optional

from sqlforge.builder._base import ParameterizedStatement
from sqlforge.builder._clauses import Join, Limit, OrderTerm, SelectColumn, SetValue, StatementKind, TableRef
from sqlforge.builder._criteria import CriteriaList, RenderedFragment, render_criteria
from sqlforge.builder.mixins import (
    FromJoinMixin,
    GroupByMixin,
    HavingClauseMixin,
    LimitOffsetClauseMixin,
    MergeMixin,
    OptionsMixin,
    OrderByMixin,
    SelectColumnsMixin,
    SetValuesMixin,
    TargetTableMixin,
    WhereClauseMixin,
)
from sqlforge.config import BuilderConfig, LimitStyle
from sqlforge.escaping import Escaper, LiteralEscaper, render_keyword
from sqlforge.exceptions import MissingPredicateError
from sqlforge.utils.logging import get_logger, log_with_context

__all__ = ("Statement",)

logger = get_logger("builder")

_BARE_COLUMN = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]*$")

_EMPTY = RenderedFragment("", [])


def _expand_join_column(previous: Optional[TableRef], current: TableRef, text: str) -> str:
    """Expand a bare column name into an equi-join against the previous table."""
    column = text.strip()
    if previous is None or not _BARE_COLUMN.match(column):
        return text
    return f"{previous.reference}.{column} = {current.reference}.{column}"


def _keyword(keyword: str, text: str, include_text: bool) -> str:
    if include_text and text:
        return f"{keyword} {text}"
    return text


@dataclass
class Statement(
    OptionsMixin,
    SelectColumnsMixin,
    TargetTableMixin,
    FromJoinMixin,
    SetValuesMixin,
    WhereClauseMixin,
    GroupByMixin,
    HavingClauseMixin,
    OrderByMixin,
    LimitOffsetClauseMixin,
    MergeMixin,
):
    """Builder for SELECT, INSERT, REPLACE, UPDATE and DELETE statements.

    The statement kind is derived from the target that was set: ``select()``,
    ``insert_into()``, ``replace_into()``, ``update()`` or ``delete()``.
    Clauses that do not apply to the kind are kept but never rendered.

    Example:
        >>> stmt = Statement().select("id").from_("users").where("name", "bob")
        >>> stmt.get_statement()
        'SELECT id FROM users WHERE name = ?'
        >>> stmt.get_placeholder_values()
        ['bob']
    """

    config: BuilderConfig = field(default_factory=BuilderConfig)
    escaper: Optional[Escaper] = None
    _options: "list[str]" = field(default_factory=list, init=False, repr=False)
    _select: "dict[str, SelectColumn]" = field(default_factory=dict, init=False, repr=False)
    _insert: Optional[str] = field(default=None, init=False, repr=False)
    _replace: Optional[str] = field(default=None, init=False, repr=False)
    _update: Optional[str] = field(default=None, init=False, repr=False)
    _delete: "Optional[list[str]]" = field(default=None, init=False, repr=False)
    _from: Optional[TableRef] = field(default=None, init=False, repr=False)
    _joins: "list[Join]" = field(default_factory=list, init=False, repr=False)
    _set: "list[SetValue]" = field(default_factory=list, init=False, repr=False)
    _where: CriteriaList = field(default_factory=CriteriaList, init=False, repr=False)
    _group_by: "list[OrderTerm]" = field(default_factory=list, init=False, repr=False)
    _having: CriteriaList = field(default_factory=CriteriaList, init=False, repr=False)
    _order_by: "list[OrderTerm]" = field(default_factory=list, init=False, repr=False)
    _limit: Optional[Limit] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.escaper is None:
            self.escaper = LiteralEscaper(dialect=self.config.dialect)
        self._where.strict = self.config.strict
        self._having.strict = self.config.strict

    # -- kind ---------------------------------------------------------------

    @property
    def kind(self) -> StatementKind:
        """The statement kind, by precedence SELECT, INSERT, REPLACE, UPDATE, DELETE."""
        if self._select:
            return StatementKind.SELECT
        if self._insert:
            return StatementKind.INSERT
        if self._replace:
            return StatementKind.REPLACE
        if self._update:
            return StatementKind.UPDATE
        if self._delete is not None:
            return StatementKind.DELETE
        return StatementKind.EMPTY

    def is_select(self) -> bool:
        return self.kind is StatementKind.SELECT

    def is_insert(self) -> bool:
        return self.kind is StatementKind.INSERT

    def is_replace(self) -> bool:
        return self.kind is StatementKind.REPLACE

    def is_update(self) -> bool:
        return self.kind is StatementKind.UPDATE

    def is_delete(self) -> bool:
        return self.kind is StatementKind.DELETE

    # -- value rendering ----------------------------------------------------

    def _escape(self, value: Any) -> str:
        return self.escaper.escape(value)  # type: ignore[union-attr]

    def _render_value(self, value: Any, quote: Optional[bool], use_placeholders: bool, parameters: "list[Any]") -> str:
        if self.config.resolve_quote(quote):
            if use_placeholders:
                parameters.append(value)
                return self.config.placeholder
            return self._escape(value)
        return render_keyword(value)

    def _render_criteria(self, criteria: CriteriaList, use_placeholders: bool, **kwargs: Any) -> RenderedFragment:
        if self.config.strict:
            criteria.validate()
        return render_criteria(
            criteria,
            escaper=self.escaper,  # type: ignore[arg-type]
            use_placeholders=use_placeholders,
            quote_default=self.config.auto_quote,
            placeholder=self.config.placeholder,
            **kwargs,
        )

    def _options_prefix(self) -> str:
        return f"{' '.join(self._options)} " if self._options else ""

    # -- targets ------------------------------------------------------------

    def select_clause_text(self, include_text: bool = True) -> str:
        """The SELECT clause, including execution options."""
        if not self._select:
            return ""
        columns = ", ".join(item.sql() for item in self._select.values())
        return _keyword("SELECT", self._options_prefix() + columns, include_text)

    def insert_clause_text(self, include_text: bool = True) -> str:
        if not self._insert:
            return ""
        return _keyword("INSERT", self._options_prefix() + self._insert, include_text)

    def replace_clause_text(self, include_text: bool = True) -> str:
        if not self._replace:
            return ""
        return _keyword("REPLACE", self._options_prefix() + self._replace, include_text)

    def update_clause_text(self, include_text: bool = True) -> str:
        if not self._update:
            return ""
        return _keyword("UPDATE", self._options_prefix() + self._update, include_text)

    def delete_clause_text(self, include_text: bool = True) -> str:
        """The DELETE clause with options and the optional multi-table list.

        For a single-table delete without options this is just ``DELETE``.
        """
        if self._delete is None:
            return ""
        text = (self._options_prefix() + ", ".join(self._delete)).strip()
        if not include_text:
            return text
        return f"DELETE {text}" if text else "DELETE"

    # -- FROM / JOIN --------------------------------------------------------

    def _base_table(self) -> Optional[TableRef]:
        if self.kind is StatementKind.UPDATE and self._update:
            return TableRef(self._update)
        return self._from

    def _join_fragment(self, use_placeholders: bool) -> RenderedFragment:
        parts: list[str] = []
        parameters: list[Any] = []
        previous = self._base_table()
        for join in self._joins:
            text = f"{join.join_type.value} {join.ref.sql()}"
            if join.criteria:
                on = self._render_criteria(
                    join.criteria,
                    use_placeholders,
                    raw_renderer=partial(_expand_join_column, previous, join.ref),
                )
                text = f"{text} ON {on.sql}"
                parameters.extend(on.parameters)
            parts.append(text)
            previous = join.ref
        return RenderedFragment(" ".join(parts), parameters)

    def join_clause_text(self, use_placeholders: bool = True) -> str:
        """All JOINs with their ON criteria."""
        return self._join_fragment(use_placeholders).sql

    def join_placeholder_values(self) -> "list[Any]":
        return self._join_fragment(True).parameters

    def _from_fragment(self, use_placeholders: bool) -> RenderedFragment:
        if self._from is None:
            return _EMPTY
        joins = self._join_fragment(use_placeholders)
        sql = self._from.sql()
        if joins.sql:
            sql = f"{sql} {joins.sql}"
        return RenderedFragment(sql, joins.parameters)

    def from_clause_text(self, use_placeholders: bool = True, include_text: bool = True) -> str:
        """The FROM clause including all JOINs."""
        return _keyword("FROM", self._from_fragment(use_placeholders).sql, include_text)

    # -- SET ----------------------------------------------------------------

    def _set_fragment(self, use_placeholders: bool) -> RenderedFragment:
        parameters: list[Any] = []
        assignments = [
            f"{item.column} = {self._render_value(item.value, item.quote, use_placeholders, parameters)}"
            for item in self._set
        ]
        return RenderedFragment(", ".join(assignments), parameters)

    def set_clause_text(self, use_placeholders: bool = True, include_text: bool = True) -> str:
        return _keyword("SET", self._set_fragment(use_placeholders).sql, include_text)

    def set_placeholder_values(self) -> "list[Any]":
        return self._set_fragment(True).parameters

    # -- WHERE / HAVING -----------------------------------------------------

    def where_clause_text(self, use_placeholders: bool = True, include_text: bool = True) -> str:
        return _keyword("WHERE", self._render_criteria(self._where, use_placeholders).sql, include_text)

    def where_placeholder_values(self) -> "list[Any]":
        return self._render_criteria(self._where, True).parameters

    def having_clause_text(self, use_placeholders: bool = True, include_text: bool = True) -> str:
        return _keyword("HAVING", self._render_criteria(self._having, use_placeholders).sql, include_text)

    def having_placeholder_values(self) -> "list[Any]":
        return self._render_criteria(self._having, True).parameters

    # -- GROUP BY / ORDER BY / LIMIT ----------------------------------------

    def group_by_clause_text(self, include_text: bool = True) -> str:
        return _keyword("GROUP BY", ", ".join(term.sql() for term in self._group_by), include_text)

    def order_by_clause_text(self, include_text: bool = True) -> str:
        return _keyword("ORDER BY", ", ".join(term.sql() for term in self._order_by), include_text)

    def limit_clause_text(self, include_text: bool = True) -> str:
        """The LIMIT clause, written according to ``config.limit_style``."""
        if self._limit is None:
            return ""
        limit, offset = self._limit.limit, self._limit.offset
        if not offset:
            text = str(limit)
        elif self.config.limit_style is LimitStyle.COMMA:
            text = f"{offset}, {limit}"
        else:
            text = f"{limit} OFFSET {offset}"
        return _keyword("LIMIT", text, include_text)

    # -- statements ---------------------------------------------------------

    def _require_predicate(self, kind: StatementKind) -> None:
        if not self._where.has_conditions:
            log_with_context(
                logger, logging.DEBUG, "Refusing to render statement without a WHERE predicate", statement_kind=kind.value
            )
            raise MissingPredicateError(kind.value)

    def _render_statement(self, use_placeholders: bool) -> RenderedFragment:
        kind = self.kind
        pieces: list[RenderedFragment] = []

        def add(keyword: str, fragment: RenderedFragment) -> None:
            if fragment.sql:
                pieces.append(RenderedFragment(_keyword(keyword, fragment.sql, bool(keyword)), fragment.parameters))

        def add_text(text: str) -> None:
            if text:
                pieces.append(RenderedFragment(text, []))

        def add_where() -> None:
            add("WHERE", self._render_criteria(self._where, use_placeholders))

        def add_order_and_limit() -> None:
            add_text(self.order_by_clause_text())
            add_text(self.limit_clause_text())

        if kind is StatementKind.SELECT:
            add_text(self.select_clause_text())
            add("FROM", self._from_fragment(use_placeholders))
            add_where()
            add_text(self.group_by_clause_text())
            add("HAVING", self._render_criteria(self._having, use_placeholders))
            add_order_and_limit()
        elif kind in {StatementKind.INSERT, StatementKind.REPLACE}:
            add_text(self.insert_clause_text() if kind is StatementKind.INSERT else self.replace_clause_text())
            add("SET", self._set_fragment(use_placeholders))
        elif kind is StatementKind.UPDATE:
            self._require_predicate(kind)
            add_text(self.update_clause_text())
            add("", self._join_fragment(use_placeholders))
            add("SET", self._set_fragment(use_placeholders))
            add_where()
            if not self._joins:
                add_order_and_limit()
        elif kind is StatementKind.DELETE:
            self._require_predicate(kind)
            add_text(self.delete_clause_text())
            add("FROM", self._from_fragment(use_placeholders))
            add_where()
            if not self._delete:
                add_order_and_limit()

        rendered = RenderedFragment(
            " ".join(piece.sql for piece in pieces),
            [value for piece in pieces for value in piece.parameters],
        )
        log_with_context(
            logger,
            logging.DEBUG,
            "Rendered statement",
            statement_kind=kind.value,
            use_placeholders=use_placeholders,
            parameter_count=len(rendered.parameters),
            join_count=len(self._joins),
        )
        return rendered

    def get_statement(self, use_placeholders: bool = True) -> str:
        """Render the full statement.

        Args:
            use_placeholders: Bind values as placeholders instead of inlining escaped literals.

        Raises:
            MissingPredicateError: For UPDATE and DELETE statements without WHERE conditions.

        Returns:
            The statement text, or an empty string when no target was set.
        """
        return self._render_statement(use_placeholders).sql

    def get_placeholder_values(self) -> "list[Any]":
        """Values bound to the placeholders of :meth:`get_statement`, in textual order."""
        return self._render_statement(True).parameters

    def to_parameterized_statement(self) -> ParameterizedStatement:
        sql, parameters = self._render_statement(True)
        return ParameterizedStatement(sql=sql, parameters=parameters, dialect=self.config.dialect)

    def to_literal_statement(self) -> str:
        return self._render_statement(False).sql

    def __str__(self) -> str:
        return self.to_literal_statement()
