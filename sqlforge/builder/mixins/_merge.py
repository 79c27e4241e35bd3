"""Copying clauses from one statement into another.

Merging lets a base statement act as a template: the template's clauses are
re-added to a target through the target's own methods, so the template is
never mutated and no clause collection is shared between the two.
"""

import logging
from typing import TYPE_CHECKING, Optional, TypeVar

from sqlforge.builder._clauses import Join, Limit, OrderTerm, SelectColumn, SetValue, StatementKind, TableRef
from sqlforge.builder._criteria import CriteriaList
from sqlforge.utils.logging import get_logger, log_with_context

if TYPE_CHECKING:
    from sqlforge.builder._statement import Statement

__all__ = ("MergeMixin",)

logger = get_logger("builder.merge")

StatementT = TypeVar("StatementT", bound="Statement")


class MergeMixin:
    """Mixin providing ``merge_into`` and the per-clause ``merge_*_into`` methods."""

    _options: "list[str]"
    _select: "dict[str, SelectColumn]"
    _insert: Optional[str]
    _replace: Optional[str]
    _update: Optional[str]
    _delete: "Optional[list[str]]"
    _from: Optional[TableRef]
    _joins: "list[Join]"
    _where: CriteriaList
    _having: CriteriaList
    _set: "list[SetValue]"
    _group_by: "list[OrderTerm]"
    _order_by: "list[OrderTerm]"
    _limit: Optional[Limit]

    kind: StatementKind

    def merge_options_into(self, target: StatementT) -> StatementT:
        """Copy options the target does not already carry."""
        existing = set(target.get_options())
        for option in self._options:
            if option not in existing:
                target.option(option)
                existing.add(option)
        return target

    def merge_select_into(self, target: StatementT) -> StatementT:
        for item in self._select.values():
            target.select(item.column, item.alias)
        return target

    def merge_insert_into(self, target: StatementT) -> StatementT:
        if self._insert is not None:
            target.insert_into(self._insert)
        return target

    def merge_replace_into(self, target: StatementT) -> StatementT:
        if self._replace is not None:
            target.replace_into(self._replace)
        return target

    def merge_update_into(self, target: StatementT) -> StatementT:
        if self._update is not None:
            target.update(self._update)
        return target

    def merge_delete_into(self, target: StatementT) -> StatementT:
        if self._delete is not None:
            target.delete(*self._delete)
        return target

    def merge_from_into(self, target: StatementT) -> StatementT:
        if self._from is not None:
            target.from_(self._from.table, self._from.alias)
        return target

    def merge_join_into(self, target: StatementT) -> StatementT:
        for join in self._joins:
            target.join(join.table, join.criteria, join.join_type, join.alias)
        return target

    def merge_set_into(self, target: StatementT) -> StatementT:
        for item in self._set:
            target.set(item.column, item.value, item.quote)
        return target

    def merge_where_into(self, target: StatementT) -> StatementT:
        target._where.extend_from(self._where)  # noqa: SLF001
        return target

    def merge_group_by_into(self, target: StatementT) -> StatementT:
        for term in self._group_by:
            target.group_by(term.column, term.direction)
        return target

    def merge_having_into(self, target: StatementT) -> StatementT:
        target._having.extend_from(self._having)  # noqa: SLF001
        return target

    def merge_order_by_into(self, target: StatementT) -> StatementT:
        for term in self._order_by:
            target.order_by(term.column, term.direction or "ASC")
        return target

    def merge_limit_into(self, target: StatementT) -> StatementT:
        if self._limit is not None:
            target.limit(self._limit.limit, self._limit.offset)
        return target

    def merge_into(self, target: StatementT, overwrite_limit: bool = True) -> StatementT:
        """Copy this statement's clauses into ``target``.

        Only the clauses that the source's kind renders are copied. A source
        with no target set (an EMPTY statement) copies its FROM, JOIN, SET,
        WHERE, GROUP BY, HAVING and ORDER BY clauses, which makes it usable
        as a reusable filter. Copied entries are appended after the target's
        own entries.

        Args:
            target: The statement to merge into.
            overwrite_limit: Replace the target's LIMIT with this statement's LIMIT, if set.

        Returns:
            The target statement.
        """
        kind = self.kind
        self.merge_options_into(target)

        if kind is StatementKind.SELECT:
            self.merge_select_into(target)
            self.merge_from_into(target)
            self.merge_join_into(target)
            self.merge_where_into(target)
            self.merge_group_by_into(target)
            self.merge_having_into(target)
            self.merge_order_by_into(target)
        elif kind is StatementKind.INSERT:
            self.merge_insert_into(target)
            self.merge_set_into(target)
        elif kind is StatementKind.REPLACE:
            self.merge_replace_into(target)
            self.merge_set_into(target)
        elif kind is StatementKind.UPDATE:
            self.merge_update_into(target)
            self.merge_join_into(target)
            self.merge_set_into(target)
            self.merge_where_into(target)
            if not self._joins:
                self.merge_order_by_into(target)
        elif kind is StatementKind.DELETE:
            self.merge_delete_into(target)
            self.merge_from_into(target)
            self.merge_join_into(target)
            self.merge_where_into(target)
            if not self._delete:
                self.merge_order_by_into(target)
        else:
            self.merge_from_into(target)
            self.merge_join_into(target)
            self.merge_set_into(target)
            self.merge_where_into(target)
            self.merge_group_by_into(target)
            self.merge_having_into(target)
            self.merge_order_by_into(target)

        limit_applies = kind in {StatementKind.SELECT, StatementKind.EMPTY} or (
            (kind is StatementKind.UPDATE and not self._joins) or (kind is StatementKind.DELETE and not self._delete)
        )
        if overwrite_limit and limit_applies:
            self.merge_limit_into(target)

        log_with_context(
            logger,
            logging.DEBUG,
            "Merged statement",
            source_kind=kind.value,
            target_kind=target.kind.value,
            where_entries=len(self._where),
            having_entries=len(self._having),
            join_count=len(self._joins),
            limit_merged=overwrite_limit and limit_applies and self._limit is not None,
        )
        return target
