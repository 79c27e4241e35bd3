from typing import Optional

from typing_extensions import Self

from sqlforge.builder._clauses import TableRef

__all__ = ("TargetTableMixin",)


class TargetTableMixin:
    """Mixin providing the INSERT, REPLACE, UPDATE and DELETE targets.

    Setting a target is what makes a statement one of those kinds; see
    ``Statement.kind`` for the precedence when several are set.
    """

    _insert: Optional[str]
    _replace: Optional[str]
    _update: Optional[str]
    _delete: "Optional[list[str]]"
    _from: Optional[TableRef]

    def insert_into(self, table: str) -> Self:
        self._insert = table
        return self

    def replace_into(self, table: str) -> Self:
        self._replace = table
        return self

    def update(self, table: str) -> Self:
        self._update = table
        return self

    def delete(self, *tables: str) -> Self:
        """Make this a DELETE statement.

        Without arguments rows are deleted from the FROM table. With tables,
        a multi-table delete is rendered as ``DELETE t1, t2 FROM ...``.

        Args:
            *tables: Tables (or aliases) to delete rows from.

        Returns:
            The current builder instance for method chaining.
        """
        if self._delete is None:
            self._delete = []
        self._delete.extend(tables)
        return self

    def delete_from(self, table: str, alias: Optional[str] = None) -> Self:
        """Single-table DELETE from ``table``."""
        self.delete()
        self._from = TableRef(table, alias)
        return self

    def get_insert(self) -> Optional[str]:
        return self._insert

    def get_replace(self) -> Optional[str]:
        return self._replace

    def get_update(self) -> Optional[str]:
        return self._update

    def get_delete(self) -> "Optional[list[str]]":
        return None if self._delete is None else list(self._delete)
