"""Tests for UPDATE statements."""

import pytest

from sqlforge import BuilderConfig, MissingPredicateError, StatementKind, update


def test_update_with_where() -> None:
    """Test SET values are bound before WHERE values."""
    stmt = update("t").set("a", 1).where("id", 5)

    assert stmt.kind is StatementKind.UPDATE
    assert stmt.get_statement() == "UPDATE t SET a = ? WHERE id = ?"
    assert stmt.get_placeholder_values() == [1, 5]


def test_update_without_where_raises() -> None:
    """Test an UPDATE without a WHERE predicate is refused."""
    stmt = update("t").set("a", 1)

    with pytest.raises(MissingPredicateError) as exc_info:
        stmt.get_statement()

    assert exc_info.value.statement_kind == "UPDATE"
    with pytest.raises(MissingPredicateError):
        stmt.get_placeholder_values()
    with pytest.raises(MissingPredicateError):
        stmt.to_literal_statement()


def test_update_with_brackets_only_raises() -> None:
    """Test a WHERE made only of empty groups is not a predicate."""
    stmt = update("t").set("a", 1).open_where().close_where()

    with pytest.raises(MissingPredicateError):
        stmt.get_statement()


def test_update_order_and_limit() -> None:
    """Test single-table UPDATE renders ORDER BY and LIMIT."""
    stmt = update("t").set("a", 1).where("b", 2).order_by("id", "DESC").limit(10)

    assert stmt.get_statement() == "UPDATE t SET a = ? WHERE b = ? ORDER BY id DESC LIMIT 10"


def test_update_with_join_drops_order_and_limit() -> None:
    """Test multi-table UPDATE joins against the target table and omits ORDER BY and LIMIT."""
    stmt = (
        update("users")
        .join("profiles", "user_id")
        .set("users.flag", 1)
        .where("profiles.x", 2)
        .order_by("users.id")
        .limit(5)
    )

    assert stmt.get_statement() == (
        "UPDATE users INNER JOIN profiles ON users.user_id = profiles.user_id SET users.flag = ? WHERE profiles.x = ?"
    )
    assert stmt.get_placeholder_values() == [1, 2]


def test_update_join_on_values_come_first() -> None:
    """Test ON values precede SET values in the placeholder list."""
    stmt = update("a").join("b", "a.id = b.a_id").on("b.kind", "x").set("a.n", 3).where("a.id", 4)

    assert stmt.get_statement() == "UPDATE a INNER JOIN b ON a.id = b.a_id AND b.kind = ? SET a.n = ? WHERE a.id = ?"
    assert stmt.get_placeholder_values() == ["x", 3, 4]


def test_update_literal_with_placeholders_disabled() -> None:
    """Test auto_quote=False writes values verbatim unless overridden."""
    stmt = update("t", config=BuilderConfig(auto_quote=False)).set("n", "n + 1").set("name", "bob", quote=True)
    stmt.where("id", 3)

    assert stmt.get_statement() == "UPDATE t SET n = n + 1, name = ? WHERE id = 3"
    assert stmt.get_placeholder_values() == ["bob"]
    assert stmt.to_literal_statement() == "UPDATE t SET n = n + 1, name = 'bob' WHERE id = 3"


def test_update_with_options() -> None:
    """Test options follow the UPDATE verb."""
    stmt = update("t").ignore().set("a", 1).where("b", 2)

    assert stmt.update_clause_text() == "UPDATE IGNORE t"
