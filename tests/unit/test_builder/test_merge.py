"""Tests for merging one statement's clauses into another."""

from sqlforge import Statement, StatementKind, delete_from, insert_into, select, update


def test_filter_template_merges_into_select() -> None:
    """Test an EMPTY statement acts as a reusable WHERE filter."""
    template = Statement().where("x", 1)
    target = select("*").from_("t").where("y", 2)

    merged = template.merge_into(target)

    assert merged is target
    assert target.where_clause_text(use_placeholders=False) == "WHERE y = 2 AND x = 1"
    assert target.get_statement() == "SELECT * FROM t WHERE y = ? AND x = ?"
    assert target.get_placeholder_values() == [2, 1]


def test_merge_does_not_mutate_source() -> None:
    """Test the source statement is unchanged after merging."""
    template = Statement().where("x", 1).order_by("id")
    before = template.get_where()

    target = select("*").from_("t")
    template.merge_into(target)
    target.where("z", 3).order_by("name")

    assert template.get_where() == before
    assert len(template.get_order_by()) == 1


def test_merge_select_clauses() -> None:
    """Test a SELECT source copies every SELECT clause after the target's own."""
    source = (
        select("b")
        .distinct()
        .from_("src", "s")
        .join("other", "id")
        .where("s.flag", 1)
        .group_by("b")
        .having("COUNT(*)", 2, ">")
        .order_by("b", "DESC")
        .limit(5, 10)
    )
    target = Statement().select("a")

    source.merge_into(target)

    assert target.get_statement() == (
        "SELECT DISTINCT a, b FROM src AS s INNER JOIN other ON s.id = other.id WHERE s.flag = ? "
        "GROUP BY b HAVING COUNT(*) > ? ORDER BY b DESC LIMIT 5 OFFSET 10"
    )


def test_merge_overwrites_from() -> None:
    """Test a source FROM replaces the target's FROM."""
    target = select("*").from_("old")
    select("*").from_("new", "n").merge_into(target)

    assert target.from_clause_text() == "FROM new AS n"


def test_merge_keeps_target_limit_when_not_overwriting() -> None:
    """Test overwrite_limit=False keeps the target's LIMIT."""
    target = select("*").from_("t").limit(3)
    Statement().where("a", 1).limit(50).merge_into(target, overwrite_limit=False)

    assert target.limit_clause_text() == "LIMIT 3"


def test_merge_overwrites_limit_by_default() -> None:
    """Test the source LIMIT replaces the target's by default."""
    target = select("*").from_("t").limit(3)
    Statement().limit(50, 5).merge_into(target)

    assert target.get_limit() == 50
    assert target.get_offset() == 5


def test_merged_join_criteria_are_not_shared() -> None:
    """Test ON criteria added to the target do not leak back into the source."""
    source = select("*").from_("a").join("b", "a.id = b.a_id").on("b.x", 1)
    target = source.merge_into(Statement())
    target.on("b.y", 2)

    assert source.join_clause_text() == "INNER JOIN b ON a.id = b.a_id AND b.x = ?"
    assert target.join_clause_text() == "INNER JOIN b ON a.id = b.a_id AND b.x = ? AND b.y = ?"


def test_merge_groups_are_preserved() -> None:
    """Test bracketed groups and connectors survive a merge."""
    template = Statement().open_where().where("a", 1).or_where("b", 2).close_where()
    target = select("*").from_("t").where("c", 3)

    template.merge_into(target)

    assert target.where_clause_text() == "WHERE c = ? AND (a = ? OR b = ?)"


def test_merge_insert() -> None:
    """Test an INSERT source copies its target and SET assignments."""
    target = insert_into("users").set("name", "x").merge_into(Statement())

    assert target.kind is StatementKind.INSERT
    assert target.get_statement() == "INSERT users SET name = ?"


def test_merge_update_without_joins_copies_order_and_limit() -> None:
    """Test a single-table UPDATE source copies ORDER BY and LIMIT."""
    source = update("t").set("a", 1).where("id", 2).order_by("id").limit(1)
    target = source.merge_into(Statement())

    assert target.get_statement() == "UPDATE t SET a = ? WHERE id = ? ORDER BY id ASC LIMIT 1"


def test_merge_update_with_joins_skips_order_and_limit() -> None:
    """Test a multi-table UPDATE source leaves ORDER BY and LIMIT behind."""
    source = update("t").join("u", "id").set("t.a", 1).where("u.b", 2).order_by("t.id").limit(1)
    target = source.merge_into(Statement())

    assert target.get_order_by() == []
    assert target.get_limit() is None


def test_merge_delete() -> None:
    """Test a DELETE source copies its tables, FROM and WHERE."""
    target = delete_from("logs").where("level", "debug").merge_into(Statement())

    assert target.is_delete()
    assert target.get_statement() == "DELETE FROM logs WHERE level = ?"


def test_merge_skips_options_the_target_has() -> None:
    """Test merging does not repeat an option such as DISTINCT."""
    target = select("a").distinct().from_("t")
    select("b").distinct().calc_found_rows().merge_into(target)

    assert target.get_options() == ["DISTINCT", "SQL_CALC_FOUND_ROWS"]
    assert target.get_statement() == "SELECT DISTINCT SQL_CALC_FOUND_ROWS a, b FROM t"
