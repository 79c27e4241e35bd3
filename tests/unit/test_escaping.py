"""Unit tests for literal escaping."""

from decimal import Decimal
from typing import Any

import pytest

from sqlforge import CallableEscaper, Escaper, LiteralEscaper, SQLBuilderError, Statement, select
from sqlforge.escaping import render_keyword


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (42, "42"),
        (-7, "-7"),
        (1.5, "1.5"),
        (Decimal("1.50"), "1.50"),
        ("bob", "'bob'"),
        (None, "NULL"),
        (True, "TRUE"),
        (False, "FALSE"),
    ],
)
def test_literal_escaper(escaper: LiteralEscaper, value: Any, expected: str) -> None:
    """Test numbers pass through, strings are quoted and singletons become keywords."""
    assert escaper.escape(value) == expected


def test_literal_escaper_escapes_quotes(escaper: LiteralEscaper) -> None:
    """Test an embedded quote cannot terminate the literal."""
    escaped = escaper.escape("o'neil")

    assert escaped.startswith("'")
    assert escaped.endswith("'")
    assert escaped != "'o'neil'"


def test_literal_escaper_rejects_unknown_types(escaper: LiteralEscaper) -> None:
    with pytest.raises(SQLBuilderError, match="Cannot escape value of type object"):
        escaper.escape(object())


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf"), Decimal("NaN"), Decimal("Infinity")])
def test_literal_escaper_rejects_non_finite_numbers(escaper: LiteralEscaper, value: Any) -> None:
    """Test NaN and infinities are refused instead of rendering as bare words."""
    with pytest.raises(SQLBuilderError, match="non-finite"):
        escaper.escape(value)


def test_non_finite_value_fails_literal_rendering() -> None:
    stmt = select("id").from_("t").where("score", float("inf"), ">")

    assert stmt.get_statement() == "SELECT id FROM t WHERE score > ?"
    with pytest.raises(SQLBuilderError, match="non-finite"):
        stmt.to_literal_statement()


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, "NULL"), (True, "TRUE"), (False, "FALSE"), ("NOW()", "NOW()"), (3, "3")],
)
def test_render_keyword(value: Any, expected: str) -> None:
    assert render_keyword(value) == expected


def test_escapers_satisfy_protocol(escaper: LiteralEscaper) -> None:
    assert isinstance(escaper, Escaper)
    assert isinstance(CallableEscaper(repr), Escaper)


def test_callable_escaper_is_used_for_literals() -> None:
    """Test a connection-provided quoting function replaces the default escaper."""
    stmt = Statement(escaper=CallableEscaper(lambda value: f"<{value}>")).select("id").from_("t").where("a", "x")

    assert stmt.to_literal_statement() == "SELECT id FROM t WHERE a = <x>"
    assert stmt.get_statement() == "SELECT id FROM t WHERE a = ?"


def test_literal_in_list_and_between() -> None:
    stmt = select("id").from_("t").where_in("name", ["a", "b"]).where_between("age", 18, 30)

    assert stmt.to_literal_statement() == "SELECT id FROM t WHERE name IN ('a', 'b') AND age BETWEEN 18 AND 30"
