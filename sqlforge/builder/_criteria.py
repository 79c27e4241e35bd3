"""Criteria lists: the boolean expressions behind WHERE, HAVING and JOIN ON.

A criteria list is a flat, ordered sequence of conditions and bracket
markers. Nesting is expressed by OPEN/CLOSE brackets in the same sequence,
and each entry carries the connector that joins it to its previous sibling.
Rendering walks the sequence once, emitting connectors only between
siblings, and collects bound values in the order their placeholders appear.
"""

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple, Optional, Union

from typing_extensions import Self, TypeAlias

from sqlforge.escaping import Escaper, render_keyword
from sqlforge.exceptions import CriteriaError, SQLBuilderError

__all__ = (
    "Bracket",
    "BracketKind",
    "Condition",
    "Connector",
    "CriteriaEntry",
    "CriteriaList",
    "Operator",
    "Pair",
    "RawCondition",
    "RenderedFragment",
    "Scalar",
    "Value",
    "ValueList",
    "ValueShape",
    "as_value",
    "render_criteria",
)


class ValueShape(Enum):
    """Arity of the value an operator compares against."""

    SCALAR = "scalar"
    PAIR = "pair"
    LIST = "list"


class Operator(str, Enum):
    """Comparison operators understood by the criteria renderer."""

    EQUALS = "="
    NOT_EQUALS = "!="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    IN = "IN"
    NOT_IN = "NOT IN"
    LIKE = "LIKE"
    NOT_LIKE = "NOT LIKE"
    ILIKE = "ILIKE"
    REGEX = "REGEXP"
    NOT_REGEX = "NOT REGEXP"
    BETWEEN = "BETWEEN"
    NOT_BETWEEN = "NOT BETWEEN"
    IS = "IS"
    IS_NOT = "IS NOT"

    @property
    def shape(self) -> ValueShape:
        if self in {Operator.BETWEEN, Operator.NOT_BETWEEN}:
            return ValueShape.PAIR
        if self in {Operator.IN, Operator.NOT_IN}:
            return ValueShape.LIST
        return ValueShape.SCALAR

    @property
    def is_verbatim(self) -> bool:
        """IS / IS NOT operands are keywords and are never bound or quoted."""
        return self in {Operator.IS, Operator.IS_NOT}

    @classmethod
    def coerce(cls, operator: Union[str, "Operator"]) -> "Operator":
        """Look up an operator by member or SQL text (case-insensitive).

        Raises:
            SQLBuilderError: If ``operator`` is not a known comparison operator.

        Returns:
            The matching operator.
        """
        if isinstance(operator, Operator):
            return operator
        text = " ".join(operator.split()).upper()
        try:
            return cls(text)
        except ValueError:
            if text in cls.__members__:
                return cls[text]
            text = text.replace(" ", "_")
            if text in cls.__members__:
                return cls[text]
        msg = f"Unsupported comparison operator: {operator!r}"
        raise SQLBuilderError(msg)

    def __str__(self) -> str:
        return self.value


class Connector(str, Enum):
    """Logical connector joining a criteria entry to its previous sibling."""

    AND = "AND"
    OR = "OR"

    @classmethod
    def coerce(cls, connector: Union[str, "Connector"]) -> "Connector":
        if isinstance(connector, Connector):
            return connector
        try:
            return cls(connector.strip().upper())
        except ValueError:
            msg = f"Unsupported logical connector: {connector!r}"
            raise SQLBuilderError(msg) from None

    def __str__(self) -> str:
        return self.value


class BracketKind(Enum):
    OPEN = "("
    CLOSE = ")"


@dataclass(frozen=True)
class Scalar:
    value: Any


@dataclass(frozen=True)
class Pair:
    """Lower and upper bound of a BETWEEN comparison."""

    low: Any
    high: Any


@dataclass(frozen=True)
class ValueList:
    """Members of an IN comparison."""

    values: "tuple[Any, ...]"


Value: TypeAlias = Union[Scalar, Pair, ValueList]


def as_value(operator: Operator, raw: Any, strict: bool = False) -> Value:
    """Wrap a raw Python value in the shape ``operator`` expects.

    Outside strict mode a value of the wrong arity is wrapped as-is and
    renders as whatever shape it has, which yields wrong SQL rather than an
    error.

    Args:
        operator: The comparison operator the value belongs to.
        raw: The value as given by the caller.
        strict: Raise on arity mismatches.

    Raises:
        CriteriaError: In strict mode, when ``raw`` does not match the operator's arity.

    Returns:
        A :class:`Scalar`, :class:`Pair` or :class:`ValueList`.
    """
    if isinstance(raw, (Scalar, Pair, ValueList)):
        value: Value = raw
    elif operator.shape is ValueShape.PAIR and isinstance(raw, (tuple, list)) and len(raw) == 2:
        value = Pair(raw[0], raw[1])
    elif operator.shape is ValueShape.LIST and isinstance(raw, Iterable) and not isinstance(raw, (str, bytes)):
        value = ValueList(tuple(raw))
    else:
        value = Scalar(raw)

    if strict and _shape_of(value) is not operator.shape:
        msg = f"Operator {operator.value} expects a {operator.shape.value} value, got {raw!r}"
        raise CriteriaError(msg)
    return value


def _shape_of(value: Value) -> ValueShape:
    if isinstance(value, Pair):
        return ValueShape.PAIR
    if isinstance(value, ValueList):
        return ValueShape.LIST
    return ValueShape.SCALAR


@dataclass(frozen=True)
class Condition:
    """A single ``column operator value`` comparison."""

    column: str
    value: Value
    operator: Operator = Operator.EQUALS
    connector: Connector = Connector.AND
    quote: Optional[bool] = None


@dataclass(frozen=True)
class Bracket:
    """Group marker. Only OPEN brackets carry a connector."""

    kind: BracketKind
    connector: Optional[Connector] = None


@dataclass(frozen=True)
class RawCondition:
    """A verbatim expression, as used in JOIN ON lists."""

    text: str
    connector: Connector = Connector.AND


CriteriaEntry: TypeAlias = Union[Condition, Bracket, RawCondition]


class RenderedFragment(NamedTuple):
    """SQL text plus the values bound to its placeholders, in textual order."""

    sql: str
    parameters: "list[Any]"


class CriteriaList:
    """Ordered conditions and brackets forming one clause's boolean expression.

    Entries are immutable and are only ever appended.
    """

    __slots__ = ("_depth", "_entries", "strict")

    def __init__(self, entries: Optional[Iterable[CriteriaEntry]] = None, strict: bool = False) -> None:
        self._entries: list[CriteriaEntry] = []
        self._depth = 0
        self.strict = strict
        if entries is not None:
            for entry in entries:
                self.append(entry)

    def __iter__(self) -> Iterator[CriteriaEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CriteriaList):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"CriteriaList({self._entries!r})"

    @property
    def depth(self) -> int:
        """Number of groups opened and not yet closed."""
        return self._depth

    @property
    def has_conditions(self) -> bool:
        return any(not isinstance(entry, Bracket) for entry in self._entries)

    def append(self, entry: CriteriaEntry) -> Self:
        """Append an entry, keeping track of the bracket depth.

        Raises:
            CriteriaError: In strict mode, when closing a group that was never opened.

        Returns:
            The criteria list for method chaining.
        """
        if isinstance(entry, Bracket):
            if entry.kind is BracketKind.OPEN:
                self._depth += 1
            else:
                if self.strict and self._depth == 0:
                    msg = "Cannot close a criteria group that was never opened."
                    raise CriteriaError(msg)
                self._depth -= 1
        self._entries.append(entry)
        return self

    def open_group(self, connector: Union[str, Connector] = Connector.AND) -> Self:
        return self.append(Bracket(BracketKind.OPEN, Connector.coerce(connector)))

    def close_group(self) -> Self:
        return self.append(Bracket(BracketKind.CLOSE))

    def add(
        self,
        column: str,
        value: Any,
        operator: Union[str, Operator] = Operator.EQUALS,
        connector: Union[str, Connector] = Connector.AND,
        quote: Optional[bool] = None,
    ) -> Self:
        """Append a comparison.

        Args:
            column: Column name or expression on the left-hand side.
            value: A scalar, a ``(low, high)`` pair for BETWEEN or an iterable for IN.
            operator: Comparison operator.
            connector: Connector joining this comparison to the previous sibling.
            quote: Quote/bind override; ``None`` inherits the builder default.

        Returns:
            The criteria list for method chaining.
        """
        op = Operator.coerce(operator)
        return self.append(
            Condition(
                column=column,
                value=as_value(op, value, strict=self.strict),
                operator=op,
                connector=Connector.coerce(connector),
                quote=quote,
            )
        )

    def add_or(
        self, column: str, value: Any, operator: Union[str, Operator] = Operator.EQUALS, quote: Optional[bool] = None
    ) -> Self:
        return self.add(column, value, operator, Connector.OR, quote)

    def add_in(
        self,
        column: str,
        values: Iterable[Any],
        connector: Union[str, Connector] = Connector.AND,
        quote: Optional[bool] = None,
    ) -> Self:
        return self.add(column, values, Operator.IN, connector, quote)

    def add_not_in(
        self,
        column: str,
        values: Iterable[Any],
        connector: Union[str, Connector] = Connector.AND,
        quote: Optional[bool] = None,
    ) -> Self:
        return self.add(column, values, Operator.NOT_IN, connector, quote)

    def add_between(
        self,
        column: str,
        low: Any,
        high: Any,
        connector: Union[str, Connector] = Connector.AND,
        quote: Optional[bool] = None,
    ) -> Self:
        return self.add(column, Pair(low, high), Operator.BETWEEN, connector, quote)

    def add_not_between(
        self,
        column: str,
        low: Any,
        high: Any,
        connector: Union[str, Connector] = Connector.AND,
        quote: Optional[bool] = None,
    ) -> Self:
        return self.add(column, Pair(low, high), Operator.NOT_BETWEEN, connector, quote)

    def add_raw(self, text: str, connector: Union[str, Connector] = Connector.AND) -> Self:
        return self.append(RawCondition(text, Connector.coerce(connector)))

    def add_criteria(self, other: "CriteriaList", connector: Union[str, Connector] = Connector.AND) -> Self:
        """Nest ``other`` as one bracketed group joined by ``connector``.

        An empty ``other`` adds nothing.

        Args:
            other: A prebuilt criteria list.
            connector: Connector joining the group to the previous sibling.

        Raises:
            CriteriaError: In strict mode, if ``other`` leaves groups open.

        Returns:
            The criteria list for method chaining.
        """
        if not other:
            return self
        if self.strict:
            other.validate()
        self.open_group(connector)
        self.extend_from(other)
        return self.close_group()

    def extend_from(self, other: Iterable[CriteriaEntry]) -> Self:
        """Append every entry of ``other``, preserving order, connectors and overrides."""
        for entry in other:
            self.append(entry)
        return self

    def copy(self) -> "CriteriaList":
        return CriteriaList(self._entries, strict=self.strict)

    def validate(self) -> None:
        """Check that every opened group was closed.

        Raises:
            CriteriaError: If groups remain open.
        """
        if self._depth > 0:
            msg = f"{self._depth} criteria group(s) left open."
            raise CriteriaError(msg)


def render_criteria(
    entries: Iterable[CriteriaEntry],
    *,
    escaper: Escaper,
    use_placeholders: bool = True,
    quote_default: bool = True,
    placeholder: str = "?",
    raw_renderer: Optional[Callable[[str], str]] = None,
) -> RenderedFragment:
    """Render a criteria sequence to SQL.

    A connector is written before an entry only when a sibling precedes it at
    the same depth: never right after an OPEN bracket, always after a CLOSE
    bracket or a condition.

    Args:
        entries: The criteria sequence.
        escaper: Literal escaper used when values are inlined.
        use_placeholders: Bind values as placeholders instead of inlining them.
        quote_default: Quoting applied to entries without an override.
        placeholder: Positional placeholder marker.
        raw_renderer: Optional rewrite applied to :class:`RawCondition` text.

    Returns:
        The SQL text and the bound values in placeholder order.
    """
    parts: list[str] = []
    parameters: list[Any] = []
    needs_connector = False

    for entry in entries:
        if isinstance(entry, Bracket):
            if entry.kind is BracketKind.OPEN:
                if needs_connector:
                    parts.append(f" {(entry.connector or Connector.AND).value} ")
                parts.append(BracketKind.OPEN.value)
                needs_connector = False
            else:
                parts.append(BracketKind.CLOSE.value)
                needs_connector = True
            continue

        if needs_connector:
            parts.append(f" {entry.connector.value} ")
        needs_connector = True

        if isinstance(entry, RawCondition):
            parts.append(raw_renderer(entry.text) if raw_renderer is not None else entry.text)
            continue

        quote = quote_default if entry.quote is None else entry.quote
        fragment = _render_operand(
            entry,
            bind=use_placeholders and quote,
            quote=quote,
            escaper=escaper,
            placeholder=placeholder,
            parameters=parameters,
        )
        parts.append(f"{entry.column} {entry.operator.value} {fragment}")

    return RenderedFragment("".join(parts), parameters)


def _render_operand(
    condition: Condition,
    *,
    bind: bool,
    quote: bool,
    escaper: Escaper,
    placeholder: str,
    parameters: "list[Any]",
) -> str:
    value = condition.value
    if condition.operator.is_verbatim:
        if isinstance(value, Scalar):
            return render_keyword(value.value)
        bind = quote = False

    items: tuple[Any, ...]
    if isinstance(value, Pair):
        items = (value.low, value.high)
    elif isinstance(value, ValueList):
        items = value.values
    else:
        items = (value.value,)

    if bind:
        rendered = [placeholder] * len(items)
        parameters.extend(items)
    elif quote:
        rendered = [escaper.escape(item) for item in items]
    else:
        rendered = [render_keyword(item) for item in items]

    if isinstance(value, Pair):
        return f"{rendered[0]} {Connector.AND.value} {rendered[1]}"
    if isinstance(value, ValueList):
        return f"({', '.join(rendered)})"
    return rendered[0]
