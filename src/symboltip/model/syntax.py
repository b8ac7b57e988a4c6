"""Syntax tree types handed over by the semantic-model provider.

Only the node kinds the composer inspects are distinguished; every other
construct maps to SyntaxKind.OTHER.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SyntaxKind(str, Enum):
    IDENTIFIER_NAME = "identifier_name"
    GENERIC_NAME = "generic_name"
    QUALIFIED_NAME = "qualified_name"
    PREDEFINED_TYPE = "predefined_type"
    ARGUMENT = "argument"
    ARGUMENT_LIST = "argument_list"
    BRACKETED_ARGUMENT_LIST = "bracketed_argument_list"
    INVOCATION_EXPRESSION = "invocation_expression"
    OBJECT_CREATION_EXPRESSION = "object_creation_expression"
    ELEMENT_ACCESS_EXPRESSION = "element_access_expression"
    MEMBER_ACCESS_EXPRESSION = "member_access_expression"
    ATTRIBUTE = "attribute"
    METHOD_DECLARATION = "method_declaration"
    NUMERIC_LITERAL = "numeric_literal"
    CHARACTER_LITERAL = "character_literal"
    STRING_LITERAL = "string_literal"
    NULL_LITERAL = "null_literal"
    UNARY_MINUS = "unary_minus"
    SWITCH_STATEMENT = "switch_statement"
    SWITCH_SECTION = "switch_section"
    BLOCK = "block"
    OTHER = "other"


ARGUMENT_LIST_KINDS = frozenset({SyntaxKind.ARGUMENT_LIST, SyntaxKind.BRACKETED_ARGUMENT_LIST})
LITERAL_KINDS = frozenset(
    {
        SyntaxKind.NUMERIC_LITERAL,
        SyntaxKind.CHARACTER_LITERAL,
        SyntaxKind.STRING_LITERAL,
        SyntaxKind.NULL_LITERAL,
    }
)


@dataclass(frozen=True, slots=True)
class TextSpan:
    """Half-open character range [start, end)."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end

    def covers(self, start: int, length: int) -> bool:
        """Whether [start, start + length) lies within this span."""
        return self.start <= start and start + length <= self.end


@dataclass(frozen=True, slots=True)
class SourcePosition:
    """An offset into the snapshot with the given version token."""

    offset: int
    version: int


@dataclass(eq=False, repr=False, kw_only=True)
class SyntaxNode:
    """A node of the syntax tree.

    `value` holds the parsed token value of literals (NumericValue for
    numeric and character literals, str for string literals). `name_colon`
    holds the parameter name of a named argument. `label_count` holds the
    number of case labels of a switch section.
    """

    kind: SyntaxKind
    span: TextSpan
    text: str = ""
    value: Any = None
    name_colon: str | None = None
    label_count: int = 0
    parent: SyntaxNode | None = None
    children: list[SyntaxNode] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"SyntaxNode({self.kind.value}, {self.span.start}..{self.span.end}, {self.text!r})"

    @property
    def span_start(self) -> int:
        return self.span.start

    def add(self, child: SyntaxNode) -> SyntaxNode:
        """Append a child and set its parent. Returns the child."""
        child.parent = self
        self.children.append(child)
        return child

    def ancestors(self) -> Iterator[SyntaxNode]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def is_kind(self, kind: SyntaxKind) -> bool:
        return self.kind is kind

    def parent_is(self, kind: SyntaxKind) -> bool:
        return self.parent is not None and self.parent.kind is kind

    def descendants(self) -> Iterator[SyntaxNode]:
        for child in self.children:
            yield child
            yield from child.descendants()

    def find_smallest(self, start: int, length: int) -> SyntaxNode | None:
        """Smallest node in this subtree whose span covers [start, start + length).

        A zero-length query matches nodes whose span contains `start`.
        """
        if not self._covers(start, length):
            return None
        for child in self.children:
            found = child.find_smallest(start, length)
            if found is not None:
                return found
        return self

    def _covers(self, start: int, length: int) -> bool:
        if length == 0:
            return self.span.contains(start)
        return self.span.covers(start, length)

    @property
    def expression(self) -> SyntaxNode | None:
        """The expression of an argument node (its first child)."""
        if self.kind is SyntaxKind.ARGUMENT and self.children:
            return self.children[0]
        return None
