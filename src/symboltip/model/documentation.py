"""Structured documentation trees returned by a documentation store."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

from symboltip.model.symbols import SymbolKind

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class DocToken:
    """One run of documentation content.

    Plain text has `reference` unset. Cross references carry the referenced
    documentation id (e.g. ``T:System.String``) or a parameter/type
    parameter name, together with the kind of the referenced symbol when the
    store knows it.
    """

    text: str
    reference: bool = False
    symbol_kind: SymbolKind | None = None


@dataclass(frozen=True, slots=True)
class DocNode:
    """A documentation element with its content and named sub-sections.

    Sections are keyed by (tag, name): ``("summary", None)``,
    ``("param", "count")``, ``("returns", None)``...
    """

    tokens: tuple[DocToken, ...] = ()
    sections: dict[tuple[str, str | None], DocNode] = field(default_factory=dict)

    def section(self, tag: str, name: str | None = None) -> DocNode | None:
        return self.sections.get((tag, name))

    @property
    def summary(self) -> DocNode | None:
        return self.section("summary")

    @property
    def returns(self) -> DocNode | None:
        return self.section("returns")

    def param(self, name: str) -> DocNode | None:
        return self.section("param", name)

    @property
    def is_empty(self) -> bool:
        return not self.tokens

    def render(self, callback: Callable[[str, SymbolKind | None], list[T]], text: Callable[[str], T]) -> list[T]:
        """Render content, passing each cross reference through `callback`.

        Plain text runs go through `text`; references go through
        `callback(reference, symbol_kind)`.
        """
        runs: list[T] = []
        for token in self.tokens:
            if token.reference:
                runs.extend(callback(token.text, token.symbol_kind))
            else:
                runs.append(text(token.text))
        return runs
