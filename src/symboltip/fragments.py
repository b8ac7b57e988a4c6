"""Information fragments: the immutable output of a composition.

A fragment is one of TextLine, KeyValueBlock, ScrollableList or
NumericTriple. The presentation sink turns them into widgets; the composer
never touches widgets.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class StyledRun:
    """A run of text with an optional style from the active style table."""

    text: str
    style: str | None = None
    bold: bool = False
    italic: bool = False
    highlighted: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"text": self.text}
        if self.style is not None:
            data["style"] = self.style
        if self.bold:
            data["bold"] = True
        if self.italic:
            data["italic"] = True
        if self.highlighted:
            data["highlighted"] = True
        return data


@dataclass(frozen=True, slots=True)
class TextLine:
    """A single wrapped line of styled runs, optionally led by a glyph."""

    runs: tuple[StyledRun, ...]
    glyph: Any = None

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": "line", "runs": [r.to_dict() for r in self.runs]}
        if self.glyph is not None:
            data["glyph"] = self.glyph
        return data


@dataclass(frozen=True, slots=True)
class KeyValueBlock:
    """A bold label followed by a styled body."""

    label: str
    body: tuple[StyledRun, ...]

    @property
    def text(self) -> str:
        return self.label + "".join(run.text for run in self.body)

    def to_dict(self) -> dict[str, Any]:
        return {"type": "block", "label": self.label, "body": [r.to_dict() for r in self.body]}


@dataclass(frozen=True, slots=True)
class ScrollableList:
    """A titled group of nested fragments.

    With `scrollable` set, the presenter collapses the group into a
    scroll view when it overflows.
    """

    title: str | None
    items: tuple[InfoFragment, ...]
    scrollable: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "list",
            "title": self.title,
            "scrollable": self.scrollable,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass(frozen=True, slots=True)
class NumericTriple:
    """Decimal, hexadecimal and binary forms of one value."""

    decimal: str
    hexadecimal: str
    binary: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "numeric", "dec": self.decimal, "hex": self.hexadecimal, "bin": self.binary}


InfoFragment = TextLine | KeyValueBlock | ScrollableList | NumericTriple
