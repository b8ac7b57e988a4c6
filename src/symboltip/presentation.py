"""Fragment presentation: plain text, rich renderables, and a list sink.

Usage::

    from symboltip.presentation import FragmentList, print_fragments

    sink = FragmentList()
    engine.augment(offset, sink)
    print_fragments(sink)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from rich.console import Console, Group, RenderableType
from rich.padding import Padding
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from symboltip.fragments import (
    InfoFragment,
    KeyValueBlock,
    NumericTriple,
    ScrollableList,
    StyledRun,
    TextLine,
)

_INDENT = "  "

# ============================================================================
# Sink
# ============================================================================


class FragmentList:
    """Ordered, append-only fragment sink."""

    def __init__(self, fragments: Iterable[InfoFragment] = ()) -> None:
        self._fragments: list[InfoFragment] = list(fragments)

    def append(self, fragment: InfoFragment) -> None:
        self._fragments.append(fragment)

    def clear(self) -> None:
        self._fragments.clear()

    def __iter__(self) -> Iterator[InfoFragment]:
        return iter(self._fragments)

    def __len__(self) -> int:
        return len(self._fragments)

    def __getitem__(self, index: int) -> InfoFragment:
        return self._fragments[index]

    def to_dicts(self) -> list[dict[str, Any]]:
        return [fragment.to_dict() for fragment in self._fragments]


# ============================================================================
# Plain text
# ============================================================================


def _numeric_lines(triple: NumericTriple) -> list[str]:
    return [f"{triple.decimal} DEC", f"{triple.hexadecimal} HEX", f"{triple.binary} BIN"]


def fragment_lines(fragment: InfoFragment) -> list[str]:
    """Plain text lines of one fragment; nested lists are indented."""
    if isinstance(fragment, TextLine):
        return fragment.text.split("\n")
    if isinstance(fragment, KeyValueBlock):
        return fragment.text.split("\n")
    if isinstance(fragment, NumericTriple):
        return _numeric_lines(fragment)
    lines = [fragment.title] if fragment.title else []
    indent = _INDENT if fragment.title else ""
    for item in fragment.items:
        lines.extend(indent + line for line in fragment_lines(item))
    return lines


def render_text(fragments: Iterable[InfoFragment]) -> str:
    return "\n".join(line for fragment in fragments for line in fragment_lines(fragment))


# ============================================================================
# Rich
# ============================================================================


def _run_style(run: StyledRun) -> Style:
    style = Style.parse(run.style) if run.style else Style()
    return style + Style(bold=run.bold or None, italic=run.italic or None, reverse=run.highlighted or None)


def _runs_text(runs: Iterable[StyledRun], prefix: Text | None = None) -> Text:
    text = prefix.copy() if prefix is not None else Text()
    for run in runs:
        text.append(run.text, style=_run_style(run))
    return text


def to_renderable(fragment: InfoFragment) -> RenderableType:
    """Build the rich renderable of a fragment."""
    if isinstance(fragment, TextLine):
        prefix = Text(f"{fragment.glyph} ") if fragment.glyph is not None else None
        return _runs_text(fragment.runs, prefix)
    if isinstance(fragment, KeyValueBlock):
        return _runs_text(fragment.body, Text(fragment.label, style="bold"))
    if isinstance(fragment, NumericTriple):
        table = Table.grid(padding=(0, 1))
        table.add_column(justify="right")
        table.add_column(style="bold")
        table.add_row(fragment.decimal, "DEC")
        table.add_row(fragment.hexadecimal, "HEX")
        table.add_row(fragment.binary, "BIN")
        return table
    items = [to_renderable(item) for item in fragment.items]
    if fragment.scrollable:
        return Panel(Group(*items), title=fragment.title, title_align="left", expand=False)
    if fragment.title:
        return Group(Text(fragment.title, style="bold"), Padding(Group(*items), (0, 0, 0, len(_INDENT))))
    return Group(*items)


def render_rich(fragments: Iterable[InfoFragment]) -> Group:
    return Group(*(to_renderable(fragment) for fragment in fragments))


def print_fragments(fragments: Iterable[InfoFragment], console: Console | None = None) -> None:
    (console or Console()).print(render_rich(fragments))
