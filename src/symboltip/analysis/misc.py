"""Syntax-only fragments shown when nothing could be resolved at the position.

These look at literals, switch statements and blocks, never at symbols.
"""

from __future__ import annotations

import zlib

from symboltip.analysis.numeric import NumericForm, decompose
from symboltip.config.constants import BLOCK_LINES_EMPHASIS_THRESHOLD
from symboltip.config.models import QuickInfoFlags
from symboltip.fragments import InfoFragment, NumericTriple, ScrollableList, StyledRun, TextLine
from symboltip.host import TextSnapshot
from symboltip.model.symbols import NumericValue
from symboltip.model.syntax import SyntaxKind, SyntaxNode


def string_hash(value: str) -> int:
    """CRC-32 of the UTF-8 encoding, as a signed 32-bit integer."""
    crc = zlib.crc32(value.encode("utf-8"))
    return crc - (1 << 32) if crc & 0x80000000 else crc


def string_info_fragment(value: str) -> ScrollableList:
    """Character count (UTF-16 code units), UTF-8 byte count and hash of a string."""
    chars = len(value.encode("utf-16-le")) // 2
    rows = (
        (str(chars), " chars"),
        (str(len(value.encode("utf-8"))), " UTF-8 bytes"),
        (str(string_hash(value)), " Hash code"),
    )
    return ScrollableList(
        None,
        tuple(TextLine((StyledRun(value_text), StyledRun(label, bold=True))) for value_text, label in rows),
        scrollable=False,
    )


def literal_numeric_fragment(node: SyntaxNode) -> NumericTriple | None:
    value = node.value
    if not isinstance(value, NumericValue):
        return None
    form = NumericForm.NEGATIVE if node.parent_is(SyntaxKind.UNARY_MINUS) else NumericForm.NONE
    return decompose(value, form)


def switch_fragment(node: SyntaxNode) -> TextLine | None:
    sections = [child for child in node.children if child.kind is SyntaxKind.SWITCH_SECTION]
    if len(sections) < 2:
        return None
    cases = sum(section.label_count for section in sections)
    return TextLine((StyledRun(f"{len(sections)} switch sections, {cases} cases"),))


def block_lines_fragment(node: SyntaxNode, snapshot: TextSnapshot) -> TextLine | None:
    lines = snapshot.line_number_of(node.span.end) - snapshot.line_number_of(node.span.start) + 1
    if lines > BLOCK_LINES_EMPHASIS_THRESHOLD:
        return TextLine((StyledRun(f"{lines} lines", bold=True),))
    if lines > 1:
        return TextLine((StyledRun(f"{lines} lines"),))
    return None


def misc_fragments(node: SyntaxNode, snapshot: TextSnapshot, flags: QuickInfoFlags) -> list[InfoFragment]:
    fragment: InfoFragment | None = None
    if node.kind in (SyntaxKind.NUMERIC_LITERAL, SyntaxKind.CHARACTER_LITERAL):
        if flags.show_numeric_values:
            fragment = literal_numeric_fragment(node)
    elif node.kind is SyntaxKind.SWITCH_STATEMENT:
        fragment = switch_fragment(node)
    elif node.kind is SyntaxKind.STRING_LITERAL:
        if flags.show_string_info:
            fragment = string_info_fragment(node.value if isinstance(node.value, str) else node.text)
    elif node.kind is SyntaxKind.BLOCK:
        fragment = block_lines_fragment(node, snapshot)
    return [fragment] if fragment is not None else []
