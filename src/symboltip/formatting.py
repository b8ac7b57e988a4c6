"""Formatting context: style table plus the per-request rendering helpers.

A FormattingContext is passed explicitly into every analyzer. It is never
mutated; a theme change builds a new StyleTable and `with_styles` derives a
new context from it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from symboltip.display import DisplayPart, DisplayPartKind
from symboltip.fragments import StyledRun, TextLine
from symboltip.glyphs import glyph_group, glyph_item
from symboltip.model.symbols import (
    EventSymbol,
    FieldSymbol,
    LocalSymbol,
    MethodSymbol,
    NamedTypeSymbol,
    NumericValue,
    ParameterSymbol,
    PrimitiveType,
    PropertySymbol,
    Symbol,
    TypeKind,
    TypeParameterSymbol,
    TypeSymbol,
    TypedConstant,
    TypedConstantKind,
)

if TYPE_CHECKING:
    from symboltip.host import GlyphService, SemanticModel


class StyleRole(str, Enum):
    """Semantic role of a run; the style table maps roles to host styles."""

    KEYWORD = "keyword"
    CLASS = "class"
    STRUCT = "struct"
    INTERFACE = "interface"
    ENUM = "enum"
    DELEGATE = "delegate"
    TYPE_PARAMETER = "type_parameter"
    METHOD = "method"
    PROPERTY = "property"
    FIELD = "field"
    CONSTANT = "constant"
    ENUM_MEMBER = "enum_member"
    EVENT = "event"
    PARAMETER = "parameter"
    LOCAL = "local"
    NAMESPACE = "namespace"
    NUMBER = "number"
    STRING = "string"
    PUNCTUATION = "punctuation"


DEFAULT_STYLES: Mapping[StyleRole, str] = MappingProxyType(
    {
        StyleRole.KEYWORD: "blue",
        StyleRole.CLASS: "cyan",
        StyleRole.STRUCT: "green",
        StyleRole.INTERFACE: "bright_green",
        StyleRole.ENUM: "bright_cyan",
        StyleRole.DELEGATE: "cyan",
        StyleRole.TYPE_PARAMETER: "bright_blue",
        StyleRole.METHOD: "yellow",
        StyleRole.PROPERTY: "white",
        StyleRole.FIELD: "white",
        StyleRole.CONSTANT: "magenta",
        StyleRole.ENUM_MEMBER: "magenta",
        StyleRole.EVENT: "bright_yellow",
        StyleRole.PARAMETER: "bright_white",
        StyleRole.LOCAL: "bright_white",
        StyleRole.NAMESPACE: "white",
        StyleRole.NUMBER: "bright_magenta",
        StyleRole.STRING: "red",
        StyleRole.PUNCTUATION: "default",
    }
)


@dataclass(frozen=True, slots=True)
class StyleTable:
    """Role -> host style id (for the rich presenter, a rich style string)."""

    styles: Mapping[StyleRole, str] = field(default_factory=lambda: DEFAULT_STYLES)

    @classmethod
    def from_mapping(cls, styles: Mapping[str, str]) -> StyleTable:
        """Build from a theme mapping keyed by role names; unknown roles are ignored."""
        merged = dict(DEFAULT_STYLES)
        for name, style in styles.items():
            try:
                merged[StyleRole(name)] = style
            except ValueError:
                continue
        return cls(MappingProxyType(merged))

    def get(self, role: StyleRole | None) -> str | None:
        if role is None:
            return None
        return self.styles.get(role)


_PART_ROLES: dict[DisplayPartKind, StyleRole] = {
    DisplayPartKind.KEYWORD: StyleRole.KEYWORD,
    DisplayPartKind.CLASS_NAME: StyleRole.CLASS,
    DisplayPartKind.STRUCT_NAME: StyleRole.STRUCT,
    DisplayPartKind.INTERFACE_NAME: StyleRole.INTERFACE,
    DisplayPartKind.ENUM_NAME: StyleRole.ENUM,
    DisplayPartKind.DELEGATE_NAME: StyleRole.DELEGATE,
    DisplayPartKind.TYPE_PARAMETER_NAME: StyleRole.TYPE_PARAMETER,
    DisplayPartKind.METHOD_NAME: StyleRole.METHOD,
    DisplayPartKind.EXTENSION_METHOD_NAME: StyleRole.METHOD,
    DisplayPartKind.PROPERTY_NAME: StyleRole.PROPERTY,
    DisplayPartKind.FIELD_NAME: StyleRole.FIELD,
    DisplayPartKind.CONSTANT_NAME: StyleRole.CONSTANT,
    DisplayPartKind.ENUM_MEMBER_NAME: StyleRole.ENUM_MEMBER,
    DisplayPartKind.EVENT_NAME: StyleRole.EVENT,
    DisplayPartKind.PARAMETER_NAME: StyleRole.PARAMETER,
    DisplayPartKind.LOCAL_NAME: StyleRole.LOCAL,
    DisplayPartKind.NAMESPACE_NAME: StyleRole.NAMESPACE,
    DisplayPartKind.NUMERIC_LITERAL: StyleRole.NUMBER,
    DisplayPartKind.STRING_LITERAL: StyleRole.STRING,
}

_TYPE_ROLES: dict[TypeKind, StyleRole] = {
    TypeKind.CLASS: StyleRole.CLASS,
    TypeKind.STRUCT: StyleRole.STRUCT,
    TypeKind.INTERFACE: StyleRole.INTERFACE,
    TypeKind.ENUM: StyleRole.ENUM,
    TypeKind.DELEGATE: StyleRole.DELEGATE,
    TypeKind.TYPE_PARAMETER: StyleRole.TYPE_PARAMETER,
}


def role_of(symbol: Symbol) -> StyleRole | None:
    """Style role used when a symbol's bare name is rendered."""
    if isinstance(symbol, TypeParameterSymbol):
        return StyleRole.TYPE_PARAMETER
    if isinstance(symbol, TypeSymbol):
        return _TYPE_ROLES.get(symbol.type_kind, StyleRole.CLASS)
    if isinstance(symbol, MethodSymbol):
        return StyleRole.METHOD
    if isinstance(symbol, PropertySymbol):
        return StyleRole.PROPERTY
    if isinstance(symbol, EventSymbol):
        return StyleRole.EVENT
    if isinstance(symbol, FieldSymbol):
        if symbol.containing_type is not None and symbol.containing_type.type_kind is TypeKind.ENUM:
            return StyleRole.ENUM_MEMBER
        return StyleRole.CONSTANT if symbol.is_const else StyleRole.FIELD
    if isinstance(symbol, ParameterSymbol):
        return StyleRole.PARAMETER
    if isinstance(symbol, LocalSymbol):
        return StyleRole.LOCAL
    return None


@dataclass(frozen=True, slots=True)
class FormattingContext:
    """Everything an analyzer needs to turn symbols into styled runs."""

    model: SemanticModel
    position: int
    styles: StyleTable = field(default_factory=StyleTable)
    glyphs: GlyphService | None = None

    def with_styles(self, styles: StyleTable) -> FormattingContext:
        return replace(self, styles=styles)

    def at(self, position: int) -> FormattingContext:
        return replace(self, position=position)

    # ------------------------------------------------------------------
    # Runs
    # ------------------------------------------------------------------

    def text(self, text: str, *, bold: bool = False) -> StyledRun:
        return StyledRun(text, bold=bold)

    def styled(self, text: str, role: StyleRole | None, *, bold: bool = False, italic: bool = False) -> StyledRun:
        return StyledRun(text, style=self.styles.get(role), bold=bold, italic=italic)

    def keyword(self, text: str) -> StyledRun:
        return self.styled(text, StyleRole.KEYWORD)

    def name(self, symbol: Symbol) -> StyledRun:
        """The bare symbol name styled by its kind."""
        return self.styled(symbol.name, role_of(symbol))

    def parts(self, parts: Iterable[DisplayPart], highlight_parameter: int | None = None) -> list[StyledRun]:
        """Style display parts; the parameter name at `highlight_parameter` is highlighted."""
        runs: list[StyledRun] = []
        parameter_index = -1
        for part in parts:
            role = _PART_ROLES.get(part.kind)
            highlighted = False
            if part.kind is DisplayPartKind.PARAMETER_NAME:
                parameter_index += 1
                highlighted = parameter_index == highlight_parameter
            runs.append(StyledRun(part.text, style=self.styles.get(role), bold=highlighted, highlighted=highlighted))
        return runs

    def symbol(self, symbol: Symbol, highlight_parameter: int | None = None) -> list[StyledRun]:
        """Minimal display of a symbol as seen from the request position."""
        return self.parts(self.model.to_display_parts(symbol, self.position), highlight_parameter)

    def glyph(self, symbol: Symbol) -> Any:
        if self.glyphs is None:
            return None
        return self.glyphs.get_glyph(glyph_group(symbol), glyph_item(symbol))

    def symbol_line(self, symbol: Symbol, *, suffix: Iterable[StyledRun] = ()) -> TextLine:
        """A glyph-led line naming `symbol`."""
        return TextLine((*self.symbol(symbol), *suffix), glyph=self.glyph(symbol))

    # ------------------------------------------------------------------
    # Constants
    # ------------------------------------------------------------------

    def constant(self, constant: TypedConstant) -> list[StyledRun]:
        """Render an attribute argument value."""
        value = constant.value
        if constant.kind is TypedConstantKind.ARRAY:
            runs = [self.text("{")]
            for i, item in enumerate(value or ()):
                if i > 0:
                    runs.append(self.text(", "))
                runs.extend(self.constant(item))
            runs.append(self.text("}"))
            return runs
        if constant.kind is TypedConstantKind.TYPE and isinstance(value, Symbol):
            return [self.keyword("typeof"), self.text("("), *self.symbol(value), self.text(")")]
        if constant.kind is TypedConstantKind.ENUM and isinstance(constant.type, NamedTypeSymbol):
            return self._enum_constant(constant.type, value)
        if value is None:
            return [self.keyword("null")]
        if isinstance(value, str):
            return [self.styled(f'"{value}"', StyleRole.STRING)]
        if isinstance(value, NumericValue) and value.type is PrimitiveType.BOOLEAN:
            return [self.keyword("true" if value.value else "false")]
        if isinstance(value, bool):
            return [self.keyword("true" if value else "false")]
        return [self.styled(str(value), StyleRole.NUMBER)]

    def _enum_constant(self, enum_type: NamedTypeSymbol, value: Any) -> list[StyledRun]:
        for member in enum_type.members:
            if isinstance(member, FieldSymbol) and member.constant_value == value:
                return [*self.symbol(enum_type), self.text("."), self.name(member)]
        return [self.text("("), *self.symbol(enum_type), self.text(")"), self.styled(str(value), StyleRole.NUMBER)]
