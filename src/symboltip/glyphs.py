"""Glyph classification of symbols.

The composer only computes (group, item) pairs; the host's GlyphService maps
them to opaque icon ids that fragments carry through untouched.
"""

from __future__ import annotations

from enum import Enum

from symboltip.model.symbols import (
    Accessibility,
    FieldSymbol,
    MethodSymbol,
    NamedTypeSymbol,
    Symbol,
    SymbolKind,
    TypeKind,
)


class GlyphGroup(str, Enum):
    CLASS = "class"
    CONSTANT = "constant"
    DELEGATE = "delegate"
    ENUM = "enum"
    ERROR = "error"
    EVENT = "event"
    EXTENSION_METHOD = "extension_method"
    FIELD = "field"
    INTERFACE = "interface"
    METHOD = "method"
    MODULE = "module"
    NAMESPACE = "namespace"
    PROPERTY = "property"
    STRUCT = "struct"
    TYPE = "type"
    VARIABLE = "variable"
    UNKNOWN = "unknown"


class GlyphItem(str, Enum):
    PUBLIC = "public"
    INTERNAL = "internal"
    FRIEND = "friend"
    PROTECTED = "protected"
    PRIVATE = "private"
    NONE = "none"


_TYPE_GROUPS = {
    TypeKind.UNKNOWN: GlyphGroup.UNKNOWN,
    TypeKind.ARRAY: GlyphGroup.CLASS,
    TypeKind.DYNAMIC: GlyphGroup.CLASS,
    TypeKind.CLASS: GlyphGroup.CLASS,
    TypeKind.DELEGATE: GlyphGroup.DELEGATE,
    TypeKind.ENUM: GlyphGroup.ENUM,
    TypeKind.ERROR: GlyphGroup.ERROR,
    TypeKind.INTERFACE: GlyphGroup.INTERFACE,
    TypeKind.MODULE: GlyphGroup.MODULE,
    TypeKind.POINTER: GlyphGroup.STRUCT,
    TypeKind.STRUCT: GlyphGroup.STRUCT,
}

_KIND_GROUPS = {
    SymbolKind.EVENT: GlyphGroup.EVENT,
    SymbolKind.LOCAL: GlyphGroup.VARIABLE,
    SymbolKind.PARAMETER: GlyphGroup.VARIABLE,
    SymbolKind.NAMESPACE: GlyphGroup.NAMESPACE,
    SymbolKind.PROPERTY: GlyphGroup.PROPERTY,
    SymbolKind.TYPE_PARAMETER: GlyphGroup.TYPE,
    SymbolKind.DYNAMIC_TYPE: GlyphGroup.TYPE,
    SymbolKind.ARRAY_TYPE: GlyphGroup.CLASS,
}

_ACCESSIBILITY_ITEMS = {
    Accessibility.PRIVATE: GlyphItem.PRIVATE,
    Accessibility.PROTECTED_AND_INTERNAL: GlyphItem.PROTECTED,
    Accessibility.PROTECTED: GlyphItem.PROTECTED,
    Accessibility.INTERNAL: GlyphItem.INTERNAL,
    Accessibility.PROTECTED_OR_INTERNAL: GlyphItem.FRIEND,
    Accessibility.PUBLIC: GlyphItem.PUBLIC,
}


def glyph_group(symbol: Symbol) -> GlyphGroup:
    if isinstance(symbol, FieldSymbol):
        return GlyphGroup.CONSTANT if symbol.is_const else GlyphGroup.FIELD
    if isinstance(symbol, MethodSymbol):
        return GlyphGroup.EXTENSION_METHOD if symbol.is_extension_method else GlyphGroup.METHOD
    if isinstance(symbol, NamedTypeSymbol):
        return _TYPE_GROUPS.get(symbol.type_kind, GlyphGroup.TYPE)
    return _KIND_GROUPS.get(symbol.kind, GlyphGroup.UNKNOWN)


def glyph_item(symbol: Symbol) -> GlyphItem:
    return _ACCESSIBILITY_ITEMS.get(symbol.accessibility, GlyphItem.NONE)
