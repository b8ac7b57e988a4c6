"""Display parts: the tokenized, kind-tagged rendering of a symbol.

Semantic-model providers may supply their own minimal display (see
SemanticModel.to_display_parts); `minimal_display_parts` is the rendering
the in-memory model uses. It follows C# declaration syntax:

    void Stream.Write(byte[] buffer, int offset, int count)
    int List<T>.this[int index]
    event EventHandler Button.Click
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from symboltip.model.symbols import (
    ArrayTypeSymbol,
    EventSymbol,
    FieldSymbol,
    LocalSymbol,
    MethodKind,
    MethodSymbol,
    NamedTypeSymbol,
    NamespaceSymbol,
    ParameterSymbol,
    PropertySymbol,
    RefKind,
    Symbol,
    TypeKind,
    TypeParameterSymbol,
    TypeSymbol,
)


class DisplayPartKind(str, Enum):
    KEYWORD = "keyword"
    CLASS_NAME = "class_name"
    STRUCT_NAME = "struct_name"
    INTERFACE_NAME = "interface_name"
    ENUM_NAME = "enum_name"
    DELEGATE_NAME = "delegate_name"
    TYPE_PARAMETER_NAME = "type_parameter_name"
    METHOD_NAME = "method_name"
    EXTENSION_METHOD_NAME = "extension_method_name"
    PROPERTY_NAME = "property_name"
    FIELD_NAME = "field_name"
    CONSTANT_NAME = "constant_name"
    ENUM_MEMBER_NAME = "enum_member_name"
    EVENT_NAME = "event_name"
    PARAMETER_NAME = "parameter_name"
    LOCAL_NAME = "local_name"
    NAMESPACE_NAME = "namespace_name"
    PUNCTUATION = "punctuation"
    OPERATOR = "operator"
    SPACE = "space"
    TEXT = "text"
    NUMERIC_LITERAL = "numeric_literal"
    STRING_LITERAL = "string_literal"


@dataclass(frozen=True, slots=True)
class DisplayPart:
    kind: DisplayPartKind
    text: str


_TYPE_KIND_PARTS: dict[TypeKind, DisplayPartKind] = {
    TypeKind.CLASS: DisplayPartKind.CLASS_NAME,
    TypeKind.STRUCT: DisplayPartKind.STRUCT_NAME,
    TypeKind.INTERFACE: DisplayPartKind.INTERFACE_NAME,
    TypeKind.ENUM: DisplayPartKind.ENUM_NAME,
    TypeKind.DELEGATE: DisplayPartKind.DELEGATE_NAME,
    TypeKind.TYPE_PARAMETER: DisplayPartKind.TYPE_PARAMETER_NAME,
}

_REF_KEYWORDS = {RefKind.REF: "ref", RefKind.OUT: "out", RefKind.IN: "in"}


def _punct(text: str) -> DisplayPart:
    return DisplayPart(DisplayPartKind.PUNCTUATION, text)


def _space() -> DisplayPart:
    return DisplayPart(DisplayPartKind.SPACE, " ")


def _keyword(text: str) -> DisplayPart:
    return DisplayPart(DisplayPartKind.KEYWORD, text)


def type_parts(type_symbol: TypeSymbol) -> list[DisplayPart]:
    """Parts of a type reference: `int`, `List<string>`, `T[]`."""
    if isinstance(type_symbol, ArrayTypeSymbol):
        return [*type_parts(type_symbol.element_type), _punct("[" + "," * (type_symbol.rank - 1) + "]")]
    if isinstance(type_symbol, NamedTypeSymbol):
        if type_symbol.special_type is not None:
            return [_keyword(type_symbol.special_type.keyword)]
        parts: list[DisplayPart] = []
        if type_symbol.containing_type is not None:
            parts.extend(type_parts(type_symbol.containing_type))
            parts.append(_punct("."))
        kind = _TYPE_KIND_PARTS.get(type_symbol.type_kind, DisplayPartKind.CLASS_NAME)
        parts.append(DisplayPart(kind, type_symbol.name))
        arguments: tuple[TypeSymbol, ...] = type_symbol.type_arguments or type_symbol.type_parameters
        if arguments:
            parts.append(_punct("<"))
            for i, argument in enumerate(arguments):
                if i > 0:
                    parts.extend((_punct(","), _space()))
                parts.extend(type_parts(argument))
            parts.append(_punct(">"))
        return parts
    if isinstance(type_symbol, TypeParameterSymbol):
        return [DisplayPart(DisplayPartKind.TYPE_PARAMETER_NAME, type_symbol.name)]
    if type_symbol.type_kind is TypeKind.DYNAMIC:
        return [_keyword("dynamic")]
    return [DisplayPart(DisplayPartKind.TEXT, type_symbol.name)]


def _parameter_parts(parameter: ParameterSymbol) -> list[DisplayPart]:
    parts: list[DisplayPart] = []
    if parameter.is_params:
        parts.extend((_keyword("params"), _space()))
    elif parameter.ref_kind in _REF_KEYWORDS:
        parts.extend((_keyword(_REF_KEYWORDS[parameter.ref_kind]), _space()))
    parts.extend(type_parts(parameter.type))
    parts.extend((_space(), DisplayPart(DisplayPartKind.PARAMETER_NAME, parameter.name)))
    return parts


def _parameter_list(parameters: tuple[ParameterSymbol, ...], open_: str, close: str) -> list[DisplayPart]:
    parts = [_punct(open_)]
    for i, parameter in enumerate(parameters):
        if i > 0:
            parts.extend((_punct(","), _space()))
        parts.extend(_parameter_parts(parameter))
    parts.append(_punct(close))
    return parts


def _container_prefix(symbol: Symbol) -> list[DisplayPart]:
    if symbol.containing_type is None:
        return []
    return [*type_parts(symbol.containing_type), _punct(".")]


def _method_parts(method: MethodSymbol) -> list[DisplayPart]:
    parts: list[DisplayPart] = []
    if method.method_kind in (MethodKind.CONSTRUCTOR, MethodKind.STATIC_CONSTRUCTOR):
        parts.extend(_container_prefix(method))
        name = method.containing_type.name if method.containing_type else method.name
        parts.append(DisplayPart(DisplayPartKind.CLASS_NAME, name))
    else:
        if method.returns is None:
            parts.append(_keyword("void"))
        else:
            parts.extend(type_parts(method.returns))
        parts.append(_space())
        parts.extend(_container_prefix(method))
        kind = DisplayPartKind.EXTENSION_METHOD_NAME if method.is_extension_method else DisplayPartKind.METHOD_NAME
        parts.append(DisplayPart(kind, method.name))
        generics: tuple[TypeSymbol, ...] = method.type_arguments or method.type_parameters
        if generics:
            parts.append(_punct("<"))
            for i, argument in enumerate(generics):
                if i > 0:
                    parts.extend((_punct(","), _space()))
                parts.extend(type_parts(argument))
            parts.append(_punct(">"))
    parts.extend(_parameter_list(method.params, "(", ")"))
    return parts


def minimal_display_parts(symbol: Symbol) -> list[DisplayPart]:
    """Render a symbol the way a hover tooltip names it."""
    if isinstance(symbol, MethodSymbol):
        return _method_parts(symbol)
    if isinstance(symbol, TypeSymbol):
        return type_parts(symbol)
    if isinstance(symbol, PropertySymbol):
        parts = [*type_parts(symbol.type), _space(), *_container_prefix(symbol)]
        if symbol.is_indexer:
            parts.append(_keyword("this"))
            parts.extend(_parameter_list(symbol.params, "[", "]"))
        else:
            parts.append(DisplayPart(DisplayPartKind.PROPERTY_NAME, symbol.name))
        return parts
    if isinstance(symbol, EventSymbol):
        return [
            _keyword("event"),
            _space(),
            *type_parts(symbol.type),
            _space(),
            *_container_prefix(symbol),
            DisplayPart(DisplayPartKind.EVENT_NAME, symbol.name),
        ]
    if isinstance(symbol, FieldSymbol):
        if symbol.containing_type is not None and symbol.containing_type.type_kind is TypeKind.ENUM:
            kind = DisplayPartKind.ENUM_MEMBER_NAME
        elif symbol.is_const:
            kind = DisplayPartKind.CONSTANT_NAME
        else:
            kind = DisplayPartKind.FIELD_NAME
        return [*type_parts(symbol.type), _space(), *_container_prefix(symbol), DisplayPart(kind, symbol.name)]
    if isinstance(symbol, LocalSymbol):
        return [*type_parts(symbol.type), _space(), DisplayPart(DisplayPartKind.LOCAL_NAME, symbol.name)]
    if isinstance(symbol, ParameterSymbol):
        return _parameter_parts(symbol)
    if isinstance(symbol, NamespaceSymbol):
        return [DisplayPart(DisplayPartKind.NAMESPACE_NAME, symbol.name)]
    return [DisplayPart(DisplayPartKind.TEXT, symbol.name)]


def display_string(symbol: Symbol) -> str:
    return "".join(part.text for part in minimal_display_parts(symbol))
