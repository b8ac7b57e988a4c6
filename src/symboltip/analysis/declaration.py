"""Declaration modifier lines: accessibility plus abstract/static/virtual/override/sealed/extern."""

from __future__ import annotations

from symboltip.fragments import KeyValueBlock, StyledRun
from symboltip.formatting import FormattingContext
from symboltip.model.symbols import (
    Accessibility,
    EventSymbol,
    FieldSymbol,
    MethodSymbol,
    NamedTypeSymbol,
    PropertySymbol,
    Symbol,
    TypeKind,
)

ACCESSIBILITY_KEYWORDS: dict[Accessibility, str] = {
    Accessibility.PUBLIC: "public ",
    Accessibility.PRIVATE: "private ",
    Accessibility.PROTECTED_AND_INTERNAL: "protected internal ",
    Accessibility.PROTECTED: "protected ",
    Accessibility.INTERNAL: "internal ",
    Accessibility.PROTECTED_OR_INTERNAL: "protected or internal ",
}

_LABELS: dict[type[Symbol], str] = {
    MethodSymbol: "Method",
    PropertySymbol: "Property",
    EventSymbol: "Event",
    NamedTypeSymbol: "Class",
}


def accessibility_runs(ctx: FormattingContext, symbol: Symbol) -> list[StyledRun]:
    keyword = ACCESSIBILITY_KEYWORDS.get(symbol.accessibility)
    return [ctx.keyword(keyword)] if keyword else []


def modifier_runs(ctx: FormattingContext, symbol: Symbol) -> list[StyledRun]:
    """Accessibility followed by the highest-precedence modifier and `extern`.

    Precedence is abstract > static > virtual > override > sealed; only the
    first one set is rendered.
    """
    runs = accessibility_runs(ctx, symbol)
    if symbol.is_abstract:
        runs.append(ctx.keyword("abstract "))
    elif symbol.is_static:
        runs.append(ctx.keyword("static "))
    elif symbol.is_virtual:
        runs.append(ctx.keyword("virtual "))
    elif symbol.is_override:
        runs.append(ctx.keyword("sealed override " if symbol.is_sealed else "override "))
        overridden = getattr(symbol, "overridden_member", None)
        if overridden is not None and overridden.containing_type is not None:
            runs.extend(ctx.symbol(overridden.containing_type))
    elif symbol.is_sealed:
        runs.append(ctx.keyword("sealed "))
    if symbol.is_extern:
        runs.append(ctx.keyword("extern "))
    return runs


def has_declaration_info(symbol: Symbol) -> bool:
    """Whether a declaration line says anything beyond `public`."""
    non_public = symbol.accessibility is not Accessibility.PUBLIC
    if isinstance(symbol, MethodSymbol):
        if symbol.containing_type is not None and symbol.containing_type.type_kind is TypeKind.INTERFACE:
            return False
        return (
            non_public
            or symbol.is_abstract
            or symbol.is_static
            or symbol.is_virtual
            or symbol.is_override
            or symbol.is_extern
            or symbol.is_sealed
        )
    if isinstance(symbol, (PropertySymbol, EventSymbol)):
        return non_public or symbol.is_abstract or symbol.is_static or symbol.is_override or symbol.is_virtual
    if isinstance(symbol, NamedTypeSymbol):
        if symbol.type_kind is not TypeKind.CLASS:
            return False
        return non_public or symbol.is_abstract or symbol.is_static or symbol.is_sealed
    return False


def declaration_fragment(ctx: FormattingContext, symbol: Symbol) -> KeyValueBlock | None:
    """`Method declaration: protected override Base` and friends."""
    label = _LABELS.get(type(symbol))
    if label is None or not has_declaration_info(symbol):
        return None
    return KeyValueBlock(f"{label} declaration: ", tuple(modifier_runs(ctx, symbol)))


def field_declaration_fragment(ctx: FormattingContext, field: FieldSymbol) -> KeyValueBlock | None:
    containing = field.containing_type
    if containing is not None and containing.type_kind is TypeKind.ENUM:
        return None
    if not (
        field.accessibility is not Accessibility.PUBLIC or field.is_readonly or field.is_volatile or field.is_static
    ):
        return None
    runs = accessibility_runs(ctx, field)
    if field.is_const:
        runs.append(ctx.keyword("const "))
    else:
        if field.is_static:
            runs.append(ctx.keyword("static "))
        if field.is_readonly:
            runs.append(ctx.keyword("readonly "))
        elif field.is_volatile:
            runs.append(ctx.keyword("volatile "))
    return KeyValueBlock("Field declaration: ", tuple(runs))
