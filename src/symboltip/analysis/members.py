"""Member fragments: overload sets, event arguments and constant values."""

from __future__ import annotations

from symboltip.analysis.misc import string_info_fragment
from symboltip.analysis.numeric import decompose
from symboltip.analysis.types import enum_fragment
from symboltip.config.constants import DELEGATE_INVOKE_METHOD_NAME
from symboltip.config.models import QuickInfoFlags
from symboltip.fragments import InfoFragment, KeyValueBlock, ScrollableList
from symboltip.formatting import FormattingContext
from symboltip.host import SemanticModel
from symboltip.model.symbols import (
    ConstantValue,
    EventSymbol,
    MethodSymbol,
    NamedTypeSymbol,
    NumericValue,
    Symbol,
    TypeKind,
)
from symboltip.model.syntax import SyntaxKind, SyntaxNode


def overload_candidates(model: SemanticModel, node: SyntaxNode, method: MethodSymbol) -> tuple[Symbol, ...]:
    """Same-named members at a declaration, the call site's member group elsewhere."""
    if node.kind is SyntaxKind.METHOD_DECLARATION and method.containing_type is not None:
        return method.containing_type.get_members(method.name)
    return tuple(model.get_member_group(node))


def overload_fragment(
    ctx: FormattingContext, model: SemanticModel, node: SyntaxNode, method: MethodSymbol
) -> ScrollableList | None:
    members = overload_candidates(model, node, method)
    lines = tuple(ctx.symbol_line(m) for m in members if isinstance(m, MethodSymbol) and m != method)
    if len(lines) < 2:
        return None
    return ScrollableList("Method overload:", lines)


def event_argument_fragment(ctx: FormattingContext, event: EventSymbol) -> KeyValueBlock | None:
    """The event-args type of an `(object sender, TArgs e)` handler delegate."""
    invoke = next(
        (m for m in event.type.get_members(DELEGATE_INVOKE_METHOD_NAME) if isinstance(m, MethodSymbol)),
        None,
    )
    if invoke is None or len(invoke.params) != 2:
        return None
    return KeyValueBlock("Event argument: ", tuple(ctx.symbol(invoke.params[1].type)))


def const_fragments(
    ctx: FormattingContext, symbol: Symbol, value: ConstantValue, flags: QuickInfoFlags
) -> list[InfoFragment]:
    """String info for string constants; numeric forms and enum underlying type otherwise."""
    if isinstance(value, str):
        return [string_info_fragment(value)] if flags.show_string_info else []
    if not flags.show_numeric_values or not isinstance(value, NumericValue):
        return []
    triple = decompose(value)
    if triple is None:
        return []
    fragments: list[InfoFragment] = [triple]
    containing = symbol.containing_type
    if flags.show_base_type and isinstance(containing, NamedTypeSymbol) and containing.type_kind is TypeKind.ENUM:
        enum_info = enum_fragment(ctx, containing, from_enum=False)
        if enum_info is not None:
            fragments.append(enum_info)
    return fragments
