"""Interface implementation lookup for members, and interface lists for types.

A member implements an interface implicitly when one of the interfaces of its
containing type declares a public member of the same kind and name with an
equal signature. Explicit implementations come from the member itself. An
interface never appears in both groups.
"""

from __future__ import annotations

from symboltip.analysis.signature import match_signature, signature_return_type
from symboltip.config.constants import DISPOSABLE_INTERFACE_NAME
from symboltip.fragments import InfoFragment, ScrollableList, StyledRun, TextLine
from symboltip.formatting import FormattingContext
from symboltip.model.symbols import Accessibility, NamedTypeSymbol, Symbol, TypeSymbol


def implicit_implementations(symbol: Symbol) -> tuple[NamedTypeSymbol, ...]:
    """Interfaces with a public member matching `symbol`, in interface order."""
    containing = symbol.containing_type
    if containing is None:
        return ()
    return_type = signature_return_type(symbol)
    parameters = symbol.parameters
    found: dict[NamedTypeSymbol, None] = {}
    for intf in containing.all_interfaces:
        for member in intf.get_members(symbol.name):
            if (
                member.kind is symbol.kind
                and member.accessibility is Accessibility.PUBLIC
                and match_signature(member, symbol.kind, return_type, parameters)
            ):
                found.setdefault(intf, None)
    return tuple(found)


def explicit_implementations(
    symbol: Symbol, implicit: tuple[NamedTypeSymbol, ...] = ()
) -> tuple[NamedTypeSymbol, ...]:
    """Declaring interfaces of the explicit implementation set, minus `implicit`."""
    found: dict[NamedTypeSymbol, None] = {}
    for implemented in getattr(symbol, "explicit_interface_implementations", ()):
        intf = implemented.containing_type
        if intf is not None and intf not in implicit:
            found.setdefault(intf, None)
    return tuple(found)


def implementation_fragment(ctx: FormattingContext, symbol: Symbol) -> ScrollableList | None:
    """`Implements:` list with a nested `Explicit implements:` list."""
    has_explicit = bool(getattr(symbol, "explicit_interface_implementations", ()))
    if symbol.is_static or (symbol.accessibility is not Accessibility.PUBLIC and not has_explicit):
        return None
    implicit = implicit_implementations(symbol)
    explicit = explicit_implementations(symbol, implicit)
    if not implicit and not explicit:
        return None
    items: list[InfoFragment] = [ctx.symbol_line(intf) for intf in implicit]
    if explicit:
        items.append(
            ScrollableList("Explicit implements:", tuple(ctx.symbol_line(intf) for intf in explicit), scrollable=False)
        )
    return ScrollableList("Implements:" if implicit else None, tuple(items), scrollable=False)


def _listed(intf: NamedTypeSymbol) -> bool:
    return intf.accessibility is Accessibility.PUBLIC or intf.in_source


def interfaces_fragment(ctx: FormattingContext, type_symbol: TypeSymbol, *, show_inherited: bool) -> ScrollableList | None:
    """`Interface:` list of a type.

    IDisposable goes first. Interfaces not declared on the type itself are
    marked "(inherited)" and, IDisposable aside, only listed with
    `show_inherited`.
    """
    declared = tuple(type_symbol.interfaces)
    if not declared and not show_inherited:
        return None
    disposable: NamedTypeSymbol | None = None
    direct: list[NamedTypeSymbol] = []
    inherited: list[NamedTypeSymbol] = []
    for intf in declared:
        if intf.name == DISPOSABLE_INTERFACE_NAME:
            disposable = intf
        elif _listed(intf):
            direct.append(intf)
    for intf in type_symbol.all_interfaces:
        if intf in declared:
            continue
        if intf.name == DISPOSABLE_INTERFACE_NAME:
            disposable = intf
        elif show_inherited and _listed(intf):
            inherited.append(intf)
    if disposable is None and not direct and not inherited:
        return None

    inherited_mark = StyledRun(" (inherited)")
    items: list[TextLine] = []
    if disposable is not None:
        suffix = () if disposable in declared else (inherited_mark,)
        items.append(ctx.symbol_line(disposable, suffix=suffix))
    items.extend(ctx.symbol_line(intf) for intf in direct)
    items.extend(ctx.symbol_line(intf, suffix=(inherited_mark,)) for intf in inherited)
    return ScrollableList("Interface:", tuple(items))
