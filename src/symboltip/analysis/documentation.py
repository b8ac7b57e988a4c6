"""Documentation fragments: own docs, docs inherited from base members, returns sections."""

from __future__ import annotations

from symboltip.analysis.interfaces import implicit_implementations
from symboltip.analysis.signature import same_signature
from symboltip.config.models import QuickInfoFlags
from symboltip.fragments import StyledRun, TextLine
from symboltip.formatting import FormattingContext, StyleRole
from symboltip.host import DocumentationStore
from symboltip.model.documentation import DocNode
from symboltip.model.symbols import MethodSymbol, Symbol, SymbolKind

_KIND_ROLES = {
    SymbolKind.PARAMETER: StyleRole.PARAMETER,
    SymbolKind.TYPE_PARAMETER: StyleRole.TYPE_PARAMETER,
    SymbolKind.DYNAMIC_TYPE: StyleRole.KEYWORD,
}

# documentation id prefix -> (role, bold)
_ID_PREFIX_STYLES = {
    "T": (StyleRole.CLASS, False),
    "M": (StyleRole.METHOD, False),
    "!": (None, True),
}


def reference_runs(ctx: FormattingContext, reference: str, kind: SymbolKind | None) -> list[StyledRun]:
    """Style a cross reference found in documentation text."""
    role = _KIND_ROLES.get(kind) if kind is not None else None
    if role is not None:
        return [ctx.styled(reference, role)]
    symbol = ctx.model.get_symbol_for_documentation_id(reference)
    if symbol is not None:
        return [ctx.name(symbol)]
    if len(reference) > 2 and reference[1] == ":" and reference[0] in _ID_PREFIX_STYLES:
        prefix_role, bold = _ID_PREFIX_STYLES[reference[0]]
        return [ctx.styled(reference[2:], prefix_role, bold=bold, italic=True)]
    return [ctx.text(reference)]


def render_doc(ctx: FormattingContext, doc: DocNode) -> list[StyledRun]:
    return doc.render(lambda reference, kind: reference_runs(ctx, reference, kind), ctx.text)


def _body(doc: DocNode) -> DocNode | None:
    summary = doc.summary
    if summary is not None and not summary.is_empty:
        return summary
    return None if doc.is_empty else doc


def returns_runs(ctx: FormattingContext, symbol: Symbol, doc: DocNode) -> list[StyledRun]:
    """`\\nReturns: ...` for methods with a non-empty returns section."""
    if not isinstance(symbol, MethodSymbol):
        return []
    returns = doc.returns
    if returns is None or returns.is_empty:
        return []
    return [ctx.text("\nReturns", bold=True), ctx.text(": "), *render_doc(ctx, returns)]


def base_members(symbol: Symbol) -> list[Symbol]:
    """Members `symbol` may inherit documentation from, nearest first.

    Overridden members come first, then explicitly implemented interface
    members, then implicitly implemented ones.
    """
    found: list[Symbol] = []
    overridden = getattr(symbol, "overridden_member", None)
    while overridden is not None and overridden not in found:
        found.append(overridden)
        overridden = getattr(overridden, "overridden_member", None)
    for implemented in getattr(symbol, "explicit_interface_implementations", ()):
        if implemented not in found:
            found.append(implemented)
    for intf in implicit_implementations(symbol):
        for member in intf.get_members(symbol.name):
            if member.kind is symbol.kind and same_signature(member, symbol) and member not in found:
                found.append(member)
    return found


def inherited_documentation(symbol: Symbol, docs: DocumentationStore) -> tuple[Symbol, DocNode] | None:
    for member in base_members(symbol):
        doc = docs.get_documentation(member)
        if doc is not None and _body(doc) is not None:
            return member, doc
    return None


def documentation_fragment(
    ctx: FormattingContext, symbol: Symbol, docs: DocumentationStore, flags: QuickInfoFlags
) -> TextLine | None:
    """Own documentation when overriding is on, otherwise documentation inherited from a base member."""
    doc = docs.get_documentation(symbol)
    own = _body(doc) if doc is not None else None
    if doc is not None and own is not None:
        if not flags.override_documentation:
            return None
        runs = render_doc(ctx, own)
        if flags.show_returns_doc:
            runs.extend(returns_runs(ctx, symbol, doc))
        return TextLine(tuple(runs))

    if not flags.documentation_from_base_type:
        return None
    inherited = inherited_documentation(symbol, docs)
    if inherited is None:
        return None
    member, base_doc = inherited
    runs = [ctx.text("Documentation from ")]
    if member.containing_type is not None:
        runs.extend(ctx.symbol(member.containing_type))
        runs.append(ctx.text("."))
    runs.append(ctx.name(member))
    runs.append(ctx.text(": "))
    runs.extend(render_doc(ctx, _body(base_doc) or base_doc))
    if flags.show_returns_doc:
        runs.extend(returns_runs(ctx, member, base_doc))
    return TextLine(tuple(runs))
