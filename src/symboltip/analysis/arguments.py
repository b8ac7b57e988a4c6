"""Argument position context: which parameter of which call the cursor sits in.

Resolution walks a bounded number of ancestors looking for an argument node,
maps the argument to a formal parameter (by name, by position, or to a
trailing `params` parameter), and describes the call:

    Argument of void Console.WriteLine(string format, object arg0)
    Maybe argument of <each candidate>
    Argument 2 of Foo
    Argument 2
"""

from __future__ import annotations

from itertools import chain

from symboltip.analysis.documentation import render_doc
from symboltip.config.constants import ARGUMENT_ANCESTOR_HOPS, NAMEOF_KEYWORD
from symboltip.core.errors import ResolutionError
from symboltip.fragments import InfoFragment, ScrollableList, StyledRun, TextLine
from symboltip.formatting import FormattingContext
from symboltip.host import DocumentationStore, SemanticModel
from symboltip.model.symbols import MethodKind, MethodSymbol, Symbol, SymbolInfo
from symboltip.model.syntax import ARGUMENT_LIST_KINDS, SyntaxKind, SyntaxNode


def find_argument(node: SyntaxNode) -> SyntaxNode | None:
    """The argument node enclosing `node`, searched up to ARGUMENT_ANCESTOR_HOPS levels."""
    start = node.parent if node.kind is SyntaxKind.NULL_LITERAL and node.parent is not None else node
    for hops, candidate in enumerate(chain((start,), start.ancestors())):
        if hops >= ARGUMENT_ANCESTOR_HOPS:
            break
        if candidate.kind is SyntaxKind.ARGUMENT:
            return candidate
    return None


def argument_index(argument_list: SyntaxNode, argument: SyntaxNode) -> int:
    for i, child in enumerate(argument_list.children):
        if child is argument:
            return i
    return -1


def map_parameter(method: MethodSymbol, index: int, name: str | None) -> tuple[int, str | None]:
    """Map an argument to (parameter index, parameter name).

    Named arguments are remapped to the parameter carrying that name.
    Positional arguments past the end go to a trailing `params` parameter.
    """
    parameters = method.params
    if name is not None:
        for i, parameter in enumerate(parameters):
            if parameter.name == name:
                index = i
        return index, name
    if index < len(parameters):
        return index, parameters[index].name
    if parameters and parameters[-1].is_params:
        return len(parameters) - 1, parameters[-1].name
    return index, None


def _documented_symbol(method: MethodSymbol) -> Symbol:
    # Delegate parameters are documented on the delegate type
    if method.method_kind is MethodKind.DELEGATE_INVOKE and method.containing_type is not None:
        return method.containing_type
    return method


def _resolved_call(
    ctx: FormattingContext,
    method: Symbol,
    index: int,
    name: str | None,
    docs: DocumentationStore | None,
) -> TextLine:
    if not isinstance(method, MethodSymbol):
        raise ResolutionError.inconsistent_binder("method", method.kind.value)
    index, name = map_parameter(method, index, name)
    runs: list[StyledRun] = [ctx.text("Argument of "), *ctx.symbol(method, highlight_parameter=index)]
    if name is not None and docs is not None:
        doc = docs.get_documentation(_documented_symbol(method))
        param_doc = doc.param(name) if doc is not None else None
        if param_doc is not None and not param_doc.is_empty:
            runs.extend((ctx.text("\n" + name, bold=True), ctx.text(": ")))
            runs.extend(render_doc(ctx, param_doc))
    return TextLine(tuple(runs))


def _candidate_calls(ctx: FormattingContext, info: SymbolInfo, index: int, name: str | None) -> ScrollableList:
    highlight = index if name is None else None
    header = TextLine((ctx.text("Maybe", bold=True), ctx.text(" argument of")))
    lines = tuple(TextLine(tuple(ctx.symbol(c, highlight_parameter=highlight))) for c in info.candidate_symbols)
    return ScrollableList(None, (header, *lines))


def argument_fragment(
    ctx: FormattingContext,
    model: SemanticModel,
    node: SyntaxNode,
    docs: DocumentationStore | None = None,
) -> InfoFragment | None:
    """Describe the call argument enclosing `node`, or None when not in an argument.

    Raises:
        ResolutionError: The binder resolved the call to something that is not a method.
    """
    argument = find_argument(node)
    if argument is None:
        return None
    argument_list = argument.parent
    if argument_list is None or argument_list.kind not in ARGUMENT_LIST_KINDS:
        return None
    index = argument_index(argument_list, argument)
    call = argument_list.parent
    if index == -1 or call is None:
        return None

    info = model.get_symbol_info(call)
    name = argument.name_colon
    if info.symbol is not None:
        return _resolved_call(ctx, info.symbol, index, name, docs)
    if info.candidate_symbols:
        return _candidate_calls(ctx, info, index, name)
    if call.kind is SyntaxKind.INVOCATION_EXPRESSION and call.children:
        invoked = call.children[0].text
        if invoked == NAMEOF_KEYWORD and len(argument_list.children) == 1:
            return None
        return TextLine((ctx.text(f"Argument {index + 1} of "), ctx.text(invoked, bold=True)))
    return TextLine((ctx.text(f"Argument {index + 1}"),))
