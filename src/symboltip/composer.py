"""Fragment composition for one request.

The composer resolves the symbol at the request position and runs the
analyzers in a fixed order:

1. Argument position (show_parameter_info)
2. Resolution: candidates render a "Maybe..." list and stop; nothing
   resolved renders syntax-only fragments and stops; predefined type
   keywords produce nothing at all
3. Documentation (override_documentation / documentation_from_base_type)
4. Attributes (show_attributes)
5. Kind-specific fragments, dispatched on SymbolKind
6. Assembly and delegate signature lines

Every step is gated by its own flag; a step that is off or has nothing to
say never stops later steps.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import structlog

from symboltip.analysis.arguments import argument_fragment
from symboltip.analysis.attributes import attribute_fragment
from symboltip.analysis.declaration import declaration_fragment, field_declaration_fragment
from symboltip.analysis.documentation import documentation_fragment
from symboltip.analysis.interfaces import implementation_fragment, interfaces_fragment
from symboltip.analysis.members import const_fragments, event_argument_fragment, overload_fragment
from symboltip.analysis.misc import misc_fragments
from symboltip.analysis.types import (
    base_type_fragment,
    enum_fragment,
    extension_fragment,
    type_argument_fragment,
)
from symboltip.config.models import QuickInfoFlags
from symboltip.core.errors import ResolutionError
from symboltip.fragments import InfoFragment, KeyValueBlock, ScrollableList
from symboltip.formatting import FormattingContext, StyleTable
from symboltip.host import DocumentationStore, GlyphService, SecondaryBinder, SemanticModel, TextSnapshot
from symboltip.model.symbols import (
    EventSymbol,
    FieldSymbol,
    LocalSymbol,
    MethodKind,
    MethodSymbol,
    NamedTypeSymbol,
    PropertySymbol,
    Symbol,
    SymbolKind,
    TypeKind,
)
from symboltip.model.syntax import SyntaxKind, SyntaxNode
from symboltip.resolver import Resolution, SymbolResolver, find_node

log = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class CompositionRequest:
    """Everything one composition pass reads."""

    model: SemanticModel
    snapshot: TextSnapshot
    position: int
    flags: QuickInfoFlags = field(default_factory=QuickInfoFlags)
    styles: StyleTable = field(default_factory=StyleTable)


@dataclass(slots=True)
class _Pass:
    request: CompositionRequest
    ctx: FormattingContext
    node: SyntaxNode
    fragments: list[InfoFragment] = field(default_factory=list)

    @property
    def flags(self) -> QuickInfoFlags:
        return self.request.flags

    @property
    def model(self) -> SemanticModel:
        return self.request.model

    def emit(self, fragment: InfoFragment | None) -> None:
        if fragment is not None:
            self.fragments.append(fragment)


# Kind step: returns False to end the composition without trailing fragments
_KindStep = Callable[[_Pass, Symbol], bool]


class FragmentComposer:
    """Builds the fragment list for a position.

    Usage::

        composer = FragmentComposer(docs=store, glyphs=glyph_service)
        fragments = composer.compose(CompositionRequest(model, snapshot, offset, flags))
    """

    def __init__(
        self,
        *,
        resolver: SymbolResolver | None = None,
        secondary_binder: SecondaryBinder | None = None,
        docs: DocumentationStore | None = None,
        glyphs: GlyphService | None = None,
    ) -> None:
        self._resolver = resolver or SymbolResolver(secondary_binder)
        self._docs = docs
        self._glyphs = glyphs
        self._dispatch: dict[SymbolKind, _KindStep] = {
            SymbolKind.METHOD: self._method,
            SymbolKind.FIELD: self._field,
            SymbolKind.LOCAL: self._local,
            SymbolKind.PROPERTY: self._property,
            SymbolKind.EVENT: self._event,
            SymbolKind.NAMED_TYPE: self._named_type,
        }

    def compose(self, request: CompositionRequest) -> list[InfoFragment]:
        """Compose fragments for the request position.

        Returns an empty list when the position no longer lies within the
        node found for it.
        """
        try:
            node = find_node(request.model, request.position)
        except ResolutionError as exc:
            log.debug("composition_aborted", error=exc.error_name, **exc.details)
            return []
        if node is None:
            return []

        ctx = FormattingContext(request.model, node.span_start, request.styles, self._glyphs)
        state = _Pass(request, ctx, node)

        if request.flags.show_parameter_info:
            self._argument(state)

        resolution = self._resolver.resolve(request.model, node)
        log.debug("symbol_resolved", outcome=resolution.outcome, node=resolution.node.kind.value)
        if resolution.predefined_type:
            return []
        if resolution.symbol is None:
            state.node = resolution.node
            if resolution.candidates:
                state.emit(self._candidates(state, resolution))
            else:
                for fragment in misc_fragments(resolution.node, request.snapshot, request.flags):
                    state.emit(fragment)
            return state.fragments

        state.node = resolution.node
        self._symbol(state, resolution.symbol)
        return state.fragments

    # ------------------------------------------------------------------
    # Common steps
    # ------------------------------------------------------------------

    def _argument(self, state: _Pass) -> None:
        try:
            state.emit(argument_fragment(state.ctx, state.model, state.node, self._docs))
        except ResolutionError as exc:
            log.debug("argument_info_skipped", error=exc.error_name, **exc.details)

    def _candidates(self, state: _Pass, resolution: Resolution) -> ScrollableList:
        return ScrollableList("Maybe...", tuple(state.ctx.symbol_line(c) for c in resolution.candidates))

    def _symbol(self, state: _Pass, symbol: Symbol) -> None:
        flags = state.flags
        if isinstance(symbol, MethodSymbol) and symbol.method_kind is MethodKind.ANONYMOUS_FUNCTION:
            return
        if self._docs is not None and (flags.override_documentation or flags.documentation_from_base_type):
            state.emit(documentation_fragment(state.ctx, symbol, self._docs, flags))
        if flags.show_attributes:
            state.emit(attribute_fragment(state.ctx, symbol))

        step = self._dispatch.get(symbol.kind)
        if step is not None and not step(state, symbol):
            return
        self._trailing(state, symbol)

    def _trailing(self, state: _Pass, symbol: Symbol) -> None:
        flags = state.flags
        if flags.show_symbol_location:
            location = symbol.assembly_module_name
            if location:
                state.emit(KeyValueBlock("Assembly: ", (state.ctx.text(location),)))
        if flags.show_declaration:
            returned = symbol.return_type
            if isinstance(returned, NamedTypeSymbol) and returned.type_kind is TypeKind.DELEGATE:
                invoke = returned.delegate_invoke_method
                if invoke is not None:
                    state.emit(KeyValueBlock("Delegate signature:\n", tuple(state.ctx.symbol(invoke))))

    # ------------------------------------------------------------------
    # Kind steps
    # ------------------------------------------------------------------

    def _method(self, state: _Pass, symbol: Symbol) -> bool:
        assert isinstance(symbol, MethodSymbol)
        flags, ctx = state.flags, state.ctx
        if flags.show_declaration:
            state.emit(declaration_fragment(ctx, symbol))
        if flags.show_type_parameters:
            state.emit(type_argument_fragment(ctx, symbol))
        if flags.show_symbol_location:
            state.emit(extension_fragment(ctx, symbol))
        if flags.show_interface_implementations:
            state.emit(implementation_fragment(ctx, symbol))
        if flags.show_overloads:
            state.emit(overload_fragment(ctx, state.model, state.node, symbol))

        # [Foo(...)] and [Ns.Foo(...)] bind to the attribute constructor
        attribute_node = self._enclosing_attribute_name(state.node)
        if attribute_node is not None and isinstance(symbol.containing_type, NamedTypeSymbol):
            if flags.show_attributes:
                state.emit(attribute_fragment(ctx, symbol.containing_type))
            self._type_info(state, attribute_node, symbol.containing_type)
        return True

    @staticmethod
    def _enclosing_attribute_name(node: SyntaxNode) -> SyntaxNode | None:
        parent = node.parent
        if parent is None:
            return None
        if parent.kind is SyntaxKind.ATTRIBUTE:
            return parent
        if parent.parent is not None and parent.parent.kind is SyntaxKind.ATTRIBUTE:
            return parent
        return None

    def _field(self, state: _Pass, symbol: Symbol) -> bool:
        assert isinstance(symbol, FieldSymbol)
        if state.flags.show_declaration:
            state.emit(field_declaration_fragment(state.ctx, symbol))
        if symbol.constant_value is not None:
            state.fragments.extend(const_fragments(state.ctx, symbol, symbol.constant_value, state.flags))
        return True

    def _local(self, state: _Pass, symbol: Symbol) -> bool:
        assert isinstance(symbol, LocalSymbol)
        if symbol.constant_value is not None:
            state.fragments.extend(const_fragments(state.ctx, symbol, symbol.constant_value, state.flags))
        return True

    def _property(self, state: _Pass, symbol: Symbol) -> bool:
        assert isinstance(symbol, PropertySymbol)
        if state.flags.show_declaration:
            state.emit(declaration_fragment(state.ctx, symbol))
        if state.flags.show_interface_implementations:
            state.emit(implementation_fragment(state.ctx, symbol))
        return True

    def _event(self, state: _Pass, symbol: Symbol) -> bool:
        assert isinstance(symbol, EventSymbol)
        if state.flags.show_declaration:
            state.emit(declaration_fragment(state.ctx, symbol))
            state.emit(event_argument_fragment(state.ctx, symbol))
        if state.flags.show_interface_implementations:
            state.emit(implementation_fragment(state.ctx, symbol))
        return True

    def _named_type(self, state: _Pass, symbol: Symbol) -> bool:
        assert isinstance(symbol, NamedTypeSymbol)
        self._type_info(state, state.node, symbol)
        return True

    def _type_info(self, state: _Pass, node: SyntaxNode, type_symbol: NamedTypeSymbol) -> None:
        flags, ctx = state.flags, state.ctx
        if flags.show_base_type:
            if type_symbol.type_kind is TypeKind.ENUM:
                state.emit(enum_fragment(ctx, type_symbol, from_enum=True))
            else:
                state.emit(base_type_fragment(ctx, type_symbol, show_inheritance=flags.show_base_type_inheritance))
        if flags.show_interfaces:
            state.emit(interfaces_fragment(ctx, type_symbol, show_inherited=flags.show_interfaces_inheritance))
        if flags.show_declaration:
            state.emit(declaration_fragment(ctx, type_symbol))
        if flags.show_overloads and node.parent_is(SyntaxKind.OBJECT_CREATION_EXPRESSION):
            creation = node.parent
            assert creation is not None
            constructor = state.model.get_symbol_info(creation).symbol
            if isinstance(constructor, MethodSymbol):
                state.emit(overload_fragment(ctx, state.model, creation, constructor))
