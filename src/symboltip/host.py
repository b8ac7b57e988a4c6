"""Contracts of the collaborators the engine is hosted with.

Everything here is implemented outside this package (an editor integration,
a language server bridge, or symboltip.semantic for in-memory graphs).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from symboltip.config.models import QuickInfoFlags
    from symboltip.display import DisplayPart
    from symboltip.fragments import InfoFragment
    from symboltip.glyphs import GlyphGroup, GlyphItem
    from symboltip.model.documentation import DocNode
    from symboltip.model.symbols import Symbol, SymbolInfo
    from symboltip.model.syntax import SyntaxNode

Unsubscribe = Callable[[], None]


class TextSnapshot(Protocol):
    """Immutable view of buffer text at one version."""

    @property
    def version(self) -> int: ...

    def line_number_of(self, offset: int) -> int: ...


class TextBuffer(Protocol):
    """The edited buffer."""

    @property
    def current_snapshot(self) -> TextSnapshot: ...

    def subscribe_changing(self, callback: Callable[[], None]) -> Unsubscribe:
        """Call `callback` when the buffer is about to change."""
        ...


class SemanticModel(Protocol):
    """Syntax and binding queries against one snapshot."""

    @property
    def root(self) -> SyntaxNode: ...

    def find_node(self, start: int, length: int) -> SyntaxNode | None:
        """Smallest node covering the span."""
        ...

    def get_symbol_info(self, node: SyntaxNode) -> SymbolInfo: ...

    def get_member_group(self, node: SyntaxNode) -> Sequence[Symbol]:
        """Members visible at a call site named by `node`."""
        ...

    def to_display_parts(self, symbol: Symbol, position: int) -> Sequence[DisplayPart]:
        """Minimal display of `symbol` as seen from `position`."""
        ...

    def get_symbol_for_documentation_id(self, documentation_id: str) -> Symbol | None: ...


class SemanticModelProvider(Protocol):
    def get_semantic_model(self, snapshot: TextSnapshot) -> SemanticModel | None:
        """None when the buffer does not belong to a workspace."""
        ...


class SecondaryBinder(Protocol):
    """Fallback resolver for constructs the primary binder leaves unbound."""

    def bind(self, model: SemanticModel, node: SyntaxNode) -> Symbol | None: ...


class DocumentationStore(Protocol):
    def get_documentation(self, symbol: Symbol) -> DocNode | None: ...


@runtime_checkable
class GlyphService(Protocol):
    def get_glyph(self, group: GlyphGroup, item: GlyphItem) -> Any: ...


class ConfigSource(Protocol):
    def snapshot(self) -> QuickInfoFlags: ...

    def subscribe(self, listener: Callable[[QuickInfoFlags], None]) -> Unsubscribe: ...


class FragmentSink(Protocol):
    """Ordered, append-only destination of fragments."""

    def append(self, fragment: InfoFragment) -> None: ...

    def clear(self) -> None: ...
