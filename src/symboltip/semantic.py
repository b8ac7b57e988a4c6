"""In-memory implementations of the host collaborators.

Used to embed the engine where symbol graphs are built programmatically,
and throughout the test suite. Bindings are keyed by node object.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

import structlog

from symboltip.display import DisplayPart, minimal_display_parts
from symboltip.glyphs import GlyphGroup, GlyphItem
from symboltip.host import TextSnapshot, Unsubscribe
from symboltip.model.documentation import DocNode
from symboltip.model.symbols import CandidateReason, Symbol, SymbolInfo
from symboltip.model.syntax import SyntaxNode

log = structlog.get_logger()


class InMemorySnapshot:
    """Text at one version."""

    def __init__(self, text: str, version: int) -> None:
        self.text = text
        self._version = version

    @property
    def version(self) -> int:
        return self._version

    def line_number_of(self, offset: int) -> int:
        """Zero-based line of `offset`."""
        return self.text.count("\n", 0, offset)


class InMemoryBuffer:
    """Editable buffer that notifies listeners before each change."""

    def __init__(self, text: str = "") -> None:
        self._snapshot = InMemorySnapshot(text, 0)
        self._listeners: list[Callable[[], None]] = []

    @property
    def current_snapshot(self) -> InMemorySnapshot:
        return self._snapshot

    def subscribe_changing(self, callback: Callable[[], None]) -> Unsubscribe:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def edit(self, text: str) -> InMemorySnapshot:
        """Replace the text; listeners run before the new snapshot exists."""
        for listener in list(self._listeners):
            listener()
        self._snapshot = InMemorySnapshot(text, self._snapshot.version + 1)
        return self._snapshot


class InMemorySemanticModel:
    """Semantic model over a hand-built syntax tree.

    Usage::

        model = InMemorySemanticModel(root)
        model.bind(name_node, method)
        model.bind_candidates(call_node, [overload_a, overload_b])
    """

    def __init__(
        self,
        root: SyntaxNode,
        display: Callable[[Symbol], list[DisplayPart]] = minimal_display_parts,
    ) -> None:
        self._root = root
        self._display = display
        self._bindings: dict[SyntaxNode, SymbolInfo] = {}
        self._member_groups: dict[SyntaxNode, tuple[Symbol, ...]] = {}
        self._documentation_ids: dict[str, Symbol] = {}

    @property
    def root(self) -> SyntaxNode:
        return self._root

    # -- building -----------------------------------------------------------

    def bind(self, node: SyntaxNode, symbol: Symbol) -> None:
        self._bindings[node] = SymbolInfo(symbol=symbol)

    def bind_candidates(
        self,
        node: SyntaxNode,
        candidates: Iterable[Symbol],
        reason: CandidateReason = CandidateReason.OVERLOAD_RESOLUTION_FAILURE,
    ) -> None:
        self._bindings[node] = SymbolInfo(candidate_reason=reason, candidate_symbols=tuple(candidates))

    def set_member_group(self, node: SyntaxNode, members: Iterable[Symbol]) -> None:
        self._member_groups[node] = tuple(members)

    def register_documentation_id(self, documentation_id: str, symbol: Symbol) -> None:
        self._documentation_ids[documentation_id] = symbol

    # -- SemanticModel ------------------------------------------------------

    def find_node(self, start: int, length: int) -> SyntaxNode | None:
        return self._root.find_smallest(start, length)

    def get_symbol_info(self, node: SyntaxNode) -> SymbolInfo:
        return self._bindings.get(node, SymbolInfo())

    def get_member_group(self, node: SyntaxNode) -> Sequence[Symbol]:
        return self._member_groups.get(node, ())

    def to_display_parts(self, symbol: Symbol, position: int) -> Sequence[DisplayPart]:  # noqa: ARG002
        return self._display(symbol)

    def get_symbol_for_documentation_id(self, documentation_id: str) -> Symbol | None:
        return self._documentation_ids.get(documentation_id)


class InMemoryModelProvider:
    """Provider that builds models with a factory and counts the builds."""

    def __init__(self, factory: Callable[[TextSnapshot], InMemorySemanticModel | None]) -> None:
        self._factory = factory
        self.builds = 0

    @classmethod
    def of(cls, model: InMemorySemanticModel | None) -> InMemoryModelProvider:
        return cls(lambda _snapshot: model)

    def get_semantic_model(self, snapshot: TextSnapshot) -> InMemorySemanticModel | None:
        self.builds += 1
        log.debug("semantic_model_built", version=snapshot.version)
        return self._factory(snapshot)


class InMemoryDocumentationStore:
    def __init__(self, docs: dict[Symbol, DocNode] | None = None) -> None:
        self._docs: dict[Symbol, DocNode] = dict(docs or {})

    def add(self, symbol: Symbol, doc: DocNode) -> None:
        self._docs[symbol] = doc

    def get_documentation(self, symbol: Symbol) -> DocNode | None:
        return self._docs.get(symbol)


class NameGlyphService:
    """Glyph ids of the form ``"method:public"``."""

    def get_glyph(self, group: GlyphGroup, item: GlyphItem) -> str:
        return f"{group.value}:{item.value}"
