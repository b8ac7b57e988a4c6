"""Symbol resolution at a position.

Resolves the node under the cursor to a symbol, a candidate set, or
nothing, in that order of preference:

1. Predefined type keywords (`int`, `void`) resolve to nothing and are
   flagged so that no fragments are produced for them.
2. The primary binder's symbol.
3. The primary binder's candidates, when it reports a candidate reason.
4. The secondary binder, when one is configured.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from symboltip.core.errors import ResolutionError
from symboltip.host import SecondaryBinder, SemanticModel
from symboltip.model.symbols import CandidateReason, Symbol
from symboltip.model.syntax import SyntaxKind, SyntaxNode

log = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of resolving one node.

    At most one of `symbol` and `candidates` is set. `node` is the node that
    was bound (arguments are unwrapped to their expression).
    """

    node: SyntaxNode
    symbol: Symbol | None = None
    candidates: tuple[Symbol, ...] = ()
    predefined_type: bool = False

    @property
    def is_resolved(self) -> bool:
        return self.symbol is not None

    @property
    def is_ambiguous(self) -> bool:
        return self.symbol is None and bool(self.candidates)

    @property
    def outcome(self) -> str:
        """Short label for logging."""
        if self.predefined_type:
            return "predefined_type"
        if self.symbol is not None:
            return self.symbol.kind.value
        if self.candidates:
            return "candidates"
        return "none"


def find_node(model: SemanticModel, position: int) -> SyntaxNode | None:
    """Smallest node at `position`.

    Raises:
        ResolutionError: The node found no longer contains the position.
    """
    node = model.find_node(position, 0)
    if node is None:
        return None
    if not node.span.contains(position):
        raise ResolutionError.stale_position(position, node.span.start, node.span.end)
    return node


class SymbolResolver:
    """Binds syntax nodes through the primary binder with a secondary fallback.

    Usage::

        resolver = SymbolResolver(secondary=pattern_binder)
        resolution = resolver.resolve(model, node)
    """

    def __init__(self, secondary: SecondaryBinder | None = None) -> None:
        self._secondary = secondary

    def resolve(self, model: SemanticModel, node: SyntaxNode) -> Resolution:
        if node.kind is SyntaxKind.ARGUMENT and node.expression is not None:
            node = node.expression
        if node.kind is SyntaxKind.PREDEFINED_TYPE:
            return Resolution(node, predefined_type=True)

        info = model.get_symbol_info(node)
        if info.symbol is not None:
            return Resolution(node, symbol=info.symbol)
        if info.candidate_reason is not CandidateReason.NONE and info.candidate_symbols:
            return Resolution(node, candidates=tuple(info.candidate_symbols))

        if self._secondary is not None:
            symbol = self._secondary.bind(model, node)
            if symbol is not None:
                log.debug("secondary_binder_resolved", node=node.kind.value, symbol=symbol.name)
                return Resolution(node, symbol=symbol)
        return Resolution(node)
