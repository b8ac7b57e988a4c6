"""Structural signature comparison of members.

Two members have equal signatures when they are of the same kind, return
the same type (or both return nothing) and take parameter lists of equal
length whose (type, ref kind) pairs match position by position. Types are
compared by identity key, so equality is symmetric and transitive.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from symboltip.model.symbols import (
    EventSymbol,
    ParameterSymbol,
    RefKind,
    Symbol,
    SymbolKind,
    TypeSymbol,
)


@dataclass(frozen=True, slots=True)
class SignatureKey:
    kind: SymbolKind
    return_type: tuple[Any, ...] | None
    parameters: tuple[tuple[tuple[Any, ...], RefKind], ...]

    @classmethod
    def of(cls, symbol: Symbol) -> SignatureKey:
        return cls.build(symbol.kind, signature_return_type(symbol), symbol.parameters)

    @classmethod
    def build(
        cls,
        kind: SymbolKind,
        return_type: TypeSymbol | None,
        parameters: tuple[ParameterSymbol, ...],
    ) -> SignatureKey:
        return cls(
            kind=kind,
            return_type=return_type.identity() if return_type is not None else None,
            parameters=tuple((p.type.identity(), p.ref_kind) for p in parameters),
        )


def signature_return_type(symbol: Symbol) -> TypeSymbol | None:
    """Return type used for signature matching; events match on their delegate type."""
    if isinstance(symbol, EventSymbol):
        return symbol.type
    return symbol.return_type


def match_signature(
    member: Symbol,
    kind: SymbolKind,
    return_type: TypeSymbol | None,
    parameters: tuple[ParameterSymbol, ...],
) -> bool:
    """Whether `member` has the given kind, return type and parameters."""
    return SignatureKey.of(member) == SignatureKey.build(kind, return_type, parameters)


def same_signature(left: Symbol, right: Symbol) -> bool:
    return SignatureKey.of(left) == SignatureKey.of(right)
