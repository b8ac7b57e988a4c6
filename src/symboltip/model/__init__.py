"""Symbol graph, syntax tree and documentation types."""

from symboltip.model.documentation import DocNode, DocToken
from symboltip.model.symbols import (
    Accessibility,
    ArrayTypeSymbol,
    AttributeData,
    CandidateReason,
    ConstantValue,
    EventSymbol,
    FieldSymbol,
    LocalSymbol,
    MethodKind,
    MethodSymbol,
    NamedTypeSymbol,
    NamespaceSymbol,
    NumericValue,
    ParameterSymbol,
    PrimitiveType,
    PropertySymbol,
    RefKind,
    ResolvedSymbol,
    Symbol,
    SymbolInfo,
    SymbolKind,
    TypedConstant,
    TypedConstantKind,
    TypeKind,
    TypeParameterSymbol,
    TypeSymbol,
)
from symboltip.model.syntax import SourcePosition, SyntaxKind, SyntaxNode, TextSpan

__all__ = [
    # Symbols
    "Accessibility",
    "ArrayTypeSymbol",
    "AttributeData",
    "CandidateReason",
    "ConstantValue",
    "EventSymbol",
    "FieldSymbol",
    "LocalSymbol",
    "MethodKind",
    "MethodSymbol",
    "NamedTypeSymbol",
    "NamespaceSymbol",
    "NumericValue",
    "ParameterSymbol",
    "PrimitiveType",
    "PropertySymbol",
    "RefKind",
    "ResolvedSymbol",
    "Symbol",
    "SymbolInfo",
    "SymbolKind",
    "TypedConstant",
    "TypedConstantKind",
    "TypeKind",
    "TypeParameterSymbol",
    "TypeSymbol",
    # Syntax
    "SourcePosition",
    "SyntaxKind",
    "SyntaxNode",
    "TextSpan",
    # Documentation
    "DocNode",
    "DocToken",
]
