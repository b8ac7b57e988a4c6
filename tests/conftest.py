"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages, and
provides builders for symbol graphs and syntax trees.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

# Insert local src directory at the beginning of sys.path
# This ensures that the local symboltip package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of symboltip modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("symboltip"):
        del sys.modules[module_name]

from collections.abc import Callable  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402

from symboltip.formatting import FormattingContext  # noqa: E402
from symboltip.model.symbols import (  # noqa: E402
    NamedTypeSymbol,
    PrimitiveType,
    TypeKind,
)
from symboltip.model.syntax import SyntaxKind, SyntaxNode, TextSpan  # noqa: E402
from symboltip.semantic import InMemorySemanticModel  # noqa: E402


@dataclass
class Builtins:
    """Predefined types shared by tests."""

    object_: NamedTypeSymbol
    value_type: NamedTypeSymbol
    enum: NamedTypeSymbol
    int_: NamedTypeSymbol
    uint: NamedTypeSymbol
    long_: NamedTypeSymbol
    byte: NamedTypeSymbol
    bool_: NamedTypeSymbol
    string: NamedTypeSymbol
    disposable: NamedTypeSymbol
    event_args: NamedTypeSymbol
    flags_attribute: NamedTypeSymbol


def _special(name: str, special: PrimitiveType, base: NamedTypeSymbol | None = None) -> NamedTypeSymbol:
    return NamedTypeSymbol(
        name=name,
        namespace="System",
        type_kind=TypeKind.STRUCT,
        special_type=special,
        base_type=base,
        in_source=False,
    )


@pytest.fixture
def builtins() -> Builtins:
    object_ = NamedTypeSymbol(
        name="Object", namespace="System", special_type=PrimitiveType.OBJECT, in_source=False
    )
    value_type = NamedTypeSymbol(name="ValueType", namespace="System", base_type=object_, in_source=False)
    enum = NamedTypeSymbol(name="Enum", namespace="System", base_type=value_type, in_source=False)
    string = NamedTypeSymbol(
        name="String",
        namespace="System",
        special_type=PrimitiveType.STRING,
        base_type=object_,
        is_sealed=True,
        in_source=False,
    )
    return Builtins(
        object_=object_,
        value_type=value_type,
        enum=enum,
        int_=_special("Int32", PrimitiveType.INT, value_type),
        uint=_special("UInt32", PrimitiveType.UINT, value_type),
        long_=_special("Int64", PrimitiveType.LONG, value_type),
        byte=_special("Byte", PrimitiveType.BYTE, value_type),
        bool_=_special("Boolean", PrimitiveType.BOOLEAN, value_type),
        string=string,
        disposable=NamedTypeSymbol(
            name="IDisposable", namespace="System", type_kind=TypeKind.INTERFACE, in_source=False
        ),
        event_args=NamedTypeSymbol(name="EventArgs", namespace="System", base_type=object_, in_source=False),
        flags_attribute=NamedTypeSymbol(name="FlagsAttribute", namespace="System", in_source=False),
    )


NodeFactory = Callable[..., SyntaxNode]


def make_node(
    kind: SyntaxKind,
    start: int,
    end: int,
    *children: SyntaxNode,
    **fields: Any,
) -> SyntaxNode:
    """Build a node and attach `children` to it."""
    node = SyntaxNode(kind=kind, span=TextSpan(start, end), **fields)
    for child in children:
        node.add(child)
    return node


@pytest.fixture
def node() -> NodeFactory:
    return make_node


@pytest.fixture
def empty_model() -> InMemorySemanticModel:
    return InMemorySemanticModel(make_node(SyntaxKind.OTHER, 0, 1000))


@pytest.fixture
def ctx(empty_model: InMemorySemanticModel) -> FormattingContext:
    """Formatting context over a model with no bindings."""
    return FormattingContext(empty_model, 0)
