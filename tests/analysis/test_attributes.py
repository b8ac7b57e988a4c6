"""Tests for analysis/attributes.py and attribute argument rendering."""

from __future__ import annotations

import pytest
from conftest import Builtins

from symboltip.analysis.attributes import attribute_fragment, attribute_line, attribute_name
from symboltip.formatting import FormattingContext, StyleRole, StyleTable
from symboltip.model.symbols import (
    Accessibility,
    AttributeData,
    FieldSymbol,
    MethodSymbol,
    NamedTypeSymbol,
    NumericValue,
    PrimitiveType,
    PropertySymbol,
    TypedConstant,
    TypedConstantKind,
    TypeKind,
)


def _attribute_class(name: str, **kwargs: object) -> NamedTypeSymbol:
    return NamedTypeSymbol(name=name, namespace="System", in_source=False, **kwargs)  # type: ignore[arg-type]


def _primitive(value: object) -> TypedConstant:
    return TypedConstant(TypedConstantKind.PRIMITIVE, value)


class TestAttributeName:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [("ObsoleteAttribute", "Obsolete"), ("Serializable", "Serializable"), ("Attribute", "Attribute")],
    )
    def test_given_class_name_when_rendered_then_suffix_stripped(self, name: str, expected: str) -> None:
        assert attribute_name(AttributeData(attribute_class=_attribute_class(name))) == expected


class TestAttributeLine:
    """Attribute usage rendering."""

    def test_given_no_arguments_when_rendered_then_bare_brackets(self, ctx: FormattingContext) -> None:
        line = attribute_line(ctx, AttributeData(attribute_class=_attribute_class("SerializableAttribute")))
        assert line.text == "[Serializable]"

    def test_given_positional_and_named_when_rendered_then_both(
        self, ctx: FormattingContext, builtins: Builtins
    ) -> None:
        # Given
        obsolete = _attribute_class("ObsoleteAttribute")
        obsolete.add_member(PropertySymbol(name="DiagnosticId", type=builtins.string))
        attribute = AttributeData(
            attribute_class=obsolete,
            constructor_arguments=(_primitive("use Bar"), _primitive(NumericValue(True, PrimitiveType.BOOLEAN))),
            named_arguments=(("DiagnosticId", _primitive("X1")),),
        )

        # When
        line = attribute_line(ctx, attribute)

        # Then
        assert line.text == '[Obsolete("use Bar", true, DiagnosticId="X1")]'
        named = next(run for run in line.runs if run.text == "DiagnosticId")
        assert named.style == StyleTable().get(StyleRole.PROPERTY)

    def test_given_unknown_named_argument_when_rendered_then_italic(self, ctx: FormattingContext) -> None:
        attribute = AttributeData(
            attribute_class=_attribute_class("MarkerAttribute"),
            named_arguments=(("Level", _primitive(NumericValue(2, PrimitiveType.INT))),),
        )

        line = attribute_line(ctx, attribute)

        assert line.text == "[Marker(Level=2)]"
        assert next(run for run in line.runs if run.text == "Level").italic

    def test_given_typed_constants_when_rendered_then_literal_forms(
        self, ctx: FormattingContext, builtins: Builtins
    ) -> None:
        # Given
        color = NamedTypeSymbol(name="Color", type_kind=TypeKind.ENUM)
        red = NumericValue(0, PrimitiveType.INT)
        color.add_member(FieldSymbol(name="Red", type=color, is_const=True, constant_value=red))
        attribute = AttributeData(
            attribute_class=_attribute_class("UsageAttribute"),
            constructor_arguments=(
                TypedConstant(TypedConstantKind.TYPE, builtins.string),
                TypedConstant(TypedConstantKind.ENUM, NumericValue(0, PrimitiveType.INT), color),
                TypedConstant(TypedConstantKind.ENUM, NumericValue(9, PrimitiveType.INT), color),
                TypedConstant(
                    TypedConstantKind.ARRAY,
                    (_primitive(NumericValue(1, PrimitiveType.INT)), _primitive(NumericValue(2, PrimitiveType.INT))),
                ),
                _primitive(None),
            ),
        )

        # When
        line = attribute_line(ctx, attribute)

        # Then
        assert line.text == "[Usage(typeof(string), Color.Red, (Color)9, {1, 2}, null)]"


class TestAttributeFragment:
    def test_given_accessible_attributes_when_listed_then_in_order(self, ctx: FormattingContext) -> None:
        hidden = _attribute_class("CompilerGeneratedAttribute", accessibility=Accessibility.INTERNAL)
        method = MethodSymbol(
            name="Run",
            attributes=(
                AttributeData(attribute_class=_attribute_class("ObsoleteAttribute")),
                AttributeData(attribute_class=hidden),
                AttributeData(attribute_class=_attribute_class("PureAttribute")),
            ),
        )

        fragment = attribute_fragment(ctx, method)

        assert fragment is not None
        assert fragment.title == "Attribute:"
        assert [item.text for item in fragment.items] == ["[Obsolete]", "[Pure]"]  # type: ignore[union-attr]

    def test_given_no_attributes_when_listed_then_none(self, ctx: FormattingContext) -> None:
        assert attribute_fragment(ctx, MethodSymbol(name="Run")) is None
