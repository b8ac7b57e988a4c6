"""Attribute list rendering: `[Obsolete("use Bar", DiagnosticId="X1")]`."""

from __future__ import annotations

from symboltip.config.constants import ATTRIBUTE_SUFFIX
from symboltip.fragments import ScrollableList, StyledRun, TextLine
from symboltip.formatting import FormattingContext, StyleRole
from symboltip.model.symbols import AttributeData, FieldSymbol, PropertySymbol, Symbol


def attribute_name(attribute: AttributeData) -> str:
    name = attribute.attribute_class.name
    if name.endswith(ATTRIBUTE_SUFFIX) and name != ATTRIBUTE_SUFFIX:
        return name[: -len(ATTRIBUTE_SUFFIX)]
    return name


def _named_argument_run(ctx: FormattingContext, attribute: AttributeData, name: str) -> StyledRun:
    for member in attribute.attribute_class.get_members(name):
        if isinstance(member, PropertySymbol):
            return ctx.styled(name, StyleRole.PROPERTY)
        if isinstance(member, FieldSymbol):
            return ctx.styled(name, StyleRole.FIELD)
    return ctx.styled(name, None, italic=True)


def attribute_line(ctx: FormattingContext, attribute: AttributeData) -> TextLine:
    runs: list[StyledRun] = [ctx.text("["), ctx.styled(attribute_name(attribute), StyleRole.CLASS)]
    if not attribute.constructor_arguments and not attribute.named_arguments:
        runs.append(ctx.text("]"))
        return TextLine(tuple(runs))
    runs.append(ctx.text("("))
    count = 0
    for argument in attribute.constructor_arguments:
        if count:
            runs.append(ctx.text(", "))
        runs.extend(ctx.constant(argument))
        count += 1
    for name, argument in attribute.named_arguments:
        if count:
            runs.append(ctx.text(", "))
        runs.append(_named_argument_run(ctx, attribute, name))
        runs.append(ctx.text("="))
        runs.extend(ctx.constant(argument))
        count += 1
    runs.append(ctx.text(")]"))
    return TextLine(tuple(runs))


def attribute_fragment(ctx: FormattingContext, symbol: Symbol) -> ScrollableList | None:
    """`Attribute:` list of the accessible attributes applied to `symbol`."""
    lines = tuple(attribute_line(ctx, a) for a in symbol.attributes if a.attribute_class.is_accessible)
    if not lines:
        return None
    return ScrollableList("Attribute:", lines)
