"""Type-level fragments: base type chain, enum statistics, generic bindings, extension methods."""

from __future__ import annotations

from dataclasses import dataclass

from symboltip.config.constants import FLAGS_ATTRIBUTE_NAME
from symboltip.fragments import KeyValueBlock, ScrollableList, StyledRun, TextLine
from symboltip.formatting import FormattingContext, StyleRole, role_of
from symboltip.model.symbols import (
    FieldSymbol,
    MethodSymbol,
    NamedTypeSymbol,
    NumericValue,
    Symbol,
    TypeParameterSymbol,
    TypeSymbol,
    is_common_class,
)

# ---------------------------------------------------------------------------
# Base type
# ---------------------------------------------------------------------------


def base_type_fragment(
    ctx: FormattingContext, type_symbol: TypeSymbol, *, show_inheritance: bool
) -> KeyValueBlock | None:
    """`Base type: Stream - MarshalByRefObject`; Object, ValueType, Enum and MulticastDelegate are skipped."""
    base = type_symbol.base_type
    if base is None or is_common_class(base):
        return None
    body: list[StyledRun] = ctx.symbol(base)
    if show_inheritance:
        ancestor = base.base_type
        while ancestor is not None:
            if ancestor.is_accessible and not is_common_class(ancestor):
                body.append(ctx.text(" - "))
                body.append(ctx.name(ancestor))
            ancestor = ancestor.base_type
    return KeyValueBlock("Base type: ", tuple(body))


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class EnumRange:
    """Statistics over the constant fields of an enum.

    Values compare as mathematical integers. `flags` is the OR of the
    fields' two's-complement bit patterns at the underlying width.
    """

    count: int
    min_field: FieldSymbol
    min_value: int
    max_field: FieldSymbol
    max_value: int
    flags: int

    @property
    def flags_binary(self) -> str:
        return format(self.flags, "b")


def is_flags_enum(enum_type: NamedTypeSymbol) -> bool:
    return any(a.attribute_class.display_name == FLAGS_ATTRIBUTE_NAME for a in enum_type.attributes)


def _width_mask(value: NumericValue, enum_type: NamedTypeSymbol) -> int:
    width = value.type.byte_width
    if not width and enum_type.enum_underlying_type is not None:
        special = enum_type.enum_underlying_type.special_type
        width = special.byte_width if special is not None else 0
    return (1 << (8 * (width or 8))) - 1


def enum_range(enum_type: NamedTypeSymbol) -> EnumRange | None:
    """Min, max and cumulative flags of the enum's fields; None when no field has a value."""
    count = 0
    min_field = max_field = None
    min_value = max_value = flags = 0
    for member in enum_type.members:
        if not isinstance(member, FieldSymbol):
            continue
        constant = member.constant_value
        # partially loaded models can leave the value out
        if not isinstance(constant, NumericValue):
            continue
        value = int(constant.value)
        count += 1
        flags |= value & _width_mask(constant, enum_type)
        if min_field is None or value < min_value:
            min_field, min_value = member, value
        if max_field is None or value > max_value:
            max_field, max_value = member, value
    if min_field is None or max_field is None:
        return None
    return EnumRange(count, min_field, min_value, max_field, max_value, flags)


def _valued_line(ctx: FormattingContext, label: str, value: int, field: FieldSymbol) -> KeyValueBlock:
    return KeyValueBlock(label, (ctx.text(f"{value}("), ctx.styled(field.name, StyleRole.ENUM), ctx.text(")")))


def enum_fragment(ctx: FormattingContext, enum_type: NamedTypeSymbol, *, from_enum: bool) -> ScrollableList | None:
    """Underlying type, plus field count, min, max and flags when shown for the enum itself."""
    underlying = enum_type.enum_underlying_type
    if underlying is None:
        return None
    items: list[KeyValueBlock] = [KeyValueBlock("Enum underlying type: ", tuple(ctx.symbol(underlying)))]
    if not from_enum:
        return ScrollableList(None, tuple(items), scrollable=False)
    stats = enum_range(enum_type)
    if stats is None:
        return None
    items.append(KeyValueBlock("Field count: ", (ctx.text(str(stats.count)),)))
    items.append(_valued_line(ctx, "Min: ", stats.min_value, stats.min_field))
    items.append(_valued_line(ctx, "Max: ", stats.max_value, stats.max_field))
    if is_flags_enum(enum_type):
        binary = stats.flags_binary
        unit = "bits" if len(binary) > 1 else "bit"
        items.append(KeyValueBlock("All flags: ", (ctx.text(binary), ctx.text(f" ({len(binary)} {unit})"))))
    return ScrollableList(None, tuple(items), scrollable=False)


# ---------------------------------------------------------------------------
# Generic bindings
# ---------------------------------------------------------------------------


def constraint_runs(ctx: FormattingContext, parameter: TypeParameterSymbol) -> list[StyledRun]:
    """` where T : class, struct, new(), IComparable<T>`, or nothing when unconstrained."""
    if not parameter.has_constraints:
        return []
    clauses: list[list[StyledRun]] = []
    if parameter.has_reference_type_constraint:
        clauses.append([ctx.keyword("class")])
    if parameter.has_value_type_constraint:
        clauses.append([ctx.keyword("struct")])
    if parameter.has_constructor_constraint:
        clauses.append([ctx.keyword("new"), ctx.text("()")])
    for constraint in parameter.constraint_types:
        clauses.append(ctx.symbol(constraint))

    runs = [ctx.keyword(" where "), ctx.name(parameter), ctx.text(" : ")]
    for i, clause in enumerate(clauses):
        if i > 0:
            runs.append(ctx.text(", "))
        runs.extend(clause)
    return runs


def type_parameter_line(ctx: FormattingContext, parameter: TypeParameterSymbol, argument: TypeSymbol) -> TextLine:
    return TextLine((ctx.name(parameter), ctx.text(" is "), *ctx.symbol(argument), *constraint_runs(ctx, parameter)))


def type_argument_fragment(ctx: FormattingContext, method: MethodSymbol) -> ScrollableList | None:
    """`Type argument:` list pairing each type parameter with its bound argument."""
    if not method.type_arguments:
        return None
    parameters = method.original_definition.type_parameters or method.type_parameters
    lines = tuple(
        type_parameter_line(ctx, parameter, argument)
        for parameter, argument in zip(parameters, method.type_arguments, strict=False)
    )
    if not lines:
        return None
    return ScrollableList("Type argument:", lines, scrollable=False)


# ---------------------------------------------------------------------------
# Extension methods
# ---------------------------------------------------------------------------


def _receiver(method: MethodSymbol) -> TypeSymbol | None:
    if method.receiver_type is not None:
        return method.receiver_type
    if method.params:
        return method.params[0].type
    return None


def _qualified_name(ctx: FormattingContext, symbol: Symbol) -> StyledRun:
    name = symbol.display_name if isinstance(symbol, NamedTypeSymbol) else symbol.name
    return ctx.styled(name, role_of(symbol))


def extension_fragment(ctx: FormattingContext, method: MethodSymbol) -> ScrollableList | None:
    """`Extending: T with List<int>` for constrained receivers, then `Extended by: <declaring type>`."""
    if not method.is_extension_method:
        return None
    items: list[KeyValueBlock] = []
    declared_receiver = _receiver(method.original_definition)
    if isinstance(declared_receiver, TypeParameterSymbol) and declared_receiver.has_constraints:
        body: list[StyledRun] = [ctx.styled(declared_receiver.name, StyleRole.CLASS, bold=True), ctx.text(" with ")]
        receiver = _receiver(method)
        if receiver is not None:
            body.extend(ctx.symbol(receiver))
        items.append(KeyValueBlock("Extending: ", tuple(body)))
    if method.containing_type is not None:
        items.append(KeyValueBlock("Extended by: ", (_qualified_name(ctx, method.containing_type),)))
    if not items:
        return None
    return ScrollableList(None, tuple(items), scrollable=False)
