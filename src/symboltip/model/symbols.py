"""Symbol graph types produced by a semantic model.

A resolved symbol is one of a closed family of classes, each tagged with a
SymbolKind. The graph is built by a semantic-model provider (see
symboltip.host) and is read-only to the composer.

Equality is structural: two symbol objects are equal when their identity
keys match (kind, containing type, name, and for members the parameter
signature). Symbols reference each other in cycles (a type lists its
members, a member points back at its type), so identity keys, repr and
hashing never walk members.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from symboltip.config.constants import COMMON_BASE_CLASS_NAMES

# ============================================================================
# ENUMS
# ============================================================================


class SymbolKind(str, Enum):
    """Tag of a resolved symbol."""

    EVENT = "event"
    FIELD = "field"
    METHOD = "method"
    PROPERTY = "property"
    LOCAL = "local"
    NAMED_TYPE = "named_type"
    TYPE_PARAMETER = "type_parameter"
    ARRAY_TYPE = "array_type"
    PARAMETER = "parameter"
    NAMESPACE = "namespace"
    DYNAMIC_TYPE = "dynamic_type"


class Accessibility(str, Enum):
    """Declared accessibility of a symbol."""

    NOT_APPLICABLE = "not_applicable"
    PRIVATE = "private"
    PROTECTED_AND_INTERNAL = "protected_and_internal"
    PROTECTED = "protected"
    INTERNAL = "internal"
    PROTECTED_OR_INTERNAL = "protected_or_internal"
    PUBLIC = "public"


class TypeKind(str, Enum):
    CLASS = "class"
    STRUCT = "struct"
    INTERFACE = "interface"
    ENUM = "enum"
    DELEGATE = "delegate"
    TYPE_PARAMETER = "type_parameter"
    ARRAY = "array"
    DYNAMIC = "dynamic"
    POINTER = "pointer"
    MODULE = "module"
    ERROR = "error"
    UNKNOWN = "unknown"


class MethodKind(str, Enum):
    ORDINARY = "ordinary"
    CONSTRUCTOR = "constructor"
    STATIC_CONSTRUCTOR = "static_constructor"
    DESTRUCTOR = "destructor"
    ANONYMOUS_FUNCTION = "anonymous_function"
    LOCAL_FUNCTION = "local_function"
    DELEGATE_INVOKE = "delegate_invoke"
    PROPERTY_GET = "property_get"
    PROPERTY_SET = "property_set"
    EVENT_ADD = "event_add"
    EVENT_REMOVE = "event_remove"
    EVENT_RAISE = "event_raise"
    EXPLICIT_INTERFACE_IMPLEMENTATION = "explicit_interface_implementation"
    USER_DEFINED_OPERATOR = "user_defined_operator"
    CONVERSION = "conversion"
    REDUCED_EXTENSION = "reduced_extension"


class RefKind(str, Enum):
    NONE = "none"
    REF = "ref"
    OUT = "out"
    IN = "in"


class PrimitiveType(str, Enum):
    """Runtime type of a constant value."""

    SBYTE = "sbyte"
    BYTE = "byte"
    SHORT = "short"
    USHORT = "ushort"
    INT = "int"
    UINT = "uint"
    LONG = "long"
    ULONG = "ulong"
    CHAR = "char"
    SINGLE = "float"
    DOUBLE = "double"
    DECIMAL = "decimal"
    BOOLEAN = "bool"
    STRING = "string"
    OBJECT = "object"

    @property
    def keyword(self) -> str:
        return self.value

    @property
    def byte_width(self) -> int:
        """Width in bytes of integral types, 0 for everything else."""
        return _INTEGRAL_WIDTHS.get(self, 0)

    @property
    def is_integral(self) -> bool:
        return self in _INTEGRAL_WIDTHS

    @property
    def is_signed(self) -> bool:
        return self in (PrimitiveType.SBYTE, PrimitiveType.SHORT, PrimitiveType.INT, PrimitiveType.LONG)


_INTEGRAL_WIDTHS: dict[PrimitiveType, int] = {
    PrimitiveType.SBYTE: 1,
    PrimitiveType.BYTE: 1,
    PrimitiveType.SHORT: 2,
    PrimitiveType.USHORT: 2,
    PrimitiveType.CHAR: 2,
    PrimitiveType.INT: 4,
    PrimitiveType.UINT: 4,
    PrimitiveType.LONG: 8,
    PrimitiveType.ULONG: 8,
}


class CandidateReason(str, Enum):
    """Why the binder returned candidates instead of a symbol."""

    NONE = "none"
    NOT_A_TYPE = "not_a_type"
    NOT_INVOCABLE = "not_invocable"
    INACCESSIBLE = "inaccessible"
    AMBIGUOUS = "ambiguous"
    OVERLOAD_RESOLUTION_FAILURE = "overload_resolution_failure"
    LATE_BOUND = "late_bound"
    MEMBER_GROUP = "member_group"


# ============================================================================
# CONSTANTS
# ============================================================================


@dataclass(frozen=True, slots=True)
class NumericValue:
    """A numeric constant together with its runtime primitive type.

    Characters are stored as their code point with type CHAR.
    """

    value: int | float
    type: PrimitiveType

    def __str__(self) -> str:
        if self.type is PrimitiveType.CHAR:
            return chr(int(self.value))
        return str(self.value)


ConstantValue = str | NumericValue


class TypedConstantKind(str, Enum):
    PRIMITIVE = "primitive"
    ENUM = "enum"
    TYPE = "type"
    ARRAY = "array"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class TypedConstant:
    """An attribute argument value."""

    kind: TypedConstantKind
    value: Any = None  # ConstantValue, TypeSymbol, tuple[TypedConstant, ...] or None
    type: TypeSymbol | None = None


@dataclass(frozen=True, slots=True)
class AttributeData:
    """An attribute applied to a symbol."""

    attribute_class: NamedTypeSymbol
    constructor_arguments: tuple[TypedConstant, ...] = ()
    named_arguments: tuple[tuple[str, TypedConstant], ...] = ()


# ============================================================================
# SYMBOLS
# ============================================================================


@dataclass(eq=False, repr=False, kw_only=True)
class Symbol:
    """Common state of every symbol kind."""

    kind: ClassVar[SymbolKind]

    name: str
    accessibility: Accessibility = Accessibility.PUBLIC
    containing_type: NamedTypeSymbol | None = None
    is_static: bool = False
    is_abstract: bool = False
    is_virtual: bool = False
    is_override: bool = False
    is_sealed: bool = False
    is_extern: bool = False
    attributes: tuple[AttributeData, ...] = ()
    assembly_name: str | None = None
    module_name: str | None = None
    in_source: bool = True

    def identity(self) -> tuple[Any, ...]:
        container = self.containing_type.identity() if self.containing_type else None
        return (self.kind, container, self.name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Symbol):
            return NotImplemented
        return self.identity() == other.identity()

    def __hash__(self) -> int:
        return hash(self.identity())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    @property
    def return_type(self) -> TypeSymbol | None:
        return None

    @property
    def parameters(self) -> tuple[ParameterSymbol, ...]:
        return ()

    @property
    def assembly_module_name(self) -> str | None:
        """Module name when known, else the assembly name."""
        if self.containing_type is not None and self.module_name is None and self.assembly_name is None:
            return self.containing_type.assembly_module_name
        return self.module_name or self.assembly_name

    @property
    def is_accessible(self) -> bool:
        """Public, not applicable, or declared in source."""
        return self.accessibility in (Accessibility.PUBLIC, Accessibility.NOT_APPLICABLE) or self.in_source


@dataclass(eq=False, repr=False, kw_only=True)
class NamespaceSymbol(Symbol):
    kind: ClassVar[SymbolKind] = SymbolKind.NAMESPACE


@dataclass(eq=False, repr=False, kw_only=True)
class TypeSymbol(Symbol):
    """Base of type symbols."""

    type_kind: TypeKind = TypeKind.CLASS
    base_type: NamedTypeSymbol | None = None
    interfaces: list[NamedTypeSymbol] = field(default_factory=list)
    members: list[Symbol] = field(default_factory=list)

    @property
    def all_interfaces(self) -> tuple[NamedTypeSymbol, ...]:
        """Declared interfaces, their bases, then those of base types; deduplicated."""
        seen: dict[NamedTypeSymbol, None] = {}
        for intf in self.interfaces:
            seen.setdefault(intf, None)
            for inherited in intf.all_interfaces:
                seen.setdefault(inherited, None)
        if self.base_type is not None:
            for inherited in self.base_type.all_interfaces:
                seen.setdefault(inherited, None)
        return tuple(seen)

    def get_members(self, name: str | None = None) -> tuple[Symbol, ...]:
        if name is None:
            return tuple(self.members)
        return tuple(m for m in self.members if m.name == name)

    def add_member(self, member: Symbol) -> Symbol:
        """Attach a member and point it back at this type."""
        member.containing_type = self  # type: ignore[assignment]
        self.members.append(member)
        return member


@dataclass(eq=False, repr=False, kw_only=True)
class NamedTypeSymbol(TypeSymbol):
    kind: ClassVar[SymbolKind] = SymbolKind.NAMED_TYPE

    namespace: str = ""
    type_parameters: tuple[TypeParameterSymbol, ...] = ()
    type_arguments: tuple[TypeSymbol, ...] = ()
    enum_underlying_type: NamedTypeSymbol | None = None
    special_type: PrimitiveType | None = None

    @property
    def full_name(self) -> str:
        name = self.name
        if self.type_parameters:
            name = f"{name}`{len(self.type_parameters)}"
        if self.containing_type is not None:
            return f"{self.containing_type.full_name}.{name}"
        if self.namespace:
            return f"{self.namespace}.{name}"
        return name

    @property
    def display_name(self) -> str:
        """Namespace-qualified name without generic arity."""
        if self.containing_type is not None:
            return f"{self.containing_type.display_name}.{self.name}"
        if self.namespace:
            return f"{self.namespace}.{self.name}"
        return self.name

    def identity(self) -> tuple[Any, ...]:
        return (self.kind, self.full_name, tuple(a.identity() for a in self.type_arguments))

    @property
    def is_generic_type(self) -> bool:
        return bool(self.type_parameters)

    @property
    def delegate_invoke_method(self) -> MethodSymbol | None:
        if self.type_kind is not TypeKind.DELEGATE:
            return None
        for member in self.get_members("Invoke"):
            if isinstance(member, MethodSymbol):
                return member
        return None


@dataclass(eq=False, repr=False, kw_only=True)
class TypeParameterSymbol(TypeSymbol):
    kind: ClassVar[SymbolKind] = SymbolKind.TYPE_PARAMETER

    type_kind: TypeKind = TypeKind.TYPE_PARAMETER
    ordinal: int = 0
    has_constructor_constraint: bool = False
    has_reference_type_constraint: bool = False
    has_value_type_constraint: bool = False
    constraint_types: tuple[TypeSymbol, ...] = ()

    def identity(self) -> tuple[Any, ...]:
        return (self.kind, self.name, self.ordinal)

    @property
    def has_constraints(self) -> bool:
        return (
            self.has_constructor_constraint
            or self.has_reference_type_constraint
            or self.has_value_type_constraint
            or bool(self.constraint_types)
        )


@dataclass(eq=False, repr=False, kw_only=True)
class ArrayTypeSymbol(TypeSymbol):
    kind: ClassVar[SymbolKind] = SymbolKind.ARRAY_TYPE

    name: str = ""
    type_kind: TypeKind = TypeKind.ARRAY
    element_type: TypeSymbol
    rank: int = 1

    def identity(self) -> tuple[Any, ...]:
        return (self.kind, self.element_type.identity(), self.rank)


@dataclass(eq=False, repr=False, kw_only=True)
class ParameterSymbol(Symbol):
    kind: ClassVar[SymbolKind] = SymbolKind.PARAMETER

    accessibility: Accessibility = Accessibility.NOT_APPLICABLE
    type: TypeSymbol
    ref_kind: RefKind = RefKind.NONE
    is_params: bool = False
    ordinal: int = 0

    def identity(self) -> tuple[Any, ...]:
        return (self.kind, self.name, self.ordinal, self.type.identity(), self.ref_kind)

    @property
    def return_type(self) -> TypeSymbol | None:
        return self.type


def _parameter_signature(parameters: tuple[ParameterSymbol, ...]) -> tuple[Any, ...]:
    return tuple((p.type.identity(), p.ref_kind) for p in parameters)


@dataclass(eq=False, repr=False, kw_only=True)
class MethodSymbol(Symbol):
    kind: ClassVar[SymbolKind] = SymbolKind.METHOD

    method_kind: MethodKind = MethodKind.ORDINARY
    returns: TypeSymbol | None = None  # None for void
    params: tuple[ParameterSymbol, ...] = ()
    type_parameters: tuple[TypeParameterSymbol, ...] = ()
    type_arguments: tuple[TypeSymbol, ...] = ()
    is_extension_method: bool = False
    receiver_type: TypeSymbol | None = None
    constructed_from: MethodSymbol | None = None
    overridden_method: MethodSymbol | None = None
    explicit_interface_implementations: tuple[MethodSymbol, ...] = ()

    def identity(self) -> tuple[Any, ...]:
        return (
            *super().identity(),
            _parameter_signature(self.params),
            tuple(a.identity() for a in self.type_arguments),
        )

    @property
    def return_type(self) -> TypeSymbol | None:
        return self.returns

    @property
    def parameters(self) -> tuple[ParameterSymbol, ...]:
        return self.params

    @property
    def original_definition(self) -> MethodSymbol:
        return self.constructed_from or self

    @property
    def overridden_member(self) -> Symbol | None:
        return self.overridden_method


@dataclass(eq=False, repr=False, kw_only=True)
class PropertySymbol(Symbol):
    kind: ClassVar[SymbolKind] = SymbolKind.PROPERTY

    type: TypeSymbol
    params: tuple[ParameterSymbol, ...] = ()
    overridden_property: PropertySymbol | None = None
    explicit_interface_implementations: tuple[PropertySymbol, ...] = ()

    def identity(self) -> tuple[Any, ...]:
        return (*super().identity(), _parameter_signature(self.params))

    @property
    def return_type(self) -> TypeSymbol | None:
        return self.type

    @property
    def parameters(self) -> tuple[ParameterSymbol, ...]:
        return self.params

    @property
    def is_indexer(self) -> bool:
        return bool(self.params)

    @property
    def overridden_member(self) -> Symbol | None:
        return self.overridden_property


@dataclass(eq=False, repr=False, kw_only=True)
class EventSymbol(Symbol):
    kind: ClassVar[SymbolKind] = SymbolKind.EVENT

    type: TypeSymbol
    add_method: MethodSymbol | None = None
    raise_method: MethodSymbol | None = None
    overridden_event: EventSymbol | None = None
    explicit_interface_implementations: tuple[EventSymbol, ...] = ()

    @property
    def parameters(self) -> tuple[ParameterSymbol, ...]:
        return self.add_method.params if self.add_method else ()

    @property
    def overridden_member(self) -> Symbol | None:
        return self.overridden_event


@dataclass(eq=False, repr=False, kw_only=True)
class FieldSymbol(Symbol):
    kind: ClassVar[SymbolKind] = SymbolKind.FIELD

    type: TypeSymbol
    is_const: bool = False
    is_readonly: bool = False
    is_volatile: bool = False
    constant_value: ConstantValue | None = None

    @property
    def return_type(self) -> TypeSymbol | None:
        return self.type

    @property
    def has_constant_value(self) -> bool:
        return self.constant_value is not None


@dataclass(eq=False, repr=False, kw_only=True)
class LocalSymbol(Symbol):
    kind: ClassVar[SymbolKind] = SymbolKind.LOCAL

    accessibility: Accessibility = Accessibility.NOT_APPLICABLE
    type: TypeSymbol
    is_const: bool = False
    constant_value: ConstantValue | None = None
    declared_at: int = -1

    def identity(self) -> tuple[Any, ...]:
        return (*super().identity(), self.declared_at)

    @property
    def return_type(self) -> TypeSymbol | None:
        return self.type

    @property
    def has_constant_value(self) -> bool:
        return self.constant_value is not None


ResolvedSymbol = (
    EventSymbol
    | FieldSymbol
    | MethodSymbol
    | PropertySymbol
    | LocalSymbol
    | NamedTypeSymbol
    | TypeParameterSymbol
    | ArrayTypeSymbol
    | ParameterSymbol
    | NamespaceSymbol
)


# ============================================================================
# BINDING RESULTS
# ============================================================================


@dataclass(frozen=True, slots=True)
class SymbolInfo:
    """Result of binding a syntax node."""

    symbol: Symbol | None = None
    candidate_reason: CandidateReason = CandidateReason.NONE
    candidate_symbols: tuple[Symbol, ...] = ()

    @property
    def has_candidates(self) -> bool:
        return self.candidate_reason is not CandidateReason.NONE and bool(self.candidate_symbols)


def is_common_class(symbol: Symbol) -> bool:
    """Object, ValueType, Enum and MulticastDelegate are left out of base type chains."""
    return isinstance(symbol, NamedTypeSymbol) and symbol.name in COMMON_BASE_CLASS_NAMES
