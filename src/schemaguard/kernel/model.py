"""Immutable type-system model for one schema version.

A SchemaModel is built once per comparison (see ``loader.parse_schema``) and
is only ever read by the comparison passes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Union


DEPRECATED = "deprecated"
REQUIRED = "required"


class UnknownTypeKindError(TypeError):
    """Raised when a named type cannot be classified into one of the six kinds."""


class TypeKind(str, Enum):
    """Structural category of a named type."""

    SCALAR = "SCALAR"
    OBJECT = "OBJECT"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    ENUM = "ENUM"
    INPUT_OBJECT = "INPUT_OBJECT"


_KIND_PHRASES: Dict[TypeKind, str] = {
    TypeKind.SCALAR: "a Scalar type",
    TypeKind.OBJECT: "an Object type",
    TypeKind.INTERFACE: "an Interface type",
    TypeKind.UNION: "a Union type",
    TypeKind.ENUM: "an Enum type",
    TypeKind.INPUT_OBJECT: "an Input type",
}

FIELD_BEARING_KINDS = frozenset({TypeKind.OBJECT, TypeKind.INTERFACE})


def describe_kind(kind: TypeKind) -> str:
    """Return the phrase used in messages, e.g. ``"an Object type"``."""
    try:
        return _KIND_PHRASES[kind]
    except KeyError:
        raise UnknownTypeKindError(f"Unknown type kind {kind!r}") from None


class _Unset:
    """Marker for an argument declared without a default value."""

    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()


# Type references

@dataclass(frozen=True)
class NamedRef:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ListRef:
    of_type: "TypeReference"

    def __str__(self) -> str:
        return f"[{self.of_type}]"


@dataclass(frozen=True)
class NonNullRef:
    of_type: "TypeReference"

    def __post_init__(self) -> None:
        if isinstance(self.of_type, NonNullRef):
            raise ValueError("NonNull cannot wrap another NonNull type")

    def __str__(self) -> str:
        return f"{self.of_type}!"


TypeReference = Union[NamedRef, ListRef, NonNullRef]


def has_marker(node: Any, marker: str) -> bool:
    """True if ``node`` carries an annotation (directive) called ``marker``.

    Works on any model element; ``None`` and elements without directives
    never carry a marker.
    """
    if node is None:
        return False
    return marker in getattr(node, "directives", ())


class _Annotated:
    directives: Tuple[str, ...]

    @property
    def deprecated(self) -> bool:
        return has_marker(self, DEPRECATED)


# Definitions

@dataclass(frozen=True)
class ArgumentDefinition(_Annotated):
    name: str
    type: TypeReference
    default_value: Any = field(default=UNSET, hash=False)
    loc: Optional[str] = None
    directives: Tuple[str, ...] = ()

    @property
    def has_default(self) -> bool:
        return self.default_value is not UNSET

    @property
    def is_required(self) -> bool:
        """Non-null and no default: callers must supply it."""
        return isinstance(self.type, NonNullRef) and not self.has_default

    @property
    def required_by_directive(self) -> bool:
        return has_marker(self, REQUIRED)


@dataclass(frozen=True)
class FieldDefinition(_Annotated):
    name: str
    type: TypeReference
    args: Tuple[ArgumentDefinition, ...] = ()
    loc: Optional[str] = None
    directives: Tuple[str, ...] = ()

    def get_arg(self, name: str) -> Optional[ArgumentDefinition]:
        for arg in self.args:
            if arg.name == name:
                return arg
        return None


@dataclass(frozen=True)
class EnumValue(_Annotated):
    name: str
    loc: Optional[str] = None
    directives: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TypeDefinition(_Annotated):
    """A named type, tagged by ``kind``.

    ``fields`` is only populated for OBJECT and INTERFACE, ``values`` only
    for ENUM. ``builtin`` marks specified scalars and introspection types.
    """
    name: str
    kind: TypeKind
    loc: Optional[str] = None
    directives: Tuple[str, ...] = ()
    builtin: bool = False
    fields: Mapping[str, FieldDefinition] = field(default_factory=dict, hash=False)
    values: Tuple[EnumValue, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def kind_phrase(self) -> str:
        return describe_kind(self.kind)


@dataclass(frozen=True)
class SchemaModel:
    """Type name -> definition, in declaration order."""
    types: Mapping[str, TypeDefinition] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "types", MappingProxyType(dict(self.types)))

    def __contains__(self, type_name: object) -> bool:
        return type_name in self.types

    def __iter__(self) -> Iterator[TypeDefinition]:
        return iter(self.types.values())

    def __len__(self) -> int:
        return len(self.types)

    def get(self, type_name: str) -> Optional[TypeDefinition]:
        return self.types.get(type_name)
