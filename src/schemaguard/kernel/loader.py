"""Build a SchemaModel from GraphQL SDL using graphql-core."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from graphql import (
    GraphQLArgument,
    GraphQLEnumType,
    GraphQLField,
    GraphQLNamedType,
    GraphQLSchema,
    GraphQLType,
    Undefined,
    build_schema,
    is_enum_type,
    is_input_object_type,
    is_interface_type,
    is_introspection_type,
    is_list_type,
    is_non_null_type,
    is_object_type,
    is_scalar_type,
    is_specified_scalar_type,
    is_union_type,
)
from graphql.utilities import value_from_ast_untyped

from .model import (
    UNSET,
    ArgumentDefinition,
    EnumValue,
    FieldDefinition,
    ListRef,
    NamedRef,
    NonNullRef,
    SchemaModel,
    TypeDefinition,
    TypeKind,
    TypeReference,
    UnknownTypeKindError,
)

logger = logging.getLogger(__name__)


def parse_schema(source: str) -> SchemaModel:
    """Parse SDL text into a SchemaModel.

    Syntax errors (``GraphQLSyntaxError``) and invalid SDL (``TypeError``)
    raised by graphql-core propagate unchanged.
    """
    schema = build_schema(source)
    return schema_model_from_graphql(schema)


def schema_model_from_graphql(schema: GraphQLSchema) -> SchemaModel:
    """Convert an already built graphql-core schema."""
    ordered = sorted(
        enumerate(schema.type_map.values()),
        key=lambda item: _declaration_key(item[1], item[0]),
    )
    types: Dict[str, TypeDefinition] = {}
    for _, named_type in ordered:
        types[named_type.name] = _convert_named_type(named_type)
    logger.debug("Loaded schema with %d types", len(types))
    return SchemaModel(types=types)


def _declaration_key(named_type: GraphQLNamedType, index: int) -> Tuple[int, int]:
    # Types declared in the document come first, in source order; built-ins
    # keep graphql-core's collection order after them.
    node = named_type.ast_node
    if node is not None and node.loc is not None:
        return (0, node.loc.start)
    return (1, index)


def location_of(node: Any) -> Optional[str]:
    """``"line:column"`` of the node's first token, or None."""
    loc = getattr(node, "loc", None) if node is not None else None
    if loc is None:
        return None
    token = loc.start_token
    return f"{token.line}:{token.column}"


def directive_names(node: Any) -> Tuple[str, ...]:
    if node is None:
        return ()
    return tuple(directive.name.value for directive in (node.directives or ()))


def type_kind_of(named_type: GraphQLNamedType) -> TypeKind:
    if is_scalar_type(named_type):
        return TypeKind.SCALAR
    if is_object_type(named_type):
        return TypeKind.OBJECT
    if is_interface_type(named_type):
        return TypeKind.INTERFACE
    if is_union_type(named_type):
        return TypeKind.UNION
    if is_enum_type(named_type):
        return TypeKind.ENUM
    if is_input_object_type(named_type):
        return TypeKind.INPUT_OBJECT
    raise UnknownTypeKindError(f"Unknown type {type(named_type).__name__}")


def type_reference_of(type_: GraphQLType) -> TypeReference:
    if is_non_null_type(type_):
        return NonNullRef(type_reference_of(type_.of_type))
    if is_list_type(type_):
        return ListRef(type_reference_of(type_.of_type))
    return NamedRef(type_.name)


def _convert_named_type(named_type: GraphQLNamedType) -> TypeDefinition:
    kind = type_kind_of(named_type)
    node = named_type.ast_node
    fields: Dict[str, FieldDefinition] = {}
    values: Tuple[EnumValue, ...] = ()

    if kind in (TypeKind.OBJECT, TypeKind.INTERFACE):
        fields = {
            name: _convert_field(name, gql_field)
            for name, gql_field in named_type.fields.items()
        }
    elif kind is TypeKind.ENUM:
        values = _convert_enum_values(named_type)

    return TypeDefinition(
        name=named_type.name,
        kind=kind,
        loc=location_of(node),
        directives=directive_names(node),
        builtin=is_specified_scalar_type(named_type) or is_introspection_type(named_type),
        fields=fields,
        values=values,
    )


def _convert_field(name: str, gql_field: GraphQLField) -> FieldDefinition:
    args: List[ArgumentDefinition] = [
        _convert_argument(arg_name, arg) for arg_name, arg in gql_field.args.items()
    ]
    return FieldDefinition(
        name=name,
        type=type_reference_of(gql_field.type),
        args=tuple(args),
        loc=location_of(gql_field.ast_node),
        directives=directive_names(gql_field.ast_node),
    )


def _convert_argument(name: str, arg: GraphQLArgument) -> ArgumentDefinition:
    return ArgumentDefinition(
        name=name,
        type=type_reference_of(arg.type),
        default_value=_default_value_of(arg),
        loc=location_of(arg.ast_node),
        directives=directive_names(arg.ast_node),
    )


def _default_value_of(arg: GraphQLArgument) -> Any:
    """Literal default as plain Python data (enum values by name), or UNSET."""
    node = arg.ast_node
    if node is not None:
        if node.default_value is None:
            return UNSET
        return value_from_ast_untyped(node.default_value)
    # Schemas built in code have no AST; fall back to the coerced default.
    if arg.default_value is Undefined:
        return UNSET
    return arg.default_value


def _convert_enum_values(enum_type: GraphQLEnumType) -> Tuple[EnumValue, ...]:
    return tuple(
        EnumValue(
            name=value_name,
            loc=location_of(value.ast_node),
            directives=directive_names(value.ast_node),
        )
        for value_name, value in enum_type.values.items()
    )
