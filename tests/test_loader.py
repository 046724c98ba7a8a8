"""Tests for building the SchemaModel from SDL."""

import pytest
from graphql import GraphQLError

from schemaguard.kernel.loader import parse_schema
from schemaguard.kernel.model import (
    UNSET,
    ListRef,
    NamedRef,
    NonNullRef,
    TypeDefinition,
    TypeKind,
    UnknownTypeKindError,
    describe_kind,
    has_marker,
)

from conftest import sdl


SCHEMA = sdl("""
directive @required on ARGUMENT_DEFINITION

type Query {
  users(first: Int! = 10, filter: UserFilter @required): [User!]
  legacy: String @deprecated(reason: "use users")
}

type User {
  id: ID!
  status: Status
}

enum Status {
  ACTIVE
  OLD @deprecated
}

input UserFilter {
  status: Status
}

union Result = User
scalar DateTime
interface Node {
  id: ID!
}
""")


@pytest.fixture
def model():
    return parse_schema(SCHEMA)


def test_types_follow_declaration_order(model):
    declared = [t.name for t in model if not t.builtin]
    assert declared == ["Query", "User", "Status", "UserFilter", "Result", "DateTime", "Node"]


def test_type_kinds(model):
    kinds = {name: model.get(name).kind for name in
             ["Query", "Status", "UserFilter", "Result", "DateTime", "Node"]}
    assert kinds == {
        "Query": TypeKind.OBJECT,
        "Status": TypeKind.ENUM,
        "UserFilter": TypeKind.INPUT_OBJECT,
        "Result": TypeKind.UNION,
        "DateTime": TypeKind.SCALAR,
        "Node": TypeKind.INTERFACE,
    }


def test_builtins_are_flagged(model):
    assert model.get("String").builtin
    assert model.get("ID").builtin
    assert model.get("__Schema").builtin
    assert not model.get("DateTime").builtin


def test_field_types_and_args(model):
    users = model.get("Query").fields["users"]
    assert users.type == ListRef(NonNullRef(NamedRef("User")))
    assert [a.name for a in users.args] == ["first", "filter"]

    first = users.get_arg("first")
    assert first.type == NonNullRef(NamedRef("Int"))
    assert first.default_value == 10
    assert first.has_default
    assert not first.is_required

    filter_arg = users.get_arg("filter")
    assert filter_arg.default_value is UNSET
    assert filter_arg.required_by_directive
    assert users.get_arg("missing") is None


def test_markers(model):
    assert model.get("Query").fields["legacy"].deprecated
    assert not model.get("Query").fields["users"].deprecated
    values = {v.name: v for v in model.get("Status").values}
    assert values["OLD"].deprecated
    assert not values["ACTIVE"].deprecated


def test_has_marker_tolerates_missing_nodes():
    assert has_marker(None, "deprecated") is False
    assert has_marker(object(), "deprecated") is False


def test_locations(model):
    assert model.get("Query").loc == "3:1"
    assert model.get("Query").fields["users"].loc == "4:3"
    assert model.get("Query").fields["users"].get_arg("first").loc == "4:9"
    assert model.get("String").loc is None


def test_only_field_bearing_types_have_fields(model):
    assert model.get("Status").fields == {}
    assert model.get("UserFilter").fields == {}
    assert [v.name for v in model.get("Status").values] == ["ACTIVE", "OLD"]


def test_kind_phrases():
    assert describe_kind(TypeKind.INPUT_OBJECT) == "an Input type"
    assert TypeDefinition(name="X", kind=TypeKind.UNION).kind_phrase == "a Union type"


def test_unknown_kind_is_an_internal_error():
    with pytest.raises(UnknownTypeKindError):
        describe_kind("DIRECTIVE")


def test_syntax_error_propagates_unchanged():
    with pytest.raises(GraphQLError) as excinfo:
        parse_schema("type Query {")
    assert "Syntax Error" in str(excinfo.value)


def test_model_mappings_are_read_only(model):
    with pytest.raises(TypeError):
        model.types["Injected"] = model.get("User")
    with pytest.raises(TypeError):
        model.get("Query").fields["injected"] = model.get("Query").fields["legacy"]


def test_definitions_are_hashable(model):
    query = model.get("Query")
    users = query.fields["users"]
    assert hash(query) == hash(model.get("Query"))
    assert hash(users.get_arg("first")) == hash(users.get_arg("first"))
    assert isinstance(hash(model), int)
    assert len({query, model.get("User"), query}) == 2


def test_hand_built_definitions_are_read_only():
    fields = {}
    definition = TypeDefinition(name="X", kind=TypeKind.OBJECT, fields=fields)
    fields["late"] = None
    assert "late" not in definition.fields
