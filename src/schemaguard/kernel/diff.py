"""Structural diff between two schema versions.

Each pass walks the old schema in declaration order and reports what the new
schema broke. Passes do not depend on each other's output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict

from schemaguard.codes import BreakingChangeType, DangerousChangeType

from .compat import is_default_value_equal, is_safe_input_change, is_safe_output_change
from .model import (
    FIELD_BEARING_KINDS,
    NonNullRef,
    SchemaModel,
    TypeDefinition,
    TypeKind,
)

logger = logging.getLogger(__name__)

ChangeType = Union[BreakingChangeType, DangerousChangeType]


class Change(BaseModel):
    """A single breaking or dangerous change."""
    type: ChangeType
    message: str
    resource_name: str  # Type, Type.field, Type.value or field.arg
    loc: Optional[str] = None  # "line:column"; None when nothing to point at
    was_deprecated: bool = False
    was_required_by_directive: Optional[bool] = None  # only for arg type changes

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def is_breaking(self) -> bool:
        return isinstance(self.type, BreakingChangeType)

    def to_dict(self) -> Dict[str, Any]:
        """Wire form consumed by reporters (camelCase keys, absent keys omitted)."""
        data: Dict[str, Any] = {
            "type": self.type.value,
            "message": self.message,
            "resourceName": self.resource_name,
        }
        if self.loc is not None:
            data["loc"] = self.loc
        data["wasDeprecated"] = self.was_deprecated
        if self.was_required_by_directive is not None:
            data["wasRequiredByDirective"] = self.was_required_by_directive
        return data


@dataclass
class ChangeSet:
    """Breaking and dangerous changes, each in pass order."""
    breaking_changes: List[Change] = field(default_factory=list)
    dangerous_changes: List[Change] = field(default_factory=list)


def _shares_field_bearing_kind(old_type: TypeDefinition, new_type: Optional[TypeDefinition]) -> bool:
    """Object stayed Object or Interface stayed Interface."""
    return (
        new_type is not None
        and old_type.kind in FIELD_BEARING_KINDS
        and new_type.kind is old_type.kind
    )


def find_removed_types(old: SchemaModel, new: SchemaModel) -> List[Change]:
    """Types present in ``old`` and missing from ``new``.

    Specified scalars and introspection types are always implicitly
    available, so they are never reported.
    """
    changes: List[Change] = []
    for old_type in old:
        if old_type.builtin or old_type.name.startswith("__"):
            continue
        if old_type.name not in new:
            changes.append(Change(
                type=BreakingChangeType.TYPE_REMOVED,
                message=f"`{old_type.name}` removed from schema",
                resource_name=old_type.name,
                loc=None,
                was_deprecated=old_type.deprecated,
            ))
    return changes


def find_types_that_changed_kind(old: SchemaModel, new: SchemaModel) -> List[Change]:
    changes: List[Change] = []
    for old_type in old:
        new_type = new.get(old_type.name)
        if new_type is None or new_type.kind is old_type.kind:
            continue
        changes.append(Change(
            type=BreakingChangeType.TYPE_CHANGED_KIND,
            message=f"`{old_type.name}` changed from {old_type.kind_phrase} to {new_type.kind_phrase}",
            resource_name=old_type.name,
            loc=new_type.loc,
            was_deprecated=old_type.deprecated,
        ))
    return changes


def find_fields_that_changed(old: SchemaModel, new: SchemaModel) -> List[Change]:
    """Removed fields and unsafe field type changes on Objects and Interfaces."""
    changes: List[Change] = []
    for old_type in old:
        new_type = new.get(old_type.name)
        if not _shares_field_bearing_kind(old_type, new_type):
            continue
        type_name = old_type.name
        for field_name, old_field in old_type.fields.items():
            new_field = new_type.fields.get(field_name)
            resource_name = f"{type_name}.{field_name}"
            if new_field is None:
                changes.append(Change(
                    type=BreakingChangeType.FIELD_REMOVED,
                    message=f"`{resource_name}` removed from schema",
                    resource_name=resource_name,
                    loc=old_field.loc,
                    was_deprecated=old_field.deprecated,
                ))
            elif not is_safe_output_change(old_field.type, new_field.type):
                changes.append(Change(
                    type=BreakingChangeType.FIELD_CHANGED_KIND,
                    message=(
                        f"Field `{resource_name}` changed type from "
                        f"`{old_field.type}` to `{new_field.type}`"
                    ),
                    resource_name=resource_name,
                    loc=new_field.loc,
                    was_deprecated=old_field.deprecated,
                ))
    return changes


def find_arg_changes(old: SchemaModel, new: SchemaModel) -> ChangeSet:
    """Argument removals, type changes, default changes and additions.

    Removal, type and default changes are keyed ``field.arg``; additions are
    keyed ``Type.field``.
    """
    result = ChangeSet()
    for old_type in old:
        new_type = new.get(old_type.name)
        if not _shares_field_bearing_kind(old_type, new_type):
            continue
        type_name = old_type.name
        for field_name, old_field in old_type.fields.items():
            new_field = new_type.fields.get(field_name)
            if new_field is None:
                continue

            for old_arg in old_field.args:
                new_arg = new_field.get_arg(old_arg.name)
                resource_name = f"{field_name}.{old_arg.name}"
                prefix = f"`{type_name}.{field_name}` arg `{old_arg.name}`"

                if new_arg is None:
                    # the arg node is gone, point at its field
                    result.breaking_changes.append(Change(
                        type=BreakingChangeType.ARG_REMOVED,
                        message=f"{prefix} removed from schema",
                        resource_name=resource_name,
                        loc=new_field.loc,
                        was_deprecated=old_arg.deprecated,
                    ))
                elif not is_safe_input_change(old_arg.type, new_arg.type):
                    became_required = (
                        isinstance(new_arg.type, NonNullRef)
                        and not isinstance(old_arg.type, NonNullRef)
                    )
                    result.breaking_changes.append(Change(
                        type=(
                            BreakingChangeType.ARG_BECAME_REQUIRED
                            if became_required
                            else BreakingChangeType.ARG_CHANGED_KIND
                        ),
                        message=f"{prefix} changed type from `{old_arg.type}` to `{new_arg.type}`",
                        resource_name=resource_name,
                        loc=new_arg.loc,
                        was_deprecated=old_arg.deprecated,
                        was_required_by_directive=old_arg.required_by_directive,
                    ))
                elif old_arg.has_default and not is_default_value_equal(
                    old_arg.default_value, new_arg.default_value
                ):
                    result.dangerous_changes.append(Change(
                        type=DangerousChangeType.ARG_DEFAULT_VALUE_CHANGE,
                        message=f"{prefix} has changed defaultValue",
                        resource_name=resource_name,
                        loc=new_arg.loc,
                        was_deprecated=old_arg.deprecated,
                    ))

            for new_arg in new_field.args:
                if old_field.get_arg(new_arg.name) is not None:
                    continue
                resource_name = f"{type_name}.{field_name}"
                if new_arg.is_required:
                    change_type = BreakingChangeType.REQUIRED_ARG_ADDED
                    target = result.breaking_changes
                    article = "A required"
                else:
                    change_type = DangerousChangeType.OPTIONAL_ARG_ADDED
                    target = result.dangerous_changes
                    article = "An optional"
                target.append(Change(
                    type=change_type,
                    message=f"{article} arg `{new_arg.name}` on `{resource_name}` was added",
                    resource_name=resource_name,
                    loc=new_arg.loc,
                    was_deprecated=old_field.deprecated,
                ))
    return result


def find_values_removed_from_enums(old: SchemaModel, new: SchemaModel) -> List[Change]:
    changes: List[Change] = []
    for old_type in old:
        new_type = new.get(old_type.name)
        if old_type.kind is not TypeKind.ENUM or new_type is None or new_type.kind is not TypeKind.ENUM:
            continue
        new_value_names = {value.name for value in new_type.values}
        for value in old_type.values:
            if value.name in new_value_names:
                continue
            changes.append(Change(
                type=BreakingChangeType.VALUE_REMOVED_FROM_ENUM,
                message=f"Value `{value.name}` removed from enum `{old_type.name}`",
                resource_name=f"{old_type.name}.{value.name}",
                loc=new_type.loc,
                was_deprecated=value.deprecated,
            ))
    return changes


def detect_breaking_changes(old: SchemaModel, new: SchemaModel) -> ChangeSet:
    """Run every pass and concatenate results.

    Breaking: removed types, kind changes, field changes, argument changes,
    removed enum values. Dangerous: argument changes only.
    """
    arg_changes = find_arg_changes(old, new)
    removed_types = find_removed_types(old, new)
    changed_kinds = find_types_that_changed_kind(old, new)
    changed_fields = find_fields_that_changed(old, new)
    removed_values = find_values_removed_from_enums(old, new)

    logger.debug(
        "types removed=%d, kind changes=%d, field changes=%d, arg changes=%d/%d, enum values removed=%d",
        len(removed_types),
        len(changed_kinds),
        len(changed_fields),
        len(arg_changes.breaking_changes),
        len(arg_changes.dangerous_changes),
        len(removed_values),
    )

    return ChangeSet(
        breaking_changes=[
            *removed_types,
            *changed_kinds,
            *changed_fields,
            *arg_changes.breaking_changes,
            *removed_values,
        ],
        dangerous_changes=list(arg_changes.dangerous_changes),
    )
