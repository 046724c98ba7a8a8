"""Type-compatibility rules and default-value equality."""

import math
from typing import Any

from .model import ListRef, NamedRef, NonNullRef, TypeReference


def is_safe_output_change(old_type: TypeReference, new_type: TypeReference) -> bool:
    """Whether a field's type may change from ``old_type`` to ``new_type``.

    Output positions may only gain non-null wrappers; the list structure and
    the named type at the core must stay the same.
    """
    if isinstance(old_type, ListRef):
        return (
            # both lists: compare the item types
            (isinstance(new_type, ListRef)
             and is_safe_output_change(old_type.of_type, new_type.of_type))
            # nullable -> non-null of the same list is safe
            or (isinstance(new_type, NonNullRef)
                and is_safe_output_change(old_type, new_type.of_type))
        )
    if isinstance(old_type, NonNullRef):
        return (
            isinstance(new_type, NonNullRef)
            and is_safe_output_change(old_type.of_type, new_type.of_type)
        )
    if isinstance(old_type, NamedRef):
        return (
            (isinstance(new_type, NamedRef) and old_type.name == new_type.name)
            or (isinstance(new_type, NonNullRef)
                and is_safe_output_change(old_type, new_type.of_type))
        )
    return False


def is_safe_input_change(old_type: TypeReference, new_type: TypeReference) -> bool:
    """Whether an argument's type may change from ``old_type`` to ``new_type``.

    Input positions may drop non-null wrappers but never add them.
    """
    if isinstance(old_type, ListRef):
        return (
            isinstance(new_type, ListRef)
            and is_safe_input_change(old_type.of_type, new_type.of_type)
        )
    if isinstance(old_type, NonNullRef):
        return (
            (isinstance(new_type, NonNullRef)
             and is_safe_input_change(old_type.of_type, new_type.of_type))
            # non-null -> nullable of the same type is safe
            or (not isinstance(new_type, NonNullRef)
                and is_safe_input_change(old_type.of_type, new_type))
        )
    if isinstance(old_type, NamedRef):
        return isinstance(new_type, NamedRef) and old_type.name == new_type.name
    return False


def is_default_value_equal(old_value: Any, new_value: Any) -> bool:
    """Structural equality for literal default values.

    Lists compare element-wise in order, objects by key set and values,
    scalars by value. NaN equals NaN; booleans never equal numbers.
    """
    if old_value is None or new_value is None:
        return old_value is None and new_value is None
    if isinstance(old_value, bool) or isinstance(new_value, bool):
        return isinstance(old_value, bool) and isinstance(new_value, bool) and old_value == new_value
    if isinstance(old_value, (list, tuple)) and isinstance(new_value, (list, tuple)):
        return len(old_value) == len(new_value) and all(
            is_default_value_equal(old_item, new_item)
            for old_item, new_item in zip(old_value, new_value)
        )
    if isinstance(old_value, dict) and isinstance(new_value, dict):
        return old_value.keys() == new_value.keys() and all(
            is_default_value_equal(old_value[key], new_value[key]) for key in old_value
        )
    if isinstance(old_value, (int, float)) and isinstance(new_value, (int, float)):
        if isinstance(old_value, float) and isinstance(new_value, float):
            if math.isnan(old_value) and math.isnan(new_value):
                return True
        return old_value == new_value
    if type(old_value) is not type(new_value):
        return False
    return old_value == new_value
