"""Change category constants produced by schemaguard.

These constants prevent stringly-typed categories and are the values
consumers see in the ``type`` key of a rendered change.
"""

from enum import Enum


class BreakingChangeType(str, Enum):
    """Changes that can break existing clients."""

    FIELD_CHANGED_KIND = "FIELD_CHANGED_KIND"
    FIELD_REMOVED = "FIELD_REMOVED"
    TYPE_CHANGED_KIND = "TYPE_CHANGED_KIND"
    TYPE_REMOVED = "TYPE_REMOVED"
    VALUE_REMOVED_FROM_ENUM = "VALUE_REMOVED_FROM_ENUM"
    ARG_REMOVED = "ARG_REMOVED"
    ARG_CHANGED_KIND = "ARG_CHANGED_KIND"
    ARG_BECAME_REQUIRED = "ARG_BECAME_REQUIRED"
    REQUIRED_ARG_ADDED = "REQUIRED_ARG_ADDED"

    # Reserved: declared for consumers, not emitted by any pass yet
    INPUT_FIELD_BECAME_REQUIRED = "INPUT_FIELD_BECAME_REQUIRED"
    TYPE_REMOVED_FROM_UNION = "TYPE_REMOVED_FROM_UNION"
    REQUIRED_INPUT_FIELD_ADDED = "REQUIRED_INPUT_FIELD_ADDED"
    INTERFACE_REMOVED_FROM_OBJECT = "INTERFACE_REMOVED_FROM_OBJECT"
    DIRECTIVE_REMOVED = "DIRECTIVE_REMOVED"
    DIRECTIVE_ARG_REMOVED = "DIRECTIVE_ARG_REMOVED"
    DIRECTIVE_ARG_CHANGED_TYPE = "DIRECTIVE_ARG_CHANGED_TYPE"
    DIRECTIVE_LOCATION_REMOVED = "DIRECTIVE_LOCATION_REMOVED"
    REQUIRED_DIRECTIVE_ARG_ADDED = "REQUIRED_DIRECTIVE_ARG_ADDED"


class DangerousChangeType(str, Enum):
    """Changes unlikely to break clients but worth a human look."""

    ARG_DEFAULT_VALUE_CHANGE = "ARG_DEFAULT_VALUE_CHANGE"
    OPTIONAL_ARG_ADDED = "OPTIONAL_ARG_ADDED"

    # Reserved
    VALUE_ADDED_TO_ENUM = "VALUE_ADDED_TO_ENUM"
    INTERFACE_ADDED_TO_OBJECT = "INTERFACE_ADDED_TO_OBJECT"
    TYPE_ADDED_TO_UNION = "TYPE_ADDED_TO_UNION"
    OPTIONAL_INPUT_FIELD_ADDED = "OPTIONAL_INPUT_FIELD_ADDED"
