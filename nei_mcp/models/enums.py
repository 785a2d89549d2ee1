"""Enumeration types for NEI MCP Server."""

from enum import StrEnum


class ToolName(StrEnum):
    """Available NEI tools."""

    SYNC_NEI_PROJECT = "sync_nei_project"
    SEARCH_INTERFACES_BY_URI = "search_interfaces_by_uri"
    SEARCH_INTERFACES_BY_NAME = "search_interfaces_by_name"
    GET_INTERFACE_BY_URI = "get_interface_by_uri"
    SEARCH_INTERFACES = "search_interfaces"
    LIST_GROUPS = "list_groups"
    SEARCH_GROUPS_BY_NAME = "search_groups_by_name"
    LIST_DATATYPES = "list_datatypes"
    GET_DATATYPE_BY_ID = "get_datatype_by_id"
    GET_DATATYPE_BY_NAME = "get_datatype_by_name"
    GET_TABLE_FIELDS = "get_table_fields"
    LIST_DEVELOPERS = "list_developers"


class ExpansionPolicy(StrEnum):
    """How referenced datatypes are expanded into parameter lists.

    MULTI_FIELD: expand only datatypes with more than one field, one level deep.
        Single-field datatypes are treated as aliases.
    RECURSIVE: expand every non-empty datatype, following nested references.
    """

    MULTI_FIELD = "multi_field"
    RECURSIVE = "recursive"


class ValueType(StrEnum):
    """Value kinds understood by the front-end table component."""

    TEXT = "text"
    DIGIT = "digit"
    SELECT = "select"
