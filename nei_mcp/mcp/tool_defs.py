"""MCP Tool Definitions for the NEI MCP Server.

This module contains the tool definitions returned by the tools/list method.
Each tool definition includes the schema for its input parameters.

Tool Categories:
    - Sync: sync_nei_project
    - Interfaces: search_interfaces_by_uri, search_interfaces_by_name,
      get_interface_by_uri, search_interfaces, get_table_fields
    - Groups: list_groups, search_groups_by_name
    - Datatypes: list_datatypes, get_datatype_by_id, get_datatype_by_name
    - Developers: list_developers
"""

import copy
from collections.abc import Iterable

from ..models import ToolName

SYNC_HINT = (
    f"If the result is empty, call `{ToolName.SYNC_NEI_PROJECT.value}` to fetch the latest "
    "data and try again."
)

_EMPTY_SCHEMA = {"type": "object", "properties": {}}

TOOL_DEFINITIONS: list[dict] = [
    # ============ Sync ============
    {
        "name": ToolName.SYNC_NEI_PROJECT.value,
        "description": (
            "Force a sync of the latest project data from the remote NEI platform and refresh "
            "the local cache. Use when local data may be stale or when recently changed "
            "interfaces or datatypes are needed. This triggers a network request: call it once "
            "when needed, not repeatedly."
        ),
        "inputSchema": _EMPTY_SCHEMA,
    },
    # ============ Interfaces ============
    {
        "name": ToolName.SEARCH_INTERFACES_BY_URI.value,
        "description": (
            "Fuzzy search NEI interfaces by URI (request path). Prefer this tool when the "
            f"interface path is known; paths are usually English. {SYNC_HINT}"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "uri": {"type": "string", "description": "Interface URI, fuzzy matched"},
            },
            "required": ["uri"],
        },
    },
    {
        "name": ToolName.SEARCH_INTERFACES_BY_NAME.value,
        "description": (
            "Fuzzy search NEI interfaces by business name. Prefer this tool when the "
            f"interface's purpose or business name is known. {SYNC_HINT}"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Interface name, fuzzy matched"},
            },
            "required": ["name"],
        },
    },
    {
        "name": ToolName.GET_INTERFACE_BY_URI.value,
        "description": (
            "Get the first NEI interface whose URI contains the given path, including its "
            f"input and output parameters. {SYNC_HINT}"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "uri": {"type": "string", "description": "Interface URI, fuzzy matched"},
            },
            "required": ["uri"],
        },
    },
    {
        "name": ToolName.SEARCH_INTERFACES.value,
        "description": (
            "Search NEI interfaces by any combination of name, responsible developer and "
            "group name. All criteria are fuzzy matched and combined with AND; a developer or "
            "group criterion that matches nothing returns an empty list."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Interface name fragment"},
                "respo": {
                    "type": "string",
                    "description": "Responsible developer's real name fragment",
                },
                "groupName": {"type": "string", "description": "Group name fragment"},
                "limit": {"type": "integer", "minimum": 1, "description": "Maximum results"},
            },
        },
    },
    {
        "name": ToolName.GET_TABLE_FIELDS.value,
        "description": (
            "Derive ProTable columns and search fields for a list interface: request "
            "parameters become search fields, fields of the list in the response become "
            "columns, and enum types become select fields with their options."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "uri": {"type": "string", "description": "Interface URI, fuzzy matched"},
            },
            "required": ["uri"],
        },
    },
    # ============ Groups ============
    {
        "name": ToolName.LIST_GROUPS.value,
        "description": "List all business groups of the NEI project.",
        "inputSchema": _EMPTY_SCHEMA,
    },
    {
        "name": ToolName.SEARCH_GROUPS_BY_NAME.value,
        "description": (
            "Search NEI business groups by name; each group is returned with its "
            f"interfaces. {SYNC_HINT}"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Group name, fuzzy matched"},
            },
            "required": ["name"],
        },
    },
    # ============ Datatypes ============
    {
        "name": ToolName.LIST_DATATYPES.value,
        "description": "List the datatypes (models and enums) defined in the NEI project.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "include_system": {
                    "type": "boolean",
                    "default": False,
                    "description": "Also list NEI built-in system types",
                },
            },
        },
    },
    {
        "name": ToolName.GET_DATATYPE_BY_ID.value,
        "description": "Get the full definition of an NEI datatype by id.",
        "inputSchema": {
            "type": "object",
            "properties": {"id": {"type": "integer", "description": "Datatype id"}},
            "required": ["id"],
        },
    },
    {
        "name": ToolName.GET_DATATYPE_BY_NAME.value,
        "description": "Get the full definition of an NEI datatype by exact name (case-insensitive).",
        "inputSchema": {
            "type": "object",
            "properties": {"name": {"type": "string", "description": "Datatype name"}},
            "required": ["name"],
        },
    },
    # ============ Developers ============
    {
        "name": ToolName.LIST_DEVELOPERS.value,
        "description": "List project members and interface owners (id and real name).",
        "inputSchema": _EMPTY_SCHEMA,
    },
]


def build_tool_definitions(group_names: Iterable[str] = ()) -> list[dict]:
    """Tool definitions with the group search schema bound to known groups.

    When group names are known, search_groups_by_name takes one of them as
    an enum; otherwise it accepts any string.
    """
    names = list(dict.fromkeys(name for name in group_names if name))
    if not names:
        return TOOL_DEFINITIONS

    definitions = copy.deepcopy(TOOL_DEFINITIONS)
    for definition in definitions:
        if definition["name"] == ToolName.SEARCH_GROUPS_BY_NAME.value:
            definition["description"] = (
                "Pick a business group from the predefined list; the group is returned "
                "with its interfaces."
            )
            definition["inputSchema"]["properties"]["name"] = {
                "type": "string",
                "enum": names,
                "description": "Group name, one of the predefined list",
            }
    return definitions
