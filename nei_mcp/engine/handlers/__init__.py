"""Tool handlers for the NEI engine.

This package contains tool handlers organized by domain:
- project: Sync and developer listing
- interfaces: Interface searches and table field synthesis
- groups: Group listing and search
- datatypes: Datatype listing and lookup

Each handler is a standalone async function that takes:
- params: dict[str, Any] - Tool parameters from MCP call
- ctx: HandlerContext - Shared engine context (project key, store, cache, query)

And returns:
- ToolResult with data, input_tokens, output_tokens
"""

from .base import HandlerContext, HandlerFunc, count_tokens, json_result
from .datatypes import (
    handle_get_datatype_by_id,
    handle_get_datatype_by_name,
    handle_list_datatypes,
)
from .groups import handle_list_groups, handle_search_groups_by_name
from .interfaces import (
    handle_get_interface_by_uri,
    handle_get_table_fields,
    handle_search_interfaces,
    handle_search_interfaces_by_name,
    handle_search_interfaces_by_uri,
)
from .project import handle_list_developers, handle_sync_project

__all__ = [
    # Base
    "HandlerContext",
    "HandlerFunc",
    "count_tokens",
    "json_result",
    # Project handlers
    "handle_sync_project",
    "handle_list_developers",
    # Interface handlers
    "handle_search_interfaces_by_uri",
    "handle_search_interfaces_by_name",
    "handle_get_interface_by_uri",
    "handle_search_interfaces",
    "handle_get_table_fields",
    # Group handlers
    "handle_list_groups",
    "handle_search_groups_by_name",
    # Datatype handlers
    "handle_list_datatypes",
    "handle_get_datatype_by_id",
    "handle_get_datatype_by_name",
]
