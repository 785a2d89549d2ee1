"""Interface tool handlers.

Handles:
- search_interfaces_by_uri: Fuzzy search on interface path
- search_interfaces_by_name: Fuzzy search on interface name
- get_interface_by_uri: First interface whose path matches
- search_interfaces: Combined filter on name, owner and group
- get_table_fields: Table column / search field descriptors for a list interface
"""

from typing import Any

from ...models import SearchInterfacesParams, ToolResult
from ..core.table_fields import derive_table_fields
from .base import HandlerContext, json_result


async def handle_search_interfaces_by_uri(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Search interfaces by path fragment.

    Args:
        params: Dict containing:
            - uri: Path fragment, case-insensitive. Empty matches nothing.
    """
    return json_result(ctx.query.interfaces_by_uri_contains(params.get("uri", "")), params)


async def handle_search_interfaces_by_name(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Search interfaces by name fragment.

    Args:
        params: Dict containing:
            - name: Name fragment, case-insensitive. Empty matches nothing.
    """
    return json_result(ctx.query.interfaces_by_name_contains(params.get("name", "")), params)


async def handle_get_interface_by_uri(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Return the first interface whose path contains `uri`, or null."""
    return json_result(ctx.query.interface_by_uri(params.get("uri", "")), params)


async def handle_search_interfaces(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Filter interfaces by name, responsible developer and group.

    Args:
        params: Dict containing (all optional, combined with AND):
            - name: Interface name fragment
            - respo: Responsible developer real name fragment
            - groupName: Group name fragment
            - limit: Maximum results

    Raises:
        ValidationError: If a parameter has the wrong type
    """
    search = SearchInterfacesParams.model_validate(params)
    return json_result(
        ctx.query.search_interfaces(
            name=search.name,
            respo=search.respo,
            group_name=search.group_name,
            limit=search.limit,
        ),
        params,
    )


async def handle_get_table_fields(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Derive ProTable field descriptors for the interface matching `uri`.

    Args:
        params: Dict containing:
            - uri: Interface path fragment (first match is used)
    """
    return json_result(derive_table_fields(ctx.query, params.get("uri", "")), params)
