"""Group tool handlers.

Handles:
- list_groups: All business groups
- search_groups_by_name: Groups matching a name, with their interfaces
"""

from typing import Any

from ...models import ToolResult
from .base import HandlerContext, json_result


async def handle_list_groups(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    return json_result(ctx.query.list_groups(), params)


async def handle_search_groups_by_name(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Search groups by name fragment; each match carries its interfaces.

    Args:
        params: Dict containing:
            - name: Group name fragment. Empty matches nothing.
    """
    return json_result(ctx.query.groups_by_name_contains(params.get("name", "")), params)
