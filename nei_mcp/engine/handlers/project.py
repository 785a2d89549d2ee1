"""Project tool handlers.

Handles:
- sync_nei_project: Force a refresh of the project cache from NEI
- list_developers: List project members and interface owners
"""

from typing import Any

from ...models import ToolResult
from .base import HandlerContext, json_result


async def handle_sync_project(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Fetch the project from NEI and replace the cached copy.

    Raises:
        SyncFailure: If the fetch fails; the previous cache stays in place
    """
    cache = await ctx.store.sync(ctx.project_key)
    return json_result(
        {
            "success": True,
            "message": "Project data synced and cached.",
            "project_key": cache.key,
            "synced_at": cache.synced_at.isoformat(),
            "counts": cache.stats(),
        },
        params,
    )


async def handle_list_developers(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """List developers (project members and interface owners)."""
    return json_result(ctx.query.list_developers(), params)
