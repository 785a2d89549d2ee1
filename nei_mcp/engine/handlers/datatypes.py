"""Datatype tool handlers.

Handles:
- list_datatypes: Compact summaries of custom (and optionally system) datatypes
- get_datatype_by_id: Full datatype definition by id
- get_datatype_by_name: Full datatype definition by exact name
"""

from typing import Any

from ...models import DatatypeIdParams, DatatypeNameParams, ListDatatypesParams, ToolResult
from .base import HandlerContext, json_result


async def handle_list_datatypes(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """List datatype summaries.

    Args:
        params: Dict containing:
            - include_system: Also list NEI built-in types (default False)
    """
    options = ListDatatypesParams.model_validate(params)
    return json_result(ctx.query.list_datatypes(include_system=options.include_system), params)


async def handle_get_datatype_by_id(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Return the datatype with the given id, or null.

    Raises:
        ValidationError: If `id` is missing or not an integer
    """
    lookup = DatatypeIdParams.model_validate(params)
    return json_result(ctx.query.datatype_by_id(lookup.id), params)


async def handle_get_datatype_by_name(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Return the datatype whose name matches exactly (ignoring case), or null.

    Raises:
        ValidationError: If `name` is not a string
    """
    lookup = DatatypeNameParams.model_validate(params)
    return json_result(ctx.query.datatype_by_name(lookup.name), params)
