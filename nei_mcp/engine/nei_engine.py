"""NEI engine: dispatches tool calls to handlers over the project cache."""

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from ..errors import InvalidParams, NeiError, UnknownTool
from ..models import ToolName, ToolResult
from .core.project import ProjectCache
from .core.query import ProjectQuery
from .handlers import (
    HandlerContext,
    HandlerFunc,
    handle_get_datatype_by_id,
    handle_get_datatype_by_name,
    handle_get_interface_by_uri,
    handle_get_table_fields,
    handle_list_datatypes,
    handle_list_developers,
    handle_list_groups,
    handle_search_groups_by_name,
    handle_search_interfaces,
    handle_search_interfaces_by_name,
    handle_search_interfaces_by_uri,
    handle_sync_project,
)

if TYPE_CHECKING:
    from ..services.project_cache import ProjectCacheStore

logger = logging.getLogger(__name__)

TOOL_HANDLERS: dict[ToolName, HandlerFunc] = {
    ToolName.SYNC_NEI_PROJECT: handle_sync_project,
    ToolName.SEARCH_INTERFACES_BY_URI: handle_search_interfaces_by_uri,
    ToolName.SEARCH_INTERFACES_BY_NAME: handle_search_interfaces_by_name,
    ToolName.GET_INTERFACE_BY_URI: handle_get_interface_by_uri,
    ToolName.SEARCH_INTERFACES: handle_search_interfaces,
    ToolName.LIST_GROUPS: handle_list_groups,
    ToolName.SEARCH_GROUPS_BY_NAME: handle_search_groups_by_name,
    ToolName.LIST_DATATYPES: handle_list_datatypes,
    ToolName.GET_DATATYPE_BY_ID: handle_get_datatype_by_id,
    ToolName.GET_DATATYPE_BY_NAME: handle_get_datatype_by_name,
    ToolName.GET_TABLE_FIELDS: handle_get_table_fields,
    ToolName.LIST_DEVELOPERS: handle_list_developers,
}

# Tools that do not need the cache loaded before they run
CACHE_FREE_TOOLS = frozenset({ToolName.SYNC_NEI_PROJECT})


def _validation_message(error: ValidationError) -> str:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'params'}: {err['msg']}"
        for err in error.errors()
    )
    return f"Invalid parameter: {problems}"


class NeiEngine:
    """Executes NEI tools for one project.

    Attributes:
        store: Cache store shared by all engines of the process
        project_key: NEI project key this engine serves
    """

    def __init__(self, store: "ProjectCacheStore", project_key: str):
        self.store = store
        self.project_key = project_key

    @property
    def cache(self) -> ProjectCache | None:
        """The resident cache, without triggering a load."""
        return self.store.get(self.project_key)

    async def load(self) -> ProjectCache:
        """Load the project cache (memory, snapshot, then network)."""
        return await self.store.load(self.project_key)

    async def execute(self, tool: ToolName | str, params: dict[str, Any] | None = None) -> ToolResult:
        """Execute a tool.

        Sync failures are returned as error results; other exceptions
        propagate to the caller.

        Raises:
            UnknownTool: If the tool name is unknown
            InvalidParams: If the tool arguments fail validation
        """
        try:
            tool = ToolName(tool)
        except ValueError:
            raise UnknownTool(str(tool)) from None

        params = params or {}
        handler = TOOL_HANDLERS[tool]
        ctx = HandlerContext(project_key=self.project_key, store=self.store)

        try:
            if tool not in CACHE_FREE_TOOLS:
                ctx.query = ProjectQuery(await self.load())
            return await handler(params, ctx)
        except NeiError as e:
            logger.error(f"{tool.value} failed: {e}")
            return ToolResult(data={"error": str(e)}, is_error=True)
        except ValidationError as e:
            message = _validation_message(e)
            logger.info(f"{tool.value} rejected: {message}")
            raise InvalidParams(message) from e
