"""MCP HTTP transport: JSON-RPC 2.0 over POST /mcp.

Supports initialize, ping, tools/list and tools/call, single and batch
requests. Notifications (requests without an id) get no response.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from . import __version__
from .api.deps import get_engine, sanitize_error_message
from .engine import NeiEngine
from .errors import InvalidParams, UnknownTool
from .mcp import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    PROTOCOL_VERSION,
    SERVER_ERROR,
    build_tool_definitions,
    jsonrpc_error,
    jsonrpc_response,
    tool_content,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["MCP"])

SERVER_NAME = "nei-mcp-server"


def list_tools(engine: NeiEngine) -> list[dict]:
    """Tool definitions reflecting the groups of the resident cache."""
    cache = engine.cache
    group_names = [group.name for group in cache.groups] if cache else []
    return build_tool_definitions(group_names)


async def call_tool(id: Any, params: dict, engine: NeiEngine) -> dict:
    """Handle MCP tools/call request."""
    tool_name = params.get("name")
    arguments = params.get("arguments") or {}

    if not tool_name:
        return jsonrpc_error(id, INVALID_PARAMS, "Missing tool name")
    if not isinstance(arguments, dict):
        return jsonrpc_error(id, INVALID_PARAMS, "Tool arguments must be an object")

    try:
        result = await engine.execute(tool_name, arguments)
    except (UnknownTool, InvalidParams) as e:
        return jsonrpc_error(id, INVALID_PARAMS, str(e))
    except Exception as e:
        return jsonrpc_error(id, SERVER_ERROR, sanitize_error_message(e))

    return jsonrpc_response(id, tool_content(result.data, is_error=result.is_error))


async def handle_request(body: Any, engine: NeiEngine) -> dict | None:
    """Handle a single JSON-RPC request."""
    if not isinstance(body, dict):
        return jsonrpc_error(None, INVALID_REQUEST, "Invalid request")

    method = body.get("method")
    id = body.get("id")
    params = body.get("params") or {}

    if id is None:  # Notification - no response
        return None

    if method == "initialize":
        return jsonrpc_response(
            id,
            {
                "protocolVersion": PROTOCOL_VERSION,
                "serverInfo": {"name": SERVER_NAME, "version": __version__},
                "capabilities": {"tools": {}},
            },
        )
    elif method == "tools/list":
        return jsonrpc_response(id, {"tools": list_tools(engine)})
    elif method == "tools/call":
        if not isinstance(params, dict):
            return jsonrpc_error(id, INVALID_PARAMS, "Params must be an object")
        return await call_tool(id, params, engine)
    elif method == "ping":
        return jsonrpc_response(id, {})
    else:
        return jsonrpc_error(id, METHOD_NOT_FOUND, f"Method not found: {method}")


@router.post("/mcp")
async def mcp_endpoint(
    request: Request,
    engine: Annotated[NeiEngine, Depends(get_engine)],
):
    """MCP JSON-RPC endpoint."""
    try:
        body = await request.json()
    except ValueError:
        return JSONResponse(jsonrpc_error(None, PARSE_ERROR, "Parse error"), status_code=400)

    # Handle batch requests
    if isinstance(body, list):
        responses = []
        for req in body:
            resp = await handle_request(req, engine)
            if resp:  # Skip notifications (no id)
                responses.append(resp)
        return JSONResponse(responses) if responses else Response(status_code=204)

    # Handle single request
    response = await handle_request(body, engine)
    return JSONResponse(response) if response else Response(status_code=204)
