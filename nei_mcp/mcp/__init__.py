"""MCP (Model Context Protocol) transport module.

This module contains components for the MCP HTTP transport:
- Tool definitions for tools/list
- JSON-RPC 2.0 helpers

The transport router lives in mcp_transport.py.
"""

from .jsonrpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    PROTOCOL_VERSION,
    SERVER_ERROR,
    jsonrpc_error,
    jsonrpc_response,
    tool_content,
)
from .tool_defs import TOOL_DEFINITIONS, build_tool_definitions

__all__ = [
    # Tool definitions
    "TOOL_DEFINITIONS",
    "build_tool_definitions",
    # JSON-RPC helpers
    "jsonrpc_response",
    "jsonrpc_error",
    "tool_content",
    "PROTOCOL_VERSION",
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    "SERVER_ERROR",
]
