"""Pydantic models for NEI MCP Server.

This module re-exports all models. Import from submodules directly for
cleaner imports:

    from nei_mcp.models.enums import ToolName
    from nei_mcp.models.resource import InterfaceRecord
"""

# ============ ENUMS ============
from .enums import ExpansionPolicy, ToolName, ValueType

# ============ REQUEST MODELS ============
from .requests import (
    DatatypeIdParams,
    DatatypeNameParams,
    ListDatatypesParams,
    MCPRequest,
    SearchInterfacesParams,
)

# ============ RESOURCE MODELS ============
from .resource import (
    DatatypeRef,
    Developer,
    GroupRecord,
    InterfaceRecord,
    NeiRecord,
    ParameterSpec,
    UserRef,
)

# ============ RESPONSE MODELS ============
from .responses import (
    HealthResponse,
    MCPResponse,
    ReadyResponse,
    ToolResult,
    UsageInfo,
)
from .table import TableFieldDescriptor

__all__ = [
    # Enums
    "ExpansionPolicy",
    "ToolName",
    "ValueType",
    # Requests
    "MCPRequest",
    "SearchInterfacesParams",
    "DatatypeIdParams",
    "DatatypeNameParams",
    "ListDatatypesParams",
    # Resources
    "NeiRecord",
    "UserRef",
    "ParameterSpec",
    "DatatypeRef",
    "InterfaceRecord",
    "GroupRecord",
    "Developer",
    # Table
    "TableFieldDescriptor",
    # Responses
    "ToolResult",
    "UsageInfo",
    "MCPResponse",
    "HealthResponse",
    "ReadyResponse",
]
