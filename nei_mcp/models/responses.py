"""Response models for NEI MCP Server."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ToolResult(BaseModel):
    """Result of executing a tool handler."""

    data: Any = Field(default=None, description="JSON-serializable tool output")
    input_tokens: int = Field(default=0, ge=0, description="Estimated tokens in the request")
    output_tokens: int = Field(default=0, ge=0, description="Estimated tokens in the response")
    is_error: bool = Field(default=False, description="Whether the tool failed")


class UsageInfo(BaseModel):
    """Usage information for a tool call."""

    input_tokens: int = Field(default=0, ge=0)
    output_tokens: int = Field(default=0, ge=0)
    latency_ms: int = Field(default=0, ge=0)


class MCPResponse(BaseModel):
    """Response of the REST tool endpoint."""

    success: bool = Field(..., description="Whether the tool succeeded")
    result: Any = Field(default=None, description="Tool output")
    error: str | None = Field(default=None, description="Error message if the tool failed")
    usage: UsageInfo = Field(default_factory=UsageInfo)


class HealthResponse(BaseModel):
    """Liveness check response."""

    status: str
    version: str
    timestamp: datetime


class ReadyResponse(BaseModel):
    """Readiness check response."""

    status: str
    version: str
    checks: dict[str, bool] = Field(default_factory=dict)
    synced_at: datetime | None = None
