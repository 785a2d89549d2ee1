"""Request models (Pydantic *Params classes) for NEI MCP Server."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ============ CORE REQUEST MODELS ============


class MCPRequest(BaseModel):
    """Tool execution request for the REST endpoint."""

    tool: str = Field(..., description="The NEI tool to execute")
    params: dict[str, Any] = Field(default_factory=dict, description="Tool parameters")


# ============ TOOL PARAMS ============


class SearchInterfacesParams(BaseModel):
    """Parameters for search_interfaces tool. All criteria are optional and combined with AND."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, description="Interface name fragment")
    respo: str | None = Field(default=None, description="Responsible developer real name fragment")
    group_name: str | None = Field(
        default=None, alias="groupName", description="Group name fragment"
    )
    limit: int | None = Field(default=None, ge=1, description="Maximum results to return")


class DatatypeIdParams(BaseModel):
    """Parameters for get_datatype_by_id tool."""

    id: int = Field(..., description="Datatype ID")


class ListDatatypesParams(BaseModel):
    """Parameters for list_datatypes tool."""

    include_system: bool = Field(
        default=False, description="Include built-in system types"
    )


class DatatypeNameParams(BaseModel):
    """Parameters for get_datatype_by_name tool."""

    name: str = Field(default="", description="Datatype name, matched exactly ignoring case")
