"""Table field descriptor model (ProTable columns and search fields)."""

from pydantic import Field

from .enums import ValueType
from .resource import NeiRecord


class TableFieldDescriptor(NeiRecord):
    """A UI-table column / search-form field descriptor."""

    data_index: str = Field(..., description="Field name used as column key")
    value_type: ValueType = Field(default=ValueType.TEXT, description="UI value kind")
    title: str = Field(..., description="Human-readable column title")
    hide_in_search: bool | None = Field(default=None, description="Column only, no search field")
    hide_in_table: bool | None = Field(default=None, description="Search field only, no column")
    value_enum: dict[str, str] | None = Field(
        default=None, description="Enum value -> label, set for select fields"
    )
