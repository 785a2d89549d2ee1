"""Normalized NEI resource records.

These are the compact, query-optimized shapes produced from the raw
project resource document. Serialized with camelCase aliases and with
unset optional fields omitted.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class NeiRecord(BaseModel):
    """Base for all normalized records: frozen, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_json(self) -> dict[str, Any]:
        """Dump to a JSON-ready dict, omitting unset fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class UserRef(NeiRecord):
    """A user reduced to identity and display name."""

    id: int | None = None
    realname: str | None = None


class ParameterSpec(NeiRecord):
    """A request or response parameter."""

    name: str | None = None
    description: str | None = None
    is_array: bool = False
    type_name: str | None = None
    default_value: str | None = None
    # Only set when the declared type is a custom (non-system) datatype
    type_ref: "DatatypeRef | None" = None


class DatatypeRef(NeiRecord):
    """A reference to a custom datatype, optionally expanded."""

    id: int | str
    name: str | None = None
    params: tuple[ParameterSpec, ...] | None = None


class InterfaceRecord(NeiRecord):
    """An HTTP interface definition."""

    id: int
    name: str | None = None
    path: str | None = None
    method: str | None = None
    group_id: int | None = None
    respo: UserRef = Field(default_factory=UserRef)
    creator: UserRef = Field(default_factory=UserRef)
    inputs: tuple[ParameterSpec, ...] = ()
    outputs: tuple[ParameterSpec, ...] = ()
    detail_url: str | None = None


class GroupRecord(NeiRecord):
    """A business group owning zero or more interfaces."""

    id: int
    name: str | None = None
    description: str | None = None


class Developer(NeiRecord):
    """A project member or interface owner."""

    id: int
    realname: str | None = None
    username: str | None = None
    email: str | None = None


ParameterSpec.model_rebuild()
