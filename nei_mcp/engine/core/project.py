"""Project cache data structure.

A ProjectCache is the normalized, query-ready view of one NEI project.
It is built in one step by normalize() and never modified afterwards;
a resync builds a new instance.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any

from ...models.resource import Developer, GroupRecord, InterfaceRecord


def freeze(value: Any) -> Any:
    """Read-only deep copy: mappings become MappingProxyType, lists tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


@dataclass(frozen=True)
class ProjectCache:
    """Normalized view of an NEI project resource.

    Attributes:
        key: Project key this cache was built for
        datatypes: Sanitized raw datatypes (full detail, used for lookups)
        interfaces: Normalized interfaces in source order
        groups: Normalized groups in source order
        interfaces_by_group: groupId -> interfaces, built from `interfaces`
        developers: Project members and interface owners, deduplicated by id
        project: Sanitized raw project info
        extras: Other top-level fields of the source document, passed through
        raw: The sanitized source document, kept for the disk snapshot
        synced_at: When the source document was fetched
    """

    key: str
    datatypes: tuple[Mapping[str, Any], ...] = ()
    interfaces: tuple[InterfaceRecord, ...] = ()
    groups: tuple[GroupRecord, ...] = ()
    interfaces_by_group: Mapping[int | None, tuple[InterfaceRecord, ...]] = field(
        default_factory=dict
    )
    developers: tuple[Developer, ...] = ()
    project: Mapping[str, Any] = field(default_factory=dict)
    extras: Mapping[str, Any] = field(default_factory=dict)
    raw: Mapping[str, Any] = field(default_factory=dict)
    synced_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def project_id(self) -> Any:
        """NEI project id, if the document carries one."""
        return self.project.get("id")

    def stats(self) -> dict[str, int]:
        """Record counts, for logging and readiness output."""
        return {
            "interfaces": len(self.interfaces),
            "groups": len(self.groups),
            "datatypes": len(self.datatypes),
            "developers": len(self.developers),
        }
