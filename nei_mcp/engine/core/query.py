"""Lookups over a normalized project cache.

All matching is case-insensitive substring containment ("fuzzy" in tool
descriptions). Lookups that find nothing return an empty list or None.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ...models.resource import Developer, GroupRecord, InterfaceRecord
from .normalize import is_system_type
from .project import ProjectCache

logger = logging.getLogger(__name__)

# Label used when an interface's group or owner cannot be resolved
UNKNOWN_LABEL = "unknown"


def contains(haystack: str | None, needle: Any) -> bool:
    """Case-insensitive substring test; a missing haystack never matches."""
    if not haystack:
        return False
    return str(needle).lower() in haystack.lower()


def summarize_datatype(datatype: Mapping[str, Any]) -> dict[str, Any]:
    """Compact datatype summary for listings."""
    summary = {"id": datatype.get("id"), "name": datatype.get("name")}
    for field in ("description", "tag"):
        if datatype.get(field) is not None:
            summary[field] = datatype[field]
    summary["fieldCount"] = len(datatype.get("params") or [])
    return summary


class ProjectQuery:
    """Read-only queries over one ProjectCache.

    Attributes:
        cache: The project snapshot being queried
    """

    def __init__(self, cache: ProjectCache):
        self.cache = cache

    # ============ INTERFACES ============

    def interfaces_by_uri_contains(self, fragment: str | None) -> list[InterfaceRecord]:
        """Interfaces whose path contains `fragment`. Empty fragment matches nothing."""
        if not fragment:
            return []
        return [itf for itf in self.cache.interfaces if contains(itf.path, fragment)]

    def interfaces_by_name_contains(self, fragment: str | None) -> list[InterfaceRecord]:
        """Interfaces whose name contains `fragment`. Empty fragment matches nothing."""
        if not fragment:
            return []
        return [itf for itf in self.cache.interfaces if contains(itf.name, fragment)]

    def interface_by_uri(self, uri: str | None) -> InterfaceRecord | None:
        """First interface whose path contains `uri`."""
        if not uri:
            return None
        return next((itf for itf in self.cache.interfaces if contains(itf.path, uri)), None)

    def search_interfaces(
        self,
        name: str | None = None,
        respo: str | None = None,
        group_name: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Filter interfaces by name, owner and group, all criteria combined.

        `respo` and `group_name` are first resolved to ids by substring match
        on developer real names and group names. A criterion that resolves to
        nothing yields an empty result rather than being ignored.

        Returns:
            Interface dicts annotated with `groupName` and `respoName`
        """
        candidates: Iterable[InterfaceRecord] = self.cache.interfaces

        if name:
            candidates = [itf for itf in candidates if contains(itf.name, name)]

        if respo:
            respo_ids = {dev.id for dev in self.cache.developers if contains(dev.realname, respo)}
            if not respo_ids:
                logger.debug(f"search_interfaces: no developer matches '{respo}'")
                return []
            candidates = [itf for itf in candidates if itf.respo.id in respo_ids]

        if group_name:
            group_ids = {g.id for g in self.cache.groups if contains(g.name, group_name)}
            if not group_ids:
                logger.debug(f"search_interfaces: no group matches '{group_name}'")
                return []
            candidates = [itf for itf in candidates if itf.group_id in group_ids]

        group_names = {g.id: g.name for g in self.cache.groups}
        developer_names = {dev.id: dev.realname for dev in self.cache.developers}

        results = []
        for itf in candidates:
            if limit is not None and len(results) >= limit:
                break
            item = itf.to_json()
            item["groupName"] = group_names.get(itf.group_id) or UNKNOWN_LABEL
            item["respoName"] = (
                developer_names.get(itf.respo.id) or itf.respo.realname or UNKNOWN_LABEL
            )
            results.append(item)
        return results

    # ============ GROUPS ============

    def list_groups(self) -> list[GroupRecord]:
        return list(self.cache.groups)

    def groups_by_name_contains(self, fragment: str | None) -> list[dict[str, Any]]:
        """Groups whose name contains `fragment`, each with its interfaces attached."""
        if not fragment:
            return []
        results = []
        for group in self.cache.groups:
            if not contains(group.name, fragment):
                continue
            item = group.to_json()
            item["interfaces"] = [
                itf.to_json() for itf in self.cache.interfaces_by_group.get(group.id, ())
            ]
            results.append(item)
        return results

    # ============ DATATYPES ============

    def list_datatypes(self, include_system: bool = False) -> list[dict[str, Any]]:
        """Compact summaries of the project's datatypes."""
        return [
            summarize_datatype(dt)
            for dt in self.cache.datatypes
            if include_system or not is_system_type(dt)
        ]

    def datatype_by_id(self, datatype_id: Any) -> Mapping[str, Any] | None:
        if datatype_id is None:
            return None
        wanted = str(datatype_id)
        return next((dt for dt in self.cache.datatypes if str(dt.get("id")) == wanted), None)

    def datatype_by_name(self, name: str | None) -> Mapping[str, Any] | None:
        """First datatype whose name equals `name`, ignoring case."""
        if not name:
            return None
        wanted = name.lower()
        return next(
            (dt for dt in self.cache.datatypes if str(dt.get("name", "")).lower() == wanted),
            None,
        )

    # ============ DEVELOPERS ============

    def list_developers(self) -> list[Developer]:
        return list(self.cache.developers)
