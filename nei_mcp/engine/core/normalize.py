"""Resource normalization: raw NEI project document -> ProjectCache.

The raw document is large and loosely typed. Normalization projects it
down to compact records, resolves parameter type references against the
project's datatypes, and indexes interfaces by group. No I/O happens here.

Input is expected to be sanitized already (see sanitize.clean).
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from types import MappingProxyType
from typing import Any

import httpx

from ...models.enums import ExpansionPolicy
from ...models.resource import (
    DatatypeRef,
    Developer,
    GroupRecord,
    InterfaceRecord,
    ParameterSpec,
    UserRef,
)
from .project import ProjectCache, freeze

logger = logging.getLogger(__name__)

# Tag NEI puts on built-in primitive types (String, Number, ...)
SYSTEM_TYPE_TAG = "系统类型"

# Top-level keys that normalization replaces; everything else passes through
NORMALIZED_KEYS = ("datatypes", "interfaces", "groups", "project")


def _text(value: Any) -> str | None:
    """Coerce a scalar to str, keeping None."""
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def is_system_type(datatype: Mapping[str, Any]) -> bool:
    """Whether a datatype is an NEI built-in primitive."""
    return datatype.get("tag") == SYSTEM_TYPE_TAG


class DatatypeResolver:
    """Resolves parameter type references against a project's datatypes.

    Attributes:
        policy: How referenced datatypes are expanded
    """

    def __init__(
        self,
        datatypes: Iterable[Mapping[str, Any]],
        policy: ExpansionPolicy = ExpansionPolicy.MULTI_FIELD,
    ):
        self.policy = policy
        # Keys compared as strings so numeric and string ids resolve alike
        self._index: dict[str, Mapping[str, Any]] = {
            str(dt["id"]): dt for dt in datatypes if dt.get("id") is not None
        }

    def lookup(self, type_id: Any) -> Mapping[str, Any] | None:
        """Find a datatype by id."""
        if type_id is None:
            return None
        return self._index.get(str(type_id))

    def parameter(
        self,
        param: Mapping[str, Any],
        path: frozenset[str] | None = frozenset(),
    ) -> ParameterSpec:
        """Build a ParameterSpec from a raw parameter.

        Args:
            param: Raw NEI parameter
            path: Ids of datatypes being expanded above this parameter.
                None builds a shallow parameter without a type reference.
        """
        return ParameterSpec(
            name=_text(param.get("name")),
            description=_text(param.get("description")),
            is_array=param.get("isArray") == 1,
            type_name=_text(param.get("typeName")),
            default_value=_text(param.get("defaultValue")),
            type_ref=self.resolve(param, path) if path is not None else None,
        )

    def resolve(
        self, param: Mapping[str, Any], path: frozenset[str] = frozenset()
    ) -> DatatypeRef | None:
        """Resolve the custom datatype a parameter is declared with.

        Returns None when the parameter has no type, when the type is a
        system type, or when the referenced datatype is missing from the
        project (treated as unavailable metadata, not an error).
        """
        type_id = param.get("type", param.get("datatypeId"))
        if type_id is None:
            return None

        datatype = self.lookup(type_id)
        if datatype is None:
            logger.debug(
                f"Parameter '{param.get('name')}' references unknown datatype {type_id}, skipping"
            )
            return None
        if is_system_type(datatype):
            return None

        return DatatypeRef(
            id=datatype["id"],
            name=_text(datatype.get("name")),
            params=self._expand(datatype, path),
        )

    def _expand(
        self, datatype: Mapping[str, Any], path: frozenset[str]
    ) -> tuple[ParameterSpec, ...] | None:
        params = datatype.get("params") or []

        if self.policy is ExpansionPolicy.RECURSIVE:
            datatype_id = str(datatype["id"])
            # Self-referencing datatypes (trees) stop at the first repeat
            if not params or datatype_id in path:
                return None
            nested = path | {datatype_id}
            return tuple(self.parameter(p, nested) for p in params)

        # Single-field datatypes are aliases and stay unexpanded
        if len(params) > 1:
            return tuple(self.parameter(p, None) for p in params)
        return None


def build_detail_url(base_url: str, project_id: Any, interface_id: Any) -> str:
    """Build the NEI web page URL for an interface.

    Query parameters are merged into whatever the base URL already carries.
    """
    params: dict[str, Any] = {}
    if project_id is not None:
        params["pid"] = project_id
    params["id"] = interface_id
    return str(httpx.URL(base_url).copy_merge_params(params))


def _user_ref(user: Any) -> UserRef:
    if not isinstance(user, Mapping):
        return UserRef()
    return UserRef(id=user.get("id"), realname=_text(user.get("realname")))


def normalize_interface(
    itf: Mapping[str, Any],
    resolver: DatatypeResolver,
    project_id: Any = None,
    detail_base_url: str | None = None,
) -> InterfaceRecord:
    """Project a raw interface down to an InterfaceRecord."""
    params = itf.get("params") or {}
    return InterfaceRecord(
        id=itf["id"],
        name=_text(itf.get("name")),
        path=_text(itf.get("path")),
        method=_text(itf.get("method")),
        group_id=itf.get("groupId"),
        respo=_user_ref(itf.get("respo")),
        creator=_user_ref(itf.get("creator")),
        inputs=tuple(resolver.parameter(p) for p in params.get("inputs") or []),
        outputs=tuple(resolver.parameter(p) for p in params.get("outputs") or []),
        detail_url=(
            build_detail_url(detail_base_url, project_id, itf["id"]) if detail_base_url else None
        ),
    )


def group_interfaces(
    interfaces: Iterable[InterfaceRecord],
) -> Mapping[int | None, tuple[InterfaceRecord, ...]]:
    """Partition interfaces by groupId, keeping source order within each group."""
    grouped: dict[int | None, list[InterfaceRecord]] = {}
    for itf in interfaces:
        grouped.setdefault(itf.group_id, []).append(itf)
    return MappingProxyType({group_id: tuple(items) for group_id, items in grouped.items()})


def collect_developers(
    project: Mapping[str, Any], interfaces: Iterable[Mapping[str, Any]]
) -> tuple[Developer, ...]:
    """Collect project members and interface owners, first occurrence wins."""
    developers: dict[str, Developer] = {}

    def add(user: Any) -> None:
        if not isinstance(user, Mapping) or user.get("id") is None:
            return
        key = str(user["id"])
        if key not in developers:
            developers[key] = Developer(
                id=user["id"],
                realname=_text(user.get("realname")),
                username=_text(user.get("username")),
                email=_text(user.get("email")),
            )

    for member in project.get("members") or []:
        add(member)
    for itf in interfaces:
        add(itf.get("respo"))
        add(itf.get("creator"))

    return tuple(developers.values())


def _records(raw: Mapping[str, Any], name: str) -> list[Mapping[str, Any]]:
    """Top-level list of dicts, dropping entries without an id."""
    items = raw.get(name) or []
    records = [item for item in items if isinstance(item, Mapping) and item.get("id") is not None]
    if len(records) != len(items):
        logger.warning(f"Skipped {len(items) - len(records)} {name} without an id")
    return records


def normalize(
    raw: Mapping[str, Any],
    *,
    key: str,
    expansion_policy: ExpansionPolicy = ExpansionPolicy.MULTI_FIELD,
    detail_base_url: str | None = None,
    synced_at: datetime | None = None,
) -> ProjectCache:
    """Normalize a sanitized NEI project resource document.

    Args:
        raw: Sanitized `result` object of the projectres API
        key: Project key the document belongs to
        expansion_policy: Datatype expansion policy for type references
        detail_base_url: Base URL for interface detail links (None to skip)
        synced_at: Fetch time (defaults to now)

    Returns:
        A new immutable ProjectCache
    """
    datatypes = tuple(freeze(dt) for dt in _records(raw, "datatypes"))
    raw_interfaces = _records(raw, "interfaces")
    project = raw.get("project") or {}

    resolver = DatatypeResolver(datatypes, expansion_policy)
    interfaces = tuple(
        normalize_interface(itf, resolver, project.get("id"), detail_base_url)
        for itf in raw_interfaces
    )
    groups = tuple(
        GroupRecord(
            id=group["id"],
            name=_text(group.get("name")),
            description=_text(group.get("description")),
        )
        for group in _records(raw, "groups")
    )

    optional: dict[str, Any] = {}
    if synced_at is not None:
        optional["synced_at"] = synced_at

    return ProjectCache(
        key=key,
        datatypes=datatypes,
        interfaces=interfaces,
        groups=groups,
        interfaces_by_group=group_interfaces(interfaces),
        developers=collect_developers(project, raw_interfaces),
        project=freeze(project),
        extras=freeze({k: v for k, v in raw.items() if k not in NORMALIZED_KEYS}),
        raw=freeze(raw),
        **optional,
    )
