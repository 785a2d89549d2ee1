"""Table field synthesis for list interfaces.

Derives ProTable column / search-form descriptors from an interface's
parameters. Inputs become search fields, the item fields of the list in
the response become table columns, and fields present in both are
emitted once. Enum-typed fields become select fields with their choices.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ...models.enums import ValueType
from ...models.resource import ParameterSpec
from ...models.table import TableFieldDescriptor
from .query import ProjectQuery

logger = logging.getLogger(__name__)

# Paging and sorting inputs that never become search fields
IGNORED_INPUTS = frozenset({"pagesize", "order", "orderasc", "pageindex", "total"})

# Output array names preferred as the table data source
LIST_OUTPUT_NAMES = ("list", "data")

BASE_TYPE_VALUE_TYPES: dict[str, ValueType] = {
    "string": ValueType.TEXT,
    "boolean": ValueType.TEXT,
    "guid": ValueType.TEXT,
    "int": ValueType.DIGIT,
    "number": ValueType.DIGIT,
    "long": ValueType.DIGIT,
}

# Descriptions at least this long are prose, not labels
MAX_TITLE_LENGTH = 10


def is_enum_type_name(type_name: str | None) -> bool:
    """Whether a declared type name denotes an enum datatype."""
    return bool(type_name) and "Enum" in type_name


@dataclass(frozen=True)
class FieldCandidate:
    """A classified field before merging.

    Attributes:
        data_index: Field name
        value_type: UI value kind from the declared base type
        title: Display title
        declared_type: Declared type name, kept for enum lookup only
    """

    data_index: str
    value_type: ValueType
    title: str
    declared_type: str | None


def field_title(param: ParameterSpec) -> str:
    """Use a short description as title, else the field name."""
    if param.description and len(param.description) < MAX_TITLE_LENGTH:
        return param.description
    return param.name or ""


def classify(param: ParameterSpec) -> FieldCandidate | None:
    """Classify a parameter, or return None if it cannot be a table field."""
    if not param.name:
        return None
    type_name = param.type_name or ""
    value_type = BASE_TYPE_VALUE_TYPES.get(type_name.lower())
    if value_type is None and not is_enum_type_name(type_name):
        return None
    return FieldCandidate(
        data_index=param.name,
        value_type=value_type or ValueType.TEXT,
        title=field_title(param),
        declared_type=param.type_name,
    )


def _candidates(params: Iterable[ParameterSpec]) -> dict[str, FieldCandidate]:
    """Classified candidates keyed by name, first occurrence wins."""
    candidates: dict[str, FieldCandidate] = {}
    for param in params:
        candidate = classify(param)
        if candidate is not None and candidate.data_index not in candidates:
            candidates[candidate.data_index] = candidate
    return candidates


def search_candidates(inputs: Iterable[ParameterSpec]) -> dict[str, FieldCandidate]:
    """Search-form candidates: inputs minus paging/sorting fields."""
    return _candidates(
        param for param in inputs if (param.name or "").lower() not in IGNORED_INPUTS
    )


def list_output(outputs: Iterable[ParameterSpec]) -> ParameterSpec | None:
    """The output array holding the table rows.

    Prefers an array named `list` or `data`, falling back to the first array.
    """
    arrays = [param for param in outputs if param.is_array]
    for param in arrays:
        if (param.name or "").lower() in LIST_OUTPUT_NAMES:
            return param
    return arrays[0] if arrays else None


def table_candidates(outputs: Iterable[ParameterSpec]) -> dict[str, FieldCandidate]:
    """Table column candidates: the item fields of the list output."""
    source = list_output(outputs)
    if source is None or source.type_ref is None:
        return {}
    return _candidates(source.type_ref.params or ())


def merge_fields(
    search: dict[str, FieldCandidate], table: dict[str, FieldCandidate]
) -> list[tuple[FieldCandidate, dict[str, bool]]]:
    """Merge search and table candidates into (candidate, flags) pairs.

    Order: fields in both (search order), search-only, table-only. For
    fields in both, the table candidate's attributes are used.
    """
    shared = [(table[name], {}) for name in search if name in table]
    search_only = [(c, {"hide_in_table": True}) for name, c in search.items() if name not in table]
    table_only = [(c, {"hide_in_search": True}) for name, c in table.items() if name not in search]
    return shared + search_only + table_only


def enum_choices(query: ProjectQuery, type_name: str | None) -> dict[str, str] | None:
    """Enum value -> label mapping for an enum datatype, if it has values."""
    if not is_enum_type_name(type_name):
        return None
    datatype = query.datatype_by_name(type_name)
    if datatype is None:
        logger.debug(f"Enum datatype '{type_name}' not found")
        return None
    choices = {
        str(param["name"]): str(param.get("description") or param["name"])
        for param in datatype.get("params") or []
        if param.get("name") is not None
    }
    return choices or None


def derive_table_fields(query: ProjectQuery, uri: str | None) -> list[TableFieldDescriptor]:
    """Derive table field descriptors for the interface matching `uri`.

    Args:
        query: Query view over the current project cache
        uri: Interface path fragment (first match is used)

    Returns:
        Descriptors in merge order, empty if the interface is not found
    """
    interface = query.interface_by_uri(uri)
    if interface is None:
        return []

    merged = merge_fields(
        search_candidates(interface.inputs),
        table_candidates(interface.outputs),
    )

    descriptors = []
    for candidate, flags in merged:
        value_type = candidate.value_type
        value_enum = enum_choices(query, candidate.declared_type)
        if value_enum:
            value_type = ValueType.SELECT
        descriptors.append(
            TableFieldDescriptor(
                data_index=candidate.data_index,
                value_type=value_type,
                title=candidate.title,
                value_enum=value_enum,
                **flags,
            )
        )
    return descriptors
