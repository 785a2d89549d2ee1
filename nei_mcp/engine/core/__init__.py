"""Engine core module.

This module contains the data pipeline behind the NEI tools:
- Empty-value sanitization of the raw payload
- Normalization into a ProjectCache
- Queries over the cache
- Table field synthesis
"""

from .normalize import (
    SYSTEM_TYPE_TAG,
    DatatypeResolver,
    build_detail_url,
    is_system_type,
    normalize,
)
from .project import ProjectCache, freeze
from .query import UNKNOWN_LABEL, ProjectQuery, contains
from .sanitize import clean, is_empty
from .table_fields import (
    IGNORED_INPUTS,
    derive_table_fields,
    is_enum_type_name,
    merge_fields,
)

__all__ = [
    # Sanitization
    "clean",
    "is_empty",
    # Normalization
    "normalize",
    "DatatypeResolver",
    "build_detail_url",
    "is_system_type",
    "SYSTEM_TYPE_TAG",
    "ProjectCache",
    "freeze",
    # Queries
    "ProjectQuery",
    "contains",
    "UNKNOWN_LABEL",
    # Table fields
    "derive_table_fields",
    "merge_fields",
    "is_enum_type_name",
    "IGNORED_INPUTS",
]
