"""Empty-value cleanup for raw NEI payloads.

The NEI resource document is full of null and empty-string placeholders.
They are stripped once, before normalization, so normalized records never
carry them.
"""

from typing import Any


def is_empty(value: Any) -> bool:
    """Return True for the values removed by clean(): None and ""."""
    return value is None or (isinstance(value, str) and value == "")


def clean(value: Any) -> Any:
    """Recursively remove None and empty-string values from a tree.

    0 and False are kept. Lists keep their remaining elements in order;
    dict keys are dropped when their cleaned value is empty. Containers
    that become empty are kept. Input is not modified.

    Args:
        value: Any JSON-like tree (dicts, lists, tuples, scalars)

    Returns:
        A cleaned copy with the same shape
    """
    if isinstance(value, dict):
        cleaned: dict[Any, Any] = {}
        for key, item in value.items():
            item = clean(item)
            if not is_empty(item):
                cleaned[key] = item
        return cleaned

    if isinstance(value, (list, tuple)):
        items = [clean(item) for item in value]
        return [item for item in items if not is_empty(item)]

    return value
