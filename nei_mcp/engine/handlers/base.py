"""Base infrastructure for tool handlers.

This module provides the common types and utilities used by all handler modules.
Each handler receives a HandlerContext with shared state and returns a ToolResult.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Coroutine

from pydantic import BaseModel

from ...models import ToolResult

if TYPE_CHECKING:
    from ...services.project_cache import ProjectCacheStore
    from ..core.query import ProjectQuery


@dataclass
class HandlerContext:
    """Context object passed to all handlers.

    Contains shared state and dependencies that handlers need to operate.
    This decouples handlers from the NeiEngine class.
    """

    # Project key the engine serves
    project_key: str

    # Cache store (only the sync handler writes through it)
    store: "ProjectCacheStore"

    # Query view over the current project snapshot.
    # None for tools that do not read the cache (sync).
    query: "ProjectQuery | None" = None


# Type alias for handler functions
HandlerFunc = Callable[
    [dict[str, Any], HandlerContext],
    Coroutine[Any, Any, ToolResult],
]


def count_tokens(text: str) -> int:
    """Estimate token count for a string.

    Uses a simple heuristic of ~4 characters per token.
    """
    if not text:
        return 0
    return max(1, len(text) // 4)


def to_jsonable(data: Any) -> Any:
    """Convert records (and lists of records) to plain JSON data."""
    if isinstance(data, BaseModel):
        if hasattr(data, "to_json"):
            return data.to_json()
        return data.model_dump(mode="json")
    if isinstance(data, (list, tuple)):
        return [to_jsonable(item) for item in data]
    if isinstance(data, Mapping):
        return {key: to_jsonable(value) for key, value in data.items()}
    return data


def json_result(data: Any, params: dict[str, Any] | None = None) -> ToolResult:
    """Wrap handler output in a ToolResult with token estimates."""
    payload = to_jsonable(data)
    return ToolResult(
        data=payload,
        input_tokens=count_tokens(json.dumps(params or {}, ensure_ascii=False)),
        output_tokens=count_tokens(json.dumps(payload, ensure_ascii=False, default=str)),
    )
