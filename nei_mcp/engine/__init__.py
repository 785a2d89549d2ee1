"""NEI engine: normalization pipeline, queries and tool dispatch."""

from .nei_engine import CACHE_FREE_TOOLS, TOOL_HANDLERS, NeiEngine

__all__ = ["NeiEngine", "TOOL_HANDLERS", "CACHE_FREE_TOOLS"]
