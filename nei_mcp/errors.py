"""Exception types for the NEI MCP Server.

Lookups that find nothing are not errors: query functions return an
empty list or None instead of raising.
"""


class NeiError(Exception):
    """Base class for all NEI MCP Server errors."""


class ConfigError(NeiError):
    """Required configuration is missing or invalid.

    Raised once at startup and never retried.
    """


class SyncFailure(NeiError):
    """Refreshing a project from the remote NEI platform failed.

    Attributes:
        key: Project key whose sync failed
        cause: Human-readable reason (HTTP status, transport error, bad payload)
    """

    def __init__(self, key: str, cause: str):
        self.key = key
        self.cause = cause
        super().__init__(f"Sync failed for project {key}: {cause}")


class UnknownTool(ValueError):
    """A tool call named a tool this server does not provide."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class InvalidParams(ValueError):
    """Tool arguments failed validation."""
