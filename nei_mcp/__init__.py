"""NEI MCP Server - tool-callable access to NEI project metadata."""

__version__ = "0.1.0"
