"""A read-only virtual shell served over MCP."""

__version__ = "0.1.0"
