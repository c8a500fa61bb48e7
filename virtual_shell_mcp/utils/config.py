"""Service configuration definition."""

from pathlib import Path

from pydantic_settings import BaseSettings


class ServiceConfig(BaseSettings):
    """
    Defines the configuration for the MCP server and the shell, loaded from
    environment variables or a .env file.
    """

    # MCP Server transport mechanism (e.g., "stdio", "sse", "streamable-http")
    MCP_TRANSPORT: str = "stdio"
    # Host for the MCP server to bind to. Defaults to 0.0.0.0 for accessibility.
    MCP_HOST: str = "0.0.0.0"
    # Port for the MCP server to listen on.
    MCP_PORT: int = 8660

    # Directory the virtual file system is loaded from. Falls back to the
    # sample tree shipped with the package.
    VFS_CONTENT_ROOT: Path | None = None
    # Prompt label is "<SHELL_USER>@<SHELL_HOST>:<cwd>$"
    SHELL_USER: str = "guest"
    SHELL_HOST: str = "system"
    # Files with this suffix open in the viewer instead of printing inline.
    MARKDOWN_EXTENSION: str = ".md"
    # Least recently used sessions are dropped beyond this many.
    MAX_SESSIONS: int = 100

    class Config:
        """Pydantic configuration settings."""

        # We do not specify env_file here.
        # Environment loading is handled explicitly in main.py via load_dotenv
        # to ensure the correct .env file is used.
        extra = "ignore"
