"""
Configuration and dependency management for the Virtual Shell MCP server.
"""

import logging
from functools import lru_cache
from pathlib import Path

from virtual_shell_mcp.models.vfs import VirtualFileSystem
from virtual_shell_mcp.utils.config import ServiceConfig
from virtual_shell_mcp.utils.session_manager import SessionManager

logger = logging.getLogger(__name__)

# Sample content tree shipped with the package
DEFAULT_CONTENT_ROOT = Path(__file__).resolve().parent.parent / "filesystem"


@lru_cache
def get_base_config() -> ServiceConfig:
    """
    Retrieves the base server configuration from environment variables.

    This function is cached to avoid repeatedly reading and parsing environment
    variables and .env files.

    Returns:
        A cached instance of the ServiceConfig.
    """
    return ServiceConfig()


@lru_cache
def get_virtual_file_system() -> VirtualFileSystem:
    """
    Builds the virtual file system once from the configured content root.

    Returns:
        The process-wide, read-only VirtualFileSystem.
    """
    config = get_base_config()
    content_root = config.VFS_CONTENT_ROOT or DEFAULT_CONTENT_ROOT
    logger.info(f"Building virtual file system from {content_root}")
    return VirtualFileSystem.from_directory(content_root)


@lru_cache
def get_session_manager() -> SessionManager:
    """Returns the singleton SessionManager."""
    logger.info("Initializing SessionManager singleton.")
    return SessionManager(get_base_config().MAX_SESSIONS)


# --- Tool Providers ---

from ..tools.explorer_tool import ExplorerTool
from ..tools.line_editor_tool import LineEditorTool
from ..tools.shell_tool import ShellTool


@lru_cache
def get_shell_tool_provider() -> ShellTool:
    """Returns a cached instance of the ShellTool bound to the shared VFS."""
    logger.info("Initializing ShellTool singleton.")
    return ShellTool(get_virtual_file_system(), get_base_config())


@lru_cache
def get_line_editor_tool_provider() -> LineEditorTool:
    """Returns a cached instance of the LineEditorTool."""
    logger.info("Initializing LineEditorTool singleton.")
    return LineEditorTool(get_shell_tool_provider())


@lru_cache
def get_explorer_tool_provider() -> ExplorerTool:
    """Returns a cached instance of the ExplorerTool."""
    logger.info("Initializing ExplorerTool singleton.")
    return ExplorerTool(get_shell_tool_provider())
