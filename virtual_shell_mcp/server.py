"""
MCP server definition for the Virtual Shell MCP.
"""

import logging
from typing import Any, Optional

from fastapi.middleware.cors import CORSMiddleware
from starlette.applications import Starlette
from starlette.middleware import Middleware

from mcp.server.fastmcp import Context, FastMCP

from virtual_shell_mcp.models.session import Session
from virtual_shell_mcp.prompts import get_prompts
from virtual_shell_mcp.tools.base import ToolExecResult
from virtual_shell_mcp.tools.utils.formatting_utils import serialize_lines, serialize_session
from virtual_shell_mcp.utils.config import ServiceConfig
from virtual_shell_mcp.utils.dependencies import (
    get_base_config,
    get_explorer_tool_provider,
    get_line_editor_tool_provider,
    get_session_manager,
    get_shell_tool_provider,
)


# Get a module-level logger
logger = logging.getLogger(__name__)


class CustomFastMCP(FastMCP):
    """Custom FastMCP server with CORS middleware."""

    def _add_cors_middleware(self, app: Starlette) -> Starlette:
        """A helper to add CORS middleware to a Starlette app."""
        app.user_middleware.insert(
            0,
            Middleware(
                CORSMiddleware,
                allow_origin_regex=".*",  # Allow any origin
                allow_credentials=True,
                allow_methods=["*"],
                allow_headers=["*"],
            ),
        )
        app.middleware_stack = app.build_middleware_stack()
        return app

    def sse_app(self, mount_path: str | None = None) -> Starlette:
        """Overrides the default sse_app to inject CORS middleware."""
        app = super().sse_app(mount_path)
        return self._add_cors_middleware(app)

    def streamable_http_app(self) -> Starlette:
        """Overrides the default streamable_http_app to inject CORS middleware."""
        app = super().streamable_http_app()
        return self._add_cors_middleware(app)


def build_server(config: ServiceConfig) -> CustomFastMCP:
    """Build and configure the FastMCP server instance.

    Args:
        config: The server's service configuration.

    Returns:
        A configured CustomFastMCP instance.
    """
    logger.info(
        "Initializing FastMCP server",
        extra={"host": config.MCP_HOST, "port": config.MCP_PORT},
    )
    return CustomFastMCP(
        "virtual-shell-mcp",
        host=config.MCP_HOST,
        port=config.MCP_PORT,
    )


def build_response(session: Session, result: ToolExecResult) -> dict[str, Any]:
    """Turns a tool result into the payload returned to MCP clients."""
    response: dict[str, Any] = {"session": serialize_session(session), "exit_code": result.error_code}
    command_result = result.data.get("result")
    if command_result is not None:
        response["lines"] = serialize_lines(command_result.lines)
    if "tree" in result.data:
        response["tree"] = result.data["tree"]
    if result.error:
        response.update(status="error", error=result.error)
    else:
        response.update(status="success", result=result.output)
    return response


# Get the base configuration for server initialization.
# This is also imported by main.py to run the server.
server_config = get_base_config()
mcp_app = build_server(server_config)


# --- Prompt Handlers ---
@mcp_app.prompt(title="Virtual Shell Command Reference")
def get_help_prompt() -> str:
    """Provides the command table shown by `help`."""
    prompts = get_prompts()
    return prompts["help"]


# --- Tool Definitions ---

@mcp_app.tool()
async def terminal(
    context: Context,
    command_line: str,
    session_id: str = "default",
) -> dict[str, Any]:
    """
    Runs a command line in the virtual shell, as if typed and submitted.

    Args:
        command_line: The line to run, e.g. 'ls', 'cd projects' or 'cat about.md'.
        session_id: The shell session to run in.

    Returns:
        A dictionary with the rendered lines, the session state and the exit code.
    """
    logger.info(f"Executing terminal line: {command_line}")
    try:
        session = get_session_manager().get_session(session_id)
        shell_tool = get_shell_tool_provider()
        result = await shell_tool.execute({"command_line": command_line, "_session": session})
        return build_response(session, result)
    except Exception as e:
        logger.error(f"Error executing terminal line: {e}", exc_info=True)
        return {"status": "error", "error": str(e), "exit_code": 1}


@mcp_app.tool()
async def terminal_key(
    context: Context,
    key: str,
    text: Optional[str] = None,
    session_id: str = "default",
) -> dict[str, Any]:
    """
    Sends a key event to the terminal's input line.

    Args:
        key: One of 'insert', 'backspace', 'delete', 'left', 'right', 'home', 'end',
             'history_up', 'history_down', 'tab', 'clear_screen', 'submit'.
        text: The text to type for the 'insert' key.
        session_id: The shell session to edit.

    Returns:
        A dictionary with the input buffer, the caret offset and any lines a submit produced.
    """
    logger.info(f"Executing terminal key '{key}'")
    try:
        session = get_session_manager().get_session(session_id)
        editor_tool = get_line_editor_tool_provider()
        args = {"key": key, "text": text, "_session": session}
        # Filter out None values so we don't pass them to the tool
        args = {k: v for k, v in args.items() if v is not None}

        result = await editor_tool.execute(args)
        return build_response(session, result)
    except Exception as e:
        logger.error(f"Error executing terminal key: {e}", exc_info=True)
        return {"status": "error", "error": str(e), "exit_code": 1}


@mcp_app.tool()
async def explorer(
    context: Context,
    subcommand: str,
    path: Optional[str] = None,
    kind: Optional[str] = None,
    session_id: str = "default",
) -> dict[str, Any]:
    """
    The directory tree synchronized with the terminal.

    Args:
        subcommand: 'navigate' to click an entry, 'tree' to list the visible rows.
        path: For 'navigate'. The absolute virtual path of the entry, e.g. '~/projects'.
        kind: For 'navigate'. Either 'dir' or 'file'.
        session_id: The shell session the panel belongs to.

    Returns:
        A dictionary with the lines the click produced or the visible tree rows.
    """
    logger.info(f"Executing explorer subcommand '{subcommand}'")
    try:
        session = get_session_manager().get_session(session_id)
        explorer_tool = get_explorer_tool_provider()
        args = {"subcommand": subcommand, "path": path, "kind": kind, "_session": session}
        args = {k: v for k, v in args.items() if v is not None}

        result = await explorer_tool.execute(args)
        return build_response(session, result)
    except Exception as e:
        logger.error(f"Error executing explorer subcommand: {e}", exc_info=True)
        return {"status": "error", "error": str(e), "exit_code": 1}


@mcp_app.tool()
async def session_state(
    context: Context,
    session_id: str = "default",
    reset: bool = False,
) -> dict[str, Any]:
    """
    Returns the full state of a shell session, including its scrollback.

    Args:
        session_id: The shell session to inspect.
        reset: Whether to discard the session and start a fresh one first.

    Returns:
        A dictionary with the session state and the scrollback lines.
    """
    logger.info(f"Reading session state for '{session_id}'")
    try:
        manager = get_session_manager()
        session = manager.reset_session(session_id) if reset else manager.get_session(session_id)
        return {
            "status": "success",
            "session": serialize_session(session),
            "scrollback": serialize_lines(session.scrollback),
            "exit_code": 0,
        }
    except Exception as e:
        logger.error(f"Error reading session state: {e}", exc_info=True)
        return {"status": "error", "error": str(e), "exit_code": 1}
