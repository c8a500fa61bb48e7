#!/usr/bin/env python3
"""
Tests for the MCP tool functions, run against the packaged sample content.
"""

import pytest

from virtual_shell_mcp import server


class TestServerTools:
    """Tests for the functions registered on the MCP app"""

    @pytest.mark.asyncio
    async def test_terminal_runs_lines(self):
        response = await server.terminal(None, "cd projects", session_id="server-terminal")
        assert response["status"] == "success"
        assert response["session"]["cwd"] == "~/projects"

        response = await server.terminal(None, "ls", session_id="server-terminal")
        listing = response["lines"][1]
        assert listing["style"] == "listing"
        assert [entry["name"] for entry in listing["entries"]] == ["terminal", "readme.md"]

    @pytest.mark.asyncio
    async def test_terminal_reports_errors(self):
        response = await server.terminal(None, "cat nothing.txt", session_id="server-errors")

        assert response["status"] == "error"
        assert response["error"] == "cat: file not found: nothing.txt"

    @pytest.mark.asyncio
    async def test_markdown_opens_in_viewer(self):
        response = await server.terminal(None, "cat about.md", session_id="server-viewer")

        assert response["session"]["open_file"]["name"] == "about.md"
        assert response["session"]["open_file"]["content"].startswith("# About")

    @pytest.mark.asyncio
    async def test_terminal_key_completion(self):
        await server.terminal_key(None, "insert", text="cd no", session_id="server-keys")
        response = await server.terminal_key(None, "tab", session_id="server-keys")

        assert response["session"]["input_buffer"] == "cd notes/"

    @pytest.mark.asyncio
    async def test_explorer_navigate_and_tree(self):
        await server.explorer(None, "navigate", path="~/projects", kind="dir", session_id="server-tree")
        response = await server.explorer(None, "tree", session_id="server-tree")

        paths = [row["path"] for row in response["tree"]]
        assert "~/projects/terminal" in paths
        assert response["session"]["expanded"] == ["~", "~/projects"]

    @pytest.mark.asyncio
    async def test_session_state_starts_with_banner(self):
        response = await server.session_state(None, session_id="server-state", reset=True)

        assert response["session"]["cwd"] == "~"
        assert response["scrollback"][-1]["text"] == "SYSTEM ONLINE. Type help for command list."

    def test_help_prompt(self):
        assert "cd [dir]" in server.get_help_prompt()
