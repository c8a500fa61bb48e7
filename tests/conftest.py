"""
Shared fixtures: a small in-memory file system and a fresh session.
"""

import pytest

from virtual_shell_mcp.models.session import Session
from virtual_shell_mcp.models.vfs import VirtualFileSystem
from virtual_shell_mcp.tools.explorer_tool import ExplorerTool
from virtual_shell_mcp.tools.line_editor_tool import LineEditorTool
from virtual_shell_mcp.tools.shell_tool import ShellTool
from virtual_shell_mcp.utils.config import ServiceConfig

SOURCES = [
    ("about.md", "# About\n\nHello there."),
    ("hello.txt", "hello"),
    ("empty.txt", ""),
    ("projects/readme.md", "# Projects"),
    ("projects/alpha/notes.txt", "alpha notes"),
    ("projects/beta/main.py", "print('hi')"),
    ("docs/Guide.md", "guide"),
    ("a/b/c/deep.txt", "deep"),
    ("Zeta/z.txt", "z"),
]


@pytest.fixture
def vfs():
    """Builds the sample file system"""
    return VirtualFileSystem.from_sources(SOURCES)


@pytest.fixture
def config():
    return ServiceConfig(SHELL_USER="guest", SHELL_HOST="system", MARKDOWN_EXTENSION=".md")


@pytest.fixture
def shell(vfs, config):
    return ShellTool(vfs, config)


@pytest.fixture
def editor(shell):
    return LineEditorTool(shell)


@pytest.fixture
def explorer(shell):
    return ExplorerTool(shell)


@pytest.fixture
def session():
    """A session at the root with an empty scrollback"""
    return Session()
