from typing import Literal

from pydantic import BaseModel, Field

from virtual_shell_mcp.models.explorer import ExplorerState
from virtual_shell_mcp.models.vfs import VfsEntry
from virtual_shell_mcp.tools.errors import ErrorKind
from virtual_shell_mcp.utils.path_utils import ROOT

LineStyle = Literal["prompt", "text", "pre", "listing", "table", "notice", "error"]


class RenderedLine(BaseModel):
    """A line of scrollback. ``text`` is always a plain-text rendition."""

    style: LineStyle = "text"
    text: str = ""
    entries: list[VfsEntry] | None = None


class OpenFile(BaseModel):
    name: str
    content: str


class CommandResult(BaseModel):
    """Lines to append and state changes produced by one submitted line."""

    command: str | None = None
    input: str = ""
    lines: list[RenderedLine] = Field(default_factory=list)
    error_kind: ErrorKind | None = None
    change_directory: str | None = None
    open_file: OpenFile | None = None
    close_file: bool = False
    clear_scrollback: bool = False

    @property
    def ok(self) -> bool:
        return self.error_kind is None


class Session(BaseModel):
    """Stores the shell state for a single session."""

    current_directory: str = ROOT
    scrollback: list[RenderedLine] = Field(default_factory=list)
    input_buffer: str = ""
    caret_offset: int = 0
    history: list[str] = Field(default_factory=list)
    history_cursor: int | None = None  # None while not navigating history
    open_file: OpenFile | None = None
    explorer: ExplorerState = Field(default_factory=ExplorerState)

    def model_post_init(self, __context) -> None:
        if not self.explorer.expanded:
            self.explorer.expand(self.current_directory)

    def set_buffer(self, text: str, caret: int | None = None) -> None:
        """Replaces the input buffer; the caret defaults to end-of-buffer."""
        self.input_buffer = text
        self.caret_offset = len(text) if caret is None else max(0, min(caret, len(text)))

    def apply_result(self, result: CommandResult) -> None:
        """Applies a command's lines and state changes, in that order."""
        self.scrollback.extend(result.lines)
        if result.clear_scrollback:
            self.scrollback.clear()
        if result.change_directory is not None and result.change_directory != self.current_directory:
            self.current_directory = result.change_directory
            self.explorer.expand(result.change_directory)
        if result.close_file:
            self.open_file = None
        if result.open_file is not None:
            self.open_file = result.open_file
