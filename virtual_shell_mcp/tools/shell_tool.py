import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import override

from virtual_shell_mcp import __version__
from virtual_shell_mcp.models.session import CommandResult, OpenFile, RenderedLine, Session
from virtual_shell_mcp.models.vfs import VirtualFileSystem
from virtual_shell_mcp.prompts.system import SYSINFO_TEMPLATE, format_help_table
from virtual_shell_mcp.utils.config import ServiceConfig
from virtual_shell_mcp.utils.path_utils import resolve_path

from .base import Tool, ToolCallArguments, ToolExecResult, ToolParameter
from .errors import InvalidArgumentError, NotFoundError, ShellError, UnknownCommandError
from .utils.constants import HELP_COLUMN_WIDTH
from .utils.formatting_utils import format_lines, format_listing

logger = logging.getLogger(__name__)


class ShellCommand(StrEnum):
    HELP = "help"
    SYSINFO = "sysinfo"
    PWD = "pwd"
    CLEAR = "clear"
    LS = "ls"
    CD = "cd"
    CAT = "cat"
    CLOSE = "close"


@dataclass(frozen=True)
class ParsedLine:
    raw: str
    name: str
    args: list[str] = field(default_factory=list)


def parse_command_line(line: str) -> ParsedLine | None:
    """
    Splits a submitted line into a lowercased command name and its arguments.

    Returns None for a blank line. Tokens are split on single spaces, so a
    doubled space yields an empty argument.
    """
    clean = line.strip()
    if not clean:
        return None
    tokens = clean.split(" ")
    return ParsedLine(raw=clean, name=tokens[0].lower(), args=tokens[1:])


class ShellTool(Tool):
    """
    The command interpreter of the virtual shell.

    Every way of driving the shell, typed lines and explorer clicks alike,
    goes through ``run_line``. A line is parsed, dispatched to one handler
    and turned into a ``CommandResult`` which is then applied to the session.
    Handler failures become a single error line; they never leak into the
    session state.
    """

    def __init__(self, vfs: VirtualFileSystem, config: ServiceConfig | None = None) -> None:
        self._vfs = vfs
        self._config = config or ServiceConfig()

    @property
    def vfs(self) -> VirtualFileSystem:
        return self._vfs

    @property
    def config(self) -> ServiceConfig:
        return self._config

    @override
    def get_name(self) -> str:
        return "shell"

    @override
    def get_description(self) -> str:
        return f"""Runs a command line in the virtual shell.
Available commands: {', '.join(command.value for command in ShellCommand)}.
The file system is read-only. `cat` on a markdown file opens it in the viewer instead of printing it."""

    @override
    def get_parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="command_line",
                type="string",
                description="The line to run, e.g. 'cd projects' or 'cat readme.md'.",
                required=True,
            ),
        ]

    @override
    async def execute(self, arguments: ToolCallArguments) -> ToolExecResult:
        session = arguments.get("_session")
        if not isinstance(session, Session):
            return ToolExecResult(
                error="Session not found in arguments. This is an internal server error.",
                error_code=-1,
            )

        command_line = arguments.get("command_line")
        if not isinstance(command_line, str):
            return ToolExecResult(error="Command line must be a string.", error_code=-1)

        result = self.run_line(session, command_line)
        if result is None:
            return ToolExecResult(output="")
        output = format_lines(result.lines)
        if result.ok:
            return ToolExecResult(output=output, data={"result": result})
        return ToolExecResult(output=output, error=result.lines[-1].text, error_code=1, data={"result": result})

    def prompt_label(self, directory: str) -> str:
        return f"{self._config.SHELL_USER}@{self._config.SHELL_HOST}:{directory}$"

    def run_line(self, session: Session, line: str) -> CommandResult | None:
        """
        Runs one submitted line against the session.

        Blank lines are ignored entirely. Any other line is recorded in the
        history, its echo and response are appended to the scrollback and the
        resulting state changes are applied.

        Returns:
            The applied CommandResult, or None for a blank line.
        """
        result = self.evaluate(session, line)
        if result is None:
            return None

        session.history.append(result.input)
        session.history_cursor = None
        session.apply_result(result)
        return result

    def evaluate(self, session: Session, line: str) -> CommandResult | None:
        """Computes the result of a line without touching the session."""
        parsed = parse_command_line(line)
        if parsed is None:
            return None

        logger.debug(f"Running '{parsed.raw}' in {session.current_directory}")
        echo = RenderedLine(style="prompt", text=f"{self.prompt_label(session.current_directory)} {parsed.raw}")

        try:
            result = self._dispatch(session, parsed)
        except ShellError as e:
            logger.debug(f"'{parsed.raw}' failed: {e.kind}: {e.message}")
            result = CommandResult(lines=[RenderedLine(style="error", text=e.message)], error_kind=e.kind)

        result.command = parsed.name
        result.input = parsed.raw
        result.lines.insert(0, echo)
        return result

    def _dispatch(self, session: Session, parsed: ParsedLine) -> CommandResult:
        try:
            command = ShellCommand(parsed.name)
        except ValueError:
            raise UnknownCommandError(f"Command not found: {parsed.name}") from None

        match command:
            case ShellCommand.HELP:
                return self._help_handler()
            case ShellCommand.SYSINFO:
                return self._sysinfo_handler()
            case ShellCommand.PWD:
                return self._pwd_handler(session)
            case ShellCommand.CLEAR:
                return CommandResult(clear_scrollback=True)
            case ShellCommand.LS:
                return self._ls_handler(session)
            case ShellCommand.CD:
                return self._cd_handler(session, parsed.args)
            case ShellCommand.CAT:
                return self._cat_handler(session, parsed.args)
            case ShellCommand.CLOSE:
                return self._close_handler(session)

    def _help_handler(self) -> CommandResult:
        return CommandResult(lines=[RenderedLine(style="table", text=format_help_table(HELP_COLUMN_WIDTH))])

    def _sysinfo_handler(self) -> CommandResult:
        text = SYSINFO_TEMPLATE.format(
            user=self._config.SHELL_USER,
            host=self._config.SHELL_HOST,
            version=__version__,
            node_count=len(self._vfs),
        )
        return CommandResult(lines=[RenderedLine(style="pre", text=text)])

    def _pwd_handler(self, session: Session) -> CommandResult:
        return CommandResult(lines=[RenderedLine(text=session.current_directory)])

    def _ls_handler(self, session: Session) -> CommandResult:
        entries = self._vfs.list_directory(session.current_directory)
        if entries is None:
            logger.warning(f"Current directory '{session.current_directory}' is not a directory in the VFS")
            raise NotFoundError("Error: Cannot list content of this location.")
        return CommandResult(lines=[RenderedLine(style="listing", text=format_listing(entries), entries=entries)])

    def _cd_handler(self, session: Session, args: list[str]) -> CommandResult:
        target = args[0] if args else ""
        if not target or target == ".":
            return CommandResult()

        new_path = resolve_path(session.current_directory, target)
        if not self._vfs.is_dir(new_path):
            raise NotFoundError(f"cd: no such directory: {target}")
        return CommandResult(change_directory=new_path)

    def _cat_handler(self, session: Session, args: list[str]) -> CommandResult:
        target = args[0] if args else ""
        if not target:
            raise InvalidArgumentError("Usage: cat [filename]")

        file_path = resolve_path(session.current_directory, target)
        node = self._vfs.lookup(file_path)
        if node is None or not node.is_file or not node.content:
            raise NotFoundError(f"cat: file not found: {target}")

        if file_path.endswith(self._config.MARKDOWN_EXTENSION):
            return CommandResult(
                lines=[RenderedLine(style="notice", text=f"Opening {target}...")],
                open_file=OpenFile(name=target, content=node.content),
            )
        return CommandResult(lines=[RenderedLine(style="pre", text=node.content)])

    def _close_handler(self, session: Session) -> CommandResult:
        if session.open_file is None:
            raise NotFoundError("close: no file open")
        return CommandResult(
            lines=[RenderedLine(style="notice", text=f"Closed {session.open_file.name}.")],
            close_file=True,
        )
