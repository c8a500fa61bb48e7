import logging
from typing import override

from virtual_shell_mcp.models.session import CommandResult, Session
from virtual_shell_mcp.models.vfs import NodeKind

from .base import Tool, ToolCallArguments, ToolError, ToolExecResult, ToolParameter
from .shell_tool import ShellCommand, ShellTool
from .utils.formatting_utils import format_lines, format_tree

logger = logging.getLogger(__name__)

ExplorerSubCommands = ["navigate", "tree"]


class ExplorerTool(Tool):
    """
    The directory-tree side panel.

    A click on a tree entry is replayed as the equivalent `cd` or `cat` line
    through the shell, so the panel and the terminal share one code path.
    Directory clicks also toggle the entry's expansion under the accordion
    rule kept by ExplorerState.
    """

    def __init__(self, shell: ShellTool) -> None:
        self._shell = shell

    @override
    def get_name(self) -> str:
        return "explorer"

    @override
    def get_description(self) -> str:
        return """The directory tree synchronized with the terminal.
- 'navigate': click an entry. Directories are entered with `cd` and toggled open or closed; files are shown with `cat`.
- 'tree': the rows currently visible in the panel, with depth and expansion state."""

    @override
    def get_parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="subcommand",
                type="string",
                description=f"The command to run. Allowed options are: {', '.join(ExplorerSubCommands)}.",
                required=True,
                enum=ExplorerSubCommands,
            ),
            ToolParameter(
                name="path",
                type="string",
                description="The absolute virtual path of the clicked entry, e.g. '~/projects'.",
                required=False,
            ),
            ToolParameter(
                name="kind",
                type="string",
                description="The kind of the clicked entry: 'dir' or 'file'.",
                required=False,
                enum=["dir", "file"],
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

        subcommand = arguments.get("subcommand")
        if not isinstance(subcommand, str):
            return ToolExecResult(error="Subcommand must be a string.", error_code=-1)

        try:
            match subcommand:
                case "navigate":
                    return self._navigate_handler(session, arguments)
                case "tree":
                    rows = self.visible_tree(session)
                    return ToolExecResult(output=format_tree(rows, "~"), data={"tree": rows})
                case _:
                    return ToolExecResult(error=f"Unknown subcommand: {subcommand}", error_code=-1)
        except (ToolError, ValueError) as e:
            return ToolExecResult(error=str(e), error_code=-1)

    def _navigate_handler(self, session: Session, args: ToolCallArguments) -> ToolExecResult:
        path = args.get("path")
        if not isinstance(path, str) or not path:
            raise ValueError("Path is required for navigate and must be a string.")

        kind = args.get("kind")
        if kind not in ("dir", "file"):
            raise ValueError("Kind must be either 'dir' or 'file'.")

        result = self.navigate(session, path, kind)
        output = format_lines(result.lines) if result is not None else ""
        return ToolExecResult(output=output, data={"result": result})

    def navigate(self, session: Session, path: str, kind: NodeKind) -> CommandResult | None:
        """
        Handles a click on a tree entry.

        Runs `cd <path>` for directories and `cat <path>` for files through the
        shell, then toggles a directory's expansion based on whether it was
        open before the click.
        """
        was_expanded = session.explorer.is_expanded(path)
        command = ShellCommand.CD if kind == "dir" else ShellCommand.CAT
        logger.debug(f"Explorer click on {kind} '{path}'")
        result = self._shell.run_line(session, f"{command} {path}")

        if kind == "dir":
            if was_expanded:
                session.explorer.collapse(path)
            else:
                session.explorer.expand(path)
        return result

    def visible_tree(self, session: Session) -> list[dict]:
        """
        Lists the rows the tree panel shows, depth first from the root.

        Entries are in display order; only expanded directories show their
        children.
        """
        rows: list[dict] = []
        self._collect_rows(session, "~", 0, rows)
        return rows

    def _collect_rows(self, session: Session, path: str, depth: int, rows: list[dict]) -> None:
        entries = self._shell.vfs.list_directory(path)
        if entries is None:
            return
        for entry in entries:
            expanded = entry.is_dir and session.explorer.is_expanded(entry.path)
            rows.append({
                "path": entry.path,
                "name": entry.name,
                "kind": entry.kind,
                "depth": depth,
                "expanded": expanded,
                "active": entry.path == session.current_directory,
            })
            if expanded:
                self._collect_rows(session, entry.path, depth + 1, rows)
