import logging
from typing import override

from virtual_shell_mcp.models.session import CommandResult, Session

from .base import Tool, ToolCallArguments, ToolError, ToolExecResult, ToolParameter
from .shell_tool import ShellTool
from .utils.constants import DIRECTORY_SUFFIX, LINE_EDITOR_KEYS
from .utils.formatting_utils import format_lines

logger = logging.getLogger(__name__)


class LineEditorTool(Tool):
    """
    Interactive line editing on top of the shell.

    Tracks the input buffer and caret, walks the command history and
    completes names from the current directory. Submitting the buffer hands
    it to the ShellTool.
    """

    def __init__(self, shell: ShellTool) -> None:
        self._shell = shell

    @override
    def get_name(self) -> str:
        return "terminal_key"

    @override
    def get_description(self) -> str:
        return """Sends a key event to the terminal's input line.
* `insert` types `text` at the caret; `backspace` and `delete` remove one character.
* `left`, `right`, `home` and `end` move the caret.
* `history_up` and `history_down` walk through previously submitted lines.
* `tab` completes the last word when exactly one entry of the current directory starts with it.
* `clear_screen` empties the scrollback; `submit` runs the buffer."""

    @override
    def get_parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="key",
                type="string",
                description=f"The key event. Allowed options are: {', '.join(LINE_EDITOR_KEYS)}.",
                required=True,
                enum=LINE_EDITOR_KEYS,
            ),
            ToolParameter(
                name="text",
                type="string",
                description="Text to type, for the `insert` key.",
                required=False,
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

        key = arguments.get("key")
        if not isinstance(key, str):
            return ToolExecResult(error="Key must be a string.", error_code=-1)

        try:
            match key:
                case "insert":
                    text = arguments.get("text", "")
                    if not isinstance(text, str):
                        raise ValueError("Text must be a string.")
                    self.insert(session, text)
                case "backspace":
                    self.backspace(session)
                case "delete":
                    self.delete(session)
                case "left":
                    self.move_caret(session, -1)
                case "right":
                    self.move_caret(session, 1)
                case "home":
                    session.caret_offset = 0
                case "end":
                    session.caret_offset = len(session.input_buffer)
                case "history_up":
                    self.history_back(session)
                case "history_down":
                    self.history_forward(session)
                case "tab":
                    self.complete(session)
                case "clear_screen":
                    self.clear_screen(session)
                case "submit":
                    result = self.submit(session)
                    if result is None:
                        return ToolExecResult(output="")
                    return ToolExecResult(output=format_lines(result.lines), data={"result": result})
                case _:
                    return ToolExecResult(error=f"Unknown key: {key}", error_code=-1)
        except (ToolError, ValueError) as e:
            return ToolExecResult(error=str(e), error_code=-1)

        return ToolExecResult(output=session.input_buffer)

    def insert(self, session: Session, text: str) -> None:
        buffer, caret = session.input_buffer, session.caret_offset
        session.set_buffer(buffer[:caret] + text + buffer[caret:], caret + len(text))

    def backspace(self, session: Session) -> None:
        buffer, caret = session.input_buffer, session.caret_offset
        if caret == 0:
            return
        session.set_buffer(buffer[:caret - 1] + buffer[caret:], caret - 1)

    def delete(self, session: Session) -> None:
        buffer, caret = session.input_buffer, session.caret_offset
        if caret >= len(buffer):
            return
        session.set_buffer(buffer[:caret] + buffer[caret + 1:], caret)

    def move_caret(self, session: Session, offset: int) -> None:
        session.caret_offset = max(0, min(session.caret_offset + offset, len(session.input_buffer)))

    def history_back(self, session: Session) -> None:
        """Steps to the previous history entry, clamping at the oldest one."""
        if not session.history:
            return
        if session.history_cursor is None:
            cursor = len(session.history) - 1
        else:
            cursor = max(0, session.history_cursor - 1)
        session.history_cursor = cursor
        session.set_buffer(session.history[cursor])

    def history_forward(self, session: Session) -> None:
        """Steps to the next history entry; past the newest one the buffer is emptied."""
        if session.history_cursor is None:
            return
        cursor = session.history_cursor + 1
        if cursor >= len(session.history):
            session.history_cursor = None
            session.set_buffer("")
        else:
            session.history_cursor = cursor
            session.set_buffer(session.history[cursor])

    def complete(self, session: Session) -> bool:
        """
        Completes the last word of the buffer from the current directory.

        Only a single unambiguous match is completed; zero or several matches
        leave the buffer as it is.

        Returns:
            True if the buffer was changed.
        """
        entries = self._shell.vfs.list_directory(session.current_directory)
        if entries is None:
            return False

        words = session.input_buffer.strip().split(" ")
        prefix = words[-1]
        matches = [entry for entry in entries if entry.name.startswith(prefix)]
        if len(matches) != 1:
            logger.debug(f"No completion for '{prefix}': {len(matches)} matches")
            return False

        match_entry = matches[0]
        words[-1] = match_entry.name + (DIRECTORY_SUFFIX if match_entry.is_dir else "")
        session.set_buffer(" ".join(words))
        return True

    def clear_screen(self, session: Session) -> None:
        session.scrollback.clear()

    def submit(self, session: Session) -> CommandResult | None:
        """Runs the buffer through the shell and resets the input line."""
        line = session.input_buffer
        session.set_buffer("")
        return self._shell.run_line(session, line)
