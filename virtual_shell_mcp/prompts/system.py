"""Static text blocks shown by the shell."""

WELCOME_BANNER = r"""
 _       __     __
| |     / /__  / /________  ____ ___  ___
| | /| / / _ \/ / ___/ __ \/ __ `__ \/ _ \
| |/ |/ /  __/ / /__/ /_/ / / / / / /  __/
|__/|__/\___/_/\___/\____/_/ /_/ /_/\___/
"""

WELCOME_MESSAGE = "SYSTEM ONLINE. Type help for command list."

HELP_TITLE = "AVAILABLE COMMANDS:"

HELP_COMMANDS: list[tuple[str, str]] = [
    ("help", "Show this command list"),
    ("pwd", "Print working directory"),
    ("ls", "List directory content"),
    ("cd [dir]", "Change directory"),
    ("cat [file]", "Read file content"),
    ("close", "Close the open file"),
    ("sysinfo", "Show system information"),
    ("clear", "Clear screen"),
]

SYSINFO_TEMPLATE = """{user}@{host}
--------------
OS: VirtualShell (read-only)
Kernel: vfs-{version}
Shell: vsh
Filesystem: in-memory, {node_count} nodes
Input: history, tab completion, explorer sync"""


def format_help_table(width: int = 14) -> str:
    """Renders the command table as aligned plain text."""
    rows = [HELP_TITLE]
    rows.extend(f"  {command.ljust(width)}{description}" for command, description in HELP_COMMANDS)
    return "\n".join(rows)


def get_prompts() -> dict[str, str]:
    """
    Returns a dictionary of the static text blocks.
    """
    return {
        "welcome-banner": WELCOME_BANNER,
        "welcome-message": WELCOME_MESSAGE,
        "help": format_help_table(),
        "sysinfo-template": SYSINFO_TEMPLATE,
    }
