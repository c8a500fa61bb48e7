# Constants for the shell and the explorer

# Appended to directory names in listings and completions
DIRECTORY_SUFFIX = "/"

# Separator between names in an `ls` line
LISTING_SEPARATOR = "  "

# Column width of the command names in `help`
HELP_COLUMN_WIDTH = 14

# Keys understood by the line editor
LINE_EDITOR_KEYS = [
    "insert",
    "backspace",
    "delete",
    "left",
    "right",
    "home",
    "end",
    "history_up",
    "history_down",
    "tab",
    "clear_screen",
    "submit",
]
