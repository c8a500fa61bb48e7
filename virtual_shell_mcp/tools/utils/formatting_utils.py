import json
from typing import Any, Dict, List

from virtual_shell_mcp.models.session import OpenFile, RenderedLine, Session
from virtual_shell_mcp.models.vfs import VfsEntry

from .constants import DIRECTORY_SUFFIX, LISTING_SEPARATOR


def format_entry_name(entry: VfsEntry) -> str:
    return entry.name + DIRECTORY_SUFFIX if entry.is_dir else entry.name


def format_listing(entries: List[VfsEntry]) -> str:
    """Plain-text rendition of an `ls` line, directories suffixed with a slash."""
    return LISTING_SEPARATOR.join(format_entry_name(entry) for entry in entries)


def format_lines(lines: List[RenderedLine]) -> str:
    """Joins rendered lines into the text a plain terminal would print."""
    return "\n".join(line.text for line in lines)


def serialize_lines(lines: List[RenderedLine]) -> List[Dict[str, Any]]:
    """
    Serializes rendered lines for MCP clients.

    Each line keeps its style so a client can color prompts and errors;
    listing lines carry their entries with a kind per name.
    """
    return [line.model_dump(exclude_none=True) for line in lines]


def serialize_open_file(open_file: OpenFile | None) -> Dict[str, Any] | None:
    return open_file.model_dump() if open_file is not None else None


def serialize_session(session: Session) -> Dict[str, Any]:
    """The client-visible state of a session, without its scrollback."""
    return {
        "cwd": session.current_directory,
        "input_buffer": session.input_buffer,
        "caret_offset": session.caret_offset,
        "history_size": len(session.history),
        "history_cursor": session.history_cursor,
        "open_file": serialize_open_file(session.open_file),
        "expanded": sorted(session.explorer.expanded),
    }


def format_tree(tree_data: List[Dict], root_name: str) -> str:
    """
    Format the visible explorer rows as structured JSON.

    Returns a JSON string a client can walk row by row to paint the tree
    panel, each row carrying its depth and expansion state.
    """
    if not tree_data:
        return json.dumps({
            "status": "empty",
            "root": root_name,
            "message": "Directory is empty",
            "tree": []
        }, indent=2)

    return json.dumps({
        "status": "success",
        "root": root_name,
        "count": len(tree_data),
        "tree": tree_data
    }, indent=2)
