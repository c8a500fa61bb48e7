"""Expansion state of the directory-tree panel."""

from pydantic import BaseModel, Field

from virtual_shell_mcp.utils.path_utils import ancestor_chain, is_within


class ExplorerState(BaseModel):
    """
    The set of tree paths currently shown as open.

    Expansion follows an accordion rule: only one branch, from the root down
    to the most recently opened directory, is open at a time.
    """

    expanded: set[str] = Field(default_factory=set)

    def is_expanded(self, path: str) -> bool:
        return path in self.expanded

    def expand(self, path: str) -> None:
        """Opens ``path`` and its ancestors, closing every other branch."""
        self.expanded = set(ancestor_chain(path)) | {path}

    def collapse(self, path: str) -> None:
        """Closes ``path`` and everything below it. Ancestors stay open."""
        self.expanded = {member for member in self.expanded if not is_within(member, path)}

    def toggle(self, path: str) -> bool:
        """Flips ``path``; returns True if it is open afterwards."""
        if self.is_expanded(path):
            self.collapse(path)
            return False
        self.expand(path)
        return True
