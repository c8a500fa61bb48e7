"""The immutable virtual file system the shell browses."""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from virtual_shell_mcp.utils.path_utils import ROOT, SEPARATOR, child_path

logger = logging.getLogger(__name__)

NodeKind = Literal["dir", "file"]


class VfsNode(BaseModel):
    """A single node of the virtual file system."""

    model_config = ConfigDict(frozen=True)

    kind: NodeKind
    children: tuple[str, ...] = Field(default=())
    content: str | None = None

    @property
    def is_dir(self) -> bool:
        return self.kind == "dir"

    @property
    def is_file(self) -> bool:
        return self.kind == "file"


class VfsEntry(BaseModel):
    """A named child of a directory, as shown in listings."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: str
    kind: NodeKind

    @property
    def is_dir(self) -> bool:
        return self.kind == "dir"


def display_sort_key(entry: VfsEntry) -> tuple[int, str]:
    """Directories first, then case-sensitive lexicographic order by name."""
    return (0 if entry.is_dir else 1, entry.name)


class VirtualFileSystem:
    """
    Read-only mapping from virtual path to node.

    The mapping is built once and exposed through a read-only proxy. Children
    keep their construction order; display order is derived by
    ``list_directory``.
    """

    def __init__(self, nodes: Mapping[str, VfsNode]) -> None:
        if ROOT not in nodes or not nodes[ROOT].is_dir:
            raise ValueError(f"The virtual file system must contain a '{ROOT}' directory.")
        self._nodes = MappingProxyType(dict(nodes))

    @property
    def nodes(self) -> Mapping[str, VfsNode]:
        return self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, path: object) -> bool:
        return path in self._nodes

    def lookup(self, path: str) -> VfsNode | None:
        return self._nodes.get(path)

    def is_dir(self, path: str) -> bool:
        node = self._nodes.get(path)
        return node is not None and node.is_dir

    def list_directory(self, path: str) -> list[VfsEntry] | None:
        """
        Lists a directory in display order.

        Returns None if the path is missing or not a directory. A child that
        the directory names but the mapping does not contain is skipped.
        """
        node = self._nodes.get(path)
        if node is None or not node.is_dir:
            return None

        entries = []
        for name in node.children:
            full_path = child_path(path, name)
            child = self._nodes.get(full_path)
            if child is None:
                logger.warning(f"Directory '{path}' lists missing child '{name}'")
                continue
            entries.append(VfsEntry(name=name, path=full_path, kind=child.kind))
        return sorted(entries, key=display_sort_key)

    @classmethod
    def from_sources(cls, sources: Iterable[tuple[str, str]]) -> "VirtualFileSystem":
        """
        Builds the file system from ``(relative_path, content)`` pairs.

        Intermediate directories are created in first-seen order and every
        child is linked to its parent exactly once. Sources with a space in
        any path segment are skipped, since the shell splits arguments on
        spaces and could never reach them.

        Args:
            sources: Pairs such as ``("projects/readme.md", "# Projects")``.

        Returns:
            The constructed VirtualFileSystem.
        """
        children: dict[str, list[str]] = {ROOT: []}
        files: dict[str, str] = {}

        def link(parent: str, name: str) -> None:
            if name not in children[parent]:
                children[parent].append(name)

        for relative_path, content in sources:
            parts = [part for part in relative_path.strip(SEPARATOR).split(SEPARATOR) if part]
            if not parts:
                continue
            if any(" " in part for part in parts):
                logger.warning(f"Skipping '{relative_path}': names with spaces cannot be typed as arguments")
                continue
            file_name = parts.pop()

            current = ROOT
            for folder in parts:
                next_path = child_path(current, folder)
                if next_path in files:
                    logger.warning(f"Skipping '{relative_path}': '{next_path}' is a file")
                    break
                if next_path not in children:
                    children[next_path] = []
                link(current, folder)
                current = next_path
            else:
                file_path = child_path(current, file_name)
                if file_path in children:
                    logger.warning(f"Skipping '{relative_path}': '{file_path}' is a directory")
                    continue
                files[file_path] = content
                link(current, file_name)

        nodes: dict[str, VfsNode] = {
            path: VfsNode(kind="dir", children=tuple(names)) for path, names in children.items()
        }
        nodes.update({path: VfsNode(kind="file", content=content) for path, content in files.items()})
        logger.info(f"Built virtual file system with {len(children)} directories and {len(files)} files")
        return cls(nodes)

    @classmethod
    def from_directory(cls, root: Path) -> "VirtualFileSystem":
        """
        Builds the file system from a real directory, read once.

        Hidden files and directories are skipped. Files that cannot be decoded
        as UTF-8 are skipped with a warning.
        """
        root = root.expanduser()
        if not root.is_dir():
            raise NotADirectoryError(f"'{root}' is not a directory.")

        sources: list[tuple[str, str]] = []
        for file_path in sorted(root.rglob("*")):
            relative = file_path.relative_to(root)
            if any(part.startswith(".") for part in relative.parts):
                continue
            if not file_path.is_file():
                continue
            try:
                content = file_path.read_text(encoding="utf-8")
            except (UnicodeDecodeError, OSError) as e:
                logger.warning(f"Skipping '{file_path}': {e}")
                continue
            sources.append((relative.as_posix(), content))

        logger.info(f"Loaded {len(sources)} files from {root}")
        return cls.from_sources(sources)
