"""
Unit tests for the virtual file system.
"""

import pytest
from pydantic import ValidationError

from virtual_shell_mcp.models.vfs import VfsNode, VirtualFileSystem
from virtual_shell_mcp.utils.path_utils import child_path


class TestVirtualFileSystem:
    """Tests for VirtualFileSystem construction and lookup"""

    def test_root_children_keep_insertion_order(self, vfs):
        root = vfs.lookup("~")

        assert root.is_dir
        assert root.children == ("about.md", "hello.txt", "empty.txt", "projects", "docs", "a", "Zeta")

    def test_children_match_existing_paths(self, vfs):
        for path, node in vfs.nodes.items():
            if not node.is_dir:
                continue
            claimed = {child_path(path, name) for name in node.children}
            actual = {
                other for other in vfs.nodes
                if other != "~" and other.rsplit("/", 1)[0] == path
            }
            assert claimed == actual

    def test_intermediate_directories_are_created(self, vfs):
        assert vfs.is_dir("~/a")
        assert vfs.is_dir("~/a/b")
        assert vfs.is_dir("~/a/b/c")
        assert vfs.lookup("~/a/b/c/deep.txt").content == "deep"

    def test_lookup_missing_returns_none(self, vfs):
        assert vfs.lookup("~/nope") is None
        assert "~/nope" not in vfs

    def test_list_directory_sorts_directories_first(self, vfs):
        names = [entry.name for entry in vfs.list_directory("~")]

        assert names == ["Zeta", "a", "docs", "projects", "about.md", "empty.txt", "hello.txt"]

    def test_list_directory_on_file_returns_none(self, vfs):
        assert vfs.list_directory("~/hello.txt") is None
        assert vfs.list_directory("~/missing") is None

    def test_list_directory_skips_missing_children(self):
        vfs = VirtualFileSystem({
            "~": VfsNode(kind="dir", children=("ghost", "real.txt")),
            "~/real.txt": VfsNode(kind="file", content="x"),
        })

        entries = vfs.list_directory("~")

        assert [entry.name for entry in entries] == ["real.txt"]

    def test_nodes_are_read_only(self, vfs):
        with pytest.raises(TypeError):
            vfs.nodes["~/new"] = VfsNode(kind="file", content="x")
        with pytest.raises(ValidationError):
            vfs.lookup("~/hello.txt").content = "changed"

    def test_root_is_required(self):
        with pytest.raises(ValueError):
            VirtualFileSystem({"~/a": VfsNode(kind="file", content="x")})

    def test_conflicting_sources_are_skipped(self):
        vfs = VirtualFileSystem.from_sources([
            ("a", "file a"),
            ("a/b.txt", "under a file"),
            ("c/d.txt", "d"),
            ("c", "file where a directory is"),
            ("", "nothing"),
        ])

        assert vfs.lookup("~/a").is_file
        assert vfs.lookup("~/a/b.txt") is None
        assert vfs.is_dir("~/c")
        assert vfs.lookup("~").children == ("a", "c")

    def test_from_directory(self, tmp_path):
        (tmp_path / "projects").mkdir()
        (tmp_path / "projects" / "readme.md").write_text("# Readme", encoding="utf-8")
        (tmp_path / "hello.txt").write_text("hello", encoding="utf-8")
        (tmp_path / ".hidden").mkdir()
        (tmp_path / ".hidden" / "secret.txt").write_text("secret", encoding="utf-8")

        vfs = VirtualFileSystem.from_directory(tmp_path)

        assert vfs.lookup("~/projects/readme.md").content == "# Readme"
        assert vfs.lookup("~/hello.txt").content == "hello"
        assert vfs.lookup("~/.hidden") is None
        assert set(vfs.lookup("~").children) == {"projects", "hello.txt"}

    def test_from_directory_requires_a_directory(self, tmp_path):
        with pytest.raises(NotADirectoryError):
            VirtualFileSystem.from_directory(tmp_path / "missing")

    def test_sources_with_spaces_are_skipped(self):
        vfs = VirtualFileSystem.from_sources([
            ("my notes/todo.txt", "todo"),
            ("hello world.txt", "hi"),
            ("ok/a.txt", "a"),
        ])

        assert vfs.lookup("~/my notes") is None
        assert vfs.lookup("~/my notes/todo.txt") is None
        assert vfs.lookup("~/hello world.txt") is None
        assert vfs.lookup("~").children == ("ok",)
        assert vfs.lookup("~/ok/a.txt").content == "a"
