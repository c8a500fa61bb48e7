"""
Unit tests for the session and explorer state models.
"""

from virtual_shell_mcp.models.explorer import ExplorerState
from virtual_shell_mcp.models.session import CommandResult, OpenFile, RenderedLine, Session


class TestExplorerState:
    """Tests for the accordion expansion rule"""

    def test_expand_opens_the_ancestor_chain(self):
        state = ExplorerState()

        state.expand("~/a/b/c")

        assert state.expanded == {"~", "~/a", "~/a/b", "~/a/b/c"}

    def test_expand_closes_other_branches(self):
        state = ExplorerState()
        state.expand("~/a/b")

        state.expand("~/docs")

        assert state.expanded == {"~", "~/docs"}

    def test_collapse_keeps_ancestors(self):
        state = ExplorerState()
        state.expand("~/a/b/c")

        state.collapse("~/a/b")

        assert state.expanded == {"~", "~/a"}

    def test_collapse_matches_whole_segments(self):
        state = ExplorerState(expanded={"~", "~/a", "~/a/b", "~/ab"})

        state.collapse("~/a")

        assert state.expanded == {"~", "~/ab"}

    def test_toggle(self):
        state = ExplorerState()

        assert state.toggle("~/a") is True
        assert state.toggle("~/a") is False
        assert state.expanded == {"~"}


class TestSession:
    """Tests for Session"""

    def test_new_session_starts_at_root(self):
        session = Session()

        assert session.current_directory == "~"
        assert session.history_cursor is None
        assert session.open_file is None
        assert session.explorer.expanded == {"~"}

    def test_set_buffer_moves_caret(self):
        session = Session()

        session.set_buffer("cd projects")
        assert session.caret_offset == len("cd projects")

        session.set_buffer("ls", caret=10)
        assert session.caret_offset == 2

    def test_apply_result_clears_after_appending(self):
        session = Session(scrollback=[RenderedLine(text="old")])

        session.apply_result(CommandResult(lines=[RenderedLine(style="prompt", text="$ clear")], clear_scrollback=True))

        assert session.scrollback == []

    def test_apply_result_changes_directory_and_follows_in_tree(self):
        session = Session()

        session.apply_result(CommandResult(change_directory="~/a/b"))

        assert session.current_directory == "~/a/b"
        assert session.explorer.expanded == {"~", "~/a", "~/a/b"}

    def test_apply_result_replaces_open_file(self):
        session = Session(open_file=OpenFile(name="old.md", content="old"))

        session.apply_result(CommandResult(open_file=OpenFile(name="new.md", content="new")))
        assert session.open_file.name == "new.md"

        session.apply_result(CommandResult(close_file=True))
        assert session.open_file is None
