"""
Unit tests for the session manager.
"""

import pytest

from virtual_shell_mcp.utils.session_manager import SessionManager


class TestSessionManager:
    """Tests for SessionManager"""

    def test_same_id_returns_same_session(self):
        manager = SessionManager()

        assert manager.get_session("a") is manager.get_session("a")
        assert manager.get_session("a") is not manager.get_session("b")

    def test_new_session_shows_welcome(self):
        session = SessionManager().get_session()

        assert [line.style for line in session.scrollback] == ["pre", "notice"]
        assert session.current_directory == "~"

    def test_reset_replaces_session(self):
        manager = SessionManager()
        old = manager.get_session("a")
        old.current_directory = "~/projects"

        new = manager.reset_session("a")

        assert new is not old
        assert new.current_directory == "~"
        assert manager.get_session("a") is new

    def test_oldest_session_is_evicted(self):
        manager = SessionManager(max_sessions=2)
        first = manager.get_session("first")
        manager.get_session("second")

        manager.get_session("third")

        assert len(manager) == 2
        assert manager.get_session("first") is not first

    def test_recently_used_session_is_kept(self):
        manager = SessionManager(max_sessions=2)
        first = manager.get_session("first")
        second = manager.get_session("second")
        manager.get_session("first")

        manager.get_session("third")

        assert manager.get_session("first") is first
        assert len(manager) == 2
        assert manager.get_session("second") is not second

    def test_limit_must_be_positive(self):
        with pytest.raises(ValueError):
            SessionManager(max_sessions=0)
