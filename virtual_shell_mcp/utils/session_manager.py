import logging
from collections import OrderedDict

from virtual_shell_mcp.models.session import RenderedLine, Session
from virtual_shell_mcp.prompts.system import WELCOME_BANNER, WELCOME_MESSAGE

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Manages shell sessions for all connected clients.

    Sessions live in process memory and are discarded with it. At most
    ``max_sessions`` are kept; creating one more evicts the least recently
    used session.
    """

    def __init__(self, max_sessions: int = 100) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self._max_sessions = max_sessions
        self._storage: OrderedDict[str, Session] = OrderedDict()

    def __len__(self) -> int:
        return len(self._storage)

    def get_session(self, session_id: str = "default") -> Session:
        """Returns or creates the session for a given id."""
        if session_id in self._storage:
            self._storage.move_to_end(session_id)
            return self._storage[session_id]
        return self._store(session_id, self._new_session())

    def reset_session(self, session_id: str = "default") -> Session:
        """Discards a session and starts a fresh one under the same id."""
        self._storage.pop(session_id, None)
        return self._store(session_id, self._new_session())

    def _store(self, session_id: str, session: Session) -> Session:
        self._storage[session_id] = session
        while len(self._storage) > self._max_sessions:
            evicted, _ = self._storage.popitem(last=False)
            logger.info(f"Evicted session '{evicted}'")
        return session

    def _new_session(self) -> Session:
        return Session(
            scrollback=[
                RenderedLine(style="pre", text=WELCOME_BANNER.strip("\n")),
                RenderedLine(style="notice", text=WELCOME_MESSAGE),
            ]
        )
