"""Design session registry.

Keeps one DesignSession per editor tab, keyed by the id stored in the tab.
Sessions live in memory only; the least recently used session is evicted
when the registry is full.
"""

import logging
import uuid
from collections import OrderedDict

from backend.core.config import settings
from design.events import InputEvent
from design.machine import handle_input
from design.session import DesignSession

logger = logging.getLogger(__name__)


class DesignSessionManager:
    """Singleton registry of live design sessions."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            # Most recently used last
            cls._instance._sessions: OrderedDict[uuid.UUID, DesignSession] = OrderedDict()
        return cls._instance

    def create_session(self) -> DesignSession:
        if len(self._sessions) >= settings.MAX_DESIGN_SESSIONS:
            oldest, _ = self._sessions.popitem(last=False)
            logger.info("Session limit reached, evicted %s", oldest)

        session = DesignSession()
        self._sessions[session.id] = session
        logger.info("Design session %s created", session.id)
        return session

    def get_session(self, session_id: uuid.UUID | str | None) -> DesignSession | None:
        if session_id is None:
            return None
        try:
            key = session_id if isinstance(session_id, uuid.UUID) else uuid.UUID(session_id)
        except ValueError:
            return None
        session = self._sessions.get(key)
        if session is not None:
            self._sessions.move_to_end(key)
        return session

    def get_or_create(self, session_id: uuid.UUID | str | None) -> DesignSession:
        return self.get_session(session_id) or self.create_session()

    def apply(self, session_id: uuid.UUID | str | None, event: InputEvent) -> DesignSession:
        """Apply an event to a session, creating the session if it is unknown."""
        return handle_input(self.get_or_create(session_id), event)
