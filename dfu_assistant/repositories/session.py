import logging
from abc import ABC, abstractmethod
from typing import Dict, Hashable, Optional

from ..state.models import SessionState

logger = logging.getLogger(__name__)


class ConversationStore(ABC):
    """
    Defines how the application finds the in-flight wizard state for a turn.
    State lives in process memory only and is lost on restart.
    """

    @abstractmethod
    def get_or_create(self, key: Hashable) -> SessionState:
        """Returns the state for this turn, creating a fresh one if needed."""
        pass

    @abstractmethod
    def get(self, key: Hashable) -> Optional[SessionState]:
        """Retrieves state without creating or re-registering anything."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Drops every session (called on shutdown)."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass


class TurnCountConversationStore(ConversationStore):
    """
    Keys state by the number of prior turns in the conversation, which is all
    an IDE chat host reliably provides.

    A lookup falls back to the immediately preceding count, and every lookup
    re-registers the state under count + 1 so the next turn finds it even
    when the host's count is off by one.

    Known limitation: two conversations whose turn counts collide share (and
    corrupt) each other's state. Use SessionIdConversationStore when the
    caller can send a stable session id.
    """

    def __init__(self):
        self._store: Dict[int, SessionState] = {}

    def get_or_create(self, key: int) -> SessionState:
        session = self.get(key)
        if session is None:
            logger.debug(f"No session for turn {key}, starting a new one")
            session = SessionState()
        self._store[key + 1] = session
        return session

    def get(self, key: int) -> Optional[SessionState]:
        session = self._store.get(key)
        if session is None:
            session = self._store.get(key - 1)
        return session

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)


class SessionIdConversationStore(ConversationStore):
    """
    Exact keying by a caller-supplied session id.
    """

    def __init__(self):
        self._store: Dict[str, SessionState] = {}

    def get_or_create(self, key: str) -> SessionState:
        if key not in self._store:
            logger.debug(f"Creating session {key}")
            self._store[key] = SessionState()
        return self._store[key]

    def get(self, key: str) -> Optional[SessionState]:
        return self._store.get(key)

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
