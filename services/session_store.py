"""In-memory registry of open chat sessions."""

import logging
import threading
import time
import uuid
from collections import OrderedDict
from typing import Callable, Optional

from services.conversation import ConversationSession

logger = logging.getLogger(__name__)


class ChatSessionStore:
    """
    Holds sessions for the lifetime of the process; nothing is persisted.

    Sessions idle for longer than ``ttl_seconds`` are dropped, and once
    ``max_sessions`` are open the least recently used one is evicted to make
    room for a new one.

    Args:
        max_sessions: Upper bound on open sessions
        ttl_seconds: Idle time after which a session expires; None disables expiry
        clock: Monotonic time source
    """

    def __init__(
        self,
        max_sessions: int = 1000,
        ttl_seconds: Optional[float] = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self._max_sessions = max_sessions
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: "OrderedDict[str, tuple[ConversationSession, float]]" = OrderedDict()
        self._lock = threading.Lock()

    def add(self, session: ConversationSession) -> str:
        session_id = uuid.uuid4().hex
        with self._lock:
            self._expire()
            while len(self._sessions) >= self._max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                logger.info("Evicted chat session %s: store is full", evicted_id)
            self._sessions[session_id] = (session, self._clock())
        return session_id

    def get(self, session_id: str) -> Optional[ConversationSession]:
        with self._lock:
            self._expire()
            entry = self._sessions.get(session_id)
            if entry is None:
                return None
            session = entry[0]
            self._sessions[session_id] = (session, self._clock())
            self._sessions.move_to_end(session_id)
            return session

    def discard(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def _expire(self) -> None:
        if self._ttl_seconds is None:
            return
        cutoff = self._clock() - self._ttl_seconds
        # Entries are ordered by last use, so stale ones are at the front.
        while self._sessions:
            session_id, (_, last_used) = next(iter(self._sessions.items()))
            if last_used > cutoff:
                break
            del self._sessions[session_id]
            logger.info("Expired idle chat session %s", session_id)
