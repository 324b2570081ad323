from __future__ import annotations

import logging
import time
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable

from ..recommendations.models import Place, UserPreferences
from ..recommendations.preferences import learn_from_selection
from .config import DEFAULT_CHAT_CONFIG, ChatConfig
from .dispatcher import ProxyDispatcher
from .history import ConversationHistory
from .transport import Transport, resolve_transport

logger = logging.getLogger(__name__)


@dataclass
class ChatSession:
    """Everything one user session carries between requests."""

    session_id: str
    dispatcher: ProxyDispatcher
    preferences: UserPreferences = field(default_factory=UserPreferences)
    last_seen: float = 0.0

    @property
    def history(self) -> ConversationHistory:
        return self.dispatcher.history

    def learn(self, selected: Place) -> UserPreferences:
        self.preferences = learn_from_selection(self.preferences, selected)
        return self.preferences


class SessionRegistry:
    """In-memory session contexts keyed by session id.

    The transport is resolved once for the registry and shared by every
    session's dispatcher. Sessions idle longer than ``config.session_ttl``
    are dropped, and beyond ``config.max_sessions`` the least recently
    used one is evicted.
    """

    def __init__(
        self,
        config: ChatConfig = DEFAULT_CHAT_CONFIG,
        transport_factory: Callable[[ChatConfig], Transport] = resolve_transport,
    ) -> None:
        if config.max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.config = config
        self._transport_factory = transport_factory
        self._transport: Transport | None = None
        # oldest first
        self._sessions: OrderedDict[str, ChatSession] = OrderedDict()

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            self._transport = self._transport_factory(self.config)
        return self._transport

    def get_or_create(self, session_id: str | None) -> ChatSession:
        now = time.time()
        self._expire(now)

        session = self._sessions.get(session_id) if session_id else None
        if session is not None:
            session.last_seen = now
            self._sessions.move_to_end(session.session_id)
            return session

        session_id = session_id or uuid.uuid4().hex
        dispatcher = ProxyDispatcher(
            history=ConversationHistory(self.config.max_history_length),
            transport=self.transport,
            config=self.config,
        )
        session = ChatSession(session_id=session_id, dispatcher=dispatcher, last_seen=now)
        self._sessions[session_id] = session
        logger.debug("Created chat session %s", session_id)

        while len(self._sessions) > self.config.max_sessions:
            oldest = next(iter(self._sessions))
            logger.debug("Evicting least recently used chat session %s", oldest)
            self.drop(oldest)
        return session

    def _expire(self, now: float) -> None:
        if self.config.session_ttl <= 0:
            return
        expired = [
            sid for sid, session in self._sessions.items()
            if now - session.last_seen >= self.config.session_ttl
        ]
        for sid in expired:
            self.drop(sid)
        if expired:
            logger.info("Expired %d idle chat sessions", len(expired))

    def drop(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
