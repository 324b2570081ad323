from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from ..recommendations.models import LatLng, Place
from .config import DEFAULT_CHAT_CONFIG, ChatConfig
from .context import build_context, build_system_prompt
from .history import ConversationHistory
from .models import (
    ConversationTurn,
    ProxyMetadata,
    ProxyRequest,
    ProxyResponse,
    Role,
    SelectedRestaurant,
)
from .transport import UNAVAILABLE_PREFIX, Transport, resolve_transport, unavailable_message

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Failed to get AI response"
SUPERSEDED_MESSAGE = "This message was replaced by a newer one before the assistant replied."
AVAILABILITY_PROBE = "Hello"


class ProxyDispatcher:
    """Runs chat turns for one conversation.

    Turns are serialized by a lock. Sending a new message cancels the
    transport call still in flight for an older one; the older turn then
    returns ``SUPERSEDED_MESSAGE`` and its user turn is withdrawn.
    """

    def __init__(
        self,
        history: ConversationHistory | None = None,
        transport: Transport | None = None,
        config: ChatConfig = DEFAULT_CHAT_CONFIG,
    ) -> None:
        self.config = config
        self.history = history or ConversationHistory(config.max_history_length)
        self.transport = transport or resolve_transport(config)
        self._lock = asyncio.Lock()
        self._inflight: asyncio.Task | None = None

    async def respond(
        self,
        message: str,
        recommendations: Sequence[Place] | None,
        user_location: LatLng | None,
        selected_restaurant: SelectedRestaurant | None = None,
    ) -> str:
        if self._inflight is not None and not self._inflight.done():
            logger.info("New message arrived, cancelling in-flight AI request")
            self._inflight.cancel()

        async with self._lock:
            try:
                return await self._respond(
                    message, recommendations, user_location, selected_restaurant,
                )
            except Exception:
                logger.exception("AI dispatch failed")
                return FAILURE_MESSAGE

    async def _respond(
        self,
        message: str,
        recommendations: Sequence[Place] | None,
        user_location: LatLng | None,
        selected_restaurant: SelectedRestaurant | None,
    ) -> str:
        context = build_context(recommendations, user_location, selected_restaurant)
        system_prompt = build_system_prompt(context)

        self.history.append(Role.user, message)

        request = ProxyRequest(
            messages=[ConversationTurn(role=Role.system, content=system_prompt), *self.history.snapshot()],
            metadata=ProxyMetadata(
                has_recommendations=bool(recommendations),
                has_user_location=user_location is not None,
                has_selected_restaurant=selected_restaurant is not None,
                conversation_length=len(self.history),
            ),
        )

        result = await self._send(request)
        if result is None:
            self.history.pop_last(Role.user)
            return SUPERSEDED_MESSAGE

        if result.ok or self.config.record_failed_turns:
            self.history.append(Role.assistant, result.text)
        else:
            self.history.pop_last(Role.user)

        return result.text

    async def _send(self, request: ProxyRequest) -> ProxyResponse | None:
        """Run the transport call; ``None`` means a newer message cancelled it."""
        task = asyncio.ensure_future(self.transport.send(request))
        self._inflight = task
        try:
            done, _ = await asyncio.wait({task}, timeout=self.config.timeout)
        finally:
            if self._inflight is task:
                self._inflight = None
            if not task.done():
                task.cancel()

        if not done:
            logger.warning("AI request timed out after %ss", self.config.timeout)
            return ProxyResponse(
                text=unavailable_message(f"request timed out after {self.config.timeout:g}s"),
                ok=False,
            )
        if task.cancelled():
            return None
        return task.result()

    async def check_availability(self) -> bool:
        reply = await self.respond(AVAILABILITY_PROBE, [], None)
        return bool(reply) and reply != FAILURE_MESSAGE and not reply.startswith(UNAVAILABLE_PREFIX)
