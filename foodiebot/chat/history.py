from __future__ import annotations

from collections import deque

from .models import ConversationState, ConversationTurn, Role

DEFAULT_MAX_HISTORY_LENGTH = 15


class ConversationHistory:
    """Append-only turn log holding at most ``2 * max_history_length`` turns.

    Overflow drops the oldest turns by position, so a user turn can lose its
    reply at the boundary.
    """

    def __init__(self, max_history_length: int = DEFAULT_MAX_HISTORY_LENGTH) -> None:
        if max_history_length < 1:
            raise ValueError("max_history_length must be at least 1")
        self.max_history_length = max_history_length
        self._turns: deque[ConversationTurn] = deque(maxlen=2 * max_history_length)

    @property
    def capacity(self) -> int:
        return 2 * self.max_history_length

    def append(self, role: Role | str, content: str) -> None:
        self._turns.append(ConversationTurn(role=Role(role), content=content))

    def pop_last(self, role: Role | str) -> ConversationTurn | None:
        """Remove the newest turn if it has ``role``; used to withdraw a turn."""
        if self._turns and self._turns[-1].role == Role(role):
            return self._turns.pop()
        return None

    def clear(self) -> None:
        self._turns.clear()

    def snapshot(self) -> list[ConversationTurn]:
        return list(self._turns)

    def state(self) -> ConversationState:
        return ConversationState(turns=self.snapshot())

    def __len__(self) -> int:
        return len(self._turns)
