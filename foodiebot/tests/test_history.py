from __future__ import annotations

import pytest

from foodiebot.chat.history import ConversationHistory
from foodiebot.chat.models import Role


class TestConversationHistory:
    def test_default_capacity_is_thirty(self):
        history = ConversationHistory()
        assert history.capacity == 30

    def test_append_and_snapshot_keep_order(self):
        history = ConversationHistory()
        history.append("user", "hi")
        history.append(Role.assistant, "hello")
        turns = history.snapshot()
        assert [(t.role, t.content) for t in turns] == [
            (Role.user, "hi"),
            (Role.assistant, "hello"),
        ]

    def test_never_exceeds_twice_the_cap(self):
        history = ConversationHistory(max_history_length=3)
        for i in range(50):
            history.append("user" if i % 2 == 0 else "assistant", str(i))
            assert len(history) <= 6

    def test_overflow_keeps_most_recent(self):
        history = ConversationHistory(max_history_length=2)
        for i in range(7):
            history.append("user", str(i))
        assert [t.content for t in history.snapshot()] == ["3", "4", "5", "6"]

    def test_positional_trim_can_orphan_a_reply(self):
        history = ConversationHistory(max_history_length=1)
        history.append("user", "q1")
        history.append("assistant", "a1")
        history.append("user", "q2")
        assert [t.role for t in history.snapshot()] == [Role.assistant, Role.user]

    def test_clear(self):
        history = ConversationHistory()
        history.append("user", "hi")
        history.clear()
        assert len(history) == 0
        assert history.snapshot() == []

    def test_snapshot_is_a_copy(self):
        history = ConversationHistory()
        history.append("user", "hi")
        snapshot = history.snapshot()
        snapshot.clear()
        assert len(history) == 1

    def test_pop_last_only_matching_role(self):
        history = ConversationHistory()
        history.append("user", "hi")
        assert history.pop_last(Role.assistant) is None
        assert history.pop_last(Role.user).content == "hi"
        assert history.pop_last(Role.user) is None

    def test_rejects_unknown_role(self):
        with pytest.raises(ValueError):
            ConversationHistory().append("narrator", "once upon a time")

    def test_rejects_zero_cap(self):
        with pytest.raises(ValueError):
            ConversationHistory(max_history_length=0)

    def test_state(self):
        history = ConversationHistory()
        history.append("user", "hi")
        assert history.state().turns[0].content == "hi"
