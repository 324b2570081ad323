from unittest.mock import MagicMock, patch

import pytest

from foodiebot.llm.config import LLMConfig
from foodiebot.llm.groq_client import LLMError, LLMNotConfiguredError, complete_chat, llm_available

MESSAGES = [
    {"role": "system", "content": "You are FoodieBot."},
    {"role": "user", "content": "Where should I eat?"},
]

ENABLED_CONFIG = LLMConfig(api_key="test-key", enabled=True)
DISABLED_CONFIG = LLMConfig(api_key="test-key", enabled=False)


def _mock_groq_response(content: str | None) -> MagicMock:
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


@patch("foodiebot.llm.groq_client.Groq")
def test_complete_chat_returns_reply(mock_groq_cls):
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_groq_response(
        "  Try Sushi Zen, it's 200 m away.  "
    )

    result = complete_chat(MESSAGES, config=ENABLED_CONFIG)

    assert result == "Try Sushi Zen, it's 200 m away."
    kwargs = mock_groq_cls.return_value.chat.completions.create.call_args.kwargs
    assert kwargs["messages"] == MESSAGES
    assert kwargs["model"] == ENABLED_CONFIG.model


@patch("foodiebot.llm.groq_client.Groq")
def test_complete_chat_wraps_api_error(mock_groq_cls):
    mock_groq_cls.return_value.chat.completions.create.side_effect = Exception("API timeout")

    with pytest.raises(LLMError, match="API timeout"):
        complete_chat(MESSAGES, config=ENABLED_CONFIG)


@patch("foodiebot.llm.groq_client.Groq")
def test_complete_chat_rejects_empty_reply(mock_groq_cls):
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_groq_response(None)

    with pytest.raises(LLMError, match="empty"):
        complete_chat(MESSAGES, config=ENABLED_CONFIG)


def test_complete_chat_disabled():
    with pytest.raises(LLMNotConfiguredError):
        complete_chat(MESSAGES, config=DISABLED_CONFIG)


def test_complete_chat_without_key():
    assert llm_available(LLMConfig(api_key="")) is False
    with pytest.raises(LLMNotConfiguredError):
        complete_chat(MESSAGES, config=LLMConfig(api_key=""))


def test_complete_chat_without_messages():
    with pytest.raises(LLMError):
        complete_chat([], config=ENABLED_CONFIG)
