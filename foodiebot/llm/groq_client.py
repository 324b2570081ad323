from __future__ import annotations

import logging
from typing import Any

from groq import Groq

from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)


class LLMError(RuntimeError):
    """LLM interaction failure."""


class LLMNotConfiguredError(LLMError):
    """No provider credentials, or the provider is switched off."""


def llm_available(config: LLMConfig = DEFAULT_LLM_CONFIG) -> bool:
    return config.enabled and bool(config.api_key)


def complete_chat(
    messages: list[dict[str, Any]],
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> str:
    """
    Forward an already assembled conversation to Groq.

    ``messages`` is the ``[{role, content}, ...]`` list the chat proxy
    receives, system prompt first. Returns the assistant reply text.
    Raises ``LLMError`` on API failures and empty completions.
    """
    if not llm_available(config):
        raise LLMNotConfiguredError("AI provider is not configured")

    if not messages:
        raise LLMError("No messages to send")

    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout)
        response = client.chat.completions.create(
            model=config.model,
            messages=messages,
            max_tokens=config.max_tokens,
            temperature=config.temperature,
        )
    except Exception as exc:
        logger.warning("Groq chat completion failed", exc_info=True)
        raise LLMError(f"AI provider request failed: {exc}") from exc

    content = (response.choices[0].message.content or "").strip() if response.choices else ""
    if not content:
        raise LLMError("AI provider returned an empty response")
    return content
