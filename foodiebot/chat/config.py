from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

PLATFORM_ENDPOINT = "/api/ai-proxy"


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ChatConfig:
    # External proxy wins whenever it is set
    proxy_url: str = os.getenv("AI_PROXY_URL", "")
    platform_base_url: str = os.getenv("PLATFORM_BASE_URL", "http://localhost:8000")
    platform_endpoint: str = PLATFORM_ENDPOINT
    timeout: float = float(os.getenv("AI_TIMEOUT", "30"))
    max_history_length: int = int(os.getenv("MAX_HISTORY_LENGTH", "15"))
    record_failed_turns: bool = _env_flag("RECORD_FAILED_TURNS", True)
    max_sessions: int = int(os.getenv("MAX_SESSIONS", "1000"))
    session_ttl: float = float(os.getenv("SESSION_TTL", "3600"))  # idle seconds

    @property
    def uses_external_proxy(self) -> bool:
        return bool(self.proxy_url.strip())


DEFAULT_CHAT_CONFIG = ChatConfig()
