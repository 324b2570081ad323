from __future__ import annotations

import logging
import os

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from .chat.models import ChatRequest, ChatResponse, ConversationState, ProxyRequest
from .chat.session import ChatSession, SessionRegistry
from .llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from .llm.groq_client import LLMError, LLMNotConfiguredError, complete_chat
from .recommendations.models import (
    Place,
    RecommendationRequest,
    RecommendationResponse,
    UserPreferences,
)
from .recommendations.retrieval import get_recommendations

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

app = FastAPI(title="FoodieBot API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "foodiebot-secret-change-in-production"),
)

_sessions = SessionRegistry()


# ── Dependencies ─────────────────────────────────────────────────────────


def get_sessions() -> SessionRegistry:
    return _sessions


def get_llm_config() -> LLMConfig:
    return DEFAULT_LLM_CONFIG


def current_session(
    request: Request,
    sessions: SessionRegistry = Depends(get_sessions),
) -> ChatSession:
    session = sessions.get_or_create(request.session.get("session_id"))
    request.session["session_id"] = session.session_id
    return session


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Recommendations ──────────────────────────────────────────────────────


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(
    body: RecommendationRequest,
    session: ChatSession = Depends(current_session),
) -> RecommendationResponse:
    return get_recommendations(body, session.preferences)


@app.get("/preferences", response_model=UserPreferences)
def preferences(session: ChatSession = Depends(current_session)) -> UserPreferences:
    return session.preferences


@app.post("/preferences/learn", response_model=UserPreferences)
def learn_preferences(
    body: Place,
    session: ChatSession = Depends(current_session),
) -> UserPreferences:
    return session.learn(body)


# ── Chat ─────────────────────────────────────────────────────────────────


@app.post("/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    session: ChatSession = Depends(current_session),
) -> ChatResponse:
    reply = await session.dispatcher.respond(
        body.message,
        body.recommendations,
        body.user_location,
        body.selected_restaurant,
    )
    return ChatResponse(response=reply, conversation_length=len(session.history))


@app.get("/chat/history", response_model=ConversationState)
def chat_history(session: ChatSession = Depends(current_session)) -> ConversationState:
    return session.history.state()


@app.post("/chat/clear")
def chat_clear(session: ChatSession = Depends(current_session)) -> dict:
    session.history.clear()
    return {"status": "cleared"}


# ── Platform AI proxy ────────────────────────────────────────────────────


@app.post("/api/ai-proxy")
def ai_proxy(
    body: ProxyRequest,
    config: LLMConfig = Depends(get_llm_config),
):
    logger.info(
        "AI proxy request: %d messages, recommendations=%s, location=%s, conversation_length=%d",
        len(body.messages),
        body.metadata.has_recommendations,
        body.metadata.has_user_location,
        body.metadata.conversation_length,
    )
    messages = [turn.model_dump(mode="json") for turn in body.messages]
    try:
        reply = complete_chat(messages, config=config)
    except LLMNotConfiguredError as exc:
        return JSONResponse(status_code=503, content={"error": str(exc)})
    except LLMError as exc:
        return JSONResponse(status_code=502, content={"error": str(exc)})
    return {"response": reply}
