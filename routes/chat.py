"""Routes for the report assistant chat."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool

from config.settings import Settings, get_settings
from middleware.auth import verify_api_key
from models import (
    ChatMessageRequest,
    ChatMessageResponse,
    ChatSessionRequest,
    ChatSessionResponse,
)
from services import ChatSessionStore, ConversationSession, GeminiClient
from utils.errors import ConfigurationError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/vehicle-damage/chat",
    tags=["Report Assistant"],
    dependencies=[Depends(verify_api_key)]
)

_session_store = ChatSessionStore(
    max_sessions=get_settings().chat_max_sessions,
    ttl_seconds=get_settings().chat_session_ttl_seconds,
)


def get_session_store() -> ChatSessionStore:
    """Process-wide session store."""
    return _session_store


def get_chat_model_service(settings: Settings = Depends(get_settings)) -> Optional[GeminiClient]:
    """Gemini client for chat, or None when no API key is configured."""
    try:
        return GeminiClient.for_text(settings)
    except ConfigurationError:
        return None


def _get_session(store: ChatSessionStore, session_id: str) -> ConversationSession:
    session = store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Chat session '{session_id}' not found")
    return session


def _session_response(session_id: str, session: ConversationSession) -> ChatSessionResponse:
    history = session.history
    greeting = history[0].text if session.is_ready and history else None
    return ChatSessionResponse(
        session_id=session_id,
        state=session.state,
        greeting=greeting,
        history=history,
    )


@router.post("/sessions", response_model=ChatSessionResponse, status_code=201)
async def create_chat_session(
    request: ChatSessionRequest,
    model_service: Optional[GeminiClient] = Depends(get_chat_model_service),
    store: ChatSessionStore = Depends(get_session_store),
):
    """
    Open a chat session primed with the damage report.

    When the assistant cannot be reached the session is still created; its
    history holds an apology and its state stays "uninitialized".
    """
    session = ConversationSession(model_service)
    await run_in_threadpool(session.initialize, request.results)
    session_id = store.add(session)
    logger.info("Opened chat session %s (%s)", session_id, session.state.value)
    return _session_response(session_id, session)


@router.get("/sessions/{session_id}", response_model=ChatSessionResponse)
async def get_chat_session(
    session_id: str,
    store: ChatSessionStore = Depends(get_session_store),
):
    """Return the state and history of a chat session."""
    return _session_response(session_id, _get_session(store, session_id))


@router.post("/sessions/{session_id}/messages", response_model=ChatMessageResponse)
async def send_chat_message(
    session_id: str,
    request: ChatMessageRequest,
    store: ChatSessionStore = Depends(get_session_store),
):
    """
    Send a question about the report.

    A failed model call still returns 200 with an apology as the reply.
    Returns 409 when the session is not ready or is answering another message.
    """
    session = _get_session(store, session_id)
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Message text must not be empty")

    reply = await run_in_threadpool(session.send, request.text)
    if reply is None:
        raise HTTPException(
            status_code=409,
            detail="Session is not ready or is still answering a previous message"
        )
    return ChatMessageResponse(reply=reply, history=session.history)


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_chat_session(
    session_id: str,
    store: ChatSessionStore = Depends(get_session_store),
):
    """Discard a chat session."""
    if not store.discard(session_id):
        raise HTTPException(status_code=404, detail=f"Chat session '{session_id}' not found")
