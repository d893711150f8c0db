"""
Text chat REST endpoints — stateless replies and widget sessions.
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.requests import HTTPConnection
from loguru import logger

from timesafe.middleware.rate_limit import CHAT_RATE_LIMIT, limiter
from timesafe.models.schemas import (
    ClassifyResponse,
    MessageResponse,
    QuickRepliesResponse,
    RespondRequest,
    RespondResponse,
    SubmitRequest,
    SubmitResponse,
    TranscriptResponse,
)
from timesafe.services import responder
from timesafe.services.session_service import (
    ConversationSession,
    SessionNotFound,
    SessionStore,
)
from timesafe.services.taxonomy import QUICK_REPLIES

router = APIRouter(prefix="/api/chat", tags=["chat"])


def get_store(connection: HTTPConnection) -> SessionStore:
    return connection.app.state.sessions


def _get_session(sessions: SessionStore, session_id: str) -> ConversationSession:
    try:
        return sessions.get(session_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found")


def _transcript(session: ConversationSession) -> dict:
    return {
        "session_id": session.id,
        "state": session.state,
        "awaiting_response": session.awaiting_response,
        "messages": [MessageResponse.from_entity(m) for m in session.messages],
    }


# ---- Stateless ----
@router.post("/respond", response_model=RespondResponse)
@limiter.limit(CHAT_RATE_LIMIT)
async def respond_once(request: Request, body: RespondRequest):
    """Single reply for any channel that just needs text in, text out."""
    return RespondResponse(reply=responder.respond(body.message))


@router.post("/classify", response_model=ClassifyResponse)
@limiter.limit(CHAT_RATE_LIMIT)
async def classify_message(request: Request, body: RespondRequest):
    decision = responder.explain(body.message)
    return ClassifyResponse(
        route=decision.route,
        category=decision.category.value if decision.category else None,
        keyword=decision.keyword,
        reply=decision.reply,
    )


@router.get("/quick-replies", response_model=QuickRepliesResponse)
async def quick_replies():
    return QuickRepliesResponse(quick_replies=list(QUICK_REPLIES))


# ---- Sessions ----
@router.post("/sessions", response_model=TranscriptResponse, status_code=201)
@limiter.limit(CHAT_RATE_LIMIT)
async def open_session(request: Request, sessions: SessionStore = Depends(get_store)):
    session = sessions.create()
    return TranscriptResponse(**_transcript(session))


@router.get("/sessions/{session_id}", response_model=TranscriptResponse)
async def get_transcript(session_id: str, sessions: SessionStore = Depends(get_store)):
    return TranscriptResponse(**_transcript(_get_session(sessions, session_id)))


@router.post("/sessions/{session_id}/messages", response_model=SubmitResponse)
@limiter.limit(CHAT_RATE_LIMIT)
async def send_message(
    request: Request,
    session_id: str,
    body: SubmitRequest,
    sessions: SessionStore = Depends(get_store),
):
    session = _get_session(sessions, session_id)

    user_msg = await session.submit(body.message)
    if user_msg is None:
        raise HTTPException(status_code=400, detail="Message is required")

    if body.wait:
        await session.wait_idle()

    logger.info(f"Text chat [{session_id[:8]}]: '{body.message[:50]}' (wait={body.wait})")
    return SubmitResponse(
        user_message=MessageResponse.from_entity(user_msg),
        **_transcript(session),
    )


@router.delete("/sessions/{session_id}")
async def close_session(session_id: str, sessions: SessionStore = Depends(get_store)):
    try:
        await sessions.close(session_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found")
    return {"status": "closed", "session_id": session_id}
