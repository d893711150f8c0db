"""
Chat widget WebSocket — one conversation session per connection.
"""

import json

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from loguru import logger

from timesafe.models.entities import Message
from timesafe.models.schemas import MessageResponse
from timesafe.routes.chat import get_store
from timesafe.services.session_service import SessionClosed, SessionNotFound, SessionStore
from timesafe.services.taxonomy import QUICK_REPLIES

router = APIRouter(tags=["widget"])


def _parse_incoming(raw: str) -> str:
    """Accept either {"message": "..."} or the bare text the user typed."""
    if raw.lstrip().startswith("{"):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            return raw
        if isinstance(data, dict):
            message = data.get("message", "")
            return message if isinstance(message, str) else ""
    return raw


def _message_event(message: Message) -> dict:
    return {"type": "message", **MessageResponse.from_entity(message).model_dump(mode="json")}


@router.websocket("/ws/chat")
async def chat_websocket(websocket: WebSocket, sessions: SessionStore = Depends(get_store)):
    await websocket.accept()

    async def push(event: str, payload: object) -> None:
        if event == "message":
            await websocket.send_json(_message_event(payload))
        elif event == "typing":
            await websocket.send_json({"type": "typing", "value": payload})

    session = sessions.create(on_event=push)
    logger.info(f"WebSocket connected: session={session.id}")

    try:
        await websocket.send_json({
            "type": "session",
            "session_id": session.id,
            "quick_replies": list(QUICK_REPLIES),
        })
        for message in session.messages:
            await websocket.send_json(_message_event(message))

        while True:
            raw = await websocket.receive_text()
            # also refreshes the idle timer; raises once the session is gone
            await sessions.get(session.id).submit(_parse_incoming(raw))

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected: session={session.id}")
    except (SessionClosed, SessionNotFound):
        logger.info(f"Session {session.id} ended elsewhere, closing WebSocket")
        await websocket.close(code=1000)
    finally:
        if session.id in sessions:
            await sessions.close(session.id)
