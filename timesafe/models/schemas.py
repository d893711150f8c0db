"""
Pydantic request / response schemas for the API.
"""

from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from timesafe.config import settings
from timesafe.models.entities import Message


# ── Messages ─────────────────────────────────────────────
class MessageResponse(BaseModel):
    origin: str
    text: str
    sent_at: datetime
    time: str

    @classmethod
    def from_entity(cls, message: Message) -> "MessageResponse":
        return cls(
            origin=message.origin.value,
            text=message.text,
            sent_at=message.sent_at,
            time=message.clock_time(settings.DISPLAY_TIMEZONE),
        )


# ── Stateless responder ──────────────────────────────────
class RespondRequest(BaseModel):
    message: str


class RespondResponse(BaseModel):
    reply: str


class ClassifyResponse(BaseModel):
    route: str  # shortcut / intent / fallback
    category: Optional[str] = None
    keyword: Optional[str] = None
    reply: str


# ── Sessions ─────────────────────────────────────────────
class SubmitRequest(BaseModel):
    message: str
    wait: bool = False


class TranscriptResponse(BaseModel):
    session_id: str
    state: str
    awaiting_response: bool
    messages: List[MessageResponse] = []


class SubmitResponse(TranscriptResponse):
    user_message: MessageResponse


class QuickRepliesResponse(BaseModel):
    quick_replies: List[str]
