"""
Conversation sessions — the widget transcript plus its pending "typing" replies.

A session starts idle with the greeting already in its transcript. Each
submitted message gets its own reply task that waits out the typing delay and
then appends the bot answer. Closing the session cancels every pending reply.
"""

import asyncio
import time
import uuid
from datetime import datetime, timezone
from typing import Awaitable, Callable, Dict, List, Optional, Set, Tuple

from loguru import logger

from timesafe.config import settings
from timesafe.models.entities import Message, Origin
from timesafe.services.responder import Responder
from timesafe.services.taxonomy import GREETING_MESSAGE

EventHandler = Callable[[str, object], Awaitable[None]]

STATE_IDLE = "idle"
STATE_AWAITING = "awaiting_bot_reply"


class SessionClosed(Exception):
    """Raised when a message is submitted to a session that was torn down."""


class SessionNotFound(Exception):
    def __init__(self, session_id: str):
        super().__init__(f"Session {session_id} not found")
        self.session_id = session_id


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConversationSession:
    def __init__(
        self,
        responder: Optional[Responder] = None,
        reply_delay: Optional[float] = None,
        on_event: Optional[EventHandler] = None,
        clock: Callable[[], datetime] = _utcnow,
        session_id: Optional[str] = None,
    ):
        self.id = session_id or str(uuid.uuid4())
        self._responder = responder or Responder()
        self._reply_delay = settings.REPLY_DELAY_SECONDS if reply_delay is None else reply_delay
        self._on_event = on_event
        self._clock = clock
        self._messages: List[Message] = [Message(Origin.BOT, GREETING_MESSAGE, clock())]
        self._pending: Set[asyncio.Task] = set()
        self._closed = False
        self.created_at = self._messages[0].sent_at

    # ── State ────────────────────────────────────────────
    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def awaiting_response(self) -> bool:
        return bool(self._pending)

    @property
    def state(self) -> str:
        return STATE_AWAITING if self._pending else STATE_IDLE

    @property
    def closed(self) -> bool:
        return self._closed

    # ── Events ───────────────────────────────────────────
    async def _emit(self, event: str, payload: object) -> None:
        if self._on_event is None:
            return
        try:
            await self._on_event(event, payload)
        except Exception as e:
            # The transcript stays authoritative even if a listener goes away
            logger.warning(f"Session {self.id[:8]} event '{event}' not delivered: {e}")

    async def _append(self, message: Message) -> None:
        self._messages.append(message)
        await self._emit("message", message)

    # ── Transitions ──────────────────────────────────────
    async def submit(self, text: str) -> Optional[Message]:
        """
        Append a user message and schedule its reply.

        Blank input (after trimming) is ignored and returns None. The message
        text is stored exactly as typed.
        """
        if self._closed:
            raise SessionClosed(f"Session {self.id} is closed")
        if not text.strip():
            return None

        user_msg = Message(Origin.USER, text, self._clock())
        await self._append(user_msg)
        await self._emit("typing", True)
        if self._closed:
            # torn down while the listener was being notified
            return user_msg

        task = asyncio.get_running_loop().create_task(self._reply(text))
        self._pending.add(task)

        logger.info(f"Session {self.id[:8]}: user message queued ({len(self._pending)} pending)")
        return user_msg

    async def _reply(self, text: str) -> None:
        task = asyncio.current_task()
        try:
            await asyncio.sleep(self._reply_delay)
            reply = self._responder.respond(text)
            await self._append(Message(Origin.BOT, reply, self._clock()))
        finally:
            self._pending.discard(task)
        if not self._pending and not self._closed:
            await self._emit("typing", False)

    async def wait_idle(self) -> None:
        """Wait until every reply scheduled so far has been appended."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def abort(self) -> None:
        """Mark the session closed and cancel pending replies without waiting for them."""
        if self._closed:
            return
        self._closed = True
        pending = list(self._pending)
        for task in pending:
            task.cancel()
        self._pending.clear()
        logger.info(f"Session {self.id[:8]} closed, {len(pending)} pending replies cancelled")

    async def close(self) -> None:
        pending = list(self._pending)
        self.abort()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    async def __aenter__(self) -> "ConversationSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


class SessionStore:
    """
    In-memory registry of open sessions, keyed by session id.

    Sessions idle for longer than `idle_ttl` seconds are evicted on the next
    `create` or `get`. When `max_sessions` are open, creating another one
    evicts the least recently used. Eviction cancels pending replies.
    """

    def __init__(
        self,
        responder: Optional[Responder] = None,
        reply_delay: Optional[float] = None,
        idle_ttl: Optional[float] = None,
        max_sessions: Optional[int] = None,
        now: Callable[[], float] = time.monotonic,
    ):
        self._responder = responder
        self._reply_delay = reply_delay
        self._idle_ttl = settings.SESSION_IDLE_TTL_SECONDS if idle_ttl is None else idle_ttl
        self._max_sessions = settings.MAX_SESSIONS if max_sessions is None else max_sessions
        self._now = now
        self._sessions: Dict[str, ConversationSession] = {}
        self._last_seen: Dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def _evict(self, session_id: str, reason: str) -> None:
        session = self._sessions.pop(session_id)
        self._last_seen.pop(session_id, None)
        session.abort()
        logger.info(f"Session {session_id[:8]} evicted ({reason})")

    def _evict_idle(self) -> None:
        cutoff = self._now() - self._idle_ttl
        for session_id, seen in list(self._last_seen.items()):
            if seen < cutoff:
                self._evict(session_id, "idle")

    def create(self, on_event: Optional[EventHandler] = None) -> ConversationSession:
        self._evict_idle()
        while self._sessions and len(self._sessions) >= self._max_sessions:
            oldest = min(self._last_seen, key=self._last_seen.get)
            self._evict(oldest, "capacity")

        session = ConversationSession(
            responder=self._responder,
            reply_delay=self._reply_delay,
            on_event=on_event,
        )
        self._sessions[session.id] = session
        self._last_seen[session.id] = self._now()
        logger.info(f"Session {session.id[:8]} opened")
        return session

    def get(self, session_id: str) -> ConversationSession:
        """Look up a session and mark it as active."""
        self._evict_idle()
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        self._last_seen[session_id] = self._now()
        return session

    async def close(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise SessionNotFound(session_id)
        self._last_seen.pop(session_id, None)
        await session.close()

    async def close_all(self) -> None:
        sessions = list(self._sessions.values())
        self._sessions.clear()
        self._last_seen.clear()
        for session in sessions:
            await session.close()


store = SessionStore()
