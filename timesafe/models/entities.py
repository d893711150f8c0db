"""
Chat transcript entities.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
import pytz


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Origin(str, Enum):
    USER = "user"
    BOT = "bot"


@dataclass(frozen=True)
class Message:
    origin: Origin
    text: str
    sent_at: datetime = field(default_factory=_utcnow)

    def clock_time(self, tz_name: str = "Asia/Kolkata") -> str:
        """Two-digit 12-hour clock time as the widget shows it, e.g. '03:45 pm'."""
        return format_clock(self.sent_at, tz_name)


def format_clock(moment: datetime, tz_name: str) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    local = moment.astimezone(pytz.timezone(tz_name))
    return local.strftime("%I:%M %p").lower()
