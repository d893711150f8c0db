"""
Reply engine — menu shortcuts first, then keyword intents, then the help fallback.
"""

import random
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from timesafe.services.matcher import matched_keyword
from timesafe.services.menu import shortcut
from timesafe.services.taxonomy import FALLBACK_RESPONSE, IntentCategory, templates_for

ROUTE_SHORTCUT = "shortcut"
ROUTE_INTENT = "intent"
ROUTE_FALLBACK = "fallback"


@dataclass(frozen=True)
class Decision:
    route: str
    reply: str
    category: Optional[IntentCategory] = None
    keyword: Optional[str] = None


class Responder:
    """
    Stateless apart from its randomness source.

    Pass a seeded `random.Random` to make template selection repeatable.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def explain(self, text: str) -> Decision:
        menu_reply = shortcut(text)
        if menu_reply is not None:
            return Decision(route=ROUTE_SHORTCUT, reply=menu_reply)

        match = matched_keyword(text)
        if match:
            category, keyword = match
            reply = self._rng.choice(templates_for(category))
            return Decision(route=ROUTE_INTENT, reply=reply, category=category, keyword=keyword)

        return Decision(route=ROUTE_FALLBACK, reply=FALLBACK_RESPONSE)

    def respond(self, text: str) -> str:
        decision = self.explain(text)
        logger.debug(
            f"[{decision.route}] '{text[:40]}' -> "
            f"{decision.category.value if decision.category else '-'}"
        )
        return decision.reply


_default = Responder()


def respond(text: str) -> str:
    return _default.respond(text)


def explain(text: str) -> Decision:
    return _default.explain(text)
