"""
Keyword matcher — maps a raw utterance to the first intent whose keyword it contains.
"""

from typing import Optional, Tuple

from loguru import logger

from timesafe.services.taxonomy import INTENTS, IntentCategory


def _normalize(text: str) -> str:
    # str.lower leaves Devanagari untouched
    return text.lower()


def matched_keyword(text: str) -> Optional[Tuple[IntentCategory, str]]:
    """
    Return the (category, keyword) pair that decides the match, or None.

    Categories are scanned in priority order and the scan stops at the first
    keyword found anywhere in the lowercased text (substring, not whole word).
    """
    msg = _normalize(text)
    for intent in INTENTS:
        for keyword in intent.keywords:
            if keyword in msg:
                logger.debug(f"Matched '{keyword}' -> {intent.category.value}")
                return intent.category, keyword
    return None


def classify(text: str) -> Optional[IntentCategory]:
    match = matched_keyword(text)
    return match[0] if match else None
