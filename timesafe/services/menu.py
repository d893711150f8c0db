"""
Numeric help-menu shortcuts ("1".."5").
"""

from typing import Optional

from timesafe.services.taxonomy import MENU_SHORTCUTS


def shortcut(text: str) -> Optional[str]:
    """Return the fixed menu reply when `text` is exactly one of the menu digits."""
    return MENU_SHORTCUTS.get(text)
