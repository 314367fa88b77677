"""
Helpers shared by the result parsers.
"""

from typing import Optional

from bs4 import Tag


def element_text(element: Optional[Tag]) -> Optional[str]:
    """Whitespace-normalized text of an element, or None if absent."""
    if element is None:
        return None
    return " ".join(element.get_text().split())


def div_selector(classes: str) -> str:
    """Build a CSS selector matching a div carrying all given classes."""
    return "div." + ".".join(classes.split())
