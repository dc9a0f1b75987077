"""Keyword detection of success and capacity-error messages on the console.

Both checks match free text in alert/status regions against a fixed
vocabulary, so they only hold as long as the console keeps its wording.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from playwright.sync_api import Error as PlaywrightError

from ..locator import locate, selector_probe
from ..locator.selectors import (
    CAPACITY_KEYWORDS,
    ERROR_SELECTORS,
    SUCCESS_KEYWORDS,
    SUCCESS_SELECTORS,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from playwright.sync_api import ElementHandle, Frame

REDIRECT_MESSAGE = "Redirected to instances page - likely created successfully"


def contains_keyword(text: str | None, keywords: Sequence[str]) -> bool:
    lowered = (text or "").lower()
    return any(k in lowered for k in keywords)


def is_instances_url(url: str | None) -> bool:
    """True when the console has moved from the create form to the instance list."""
    url = url or ""
    return "/instances" in url and "/create" not in url


def _find_text(frame: Frame, selectors: Sequence[str], keywords: Sequence[str]) -> str | None:
    def _matches(element: ElementHandle) -> bool:
        return contains_keyword(element.text_content(), keywords)

    found = locate([selector_probe(s, _matches) for s in selectors], [frame])
    if found is None:
        return None
    return (found.element.text_content() or "").strip()


def check_instance_created(frame: Frame) -> str | None:
    """Return the success message, or None if the instance is not created yet."""
    message = _find_text(frame, SUCCESS_SELECTORS, SUCCESS_KEYWORDS)
    if message:
        return message
    try:
        url = frame.url
    except PlaywrightError:
        return None
    if is_instances_url(url):
        return REDIRECT_MESSAGE
    return None


def check_for_errors(frame: Frame) -> str | None:
    """Return a capacity/quota error message if one is displayed."""
    return _find_text(frame, ERROR_SELECTORS, CAPACITY_KEYWORDS) or None
