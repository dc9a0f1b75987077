"""Frame-aware element locator.

Selector fallbacks are expressed as an ordered list of probes. A probe takes a
frame and returns a matching element or None. ``locate`` tries each probe, in
order, against every frame, and skips frames that raise on access (detached or
otherwise unreachable frames).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from playwright.sync_api import Error as PlaywrightError

from .selectors import (
    BUTTON_SCAN_SELECTOR,
    CONTENT_SELECTORS,
    CREATE_BUTTON_SELECTOR,
    CREATE_BUTTON_SELECTORS,
    CREATE_LABEL,
    FALLBACK_FRAME_SELECTOR,
    FRAME_SELECTORS,
    HEADER_SELECTORS,
)

if TYPE_CHECKING:
    from playwright.sync_api import ElementHandle, Frame, Page

    Probe = Callable[[Frame], ElementHandle | None]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectorProbe:
    """Probe matching the first element for ``selector`` that passes ``accept``."""

    selector: str
    accept: Callable[[ElementHandle], bool] | None = None

    def __call__(self, frame: Frame) -> ElementHandle | None:
        for element in frame.query_selector_all(self.selector):
            if self.accept is None or self.accept(element):
                return element
        return None


@dataclass
class LocatedElement:
    frame: Frame
    element: ElementHandle
    probe: str


def selector_probe(
    selector: str, accept: Callable[[ElementHandle], bool] | None = None
) -> SelectorProbe:
    return SelectorProbe(selector=selector, accept=accept)


def frame_label(frame: Frame) -> str:
    try:
        return frame.name or frame.url or "<frame>"
    except PlaywrightError:
        return "<frame>"


def walk_frames(root: Frame) -> Iterator[Frame]:
    """Yield ``root`` and then every nested frame, depth-first."""
    yield root
    for child in root.child_frames:
        yield from walk_frames(child)


def locate(probes: Iterable[Probe], frames: Iterable[Frame]) -> LocatedElement | None:
    """Return the first match in probe order, or None.

    For each probe the frames are tried in the given order. A frame that raises
    a Playwright error is skipped for the rest of the search.
    """
    frames = list(frames)
    unreachable: set[int] = set()
    for probe in probes:
        for frame in frames:
            if id(frame) in unreachable:
                continue
            try:
                element = probe(frame)
            except PlaywrightError as e:
                logger.debug("Skipping inaccessible frame %s: %s", frame_label(frame), e)
                unreachable.add(id(frame))
                continue
            if element is not None:
                return LocatedElement(
                    frame=frame,
                    element=element,
                    probe=getattr(probe, "selector", repr(probe)),
                )
    return None


def is_create_control(element: ElementHandle) -> bool:
    text = (element.text_content() or "").strip()
    value = (element.get_attribute("value") or "").strip()
    label = element.get_attribute("aria-label") or ""
    return text == CREATE_LABEL or value == CREATE_LABEL or CREATE_LABEL in label


def create_button_probes() -> list[SelectorProbe]:
    probes = [selector_probe(s, is_create_control) for s in CREATE_BUTTON_SELECTORS]
    # Last resort: any button or submit input that looks like Create
    probes.append(selector_probe(BUTTON_SCAN_SELECTOR, is_create_control))
    return probes


def find_create_button(frame: Frame) -> LocatedElement | None:
    return locate(create_button_probes(), walk_frames(frame))


def _has_create_button(frame: Frame) -> bool:
    return locate([selector_probe(CREATE_BUTTON_SELECTOR)], [frame]) is not None


def _content_frame(frame: Frame, selector: str) -> Frame | None:
    try:
        handle = frame.query_selector(selector)
        return handle.content_frame() if handle else None
    except PlaywrightError:
        return None


def find_action_frame(page: Page) -> Frame:
    """Resolve the frame holding the Create button.

    Tries the main frame, then the known iframe containers, then every nested
    frame. Falls back to the sandbox container's frame, or the main frame.
    """
    main = page.main_frame
    if _has_create_button(main):
        return main

    for selector in FRAME_SELECTORS:
        frame = _content_frame(main, selector)
        if frame is not None and _has_create_button(frame):
            logger.info("Found Create button in frame %s", selector)
            return frame

    for frame in walk_frames(main):
        if frame is main:
            continue
        if _has_create_button(frame):
            logger.info("Found Create button in iframe: %s", frame_label(frame))
            return frame

    return _content_frame(main, FALLBACK_FRAME_SELECTOR) or main


def describe_buttons(frame: Frame) -> list[str]:
    """One line per button or submit input, for diagnosing selector drift."""
    lines = []
    try:
        for i, element in enumerate(frame.query_selector_all(BUTTON_SCAN_SELECTOR)):
            text = (element.text_content() or "").strip() or element.get_attribute("value")
            lines.append(
                f'Button {i}: "{text or "no text"}" - '
                f"{element.get_attribute('class') or ''} - "
                f"aria-label: {element.get_attribute('aria-label')}"
            )
    except PlaywrightError as e:
        logger.debug("Could not list buttons in %s: %s", frame_label(frame), e)
    return lines


def find_content_element(frame: Frame) -> ElementHandle | None:
    found = locate([selector_probe(s) for s in CONTENT_SELECTORS], [frame])
    return found.element if found else None


def find_header_element(frame: Frame) -> ElementHandle | None:
    found = locate([selector_probe(s) for s in HEADER_SELECTORS], [frame])
    return found.element if found else None
