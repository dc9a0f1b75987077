"""On-page status indicator.

A fixed bar mounted at the top of the console content, as tall as the console
header. It only mirrors the poll state; rendering failures are logged and
ignored.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from playwright.sync_api import Error as PlaywrightError

from ..core.locator import find_content_element, find_header_element
from ..core.locator.selectors import DEFAULT_HEADER_HEIGHT

if TYPE_CHECKING:
    from playwright.sync_api import Frame

    from ..dto import StatusUpdate

logger = logging.getLogger(__name__)

STATUS_ELEMENT_ID = "create-retry-status"

_MOUNT_JS = """
([content, header, id, fallbackHeight]) => {
    const doc = content.ownerDocument;
    let bar = doc.getElementById(id);
    if (!bar) {
        bar = doc.createElement("div");
        bar.id = id;
        bar.setAttribute("style", `
            z-index: 2147483647;
            position: fixed;
            top: 0;
            left: 0;
            width: 100%;
            display: flex;
            align-items: center;
            justify-content: center;
            font-size: 2rem;
            color: white;
            background-color: #00688c;
            box-shadow: 0px 0px 10px -4px black;
            white-space: break-spaces;
        `);
        content.prepend(bar);
    }
    const setHeight = () => {
        const height = header ? header.clientHeight : 0;
        bar.style.height = `${height || fallbackHeight}px`;
    };
    setHeight();
    doc.defaultView.addEventListener("resize", setHeight);
    return true;
}
"""

_SHOW_JS = """
([id, text, color, bold]) => {
    const bar = document.getElementById(id);
    if (!bar) {
        return false;
    }
    bar.textContent = text;
    bar.style.backgroundColor = color;
    bar.style.fontWeight = bold ? "bold" : "normal";
    return true;
}
"""


class StatusBar:
    def __init__(self, frame: Frame) -> None:
        self.frame = frame
        self.mounted = False
        self.last: StatusUpdate | None = None

    def mount(self) -> bool:
        content = find_content_element(self.frame)
        if content is None:
            logger.warning("No content element to mount the status bar on")
            return False
        header = find_header_element(self.frame)
        try:
            self.mounted = bool(
                self.frame.evaluate(
                    _MOUNT_JS, [content, header, STATUS_ELEMENT_ID, DEFAULT_HEADER_HEIGHT]
                )
            )
        except PlaywrightError as e:
            logger.warning("Failed to mount status bar: %s", e)
            self.mounted = False
        return self.mounted

    def show(self, update: StatusUpdate) -> None:
        self.last = update
        if not self.mounted:
            return
        try:
            self.frame.evaluate(
                _SHOW_JS, [STATUS_ELEMENT_ID, update.text, update.color, update.bold]
            )
        except PlaywrightError as e:
            logger.debug("Status bar update failed: %s", e)
