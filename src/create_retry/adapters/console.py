"""Playwright-backed console driver.

Holds the console page, the frame containing the Create button, and the
companion session window that is reloaded every cycle to keep the session
token fresh.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from playwright.sync_api import Error as PlaywrightError

from ..config.settings import Settings
from ..core.detect import check_for_errors, check_instance_created
from ..core.locator import describe_buttons, find_action_frame, find_create_button

if TYPE_CHECKING:
    from playwright.sync_api import Frame, Page

    from ..core.locator import LocatedElement

logger = logging.getLogger(__name__)

CLICK_TIMEOUT_MS = 5000


class CreateRetryError(RuntimeError):
    """Base error for unrecoverable setup problems."""


class ActionNotFoundError(CreateRetryError):
    """The Create button could not be located when the session was opened."""


class ConsoleSession:
    """Driver for one console page and its companion session window."""

    def __init__(self, page: Page, settings: Settings | None = None) -> None:
        self.page = page
        self.settings = settings or Settings()
        self.frame: Frame | None = None
        self.session_page: Page | None = None

    def open(self) -> Frame:
        """Resolve the target frame and open the session window.

        Raises:
            ActionNotFoundError: If no Create button exists on the console.
        """
        frame = self.target_frame()
        located = find_create_button(frame)
        if located is None:
            logger.error("Available buttons on page:")
            for line in describe_buttons(frame):
                logger.error(line)
            raise ActionNotFoundError(
                "Failed to find 'Create' button - check the log for available buttons"
            )
        logger.info(
            "Create button found! Class: %s", located.element.get_attribute("class") or ""
        )
        self.open_session_window()
        self.seed_interval()
        return frame

    def target_frame(self) -> Frame:
        if self.frame is None or self.frame.is_detached():
            self.frame = find_action_frame(self.page)
        return self.frame

    def open_session_window(self) -> Page:
        page = self.page.context.new_page()
        page.set_viewport_size(self.settings.session_viewport)  # type: ignore[arg-type]
        try:
            page.goto(self.settings.session_url, wait_until="commit")
        except PlaywrightError as e:
            logger.warning("Session window failed to load %s: %s", self.settings.session_url, e)
        self.session_page = page
        return page

    # --- ConsoleDriver ---

    def check_created(self) -> str | None:
        try:
            return check_instance_created(self.target_frame())
        except PlaywrightError as e:
            logger.debug("Success check failed: %s", e)
            return None

    def check_errors(self) -> str | None:
        try:
            return check_for_errors(self.target_frame())
        except PlaywrightError as e:
            logger.debug("Error check failed: %s", e)
            return None

    def reload_session(self) -> None:
        if self.session_page is None or self.session_page.is_closed():
            logger.warning("Session window was closed, reopening it")
            self.open_session_window()
            return
        try:
            self.session_page.reload(wait_until="commit")
        except PlaywrightError as e:
            logger.warning("Failed to reload session window: %s", e)

    def find_action(self) -> LocatedElement | None:
        try:
            return find_create_button(self.target_frame())
        except PlaywrightError as e:
            logger.debug("Create button lookup failed: %s", e)
            return None

    def click(self, located: LocatedElement) -> bool:
        try:
            located.element.click(timeout=CLICK_TIMEOUT_MS)
        except PlaywrightError as e:
            logger.warning("Click on %s failed: %s", located.probe, e)
            return False
        return True

    def close_session(self) -> None:
        if self.session_page is None or self.session_page.is_closed():
            return
        try:
            self.session_page.close()
        except PlaywrightError as e:
            logger.warning("Failed to close session window: %s", e)

    # --- Interval ---

    def seed_interval(self) -> None:
        """Expose ``window.INTERVAL_DURATION`` so it can be changed from devtools."""
        try:
            self.page.evaluate(
                "(v) => { if (window.INTERVAL_DURATION === undefined) window.INTERVAL_DURATION = v; }",
                self.settings.interval_seconds,
            )
        except PlaywrightError as e:
            logger.debug("Could not seed INTERVAL_DURATION: %s", e)

    def interval_override(self) -> float | None:
        try:
            value = self.page.evaluate("() => window.INTERVAL_DURATION")
        except PlaywrightError:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        if not math.isfinite(value) or value < 0:
            return None
        return float(value)

    def interval(self) -> float:
        override = self.interval_override()
        return self.settings.interval_seconds if override is None else override
