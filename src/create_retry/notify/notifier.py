"""Best-effort success notifiers.

Every notifier is fire-and-forget: no delivery confirmation, no retry. Failures
are logged and never raised to the poller.
"""

from __future__ import annotations

import logging
import webbrowser
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from playwright.sync_api import Error as PlaywrightError

if TYPE_CHECKING:
    from playwright.sync_api import Page

    from ..dto import SuccessNotification

logger = logging.getLogger(__name__)


@runtime_checkable
class Notifier(Protocol):
    def notify(self, message: SuccessNotification) -> None: ...


# Permission-gated Notification in the page. Resolves to the final permission.
_NOTIFICATION_JS = """
async ({title, body, icon}) => {
    if (!("Notification" in window)) {
        return "unsupported";
    }
    let permission = Notification.permission;
    if (permission === "default") {
        permission = await Notification.requestPermission();
    }
    if (permission === "granted") {
        new Notification(title, {body, icon});
    }
    return permission;
}
"""


class BrowserNotifier:
    """Show a browser Notification from the console page."""

    def __init__(self, page: Page, title: str, icon: str | None = None) -> None:
        self.page = page
        self.title = title
        self.icon = icon

    def notify(self, message: SuccessNotification) -> None:
        try:
            permission = self.page.evaluate(
                _NOTIFICATION_JS,
                {
                    "title": self.title,
                    "body": "Your Oracle Cloud instance has been created successfully!",
                    "icon": self.icon,
                },
            )
        except PlaywrightError as e:
            logger.warning("Browser notification failed: %s", e)
            return
        if permission == "granted":
            logger.info("Browser notification shown")
        else:
            logger.info("Browser notification skipped (permission: %s)", permission)


class MailtoNotifier:
    """Open the system mail composer with a prefilled success message."""

    def __init__(self, opener: Callable[[str], bool] = webbrowser.open) -> None:
        self._opener = opener

    def notify(self, message: SuccessNotification) -> None:
        if not message.recipient:
            logger.info("No NOTIFY_EMAIL configured, skipping mail composer")
            return
        logger.info("Preparing email to %s", message.recipient)
        try:
            opened = self._opener(message.mailto_uri())
        except Exception as e:
            logger.warning("Error opening mail composer: %s", e)
            return
        if opened:
            logger.info("Email prepared! Check your email client")
        else:
            logger.warning("No mail client handled the mailto link")


class CompositeNotifier:
    """Fire every notifier; one failing does not stop the others."""

    def __init__(self, notifiers: Iterable[Notifier]) -> None:
        self.notifiers = list(notifiers)

    def notify(self, message: SuccessNotification) -> None:
        for notifier in self.notifiers:
            try:
                notifier.notify(message)
            except Exception as e:
                logger.warning("%s failed: %s", type(notifier).__name__, e)
