from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from .adapters.console import ActionNotFoundError, ConsoleSession
from .adapters.status_bar import StatusBar
from .config.settings import Settings
from .config.settings import settings as default_settings
from .core.poller import RetryPoller, TickEnv
from .notify import BrowserNotifier, CompositeNotifier, MailtoNotifier
from .telemetry import init_telemetry, shutdown_telemetry

if TYPE_CHECKING:
    from collections.abc import Sequence

    from playwright.sync_api import BrowserContext, Page

    from .core.ir.model import PollState

logger = logging.getLogger(__name__)

# Every line is wrapped in *** so the output can be filtered with grep '\*\*\*'
LOG_FORMAT = "%(asctime)s %(levelname)s *** %(message)s ***"

BANNER = [
    "Started Oracle compute instance creation script",
    "DO NOT CLOSE THE SESSION WINDOW!",
    "Fill ALL your parameters manually before running this script",
    "The script will stop automatically when the instance is created",
    "Change the interval between clicks on the fly with "
    "`window.INTERVAL_DURATION = <seconds>` in the console page devtools",
]


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )


def build_notifier(page: Page, settings: Settings) -> CompositeNotifier:
    notifiers = []
    if settings.notify_desktop:
        notifiers.append(
            BrowserNotifier(page, settings.notification_title, settings.notification_icon)
        )
    if settings.notify_mail:
        notifiers.append(MailtoNotifier())
    return CompositeNotifier(notifiers)


def build_poller(page: Page, settings: Settings) -> tuple[RetryPoller, ConsoleSession]:
    """Attach to the console page and wire the poller.

    Raises:
        ActionNotFoundError: If the Create button is not on the page.
    """
    session = ConsoleSession(page, settings)
    frame = session.open()
    status = StatusBar(frame)
    status.mount()
    env = TickEnv(
        driver=session,
        status=status,
        notifier=build_notifier(page, settings),
        interval=session.interval,
        notify_email=settings.notify_email,
        default_interval=settings.interval_seconds,
    )
    poller = RetryPoller(
        env,
        tick_seconds=settings.tick_seconds,
        sleep=lambda seconds: page.wait_for_timeout(seconds * 1000),
    )
    return poller, session


def find_console_page(pages: Sequence[Page], console_url: str) -> Page | None:
    """Pick the open tab showing the console, preferring an exact URL prefix."""
    for page in pages:
        if page.url.startswith(console_url):
            return page
    host = urlparse(console_url).netloc
    for page in pages:
        if host and urlparse(page.url).netloc == host:
            return page
    return None


def _open_console_page(context: BrowserContext, settings: Settings) -> Page:
    page = find_console_page(context.pages, settings.console_url)
    if page is not None:
        logger.info("Using open console tab %s", page.url)
        return page
    page = context.new_page()
    page.goto(settings.console_url)
    return page


def run(settings: Settings | None = None) -> PollState | None:
    settings = settings or default_settings
    configure_logging(settings.log_level)
    init_telemetry(console_url=settings.console_url)

    with sync_playwright() as p:
        if settings.cdp_url:
            browser = p.chromium.connect_over_cdp(settings.cdp_url)
            context = browser.contexts[0] if browser.contexts else browser.new_context()
            close = browser.close
        else:
            context = p.chromium.launch_persistent_context(
                settings.user_data_dir, headless=settings.headless
            )
            close = context.close
        try:
            if settings.notify_desktop:
                try:
                    context.grant_permissions(["notifications"])
                except PlaywrightError as e:
                    logger.warning("Could not grant notification permission: %s", e)

            page = _open_console_page(context, settings)
            if settings.wait_for_user:
                input("Log in, fill ALL instance parameters, then press Enter to start... ")

            poller, _ = build_poller(page, settings)
            for line in BANNER:
                logger.info(line)
            try:
                return poller.run()
            except KeyboardInterrupt:
                poller.stop()
                logger.info("Interrupted, stopping poller")
                return poller.state
        finally:
            close()
            shutdown_telemetry()


def main() -> None:
    try:
        state = run()
    except ActionNotFoundError as e:
        logger.error(str(e))
        raise SystemExit(2) from e
    raise SystemExit(0 if state is not None and state.done else 1)


if __name__ == "__main__":
    main()
