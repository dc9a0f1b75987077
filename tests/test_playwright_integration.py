"""Integration tests against real Chromium pages built with set_content."""

from __future__ import annotations

import html
from unittest.mock import MagicMock

import pytest
from playwright.sync_api import sync_playwright

from create_retry.adapters.console import ConsoleSession
from create_retry.adapters.status_bar import STATUS_ELEMENT_ID, StatusBar
from create_retry.config.settings import Settings
from create_retry.core.detect import check_for_errors, check_instance_created
from create_retry.core.locator import find_action_frame, find_create_button
from create_retry.core.poller import RetryPoller, TickEnv
from create_retry.dto import StatusUpdate

COMPUTE_FORM = """
<html>
    <body>
        <header class="jet-header-layout" style="height:48px">Create compute instance</header>
        <main>
            <div id="alerts"></div>
            <div class="jet-footer-layout">
                <button aria-label="Cancel">Cancel</button>
                <button aria-label="Create" id="create">Create</button>
            </div>
        </main>
        <script>
            document.getElementById('create').onclick = function() {
                window.clicks = (window.clicks || 0) + 1;
                if (window.clicks >= 2) {
                    const msg = document.createElement('div');
                    msg.setAttribute('role', 'status');
                    msg.textContent = 'Instance provisioning started';
                    document.getElementById('alerts').appendChild(msg);
                } else {
                    const msg = document.createElement('div');
                    msg.setAttribute('role', 'alert');
                    msg.textContent = 'Out of host capacity.';
                    document.getElementById('alerts').appendChild(msg);
                }
            };
        </script>
    </body>
</html>
"""


def _console_html():
    return f"""
    <html>
        <body>
            <h1>Console</h1>
            <iframe id="sandbox-compute-container" style="width:800px;height:600px" srcdoc="{html.escape(COMPUTE_FORM)}"></iframe>
        </body>
    </html>
    """


@pytest.fixture
def page():
    with sync_playwright() as p:
        browser = p.chromium.launch(headless=True)
        try:
            page = browser.new_context().new_page()
            page.set_content(_console_html())
            yield page
        finally:
            browser.close()


def test_locates_button_inside_iframe(page):
    """The Create button lives in the sandbox iframe, not the main document."""
    frame = find_action_frame(page)

    assert frame is not page.main_frame
    located = find_create_button(frame)
    assert located is not None
    assert located.element.get_attribute("id") == "create"


def test_detection_after_clicks(page):
    frame = find_action_frame(page)
    button = find_create_button(frame).element

    assert check_instance_created(frame) is None
    button.click()
    assert check_for_errors(frame) == "Out of host capacity."
    button.click()
    assert check_instance_created(frame) == "Instance provisioning started"


def test_status_bar_mount_and_show(page):
    frame = find_action_frame(page)
    bar = StatusBar(frame)

    assert bar.mount() is True
    bar.show(StatusUpdate.counting(5))

    text = frame.evaluate(f"() => document.getElementById('{STATUS_ELEMENT_ID}').textContent")
    height = frame.evaluate(
        f"() => document.getElementById('{STATUS_ELEMENT_ID}').style.height"
    )
    assert text == "Clicking in 5 seconds"
    assert height == "48px"


def test_poller_runs_until_success(page):
    settings = Settings(session_url="about:blank", interval_seconds=0)
    session = ConsoleSession(page, settings)
    frame = session.open()
    status = StatusBar(frame)
    status.mount()
    notifier = MagicMock()
    env = TickEnv(driver=session, status=status, notifier=notifier, interval=session.interval)
    poller = RetryPoller(env, tick_seconds=0, sleep=lambda _s: None)

    final = poller.run()

    assert final.done
    assert final.attempts == 2
    assert frame.evaluate("() => window.clicks") == 2
    notifier.notify.assert_called_once()
    assert session.session_page.is_closed()
    assert status.last == StatusUpdate.created()
