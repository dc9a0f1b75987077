"""Selector lists for the Oracle Cloud compute console.

Ordered most-specific first. These are coupled to third-party markup and will
drift; keep both the 2025 UI and the older ``oui-`` patterns.
"""

from __future__ import annotations

CREATE_LABEL = "Create"

CREATE_BUTTON_SELECTOR = 'button[aria-label="Create"]'

FRAME_SELECTORS = [
    "#compute-wrapper",
    "#sandbox-compute-container",
    "iframe[name*='compute']",
    "iframe[src*='compute']",
]

FALLBACK_FRAME_SELECTOR = "#sandbox-compute-container"

CREATE_BUTTON_SELECTORS = [
    # 2025 UI
    'button[aria-label="Create"]',
    "button.BaseButtonStyles_styles_variants_callToAction_base__jvi3ds13",
    '.jet-footer-layout button[aria-label="Create"]',
    'button.BaseButtonStyles_styles_base__jvi3ds0[aria-label="Create"]',
    'button[class*="BaseButtonStyles_styles_variants_callToAction"]',
    'button[class*="BaseButtonStyles_styles_base__jvi3ds0"]',
    # Older UI
    ".oui-savant__Panel--Footer .oui-button.oui-button-primary",
    "button[data-testid='create-button']",
    "button[type='submit']",
    ".oui-button-primary",
    "button.oui-button-primary",
    "input[type='submit'][value='Create']",
]

BUTTON_SCAN_SELECTOR = "button, input[type='submit']"

CONTENT_SELECTORS = [
    ".jet-footer-layout",
    ".FlexStyles_baseStyles__10p93f60",
    ".oui-savant__Panel--Contents",
    ".oui-savant__Panel-Contents",
    "[data-testid='panel-contents']",
    ".panel-contents",
    "main",
    ".main-content",
    "body",
]

HEADER_SELECTORS = [
    ".jet-header-layout",
    "[class*='HeaderStyles']",
    ".oui-savant__Panel--Header",
    ".oui-savant__Panel-Header",
    "[data-testid='panel-header']",
    ".panel-header",
    "header",
    ".header",
]

DEFAULT_HEADER_HEIGHT = 60

SUCCESS_SELECTORS = [
    '[class*="AlertStyles_styles_success"]',
    '[class*="MessageStyles_styles_success"]',
    '[class*="NotificationStyles_styles_success"]',
    '[role="status"]',
    ".oui-alert-success",
    ".alert-success",
]

ERROR_SELECTORS = [
    '[class*="AlertStyles_styles_error"]',
    '[class*="AlertStyles_styles_warning"]',
    '[class*="MessageStyles_styles_error"]',
    '[class*="NotificationStyles_styles_error"]',
    '[role="alert"]',
    '[aria-live="polite"]',
    ".oui-alert-error",
    ".alert-error",
    "[data-testid='error-message']",
    ".error-message",
    ".oui-alert-warning",
    ".alert-warning",
]

SUCCESS_KEYWORDS = ("created", "success", "launched", "provisioning", "starting")

CAPACITY_KEYWORDS = (
    "capacity",
    "availability",
    "limit",
    "quota",
    "insufficient",
    "unavailable",
)
