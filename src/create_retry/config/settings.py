from __future__ import annotations

import logging
import math
import os
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 30.0


def _env_bool(name: str, default: bool) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.lower() in {"1", "true", "yes", "on"}


def parse_window_features(features: str) -> dict[str, int]:
    """Parse a ``window.open`` geometry string into a Playwright viewport.

    Accepts ``,`` and ``;`` separators, e.g. ``height=400,width=400;popup=true``.
    Missing dimensions default to 400.
    """
    size = {"width": 400, "height": 400}
    for part in re.split(r"[,;]", features or ""):
        key, _, value = part.partition("=")
        key = key.strip().lower()
        if key in size and value.strip().isdigit():
            size[key] = int(value.strip())
    return size


@dataclass
class Settings:
    console_url: str = os.getenv(
        "CONSOLE_URL", "https://cloud.oracle.com/compute/instances/create"
    )
    session_url: str = os.getenv("SESSION_URL", "https://cloud.oracle.com")
    session_window_features: str = os.getenv(
        "SESSION_WINDOW_FEATURES", "height=400,width=400;popup=true"
    )
    interval_seconds: float = float(os.getenv("INTERVAL_DURATION", "30"))
    tick_seconds: float = float(os.getenv("TICK_SECONDS", "1"))
    headless: bool = _env_bool("HEADLESS", False)
    cdp_url: str | None = os.getenv("CDP_URL")
    user_data_dir: str = os.getenv("USER_DATA_DIR", ".create_retry_profile")
    wait_for_user: bool = _env_bool("WAIT_FOR_USER", True)
    notify_email: str = os.getenv("NOTIFY_EMAIL", "")
    notify_desktop: bool = _env_bool("NOTIFY_DESKTOP", True)
    notify_mail: bool = _env_bool("NOTIFY_MAIL", True)
    notification_title: str = os.getenv("NOTIFICATION_TITLE", "Oracle Instance Created!")
    notification_icon: str = os.getenv(
        "NOTIFICATION_ICON", "https://www.oracle.com/a/ocom/img/oracle-favicon.ico"
    )
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def __post_init__(self) -> None:
        if not math.isfinite(self.interval_seconds) or self.interval_seconds < 0:
            logger.warning(
                "Invalid INTERVAL_DURATION %r, using %s",
                self.interval_seconds,
                DEFAULT_INTERVAL_SECONDS,
            )
            self.interval_seconds = DEFAULT_INTERVAL_SECONDS

    @property
    def session_viewport(self) -> dict[str, int]:
        return parse_window_features(self.session_window_features)


settings = Settings()
