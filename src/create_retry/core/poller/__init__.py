from __future__ import annotations

from .poller import ConsoleDriver, RetryPoller, StatusIndicator, TickEnv, tick

__all__ = ["ConsoleDriver", "RetryPoller", "StatusIndicator", "TickEnv", "tick"]
