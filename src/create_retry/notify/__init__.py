"""Success notification capability.

Injected into the poller so tests can substitute a stub.
"""

from __future__ import annotations

from .notifier import BrowserNotifier, CompositeNotifier, MailtoNotifier, Notifier

__all__ = ["BrowserNotifier", "CompositeNotifier", "MailtoNotifier", "Notifier"]
