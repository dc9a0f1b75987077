"""Retry-until-success poller.

``tick`` is the whole state machine: it takes the current ``PollState`` and the
injected capabilities and returns the next state. ``RetryPoller`` calls it on a
fixed tick until the state is done or ``stop()`` is called. There is no retry
ceiling.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from opentelemetry import trace

from ...dto import StatusUpdate, SuccessNotification
from ..ir.model import PollState

if TYPE_CHECKING:
    from ...notify import Notifier
    from ..locator import LocatedElement

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


@runtime_checkable
class ConsoleDriver(Protocol):
    """What the poller needs from the console and its companion window."""

    def check_created(self) -> str | None: ...

    def check_errors(self) -> str | None: ...

    def reload_session(self) -> None: ...

    def find_action(self) -> LocatedElement | None: ...

    def click(self, located: LocatedElement) -> bool: ...

    def close_session(self) -> None: ...


@runtime_checkable
class StatusIndicator(Protocol):
    def show(self, update: StatusUpdate) -> None: ...


@dataclass
class TickEnv:
    driver: ConsoleDriver
    status: StatusIndicator
    notifier: Notifier
    interval: Callable[[], float]
    notify_email: str = ""
    clock: Callable[[], datetime] = field(default=datetime.now)
    default_interval: float = 30.0

    def countdown_duration(self) -> int:
        """Whole ticks until the next click; halves round up."""
        value = self.interval()
        if not math.isfinite(value):
            logger.warning(
                "Ignoring non-finite interval %r, using %s", value, self.default_interval
            )
            value = self.default_interval
        return max(0, math.floor(value + 0.5))


def _notify(env: TickEnv, detail: str) -> None:
    message = SuccessNotification(recipient=env.notify_email, detail=detail)
    try:
        env.notifier.notify(message)
    except Exception as e:
        logger.warning("Notification failed: %s", e)


def _act(state: PollState, env: TickEnv) -> PollState:
    message = env.driver.check_created()
    if message:
        logger.info("SUCCESS! Instance created: %s", message)
        env.status.show(StatusUpdate.created())
        _notify(env, message)
        env.driver.close_session()
        logger.info("Script stopped - instance created successfully")
        return state.finished()

    error = env.driver.check_errors()
    if error:
        logger.warning("Capacity error detected: %s - retrying", error)

    env.driver.reload_session()

    now = env.clock().strftime("%H:%M:%S")
    located = env.driver.find_action()
    if located is None:
        env.status.show(StatusUpdate.not_found())
        logger.error("Create button not found at %s", now)
    elif env.driver.click(located):
        env.status.show(StatusUpdate.clicked())
        logger.info("Clicked 'Create' at %s", now)
    else:
        env.status.show(StatusUpdate.not_found())
        logger.error("Failed to click Create at %s", now)

    return state.reset(env.countdown_duration())


def tick(state: PollState, env: TickEnv) -> PollState:
    """Advance the poll state by one tick."""
    if state.done:
        return state

    if state.countdown > 0:
        env.status.show(StatusUpdate.counting(state.countdown))
        return state.counted_down()

    with tracer.start_as_current_span("retry_cycle") as span:
        span.set_attribute("retry.attempt", state.attempts + 1)
        next_state = _act(state, env)
        span.set_attribute("retry.done", next_state.done)
        return next_state


class RetryPoller:
    """Run ``tick`` every ``tick_seconds`` until success or ``stop()``.

    Usage:
        poller = RetryPoller(env)
        final = poller.run()
    """

    def __init__(
        self,
        env: TickEnv,
        tick_seconds: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.env = env
        self.tick_seconds = tick_seconds
        self._sleep = sleep
        self._stop = threading.Event()
        self.state: PollState | None = None
        self.ticks = 0

    def initial_state(self) -> PollState:
        return PollState(countdown=self.env.countdown_duration())

    def stop(self) -> None:
        self._stop.set()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def run(self, state: PollState | None = None) -> PollState:
        self.state = state or self.initial_state()
        logger.info(
            "Poller started: clicking every %s ticks of %.1fs",
            self.state.countdown,
            self.tick_seconds,
        )
        while not self.state.done and not self._stop.is_set():
            self._sleep(self.tick_seconds)
            if self._stop.is_set():
                break
            self.state = tick(self.state, self.env)
            self.ticks += 1

        if not self.state.done:
            logger.info("Poller stopped after %d ticks without success", self.ticks)
        return self.state
