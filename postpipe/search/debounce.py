"""Cancellable scheduling and debouncing."""

import asyncio
from collections.abc import Callable
from typing import Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback after a delay, cancellable by handle."""

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> TimerHandle: ...


class LoopScheduler:
    """Schedules callbacks on an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class Debouncer:
    """Collapses bursts of triggers into one call after a quiet period.

    Only one timer is ever pending: each trigger cancels the previous one.
    """

    def __init__(self, scheduler: Scheduler, delay: float):
        if delay < 0:
            raise ValueError("delay must not be negative")
        self.scheduler = scheduler
        self.delay = delay
        self._pending: TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def trigger(self, callback: Callable[[], None]) -> None:
        self.cancel()

        def fire() -> None:
            self._pending = None
            callback()

        self._pending = self.scheduler.call_later(self.delay, fire)

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
