"""Cancellable one-shot timers for short visual feedback.

Arming a flash returns a ``FlashToken``. Cancelling the token invalidates it
and stops the scheduled callback; a callback that still fires checks the
token first, so it can never act on a prompt that already closed.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run ``callback`` after ``delay`` seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle | None: ...


class AsyncioScheduler:
    """Schedule callbacks on the running asyncio loop.

    Outside a running loop nothing is scheduled and ``None`` is returned; the
    armed token then simply stays valid until it is cancelled.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle | None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; flash timer not scheduled")
            return None
        return loop.call_later(delay, callback)


class FlashToken:
    """Validity flag for one armed flash."""

    def __init__(self) -> None:
        self._valid = True
        self._handle: TimerHandle | None = None

    @property
    def valid(self) -> bool:
        return self._valid

    def attach(self, handle: TimerHandle | None) -> None:
        self._handle = handle

    def cancel(self) -> None:
        """Invalidate the token and stop its timer. Safe to call repeatedly."""
        self._valid = False
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.cancel()


class FlashTimer:
    """Owns at most one armed flash at a time."""

    def __init__(self, duration: float, scheduler: Scheduler | None = None):
        self.duration = duration
        self.scheduler = scheduler or AsyncioScheduler()
        self._token: FlashToken | None = None

    @property
    def active(self) -> bool:
        return self._token is not None and self._token.valid

    def arm(self, on_expire: Callable[[], None]) -> FlashToken:
        """Cancel any pending flash, then arm a new one.

        ``on_expire`` runs only if the new token is still valid when the
        timer fires.
        """
        self.cancel()
        token = FlashToken()

        def _expire() -> None:
            if not token.valid:
                return
            token.cancel()
            on_expire()

        token.attach(self.scheduler.call_later(self.duration, _expire))
        self._token = token
        return token

    def cancel(self) -> None:
        token, self._token = self._token, None
        if token is not None:
            token.cancel()
