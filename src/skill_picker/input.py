"""Key event sources.

A key source is an async iterator of ``KeyEvent`` with an idempotent
``close()``. The prompt consumes exactly one source; closing it detaches the
prompt from the terminal.
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Callable, Iterable, Protocol, Union

import readchar

from .keys import KeyEvent, KeyKind, parse_key

logger = logging.getLogger(__name__)

RawKey = Union[str, KeyEvent]


class KeySource(Protocol):
    def __aiter__(self) -> AsyncIterator[KeyEvent]: ...

    async def __anext__(self) -> KeyEvent: ...

    def close(self) -> None: ...


class ReadcharKeySource:
    """Read keys from the terminal with ``readchar`` off the event loop.

    A read is only requested while the consumer awaits the next event, so
    once the prompt stops iterating no read is left pending.
    """

    def __init__(self, readkey: Callable[[], str] | None = None):
        self._readkey = readkey or readchar.readkey
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __aiter__(self) -> "ReadcharKeySource":
        return self

    async def __anext__(self) -> KeyEvent:
        while not self._closed:
            try:
                raw = await asyncio.to_thread(self._readkey)
            except KeyboardInterrupt:
                return KeyEvent(KeyKind.INTERRUPT)
            except EOFError:
                logger.debug("Key input reached EOF")
                self.close()
                break
            if self._closed:
                break
            event = parse_key(raw)
            if event is not None:
                return event
        raise StopAsyncIteration

    def close(self) -> None:
        self._closed = True


class ScriptedKeySource:
    """Replay a fixed sequence of raw keys or KeyEvents.

    Used by tests and for driving the prompt from recorded input. Raw strings
    that do not parse to an event are skipped, like unknown terminal keys.
    """

    def __init__(self, keys: Iterable[RawKey]):
        self._keys = iter(list(keys))
        self._closed = False
        self.consumed = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def __aiter__(self) -> "ScriptedKeySource":
        return self

    async def __anext__(self) -> KeyEvent:
        while not self._closed:
            try:
                raw = next(self._keys)
            except StopIteration:
                break
            self.consumed += 1
            event = raw if isinstance(raw, KeyEvent) else parse_key(raw)
            if event is not None:
                # Yield control so scheduled callbacks (flash timers) can run.
                await asyncio.sleep(0)
                return event
        raise StopAsyncIteration

    def close(self) -> None:
        self._closed = True
