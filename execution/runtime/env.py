"""
execution.runtime.env — block clock and BlockEnv construction.

Contracts never read the wall clock. Time is supplied by a clock object owned by
the host (the "time oracle"); the executor samples it once per call and hands
the resulting BlockContext to every frame of that call.

Design goals
------------
- Monotonic: a clock can never move backwards (`ClockError` otherwise).
- Test-friendly: `ManualClock` advances only when told to, like a devnet's
  "increase time + mine".
- Pluggable: anything with a `now() -> int` method satisfies `Clock`.

Example
-------
    from execution.runtime.env import ManualClock, make_block_env

    clock = ManualClock(start=1_700_000_000)
    clock.advance(500)
    env = make_block_env(clock, height=7, chain_id=1337)
    assert env.timestamp == 1_700_000_500
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable

from ..types.context import BlockContext

# Public alias (name used throughout the codebase)
BlockEnv = BlockContext

DEFAULT_GENESIS_TIME = 1_700_000_000


class ClockError(ValueError):
    """Raised when a clock would move backwards or receives a negative delta."""


@runtime_checkable
class Clock(Protocol):
    def now(self) -> int:
        """Current Unix time in whole seconds."""
        ...


class ManualClock:
    """
    A monotonically non-decreasing clock advanced explicitly.

    >>> c = ManualClock(start=100)
    >>> c.advance(5)
    105
    >>> c.set(105)
    105
    """

    __slots__ = ("_now",)

    def __init__(self, start: int = DEFAULT_GENESIS_TIME) -> None:
        if start < 0:
            raise ClockError("start must be >= 0")
        self._now = int(start)

    def now(self) -> int:
        return self._now

    def advance(self, seconds: int) -> int:
        if seconds < 0:
            raise ClockError("cannot advance by a negative amount")
        self._now += int(seconds)
        return self._now

    def set(self, timestamp: int) -> int:
        if timestamp < self._now:
            raise ClockError(f"clock cannot move backwards ({timestamp} < {self._now})")
        self._now = int(timestamp)
        return self._now

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"ManualClock(now={self._now})"


class SystemClock:
    """Wall-clock source that still refuses to go backwards."""

    __slots__ = ("_last",)

    def __init__(self) -> None:
        self._last = 0

    def now(self) -> int:
        self._last = max(self._last, int(time.time()))
        return self._last


def make_block_env(clock: Clock, *, height: int, chain_id: int) -> BlockEnv:
    """Sample `clock` once and build the BlockContext for a call."""
    return BlockContext(height=height, timestamp=clock.now(), chain_id=chain_id)


__all__ = [
    "BlockEnv",
    "Clock",
    "ClockError",
    "ManualClock",
    "SystemClock",
    "make_block_env",
    "DEFAULT_GENESIS_TIME",
]
