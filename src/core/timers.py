"""Timers for scripts (setTimeout/setInterval semantics on asyncio).

Each timer is an `asyncio.Task` that sleeps until a monotonic deadline and then
runs its callback on the event loop thread. One-shot timers count as pending
work for `wait_idle`; intervals never do, so they are only stopped by `clear`
or `shutdown`.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable

from core.domain.models import TimerKind

logger = logging.getLogger(__name__)

MIN_INTERVAL_MS = 1


@dataclass
class _Timer:
    kind: TimerKind
    task: asyncio.Task[None]


async def _sleep_until(deadline: float) -> None:
    loop = asyncio.get_running_loop()
    # Always yields at least once; asyncio may also wake slightly early.
    while True:
        await asyncio.sleep(max(0.0, deadline - loop.time()))
        if loop.time() >= deadline:
            return


class TimerRegistry:
    """Owns every timer scheduled during one script run."""

    def __init__(self) -> None:
        self._next_id = 1
        self._timers: dict[int, _Timer] = {}

    @property
    def pending(self) -> int:
        """Number of one-shot timers that have not fired or been cleared."""

        return sum(1 for t in self._timers.values() if t.kind is TimerKind.TIMEOUT)

    def set_timeout(self, callback: Callable[..., Any], delay_ms: float = 0, *args: Any) -> int:
        delay = max(0, int(delay_ms or 0))
        return self._schedule(TimerKind.TIMEOUT, callback, delay, args)

    def set_interval(self, callback: Callable[..., Any], interval_ms: float = 0, *args: Any) -> int:
        interval = max(MIN_INTERVAL_MS, int(interval_ms or 0))
        return self._schedule(TimerKind.INTERVAL, callback, interval, args)

    def clear(self, timer_id: int | None) -> None:
        """Cancel a timer. Unknown or already finished ids are ignored."""

        if timer_id is None:
            return
        timer = self._timers.pop(timer_id, None)
        if timer is None:
            return
        logger.debug("Clearing timer: id=%s", timer_id)
        timer.task.cancel()

    async def wait_idle(self) -> None:
        """Wait until no one-shot timer is pending, including ones added meanwhile."""

        while True:
            tasks = [t.task for t in self._timers.values() if t.kind is TimerKind.TIMEOUT]
            if not tasks:
                return
            await asyncio.wait(tasks)

    async def shutdown(self) -> None:
        """Cancel every remaining timer and wait for the tasks to finish."""

        timers = list(self._timers.values())
        self._timers.clear()
        if timers:
            logger.debug("Shutting down %d timer(s)", len(timers))
        for timer in timers:
            timer.task.cancel()
        await asyncio.gather(*(t.task for t in timers), return_exceptions=True)

    def _schedule(
        self,
        kind: TimerKind,
        callback: Callable[..., Any],
        delay_ms: int,
        args: tuple[Any, ...],
    ) -> int:
        if not callable(callback):
            raise TypeError(f"timer callback must be callable, got {type(callback).__name__}")

        timer_id = self._next_id
        self._next_id += 1

        logger.debug("Scheduling %s: id=%s, delay=%sms", kind.value, timer_id, delay_ms)
        loop = asyncio.get_running_loop()
        start = loop.time()
        if kind is TimerKind.TIMEOUT:
            coro = self._run_timeout(timer_id, start + delay_ms / 1000, callback, args)
        else:
            coro = self._run_interval(timer_id, start, delay_ms, callback, args)
        task = loop.create_task(coro, name=f"timer-{timer_id}")
        self._timers[timer_id] = _Timer(kind=kind, task=task)
        return timer_id

    async def _run_timeout(
        self,
        timer_id: int,
        deadline: float,
        callback: Callable[..., Any],
        args: tuple[Any, ...],
    ) -> None:
        try:
            await _sleep_until(deadline)
            await self._fire(timer_id, callback, args)
        finally:
            self._forget(timer_id)

    async def _run_interval(
        self,
        timer_id: int,
        start: float,
        interval_ms: int,
        callback: Callable[..., Any],
        args: tuple[Any, ...],
    ) -> None:
        loop = asyncio.get_running_loop()
        period = interval_ms / 1000
        deadline = start
        try:
            while True:
                # Missed ticks are skipped, never fired in a burst.
                deadline = max(deadline + period, loop.time())
                await _sleep_until(deadline)
                if not self._is_live(timer_id):
                    return
                await self._fire(timer_id, callback, args)
                if not self._is_live(timer_id):
                    return
        finally:
            self._forget(timer_id)

    async def _fire(self, timer_id: int, callback: Callable[..., Any], args: tuple[Any, ...]) -> None:
        logger.debug("Executing timer callback: id=%s", timer_id)
        try:
            result = callback(*args)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("Timer callback raised: id=%s", timer_id)

    def _is_live(self, timer_id: int) -> bool:
        timer = self._timers.get(timer_id)
        return timer is not None and timer.task is asyncio.current_task()

    def _forget(self, timer_id: int) -> None:
        if self._is_live(timer_id):
            del self._timers[timer_id]
