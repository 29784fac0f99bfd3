"""Runtime que hospeda un script.

Por qué existe:
- Un script sólo ve `print`, `fetch` y los timers; no sabe de httpx ni de la CLI.
- `execute` reproduce el ciclo de vida de un event loop: correr el script,
  drenar los timers one-shot pendientes y apagar lo que quede (intervals).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

from core.domain.models import FetchResponse
from core.interfaces.fetcher import Fetcher
from core.timers import TimerRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")

Script = Callable[["ScriptRuntime"], Awaitable[T]]


def _stdout_write(text: str) -> None:
    print(text, flush=True)


class ScriptRuntime:
    """Host facilities for one script run, all on a single asyncio loop."""

    def __init__(
        self,
        *,
        fetcher: Fetcher,
        write: Callable[[str], None] | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._write = write or _stdout_write
        self._timers = TimerRegistry()

    @property
    def timers(self) -> TimerRegistry:
        return self._timers

    def print(self, value: Any) -> None:
        self._write(str(value))

    async def fetch(self, url: str) -> FetchResponse:
        logger.debug("Fetching: url=%s", url)
        try:
            response = await self._fetcher.fetch(url)
        except Exception as exc:
            logger.debug("Fetch error: url=%s, error=%s", url, exc)
            raise
        logger.debug("Fetch success: url=%s, status=%s", url, response.status)
        return response

    def set_timeout(self, callback: Callable[..., Any], delay_ms: float = 0, *args: Any) -> int:
        return self._timers.set_timeout(callback, delay_ms, *args)

    def set_interval(self, callback: Callable[..., Any], interval_ms: float = 0, *args: Any) -> int:
        return self._timers.set_interval(callback, interval_ms, *args)

    def clear_timeout(self, timer_id: int | None) -> None:
        self._timers.clear(timer_id)

    def clear_interval(self, timer_id: int | None) -> None:
        self._timers.clear(timer_id)

    async def execute(self, script: Script[T]) -> T:
        """Run `script` to completion, then drain pending one-shot timers.

        An exception raised by the script is re-raised only after the drain,
        so timers registered before the failure still fire.
        """

        logger.debug("Event loop started")
        try:
            result = await script(self)
        except Exception:
            logger.debug("Script failed; draining %d pending timer(s)", self._timers.pending)
            await self._drain()
            raise
        except BaseException:
            await self._timers.shutdown()
            raise
        await self._drain()
        return result

    def run(self, script: Script[T]) -> T:
        return asyncio.run(self.execute(script))

    async def _drain(self) -> None:
        try:
            await self._timers.wait_idle()
        finally:
            await self._timers.shutdown()
            logger.debug("Event loop stopped")
