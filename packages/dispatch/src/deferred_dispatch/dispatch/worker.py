"""TimerDeliveryWorker — fires in-process triggers at their trigger time."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ..ports.background_worker import IBackgroundWorker
from ..utils import ensure_utc, utcnow

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from ..ports.timer_service import ITriggerSource

logger = logging.getLogger("deferred_dispatch.timers")


class TimerDeliveryWorker(IBackgroundWorker):
    """Drives an :class:`ITriggerSource` so armed triggers fire on time.

    The worker sleeps until the earliest armed ``trigger_at`` and then
    delivers everything due. With nothing armed it sleeps ``max_idle``
    seconds, which is also the upper bound on any single sleep so a trigger
    armed meanwhile is picked up. Call :meth:`notify` after arming a trigger
    that may be earlier than everything already armed to re-plan at once.

    If a delivery round fires nothing although a trigger was due (for
    example no consumer is attached yet), the worker backs off for
    ``retry_delay`` seconds before looking again.
    """

    def __init__(
        self,
        source: ITriggerSource,
        *,
        max_idle: float = 30.0,
        retry_delay: float = 1.0,
        stop_timeout: float = 5.0,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._source = source
        self._max_idle = max_idle
        self._retry_delay = retry_delay
        self._stop_timeout = stop_timeout
        self._clock = clock or utcnow
        self._wakeup = asyncio.Event()
        self._stopping = False
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def notify(self) -> None:
        """Re-plan the next wake-up, e.g. after a new trigger was armed."""
        self._wakeup.set()

    def seconds_until_next_trigger(self) -> float:
        """How long the worker would sleep if it planned its wake-up now."""
        next_at = self._source.next_trigger_at()
        if next_at is None:
            return self._max_idle
        remaining = (ensure_utc(next_at) - ensure_utc(self._clock())).total_seconds()
        return min(max(remaining, 0.0), self._max_idle)

    async def start(self) -> None:
        if self.running:
            return
        self._stopping = False
        self._wakeup.clear()
        self._task = asyncio.create_task(self._serve(), name="timer-delivery")
        logger.debug("Timer delivery started (max_idle=%.1fs)", self._max_idle)

    async def stop(self) -> None:
        task = self._task
        if task is None:
            return
        self._stopping = True
        self._wakeup.set()
        try:
            await asyncio.wait_for(task, timeout=self._stop_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Timer delivery did not finish within %.1fs, cancelled",
                self._stop_timeout,
            )
        finally:
            self._task = None
        logger.debug("Timer delivery stopped")

    async def run_once(self) -> int:
        """Deliver whatever is due right now, without waiting."""
        return await self._source.deliver_due()

    async def _sleep(self, seconds: float) -> None:
        # Returns early on notify() or stop().
        if seconds > 0:
            try:
                await asyncio.wait_for(self._wakeup.wait(), timeout=seconds)
            except asyncio.TimeoutError:
                pass
        self._wakeup.clear()

    async def _serve(self) -> None:
        while not self._stopping:
            delay = self.seconds_until_next_trigger()
            if delay > 0:
                await self._sleep(delay)
                continue

            try:
                delivered = await self._source.deliver_due()
            except Exception:
                logger.exception("Trigger delivery round failed")
                delivered = 0
            if delivered:
                logger.debug("Delivered %d trigger(s)", delivered)
            else:
                await self._sleep(self._retry_delay)
