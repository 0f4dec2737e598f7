"""In-memory implementation of the timer service for testing."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from deferred_dispatch.domain.trigger import DeferredTriggerRegistration
from deferred_dispatch.ports.timer_service import ITimerService, ITriggerSource
from deferred_dispatch.primitives.exceptions import ExactWakeUnsupportedError
from deferred_dispatch.utils import ensure_utc, utcnow

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from deferred_dispatch.domain.trigger import TriggerPayload
    from deferred_dispatch.ports.trigger_consumer import ITriggerConsumer

logger = logging.getLogger("deferred_dispatch.timers")


class InMemoryTimerService(ITimerService, ITriggerSource):
    """
    Process-local :class:`ITimerService` for tests and single-process hosts.

    Armed triggers are held in memory, keyed by request token, until
    :meth:`deliver_due` hands them to the consumer. Pair it with
    ``TimerDeliveryWorker`` to deliver each trigger at its time.

    ``exact_supported=False`` simulates a platform that only offers the
    coarse timer API; ``arm_exact_wake`` then raises
    :class:`ExactWakeUnsupportedError`.
    """

    def __init__(
        self,
        consumer: ITriggerConsumer | None = None,
        *,
        exact_supported: bool = True,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._consumer = consumer
        self._exact_supported = exact_supported
        self._clock = clock or utcnow
        self._armed: dict[int, DeferredTriggerRegistration] = {}
        self._lock = threading.Lock()

    def set_consumer(self, consumer: ITriggerConsumer | None) -> None:
        """Set or clear the callback invoked when a trigger fires."""
        self._consumer = consumer

    def supports_exact_wake(self) -> bool:
        return self._exact_supported

    async def arm_exact_wake(
        self,
        trigger_at: datetime,
        request_token: int,
        payload: TriggerPayload,
    ) -> None:
        if not self._exact_supported:
            raise ExactWakeUnsupportedError("exact wake-up timers are not supported")
        self._arm(trigger_at, request_token, payload, exact=True)

    async def arm_wake(
        self,
        trigger_at: datetime,
        request_token: int,
        payload: TriggerPayload,
    ) -> None:
        self._arm(trigger_at, request_token, payload, exact=False)

    def _arm(
        self,
        trigger_at: datetime,
        request_token: int,
        payload: TriggerPayload,
        *,
        exact: bool,
    ) -> None:
        registration = DeferredTriggerRegistration(
            request_token=request_token,
            work_item_id=payload.work_item_id,
            trigger_at=ensure_utc(trigger_at),
            exact=exact,
        )
        with self._lock:
            # Same token replaces the earlier trigger.
            self._armed[request_token] = registration

    def cancel_token(self, request_token: int) -> bool:
        """Disarm a trigger. Returns False if it was not armed."""
        with self._lock:
            return self._armed.pop(request_token, None) is not None

    def next_trigger_at(self) -> datetime | None:
        with self._lock:
            if not self._armed:
                return None
            return min(r.trigger_at for r in self._armed.values())

    async def deliver_due(self, now: datetime | None = None) -> int:
        consumer = self._consumer
        if consumer is None:
            logger.warning("No trigger consumer set, leaving triggers armed")
            return 0

        cutoff = ensure_utc(now if now is not None else self._clock())
        with self._lock:
            due = sorted(
                (r for r in self._armed.values() if r.trigger_at <= cutoff),
                key=lambda r: (r.trigger_at, r.request_token),
            )
            for registration in due:
                del self._armed[registration.request_token]

        count = 0
        for registration in due:
            try:
                await consumer(registration.request_token, registration.work_item_id)
                count += 1
            except Exception:  # noqa: BLE001
                logger.exception(
                    "Trigger consumer failed for token %d (ID: %s)",
                    registration.request_token,
                    registration.work_item_id,
                )
        return count

    # --- Test helpers ---

    def get(self, request_token: int) -> DeferredTriggerRegistration | None:
        with self._lock:
            return self._armed.get(request_token)

    def registrations(self) -> list[DeferredTriggerRegistration]:
        """Armed triggers, earliest first."""
        with self._lock:
            return sorted(
                self._armed.values(), key=lambda r: (r.trigger_at, r.request_token)
            )

    def clear(self) -> None:
        with self._lock:
            self._armed.clear()

    @property
    def armed_count(self) -> int:
        with self._lock:
            return len(self._armed)
