"""DeferredTrigger — arms wake-up timers for work that is not due yet."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import TYPE_CHECKING, Generic, TypeVar

from ..domain.trigger import DeferredTriggerRegistration
from ..primitives.exceptions import SchedulingError
from ..utils import call_with_timeout, ensure_utc

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..ports.timer_service import ITimerService
    from ..ports.work_item import IWorkItem
    from ..primitives.id_generator import ITokenGenerator

logger = logging.getLogger("deferred_dispatch.timers")

T = TypeVar("T")


class LazyHandle(Generic[T]):
    """Creates a resource on first use and reuses it afterwards.

    Safe when several threads race on first access: the factory runs once
    and every caller gets the same instance.
    """

    def __init__(self, factory: Callable[[], T], name: str) -> None:
        self._factory = factory
        self._name = name
        self._handle: T | None = None
        self._lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._handle is not None

    def get(self) -> T:
        handle = self._handle
        if handle is not None:
            return handle
        with self._lock:
            if self._handle is None:
                self._handle = self._factory()
                logger.debug("Acquired %s handle", self._name)
            return self._handle


class DeferredTrigger:
    """Arms one exact, wake-capable, one-shot trigger per call.

    The timer service and token generator are acquired lazily from their
    factories. Each call draws a fresh request token, so scheduling the same
    item twice arms two independent triggers.

    Only when the timer service reports no exact API is the coarse
    ``arm_wake`` used instead, and delivery may then run late.

    Any failure while arming is raised as :class:`SchedulingError`.
    """

    def __init__(
        self,
        timer_factory: Callable[[], ITimerService],
        token_generator_factory: Callable[[], ITokenGenerator],
        *,
        call_timeout: float | None = None,
    ) -> None:
        self._timer = LazyHandle(timer_factory, "timer service")
        self._tokens = LazyHandle(token_generator_factory, "token generator")
        self._call_timeout = call_timeout

    async def schedule_later(self, item: IWorkItem) -> DeferredTriggerRegistration:
        logger.debug("Scheduling work later, ID: %s", item.id)
        try:
            timer = self._timer.get()
            token = self._tokens.get().next_token()
            # The host may be asleep when this fires, so the trigger must wake it.
            trigger_at = ensure_utc(item.calculate_next_run_time())
            exact = timer.supports_exact_wake()
            registration = DeferredTriggerRegistration(
                request_token=token,
                work_item_id=item.id,
                trigger_at=trigger_at,
                exact=exact,
            )
            if exact:
                arm = timer.arm_exact_wake
            else:
                logger.debug(
                    "Exact wake unavailable, using coarse timer, ID: %s", item.id
                )
                arm = timer.arm_wake
            await call_with_timeout(
                arm(trigger_at, token, registration.payload), self._call_timeout
            )
        except asyncio.TimeoutError as err:
            raise SchedulingError(
                item.id, f"timer service timed out after {self._call_timeout}s"
            ) from err
        except Exception as err:
            raise SchedulingError(item.id, str(err) or type(err).__name__) from err

        logger.debug(
            "Armed trigger %d for %s at %s (exact=%s)",
            token,
            item.id,
            trigger_at.isoformat(),
            exact,
        )
        return registration
