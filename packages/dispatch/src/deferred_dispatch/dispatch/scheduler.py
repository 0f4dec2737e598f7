"""DeferredDispatchScheduler — routes work to run now or arms a trigger for later."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..config import SchedulerSettings
from ..correlation import get_correlation_id
from ..instrumentation import get_hook_registry
from ..primitives.exceptions import (
    PreconditionError,
    RoutingError,
    SchedulingError,
)
from ..primitives.id_generator import MonotonicTokenGenerator
from ..utils import ensure_utc, utcnow
from .cancellation import CancellationRegistry
from .converter import DefaultJobConverter
from .deferred import DeferredTrigger
from .immediate import ImmediateDispatcher

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from ..ports.job_converter import IJobConverter
    from ..ports.job_service import IJobExecutionService
    from ..ports.timer_service import ITimerService
    from ..ports.work_item import IWorkItem
    from ..primitives.id_generator import ITokenGenerator

logger = logging.getLogger("deferred_dispatch.scheduler")


class DeferredDispatchScheduler:
    """
    Decides, per work item, between the immediate and the deferred path.

    Items whose next run time is at or before *now* are submitted to the
    job-execution service right away. A next run time equal to *now* counts
    as due, so no zero-delay timer is ever armed. Everything else gets an
    exact wake-up trigger that re-presents the item to the downstream
    consumer when it fires.

    Construction fails with :class:`PreconditionError` if the job service is
    unavailable.

    Usage::

        scheduler = DeferredDispatchScheduler(
            job_service=platform_jobs,
            timer_factory=lambda: platform_timers,
        )
        await scheduler.schedule(item_a, item_b)
        await scheduler.cancel(item_b.id)
        assert scheduler.is_cancelled(item_b.id)
    """

    def __init__(
        self,
        job_service: IJobExecutionService,
        timer_factory: Callable[[], ITimerService],
        *,
        converter: IJobConverter | None = None,
        token_generator_factory: Callable[[], ITokenGenerator] | None = None,
        settings: SchedulerSettings | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not job_service.is_available():
            raise PreconditionError("Job-execution service not available")

        self._settings = settings or SchedulerSettings()
        self._clock = clock or utcnow
        token_start = self._settings.token_start

        self._cancellations = CancellationRegistry(
            job_service, call_timeout=self._settings.call_timeout
        )
        self._immediate = ImmediateDispatcher(
            job_service,
            converter or DefaultJobConverter(),
            call_timeout=self._settings.call_timeout,
        )
        self._deferred = DeferredTrigger(
            timer_factory,
            token_generator_factory or (lambda: MonotonicTokenGenerator(token_start)),
            call_timeout=self._settings.call_timeout,
        )

    @property
    def settings(self) -> SchedulerSettings:
        return self._settings

    @property
    def cancellations(self) -> CancellationRegistry:
        return self._cancellations

    @property
    def immediate_dispatcher(self) -> ImmediateDispatcher:
        return self._immediate

    @property
    def deferred_trigger(self) -> DeferredTrigger:
        return self._deferred

    # -- commands ---------------------------------------------------------

    async def schedule(self, *items: IWorkItem) -> None:
        """Route each item independently, in the order given.

        A failure on one item never stops the others. Submission failures
        on the immediate path are only logged. If arming a trigger fails
        (:class:`SchedulingError`) or an item cannot be routed at all
        (:class:`RoutingError`), the remaining items are still processed and
        the first failure is raised afterwards, carrying the rest in
        ``failures``.
        """
        if not items:
            return
        registry = get_hook_registry()
        await registry.execute_all(
            "dispatch.schedule.batch",
            {"batch.size": len(items), "correlation_id": get_correlation_id()},
            lambda: self._schedule_internal(items),
        )

    async def _schedule_internal(self, items: tuple[IWorkItem, ...]) -> None:
        failures: list[SchedulingError | RoutingError] = []
        for item in items:
            try:
                await self._route(item)
            except SchedulingError as err:
                logger.error("Deferred scheduling failed: %s", err)
                failures.append(err)
            except Exception as err:  # noqa: BLE001
                logger.exception("Routing failed, ID: %s", item.id)
                wrapped = RoutingError(item.id, str(err) or type(err).__name__)
                wrapped.__cause__ = err
                failures.append(wrapped)

        if failures:
            first = failures[0]
            first.failures = failures[1:]
            raise first

    async def _route(self, item: IWorkItem) -> None:
        next_run_time = ensure_utc(item.calculate_next_run_time())
        now = ensure_utc(self._clock())
        item_type = type(item).__name__
        attributes: dict[str, Any] = {
            "work_item.id": item.id,
            "work_item.type": item_type,
            "next_run_time": next_run_time,
            "correlation_id": get_correlation_id(),
        }
        registry = get_hook_registry()

        if next_run_time > now:
            await registry.execute_all(
                f"dispatch.schedule_later.{item_type}",
                attributes,
                lambda: self._deferred.schedule_later(item),
            )
        else:
            await registry.execute_all(
                f"dispatch.schedule_now.{item_type}",
                attributes,
                lambda: self._immediate.schedule_now(item),
            )

    async def cancel(self, work_item_id: str) -> None:
        """Mark the item dead and best-effort cancel it in the job service."""
        registry = get_hook_registry()
        await registry.execute_all(
            "dispatch.cancel",
            {"work_item.id": work_item_id, "correlation_id": get_correlation_id()},
            lambda: self._cancellations.cancel(work_item_id),
        )

    # -- queries ----------------------------------------------------------

    def is_cancelled(self, work_item_id: str) -> bool:
        """True for any id ever passed to :meth:`cancel` on this scheduler."""
        return self._cancellations.is_cancelled(work_item_id)
