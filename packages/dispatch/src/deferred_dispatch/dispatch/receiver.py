"""DelayedTriggerReceiver — re-presents work items whose trigger has fired."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..correlation import correlation_scope
from ..instrumentation import get_hook_registry

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..ports.work_item import IWorkItem
    from .scheduler import DeferredDispatchScheduler

logger = logging.getLogger("deferred_dispatch.timers")


class DelayedTriggerReceiver:
    """Stock :class:`~deferred_dispatch.ports.ITriggerConsumer`.

    When a trigger fires, the work item is skipped if it was cancelled in the
    meantime or can no longer be found. Otherwise it is loaded with
    ``work_item_lookup`` and passed back through
    :meth:`DeferredDispatchScheduler.schedule`, which now routes it to the
    immediate path.
    """

    def __init__(
        self,
        scheduler: DeferredDispatchScheduler,
        work_item_lookup: Callable[[str], Awaitable[IWorkItem | None]],
    ) -> None:
        self._scheduler = scheduler
        self._lookup = work_item_lookup

    async def __call__(self, request_token: int, work_item_id: str) -> None:
        with correlation_scope() as correlation_id:
            await get_hook_registry().execute_all(
                "dispatch.trigger.fired",
                {
                    "work_item.id": work_item_id,
                    "request_token": request_token,
                    "correlation_id": correlation_id,
                },
                lambda: self._handle(request_token, work_item_id),
            )

    async def _handle(self, request_token: int, work_item_id: str) -> None:
        if self._scheduler.is_cancelled(work_item_id):
            logger.debug(
                "Trigger %d fired for cancelled work item %s, ignoring",
                request_token,
                work_item_id,
            )
            return

        item = await self._lookup(work_item_id)
        if item is None:
            logger.warning(
                "Trigger %d fired for unknown work item %s", request_token, work_item_id
            )
            return

        logger.debug("Trigger %d fired, rescheduling %s", request_token, work_item_id)
        await self._scheduler.schedule(item)
