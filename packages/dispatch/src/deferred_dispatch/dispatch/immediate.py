"""ImmediateDispatcher — hands due work straight to the job-execution service."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ..domain.native_job import ScheduleResult
from ..utils import call_with_timeout

if TYPE_CHECKING:
    from ..ports.job_converter import IJobConverter
    from ..ports.job_service import IJobExecutionService
    from ..ports.work_item import IWorkItem

logger = logging.getLogger("deferred_dispatch.scheduler")


class ImmediateDispatcher:
    """Converts a work item and submits it exactly once.

    The immediate path is best-effort. A failure result, an exception from the
    service or a timeout is logged and reported through the return value;
    nothing is raised and nothing is retried.
    """

    def __init__(
        self,
        job_service: IJobExecutionService,
        converter: IJobConverter,
        call_timeout: float | None = None,
    ) -> None:
        self._job_service = job_service
        self._converter = converter
        self._call_timeout = call_timeout

    async def schedule_now(self, item: IWorkItem) -> ScheduleResult:
        logger.debug("Scheduling work now, ID: %s", item.id)
        try:
            job = self._converter.convert(item)
            result = await call_with_timeout(
                self._job_service.submit(job), self._call_timeout
            )
        except asyncio.TimeoutError:
            logger.error(
                "Schedule timed out after %.1fs, ID: %s",
                self._call_timeout,
                item.id,
            )
            return ScheduleResult.UNKNOWN_ERROR
        except Exception:
            logger.exception("Schedule raised, ID: %s", item.id)
            return ScheduleResult.UNKNOWN_ERROR

        if result != ScheduleResult.SUCCESS:
            logger.error("Schedule failed. Result = %s, ID: %s", result, item.id)
        try:
            return ScheduleResult(result)
        except ValueError:
            return ScheduleResult.UNKNOWN_ERROR
