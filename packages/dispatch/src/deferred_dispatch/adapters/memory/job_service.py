"""In-memory implementation of the job-execution service for testing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from deferred_dispatch.domain.native_job import ScheduleResult
from deferred_dispatch.ports.job_service import IJobExecutionService

if TYPE_CHECKING:
    from deferred_dispatch.domain.native_job import NativeJob


class InMemoryJobExecutionService(IJobExecutionService):
    """
    Dict-backed :class:`IJobExecutionService` for unit / integration tests.

    Queued jobs are keyed by tag. Every submission and cancellation is also
    recorded in order, including failed submissions.
    """

    def __init__(
        self,
        *,
        available: bool = True,
        result: ScheduleResult = ScheduleResult.SUCCESS,
    ) -> None:
        self._available = available
        self._default_result = result
        self._results_by_id: dict[str, ScheduleResult] = {}
        self._queued: dict[str, NativeJob] = {}
        self.submitted: list[NativeJob] = []
        self.cancelled: list[str] = []

    def is_available(self) -> bool:
        return self._available

    async def submit(self, job: NativeJob) -> ScheduleResult:
        self.submitted.append(job)
        result = self._results_by_id.get(job.work_item_id, self._default_result)
        if result is not ScheduleResult.SUCCESS:
            return result
        if job.replace_current or job.tag not in self._queued:
            self._queued[job.tag] = job
        return result

    async def cancel(self, work_item_id: str) -> None:
        self.cancelled.append(work_item_id)
        self._queued.pop(work_item_id, None)

    # --- Test helpers ---

    def set_result(
        self, result: ScheduleResult, work_item_id: str | None = None
    ) -> None:
        """Force the result code for one work item, or for all of them."""
        if work_item_id is None:
            self._default_result = result
        else:
            self._results_by_id[work_item_id] = result

    def get_queued(self, tag: str) -> NativeJob | None:
        return self._queued.get(tag)

    def clear(self) -> None:
        self._queued.clear()
        self._results_by_id.clear()
        self.submitted.clear()
        self.cancelled.clear()

    @property
    def queued_count(self) -> int:
        return len(self._queued)
