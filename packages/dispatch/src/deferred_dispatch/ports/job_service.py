"""IJobExecutionService — protocol for the external job-execution service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..domain.native_job import NativeJob, ScheduleResult


@runtime_checkable
class IJobExecutionService(Protocol):
    """Port for the service that runs jobs which are due now.

    Usage::

        service = MyPlatformJobService(client)
        if not service.is_available():
            ...  # the scheduler refuses to start

        result = await service.submit(job)
        if result is not ScheduleResult.SUCCESS:
            ...

        await service.cancel(work_item_id)
    """

    def is_available(self) -> bool:
        """Whether the service can accept jobs at all.

        Checked once when the scheduler is constructed.
        """
        ...

    async def submit(self, job: NativeJob) -> ScheduleResult:
        """Submit a job for near-term execution.

        Returns:
            ``ScheduleResult.SUCCESS`` or a failure code. Failures are
            reported through the code, not by raising.
        """
        ...

    async def cancel(self, work_item_id: str) -> None:
        """Remove any queued job tagged with ``work_item_id``.

        Best-effort; unknown ids are ignored.
        """
        ...
