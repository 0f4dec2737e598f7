"""CancellationRegistry — the record of work items that must not run again."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import TYPE_CHECKING

from ..utils import call_with_timeout

if TYPE_CHECKING:
    from ..ports.job_service import IJobExecutionService

logger = logging.getLogger("deferred_dispatch.scheduler")


class CancellationRegistry:
    """Thread-safe, grow-only set of cancelled work-item ids.

    Once an id is added it stays for the registry's lifetime; there is no
    un-cancel. The registry lives in memory only.

    Each :meth:`cancel` also forwards the request to the job-execution service
    so a job already queued there is dropped. That forward is best-effort:
    failures are logged, never raised.
    """

    def __init__(
        self,
        job_service: IJobExecutionService,
        call_timeout: float | None = None,
    ) -> None:
        self._job_service = job_service
        self._call_timeout = call_timeout
        self._cancelled: set[str] = set()
        self._lock = threading.Lock()

    async def cancel(self, work_item_id: str) -> None:
        """Mark ``work_item_id`` as cancelled and cancel it in the job service."""
        with self._lock:
            first_time = work_item_id not in self._cancelled
            self._cancelled.add(work_item_id)
        if first_time:
            logger.debug("Cancelled work item %s", work_item_id)

        try:
            await call_with_timeout(
                self._job_service.cancel(work_item_id), self._call_timeout
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Job service cancel timed out after %.1fs, ID: %s",
                self._call_timeout,
                work_item_id,
            )
        except Exception:
            logger.exception("Job service cancel failed, ID: %s", work_item_id)

    def is_cancelled(self, work_item_id: str) -> bool:
        """True if ``work_item_id`` was ever passed to :meth:`cancel`."""
        with self._lock:
            return work_item_id in self._cancelled

    def snapshot(self) -> frozenset[str]:
        """Immutable copy of every cancelled id."""
        with self._lock:
            return frozenset(self._cancelled)

    def __contains__(self, work_item_id: object) -> bool:
        return isinstance(work_item_id, str) and self.is_cancelled(work_item_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cancelled)
