"""DefaultJobConverter — builds a NativeJob from a WorkItem."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..domain.native_job import NativeJob
from ..domain.work_item import WorkItem

if TYPE_CHECKING:
    from datetime import timedelta

    from ..ports.work_item import IWorkItem


def _seconds(value: timedelta | None) -> int:
    if value is None:
        return 0
    return max(int(value.total_seconds()), 0)


class DefaultJobConverter:
    """Stock :class:`~deferred_dispatch.ports.IJobConverter`.

    Jobs are tagged with the work-item id so ``cancel`` on the job service
    can find them. One-off items get an immediate ``[0, 0]`` window; periodic
    items recur every ``interval`` with the last ``flex_interval`` of each
    period as the execution window.

    Work items that are not :class:`WorkItem` instances (any other
    ``IWorkItem``) are converted as one-off jobs with no constraints.
    """

    def __init__(self, service: str = "") -> None:
        self._service = service

    def convert(self, item: IWorkItem) -> NativeJob:
        if not isinstance(item, WorkItem):
            return NativeJob(tag=item.id, work_item_id=item.id, service=self._service)

        recurring = item.interval is not None
        window_start = window_end = 0
        if recurring:
            window_end = _seconds(item.interval)
            flex = item.flex_interval or item.interval
            window_start = max(window_end - _seconds(flex), 0)

        extras: dict[str, object] = {"run_attempt_count": item.run_attempt_count}
        if item.worker_type:
            extras["worker_type"] = item.worker_type
        if item.tags:
            extras["tags"] = sorted(item.tags)

        return NativeJob(
            tag=item.id,
            work_item_id=item.id,
            service=self._service,
            recurring=recurring,
            window_start_seconds=window_start,
            window_end_seconds=window_end,
            constraints=item.constraints,
            replace_current=True,
            extras=extras,
        )
