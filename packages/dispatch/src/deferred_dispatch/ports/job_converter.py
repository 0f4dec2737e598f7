"""IJobConverter — maps work items into the job service's representation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..domain.native_job import NativeJob
    from .work_item import IWorkItem


@runtime_checkable
class IJobConverter(Protocol):
    """Port for converting a work item into a :class:`NativeJob`.

    Swap the converter to target a different execution backend without
    touching the routing logic.
    """

    def convert(self, item: IWorkItem) -> NativeJob:
        """Build the native job for ``item``."""
        ...
