"""IWorkItem — protocol for anything the scheduler can route."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime


@runtime_checkable
class IWorkItem(Protocol):
    """Read-only view of a work item.

    The scheduler never mutates work items; ownership stays with the caller.
    ``WorkItem`` in :mod:`deferred_dispatch.domain` is the stock implementation.
    """

    @property
    def id(self) -> str:
        """Stable, globally unique identifier."""
        ...

    def calculate_next_run_time(self) -> datetime:
        """Absolute, timezone-aware time the item next becomes eligible."""
        ...
