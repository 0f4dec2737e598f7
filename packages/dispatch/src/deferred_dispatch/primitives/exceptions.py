"""Exceptions for deferred-dispatch."""

from __future__ import annotations


class DeferredDispatchError(Exception):
    """Root exception for the entire deferred-dispatch package."""


class PreconditionError(DeferredDispatchError):
    """Raised when a required external capability is unavailable.

    Usage: ``DeferredDispatchScheduler`` raises this at construction time when
    the job-execution service reports itself unavailable. None of the
    scheduler's operations can work without it, so construction fails fast.
    """


class InfrastructureError(DeferredDispatchError):
    """Base class for all failures raised by external services."""


class SchedulingError(InfrastructureError):
    """Raised when a deferred trigger could not be armed.

    Carries the id of the work item that failed. When several items in one
    ``schedule`` batch fail, the first error is raised and the rest are
    attached as ``failures``.
    """

    def __init__(
        self,
        work_item_id: str,
        reason: str | None = None,
    ) -> None:
        self.work_item_id = work_item_id
        self.reason = reason
        self.failures: list[SchedulingError | RoutingError] = []

        msg = f"Failed to arm deferred trigger for work item {work_item_id!r}"
        if reason:
            msg += f" - {reason}"

        super().__init__(msg)


class ExactWakeUnsupportedError(InfrastructureError):
    """Raised by a timer service asked for an exact wake-up it cannot arm.

    Callers are expected to check ``supports_exact_wake()`` first and use the
    coarse API instead.
    """


class RoutingError(DeferredDispatchError):
    """Raised when a work item could not be routed at all.

    Covers failures before either path is taken, such as a work item whose
    ``calculate_next_run_time`` raises, or an instrumentation hook that
    fails around the immediate path. Reported alongside ``SchedulingError``
    by ``schedule``: the first failure of a batch is raised and the rest are
    attached as ``failures``.
    """

    def __init__(
        self,
        work_item_id: str,
        reason: str | None = None,
    ) -> None:
        self.work_item_id = work_item_id
        self.reason = reason
        self.failures: list[SchedulingError | RoutingError] = []

        msg = f"Failed to route work item {work_item_id!r}"
        if reason:
            msg += f" - {reason}"

        super().__init__(msg)
