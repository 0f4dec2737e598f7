"""Domain: work items, native jobs, trigger value objects."""

from __future__ import annotations

from .native_job import NativeJob, ScheduleResult
from .trigger import DeferredTriggerRegistration, TriggerPayload
from .work_item import (
    MAX_BACKOFF,
    MIN_BACKOFF,
    BackoffPolicy,
    WorkConstraints,
    WorkItem,
)

__all__ = [
    "MAX_BACKOFF",
    "MIN_BACKOFF",
    "BackoffPolicy",
    "DeferredTriggerRegistration",
    "NativeJob",
    "ScheduleResult",
    "TriggerPayload",
    "WorkConstraints",
    "WorkItem",
]
