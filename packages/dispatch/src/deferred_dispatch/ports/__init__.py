"""Ports: protocols for the external collaborators of the scheduler."""

from __future__ import annotations

from .background_worker import IBackgroundWorker
from .job_converter import IJobConverter
from .job_service import IJobExecutionService
from .timer_service import ITimerService, ITriggerSource
from .trigger_consumer import ITriggerConsumer
from .work_item import IWorkItem

__all__ = [
    "IBackgroundWorker",
    "IJobConverter",
    "IJobExecutionService",
    "ITimerService",
    "ITriggerConsumer",
    "ITriggerSource",
    "IWorkItem",
]
