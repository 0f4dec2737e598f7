"""Job representation understood by the external job-execution service."""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .work_item import WorkConstraints


class ScheduleResult(IntEnum):
    """Result codes returned by ``IJobExecutionService.submit``."""

    SUCCESS = 0
    UNKNOWN_ERROR = 1
    NO_DRIVER_AVAILABLE = 2
    UNSUPPORTED_TRIGGER = 3
    BAD_SERVICE = 4

    @property
    def is_success(self) -> bool:
        return self is ScheduleResult.SUCCESS


class NativeJob(BaseModel):
    """A converted job, ready for submission.

    ``tag`` is what the service uses to identify (and later cancel) the job,
    so it is always the work-item id. The execution window is relative to
    submission time, in seconds.
    """

    model_config = ConfigDict(frozen=True)

    tag: str
    work_item_id: str
    service: str = ""
    recurring: bool = False
    window_start_seconds: int = Field(default=0, ge=0)
    window_end_seconds: int = Field(default=0, ge=0)
    constraints: WorkConstraints = Field(default_factory=WorkConstraints)
    replace_current: bool = True
    extras: dict[str, Any] = Field(default_factory=dict)
