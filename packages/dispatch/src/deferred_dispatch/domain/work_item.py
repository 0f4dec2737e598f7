"""WorkItem — a unit of schedulable, deferrable work."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils import ensure_utc

MAX_BACKOFF = timedelta(hours=5)
MIN_BACKOFF = timedelta(seconds=10)
DEFAULT_BACKOFF = timedelta(seconds=30)
_MAX_BACKOFF_EXPONENT = 16


class BackoffPolicy(str, Enum):
    """How the delay before a retry attempt grows."""

    LINEAR = "LINEAR"
    EXPONENTIAL = "EXPONENTIAL"


class WorkConstraints(BaseModel):
    """Conditions the job-execution service must satisfy before running."""

    model_config = ConfigDict(frozen=True)

    requires_network: bool = False
    requires_unmetered_network: bool = False
    requires_charging: bool = False
    requires_device_idle: bool = False

    def is_empty(self) -> bool:
        return not (
            self.requires_network
            or self.requires_unmetered_network
            or self.requires_charging
            or self.requires_device_idle
        )


class WorkItem(BaseModel):
    """Schedulable work identified by a stable ``id``.

    The next eligible run time is derived from the item's schedule state::

        run_attempt_count > 0           → period_start_time + backoff
        periodic and period_count > 0   → period_start_time + interval
        otherwise                       → period_start_time + initial_delay

    Linear backoff is ``backoff_delay * run_attempt_count``; exponential
    backoff is ``backoff_delay * 2 ** (run_attempt_count - 1)``. Both are
    capped at :data:`MAX_BACKOFF`.

    Instances are immutable; the scheduler only reads them.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    worker_type: str = ""
    period_start_time: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    initial_delay: timedelta = timedelta(0)
    interval: timedelta | None = None
    flex_interval: timedelta | None = None
    period_count: int = Field(default=0, ge=0)
    run_attempt_count: int = Field(default=0, ge=0)
    backoff_policy: BackoffPolicy = BackoffPolicy.EXPONENTIAL
    backoff_delay: timedelta = DEFAULT_BACKOFF
    constraints: WorkConstraints = Field(default_factory=WorkConstraints)
    tags: frozenset[str] = frozenset()

    @field_validator("period_start_time")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @field_validator("backoff_delay")
    @classmethod
    def _clamp_backoff(cls, value: timedelta) -> timedelta:
        return min(max(value, MIN_BACKOFF), MAX_BACKOFF)

    @property
    def is_periodic(self) -> bool:
        return self.interval is not None

    @property
    def is_backed_off(self) -> bool:
        return self.run_attempt_count > 0

    def calculate_backoff(self) -> timedelta:
        """Delay before the current retry attempt, capped at MAX_BACKOFF."""
        if self.backoff_policy is BackoffPolicy.LINEAR:
            delay = self.backoff_delay * self.run_attempt_count
        else:
            exponent = min(self.run_attempt_count - 1, _MAX_BACKOFF_EXPONENT)
            delay = self.backoff_delay * 2**exponent
        return min(delay, MAX_BACKOFF)

    def calculate_next_run_time(self) -> datetime:
        """Absolute UTC time at which this item next becomes eligible to run."""
        if self.is_backed_off:
            return self.period_start_time + self.calculate_backoff()
        if self.interval is not None and self.period_count > 0:
            return self.period_start_time + self.interval
        return self.period_start_time + self.initial_delay
