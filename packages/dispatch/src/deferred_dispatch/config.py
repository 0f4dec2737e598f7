"""SchedulerSettings — construction-time options for the dispatch scheduler."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SchedulerSettings(BaseModel):
    """
    Immutable settings injected into ``DeferredDispatchScheduler``.

    There is no file or environment surface; callers build this in code.

    Attributes:
        call_timeout: Seconds to wait on any single call into the job or
            timer service. ``None`` waits indefinitely.
        token_start: First token issued by the default token generator.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    call_timeout: float | None = Field(default=None, gt=0)
    token_start: int = Field(default=0, ge=0)
