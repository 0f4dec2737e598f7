"""In-memory adapters for testing and single-process use."""

from .job_service import InMemoryJobExecutionService
from .timer_service import InMemoryTimerService

__all__ = ["InMemoryJobExecutionService", "InMemoryTimerService"]
