"""Adapters: concrete implementations of the deferred-dispatch ports."""

from .memory import InMemoryJobExecutionService, InMemoryTimerService

__all__ = ["InMemoryJobExecutionService", "InMemoryTimerService"]
