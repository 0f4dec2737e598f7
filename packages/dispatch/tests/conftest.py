"""Shared fixtures for deferred-dispatch tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from deferred_dispatch.adapters.memory import (
    InMemoryJobExecutionService,
    InMemoryTimerService,
)
from deferred_dispatch.dispatch import DeferredDispatchScheduler
from deferred_dispatch.instrumentation import HookRegistry, set_hook_registry

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Settable clock shared by the scheduler and the timer service."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture(autouse=True)
def hook_registry() -> HookRegistry:
    """Fresh hook registry per test.

    Async tests that register hooks call ``set_hook_registry`` again from
    inside the test, since the event loop may run them in a copied context.
    """
    registry = HookRegistry()
    set_hook_registry(registry)
    return registry


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def job_service() -> InMemoryJobExecutionService:
    return InMemoryJobExecutionService()


@pytest.fixture
def timer(clock: FakeClock) -> InMemoryTimerService:
    return InMemoryTimerService(clock=clock)


@pytest.fixture
def scheduler(
    job_service: InMemoryJobExecutionService,
    timer: InMemoryTimerService,
    clock: FakeClock,
) -> DeferredDispatchScheduler:
    return DeferredDispatchScheduler(
        job_service=job_service,
        timer_factory=lambda: timer,
        clock=clock,
    )
