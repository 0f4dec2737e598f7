"""Tests for CancellationRegistry and scheduler.cancel / is_cancelled."""

from __future__ import annotations

import asyncio
import logging
import threading
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from deferred_dispatch.adapters.memory import InMemoryJobExecutionService
from deferred_dispatch.dispatch import CancellationRegistry
from deferred_dispatch.domain import WorkItem


@pytest.mark.asyncio
async def test_cancel_then_is_cancelled(scheduler) -> None:
    await scheduler.cancel("C")

    assert scheduler.is_cancelled("C") is True
    assert scheduler.is_cancelled("D") is False


@pytest.mark.asyncio
async def test_cancel_forwards_to_job_service(scheduler, job_service, clock) -> None:
    await scheduler.schedule(
        WorkItem(id="queued", period_start_time=clock.now - timedelta(seconds=1))
    )
    assert job_service.queued_count == 1

    await scheduler.cancel("queued")

    assert job_service.cancelled == ["queued"]
    assert job_service.queued_count == 0


@pytest.mark.asyncio
async def test_double_cancel_matches_single_cancel(job_service) -> None:
    once = CancellationRegistry(job_service)
    twice = CancellationRegistry(InMemoryJobExecutionService())

    await once.cancel("x")
    await twice.cancel("x")
    await twice.cancel("x")

    assert once.snapshot() == twice.snapshot() == frozenset({"x"})
    assert len(twice) == 1


@pytest.mark.asyncio
async def test_double_cancel_reissues_external_cancel(job_service) -> None:
    registry = CancellationRegistry(job_service)

    await registry.cancel("x")
    await registry.cancel("x")

    assert job_service.cancelled == ["x", "x"]


@pytest.mark.asyncio
async def test_cancel_before_schedule_still_reported(scheduler, clock) -> None:
    await scheduler.cancel("early")
    await scheduler.schedule(
        WorkItem(id="early", period_start_time=clock.now + timedelta(minutes=1))
    )

    assert scheduler.is_cancelled("early") is True


@pytest.mark.asyncio
async def test_external_cancel_failure_is_logged_not_raised(caplog) -> None:
    service = MagicMock()
    service.cancel = AsyncMock(side_effect=ConnectionError("unreachable"))
    registry = CancellationRegistry(service)

    with caplog.at_level(logging.ERROR, logger="deferred_dispatch.scheduler"):
        await registry.cancel("y")

    assert registry.is_cancelled("y") is True
    assert "Job service cancel failed" in caplog.text


@pytest.mark.asyncio
async def test_external_cancel_timeout_is_logged_not_raised(caplog) -> None:
    async def _hang(_work_item_id: str) -> None:
        await asyncio.sleep(10)

    service = MagicMock()
    service.cancel = _hang
    registry = CancellationRegistry(service, call_timeout=0.01)

    with caplog.at_level(logging.WARNING, logger="deferred_dispatch.scheduler"):
        await registry.cancel("slow")

    assert registry.is_cancelled("slow") is True
    assert "timed out" in caplog.text


def test_membership_operators(job_service) -> None:
    registry = CancellationRegistry(job_service)
    asyncio.run(registry.cancel("z"))

    assert "z" in registry
    assert "other" not in registry
    assert 42 not in registry


def test_concurrent_cancels_from_threads() -> None:
    registry = CancellationRegistry(MagicMock(cancel=AsyncMock()))
    ids = [f"w-{n}" for n in range(200)]

    def _worker(chunk: list[str]) -> None:
        for work_item_id in chunk:
            asyncio.run(registry.cancel(work_item_id))
            assert registry.is_cancelled(work_item_id)

    threads = [threading.Thread(target=_worker, args=(ids[i::4],)) for i in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert registry.snapshot() == frozenset(ids)
