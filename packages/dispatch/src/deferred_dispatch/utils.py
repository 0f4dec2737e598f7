"""Common utility functions and helpers."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable

T = TypeVar("T")


def utcnow() -> datetime:
    """Default scheduler clock."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


async def call_with_timeout(call: Awaitable[T], timeout: float | None) -> T:
    """Await an external service call, bounded by ``timeout`` seconds if set.

    Raises ``asyncio.TimeoutError`` when the bound is exceeded.
    """
    if timeout is None:
        return await call
    return await asyncio.wait_for(call, timeout=timeout)
