"""Tests for the instrumentation hook registry."""

from __future__ import annotations

from typing import Any

import pytest

from deferred_dispatch.instrumentation import (
    HookRegistry,
    InstrumentationHook,
    get_hook_registry,
    set_hook_registry,
)


class RecordingHook:
    def __init__(self, name: str, log: list[str]) -> None:
        self.name = name
        self.log = log

    async def __call__(
        self, operation: str, attributes: dict[str, Any], next_handler: Any
    ) -> Any:
        self.log.append(f"{self.name}:before")
        result = await next_handler()
        self.log.append(f"{self.name}:after")
        return result


async def _handler() -> str:
    return "done"


@pytest.mark.asyncio
async def test_hooks_nest_in_priority_order() -> None:
    log: list[str] = []
    registry = HookRegistry()
    registry.register(RecordingHook("inner", log), priority=10)
    registry.register(RecordingHook("outer", log), priority=-10)

    result = await registry.execute_all("dispatch.cancel", {}, _handler)

    assert result == "done"
    assert log == ["outer:before", "inner:before", "inner:after", "outer:after"]


@pytest.mark.asyncio
async def test_operation_patterns_filter_hooks() -> None:
    log: list[str] = []
    registry = HookRegistry()
    registry.register(
        RecordingHook("later", log), operations=["dispatch.schedule_later.*"]
    )

    await registry.execute_all("dispatch.schedule_now.WorkItem", {}, _handler)
    assert log == []

    await registry.execute_all("dispatch.schedule_later.WorkItem", {}, _handler)
    assert log == ["later:before", "later:after"]


@pytest.mark.asyncio
async def test_disabled_hook_is_skipped() -> None:
    log: list[str] = []
    registry = HookRegistry()
    registry.register(RecordingHook("off", log), enabled=False)

    assert await registry.execute_all("dispatch.cancel", {}, _handler) == "done"
    assert log == []


@pytest.mark.asyncio
async def test_hook_exception_propagates() -> None:
    async def failing(_op: str, _attrs: dict[str, Any], _next: Any) -> Any:
        raise RuntimeError("hook failed")

    registry = HookRegistry()
    registry.register(failing)

    with pytest.raises(RuntimeError, match="hook failed"):
        await registry.execute_all("dispatch.cancel", {}, _handler)


def test_clear_and_len() -> None:
    registry = HookRegistry()
    registry.register(RecordingHook("a", []))
    registry.register(RecordingHook("b", []))
    assert len(registry) == 2

    registry.clear()

    assert len(registry) == 0


def test_recording_hook_satisfies_protocol() -> None:
    assert isinstance(RecordingHook("p", []), InstrumentationHook)


def test_set_hook_registry_replaces_context_registry() -> None:
    original = get_hook_registry()
    try:
        local = HookRegistry()
        set_hook_registry(local)
        assert get_hook_registry() is local
    finally:
        set_hook_registry(original)
