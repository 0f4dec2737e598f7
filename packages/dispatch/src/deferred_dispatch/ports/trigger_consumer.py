"""ITriggerConsumer — protocol for whatever handles fired triggers."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ITriggerConsumer(Protocol):
    """Receives ``(request_token, work_item_id)`` when a deferred trigger fires.

    Implementations should check ``is_cancelled(work_item_id)`` on the
    scheduler before acting, then re-submit the item through ``schedule``.
    """

    async def __call__(self, request_token: int, work_item_id: str) -> None:
        """Handle a fired trigger."""
        ...
