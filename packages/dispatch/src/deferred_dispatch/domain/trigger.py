"""Deferred trigger value objects."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TriggerPayload:
    """What the downstream consumer receives when a trigger fires."""

    work_item_id: str
    request_token: int


@dataclass(frozen=True)
class DeferredTriggerRegistration:
    """A trigger as handed to the timer service.

    ``exact`` is False when the coarse fallback API was used and the timer
    service may deliver late or batched.
    """

    request_token: int
    work_item_id: str
    trigger_at: datetime
    exact: bool = True

    @property
    def payload(self) -> TriggerPayload:
        return TriggerPayload(
            work_item_id=self.work_item_id, request_token=self.request_token
        )
