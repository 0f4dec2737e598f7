"""ITimerService — protocol for wake-capable one-shot timers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime

    from ..domain.trigger import TriggerPayload


@runtime_checkable
class ITimerService(Protocol):
    """Port for arming triggers that fire at an absolute time.

    A trigger armed here must be able to wake a sleeping host. The timer
    service owns the trigger until it fires; the scheduler keeps no record.
    """

    def supports_exact_wake(self) -> bool:
        """Whether :meth:`arm_exact_wake` is available on this platform."""
        ...

    async def arm_exact_wake(
        self,
        trigger_at: datetime,
        request_token: int,
        payload: TriggerPayload,
    ) -> None:
        """Arm a one-shot trigger that fires at exactly ``trigger_at``."""
        ...

    async def arm_wake(
        self,
        trigger_at: datetime,
        request_token: int,
        payload: TriggerPayload,
    ) -> None:
        """Arm a one-shot trigger that fires at or after ``trigger_at``.

        Delivery may be batched or delayed by the platform.
        """
        ...


@runtime_checkable
class ITriggerSource(Protocol):
    """A timer service that needs to be pumped to deliver fired triggers.

    Implemented by in-process timer services; platform timers deliver on
    their own and do not need this.
    """

    def next_trigger_at(self) -> datetime | None:
        """Earliest armed trigger time, or ``None`` when nothing is armed."""
        ...

    async def deliver_due(self, now: datetime | None = None) -> int:
        """Deliver every trigger due at ``now``. Returns how many fired."""
        ...
