"""Dispatch — decide whether work runs now or is deferred to a wake-up trigger.

* :class:`DeferredDispatchScheduler` is the entry point (``schedule``,
  ``cancel``, ``is_cancelled``).
* :class:`ImmediateDispatcher` submits due work to the job-execution service.
* :class:`DeferredTrigger` arms exact wake-up timers for future work.
* :class:`CancellationRegistry` remembers which work items are dead.
* :class:`DelayedTriggerReceiver` handles fired triggers and
  :class:`TimerDeliveryWorker` pumps in-process timer services.
"""

from .cancellation import CancellationRegistry
from .converter import DefaultJobConverter
from .deferred import DeferredTrigger, LazyHandle
from .immediate import ImmediateDispatcher
from .receiver import DelayedTriggerReceiver
from .scheduler import DeferredDispatchScheduler
from .worker import TimerDeliveryWorker

__all__ = [
    "CancellationRegistry",
    "DefaultJobConverter",
    "DeferredDispatchScheduler",
    "DeferredTrigger",
    "DelayedTriggerReceiver",
    "ImmediateDispatcher",
    "LazyHandle",
    "TimerDeliveryWorker",
]
