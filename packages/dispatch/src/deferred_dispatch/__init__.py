"""deferred-dispatch — run work now or arm an exact wake-up trigger for later.

Infrastructure-free core. External job-execution and timer services plug in
through the protocols in :mod:`deferred_dispatch.ports`.
"""

from __future__ import annotations

# ── Adapters ────────────────────────────────────────────────────
from .adapters.memory import InMemoryJobExecutionService, InMemoryTimerService
from .config import SchedulerSettings
from .correlation import (
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)

# ── Dispatch ─────────────────────────────────────────────────────
from .dispatch import (
    CancellationRegistry,
    DefaultJobConverter,
    DeferredDispatchScheduler,
    DeferredTrigger,
    DelayedTriggerReceiver,
    ImmediateDispatcher,
    TimerDeliveryWorker,
)

# ── Domain ───────────────────────────────────────────────────────
from .domain import (
    BackoffPolicy,
    DeferredTriggerRegistration,
    NativeJob,
    ScheduleResult,
    TriggerPayload,
    WorkConstraints,
    WorkItem,
)
from .instrumentation import (
    HookRegistry,
    InstrumentationHook,
    get_hook_registry,
    set_hook_registry,
)

# ── Ports ────────────────────────────────────────────────────────
from .ports import (
    IBackgroundWorker,
    IJobConverter,
    IJobExecutionService,
    ITimerService,
    ITriggerConsumer,
    ITriggerSource,
    IWorkItem,
)

# ── Primitives ───────────────────────────────────────────────────
from .primitives import (
    DeferredDispatchError,
    ExactWakeUnsupportedError,
    InfrastructureError,
    ITokenGenerator,
    MonotonicTokenGenerator,
    PreconditionError,
    RoutingError,
    SchedulingError,
)

__version__ = "0.1.0"

__all__ = [
    # Adapters
    "InMemoryJobExecutionService",
    "InMemoryTimerService",
    # Config
    "SchedulerSettings",
    # Correlation
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
    # Dispatch
    "CancellationRegistry",
    "DefaultJobConverter",
    "DeferredDispatchScheduler",
    "DeferredTrigger",
    "DelayedTriggerReceiver",
    "ImmediateDispatcher",
    "TimerDeliveryWorker",
    # Domain
    "BackoffPolicy",
    "DeferredTriggerRegistration",
    "NativeJob",
    "ScheduleResult",
    "TriggerPayload",
    "WorkConstraints",
    "WorkItem",
    # Instrumentation
    "HookRegistry",
    "InstrumentationHook",
    "get_hook_registry",
    "set_hook_registry",
    # Ports
    "IBackgroundWorker",
    "IJobConverter",
    "IJobExecutionService",
    "ITimerService",
    "ITriggerConsumer",
    "ITriggerSource",
    "IWorkItem",
    # Primitives
    "DeferredDispatchError",
    "ExactWakeUnsupportedError",
    "ITokenGenerator",
    "InfrastructureError",
    "MonotonicTokenGenerator",
    "PreconditionError",
    "RoutingError",
    "SchedulingError",
]
