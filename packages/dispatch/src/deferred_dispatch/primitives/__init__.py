"""Primitives: exceptions, token generation."""

from __future__ import annotations

from .exceptions import (
    DeferredDispatchError,
    ExactWakeUnsupportedError,
    InfrastructureError,
    PreconditionError,
    RoutingError,
    SchedulingError,
)
from .id_generator import ITokenGenerator, MonotonicTokenGenerator

__all__ = [
    "DeferredDispatchError",
    "ExactWakeUnsupportedError",
    "ITokenGenerator",
    "InfrastructureError",
    "MonotonicTokenGenerator",
    "PreconditionError",
    "RoutingError",
    "SchedulingError",
]
