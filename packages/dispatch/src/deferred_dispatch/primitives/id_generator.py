import itertools
import threading
from typing import Protocol, runtime_checkable


@runtime_checkable
class ITokenGenerator(Protocol):
    """
    Protocol for request-token generation.
    Tokens correlate a deferred trigger registration with its eventual
    firing, so every call must return a value never returned before
    within the process lifetime.
    """

    def next_token(self) -> int:
        """Generates the next unique request token."""
        ...


class MonotonicTokenGenerator(ITokenGenerator):
    """
    Default token generator backed by a locked counter.
    Zero external dependencies.
    """

    def __init__(self, start: int = 0) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_token(self) -> int:
        """Returns the next integer in the sequence."""
        with self._lock:
            return next(self._counter)
