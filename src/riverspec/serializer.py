"""MutationSerializer: one in-flight mutating remote call per process."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)


class MutationSerializer:
    """Run remote operations under a single exclusive lock.

    The remote backend does not tolerate concurrent writes, and it exposes no
    conflict boundaries a client could key on, so every mutation in the process
    shares one lock. Use :meth:`shared` for the process-wide instance.
    """

    _shared: MutationSerializer | None = None
    _shared_guard = threading.Lock()

    def __init__(self) -> None:
        self._lock = threading.Lock()

    @classmethod
    def shared(cls) -> MutationSerializer:
        """Return the process-wide serializer, creating it on first use."""
        with cls._shared_guard:
            if cls._shared is None:
                cls._shared = cls()
            return cls._shared

    def run[T](self, op: Callable[[], T]) -> T:
        """Execute op while holding the lock; its result or error passes through unchanged."""
        with self._lock:
            logger.debug("Acquired mutation lock")
            try:
                return op()
            finally:
                logger.debug("Released mutation lock")


class NullSerializer(MutationSerializer):
    """Serializer that runs operations without locking."""

    def run[T](self, op: Callable[[], T]) -> T:
        return op()
