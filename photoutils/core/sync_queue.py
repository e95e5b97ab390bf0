"""
Sync Queue

Bounded, closable work queue feeding the transfer worker pool.

Author: photoutils Project
License: MIT
"""

import queue
from dataclasses import dataclass
from threading import Lock
from typing import Any, Optional

from ..utils.logger import get_logger

logger = get_logger(__name__)

_CLOSED = object()


@dataclass(frozen=True)
class FileEntry:
    """A regular file discovered while walking a source tree."""
    path: str
    relative_path: str
    size: int
    mtime: float
    mode: int


class QueueClosedError(RuntimeError):
    """Raised when putting into a closed queue."""


class SyncQueue:
    """
    Bounded producer/consumer queue with close semantics.

    put() blocks while the queue is full, which throttles the producer to
    the speed of the consumers. close() wakes every consumer once the
    remaining items are drained: get() then returns None.
    """

    def __init__(self, max_size: int, consumers: int):
        """
        Initialize sync queue.

        Args:
            max_size: Maximum number of pending items
            consumers: Number of consumers that will call get()
        """
        if max_size < 1:
            raise ValueError(f"max_size must be positive: {max_size}")
        if consumers < 1:
            raise ValueError(f"consumers must be positive: {consumers}")

        self._queue = queue.Queue(maxsize=max_size)
        self.max_size = max_size
        self.consumers = consumers
        self._closed = False
        self._lock = Lock()

        # Statistics
        self._total_enqueued = 0
        self._total_processed = 0

        logger.debug(f"SyncQueue initialized (max_size={max_size}, consumers={consumers})")

    def put(self, item: Any):
        """
        Add item to queue, blocking while it is full.

        Args:
            item: Work item

        Raises:
            QueueClosedError: If close() was already called
        """
        with self._lock:
            if self._closed:
                raise QueueClosedError("Cannot put into a closed queue")
            self._total_enqueued += 1

        self._queue.put(item)

    def get(self) -> Optional[Any]:
        """
        Remove and return the next item, blocking until one is available.

        Returns:
            The item, or None once the queue is closed and drained
        """
        item = self._queue.get()
        if item is _CLOSED:
            return None

        with self._lock:
            self._total_processed += 1
        return item

    def close(self):
        """
        Close the queue.

        Pending items are still delivered; each consumer then receives
        exactly one end-of-queue marker. Blocks while the queue is full.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True

        for _ in range(self.consumers):
            self._queue.put(_CLOSED)

    def size(self) -> int:
        """Get current queue size (including end markers)."""
        return self._queue.qsize()

    def get_statistics(self) -> dict:
        """
        Get queue statistics.

        Returns:
            Dictionary with statistics
        """
        with self._lock:
            return {
                'current_size': self.size(),
                'max_size': self.max_size,
                'consumers': self.consumers,
                'total_enqueued': self._total_enqueued,
                'total_processed': self._total_processed,
                'closed': self._closed
            }
