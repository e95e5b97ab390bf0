"""
Transfer Events

Progress side channel of the copy engine. Every completed transfer, skipped
duplicate, removed directory and failed entry is reported to an observer.
Events are advisory: the engine never reads them back.

Author: photoutils Project
License: MIT
"""

import sys
from dataclasses import dataclass
from enum import Enum
from threading import Lock
from typing import List, Optional, TextIO

from ..utils.logger import get_logger

logger = get_logger(__name__)


class EventKind(Enum):
    """Kinds of progress events."""
    COPY = "copy"
    MOVE = "move"
    SKIP = "skip"
    REMOVE = "remove"
    ERROR = "error"


@dataclass(frozen=True)
class TransferEvent:
    """A single progress record."""
    kind: EventKind
    source: str
    target: Optional[str] = None
    message: Optional[str] = None

    def __str__(self) -> str:
        if self.kind == EventKind.MOVE:
            return f"{self.source} -----> {self.target}"
        if self.kind == EventKind.COPY:
            return f"{self.source} +++++> {self.target}"
        if self.kind == EventKind.SKIP:
            return f"{self.source} ====== {self.target}, skipped"
        if self.kind == EventKind.REMOVE:
            return f"{self.source} xxxxxx removed"
        return f"photoutils: error: {self.source}: {self.message}"


class TransferObserver:
    """
    Receiver of engine progress events.

    notify() is called from worker threads; implementations must be
    thread-safe.
    """

    def notify(self, event: TransferEvent) -> None:
        raise NotImplementedError


class LoggingObserver(TransferObserver):
    """Default observer: forwards events to the photoutils logger."""

    def notify(self, event: TransferEvent) -> None:
        if event.kind == EventKind.ERROR:
            logger.error(str(event))
        else:
            logger.info(str(event))


class ConsoleObserver(TransferObserver):
    """Writes one line per event to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self._lock = Lock()

    def notify(self, event: TransferEvent) -> None:
        stream = self.stream or sys.stdout
        with self._lock:
            stream.write(f"{event}\n")
            stream.flush()


class RecordingObserver(TransferObserver):
    """Keeps every event in memory, in arrival order."""

    def __init__(self):
        self._events: List[TransferEvent] = []
        self._lock = Lock()

    def notify(self, event: TransferEvent) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> List[TransferEvent]:
        """Snapshot of the recorded events."""
        with self._lock:
            return list(self._events)

    def of_kind(self, kind: EventKind) -> List[TransferEvent]:
        """Recorded events of one kind."""
        return [e for e in self.events if e.kind == kind]
