"""
photoutils Core Module

Copy engine, work queue and progress events.

Author: photoutils Project
License: MIT
"""

from .events import (
    ConsoleObserver,
    EventKind,
    LoggingObserver,
    RecordingObserver,
    TransferEvent,
    TransferObserver
)
from .sync_queue import FileEntry, SyncQueue, QueueClosedError
from .sync_engine import CopyEngine, TransferAction, TransferResult, TreeCopyResult

__all__ = [
    'ConsoleObserver', 'EventKind', 'LoggingObserver', 'RecordingObserver',
    'TransferEvent', 'TransferObserver', 'FileEntry', 'SyncQueue',
    'QueueClosedError', 'CopyEngine', 'TransferAction', 'TransferResult',
    'TreeCopyResult'
]
