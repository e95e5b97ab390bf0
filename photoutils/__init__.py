"""
photoutils

Copy, move and classify photo collections without overwriting anything:
name collisions are resolved by comparing file content.

Author: photoutils Project
License: MIT
"""

from .errors import PhotoUtilsError, PreconditionError, TargetExistsError, TransferError
from .utils.file_ops import PathStatus, probe
from .config.schema import EngineConfig
from .core.events import ConsoleObserver, RecordingObserver, TransferObserver
from .core.sync_engine import CopyEngine, TransferAction, TransferResult, TreeCopyResult

__version__ = "0.1.0"
__all__ = [
    'PhotoUtilsError', 'PreconditionError', 'TargetExistsError', 'TransferError', 'PathStatus',
    'probe', 'EngineConfig', 'ConsoleObserver', 'RecordingObserver',
    'TransferObserver', 'CopyEngine', 'TransferAction', 'TransferResult',
    'TreeCopyResult'
]
