"""
Sync Engine Module

Per-file building blocks: content comparison, collision resolution and
single-file transfer.

Author: photoutils Project
License: MIT
"""

from .deduplicator import ContentComparator
from .file_mover import FileMover
from .resolver import CollisionResolver, Resolution, ResolutionAction, numbered_name

__all__ = [
    'ContentComparator', 'FileMover', 'CollisionResolver', 'Resolution',
    'ResolutionAction', 'numbered_name'
]
