"""
Collision Resolver

Finds where a file should land when its target name is already taken:
either a free numbered name, or an existing file with identical content.

Author: photoutils Project
License: MIT
"""

import os
from dataclasses import dataclass
from enum import Enum

from ..utils.logger import get_logger
from ..utils.file_ops import PathStatus, probe
from .deduplicator import ContentComparator

logger = get_logger(__name__)


class ResolutionAction(Enum):
    """What to do with the resolved path."""
    PLACE = "place"
    DUPLICATE = "duplicate"


@dataclass(frozen=True)
class Resolution:
    """Outcome of collision resolution."""
    path: str
    action: ResolutionAction
    attempts: int = 0

    @property
    def is_duplicate(self) -> bool:
        return self.action == ResolutionAction.DUPLICATE


def numbered_name(path: str, index: int) -> str:
    """
    Insert a disambiguation tag before the file extension.

    photo.jpg becomes photo(1).jpg, README becomes README(1).

    Args:
        path: Original target path
        index: Tag number

    Returns:
        Tagged path
    """
    root, ext = os.path.splitext(path)
    return f"{root}({index}){ext}"


class CollisionResolver:
    """
    Collision resolution by probing numbered names.

    Candidates are tried in order: the target itself, then name(1).ext,
    name(2).ext and so on, all derived from the original target. The search
    stops at the first candidate that does not exist (PLACE) or whose content
    equals the source (DUPLICATE). There is no upper bound on attempts.

    Probing does not reserve the name. A file created at the chosen path
    before the transfer makes placement fail with TargetExistsError, and
    the caller resolves again.
    """

    def __init__(self, comparator: ContentComparator):
        """
        Initialize resolver.

        Args:
            comparator: Content comparator used on existing candidates
        """
        self.comparator = comparator

    def resolve(self, source: str, target: str, full_hash_mode: bool = False) -> Resolution:
        """
        Resolve the final target path for source.

        Args:
            source: Source file path
            target: Desired target file path
            full_hash_mode: Passed through to the comparator

        Returns:
            Resolution with the final path and action
        """
        candidate = target
        attempt = 1

        while True:
            if probe(candidate) == PathStatus.NOT_EXIST:
                if candidate != target:
                    logger.debug(f"Resolved {target} to free name {candidate} after {attempt - 1} collisions")
                return Resolution(candidate, ResolutionAction.PLACE, attempt - 1)

            if self.comparator.same_content(source, candidate, full_hash_mode):
                logger.debug(f"{source} duplicates existing {candidate}")
                return Resolution(candidate, ResolutionAction.DUPLICATE, attempt - 1)

            candidate = numbered_name(target, attempt)
            attempt += 1
