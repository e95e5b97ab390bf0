"""
Error Types

Exceptions raised by the copy engine and its front ends.

Author: photoutils Project
License: MIT
"""

from typing import Optional


class PhotoUtilsError(Exception):
    """Base class for all photoutils errors."""


class PreconditionError(PhotoUtilsError):
    """
    Raised when a call is rejected before any filesystem work starts.

    Examples are identical source and target paths, or a target directory
    that does not exist.
    """


class TransferError(PhotoUtilsError):
    """A single copy or move failed."""

    def __init__(self, source: str, target: str, cause: Optional[BaseException] = None):
        self.source = source
        self.target = target
        self.cause = cause
        message = f"{source} -> {target}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class TargetExistsError(TransferError):
    """The target path was taken between resolution and placement."""
