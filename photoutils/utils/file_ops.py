"""
File Operation Utilities

Path probing and directory helpers shared by the engine and the front ends.

Author: photoutils Project
License: MIT
"""

import os
import stat
from enum import Enum
from pathlib import Path
from typing import Union

from .logger import get_logger

logger = get_logger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class PathStatus(Enum):
    """What a path currently points at."""
    FILE = "file"
    DIRECTORY = "directory"
    NOT_EXIST = "not_exist"


def probe(path: PathLike) -> PathStatus:
    """
    Classify a filesystem path.

    Symlinks are followed. Any stat failure, including permission errors,
    is reported as NOT_EXIST: callers cannot tell "unreadable" apart from
    "absent". The result is never cached.

    Args:
        path: Path to inspect

    Returns:
        PathStatus of the path at the time of the call
    """
    try:
        st = os.stat(path)
    except (OSError, ValueError):
        return PathStatus.NOT_EXIST

    if stat.S_ISDIR(st.st_mode):
        return PathStatus.DIRECTORY
    return PathStatus.FILE


def ensure_directory(directory: PathLike) -> bool:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        directory: Directory path

    Returns:
        True if the path is a directory afterwards
    """
    if probe(directory) == PathStatus.NOT_EXIST:
        try:
            Path(directory).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create directory {directory}: {e}")
            return False

    return probe(directory) == PathStatus.DIRECTORY


def normalize_extensions(extensions) -> list:
    """Lowercase extensions and strip leading dots."""
    return [ext.lower().lstrip('.') for ext in extensions if ext and ext.strip('.')]


def has_extension(file_path: PathLike, extensions) -> bool:
    """
    Check if a file has one of the given extensions.

    Args:
        file_path: Path to the file
        extensions: Extensions, lowercase without dots

    Returns:
        True if the extension matches (case-insensitive)
    """
    ext = Path(file_path).suffix.lower().lstrip('.')
    return bool(ext) and ext in extensions
