"""
Photo Dates

Determines when a photo or video was taken: EXIF metadata first, the file's
modification time as a fallback.

Author: photoutils Project
License: MIT
"""

import os
from datetime import datetime
from typing import Optional

from hachoir.parser import createParser
from hachoir.metadata import extractMetadata
from hachoir.core import config as hachoir_config

from ..errors import PhotoUtilsError
from ..utils.logger import get_logger

# Suppress hachoir warnings to keep console output clean
hachoir_config.quiet = True

logger = get_logger(__name__)


class ClassifyError(PhotoUtilsError):
    """A file could not be classified."""


def get_date_from_exif(file_path: str) -> Optional[datetime]:
    """
    Extract the creation date from the file's metadata.

    Uses hachoir, which maps EXIF DateTimeOriginal (and the equivalent
    video container fields) to "creation_date".

    Args:
        file_path: Path to the file

    Returns:
        Creation date, or None if the metadata has none
    """
    try:
        parser = createParser(str(file_path))
    except Exception as e:
        logger.debug(f"Failed to create parser for {file_path}: {e}")
        return None

    if not parser:
        logger.debug(f"Unable to parse file for created date: {file_path}")
        return None

    try:
        with parser:
            metadata = extractMetadata(parser)
    except Exception as e:
        logger.debug(f"Metadata extraction error for {file_path}: {e}")
        return None

    if not metadata:
        logger.debug(f"Unable to extract metadata for {file_path}")
        return None

    values = metadata.getValues("creation_date")
    if not values or not isinstance(values[0], datetime):
        return None
    return values[0]


def get_date_from_mtime(file_path: str) -> Optional[datetime]:
    """Modification time of the file in local time, or None if it cannot be read."""
    try:
        return datetime.fromtimestamp(os.stat(file_path).st_mtime)
    except OSError as e:
        logger.warning(f"Get file modification time failed for {file_path}: {e}")
        return None


def get_photo_date(file_path: str) -> datetime:
    """
    Date a photo was taken.

    Raises:
        ClassifyError: If neither metadata nor modification time is available
    """
    date = get_date_from_exif(file_path)
    if date is None:
        logger.debug(f"Read exif info failed, using modification time: {file_path}")
        date = get_date_from_mtime(file_path)

    if date is None:
        raise ClassifyError(f"{file_path}: cannot determine date")
    return date
