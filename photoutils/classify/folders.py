"""
Folder Policies

Maps a photo date to the name of the folder it is filed under.

Author: photoutils Project
License: MIT
"""

import os
from datetime import datetime
from pathlib import Path

from ..config.schema import ClassifyConfig, ClassifyMode
from ..utils.file_ops import PathStatus, has_extension, probe
from .dates import ClassifyError

DATE_FORMATS = {
    ClassifyMode.MONTH: "%Y-%m",
    ClassifyMode.YEAR: "%Y",
    ClassifyMode.DATE: "%Y-%m-%d",
}


def months_since_birthday(date: datetime, birthday: datetime) -> int:
    """
    Age in months on the given date, counting the birth month as month 1.

    The count advances on the birthday's day of the month.
    """
    months = (date.year - birthday.year) * 12 + (date.month - birthday.month)
    if date.day >= birthday.day:
        months += 1
    return months


def birthday_folder_name(file_path: str, date: datetime, config: ClassifyConfig) -> str:
    """
    Folder name for the birthday policy.

    Files of unknown type get an empty name, meaning the target root.

    Raises:
        ClassifyError: If the photo was taken before the birthday
    """
    months = months_since_birthday(date, config.birthday)
    if months < 1:
        raise ClassifyError(f"{file_path}: the date photo taken is earlier than birthday")

    years, month_tag = divmod(months, 12)
    if month_tag == 0:
        years -= 1
        month_tag = 12

    if has_extension(file_path, config.photo_extensions):
        return config.photo_folder_format.format(years=years, months=month_tag)
    if has_extension(file_path, config.video_extensions):
        return config.video_folder_format.format(years=years, months=month_tag)
    return ""


def folder_name(file_path: str, date: datetime, config: ClassifyConfig) -> str:
    """Folder name for a file taken on the given date."""
    mode = ClassifyMode(config.mode)
    if mode == ClassifyMode.BIRTHDAY:
        return birthday_folder_name(file_path, date, config)
    return date.strftime(DATE_FORMATS[mode])


def make_folder(target: str, name: str) -> str:
    """
    Create the classification folder if needed.

    Safe to call concurrently for the same folder.

    Raises:
        ClassifyError: If the folder cannot be created
    """
    folder_path = os.path.join(target, name) if name else target

    if probe(folder_path) != PathStatus.DIRECTORY:
        try:
            Path(folder_path).mkdir(exist_ok=True)
        except OSError as e:
            raise ClassifyError(f"{folder_path}: make folder failed: {e}")

    if probe(folder_path) != PathStatus.DIRECTORY:
        raise ClassifyError(f"{folder_path}: make folder failed")

    return folder_path
