"""
Classification Module

Date extraction, folder naming policies and the date classifier.

Author: photoutils Project
License: MIT
"""

from .dates import ClassifyError, get_date_from_exif, get_date_from_mtime, get_photo_date
from .folders import birthday_folder_name, folder_name, make_folder, months_since_birthday
from .classifier import Classifier

__all__ = [
    'ClassifyError', 'get_date_from_exif', 'get_date_from_mtime', 'get_photo_date',
    'birthday_folder_name', 'folder_name', 'make_folder', 'months_since_birthday',
    'Classifier'
]
