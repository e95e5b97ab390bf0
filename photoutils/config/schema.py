"""
Configuration Schema and Models

Pydantic models for logging, copy engine and classification settings.
Each section validates its own values and supplies the defaults used when
no configuration file exists.

Author: photoutils Project
License: MIT
"""

import hashlib
from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.file_ops import normalize_extensions


class LogLevel(str, Enum):
    """Logging level options."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ClassifyMode(str, Enum):
    """How photos are bucketed into folders."""
    MONTH = "month"
    YEAR = "year"
    BIRTHDAY = "birthday"
    DATE = "date"


class AppConfig(BaseModel):
    """Logging and general application settings."""

    log_level: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Application logging level"
    )
    log_to_file: bool = Field(
        default=False,
        description="Enable logging to file"
    )
    log_file_path: str = Field(
        default="photoutils.log",
        description="Path of the log file when file logging is enabled"
    )
    log_rotation_size: int = Field(
        default=10485760,  # 10MB
        description="Log file size before rotation (bytes)"
    )
    log_retention_count: int = Field(
        default=5,
        description="Number of rotated log files to keep"
    )
    json_format: bool = Field(
        default=False,
        description="Emit log records as JSON"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper()
        return v


class EngineConfig(BaseModel):
    """
    Settings for one copy engine run.

    Passed explicitly into every engine call so concurrent runs with
    different modes cannot interfere.
    """

    model_config = ConfigDict(validate_assignment=True)

    move_mode: bool = Field(
        default=False,
        description="Move files instead of copying them"
    )
    full_hash_mode: bool = Field(
        default=False,
        description="Always hash whole files (fast mode samples large files)"
    )
    recursive: bool = Field(
        default=False,
        description="Descend into subdirectories when copying a tree"
    )
    copy_workers: int = Field(
        default=1,
        ge=1,
        description="Worker threads in copy mode"
    )
    move_workers: int = Field(
        default=10,
        ge=1,
        description="Worker threads in move mode"
    )
    queue_size: Optional[int] = Field(
        default=None,
        ge=1,
        description="Bound of the work queue (None uses the worker count)"
    )
    sample_threshold: int = Field(
        default=500 * 1024,
        ge=0,
        description="Files larger than this are sample-hashed in fast mode (bytes)"
    )
    sample_block_size: int = Field(
        default=50 * 1024,
        ge=1,
        description="Size of each of the four sampled windows (bytes)"
    )
    hash_algorithm: str = Field(
        default="md5",
        description="hashlib algorithm used for content fingerprints"
    )
    chunk_size: int = Field(
        default=65536,
        ge=1,
        description="Read size when streaming files (bytes)"
    )

    @field_validator("hash_algorithm")
    @classmethod
    def validate_hash_algorithm(cls, v):
        """Ensure hashlib knows the algorithm."""
        try:
            hashlib.new(v)
        except ValueError:
            raise ValueError(f"Unsupported hash algorithm: {v}")
        return v.lower()

    @property
    def worker_count(self) -> int:
        """Number of workers for the current transfer mode."""
        return self.move_workers if self.move_mode else self.copy_workers

    @property
    def effective_queue_size(self) -> int:
        """Bound of the work queue."""
        return self.queue_size or self.worker_count


class ClassifyConfig(BaseModel):
    """Photo classification settings."""

    mode: ClassifyMode = Field(
        default=ClassifyMode.MONTH,
        description="Folder naming policy"
    )
    birthday: datetime = Field(
        default=datetime(2011, 3, 16, 13, 12, 30),
        description="Reference date for the birthday policy"
    )
    photo_extensions: List[str] = Field(
        default=["jpg", "cr2"],
        description="Photo file extensions (lowercase, without dots)"
    )
    video_extensions: List[str] = Field(
        default=["mp4", "mov", "3gp"],
        description="Video file extensions (lowercase, without dots)"
    )
    photo_folder_format: str = Field(
        default="{years}岁{months}月照",
        description="Birthday folder name for photos"
    )
    video_folder_format: str = Field(
        default="{years}岁{months}月视频",
        description="Birthday folder name for videos"
    )
    copy_workers: int = Field(
        default=1,
        ge=1,
        description="Worker threads when copying"
    )
    move_workers: int = Field(
        default=20,
        ge=1,
        description="Worker threads when moving"
    )

    @field_validator("photo_extensions", "video_extensions", mode="before")
    @classmethod
    def normalize_extension_list(cls, v):
        """Normalize extensions to lowercase without dots."""
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, list):
            return normalize_extensions(ext.strip() for ext in v)
        return v

    @field_validator("photo_folder_format", "video_folder_format")
    @classmethod
    def validate_folder_format(cls, v):
        """Ensure the format only uses the supported fields."""
        try:
            v.format(years=0, months=1)
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(f"Invalid folder format {v!r}: {e}")
        return v

    @property
    def extensions(self) -> List[str]:
        """All extensions the classifier handles."""
        return self.photo_extensions + self.video_extensions


class Config(BaseModel):
    """
    Root configuration model for photoutils.

    Loaded from config.yaml and overridden by environment variables, then by
    command line flags for a single invocation.
    """

    model_config = ConfigDict(validate_assignment=True)

    app: AppConfig = Field(default_factory=AppConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    classify: ClassifyConfig = Field(default_factory=ClassifyConfig)
