"""
Shared command line helpers.

Author: photoutils Project
License: MIT
"""

import argparse
import sys
from typing import Optional

from ..config.config_loader import load_config
from ..config.schema import Config, LogLevel
from ..utils.logger import setup_logging


def add_common_arguments(parser: argparse.ArgumentParser):
    """Options every front end accepts."""
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="YAML configuration file (default: $PHOTOUTILS_CONFIG or ~/.config/photoutils/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        type=str.upper,
        help="Logging level for diagnostics written to stderr",
    )


def usage_error(parser: argparse.ArgumentParser, message: str) -> int:
    """Print the usage line and an error, return the exit status."""
    sys.stderr.write(parser.format_usage())
    sys.stderr.write(f"{parser.prog}: error: {message}\n")
    return 1


def load_and_configure(args: argparse.Namespace) -> Config:
    """
    Load configuration and set up logging for one invocation.

    Raises:
        ValueError: If the configuration cannot be loaded
    """
    config = load_config(args.config)
    app = config.app

    log_level: Optional[str] = args.log_level or LogLevel(app.log_level).value
    setup_logging(
        log_level=log_level,
        log_to_file=app.log_to_file,
        log_file_path=app.log_file_path,
        log_rotation_size=app.log_rotation_size,
        log_retention_count=app.log_retention_count,
        json_format=app.json_format
    )
    return config
