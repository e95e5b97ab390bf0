"""
Configuration Loader

Reads the YAML configuration file and applies PHOTOUTILS_* environment
overrides on top of it. Command line flags are applied later, per run.

Author: photoutils Project
License: MIT
"""

import os
import yaml
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple
from dotenv import load_dotenv

from ..utils.logger import get_logger
from .schema import Config

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = "~/.config/photoutils/config.yaml"


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


# variable -> (section, key, conversion)
ENV_OVERRIDES: Dict[str, Tuple[str, str, Callable[[str], Any]]] = {
    "PHOTOUTILS_LOG_LEVEL": ("app", "log_level", str),
    "PHOTOUTILS_JSON_LOGS": ("app", "json_format", _env_bool),
    "PHOTOUTILS_FULL_HASH": ("engine", "full_hash_mode", _env_bool),
    "PHOTOUTILS_COPY_WORKERS": ("engine", "copy_workers", int),
    "PHOTOUTILS_MOVE_WORKERS": ("engine", "move_workers", int),
    "PHOTOUTILS_CLASSIFY_MODE": ("classify", "mode", str.lower),
    "PHOTOUTILS_BIRTHDAY": ("classify", "birthday", str),
}


class ConfigLoader:
    """
    Configuration loader and manager.

    The file location is taken from the constructor argument, then
    PHOTOUTILS_CONFIG, then ~/.config/photoutils/config.yaml. A missing file
    is not an error: the built-in defaults are used.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration loader.

        Args:
            config_path: Path to the configuration file
        """
        # .env values become visible to the overrides below
        load_dotenv()

        self.config_path = os.path.expanduser(
            config_path or os.getenv("PHOTOUTILS_CONFIG", DEFAULT_CONFIG_PATH)
        )

    def load(self) -> Config:
        """
        Load and validate configuration.

        Returns:
            Validated Config object

        Raises:
            ValueError: If the file cannot be parsed, an override cannot be
                converted, or validation fails
        """
        config_data = self._merge_env_vars(self._load_yaml())
        config = Config(**config_data)

        logger.debug(f"Configuration loaded from {self.config_path}")
        return config

    def _load_yaml(self) -> Dict[str, Any]:
        config_file = Path(self.config_path)

        if not config_file.exists():
            logger.debug(f"No configuration file at {config_file}, using defaults")
            return self._create_default_config()

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML config: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {config_file}")
        return data

    def _create_default_config(self) -> Dict[str, Any]:
        """Explicit form of the model defaults, used when no file exists."""
        return {
            "app": {"log_level": "WARNING", "log_to_file": False},
            "engine": {"full_hash_mode": False, "copy_workers": 1, "move_workers": 10},
            "classify": {"mode": "month", "copy_workers": 1, "move_workers": 20},
        }

    def _merge_env_vars(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment overrides to the file's values.

        PHOTOUTILS_LOG_FILE additionally switches file logging on.
        """
        for variable, (section, key, convert) in ENV_OVERRIDES.items():
            value = os.getenv(variable)
            if not value:
                continue
            try:
                config_data.setdefault(section, {})[key] = convert(value)
            except ValueError as e:
                raise ValueError(f"Invalid value for {variable}: {value!r} ({e})")

        log_file = os.getenv("PHOTOUTILS_LOG_FILE")
        if log_file:
            app = config_data.setdefault("app", {})
            app["log_to_file"] = True
            app["log_file_path"] = log_file

        return config_data

    def save(self, config: Config, path: Optional[str] = None) -> None:
        """
        Write a configuration as YAML.

        Args:
            config: Config object to save
            path: Destination (defaults to the loader's path)
        """
        save_path = Path(os.path.expanduser(path or self.config_path))
        save_path.parent.mkdir(parents=True, exist_ok=True)

        with open(save_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(
                config.model_dump(mode="json"),
                f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True
            )
        logger.info(f"Configuration saved to {save_path}")


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Convenience function to load configuration.

    Args:
        config_path: Optional path to config file

    Returns:
        Loaded and validated Config object
    """
    return ConfigLoader(config_path).load()
