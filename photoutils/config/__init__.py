"""
photoutils Configuration Module

This module handles configuration loading, validation, and management. It
supports YAML-based configuration with environment variable overrides.

Author: photoutils Project
License: MIT
"""

from .schema import AppConfig, ClassifyConfig, ClassifyMode, Config, EngineConfig, LogLevel
from .config_loader import ConfigLoader, load_config

__all__ = [
    'AppConfig', 'ClassifyConfig', 'ClassifyMode', 'Config', 'EngineConfig',
    'LogLevel', 'ConfigLoader', 'load_config'
]
