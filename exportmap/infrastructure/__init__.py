"""exportmap Infrastructure Layer.

This layer provides services used by the resolution, manifest and CLI layers:
- Logger: Structured logging system
- ConfigManager: Hierarchical configuration (defaults, YAML files, environment)
"""

from .logger import Logger, LogLevel, configure_logging, get_logger, set_global_logger
from .config_manager import ConfigError, ConfigManager, ConfigSource

__all__ = [
    # Logger exports
    "Logger",
    "LogLevel",
    "get_logger",
    "set_global_logger",
    "configure_logging",
    # ConfigManager exports
    "ConfigSource",
    "ConfigError",
    "ConfigManager",
]
