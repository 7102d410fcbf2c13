#!/usr/bin/env python3
"""Hierarchical configuration manager for exportmap.

This module provides configuration management with:
- 6-level precedence hierarchy
- YAML configuration files
- Environment variable overrides
- Thread-safe operations
- Deep merge of nested sections
- Conversion to the ConditionConfig used by the resolver

Example:
    >>> config = ConfigManager()
    >>> config.load_file("exportmap.yaml")
    >>> config.get("exportmap.resolution.conditions")
    ['node', 'browser', 'import', 'require', 'types']
    >>> table.resolve_import("./utils", config.condition_config())
"""

import copy
import os
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from exportmap.core.constants import DEFAULT_CONFIG, ConfigKey, ErrorCode
from exportmap.core.validators import ValidationError, validate_config
from exportmap.resolution.conditions import ConditionConfig

ENV_PREFIX = "EXPORTMAP_"


class ConfigSource(Enum):
    """Configuration source precedence levels."""

    COMPILED_DEFAULTS = 1  # Lowest precedence
    SYSTEM_CONFIG = 2
    USER_CONFIG = 3
    ENVIRONMENT = 4
    CLI_ARGS = 5
    RUNTIME = 6  # Highest precedence


class ConfigError(Exception):
    """Configuration error."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ConfigManager:
    """Thread-safe hierarchical configuration manager.

    Manages configuration from multiple sources with precedence:
    1. Compiled defaults (lowest)
    2. System config (/etc/exportmap/config.yaml)
    3. User config (~/.config/exportmap/config.yaml or --config)
    4. Environment variables (EXPORTMAP_*)
    5. CLI arguments
    6. Runtime updates (highest)
    """

    def __init__(self, config_file: Optional[str] = None, environ: Optional[Dict[str, str]] = None):
        """Initialize configuration manager.

        Args:
            config_file: Optional config file to load
            environ: Environment mapping to read overrides from (default: os.environ)
        """
        self._config: Dict[ConfigSource, Dict[str, Any]] = {}
        self._lock = threading.RLock()

        self._config[ConfigSource.COMPILED_DEFAULTS] = copy.deepcopy(DEFAULT_CONFIG)

        if config_file:
            self.load_file(config_file)

        self._load_environment(os.environ if environ is None else environ)

    def load_file(self, file_path: str, source: ConfigSource = ConfigSource.USER_CONFIG) -> None:
        """Load configuration from YAML file.

        Args:
            file_path: Path to YAML config file
            source: Configuration source level

        Raises:
            ConfigError: If file cannot be loaded, parsed or validated
        """
        path = Path(file_path).expanduser().resolve()

        if not path.exists():
            raise ConfigError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            with open(path, "r") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {file_path}: {e}", ErrorCode.INVALID_INPUT)
        except OSError as e:
            raise ConfigError(f"Error loading config {file_path}: {e}", ErrorCode.INTERNAL_ERROR)

        if not isinstance(config_data, dict):
            raise ConfigError(f"Invalid config format in {file_path}", ErrorCode.INVALID_INPUT)

        self.load_dict(config_data, source)

    def load_dict(self, config_data: Dict[str, Any], source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Load configuration from dictionary.

        A dictionary without the top-level ``exportmap`` key is wrapped in one.

        Args:
            config_data: Configuration dictionary
            source: Configuration source level

        Raises:
            ConfigError: If the configuration is invalid
        """
        if ConfigKey.ROOT not in config_data:
            config_data = {ConfigKey.ROOT: config_data}

        try:
            validate_config(config_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}", e.error_code)

        with self._lock:
            self._config[source] = copy.deepcopy(config_data)

    def _load_environment(self, environ: Dict[str, str]) -> None:
        """Load configuration from environment variables.

        Environment variables in format: EXPORTMAP_SECTION_KEY=value
        Example: EXPORTMAP_RESOLUTION_CONDITIONS=node,import
        """
        env_config: Dict[str, Any] = {}

        for key, value in environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            # Section is the first part, the rest is the key name
            parts = key[len(ENV_PREFIX):].lower().split("_", 1)
            if len(parts) != 2 or not all(parts):
                continue

            section, name = parts
            parsed = self._parse_env_value(value)
            if name == ConfigKey.CONDITIONS and not isinstance(parsed, list):
                parsed = [str(parsed)]
            env_config.setdefault(section, {})[name] = parsed

        if env_config:
            self.load_dict({ConfigKey.ROOT: env_config}, ConfigSource.ENVIRONMENT)

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value.

        Args:
            value: String value from environment

        Returns:
            List for comma-separated values, otherwise bool, int or str
        """
        if "," in value:
            return [item.strip() for item in value.split(",") if item.strip()]

        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Dot-separated key path (e.g., "exportmap.logging.level")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        with self._lock:
            for source in sorted(self._config.keys(), key=lambda s: s.value, reverse=True):
                value = self._get_nested(self._config[source], key)
                if value is not None:
                    return value

            return default

    def _get_nested(self, config: Dict[str, Any], key: str) -> Optional[Any]:
        """Get value from nested dictionary using dot notation."""
        current = config
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return current

    def set(self, key: str, value: Any, source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Set configuration value.

        Args:
            key: Dot-separated key path
            value: Value to set
            source: Configuration source level
        """
        with self._lock:
            current = self._config.setdefault(source, {})

            parts = key.split(".")
            for part in parts[:-1]:
                current = current.setdefault(part, {})

            current[parts[-1]] = value

    def get_all(self) -> Dict[str, Any]:
        """Get merged configuration from all sources.

        Returns:
            Merged configuration dictionary
        """
        with self._lock:
            merged: Dict[str, Any] = {}

            for source in sorted(self._config.keys(), key=lambda s: s.value):
                merged = self._deep_merge(merged, self._config[source])

            return merged

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries; ``override`` wins on conflicts."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def condition_config(self) -> ConditionConfig:
        """Build the resolver configuration from the merged settings.

        Returns:
            ConditionConfig with the effective priority and set overrides

        Raises:
            ConfigError: If the merged settings are invalid
        """
        root = f"{ConfigKey.ROOT}.{ConfigKey.RESOLUTION}"
        conditions = self.get(f"{root}.{ConfigKey.CONDITIONS}")
        condition_sets = self.get(f"{root}.{ConfigKey.CONDITION_SETS}") or {}

        try:
            return ConditionConfig.create(conditions, condition_sets)
        except ValidationError as e:
            raise ConfigError(f"Invalid resolution configuration: {e}", e.error_code)

    def clear(self, source: Optional[ConfigSource] = None) -> None:
        """Clear configuration.

        Args:
            source: Specific source to clear, or None for all except defaults
        """
        with self._lock:
            if source:
                if source in self._config and source != ConfigSource.COMPILED_DEFAULTS:
                    del self._config[source]
            else:
                for s in [s for s in self._config if s != ConfigSource.COMPILED_DEFAULTS]:
                    del self._config[s]
