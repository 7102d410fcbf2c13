"""
exportmap Core: Input Validators.

This module provides validation functions for configuration, condition lists,
subpath patterns and package manifests. Every validator returns True on
success and raises ValidationError describing the first problem found.
"""
from typing import Any, Dict, List

from exportmap.core.constants import ConditionSetKey, ConfigKey, ErrorCode

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

# Optional string fields of a package manifest
MANIFEST_STRING_FIELDS = ("version", "main", "module", "types")

# Optional string -> string maps of a package manifest
MANIFEST_MAP_FIELDS = ("scripts", "dependencies", "devDependencies", "peerDependencies")


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


def validate_config(config: Dict[str, Any]) -> bool:
    """Validate exportmap configuration structure.

    The configuration may be given with or without the top-level
    ``exportmap`` key.

    Args:
        config: Configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValidationError("Configuration must be a dictionary")

    if ConfigKey.ROOT in config:
        config = config[ConfigKey.ROOT]
        if not isinstance(config, dict):
            raise ValidationError(f"'{ConfigKey.ROOT}' section must be a dictionary")

    if ConfigKey.RESOLUTION in config:
        validate_resolution_config(config[ConfigKey.RESOLUTION])

    if ConfigKey.LOGGING in config:
        logging_config = config[ConfigKey.LOGGING]
        if not isinstance(logging_config, dict):
            raise ValidationError("Logging configuration must be a dictionary")

        if ConfigKey.LOG_LEVEL in logging_config:
            validate_log_level(logging_config[ConfigKey.LOG_LEVEL])

        log_file = logging_config.get(ConfigKey.LOG_FILE)
        if log_file is not None and not isinstance(log_file, str):
            raise ValidationError(f"Log file must be a string: {log_file}")

    return True


def validate_resolution_config(resolution: Dict[str, Any]) -> bool:
    """Validate the resolution section of the configuration.

    Args:
        resolution: Resolution configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If the section is invalid
    """
    if not isinstance(resolution, dict):
        raise ValidationError("Resolution configuration must be a dictionary")

    if ConfigKey.CONDITIONS in resolution:
        try:
            validate_condition_list(resolution[ConfigKey.CONDITIONS])
        except ValidationError as e:
            raise ValidationError(f"Invalid '{ConfigKey.CONDITIONS}': {e}")

    condition_sets = resolution.get(ConfigKey.CONDITION_SETS)
    if condition_sets is not None:
        validate_condition_sets(condition_sets)

    return True


def validate_condition_name(name: str) -> bool:
    """Validate a single condition name.

    Args:
        name: Condition name to validate

    Returns:
        True if valid

    Raises:
        ValidationError: If name is invalid
    """
    if not isinstance(name, str):
        raise ValidationError(f"Condition name must be string, got {type(name).__name__}")

    if not name:
        raise ValidationError("Condition name cannot be empty")

    if name.startswith("."):
        raise ValidationError(f"Condition name cannot start with '.': {name}")

    return True


def validate_condition_list(conditions: List[str]) -> bool:
    """Validate an ordered list of condition names.

    Args:
        conditions: Condition names

    Returns:
        True if valid

    Raises:
        ValidationError: If the list or any entry is invalid
    """
    if isinstance(conditions, str) or not isinstance(conditions, (list, tuple)):
        raise ValidationError("Conditions must be a list of strings")

    for i, name in enumerate(conditions):
        try:
            validate_condition_name(name)
        except ValidationError as e:
            raise ValidationError(f"Invalid condition at index {i}: {e}")

    return True


def validate_condition_sets(condition_sets: Dict[str, List[str]]) -> bool:
    """Validate per-set condition overrides.

    Args:
        condition_sets: Mapping of standard set name to condition list

    Returns:
        True if valid

    Raises:
        ValidationError: If a key is not a standard set or a list is invalid
    """
    if not isinstance(condition_sets, dict):
        raise ValidationError("Condition sets must be a dictionary")

    valid_keys = [k.value for k in ConditionSetKey]
    for key, conditions in condition_sets.items():
        if key not in valid_keys:
            raise ValidationError(f"Invalid condition set: {key}. Must be one of {valid_keys}")

        try:
            validate_condition_list(conditions)
        except ValidationError as e:
            raise ValidationError(f"Invalid condition set '{key}': {e}")

    return True


def validate_subpath_pattern(pattern: str) -> bool:
    """Validate an exports key.

    Args:
        pattern: Subpath pattern (e.g. ".", "./utils", "./components/*")

    Returns:
        True if valid

    Raises:
        ValidationError: If pattern is invalid
    """
    if not isinstance(pattern, str):
        raise ValidationError(f"Subpath pattern must be string, got {type(pattern).__name__}")

    if not pattern:
        raise ValidationError("Subpath pattern cannot be empty")

    if "\0" in pattern:
        raise ValidationError("Invalid subpath pattern: contains null bytes")

    return True


def validate_log_level(level: str) -> bool:
    """Validate log level name.

    Args:
        level: Level name (case-insensitive)

    Returns:
        True if valid

    Raises:
        ValidationError: If level is unknown
    """
    if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
        raise ValidationError(
            f"Invalid log level: {level}. Must be one of {sorted(VALID_LOG_LEVELS)}"
        )
    return True


def validate_manifest(data: Dict[str, Any]) -> bool:
    """Validate the shape of a parsed package manifest.

    Only the fields exportmap reads are checked; unknown fields are allowed.
    The ``exports`` value is checked when it is turned into export values.

    Args:
        data: Parsed package.json content

    Returns:
        True if valid

    Raises:
        ValidationError: If a known field has the wrong type
    """
    if not isinstance(data, dict):
        raise ValidationError("Manifest must be a JSON object")

    if "name" not in data:
        raise ValidationError("Manifest must have 'name' field")

    if not isinstance(data["name"], str):
        raise ValidationError(f"Manifest name must be string: {data['name']!r}")

    for key in MANIFEST_STRING_FIELDS:
        if key in data and not isinstance(data[key], str):
            raise ValidationError(f"Manifest field '{key}' must be string: {data[key]!r}")

    if "files" in data:
        files = data["files"]
        if not isinstance(files, list) or not all(isinstance(f, str) for f in files):
            raise ValidationError("Manifest field 'files' must be a list of strings")

    for key in MANIFEST_MAP_FIELDS:
        if key not in data:
            continue
        value = data[key]
        if not isinstance(value, dict):
            raise ValidationError(f"Manifest field '{key}' must be an object")
        for name, version_range in value.items():
            if not isinstance(version_range, str):
                raise ValidationError(
                    f"Manifest field '{key}.{name}' must be string: {version_range!r}"
                )

    return True
