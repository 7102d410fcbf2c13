"""
exportmap Core: Constants

This module provides system-wide constants, error codes and condition names
shared by the resolution, manifest and CLI layers.
"""
from enum import Enum, IntEnum
from typing import Tuple

# Version information
EXPORTMAP_VERSION = "1.0.0"


class ErrorCode(IntEnum):
    """Standardized error codes for exportmap operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad manifest data, invalid configuration
    NOT_FOUND = 2  # File or directory doesn't exist
    INVALID_TARGET = 3  # Export value resolves to nothing
    INTERNAL_ERROR = 6  # Bug in exportmap


class Condition:
    """Well-known condition names."""

    DEFAULT = "default"
    IMPORT = "import"
    REQUIRE = "require"
    TYPES = "types"
    NODE = "node"
    BROWSER = "browser"


class ConditionSetKey(Enum):
    """The four standard condition sets precomputed for every target."""

    DEFAULT = "default"
    IMPORT = "import"
    REQUIRE = "require"
    TYPES = "types"


# Global condition priority used when the caller doesn't override it
DEFAULT_CONDITION_PRIORITY: Tuple[str, ...] = (
    Condition.NODE,
    Condition.BROWSER,
    Condition.IMPORT,
    Condition.REQUIRE,
    Condition.TYPES,
)

# Wildcard marker inside subpath patterns and targets
WILDCARD = "*"

# Prefix that marks a key of the exports object as a subpath
SUBPATH_PREFIX = "."

# Root subpath of a package
ROOT_SUBPATH = "."


class ManifestFile:
    """File names looked up by the manifest layer."""

    PACKAGE_JSON = "package.json"
    TURBO_JSON = "turbo.json"
    PACKAGES_DIR = "packages"
    APPS_DIR = "apps"


class ConfigKey:
    """Configuration key constants."""

    ROOT = "exportmap"

    # Sections
    RESOLUTION = "resolution"
    LOGGING = "logging"

    # Resolution configuration
    CONDITIONS = "conditions"
    CONDITION_SETS = "condition_sets"

    # Logging configuration
    LOG_LEVEL = "level"
    LOG_FILE = "file"


# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.ROOT: {
        ConfigKey.RESOLUTION: {
            ConfigKey.CONDITIONS: list(DEFAULT_CONDITION_PRIORITY),
            ConfigKey.CONDITION_SETS: {},
        },
        ConfigKey.LOGGING: {
            ConfigKey.LOG_LEVEL: "INFO",
            ConfigKey.LOG_FILE: None,
        },
    }
}
