"""exportmap Resolution - conditional exports resolution.

This package computes file targets from a package export map:
- Export values: Leaf, Blocked, ExportList and Conditional trees
- Condition sets and ConditionConfig
- ExportTarget: a value resolved for default/import/require/types
- PatternTable: ordered subpath patterns with wildcard substitution

Resolution is pure: nothing here reads files or keeps state between calls.
"""

from .conditions import DEFAULT_CONDITION_CONFIG, ConditionConfig, normalize_conditions
from .export_value import (
    BLOCKED,
    Blocked,
    Conditional,
    ExportList,
    ExportValue,
    Leaf,
    map_leaves,
    parse_export_value,
    resolve_export_value,
)
from .target import ExportTarget, InvalidExportTarget
from .patterns import (
    PatternEntry,
    PatternMatch,
    PatternTable,
    compile_pattern,
    resolve_import,
    substitute_export_value,
    substitute_wildcards,
)

__all__ = [
    # Export values
    "ExportValue",
    "Leaf",
    "Blocked",
    "BLOCKED",
    "ExportList",
    "Conditional",
    "parse_export_value",
    "resolve_export_value",
    "map_leaves",
    # Conditions
    "ConditionConfig",
    "DEFAULT_CONDITION_CONFIG",
    "normalize_conditions",
    # Targets
    "ExportTarget",
    "InvalidExportTarget",
    # Patterns
    "PatternEntry",
    "PatternMatch",
    "PatternTable",
    "compile_pattern",
    "substitute_wildcards",
    "substitute_export_value",
    "resolve_import",
]
