"""exportmap - conditional exports resolution for package.json export maps.

Resolve the subpaths of a package against its ``exports`` field for the
default, import, require and types conditions, or any custom condition list:

    >>> from exportmap import PatternTable
    >>> table = PatternTable({".": {"import": "./index.mjs", "require": "./index.cjs"}})
    >>> target = table.resolve_import(".")
    >>> target.import_, target.require
    ('./index.mjs', './index.cjs')
"""

from exportmap.core.constants import EXPORTMAP_VERSION
from exportmap.resolution import (
    ConditionConfig,
    ExportTarget,
    InvalidExportTarget,
    PatternTable,
    parse_export_value,
    resolve_export_value,
    resolve_import,
)
from exportmap.manifest import PackageJson, Workspace, join_with_root

__version__ = EXPORTMAP_VERSION

__all__ = [
    "ConditionConfig",
    "ExportTarget",
    "InvalidExportTarget",
    "PatternTable",
    "parse_export_value",
    "resolve_export_value",
    "resolve_import",
    "PackageJson",
    "Workspace",
    "join_with_root",
    "__version__",
]
