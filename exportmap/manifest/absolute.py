#!/usr/bin/env python3
"""Absolute-path view of resolved export targets.

Resolved paths are relative to the package root. ``join_with_root`` turns an
ExportTarget into an AbsoluteExportTarget whose fields are joined onto a
root directory.

Example:
    >>> absolute = join_with_root("/repo/packages/ui", ExportTarget("./dist/index.js"))
    >>> absolute.default
    '/repo/packages/ui/dist/index.js'
"""

import os
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from exportmap.resolution.target import ExportTarget


def join_path(root: str, relative_path: str) -> str:
    """Join a package-relative path onto ``root`` and normalize it."""
    return os.path.normpath(os.path.join(root, relative_path))


@dataclass(frozen=True)
class AbsoluteExportTarget:
    """ExportTarget with every populated field joined onto ``root``."""

    root: str
    target: ExportTarget
    default: Optional[str] = None
    import_: Optional[str] = None
    require: Optional[str] = None
    types: Optional[str] = None

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {
            "default": self.default,
            "import": self.import_,
            "require": self.require,
            "types": self.types,
        }

    def resolve(self, conditions: Iterable[str]) -> Optional[str]:
        """Resolve ``conditions`` on the relative target and join the result."""
        relative = self.target.resolve(conditions)
        if relative is None:
            return None
        return join_path(self.root, relative)


def join_with_root(root: str, target: ExportTarget) -> AbsoluteExportTarget:
    """Build the absolute view of ``target`` under ``root``.

    Args:
        root: Package root directory
        target: Resolved target with package-relative paths

    Returns:
        AbsoluteExportTarget; empty fields stay None
    """

    def _join(path: Optional[str]) -> Optional[str]:
        return None if path is None else join_path(root, path)

    return AbsoluteExportTarget(
        root=root,
        target=target,
        default=_join(target.default),
        import_=_join(target.import_),
        require=_join(target.require),
        types=_join(target.types),
    )
