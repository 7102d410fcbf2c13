#!/usr/bin/env python3
"""Batch resolution of many subpaths against one export map.

A broken entry in the export map only affects the subpaths that hit it:
InvalidExportTarget is caught per subpath, logged, and recorded as None.

Example:
    >>> resolver = ExportsResolver(pkg.export_table())
    >>> resolver.resolve_all([".", "./utils", "./missing"])
    {'.': ExportTarget(...), './utils': ExportTarget(...), './missing': None}
"""

from typing import Dict, Iterable, List, Optional

from exportmap.infrastructure.logger import get_logger
from exportmap.resolution.conditions import ConditionConfig
from exportmap.resolution.patterns import PatternTable
from exportmap.resolution.target import ExportTarget, InvalidExportTarget

logger = get_logger("exportmap.manifest")


class ExportsResolver:
    """Resolves subpaths against a pattern table with a fixed configuration."""

    def __init__(self, table: PatternTable, config: Optional[ConditionConfig] = None):
        self._table = table
        self._config = config
        self._errors: Dict[str, InvalidExportTarget] = {}

    @property
    def errors(self) -> Dict[str, InvalidExportTarget]:
        """Errors recorded by the last ``resolve_all()`` call, by subpath."""
        return dict(self._errors)

    def resolve(self, subpath: str) -> Optional[ExportTarget]:
        """Resolve one subpath.

        Raises:
            InvalidExportTarget: If the matched export value is empty
        """
        return self._table.resolve_import(subpath, self._config)

    def resolve_all(self, subpaths: Iterable[str]) -> Dict[str, Optional[ExportTarget]]:
        """Resolve every subpath, keeping going past invalid targets.

        Args:
            subpaths: Requested subpaths

        Returns:
            Mapping of subpath to ExportTarget, or None when unmatched or invalid
        """
        self._errors = {}
        results: Dict[str, Optional[ExportTarget]] = {}

        for subpath in subpaths:
            try:
                results[subpath] = self.resolve(subpath)
            except InvalidExportTarget as e:
                logger.warning("Skipping invalid export target", subpath=subpath, error=str(e))
                self._errors[subpath] = e
                results[subpath] = None

        return results

    def exact_subpaths(self) -> List[str]:
        """Subpaths declared without wildcards, in declaration order."""
        return [entry.pattern for entry in self._table.get_patterns() if not entry.is_wildcard]
