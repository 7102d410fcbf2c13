#!/usr/bin/env python3
"""package.json loading and access.

This module reads a package manifest and exposes its fields:
- JSON parsing and shape validation
- Read-only accessors (name, version, main, dependencies, ...)
- Normalized ``exports`` (shorthand forms expanded to {".": value})
- Subpath resolution through a PatternTable

Example:
    >>> pkg = PackageJson("packages/ui/package.json")
    >>> pkg.resolve_import("./components/button").import_
    './dist/components/button.mjs'
"""

import json
from typing import Any, Dict, List, Optional

from exportmap.core.constants import ROOT_SUBPATH, SUBPATH_PREFIX, ErrorCode
from exportmap.core.validators import ValidationError, validate_manifest
from exportmap.infrastructure.logger import get_logger
from exportmap.manifest.filesystem import DEFAULT_FILESYSTEM, FileSystemAdapter
from exportmap.resolution.conditions import ConditionConfig
from exportmap.resolution.patterns import PatternTable
from exportmap.resolution.target import ExportTarget

logger = get_logger("exportmap.manifest")


class ManifestError(Exception):
    """Manifest missing, unreadable or malformed."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


def normalize_exports(exports: Any) -> Dict[str, Any]:
    """Expand the shorthand forms of the ``exports`` field.

    A string, array or null, or an object with no key starting with ".",
    describes the package root and is equivalent to ``{".": exports}``.

    Args:
        exports: Raw ``exports`` value

    Returns:
        Mapping of subpath pattern to raw export value

    Raises:
        ValidationError: If the object mixes subpath and condition keys
    """
    if not isinstance(exports, dict):
        return {ROOT_SUBPATH: exports}

    subpath_keys = [key for key in exports if key.startswith(SUBPATH_PREFIX)]
    if not subpath_keys:
        return {ROOT_SUBPATH: exports}

    if len(subpath_keys) != len(exports):
        raise ValidationError(
            "Exports object cannot mix subpath keys and condition keys: "
            f"{sorted(k for k in exports if not k.startswith(SUBPATH_PREFIX))}"
        )

    return dict(exports)


class PackageJson:
    """Represents and provides access to package.json data."""

    def __init__(self, path: str, fs: Optional[FileSystemAdapter] = None):
        """Load and validate the manifest at ``path``.

        Args:
            path: Path to package.json
            fs: Filesystem adapter (default: local filesystem)

        Raises:
            ManifestError: If the file is missing, not JSON, or malformed
        """
        self.path = path
        self._fs = fs or DEFAULT_FILESYSTEM
        self.data: Dict[str, Any] = self._load()

    def _load(self) -> Dict[str, Any]:
        if not self._fs.exists(self.path):
            raise ManifestError(
                f"package.json does not exist at path: {self.path}", ErrorCode.NOT_FOUND
            )

        try:
            data = json.loads(self._fs.read_text(self.path))
        except json.JSONDecodeError as e:
            raise ManifestError(f"Invalid JSON in {self.path}: {e}")
        except OSError as e:
            raise ManifestError(f"Cannot read {self.path}: {e}", ErrorCode.INTERNAL_ERROR)

        try:
            validate_manifest(data)
            if "exports" in data:
                data["exports"] = normalize_exports(data["exports"])
        except ValidationError as e:
            raise ManifestError(f"Invalid manifest {self.path}: {e}", e.error_code)

        logger.debug("Loaded manifest", path=self.path, name=data["name"])
        return data

    @property
    def name(self) -> str:
        return self.data["name"]

    @property
    def version(self) -> Optional[str]:
        return self.data.get("version")

    @property
    def files(self) -> Optional[List[str]]:
        return self.data.get("files")

    @property
    def main(self) -> Optional[str]:
        return self.data.get("main")

    @property
    def module(self) -> Optional[str]:
        return self.data.get("module")

    @property
    def types(self) -> Optional[str]:
        return self.data.get("types")

    @property
    def scripts(self) -> Optional[Dict[str, str]]:
        return self.data.get("scripts")

    @property
    def dependencies(self) -> Optional[Dict[str, str]]:
        return self.data.get("dependencies")

    @property
    def dev_dependencies(self) -> Optional[Dict[str, str]]:
        return self.data.get("devDependencies")

    @property
    def peer_dependencies(self) -> Optional[Dict[str, str]]:
        return self.data.get("peerDependencies")

    @property
    def exports(self) -> Optional[Dict[str, Any]]:
        """Normalized exports mapping, or None if the field is absent."""
        return self.data.get("exports")

    def export_table(self) -> Optional[PatternTable]:
        """Build the pattern table for this manifest's exports.

        Raises:
            ManifestError: If an export value has an unsupported shape
        """
        if self.exports is None:
            return None
        try:
            return PatternTable(self.exports)
        except ValidationError as e:
            raise ManifestError(f"Invalid exports in {self.path}: {e}", e.error_code)

    def resolve_import(
        self, subpath: str, config: Optional[ConditionConfig] = None
    ) -> Optional[ExportTarget]:
        """Resolve ``subpath`` through the exports field.

        Args:
            subpath: Requested subpath (e.g. ".", "./utils")
            config: Condition configuration

        Returns:
            ExportTarget, or None if there is no exports field or no match
        """
        table = self.export_table()
        if table is None:
            return None
        return table.resolve_import(subpath, config)
