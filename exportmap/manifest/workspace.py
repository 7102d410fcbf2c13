#!/usr/bin/env python3
"""Turborepo-style monorepo workspaces.

A workspace root holds a ``turbo.json`` and two directories of packages:
``packages/`` (libraries) and ``apps/`` (applications). Each subdirectory
with a ``package.json`` is a WorkspacePackage whose imports resolve to
absolute paths.

Example:
    >>> workspace = Workspace("/repo")
    >>> ui = workspace.get_package("@acme/ui")
    >>> ui.resolve_import("./button").import_
    '/repo/packages/ui/dist/button.mjs'
"""

import os
from enum import Enum
from typing import List, Optional

from exportmap.core.constants import ErrorCode, ManifestFile
from exportmap.infrastructure.logger import get_logger
from exportmap.manifest.absolute import AbsoluteExportTarget, join_path, join_with_root
from exportmap.manifest.filesystem import DEFAULT_FILESYSTEM, FileSystemAdapter
from exportmap.manifest.package_json import PackageJson
from exportmap.resolution.conditions import ConditionConfig

logger = get_logger("exportmap.manifest")


class WorkspaceKind(Enum):
    """Directory a workspace package was found in."""

    PACKAGE = ManifestFile.PACKAGES_DIR
    APP = ManifestFile.APPS_DIR


class WorkspaceError(Exception):
    """Workspace root or package directory missing or invalid."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.NOT_FOUND):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class WorkspacePackage:
    """A package or app directory inside the workspace."""

    def __init__(
        self,
        path: str,
        kind: WorkspaceKind = WorkspaceKind.PACKAGE,
        fs: Optional[FileSystemAdapter] = None,
    ):
        """Load the package at ``path``.

        Args:
            path: Package directory
            kind: Whether it lives under packages/ or apps/
            fs: Filesystem adapter (default: local filesystem)

        Raises:
            WorkspaceError: If the directory or its package.json is missing
            ManifestError: If package.json is malformed
        """
        self._fs = fs or DEFAULT_FILESYSTEM
        self.path = os.path.abspath(path)
        self.kind = kind

        if not self._fs.exists(self.path):
            raise WorkspaceError(f"Package path does not exist: {self.path}")

        if not self._fs.is_dir(self.path):
            raise WorkspaceError(
                f"Package path is not a directory: {self.path}", ErrorCode.INVALID_INPUT
            )

        manifest_path = os.path.join(self.path, ManifestFile.PACKAGE_JSON)
        if not self._fs.exists(manifest_path):
            raise WorkspaceError(f"package.json not found in package path: {self.path}")

        self.json = PackageJson(manifest_path, self._fs)
        self.name = self.json.name

    def resolve_path(self, relative_path: str) -> str:
        """Resolve a package-relative path to an absolute one."""
        return join_path(self.path, relative_path)

    def resolve_import(
        self, subpath: str, config: Optional[ConditionConfig] = None
    ) -> Optional[AbsoluteExportTarget]:
        """Resolve ``subpath`` through the exports field to absolute paths.

        Args:
            subpath: Requested subpath
            config: Condition configuration

        Returns:
            AbsoluteExportTarget, or None if the subpath isn't exported
        """
        target = self.json.resolve_import(subpath, config)
        if target is None:
            return None
        return join_with_root(self.path, target)

    def __repr__(self) -> str:
        return f"WorkspacePackage(name={self.name!r}, kind={self.kind.name}, path={self.path!r})"


class Workspace:
    """Monorepo root with packages/ and apps/ directories."""

    def __init__(self, root: str, fs: Optional[FileSystemAdapter] = None):
        """Open the workspace at ``root``.

        Args:
            root: Monorepo root directory
            fs: Filesystem adapter (default: local filesystem)

        Raises:
            WorkspaceError: If root is missing, not a directory, or has no turbo.json
        """
        self._fs = fs or DEFAULT_FILESYSTEM

        if not self._fs.exists(root):
            raise WorkspaceError(f"Monorepo root does not exist: {root}")

        if not self._fs.is_dir(root):
            raise WorkspaceError(
                f"Monorepo root is not a directory: {root}", ErrorCode.INVALID_INPUT
            )

        turbo_config = os.path.join(root, ManifestFile.TURBO_JSON)
        if not self._fs.exists(turbo_config):
            raise WorkspaceError(f"turbo.json not found in monorepo root: {turbo_config}")

        self.root = os.path.abspath(root)

    @property
    def packages_path(self) -> str:
        return os.path.join(self.root, ManifestFile.PACKAGES_DIR)

    @property
    def apps_path(self) -> str:
        return os.path.join(self.root, ManifestFile.APPS_DIR)

    @property
    def packages(self) -> List[WorkspacePackage]:
        """All packages under packages/."""
        return self._load_directory(self.packages_path, WorkspaceKind.PACKAGE)

    @property
    def apps(self) -> List[WorkspacePackage]:
        """All apps under apps/."""
        return self._load_directory(self.apps_path, WorkspaceKind.APP)

    @property
    def all_workspaces(self) -> List[WorkspacePackage]:
        """Packages followed by apps."""
        return self.packages + self.apps

    def get_package(self, name: str) -> Optional[WorkspacePackage]:
        """Find a package by manifest name."""
        return next((p for p in self.packages if p.name == name), None)

    def get_app(self, name: str) -> Optional[WorkspacePackage]:
        """Find an app by manifest name."""
        return next((a for a in self.apps if a.name == name), None)

    def get_workspace(self, name: str) -> Optional[WorkspacePackage]:
        """Find a package or app by manifest name."""
        return next((w for w in self.all_workspaces if w.name == name), None)

    def _load_directory(self, dir_path: str, kind: WorkspaceKind) -> List[WorkspacePackage]:
        """Load every subdirectory of ``dir_path`` that has a package.json."""
        if not self._fs.exists(dir_path):
            return []

        items = []
        for entry in self._fs.list_dir(dir_path):
            item_path = os.path.join(dir_path, entry)
            if not self._fs.is_dir(item_path):
                continue
            if not self._fs.exists(os.path.join(item_path, ManifestFile.PACKAGE_JSON)):
                continue
            items.append(WorkspacePackage(item_path, kind, self._fs))

        logger.debug("Loaded workspace directory", path=dir_path, count=len(items))
        return items
