"""exportmap Manifest Layer.

Everything that touches the filesystem lives here, feeding the pure
resolution package:
- FileSystemAdapter / LocalFileSystem: injectable file access
- PackageJson: manifest loading, validation and accessors
- Workspace / WorkspacePackage: Turborepo-style monorepo enumeration
- AbsoluteExportTarget / join_with_root: package-relative to absolute paths
- ExportsResolver: batch resolution with per-subpath error isolation
"""

from .filesystem import DEFAULT_FILESYSTEM, FileSystemAdapter, LocalFileSystem
from .package_json import ManifestError, PackageJson, normalize_exports
from .absolute import AbsoluteExportTarget, join_path, join_with_root
from .workspace import Workspace, WorkspaceError, WorkspaceKind, WorkspacePackage
from .resolver import ExportsResolver

__all__ = [
    "FileSystemAdapter",
    "LocalFileSystem",
    "DEFAULT_FILESYSTEM",
    "ManifestError",
    "PackageJson",
    "normalize_exports",
    "AbsoluteExportTarget",
    "join_path",
    "join_with_root",
    "Workspace",
    "WorkspaceError",
    "WorkspaceKind",
    "WorkspacePackage",
    "ExportsResolver",
]
