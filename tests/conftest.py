"""Shared pytest fixtures for exportmap tests."""
import json
from pathlib import Path
from typing import Any, Callable, Dict
from unittest.mock import MagicMock

import pytest

from exportmap.manifest.filesystem import FileSystemAdapter


@pytest.fixture
def component_exports() -> Dict[str, Any]:
    """Export map of a UI package with conditional and wildcard entries."""
    return {
        ".": {
            "types": "./dist/index.d.ts",
            "import": "./dist/index.mjs",
            "require": "./dist/index.cjs",
        },
        "./components/*": {
            "import": {
                "node": "./dist/node/components/*.mjs",
                "default": "./dist/components/*.mjs",
            },
            "default": "./dist/components/*.js",
        },
        "./internal/*": None,
        "./package.json": "./package.json",
    }


@pytest.fixture
def write_package(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a package directory with a package.json."""

    def _write(relative: str = "pkg", **manifest: Any) -> Path:
        package_dir = tmp_path / relative
        package_dir.mkdir(parents=True, exist_ok=True)
        manifest.setdefault("name", package_dir.name)
        (package_dir / "package.json").write_text(json.dumps(manifest))
        return package_dir

    return _write


@pytest.fixture
def monorepo(tmp_path: Path, write_package, component_exports) -> Path:
    """Turborepo-style workspace with two packages and one app."""
    (tmp_path / "turbo.json").write_text("{}")
    write_package("packages/ui", name="@acme/ui", version="1.0.0", exports=component_exports)
    write_package("packages/utils", name="@acme/utils", exports="./src/index.js")
    write_package("apps/web", name="web", private=True)
    # Directory without a manifest is ignored
    (tmp_path / "packages" / "scratch").mkdir()
    return tmp_path


@pytest.fixture
def mock_fs() -> MagicMock:
    """Filesystem adapter mock."""
    return MagicMock(spec=FileSystemAdapter)
