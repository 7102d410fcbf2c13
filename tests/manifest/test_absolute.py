"""Tests for the absolute-path view of export targets."""

import os

import pytest

from exportmap.core.validators import ValidationError
from exportmap.manifest.absolute import AbsoluteExportTarget, join_path, join_with_root
from exportmap.resolution.target import ExportTarget

ROOT = os.path.join(os.sep, "repo", "packages", "ui")


def _abs(*parts):
    return os.path.join(ROOT, *parts)


class TestJoinPath:
    """Tests for join_path."""

    def test_strips_leading_dot(self):
        assert join_path(ROOT, "./dist/index.js") == _abs("dist", "index.js")

    def test_normalizes_parent_segments(self):
        assert join_path(ROOT, "./src/../dist/a.js") == _abs("dist", "a.js")


class TestJoinWithRoot:
    """Tests for join_with_root."""

    def test_all_fields_joined(self):
        target = ExportTarget(
            {
                "types": "./dist/index.d.ts",
                "import": "./dist/index.mjs",
                "require": "./dist/index.cjs",
            }
        )
        absolute = join_with_root(ROOT, target)

        assert isinstance(absolute, AbsoluteExportTarget)
        assert absolute.root == ROOT
        assert absolute.target is target
        assert absolute.as_dict() == {
            "default": _abs("dist", "index.mjs"),
            "import": _abs("dist", "index.mjs"),
            "require": _abs("dist", "index.cjs"),
            "types": _abs("dist", "index.d.ts"),
        }

    def test_empty_fields_stay_none(self):
        absolute = join_with_root(ROOT, ExportTarget(None))
        assert absolute.as_dict() == {
            "default": None,
            "import": None,
            "require": None,
            "types": None,
        }

    def test_resolve_joins_result(self):
        target = ExportTarget({"browser": "./dist/browser.js", "default": "./dist/index.js"})
        absolute = join_with_root(ROOT, target)
        assert absolute.resolve(["browser"]) == _abs("dist", "browser.js")
        assert absolute.resolve(["worker"]) == _abs("dist", "index.js")

    def test_resolve_absent(self):
        absolute = join_with_root(ROOT, ExportTarget({"import": "./a.mjs"}))
        assert absolute.resolve(["require"]) is None

    def test_resolve_rejects_string_conditions(self):
        absolute = join_with_root(ROOT, ExportTarget({"browser": "./b.js", "default": "./a.js"}))
        with pytest.raises(ValidationError):
            absolute.resolve("browser")

    def test_relative_target_unchanged(self):
        """The relative target keeps its package-relative paths."""
        target = ExportTarget("./dist/index.js")
        join_with_root(ROOT, target)
        assert target.default == "./dist/index.js"
