"""Tests for report rendering."""
import json

import pytest
import yaml

from exportmap.manifest.absolute import join_with_root
from exportmap.manifest.workspace import Workspace
from exportmap.report import (
    RESOLVE_TEMPLATE,
    WORKSPACES_TEMPLATE,
    render,
    target_to_dict,
    workspace_to_dict,
)
from exportmap.resolution.target import ExportTarget


@pytest.fixture
def target():
    return ExportTarget(
        {
            "browser": "./dist/index.browser.js",
            "import": "./dist/index.mjs",
            "require": "./dist/index.cjs",
        }
    )


class TestTargetToDict:
    """Test flattening of targets."""

    def test_standard_fields(self, target):
        assert target_to_dict(target) == {
            "default": "./dist/index.browser.js",
            "import": "./dist/index.mjs",
            "require": "./dist/index.cjs",
            "types": "./dist/index.browser.js",
        }

    def test_extra_condition_lists(self, target):
        data = target_to_dict(target, [["require"], ["worker", "import"], ["worker"]])
        assert data["conditions"] == {
            "require": "./dist/index.cjs",
            "worker,import": "./dist/index.mjs",
            "worker": None,
        }

    def test_absolute_target(self, target):
        data = target_to_dict(join_with_root("/repo", target))
        assert data["import"] == "/repo/dist/index.mjs"


class TestRender:
    """Test output formats."""

    def test_json(self, target):
        output = render({".": target_to_dict(target), "./x": None}, "json")
        assert json.loads(output) == {".": target_to_dict(target), "./x": None}

    def test_yaml_keeps_order(self, target):
        output = render({"./b": None, "./a": target_to_dict(target)}, "yaml")
        assert list(yaml.safe_load(output)) == ["./b", "./a"]

    def test_text_resolve(self, target):
        data = {
            ".": target_to_dict(target, [["worker"]]),
            "./missing": None,
        }
        output = render(data, "text", template=RESOLVE_TEMPLATE)
        lines = output.splitlines()

        assert lines[0] == "."
        assert "  default: ./dist/index.browser.js" in lines
        assert "  import: ./dist/index.mjs" in lines
        assert "  [worker]: -" in lines
        assert lines[-2:] == ["./missing", "  (no match)"]

    def test_text_blocked_fields(self):
        output = render({".": target_to_dict(ExportTarget(None))}, "text")
        assert "  types: -" in output.splitlines()

    def test_text_workspaces(self, monorepo):
        items = [workspace_to_dict(w) for w in Workspace(str(monorepo)).all_workspaces]
        output = render(items, "text", template=WORKSPACES_TEMPLATE)
        lines = output.splitlines()

        assert len(lines) == 3
        assert lines[0].startswith("package  @acme/ui")
        assert lines[2].startswith("app      web")

    def test_text_no_workspaces(self):
        assert render([], "text", template=WORKSPACES_TEMPLATE) == "(no workspaces)"

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unknown output format"):
            render({}, "xml")


class TestWorkspaceToDict:
    """Test workspace flattening."""

    def test_fields(self, monorepo):
        app = Workspace(str(monorepo)).get_app("web")
        assert workspace_to_dict(app) == {"name": "web", "kind": "app", "path": app.path}
