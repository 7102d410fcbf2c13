"""Tests for batch subpath resolution."""

import pytest

from exportmap.manifest.resolver import ExportsResolver
from exportmap.resolution.conditions import ConditionConfig
from exportmap.resolution.patterns import PatternTable
from exportmap.resolution.target import InvalidExportTarget


@pytest.fixture
def resolver(component_exports):
    exports = dict(component_exports)
    exports["./broken"] = {"worker": "./w.js"}
    return ExportsResolver(PatternTable(exports))


class TestExportsResolver:
    """Tests for ExportsResolver."""

    def test_resolve(self, resolver):
        assert resolver.resolve(".").import_ == "./dist/index.mjs"

    def test_resolve_raises_for_invalid(self, resolver):
        with pytest.raises(InvalidExportTarget):
            resolver.resolve("./broken")

    def test_resolve_all_keeps_going(self, resolver):
        """One broken entry doesn't stop the others."""
        results = resolver.resolve_all(["./broken", ".", "./missing", "./internal/x"])

        assert list(results) == ["./broken", ".", "./missing", "./internal/x"]
        assert results["./broken"] is None
        assert results["."].require == "./dist/index.cjs"
        assert results["./missing"] is None
        assert results["./internal/x"].default is None
        assert list(resolver.errors) == ["./broken"]

    def test_errors_reset_per_call(self, resolver):
        resolver.resolve_all(["./broken"])
        resolver.resolve_all(["."])
        assert resolver.errors == {}

    def test_errors_is_a_copy(self, resolver):
        resolver.resolve_all(["./broken"])
        resolver.errors.clear()
        assert "./broken" in resolver.errors

    def test_config_applied(self):
        table = PatternTable({".": {"browser": "./b.js", "node": "./n.js"}})
        resolver = ExportsResolver(table, ConditionConfig.create(["browser"]))
        assert resolver.resolve_all(["."])["."].default == "./b.js"

    def test_exact_subpaths(self, resolver):
        assert resolver.exact_subpaths() == [".", "./package.json", "./broken"]
