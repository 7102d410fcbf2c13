"""Tests for ExportTarget and condition configuration."""

import pytest

from exportmap.core.constants import DEFAULT_CONDITION_PRIORITY, ConditionSetKey, ErrorCode
from exportmap.core.validators import ValidationError
from exportmap.resolution.conditions import ConditionConfig, normalize_conditions
from exportmap.resolution.export_value import parse_export_value
from exportmap.resolution.target import ExportTarget, InvalidExportTarget


class TestNormalizeConditions:
    """Tests for condition set normalization."""

    def test_appends_default(self):
        assert normalize_conditions(["browser"]) == ("browser", "default")

    def test_keeps_existing_default_position(self):
        assert normalize_conditions(["default", "import"]) == ("default", "import")

    def test_removes_duplicates_keeping_first(self):
        assert normalize_conditions(["import", "node", "import"]) == ("import", "node", "default")

    def test_empty(self):
        assert normalize_conditions([]) == ("default",)


class TestConditionConfig:
    """Tests for ConditionConfig."""

    def test_default_priority(self):
        config = ConditionConfig()
        assert config.condition_priority == DEFAULT_CONDITION_PRIORITY
        assert config.priority() == ("node", "browser", "import", "require", "types", "default")

    def test_standard_sets(self):
        config = ConditionConfig()
        assert config.condition_set(ConditionSetKey.DEFAULT) == (
            "default", "node", "browser", "import", "require", "types",
        )
        assert config.condition_set(ConditionSetKey.REQUIRE) == (
            "require", "node", "browser", "import", "types", "default",
        )

    def test_custom_priority(self):
        config = ConditionConfig.create(["worker"])
        assert config.condition_set(ConditionSetKey.TYPES) == ("types", "worker", "default")

    def test_set_override(self):
        config = ConditionConfig.create(condition_sets={"import": ["import", "worker"]})
        assert config.condition_set(ConditionSetKey.IMPORT) == ("import", "worker", "default")
        # Other sets keep the priority
        assert config.condition_set(ConditionSetKey.REQUIRE)[0] == "require"

    def test_set_override_with_enum_key(self):
        config = ConditionConfig.create(condition_sets={ConditionSetKey.TYPES: ["typings"]})
        assert config.condition_set(ConditionSetKey.TYPES) == ("typings", "default")

    def test_unknown_set_rejected(self):
        with pytest.raises(ValidationError, match="Invalid condition set"):
            ConditionConfig.create(condition_sets={"browser": ["browser"]})

    def test_invalid_priority_rejected(self):
        with pytest.raises(ValidationError):
            ConditionConfig.create(["node", ""])

    def test_hashable(self):
        """Configs are values: equal configs hash equal and can key a dict."""
        assert hash(ConditionConfig()) == hash(ConditionConfig.create())

        first = ConditionConfig.create(["worker"], {"types": ["typings"], "import": ["import"]})
        second = ConditionConfig.create(
            ("worker",), {ConditionSetKey.IMPORT: ("import",), "types": ("typings",)}
        )
        assert first == second
        assert hash(first) == hash(second)
        assert {first: "cached"}[second] == "cached"
        assert first.condition_sets == (
            (ConditionSetKey.IMPORT, ("import",)),
            (ConditionSetKey.TYPES, ("typings",)),
        )


class TestExportTargetConstruction:
    """Tests for the precomputed fields."""

    def test_string_target(self):
        target = ExportTarget("./dist/index.js")
        assert target.default == "./dist/index.js"
        assert target.import_ == "./dist/index.js"
        assert target.require == "./dist/index.js"
        assert target.types == "./dist/index.js"

    def test_object_with_all_fields(self):
        target = ExportTarget(
            {
                "default": "./dist/index.js",
                "import": "./dist/index.mjs",
                "require": "./dist/index.cjs",
                "types": "./dist/index.d.ts",
            }
        )
        assert target.default == "./dist/index.js"
        assert target.import_ == "./dist/index.mjs"
        assert target.require == "./dist/index.cjs"
        assert target.types == "./dist/index.d.ts"

    def test_first_available_field_as_default(self):
        target = ExportTarget({"import": "./dist/index.mjs"})
        assert target.default == "./dist/index.mjs"
        assert target.import_ == "./dist/index.mjs"

    def test_require_only(self):
        """Without import, require fills every set through the priority."""
        target = ExportTarget({"require": "./dist/index.cjs"})
        assert target.default == "./dist/index.cjs"
        assert target.import_ == "./dist/index.cjs"

    def test_empty_object_raises(self):
        with pytest.raises(InvalidExportTarget, match="Invalid export target"):
            ExportTarget({})

    def test_empty_list_raises(self):
        with pytest.raises(InvalidExportTarget):
            ExportTarget([])

    def test_unknown_conditions_only_raises(self):
        with pytest.raises(InvalidExportTarget) as exc_info:
            ExportTarget({"worker": "./w.js"})
        assert exc_info.value.error_code == ErrorCode.INVALID_TARGET

    def test_blocked_root_is_valid(self):
        """An explicitly blocked export is a valid, empty target."""
        target = ExportTarget(None)
        assert target.as_dict() == {
            "default": None,
            "import": None,
            "require": None,
            "types": None,
        }
        assert target.is_blocked(["default"])

    def test_list_skips_leading_null(self):
        target = ExportTarget(
            [None, {"default": "./dist/index.js", "browser": "./dist/index.browser.js"}]
        )
        assert target.default == "./dist/index.js"
        assert target.resolve(["browser"]) == "./dist/index.browser.js"

    def test_blocked_default_filled_by_import(self):
        target = ExportTarget({"default": None, "import": "./dist/index.mjs"})
        assert target.default == "./dist/index.mjs"
        assert target.import_ == "./dist/index.mjs"
        assert target.resolve(["default"]) is None
        assert target.is_blocked(["default"])

    def test_accepts_parsed_value(self):
        value = parse_export_value({"import": "./a.mjs"})
        target = ExportTarget(value)
        assert target.value is value

    def test_invalid_raw_data(self):
        with pytest.raises(ValidationError):
            ExportTarget(12)

    def test_custom_priority(self):
        """The configured priority decides between conditions."""
        value = {"browser": "./b.js", "node": "./n.js"}
        assert ExportTarget(value).default == "./n.js"
        config = ConditionConfig.create(["browser", "node"])
        assert ExportTarget(value, config).default == "./b.js"

    def test_set_override_can_leave_fields_empty(self):
        """Overridden sets resolve independently; the priority is the last resort."""
        config = ConditionConfig.create(
            ["worker"],
            {"default": ["deno"], "import": ["deno"], "require": ["deno"], "types": ["deno"]},
        )
        target = ExportTarget({"worker": "./w.js"}, config)
        assert target.import_ is None
        assert target.default == "./w.js"

    def test_set_override_blocked_fallback(self):
        config = ConditionConfig.create(
            ["worker"],
            {"default": ["deno"], "import": ["deno"], "require": ["deno"], "types": ["deno"]},
        )
        target = ExportTarget({"worker": None}, config)
        assert target.default is None


class TestExportTargetResolve:
    """Tests for ad hoc resolution."""

    def test_resolve_custom_conditions(self):
        target = ExportTarget({"browser": "./b.js", "default": "./a.js"})
        assert target.resolve(["browser"]) == "./b.js"
        assert target.resolve(["worker"]) == "./a.js"

    def test_resolve_uses_original_tree(self):
        """resolve() walks the stored value, not the precomputed fields."""
        target = ExportTarget({"import": {"browser": "./b.mjs", "default": "./a.mjs"}})
        assert target.import_ == "./b.mjs"
        assert target.resolve(["import"]) == "./a.mjs"

    def test_resolve_absent(self):
        target = ExportTarget({"import": "./a.mjs"})
        assert target.resolve(["require"]) is None
        assert not target.is_blocked(["require"])

    def test_string_conditions_rejected(self):
        """A bare string is not split into one-letter conditions."""
        target = ExportTarget({"browser": "./b.js", "import": None, "default": "./a.js"})
        with pytest.raises(ValidationError, match="list of strings"):
            target.resolve("browser")
        with pytest.raises(ValidationError, match="list of strings"):
            target.is_blocked("import")
        assert target.resolve(("browser",)) == "./b.js"
        assert target.is_blocked(["import"])

    def test_get_by_condition_name(self):
        target = ExportTarget({"import": "./a.mjs", "require": "./a.cjs"})
        assert target.get("import") == "./a.mjs"
        assert target.get("require") == "./a.cjs"
        with pytest.raises(KeyError):
            target.get("browser")

    def test_idempotent_construction(self):
        """Two targets built from the same value are identical."""
        raw = {"import": {"node": "./n.mjs"}, "default": [None, "./a.js"]}
        first, second = ExportTarget(raw), ExportTarget(raw)
        assert first == second
        assert first.as_dict() == second.as_dict()
        assert hash(first) == hash(second)

    def test_repr(self):
        assert "default='./a.js'" in repr(ExportTarget("./a.js"))
