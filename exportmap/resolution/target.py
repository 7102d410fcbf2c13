#!/usr/bin/env python3
"""Resolved export targets.

An ExportTarget resolves one export value against the four standard
condition sets (default, import, require, types) when it is built, and keeps
the original value so that any other condition list can be resolved later
with ``resolve()``.

Example:
    >>> target = ExportTarget({"import": "./dist/index.mjs", "require": "./dist/index.cjs"})
    >>> target.import_, target.require, target.default
    ('./dist/index.mjs', './dist/index.cjs', './dist/index.mjs')
    >>> target.resolve(["require"])
    './dist/index.cjs'
"""

from typing import Any, Dict, Iterable, Optional, Tuple

from exportmap.core.constants import ConditionSetKey, ErrorCode
from exportmap.core.validators import ValidationError
from exportmap.infrastructure.logger import get_logger
from exportmap.resolution.conditions import (
    DEFAULT_CONDITION_CONFIG,
    ConditionConfig,
    normalize_conditions,
)
from exportmap.resolution.export_value import (
    ExportValue,
    Leaf,
    Resolution,
    parse_export_value,
    resolve_export_value,
)

logger = get_logger("exportmap.resolution")


class InvalidExportTarget(Exception):
    """Raised when an export value can never resolve to a path or a block."""

    def __init__(self, value: Any, error_code: ErrorCode = ErrorCode.INVALID_TARGET):
        raw = value.to_raw() if hasattr(value, "to_raw") else value
        super().__init__(f"Invalid export target: {raw!r}")
        self.value = value
        self.error_code = error_code


def _path_of(resolution: Resolution) -> Optional[str]:
    return resolution.path if isinstance(resolution, Leaf) else None


def _requested_conditions(conditions: Iterable[str]) -> Tuple[str, ...]:
    if isinstance(conditions, str):
        raise ValidationError(f"Conditions must be a list of strings, got {conditions!r}")
    return normalize_conditions(conditions)


def _first_path(*paths: Optional[str]) -> Optional[str]:
    return next((path for path in paths if path is not None), None)


class ExportTarget:
    """Export value resolved for the standard condition sets.

    Attributes:
        default: Path for the "default" set, falling back to the import,
            require and types results, in that order
        import_: Path for the "import" set
        require: Path for the "require" set
        types: Path for the "types" set
        value: The original export value
        config: Condition configuration used

    Fields hold None both when nothing matched and when the match was an
    explicit null; use ``is_blocked()`` to tell the two apart.
    """

    def __init__(self, value: Any, config: Optional[ConditionConfig] = None):
        """Resolve ``value`` for the four standard condition sets.

        Args:
            value: ExportValue or raw JSON-like data (str, None, list, dict)
            config: Condition configuration (default priority when omitted)

        Raises:
            ValidationError: If raw data has an unsupported shape
            InvalidExportTarget: If the value resolves to nothing at all
        """
        self._value: ExportValue = parse_export_value(value)
        self._config = config or DEFAULT_CONDITION_CONFIG

        results = {
            key: _path_of(resolve_export_value(self._value, self._config.condition_set(key)))
            for key in ConditionSetKey
        }

        self._import = results[ConditionSetKey.IMPORT]
        self._require = results[ConditionSetKey.REQUIRE]
        self._types = results[ConditionSetKey.TYPES]
        self._default = _first_path(
            results[ConditionSetKey.DEFAULT], self._import, self._require, self._types
        )

        if self._default is None:
            # Last resort: the bare global priority
            fallback = resolve_export_value(self._value, self._config.priority())
            if fallback is None:
                logger.debug("Export value resolves to nothing", value=self._value.to_raw())
                raise InvalidExportTarget(self._value)
            self._default = _path_of(fallback)

    @property
    def default(self) -> Optional[str]:
        return self._default

    @property
    def import_(self) -> Optional[str]:
        return self._import

    @property
    def require(self) -> Optional[str]:
        return self._require

    @property
    def types(self) -> Optional[str]:
        return self._types

    @property
    def value(self) -> ExportValue:
        return self._value

    @property
    def config(self) -> ConditionConfig:
        return self._config

    def get(self, name: str) -> Optional[str]:
        """Return a standard field by its condition name ("import", ...).

        Raises:
            KeyError: If ``name`` is not one of the four standard sets
        """
        try:
            key = ConditionSetKey(name)
        except ValueError:
            raise KeyError(name)
        return self.as_dict()[key.value]

    def as_dict(self) -> Dict[str, Optional[str]]:
        """Standard fields keyed by condition name."""
        return {
            ConditionSetKey.DEFAULT.value: self._default,
            ConditionSetKey.IMPORT.value: self._import,
            ConditionSetKey.REQUIRE.value: self._require,
            ConditionSetKey.TYPES.value: self._types,
        }

    def resolve(self, conditions: Iterable[str]) -> Optional[str]:
        """Resolve the original value for an ad hoc condition list.

        Args:
            conditions: Condition names in priority order; duplicates are
                dropped and "default" is appended when missing

        Returns:
            Path, or None when nothing matched or the match was blocked

        Raises:
            ValidationError: If ``conditions`` is a bare string
        """
        return _path_of(resolve_export_value(self._value, _requested_conditions(conditions)))

    def is_blocked(self, conditions: Iterable[str]) -> bool:
        """True if ``conditions`` select an explicit null."""
        resolution = resolve_export_value(self._value, _requested_conditions(conditions))
        return resolution is not None and not isinstance(resolution, Leaf)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExportTarget):
            return NotImplemented
        return self._value == other._value and self.as_dict() == other.as_dict()

    def __hash__(self) -> int:
        return hash((self._value, tuple(self.as_dict().items())))

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.as_dict().items())
        return f"ExportTarget({fields})"
