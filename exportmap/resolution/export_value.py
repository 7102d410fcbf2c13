#!/usr/bin/env python3
"""Export values and the conditional-exports resolution algorithm.

An export value is the right-hand side of a package ``exports`` entry. It is
parsed from JSON-like data into one of four shapes:

- Leaf: a file path ("./dist/index.js")
- Blocked: an explicit null, the target is deliberately unavailable
- ExportList: ordered fallbacks, the first usable entry wins
- Conditional: condition name -> export value

Resolution walks the tree against an ordered condition list and yields a
Leaf, BLOCKED, or None when nothing applies.

Example:
    >>> value = parse_export_value({"import": "./index.mjs", "default": "./index.js"})
    >>> resolve_export_value(value, ["import", "default"])
    Leaf(path='./index.mjs')
    >>> resolve_export_value(parse_export_value(None), ["default"])
    Blocked()
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Union

from exportmap.core.validators import ValidationError


@dataclass(frozen=True)
class Leaf:
    """Concrete file path relative to the package root."""

    path: str

    def to_raw(self) -> str:
        return self.path


@dataclass(frozen=True)
class Blocked:
    """Explicit null target."""

    def to_raw(self) -> None:
        return None


BLOCKED = Blocked()


@dataclass(frozen=True)
class ExportList:
    """Ordered fallback list."""

    items: Tuple["ExportValue", ...] = ()

    def to_raw(self) -> list:
        return [item.to_raw() for item in self.items]


@dataclass(frozen=True)
class Conditional:
    """Condition object.

    Entries keep declaration order for display, but lookups never iterate
    them: resolution walks the caller's condition list and calls ``get()``.
    """

    entries: Tuple[Tuple[str, "ExportValue"], ...] = ()
    _index: Dict[str, "ExportValue"] = field(
        init=False, repr=False, compare=False, hash=False, default_factory=dict
    )

    def __post_init__(self):
        object.__setattr__(self, "_index", dict(self.entries))

    def get(self, condition: str) -> Optional["ExportValue"]:
        """Return the value declared for ``condition``, or None."""
        return self._index.get(condition)

    def __contains__(self, condition: str) -> bool:
        return condition in self._index

    def keys(self) -> Tuple[str, ...]:
        return tuple(key for key, _ in self.entries)

    def to_raw(self) -> dict:
        return {key: value.to_raw() for key, value in self.entries}


ExportValue = Union[Leaf, Blocked, ExportList, Conditional]

# Outcome of a resolution: a path, an explicit block, or None for "absent"
Resolution = Optional[Union[Leaf, Blocked]]

EXPORT_VALUE_TYPES = (Leaf, Blocked, ExportList, Conditional)


def parse_export_value(raw: Any) -> ExportValue:
    """Build an export value from parsed JSON data.

    Args:
        raw: A string, None, a list of such values, or a dict mapping
            condition names to such values

    Returns:
        The matching ExportValue variant (already-built values pass through)

    Raises:
        ValidationError: If the data has any other shape
    """
    if isinstance(raw, EXPORT_VALUE_TYPES):
        return raw
    if raw is None:
        return BLOCKED
    if isinstance(raw, str):
        return Leaf(raw)
    if isinstance(raw, (list, tuple)):
        return ExportList(tuple(parse_export_value(item) for item in raw))
    if isinstance(raw, dict):
        entries = []
        for key, value in raw.items():
            if not isinstance(key, str):
                raise ValidationError(f"Export condition must be string, got {type(key).__name__}")
            try:
                entries.append((key, parse_export_value(value)))
            except ValidationError as e:
                raise ValidationError(f"Invalid export value for '{key}': {e}")
        return Conditional(tuple(entries))

    raise ValidationError(
        f"Export value must be string, null, array or object, got {type(raw).__name__}"
    )


def resolve_export_value(value: ExportValue, conditions: Sequence[str]) -> Resolution:
    """Resolve an export value against an ordered condition list.

    Args:
        value: Export value tree
        conditions: Condition names in priority order; nested condition
            objects are evaluated against the same full list

    Returns:
        Leaf on success, BLOCKED if an explicit null was selected, None if
        nothing in the tree applies
    """
    if isinstance(value, Blocked):
        return BLOCKED

    if isinstance(value, Leaf):
        return value

    if isinstance(value, ExportList):
        blocked = False
        for item in value.items:
            resolved = resolve_export_value(item, conditions)
            if isinstance(resolved, Leaf):
                return resolved
            if isinstance(resolved, Blocked):
                blocked = True
        return BLOCKED if blocked else None

    for condition in conditions:
        entry = value.get(condition)
        if entry is None:
            continue
        resolved = resolve_export_value(entry, conditions)
        if resolved is not None:
            return resolved

    return None


def map_leaves(value: ExportValue, transform: Callable[[str], str]) -> ExportValue:
    """Rebuild ``value`` with every leaf path passed through ``transform``.

    The tree shape is preserved: blocks stay blocks and lists and condition
    objects keep their order.
    """
    if isinstance(value, Leaf):
        return Leaf(transform(value.path))
    if isinstance(value, Blocked):
        return value
    if isinstance(value, ExportList):
        return ExportList(tuple(map_leaves(item, transform) for item in value.items))
    return Conditional(tuple((key, map_leaves(item, transform)) for key, item in value.entries))
