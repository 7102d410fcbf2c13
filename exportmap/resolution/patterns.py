#!/usr/bin/env python3
"""Subpath pattern matching for package exports.

This module maps an import subpath onto the export map of a package:
- Exact keys (".", "./utils") match only the identical subpath
- Wildcard keys ("./components/*", "./lib/**") are compiled to regexes
- Captured segments are substituted into the matched export value
- First declared match wins; keys are never re-ranked by specificity

Example:
    >>> table = PatternTable({"./components/*": "./dist/components/*.js"})
    >>> table.resolve_import("./components/button").default
    './dist/components/button.js'
"""

import re
from dataclasses import dataclass
from typing import Any, Iterator, List, Mapping, Optional, Pattern, Sequence, Tuple, Union

from exportmap.core.constants import WILDCARD
from exportmap.core.validators import ValidationError, validate_subpath_pattern
from exportmap.infrastructure.logger import get_logger
from exportmap.resolution.conditions import ConditionConfig
from exportmap.resolution.export_value import ExportValue, map_leaves, parse_export_value
from exportmap.resolution.target import ExportTarget

logger = get_logger("exportmap.resolution")

# A run of one or more wildcard characters
_WILDCARD_RUN = re.compile(r"\*+")

# One path segment that is not a dotfile
_SEGMENT = r"(?!\.)[^/]+"


def _segment_bounds(text: str, start: int, end: int) -> Tuple[bool, bool]:
    """Whether the span ``text[start:end]`` opens and closes a path segment."""
    opens_segment = start == 0 or text[start - 1] == "/"
    closes_segment = end == len(text) or text[end] == "/"
    return opens_segment, closes_segment


def compile_pattern(pattern: str) -> Pattern[str]:
    """Compile a wildcard subpath pattern to an anchored regex.

    A single ``*`` captures characters within one path segment, a run of two
    or more captures across separators. A ``**`` forming a whole segment
    matches zero or more segments when a separator follows it (capturing
    ``""`` for zero) and at least one segment at the end of the pattern.
    Wildcards never match a leading dot of any segment they open, and a
    ``*`` forming a whole segment must match at least one character.

    Args:
        pattern: Subpath pattern containing at least one wildcard

    Returns:
        Compiled regex with one group per wildcard run, in order
    """
    parts = ["^"]
    position = 0
    for match in _WILDCARD_RUN.finditer(pattern):
        start, end = match.span()
        parts.append(re.escape(pattern[position:start]))
        position = end

        opens_segment, closes_segment = _segment_bounds(pattern, start, end)
        segments = f"{_SEGMENT}(?:/{_SEGMENT})*"

        if end - start > 1 and opens_segment and closes_segment:
            if end < len(pattern):
                # "/**/" may also collapse to a single separator
                parts.append(f"(?:({segments})/)?")
                position = end + 1
            else:
                parts.append(f"({segments})")
            continue

        if opens_segment:
            parts.append(r"(?!\.)")

        if end - start > 1:
            parts.append(r"((?:[^/]|/(?!\.))*)")
        elif opens_segment and closes_segment:
            parts.append("([^/]+)")
        else:
            parts.append("([^/]*)")

    parts.append(re.escape(pattern[position:]))
    parts.append("$")
    return re.compile("".join(parts))


def substitute_wildcards(target_path: str, captures: Sequence[str]) -> str:
    """Replace wildcard runs in a target path with captures, left to right.

    Each run (``*`` or ``**``) consumes the next capture; runs beyond the
    available captures are kept literally. An empty capture filling a whole
    segment drops the separator after it, so ``./dist/**/index.js`` with
    ``""`` becomes ``./dist/index.js``.

    Args:
        target_path: Leaf path from the export value
        captures: Positional captures from the matched pattern

    Returns:
        Substituted path
    """
    remaining = iter(captures)
    parts = []
    position = 0
    for match in _WILDCARD_RUN.finditer(target_path):
        start, end = match.span()
        parts.append(target_path[position:start])
        position = end

        capture = next(remaining, None)
        if capture is None:
            parts.append(match.group(0))
            continue

        parts.append(capture)
        opens_segment, _ = _segment_bounds(target_path, start, end)
        if not capture and opens_segment and target_path[end:end + 1] == "/":
            position = end + 1

    parts.append(target_path[position:])
    return "".join(parts)


def substitute_export_value(value: ExportValue, captures: Sequence[str]) -> ExportValue:
    """Substitute captures into every leaf of an export value.

    The capture counter restarts for every leaf.
    """
    return map_leaves(value, lambda path: substitute_wildcards(path, captures))


@dataclass(frozen=True)
class PatternEntry:
    """A single exports key with its export value."""

    pattern: str
    value: ExportValue
    compiled: Optional[Pattern[str]] = None

    @property
    def is_wildcard(self) -> bool:
        return self.compiled is not None

    def match(self, subpath: str) -> Optional[Tuple[str, ...]]:
        """Match ``subpath`` against this entry.

        Args:
            subpath: Requested subpath

        Returns:
            Captures in pattern order (empty for exact keys), or None if
            the subpath doesn't match. A ``**`` segment that matched no
            segments captures ``""``.
        """
        if self.compiled is None:
            return () if subpath == self.pattern else None

        found = self.compiled.match(subpath)
        if found is None:
            return None
        return tuple(group or "" for group in found.groups())


@dataclass(frozen=True)
class PatternMatch:
    """Result of matching a subpath against a pattern table."""

    entry: PatternEntry
    captures: Tuple[str, ...]

    @property
    def pattern(self) -> str:
        return self.entry.pattern

    def substituted_value(self) -> ExportValue:
        """The entry's export value with captures substituted."""
        if not self.entry.is_wildcard:
            return self.entry.value
        return substitute_export_value(self.entry.value, self.captures)


class PatternTable:
    """Ordered export map: subpath patterns to export values.

    Features:
    - Declaration order is authoritative (first match wins)
    - Exact keys compared literally, never as globs
    - Wildcard captures substituted into nested condition objects and lists
    """

    def __init__(self, patterns: Optional[Mapping[str, Any]] = None):
        """Initialize pattern table.

        Args:
            patterns: Exports mapping in declaration order; values may be
                raw JSON-like data or ExportValue instances

        Raises:
            ValidationError: If a key or value has an unsupported shape
        """
        self._entries: List[PatternEntry] = []
        for pattern, value in (patterns or {}).items():
            self.add_pattern(pattern, value)

    def add_pattern(self, pattern: str, value: Any) -> None:
        """Append a pattern after the existing ones.

        Args:
            pattern: Subpath pattern
            value: Export value (raw or parsed)

        Raises:
            ValidationError: If the pattern or value is invalid
        """
        validate_subpath_pattern(pattern)
        try:
            parsed = parse_export_value(value)
        except ValidationError as e:
            raise ValidationError(f"Invalid export for '{pattern}': {e}")

        compiled = compile_pattern(pattern) if WILDCARD in pattern else None
        self._entries.append(PatternEntry(pattern=pattern, value=parsed, compiled=compiled))

    def match(self, subpath: str) -> Optional[PatternMatch]:
        """Find the first entry matching ``subpath``.

        Args:
            subpath: Requested subpath (e.g. "./utils")

        Returns:
            PatternMatch, or None if no entry matches
        """
        for entry in self._entries:
            captures = entry.match(subpath)
            if captures is not None:
                return PatternMatch(entry=entry, captures=captures)
        return None

    def resolve_import(
        self, subpath: str, config: Optional[ConditionConfig] = None
    ) -> Optional[ExportTarget]:
        """Resolve ``subpath`` to an export target.

        Args:
            subpath: Requested subpath
            config: Condition configuration

        Returns:
            ExportTarget, or None if no pattern matches

        Raises:
            InvalidExportTarget: If the matched value resolves to nothing
        """
        found = self.match(subpath)
        if found is None:
            logger.debug("No export pattern matches", subpath=subpath)
            return None

        logger.debug(
            "Export pattern matched",
            subpath=subpath,
            pattern=found.pattern,
            captures=list(found.captures),
        )
        return ExportTarget(found.substituted_value(), config)

    def get_patterns(self) -> List[PatternEntry]:
        """Get all entries in declaration order."""
        return self._entries.copy()

    def to_raw(self) -> dict:
        """Exports mapping as JSON-like data."""
        return {entry.pattern: entry.value.to_raw() for entry in self._entries}

    def __iter__(self) -> Iterator[str]:
        return (entry.pattern for entry in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)


def resolve_import(
    exports: Union[PatternTable, Mapping[str, Any]],
    subpath: str,
    config: Optional[ConditionConfig] = None,
) -> Optional[ExportTarget]:
    """Resolve ``subpath`` against an exports mapping.

    Args:
        exports: PatternTable or exports mapping
        subpath: Requested subpath
        config: Condition configuration

    Returns:
        ExportTarget, or None if no pattern matches
    """
    table = exports if isinstance(exports, PatternTable) else PatternTable(exports)
    return table.resolve_import(subpath, config)
