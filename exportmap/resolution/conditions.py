#!/usr/bin/env python3
"""Condition lists and resolver configuration.

A condition set is an ordered list of condition names without duplicates
that always ends with "default". ConditionConfig carries the global priority
and optional overrides for the four standard sets.

Example:
    >>> normalize_conditions(["browser", "import", "browser"])
    ('browser', 'import', 'default')
    >>> ConditionConfig().condition_set(ConditionSetKey.IMPORT)
    ('import', 'node', 'browser', 'require', 'types', 'default')
"""

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Tuple, Union

from exportmap.core.constants import DEFAULT_CONDITION_PRIORITY, Condition, ConditionSetKey
from exportmap.core.validators import validate_condition_list, validate_condition_sets


def normalize_conditions(conditions: Iterable[str]) -> Tuple[str, ...]:
    """Drop duplicate names (first occurrence wins) and append "default".

    Args:
        conditions: Condition names in priority order

    Returns:
        Normalized condition set
    """
    seen = set()
    normalized = []
    for condition in conditions:
        if condition not in seen:
            normalized.append(condition)
            seen.add(condition)

    if Condition.DEFAULT not in seen:
        normalized.append(Condition.DEFAULT)

    return tuple(normalized)


@dataclass(frozen=True)
class ConditionConfig:
    """Condition priority used when building export targets.

    Attributes:
        condition_priority: Global priority appended after the leading
            condition of each standard set
        condition_sets: Full replacement lists for some of the standard
            sets as (ConditionSetKey, conditions) pairs in set order
    """

    condition_priority: Tuple[str, ...] = DEFAULT_CONDITION_PRIORITY
    condition_sets: Tuple[Tuple[ConditionSetKey, Tuple[str, ...]], ...] = ()

    @classmethod
    def create(
        cls,
        condition_priority: Optional[Iterable[str]] = None,
        condition_sets: Optional[Mapping[Union[str, ConditionSetKey], Iterable[str]]] = None,
    ) -> "ConditionConfig":
        """Build a validated configuration from plain lists.

        Args:
            condition_priority: Global priority (default: node, browser,
                import, require, types)
            condition_sets: Overrides keyed by set name ("import") or
                ConditionSetKey

        Returns:
            ConditionConfig

        Raises:
            ValidationError: If a condition name or set name is invalid
        """
        priority = DEFAULT_CONDITION_PRIORITY
        if condition_priority is not None:
            if not isinstance(condition_priority, str):
                condition_priority = tuple(condition_priority)
            validate_condition_list(condition_priority)
            priority = condition_priority

        sets: Tuple[Tuple[ConditionSetKey, Tuple[str, ...]], ...] = ()
        if condition_sets:
            raw_sets = {
                key.value if isinstance(key, ConditionSetKey) else key: value
                for key, value in condition_sets.items()
            }
            validate_condition_sets(raw_sets)
            overrides = {ConditionSetKey(key): tuple(value) for key, value in raw_sets.items()}
            sets = tuple((key, overrides[key]) for key in ConditionSetKey if key in overrides)

        return cls(condition_priority=priority, condition_sets=sets)

    def priority(self) -> Tuple[str, ...]:
        """Normalized global priority."""
        return normalize_conditions(self.condition_priority)

    def condition_set(self, key: ConditionSetKey) -> Tuple[str, ...]:
        """Normalized condition set for one of the four standard fields.

        Args:
            key: Standard set

        Returns:
            The override when configured, else [key, *priority] normalized
        """
        override = dict(self.condition_sets).get(key)
        if override is not None:
            return normalize_conditions(override)
        return normalize_conditions((key.value,) + self.priority())


DEFAULT_CONDITION_CONFIG = ConditionConfig()
