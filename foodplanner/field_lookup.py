"""
Alias-tolerant field access for loosely structured import records.

Import files come from spreadsheets, other apps and hand-written JSON, so the
same field shows up as "prep_time", "Prep Time", "prepTime" or "prep-time".
A record is normalized once into a read-only lookup keyed by the collapsed
spelling, then queried by candidate names.
"""

import re
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

SEPARATOR_PATTERN = re.compile(r'[\s_-]+')


def normalize_field_key(key: str) -> str:
    """
    Collapse a field name to its canonical spelling.

    Examples:
        normalize_field_key("Prep_Time") -> "preptime"
        normalize_field_key("meal type") -> "mealtype"
    """
    return SEPARATOR_PATTERN.sub("", key.lower())


def create_field_lookup(source: Mapping[Any, Any]) -> Mapping[str, Any]:
    """
    Build the normalized lookup for one raw record.

    Args:
        source: Raw record with arbitrary keys

    Returns:
        Read-only mapping of normalized key -> value. When two raw keys
        collapse to the same spelling, the first one in iteration order wins.
        Empty and non-string keys are ignored.
    """
    lookup = {}
    for key, value in source.items():
        if not isinstance(key, str) or not key:
            continue
        normalized = normalize_field_key(key)
        if normalized not in lookup:
            lookup[normalized] = value
    return MappingProxyType(lookup)


def get_field(lookup: Mapping[str, Any], key: str) -> Any:
    """Get a raw value by any spelling of its field name."""
    return lookup.get(normalize_field_key(key))


def pick_string_field(lookup: Mapping[str, Any], keys: Iterable[str]) -> Optional[str]:
    """
    Return the first non-empty string among candidate field names.

    Args:
        lookup: Lookup from create_field_lookup()
        keys: Candidate spellings, in priority order

    Returns:
        Trimmed string, or None when no candidate holds a non-blank string
    """
    for key in keys:
        value = get_field(lookup, key)
        if isinstance(value, str):
            trimmed = value.strip()
            if trimmed:
                return trimmed
    return None
