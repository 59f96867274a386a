"""Tag domain logic: normalization and duplicate detection."""

from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")


def normalize_tag(tag: str) -> str:
    """Trim, collapse inner whitespace, and lowercase a tag.

    Examples:
        >>> normalize_tag("  Functional   Programming ")
        'functional programming'
        >>> normalize_tag("JavaScript")
        'javascript'
    """
    return _WHITESPACE.sub(" ", tag.strip()).lower()


def find_duplicates(tags: list[str]) -> list[str]:
    """Return tags that repeat another tag once normalized, in order of appearance."""
    seen: set[str] = set()
    dupes: list[str] = []
    for tag in tags:
        key = normalize_tag(tag)
        if key in seen:
            dupes.append(tag)
        else:
            seen.add(key)
    return dupes


def dedupe_tags(tags: list[str]) -> list[str]:
    """Normalize *tags* and drop repeats and blanks, preserving first-seen order."""
    result: list[str] = []
    for tag in tags:
        key = normalize_tag(tag)
        if key and key not in result:
            result.append(key)
    return result
