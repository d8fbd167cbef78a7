"""Title normalization and identity-key helpers.

Updates:
    v0.1.0 - 2026-09-02 - Added slug, comparison and display transforms.
    v0.2.0 - 2026-09-14 - Added best-match resolution across slugs and titles.
"""

from __future__ import annotations

import re
from typing import Mapping, Optional

_whitespace_regex = re.compile(r"\s+")
_hyphen_run_regex = re.compile(r"-+")
# ASCII word characters only; anything else except whitespace and hyphens is dropped.
_non_slug_regex = re.compile(r"[^A-Za-z0-9_\s-]")


def normalize_for_comparison(title: Optional[str]) -> str:
    """Return the lower-cased, trimmed, whitespace-collapsed form of a title.

    Args:
        title (str | None): Raw problem title.

    Returns:
        str: Comparison form, or an empty string for empty input.
    """

    if not title:
        return ""
    return _whitespace_regex.sub(" ", title.lower().strip())


def to_identity_key(title: Optional[str]) -> str:
    """Convert a free-text title to its identity key.

    ``"Two  Sum!"`` and ``"two sum"`` both become ``"two-sum"``.

    Args:
        title (str | None): Raw problem title.

    Returns:
        str: Hyphenated identity key, or an empty string when nothing survives.
    """

    if not title:
        return ""
    cleaned = _non_slug_regex.sub("", title.lower().strip())
    cleaned = _whitespace_regex.sub("-", cleaned)
    cleaned = _hyphen_run_regex.sub("-", cleaned)
    return cleaned.strip("-")


def canonicalize_identity_key(raw_key: Optional[str]) -> str:
    """Normalize a caller-supplied key without stripping punctuation."""

    if not raw_key:
        return ""
    cleaned = _whitespace_regex.sub("-", raw_key.lower().strip())
    cleaned = _hyphen_run_regex.sub("-", cleaned)
    return cleaned.strip("-")


def identity_key_to_display_title(key: Optional[str]) -> str:
    """Rebuild a readable title from an identity key (``two-sum`` -> ``Two Sum``)."""

    if not key:
        return ""
    return " ".join(token[:1].upper() + token[1:] for token in key.split("-"))


def matches_query(title: Optional[str], query: Optional[str]) -> bool:
    """Return True when the normalized query is contained in the normalized title."""

    return normalize_for_comparison(query) in normalize_for_comparison(title)


def best_match_identity_key(
    value: Optional[str],
    title_lookup: Mapping[str, str],
    problems: Mapping[str, object],
) -> Optional[str]:
    """Resolve either a slug-like key or a free-text title to an identity key.

    Strategies are tried in order: the canonicalized input as a key, the
    comparison form against the title lookup, then the identity key derived
    from the input as a title.

    Args:
        value (str | None): Slug or title supplied by a caller.
        title_lookup (Mapping[str, str]): Normalized title to identity key.
        problems (Mapping[str, object]): Canonical index keyed by identity key.

    Returns:
        str | None: Matching identity key, or None when no strategy hits.
    """

    key = canonicalize_identity_key(value)
    if key and key in problems:
        return key

    normalized_title = normalize_for_comparison(value)
    if normalized_title in title_lookup:
        return title_lookup[normalized_title]

    key = to_identity_key(value)
    if key and key in problems:
        return key

    return None
