"""Recency windows and the cumulative hierarchy used by windowed lookups.

Windows are plain string labels. The fixed order below runs from the
tightest window to the broadest one.

Known inconsistency: the fetcher maps "Six Months" files to ``180-days``,
which is not part of ``RECENCY_ORDER``. A company seen only in that window
reports ``last_seen == "all-time"`` and is left out of every windowed
result, the broadest included, because no inclusion set lists
``180-days``. Unwindowed lookups still show it. This mirrors the
observed behaviour of the upstream service and is kept until the
intended placement of ``180-days`` is clarified.
"""

from __future__ import annotations

from typing import Iterable, Optional

THIRTY_DAYS = "30-days"
SIXTY_DAYS = "60-days"
NINETY_DAYS = "90-days"
SIX_MONTHS = "180-days"
ALL_TIME = "all-time"

RECENCY_ORDER: tuple[str, ...] = (THIRTY_DAYS, SIXTY_DAYS, NINETY_DAYS, ALL_TIME)

RANGE_TOKENS: dict[str, str] = {
    "30": THIRTY_DAYS,
    "60": SIXTY_DAYS,
    "90": NINETY_DAYS,
    "all": ALL_TIME,
}

_INCLUSION: dict[str, frozenset[str]] = {
    window: frozenset(RECENCY_ORDER[: index + 1])
    for index, window in enumerate(RECENCY_ORDER)
}
_BROADEST_INCLUSION = frozenset(RECENCY_ORDER)


def tightest_of(windows_seen: Iterable[str]) -> str:
    """Return the tightest ordered window present, falling back to ``all-time``.

    Args:
        windows_seen (Iterable[str]): Window labels recorded for a company.

    Returns:
        str: First window of ``RECENCY_ORDER`` found in ``windows_seen``.
    """

    seen = set(windows_seen)
    for window in RECENCY_ORDER:
        if window in seen:
            return window
    return ALL_TIME


def windows_included_for(requested: Optional[str]) -> frozenset[str]:
    """Return every window a request for ``requested`` should match.

    Unknown labels, including ``180-days``, fall back to the broadest set.
    """

    if requested is None:
        return _BROADEST_INCLUSION
    return _INCLUSION.get(requested, _BROADEST_INCLUSION)


def resolve_range_token(token: Optional[str]) -> Optional[str]:
    """Map an external range token (``30``, ``all``...) to a window label.

    Unmapped tokens pass through unchanged so that internal labels such as
    ``90-days`` are accepted as-is.
    """

    if token is None:
        return None
    return RANGE_TOKENS.get(token, token)


def window_sort_key(window: str) -> tuple[int, str]:
    """Sort key placing ordered windows first, then any other label."""

    if window in RECENCY_ORDER:
        return (RECENCY_ORDER.index(window), window)
    return (len(RECENCY_ORDER), window)
