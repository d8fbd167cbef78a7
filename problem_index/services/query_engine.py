"""Read-only queries over the active problem index.

Updates:
    v0.1.0 - 2026-09-04 - Added slug/title lookups, windowed projection and search.
    v0.2.0 - 2026-09-21 - Reads go through the snapshot store.
"""

from __future__ import annotations

from typing import Any, Optional

from ..core.models import EMPTY_STATUS, CanonicalProblem, IndexSnapshot
from ..core.recency_policy import resolve_range_token, windows_included_for
from ..core.title_normalizer import (
    best_match_identity_key,
    canonicalize_identity_key,
    normalize_for_comparison,
)
from .snapshot_store import SnapshotStore


class ProblemQueryService:
    """Serves lookups, search and status from whichever snapshot is active."""

    def __init__(self, store: SnapshotStore) -> None:
        self._store = store

    def lookup_by_identity(
        self, key: Optional[str], window: Optional[str] = None
    ) -> Optional[dict[str, Any]]:
        """Return the problem stored under ``key``, projected through ``window``.

        Args:
            key (str | None): Identity key; canonicalized before lookup.
            window (str | None): Range token or window label to filter companies by.

        Returns:
            dict[str, Any] | None: Problem payload, or None when not found.
        """

        snapshot = self._store.current
        if snapshot is None:
            return None
        return self._project(snapshot, canonicalize_identity_key(key), window)

    def lookup_by_title(
        self, title: Optional[str], window: Optional[str] = None
    ) -> Optional[dict[str, Any]]:
        """Resolve ``title`` through the title lookup and return the problem."""

        snapshot = self._store.current
        if snapshot is None:
            return None
        identity_key = snapshot.title_lookup.get(normalize_for_comparison(title))
        if not identity_key:
            return None
        return self._project(snapshot, identity_key, window)

    def lookup(
        self, value: Optional[str], window: Optional[str] = None
    ) -> Optional[dict[str, Any]]:
        """Accept either a slug or a title and return the best match."""

        snapshot = self._store.current
        if snapshot is None:
            return None
        identity_key = best_match_identity_key(
            value, snapshot.title_lookup, snapshot.problems
        )
        if identity_key is None:
            return None
        return self._project(snapshot, identity_key, window)

    def search(self, query: str, limit: int) -> list[dict[str, Any]]:
        """Return up to ``limit`` problems whose title or key contains ``query``.

        Args:
            query (str): Search text; comparison-normalized before matching.
            limit (int): Maximum number of results, already clamped by the caller.

        Returns:
            list[dict[str, Any]]: Hits in index order; empty when nothing matches.
        """

        snapshot = self._store.current
        if snapshot is None or limit <= 0:
            return []

        needle = normalize_for_comparison(query)
        results: list[dict[str, Any]] = []
        for identity_key, problem in snapshot.problems.items():
            haystack = normalize_for_comparison(problem.display_title)
            if needle in haystack or needle in identity_key:
                results.append(
                    {
                        "problem": problem.display_title,
                        "slug": problem.identity_key,
                        "companyCount": len(problem.companies),
                    }
                )
                if len(results) >= limit:
                    break
        return results

    def status(self) -> dict[str, Any]:
        snapshot = self._store.current
        if snapshot is None:
            return dict(EMPTY_STATUS)
        return snapshot.status()

    @staticmethod
    def _project(
        snapshot: IndexSnapshot, identity_key: str, window: Optional[str]
    ) -> Optional[dict[str, Any]]:
        problem: Optional[CanonicalProblem] = snapshot.problems.get(identity_key)
        if problem is None:
            return None
        if not window:
            return problem.as_dict()

        included = windows_included_for(resolve_range_token(window))
        return {
            "problem": problem.display_title,
            "slug": problem.identity_key,
            "companies": [
                aggregate.project()
                for aggregate in problem.companies
                if aggregate.windows_seen & included
            ],
        }
