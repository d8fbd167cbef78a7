"""Domain models for the canonical problem index.

Updates:
    v0.1.0 - 2026-09-02 - Introduced raw records, aggregates and snapshots.
    v0.2.0 - 2026-09-21 - Snapshots carry a build sequence for stale-write checks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

from .recency_policy import ALL_TIME, tightest_of, window_sort_key


@dataclass(slots=True, frozen=True)
class RawRecord:
    """One parsed row from one company's recency-window source."""

    title: str
    frequency: int = 1


@dataclass(slots=True)
class CompanyAggregate:
    """Per-company facts folded together for a single problem."""

    company_name: str
    max_frequency: int = 0
    windows_seen: set[str] = field(default_factory=set)
    last_seen: str = ALL_TIME

    def fold(self, window: str, frequency: int | None) -> None:
        """Merge one record into the aggregate.

        Args:
            window (str): Recency window the record came from.
            frequency (int | None): Reported frequency; non-positive values are ignored.
        """

        if frequency and frequency > 0:
            self.max_frequency = max(self.max_frequency, frequency)
        self.windows_seen.add(window)
        self.last_seen = tightest_of(self.windows_seen)

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.company_name,
            "frequency": self.max_frequency,
            "time_ranges": sorted(self.windows_seen, key=window_sort_key),
            "last_seen": self.last_seen,
        }

    def project(self) -> dict[str, Any]:
        """Return the public windowed view; ``windows_seen`` is not exposed."""

        return {
            "name": self.company_name,
            "frequency": self.max_frequency,
            "last_seen": self.last_seen,
        }


@dataclass(slots=True)
class CanonicalProblem:
    """A single problem identity with its ranked company aggregates."""

    display_title: str
    identity_key: str
    companies: list[CompanyAggregate] = field(default_factory=list)

    def company(self, name: str) -> Optional[CompanyAggregate]:
        for aggregate in self.companies:
            if aggregate.company_name == name:
                return aggregate
        return None

    def as_dict(self) -> dict[str, Any]:
        return {
            "problem": self.display_title,
            "slug": self.identity_key,
            "companies": [aggregate.as_dict() for aggregate in self.companies],
        }


@dataclass(slots=True, frozen=True)
class IndexSnapshot:
    """Immutable, fully built index published to readers as one unit.

    Attributes:
        problems (Mapping[str, CanonicalProblem]): Canonical index by identity key.
        title_lookup (Mapping[str, str]): Comparison-normalized title to identity key.
        total_problems (int): Number of distinct identity keys.
        total_companies (int): Number of distinct companies encountered.
        dropped_records (int): Records discarded because no key could be derived.
        built_at (datetime | None): Completion time of the build.
        sequence (int): Monotonic build number assigned by the snapshot store.
    """

    problems: Mapping[str, CanonicalProblem]
    title_lookup: Mapping[str, str]
    total_problems: int
    total_companies: int
    dropped_records: int = 0
    built_at: Optional[datetime] = None
    sequence: int = 0

    def status(self) -> dict[str, Any]:
        return {
            "lastUpdated": self.built_at.isoformat() if self.built_at else None,
            "totalProblems": self.total_problems,
            "totalCompanies": self.total_companies,
        }


EMPTY_STATUS: dict[str, Any] = {
    "lastUpdated": None,
    "totalProblems": 0,
    "totalCompanies": 0,
}
