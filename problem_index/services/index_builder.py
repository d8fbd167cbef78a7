"""Canonical index construction from parsed company sources.

Updates:
    v0.1.0 - 2026-09-03 - Added slug-keyed merge with per-company aggregates.
    v0.2.0 - 2026-09-21 - Builds return immutable snapshots instead of mutating shared state.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Mapping, Sequence

from ..core.errors import EmptyIndexError
from ..core.models import CanonicalProblem, CompanyAggregate, IndexSnapshot, RawRecord
from ..core.title_normalizer import normalize_for_comparison, to_identity_key

logger = logging.getLogger(__name__)

ParsedData = Mapping[str, Mapping[str, Sequence[RawRecord]]]


class ProblemIndexBuilder:
    """Merges per-company, per-window records into one entity per problem."""

    def build(self, parsed_data: ParsedData) -> IndexSnapshot:
        """Build a complete snapshot from parsed sources.

        Every intermediate structure is local to this call; nothing is
        visible to readers until the returned snapshot is published.

        Args:
            parsed_data (ParsedData): ``company -> window -> records`` mapping.

        Returns:
            IndexSnapshot: Finished index with title lookup and counts.

        Raises:
            EmptyIndexError: If no company or no valid record was found.
        """

        problems: dict[str, CanonicalProblem] = {}
        title_lookup: dict[str, str] = {}
        companies: set[str] = set()
        dropped = 0

        for company_name, windows in parsed_data.items():
            companies.add(company_name)
            for window, records in windows.items():
                for record in records:
                    if not self._fold_record(
                        problems, title_lookup, company_name, window, record
                    ):
                        dropped += 1

        if not companies or not problems:
            raise EmptyIndexError(
                f"No usable problem data (companies={len(companies)}, dropped={dropped})."
            )

        for problem in problems.values():
            # list.sort is stable, so ties keep discovery order.
            problem.companies.sort(key=lambda item: item.max_frequency, reverse=True)

        snapshot = IndexSnapshot(
            problems=MappingProxyType(problems),
            title_lookup=MappingProxyType(title_lookup),
            total_problems=len(problems),
            total_companies=len(companies),
            dropped_records=dropped,
            built_at=datetime.now(timezone.utc),
        )
        logger.info(
            "index_built",
            extra={
                "tool": "index_builder",
                "total_problems": snapshot.total_problems,
                "total_companies": snapshot.total_companies,
                "dropped_records": dropped,
            },
        )
        return snapshot

    @staticmethod
    def _fold_record(
        problems: dict[str, CanonicalProblem],
        title_lookup: dict[str, str],
        company_name: str,
        window: str,
        record: RawRecord,
    ) -> bool:
        title = record.title if isinstance(record.title, str) else ""
        identity_key = to_identity_key(title)
        if not identity_key:
            logger.debug("Dropping record without derivable key: %r", record.title)
            return False

        problem = problems.get(identity_key)
        if problem is None:
            problem = CanonicalProblem(
                display_title=title.strip(), identity_key=identity_key
            )
            problems[identity_key] = problem
            title_lookup[normalize_for_comparison(title)] = identity_key

        aggregate = problem.company(company_name)
        if aggregate is None:
            aggregate = CompanyAggregate(company_name=company_name)
            problem.companies.append(aggregate)

        aggregate.fold(window, record.frequency)
        return True
