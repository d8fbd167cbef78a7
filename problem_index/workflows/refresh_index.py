"""Refresh index workflow.

Updates:
    v0.1.0 - 2026-09-07 - Fetch, parse and build behind a single atomic publish.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.models import IndexSnapshot
from ..services.csv_parser import CsvProblemParser
from ..services.index_builder import ProblemIndexBuilder
from ..services.snapshot_store import SnapshotStore
from ..services.source_fetcher import SourceFetcher

logger = logging.getLogger(__name__)


@dataclass
class RefreshIndexWorkflow:
    fetcher: SourceFetcher
    parser: CsvProblemParser
    builder: ProblemIndexBuilder
    store: SnapshotStore
    name: str = "refresh_index"

    def run(self, context: dict) -> dict:
        """Rebuild the index from the source and publish it.

        Any failure leaves the previously published snapshot in place.

        Args:
            context (dict): Unused; accepted for workflow compatibility.

        Returns:
            dict: ``status`` payload for the new snapshot and its ``sequence``.

        Raises:
            RefreshInProgressError: If another rebuild is already running.
        """

        snapshot = self.store.rebuild(self._produce)
        logger.info(
            "Data update complete. Total problems: %s, Companies: %s",
            snapshot.total_problems,
            snapshot.total_companies,
        )
        return {"status": snapshot.status(), "sequence": snapshot.sequence}

    def _produce(self) -> IndexSnapshot:
        logger.info("Fetching source data...")
        repo_data = self.fetcher.fetch()
        logger.info("Parsing CSV files...")
        parsed = self.parser.parse_all(repo_data)
        logger.info("Building problem index...")
        return self.builder.build(parsed)
