"""Search problems workflow."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..services.config_service import SearchConfig
from ..services.query_engine import ProblemQueryService


def clamp_limit(raw: Any, config: SearchConfig) -> int:
    """Coerce a user-supplied limit into ``1..config.max_limit``.

    Missing, zero or non-numeric values fall back to ``config.default_limit``.
    """

    try:
        limit = int(str(raw).strip()) if raw is not None else 0
    except ValueError:
        limit = 0
    if not limit:
        limit = config.default_limit
    return max(1, min(limit, config.max_limit))


@dataclass
class SearchProblemsWorkflow:
    queries: ProblemQueryService
    config: SearchConfig = field(default_factory=SearchConfig)
    name: str = "search_problems"

    def run(self, context: dict) -> dict:
        """Run a bounded substring search.

        Args:
            context (dict): ``query`` text and optional ``limit``.

        Returns:
            dict: ``query``, ``count`` and ordered ``results``.

        Raises:
            ValueError: If the query is missing or blank.
        """

        query = context.get("query")
        if not isinstance(query, str) or not query.strip():
            raise ValueError("Context missing 'query'.")
        limit = clamp_limit(context.get("limit"), self.config)
        results = self.queries.search(query, limit)
        return {"query": query, "count": len(results), "results": results}
