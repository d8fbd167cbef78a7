"""Lookup problem workflow."""

from __future__ import annotations

from dataclasses import dataclass

from ..services.query_engine import ProblemQueryService


@dataclass
class LookupProblemWorkflow:
    queries: ProblemQueryService
    name: str = "lookup_problem"

    def run(self, context: dict) -> dict:
        """Look a problem up by ``slug``, ``title`` or free-form ``value``.

        Args:
            context (dict): One of ``slug``/``title``/``value`` plus optional ``range``.

        Returns:
            dict: ``result`` holding the problem payload, or None when not found.

        Raises:
            ValueError: If none of the lookup keys is present.
        """

        window = context.get("range")
        if context.get("slug"):
            result = self.queries.lookup_by_identity(context["slug"], window)
        elif context.get("title"):
            result = self.queries.lookup_by_title(context["title"], window)
        elif context.get("value"):
            result = self.queries.lookup(context["value"], window)
        else:
            raise ValueError("Context missing 'slug', 'title' or 'value'.")
        return {"result": result}
