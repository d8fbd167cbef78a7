"""Workflow registry and instrumented dispatch.

Updates:
    v0.1.0 - 2026-09-07 - Registry for refresh, lookup and search workflows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any, Protocol


class Workflow(Protocol):
    """A named unit of work driven by a context dictionary."""

    name: str

    def run(self, context: dict[str, Any]) -> dict[str, Any]:
        ...


@dataclass(slots=True)
class Orchestrator:
    """Runs registered workflows and records their duration and outcome."""

    workflows: dict[str, Workflow] = field(default_factory=dict)

    _logger = logging.getLogger(__name__)

    def execute(self, workflow_name: str, context: dict[str, Any]) -> dict[str, Any]:
        """Run ``workflow_name`` with ``context``.

        Args:
            workflow_name (str): Registered workflow name.
            context (dict[str, Any]): Workflow input.

        Returns:
            dict[str, Any]: Workflow result payload.

        Raises:
            KeyError: If no workflow is registered under that name.
        """

        workflow = self.workflows.get(workflow_name)
        if workflow is None:
            raise KeyError(f"Workflow '{workflow_name}' is not registered.")

        started = perf_counter()
        try:
            result = workflow.run(context)
        except Exception as exc:
            self._logger.error(
                "workflow_failed",
                extra={
                    "tool": workflow_name,
                    "duration_ms": self._elapsed_ms(started),
                    "error": str(exc),
                    "error_type": type(exc).__name__,
                },
                exc_info=True,
            )
            raise

        self._logger.info(
            "workflow_completed",
            extra={
                "tool": workflow_name,
                "duration_ms": self._elapsed_ms(started),
                "context_keys": sorted(context.keys()),
            },
        )
        return result

    def register(self, workflow: Workflow) -> None:
        self.workflows[workflow.name] = workflow

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        return round((perf_counter() - started) * 1000, 2)
