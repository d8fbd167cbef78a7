"""Runtime wiring for the problem index CLI and server."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from problem_index.core.logging_setup import configure_logging, set_runtime_level
from problem_index.core.orchestrator import Orchestrator
from problem_index.services.config_service import ConfigService
from problem_index.services.csv_parser import CsvProblemParser
from problem_index.services.index_builder import ProblemIndexBuilder
from problem_index.services.query_engine import ProblemQueryService
from problem_index.services.snapshot_store import SnapshotStore
from problem_index.services.source_fetcher import (
    DirectorySourceFetcher,
    GitHubArchiveFetcher,
)
from problem_index.workflows.lookup_problem import LookupProblemWorkflow
from problem_index.workflows.refresh_index import RefreshIndexWorkflow
from problem_index.workflows.search_problems import SearchProblemsWorkflow

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_SERVICE = ConfigService
_DEFAULT_ARCHIVE_FETCHER = GitHubArchiveFetcher
_DEFAULT_DIRECTORY_FETCHER = DirectorySourceFetcher
_DEFAULT_PARSER = CsvProblemParser
_DEFAULT_BUILDER = ProblemIndexBuilder


@dataclass
class ServiceRuntime:
    """Objects shared by every command for one process."""

    config_service: Any
    store: SnapshotStore
    queries: ProblemQueryService
    orchestrator: Orchestrator

    def refresh(self) -> dict[str, Any]:
        return self.orchestrator.execute("refresh_index", {})


_RUNTIME_CACHE: ServiceRuntime | None = None


def initialize_runtime(source_dir: Optional[Path] = None) -> ServiceRuntime:
    """Create the snapshot store, query service and workflows.

    The index itself is not built here; callers run ``refresh_index``.

    Args:
        source_dir (Path | None): Read CSV files from this directory instead of
            downloading the GitHub archive.

    Returns:
        ServiceRuntime: Wired runtime with an empty snapshot store.
    """

    config_service = _resolve_dependency("ConfigService", _DEFAULT_CONFIG_SERVICE)()
    _resolve_dependency("configure_logging", configure_logging)(config_service.logging_config)
    source_config = config_service.source_config

    if source_dir is not None:
        fetcher_cls = _resolve_dependency("DirectorySourceFetcher", _DEFAULT_DIRECTORY_FETCHER)
        fetcher = fetcher_cls(source_dir, window_files=source_config.window_files)
    else:
        fetcher_cls = _resolve_dependency("GitHubArchiveFetcher", _DEFAULT_ARCHIVE_FETCHER)
        fetcher = fetcher_cls(source_config)

    store = SnapshotStore()
    queries = ProblemQueryService(store)
    orchestrator = Orchestrator()
    orchestrator.register(
        RefreshIndexWorkflow(
            fetcher=fetcher,
            parser=_resolve_dependency("CsvProblemParser", _DEFAULT_PARSER)(),
            builder=_resolve_dependency("ProblemIndexBuilder", _DEFAULT_BUILDER)(),
            store=store,
        )
    )
    orchestrator.register(LookupProblemWorkflow(queries=queries))
    orchestrator.register(
        SearchProblemsWorkflow(queries=queries, config=config_service.search_config)
    )
    logger.debug("Runtime initialized (source=%s).", source_dir or "github")
    return ServiceRuntime(
        config_service=config_service,
        store=store,
        queries=queries,
        orchestrator=orchestrator,
    )


def get_runtime(source_dir: Optional[Path] = None) -> ServiceRuntime:
    """Return the cached runtime, creating it on first use."""

    global _RUNTIME_CACHE
    if _RUNTIME_CACHE is None:
        _RUNTIME_CACHE = initialize_runtime(source_dir)
    return _RUNTIME_CACHE


def set_runtime(runtime: ServiceRuntime | None) -> None:
    """Replace (or clear) the cached runtime."""

    global _RUNTIME_CACHE
    _RUNTIME_CACHE = runtime


def _resolve_dependency(name: str, default: Any) -> Any:
    """Return a dependency, preferring overrides on the cli package."""

    from sys import modules

    cli_module = modules.get("problem_index.cli")
    if cli_module is not None and hasattr(cli_module, name):
        return getattr(cli_module, name)
    return default


__all__ = [
    "ServiceRuntime",
    "get_runtime",
    "initialize_runtime",
    "set_runtime",
    "set_runtime_level",
]
