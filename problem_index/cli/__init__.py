"""Company problem index CLI package."""

from __future__ import annotations

import logging

import typer
import uvicorn

from problem_index.api.server import create_app
from problem_index.cli.commands.index import problem, refresh, search, status
from problem_index.cli.commands.server import serve
from problem_index.cli.io import console
from problem_index.cli.renderers import (
    render_problem,
    render_search_results,
    render_status,
)
from problem_index.cli.runtime import (
    ServiceRuntime,
    get_runtime,
    initialize_runtime,
    set_runtime,
    set_runtime_level,
)
from problem_index.cli.utils import apply_log_override, load_index
from problem_index.core.logging_setup import configure_logging
from problem_index.services.config_service import ConfigService
from problem_index.services.csv_parser import CsvProblemParser
from problem_index.services.index_builder import ProblemIndexBuilder
from problem_index.services.refresh_scheduler import RefreshScheduler
from problem_index.services.source_fetcher import (
    DirectorySourceFetcher,
    GitHubArchiveFetcher,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    help="Which companies ask which interview problems, and how recently.",
)

app.command()(refresh)
app.command()(problem)
app.command()(search)
app.command()(status)
app.command()(serve)


def main() -> None:
    """CLI entry point."""

    app()


__all__: list[str] = [
    "app",
    "main",
    "console",
    "logger",
    # Runtime
    "ServiceRuntime",
    "get_runtime",
    "initialize_runtime",
    "set_runtime",
    "set_runtime_level",
    "apply_log_override",
    "load_index",
    # Commands
    "refresh",
    "problem",
    "search",
    "status",
    "serve",
    # Renderers
    "render_problem",
    "render_search_results",
    "render_status",
    # Dependencies resolved at runtime; tests may monkeypatch these.
    "ConfigService",
    "configure_logging",
    "CsvProblemParser",
    "DirectorySourceFetcher",
    "GitHubArchiveFetcher",
    "ProblemIndexBuilder",
    "RefreshScheduler",
    "create_app",
    "uvicorn",
]
