"""Index commands: refresh, lookup, search and status."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from problem_index.cli.io import console
from problem_index.cli.renderers import render_problem, render_search_results, render_status
from problem_index.cli.utils import load_index

logger = logging.getLogger(__name__)

SOURCE_DIR_OPTION = typer.Option(
    None,
    "--source-dir",
    help="Read <Company>/<File>.csv files from this directory instead of GitHub.",
    exists=True,
    file_okay=False,
    dir_okay=True,
)
LOG_LEVEL_OPTION = typer.Option(
    None,
    "--log-level",
    "-l",
    help="Override logging level for this invocation (e.g., DEBUG, INFO).",
)


def refresh(
    source_dir: Optional[Path] = SOURCE_DIR_OPTION,
    log_level: Optional[str] = LOG_LEVEL_OPTION,
) -> None:
    """Build the index from the source and report its status."""

    runtime = load_index(source_dir, log_level)
    snapshot = runtime.store.current
    render_status(
        runtime.queries.status(),
        dropped_records=snapshot.dropped_records if snapshot else 0,
    )


def problem(
    value: str = typer.Argument(..., help="Problem slug (two-sum) or title (Two Sum)."),
    range_: Optional[str] = typer.Option(
        None,
        "--range",
        "-r",
        help="Only companies seen within this range: 30, 60, 90 or all.",
    ),
    source_dir: Optional[Path] = SOURCE_DIR_OPTION,
    log_level: Optional[str] = LOG_LEVEL_OPTION,
) -> None:
    """Show which companies asked a problem."""

    runtime = load_index(source_dir, log_level)
    context = {"value": value}
    if range_:
        context["range"] = range_
    result = runtime.orchestrator.execute("lookup_problem", context)["result"]
    if result is None:
        console.print(f"[yellow]Problem '{value}' not found.[/]")
        raise typer.Exit(code=1)
    render_problem(result, window=range_)


def search(
    query: str = typer.Argument(..., help="Text to look for in titles and slugs."),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", help="Maximum number of results."
    ),
    source_dir: Optional[Path] = SOURCE_DIR_OPTION,
    log_level: Optional[str] = LOG_LEVEL_OPTION,
) -> None:
    """Search problems by partial title."""

    if not query.strip():
        raise typer.BadParameter("Search query must not be empty.")
    runtime = load_index(source_dir, log_level)
    payload = runtime.orchestrator.execute(
        "search_problems", {"query": query, "limit": limit}
    )
    render_search_results(payload)


def status(
    source_dir: Optional[Path] = SOURCE_DIR_OPTION,
    log_level: Optional[str] = LOG_LEVEL_OPTION,
) -> None:
    """Build the index and print its status as JSON."""

    runtime = load_index(source_dir, log_level)
    console.print_json(data=runtime.queries.status())
