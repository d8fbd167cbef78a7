"""Rich renderers for CLI outputs."""

from __future__ import annotations

from typing import Any

from rich.panel import Panel
from rich.table import Table

from problem_index.cli.io import console


def render_problem(problem: dict[str, Any], *, window: str | None = None) -> None:
    """Display a problem and its ranked companies."""

    title = f"{problem.get('problem')} ({problem.get('slug')})"
    companies = problem.get("companies") or []
    if not companies:
        suffix = f" within range {window}" if window else ""
        console.print(Panel(f"No companies reported{suffix}.", title=title))
        return

    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Company")
    table.add_column("Frequency", justify="right")
    table.add_column("Last seen")
    show_ranges = any("time_ranges" in company for company in companies)
    if show_ranges:
        table.add_column("Windows")

    for idx, company in enumerate(companies, start=1):
        row = [
            str(idx),
            str(company.get("name", "")),
            str(company.get("frequency", "")),
            str(company.get("last_seen", "")),
        ]
        if show_ranges:
            row.append(", ".join(company.get("time_ranges") or []))
        table.add_row(*row)
    console.print(table)


def render_search_results(payload: dict[str, Any]) -> None:
    """Render search hits as a table."""

    results = payload.get("results") or []
    if not results:
        console.print(
            Panel(f"No problems match '{payload.get('query')}'.", title="Search")
        )
        return

    table = Table(title=f"Search: {payload.get('query')} ({payload.get('count')} results)")
    table.add_column("Problem")
    table.add_column("Slug")
    table.add_column("Companies", justify="right")
    for hit in results:
        table.add_row(str(hit["problem"]), str(hit["slug"]), str(hit["companyCount"]))
    console.print(table)


def render_status(status: dict[str, Any], *, dropped_records: int | None = None) -> None:
    lines = [
        f"[bold]Last updated:[/] {status.get('lastUpdated') or 'never'}",
        f"[bold]Problems:[/] {status.get('totalProblems', 0)}",
        f"[bold]Companies:[/] {status.get('totalCompanies', 0)}",
    ]
    if dropped_records:
        lines.append(f"[bold]Dropped records:[/] {dropped_records}")
    console.print(Panel("\n".join(lines), title="Index Status"))


__all__ = ["render_problem", "render_search_results", "render_status"]
