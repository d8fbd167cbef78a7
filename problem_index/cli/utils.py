"""Utility helpers shared across CLI command modules."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Optional

import typer

from problem_index.cli.io import console
from problem_index.core.errors import ProblemIndexError

logger = logging.getLogger(__name__)


def _cli() -> Any:
    return sys.modules["problem_index.cli"]


def apply_log_override(log_level: Optional[str]) -> None:
    """Override logging level for the current invocation."""

    if not log_level or not isinstance(log_level, str):
        return
    try:
        _cli().set_runtime_level(log_level)
        logger.info("Log level overridden to %s", log_level.upper())
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def load_index(source_dir: Optional[Path], log_level: Optional[str]) -> Any:
    """Initialize the runtime and build the index, exiting with code 1 on failure."""

    runtime = _cli().get_runtime(source_dir)
    apply_log_override(log_level)
    try:
        runtime.refresh()
    except ProblemIndexError as exc:
        console.print(f"[red]Index build failed: {exc}[/]")
        raise typer.Exit(code=1) from exc
    return runtime


__all__ = ["apply_log_override", "load_index"]
