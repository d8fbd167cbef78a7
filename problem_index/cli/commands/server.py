"""Serve command: build the index and run the HTTP API."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Optional

import typer

from problem_index.cli.commands.index import LOG_LEVEL_OPTION, SOURCE_DIR_OPTION
from problem_index.cli.utils import load_index

logger = logging.getLogger(__name__)


def _cli() -> Any:
    return sys.modules["problem_index.cli"]


def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port."),
    schedule: bool = typer.Option(
        True,
        "--schedule/--no-schedule",
        help="Refresh the index daily at the configured time.",
    ),
    source_dir: Optional[Path] = SOURCE_DIR_OPTION,
    log_level: Optional[str] = LOG_LEVEL_OPTION,
) -> None:
    """Build the index, then serve lookups and search over HTTP."""

    cli_module = _cli()
    logger.info("Initializing application...")
    runtime = load_index(source_dir, log_level)
    logger.info("Data loaded successfully")

    server_config = runtime.config_service.server_config
    refresh_config = runtime.config_service.refresh_config

    scheduler = None
    if schedule and refresh_config.enabled:
        scheduler = cli_module.RefreshScheduler(runtime.refresh, refresh_config)
        scheduler.start()

    app = cli_module.create_app(runtime.orchestrator, runtime.queries)
    bind_host = host or server_config.host
    bind_port = port or server_config.port
    logger.info("Server running on %s:%s", bind_host, bind_port)
    try:
        cli_module.uvicorn.run(app, host=bind_host, port=bind_port, log_config=None)
    finally:
        if scheduler is not None:
            scheduler.stop()
        logger.info("Server stopped")


__all__ = ["serve"]
