"""HTTP API for problem lookups, search, refresh and health.

Updates:
    v0.1.0 - 2026-09-09 - Problem, search, refresh and health endpoints.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.errors import RefreshInProgressError
from ..core.orchestrator import Orchestrator
from ..services.query_engine import ProblemQueryService

logger = logging.getLogger(__name__)

VALID_RANGES = ("30", "90", "180", "all")


def _error(status_code: int, error: str, message: str | None = None) -> JSONResponse:
    content: dict[str, str] = {"error": error}
    if message is not None:
        content["message"] = message
    return JSONResponse(status_code=status_code, content=content)


def create_app(orchestrator: Orchestrator, queries: ProblemQueryService) -> FastAPI:
    """Build the FastAPI application around an initialized runtime.

    Args:
        orchestrator (Orchestrator): Runs the lookup, search and refresh workflows.
        queries (ProblemQueryService): Source for health/status reporting.

    Returns:
        FastAPI: Configured application.
    """

    app = FastAPI(title="Company Problem Index")
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return _error(404, "Endpoint not found")
        return _error(exc.status_code, str(exc.detail))

    @app.get("/api/health")
    def health() -> dict:
        status = queries.status()
        return {
            "status": "ok",
            "dataVersion": status["lastUpdated"],
            "totalProblems": status["totalProblems"],
            "totalCompanies": status["totalCompanies"],
        }

    @app.get("/api/problem")
    def get_problem(
        slug: Optional[str] = None,
        title: Optional[str] = None,
        range_: Optional[str] = Query(None, alias="range"),
    ):
        if not slug and not title:
            return _error(
                400, "Bad Request", 'Either "slug" or "title" query parameter is required'
            )
        if range_ and range_ not in VALID_RANGES:
            return _error(
                400, "Bad Request", f"Invalid range. Must be one of: {', '.join(VALID_RANGES)}"
            )

        context = {"slug": slug} if slug else {"title": title}
        if range_:
            context["range"] = range_
        try:
            result = orchestrator.execute("lookup_problem", context)["result"]
        except Exception:
            logger.error("Error in /problem endpoint", exc_info=True)
            return _error(500, "Internal Server Error", "Failed to process request")

        if result is None:
            return _error(404, "Not Found", "Problem not found in database")
        return result

    @app.get("/api/search")
    def search(q: Optional[str] = None, limit: Optional[str] = None):
        if not q or not q.strip():
            return _error(400, "Bad Request", 'Query parameter "q" is required')
        try:
            return orchestrator.execute("search_problems", {"query": q, "limit": limit})
        except Exception:
            logger.error("Error in /search endpoint", exc_info=True)
            return _error(500, "Internal Server Error", "Failed to process search")

    @app.post("/api/refresh")
    def refresh():
        logger.info("Manual data refresh triggered")
        try:
            orchestrator.execute("refresh_index", {"trigger": "manual"})
        except RefreshInProgressError as exc:
            return _error(409, "Conflict", str(exc))
        except Exception:
            logger.error("Error refreshing data", exc_info=True)
            return _error(500, "Internal Server Error", "Failed to refresh data")
        return {
            "success": True,
            "message": "Data refreshed successfully",
            "status": queries.status(),
        }

    return app
