from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest
from fastapi.testclient import TestClient

from problem_index.api.server import create_app
from problem_index.core.errors import RefreshInProgressError, SourceFetchError
from problem_index.core.orchestrator import Orchestrator
from problem_index.services.query_engine import ProblemQueryService
from problem_index.workflows.lookup_problem import LookupProblemWorkflow
from problem_index.workflows.search_problems import SearchProblemsWorkflow
from tests.helpers.index import build_store


@dataclass
class StubRefreshWorkflow:
    error: Exception | None = None
    name: str = "refresh_index"
    calls: int = 0

    def run(self, context: dict) -> dict:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return {"status": {}, "sequence": self.calls}


def _client(refresh: StubRefreshWorkflow | None = None) -> tuple[TestClient, StubRefreshWorkflow]:
    queries = ProblemQueryService(build_store())
    refresh = refresh or StubRefreshWorkflow()
    orchestrator = Orchestrator()
    orchestrator.register(LookupProblemWorkflow(queries=queries))
    orchestrator.register(SearchProblemsWorkflow(queries=queries))
    orchestrator.register(refresh)
    return TestClient(create_app(orchestrator, queries)), refresh


def test_health_reports_index_status() -> None:
    client, _ = _client()

    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["totalProblems"] == 2
    assert body["totalCompanies"] == 2
    assert body["dataVersion"]


def test_problem_by_slug_and_title() -> None:
    client, _ = _client()

    by_slug = client.get("/api/problem", params={"slug": "two-sum"})
    assert by_slug.status_code == 200
    assert by_slug.json()["companies"][0]["time_ranges"] == ["30-days", "90-days"]

    by_title = client.get("/api/problem", params={"title": "LRU Cache"})
    assert by_title.status_code == 200
    assert by_title.json()["slug"] == "lru-cache"


def test_problem_with_range() -> None:
    client, _ = _client()

    response = client.get("/api/problem", params={"slug": "two-sum", "range": "30"})

    assert response.status_code == 200
    assert response.json()["companies"] == [
        {"name": "Acme", "frequency": 9, "last_seen": "30-days"}
    ]


@pytest.mark.parametrize(
    ("params", "status"),
    [
        ({}, 400),
        ({"slug": "two-sum", "range": "60"}, 400),
        ({"slug": "three-sum"}, 404),
    ],
)
def test_problem_errors(params: dict[str, Any], status: int) -> None:
    client, _ = _client()

    response = client.get("/api/problem", params=params)

    assert response.status_code == status
    assert "error" in response.json()


def test_search_endpoint() -> None:
    client, _ = _client()

    response = client.get("/api/search", params={"q": "sum", "limit": "abc"})

    assert response.status_code == 200
    assert response.json() == {
        "query": "sum",
        "count": 1,
        "results": [{"problem": "Two Sum", "slug": "two-sum", "companyCount": 2}],
    }
    assert client.get("/api/search", params={"q": "  "}).status_code == 400


def test_refresh_endpoint_outcomes() -> None:
    client, refresh = _client()
    ok = client.post("/api/refresh")
    assert ok.status_code == 200
    assert ok.json()["success"] is True
    assert refresh.calls == 1

    busy_client, _ = _client(StubRefreshWorkflow(error=RefreshInProgressError("busy")))
    assert busy_client.post("/api/refresh").status_code == 409

    failing_client, _ = _client(StubRefreshWorkflow(error=SourceFetchError("offline")))
    failed = failing_client.post("/api/refresh")
    assert failed.status_code == 500
    assert failed.json()["error"] == "Internal Server Error"


def test_unknown_endpoint() -> None:
    client, _ = _client()

    response = client.get("/api/unknown")

    assert response.status_code == 404
    assert response.json() == {"error": "Endpoint not found"}
