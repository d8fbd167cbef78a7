from __future__ import annotations

from problem_index.core.models import RawRecord
from problem_index.services.query_engine import ProblemQueryService
from problem_index.services.snapshot_store import SnapshotStore
from tests.helpers.index import build_queries


def test_unwindowed_lookup_returns_full_aggregates() -> None:
    queries = build_queries()

    result = queries.lookup_by_identity("two-sum")

    assert result == {
        "problem": "Two Sum",
        "slug": "two-sum",
        "companies": [
            {
                "name": "Acme",
                "frequency": 9,
                "time_ranges": ["30-days", "90-days"],
                "last_seen": "30-days",
            },
            {
                "name": "Beta",
                "frequency": 3,
                "time_ranges": ["all-time"],
                "last_seen": "all-time",
            },
        ],
    }


def test_windowed_lookup_filters_by_cumulative_inclusion() -> None:
    queries = build_queries()

    thirty = queries.lookup_by_identity("two-sum", "30")
    assert thirty is not None
    assert thirty["companies"] == [
        {"name": "Acme", "frequency": 9, "last_seen": "30-days"}
    ]

    everything = queries.lookup_by_identity("two-sum", "all")
    assert everything is not None
    assert [company["name"] for company in everything["companies"]] == ["Acme", "Beta"]


def test_windowed_lookup_accepts_internal_label() -> None:
    queries = build_queries()

    result = queries.lookup_by_identity("two-sum", "90-days")

    assert result is not None
    assert [company["name"] for company in result["companies"]] == ["Acme"]


def test_windowed_lookup_may_return_no_companies() -> None:
    queries = build_queries()

    result = queries.lookup_by_identity("lru-cache", "30")

    assert result == {"problem": "LRU Cache", "slug": "lru-cache", "companies": []}


def test_six_month_only_company_is_absent_from_windowed_results() -> None:
    queries = build_queries(
        {
            "Acme": {"180-days": [RawRecord("Two Sum", 4)]},
            "Beta": {"30-days": [RawRecord("Two Sum", 1)]},
        }
    )

    unwindowed = queries.lookup_by_identity("two-sum")
    assert unwindowed is not None
    acme = unwindowed["companies"][0]
    assert acme["name"] == "Acme"
    assert acme["last_seen"] == "all-time"

    for token in ("30", "90", "all", "180"):
        result = queries.lookup_by_identity("two-sum", token)
        assert result is not None
        assert [company["name"] for company in result["companies"]] == ["Beta"]


def test_lookup_by_title_and_best_match() -> None:
    queries = build_queries()

    by_title = queries.lookup_by_title("  two   SUM ")
    assert by_title is not None
    assert by_title["slug"] == "two-sum"

    assert queries.lookup("LRU Cache")["slug"] == "lru-cache"  # type: ignore[index]
    assert queries.lookup("lru-cache")["slug"] == "lru-cache"  # type: ignore[index]
    assert queries.lookup_by_title("Three Sum") is None
    assert queries.lookup_by_identity("three-sum") is None


def test_lookup_results_are_copies() -> None:
    queries = build_queries()

    first = queries.lookup_by_identity("two-sum")
    assert first is not None
    first["companies"][0]["frequency"] = 999
    first["companies"][0]["time_ranges"].append("tampered")

    second = queries.lookup_by_identity("two-sum")
    assert second is not None
    assert second["companies"][0]["frequency"] == 9
    assert second["companies"][0]["time_ranges"] == ["30-days", "90-days"]


def test_search_matches_title_substring() -> None:
    queries = build_queries()

    assert queries.search("sum", 10) == [
        {"problem": "Two Sum", "slug": "two-sum", "companyCount": 2}
    ]
    assert queries.search("lru-", 10)[0]["slug"] == "lru-cache"
    assert queries.search("zzz", 10) == []


def test_search_respects_limit() -> None:
    queries = build_queries()

    assert len(queries.search("", 1)) == 1
    assert queries.search("sum", 0) == []


def test_empty_store_answers_with_defaults() -> None:
    queries = ProblemQueryService(SnapshotStore())

    assert queries.lookup_by_identity("two-sum") is None
    assert queries.lookup("Two Sum") is None
    assert queries.search("sum", 10) == []
    assert queries.status() == {
        "lastUpdated": None,
        "totalProblems": 0,
        "totalCompanies": 0,
    }


def test_status_reports_snapshot_counts() -> None:
    status = build_queries().status()

    assert status["totalProblems"] == 2
    assert status["totalCompanies"] == 2
    assert status["lastUpdated"]
