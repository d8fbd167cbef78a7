from problem_index.core.title_normalizer import (
    best_match_identity_key,
    canonicalize_identity_key,
    identity_key_to_display_title,
    matches_query,
    normalize_for_comparison,
    to_identity_key,
)


def test_identity_key_collapses_spacing_and_punctuation() -> None:
    assert to_identity_key("Two  Sum!") == "two-sum"
    assert to_identity_key("two sum") == "two-sum"
    assert to_identity_key("  Pow(x, n) ") == "powx-n"
    assert to_identity_key("3Sum -- Closest") == "3sum-closest"


def test_identity_key_empty_cases() -> None:
    assert to_identity_key(None) == ""
    assert to_identity_key("") == ""
    assert to_identity_key("!!! ???") == ""


def test_identity_key_drops_non_ascii_letters() -> None:
    assert to_identity_key("Café Order") == "caf-order"


def test_normalize_for_comparison() -> None:
    assert normalize_for_comparison("  Two \t  Sum ") == "two sum"
    assert normalize_for_comparison(None) == ""


def test_canonicalize_keeps_punctuation() -> None:
    assert canonicalize_identity_key(" Two Sum ") == "two-sum"
    assert canonicalize_identity_key("two--sum-") == "two-sum"
    assert canonicalize_identity_key("pow(x,-n)") == "pow(x,-n)"
    assert canonicalize_identity_key(None) == ""


def test_display_title_from_key() -> None:
    assert identity_key_to_display_title("two-sum") == "Two Sum"
    assert identity_key_to_display_title("") == ""


def test_matches_query_is_case_and_space_insensitive() -> None:
    assert matches_query("Two  Sum", "two s")
    assert not matches_query("Two Sum", "three")


def test_best_match_tries_key_then_title_then_derived_key() -> None:
    problems = {"two-sum": object(), "powx-n": object()}
    title_lookup = {"two sum": "two-sum", "pow(x, n)": "powx-n"}

    assert best_match_identity_key("two-sum", title_lookup, problems) == "two-sum"
    assert best_match_identity_key("  POW(X,   n) ", title_lookup, problems) == "powx-n"
    assert best_match_identity_key("Two Sum!", title_lookup, problems) == "two-sum"
    assert best_match_identity_key("missing", title_lookup, problems) is None
    assert best_match_identity_key(None, title_lookup, problems) is None
