"""Tests for turning parsed reply items into Article records."""

from daily_pulse.models import Source
from daily_pulse.processors.normalize import (
    DEFAULT_SUMMARY,
    DEFAULT_TITLE,
    batch_normalize,
    normalize_article,
    normalize_sources,
    sort_by_score,
)


def test_defaults_for_minimal_item():
    article = normalize_article({"title": "T"}, date="2025-01-02")
    assert article.title == "T"
    assert article.summary == DEFAULT_SUMMARY
    assert article.score == 50
    assert article.sources == ()
    assert article.tags == ()
    assert article.reason == ""
    assert article.date == "2025-01-02"


def test_missing_title_uses_placeholder():
    assert normalize_article({}, date="2025-01-02").title == DEFAULT_TITLE


def test_requested_date_overrides_backend_date():
    article = normalize_article({"title": "T", "date": "1999-12-31"}, date="2025-01-02")
    assert article.date == "2025-01-02"


def test_non_numeric_score_defaults_to_50():
    for value in ("90", None, True, [1]):
        assert normalize_article({"score": value}, date="d").score == 50


def test_score_is_clamped_into_range():
    assert normalize_article({"score": 140}, date="d").score == 100
    assert normalize_article({"score": -3}, date="d").score == 0
    assert normalize_article({"score": 72.6}, date="d").score == 73


def test_sources_without_string_uri_are_dropped():
    sources = normalize_sources(
        [
            {"title": "TC", "uri": "https://techcrunch.com/2025/01/02/story"},
            {"title": "No uri"},
            {"title": "Bad uri", "uri": 42},
            "https://plain-string.example",
            {"uri": "https://www.reddit.com/r/LocalLLaMA/comments/abc"},
        ]
    )
    assert sources == (
        Source(title="TC", uri="https://techcrunch.com/2025/01/02/story"),
        Source(title="www.reddit.com", uri="https://www.reddit.com/r/LocalLLaMA/comments/abc"),
    )


def test_sources_not_a_list_become_empty():
    assert normalize_sources({"uri": "https://a.example"}) == ()
    assert normalize_sources(None) == ()


def test_tags_kept_only_when_list():
    assert normalize_article({"tags": ["LLM", "Google"]}, date="d").tags == ("LLM", "Google")
    assert normalize_article({"tags": "LLM"}, date="d").tags == ()


def test_each_article_gets_a_fresh_id():
    articles = batch_normalize([{"title": "A"}, {"title": "A"}], date="d")
    assert articles[0].id != articles[1].id
    assert all(a.id for a in articles)


def test_sort_is_descending_and_stable():
    items = [
        {"title": "low", "score": 10},
        {"title": "first-80", "score": 80},
        {"title": "top", "score": 95},
        {"title": "second-80", "score": 80},
    ]
    ordered = sort_by_score(batch_normalize(items, date="d"))
    assert [a.title for a in ordered] == ["top", "first-80", "second-80", "low"]
    assert all(a.score >= b.score for a, b in zip(ordered, ordered[1:]))


def test_malformed_uri_falls_back_to_raw_uri_as_title():
    assert normalize_sources([{"uri": "https://[broken/x"}]) == (
        Source(title="https://[broken/x", uri="https://[broken/x"),
    )
