from __future__ import annotations

import uuid
from typing import Any, Iterable, List, Mapping, Tuple
from urllib.parse import urlparse

from ..models import Article, Source
from ..utils.logging import get_logger

DEFAULT_TITLE = "Untitled News"
DEFAULT_SUMMARY = "No summary provided."
DEFAULT_SCORE = 50

_logger = get_logger("pulse.processors.normalize")


def generate_id() -> str:
    return uuid.uuid4().hex[:9]


def _coerce_score(value: Any) -> int:
    # bool is an int subclass but never a meaningful score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_SCORE
    if value != value:  # NaN
        return DEFAULT_SCORE
    return int(round(max(0.0, min(100.0, float(value)))))


def _host_of(uri: str) -> str:
    try:
        return urlparse(uri).hostname or uri
    except ValueError:
        # e.g. "https://[broken/x" is rejected as an invalid IPv6 host
        return uri


def normalize_sources(value: Any) -> Tuple[Source, ...]:
    """Keep sources with a string ``uri``; default titles to the URI host."""
    if not isinstance(value, list):
        return ()
    sources: List[Source] = []
    for entry in value:
        if not isinstance(entry, Mapping):
            continue
        uri = entry.get("uri")
        if not isinstance(uri, str) or not uri:
            continue
        title = entry.get("title") or _host_of(uri)
        sources.append(Source(title=str(title), uri=uri))
    return tuple(sources)


def normalize_article(item: Mapping[str, Any], *, date: str) -> Article:
    """Build an Article from one parsed reply element.

    - Fresh id on every call
    - ``date`` always set to the requested date
    - Missing text fields fall back to placeholders
    """
    tags = item.get("tags")
    return Article(
        id=generate_id(),
        title=str(item.get("title") or DEFAULT_TITLE),
        summary=str(item.get("summary") or DEFAULT_SUMMARY),
        score=_coerce_score(item.get("score")),
        date=date,
        sources=normalize_sources(item.get("sources")),
        tags=tuple(str(t) for t in tags) if isinstance(tags, list) else (),
        reason=str(item.get("reason") or ""),
    )


def batch_normalize(items: Iterable[Mapping[str, Any]], *, date: str) -> List[Article]:
    articles = [normalize_article(item, date=date) for item in items]
    _logger.debug("Normalized %d article(s) for %s", len(articles), date)
    return articles


def sort_by_score(articles: Iterable[Article]) -> List[Article]:
    """Highest score first; equal scores keep their original order."""
    return sorted(articles, key=lambda a: a.score, reverse=True)
