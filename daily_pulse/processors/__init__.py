"""News fetch pipeline: prompt building, generation, parsing, normalization."""

from .news import classify_error, fetch_news
from .normalize import batch_normalize, normalize_article, normalize_sources, sort_by_score
from .prompt import build_news_prompt

__all__ = [
    "fetch_news",
    "classify_error",
    "build_news_prompt",
    "normalize_article",
    "normalize_sources",
    "batch_normalize",
    "sort_by_score",
]
