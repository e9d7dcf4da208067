"""Daily news fetch: prompt, grounded generation, parsing, ranking.

The only side effect is the outbound backend call; nothing is cached
between invocations.
"""

from __future__ import annotations

from typing import List, Sequence

from .ai import AIClient, BackendHTTPError, GeminiClient
from .ai.parsing import parse_articles_payload
from .ai.retry import is_network_error, with_retries
from .normalize import batch_normalize, sort_by_score
from .prompt import DEFAULT_EXCLUDE_LIMIT, build_news_prompt
from ..errors import (
    AuthorizationError,
    CredentialError,
    NetworkError,
    PulseError,
    UnknownBackendError,
)
from ..models import Article
from ..utils.logging import get_logger

logger = get_logger("pulse.processors.news")

TEMPERATURE = 0.2


def classify_error(exc: BaseException) -> PulseError:
    """Map a low-level failure to the user-facing error taxonomy."""
    if isinstance(exc, PulseError):
        return exc

    message = str(exc)
    if is_network_error(exc):
        return NetworkError(
            "Network Error: Could not connect to the Gemini API.\n"
            "This is often caused by unstable internet or network restrictions (firewall/VPN).\n"
            "Please check your connection and try again."
        )

    status_code = exc.status_code if isinstance(exc, BackendHTTPError) else None
    if status_code == 403 or "PERMISSION_DENIED" in message or "entitlements" in message:
        return AuthorizationError(
            "Access Denied (403): Your API key is valid, but the project likely lacks a linked billing account. "
            "Google Search grounding requires a billing-enabled project."
        )
    if status_code == 400 or "API_KEY_INVALID" in message:
        return CredentialError("Invalid API Key. Please check GOOGLE_API_KEY in your environment settings.")

    return UnknownBackendError(f"Gemini API Failed: {message}")


def fetch_news(
    date: str,
    topics: Sequence[str],
    sources: Sequence[str],
    exclude_titles: Sequence[str] = (),
    *,
    ai: AIClient | None = None,
    exclude_limit: int = DEFAULT_EXCLUDE_LIMIT,
    language: str = "English",
    attempts: int | None = None,
    base_delay: float | None = None,
) -> List[Article]:
    """Ask the backend for ``date``'s news and return articles by score.

    Raises a ``PulseError`` subclass on any failure; no partial results.
    """
    if ai is None:
        ai = GeminiClient()

    prompt = build_news_prompt(
        date,
        topics,
        sources,
        exclude_titles,
        exclude_limit=exclude_limit,
        language=language,
    )
    logger.info(
        "Fetching news for %s (topics=%d, sources=%d, excluded=%d)",
        date,
        len(topics),
        len(sources),
        min(len(exclude_titles), exclude_limit),
    )

    try:
        text = with_retries(
            lambda: ai.generate(prompt, temperature=TEMPERATURE, search=True),
            attempts=attempts,
            base_delay=base_delay,
        )
    except Exception as exc:  # noqa: BLE001 - every failure is classified
        logger.error("Gemini API error: %s", exc)
        raise classify_error(exc) from exc

    items = parse_articles_payload(text)
    articles = sort_by_score(batch_normalize(items, date=date))
    logger.info("Fetched %d article(s) for %s", len(articles), date)
    return articles
