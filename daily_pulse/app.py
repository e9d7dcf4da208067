from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Sequence

from .errors import PulseError
from .models import Article, Session
from .processors import fetch_news
from .services import ArticleRepository, SettingsStore
from .utils.logging import get_logger

logger = get_logger("pulse.app")

Fetcher = Callable[[str, Sequence[str], Sequence[str], Sequence[str]], List[Article]]


def default_date() -> str:
    """Yesterday in UTC, the most recent complete news day."""
    return (datetime.now(timezone.utc) - timedelta(days=1)).date().isoformat()


class FeedSession:
    """Generated feed and user actions for one signed-in user.

    The feed lives in memory only; archived items go to the repository.
    A failed generate keeps the previous feed and records the error message.
    """

    def __init__(
        self,
        session: Session,
        *,
        settings: SettingsStore,
        repository: ArticleRepository,
        fetcher: Fetcher = fetch_news,
        selected_date: Optional[str] = None,
    ) -> None:
        self.session = session
        self.settings = settings
        self.repository = repository
        self.fetcher = fetcher
        self.selected_date = selected_date or default_date()
        self.feed: List[Article] = []
        self.error: Optional[str] = None

    @property
    def user_id(self) -> str:
        return self.session.user_id

    def generate(self) -> List[Article]:
        self.error = None
        settings = self.settings.get(self.user_id)
        exclude_titles = self.repository.titles(self.user_id)
        try:
            news = self.fetcher(
                self.selected_date,
                settings.active_topics,
                settings.custom_sources,
                exclude_titles,
            )
        except PulseError as exc:
            self.error = str(exc)
            logger.warning("Feed generation failed for %s: %s", self.selected_date, exc)
            raise
        self.feed = list(news)
        return self.feed

    def _find(self, article_id: str) -> Article:
        for article in self.feed:
            if article.id == article_id:
                return article
        raise KeyError(f"No article with id {article_id!r} in the current feed")

    def archive(self, article_id: str) -> List[Article]:
        article = self._find(article_id)
        updated = self.repository.save(self.user_id, article)
        self.feed = [a for a in self.feed if a.id != article_id]
        return updated

    def dismiss(self, article_id: str) -> None:
        self.feed = [a for a in self.feed if a.id != article_id]

    def remove_from_repository(self, article_id: str) -> List[Article]:
        return self.repository.remove(self.user_id, article_id)
