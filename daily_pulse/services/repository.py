from __future__ import annotations

from typing import List

from ..models import Article
from ..storage import KeyValueStore, repo_key
from ..utils.logging import get_logger

logger = get_logger("pulse.services.repository")


class ArticleRepository:
    """Per-user archive of saved articles, newest first, unique by id."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def list(self, user_id: str) -> List[Article]:
        rows = self.store.get(repo_key(user_id), []) or []
        articles: List[Article] = []
        for row in rows:
            try:
                articles.append(Article.from_dict(row))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed repository entry for %s: %s", user_id, exc)
        return articles

    def _persist(self, user_id: str, articles: List[Article]) -> None:
        self.store.set(repo_key(user_id), [a.to_dict() for a in articles])

    def save(self, user_id: str, article: Article) -> List[Article]:
        current = self.list(user_id)
        if any(a.id == article.id for a in current):
            return current
        updated = [article, *current]
        self._persist(user_id, updated)
        logger.info("Archived '%s' for user %s", article.title, user_id)
        return updated

    def remove(self, user_id: str, article_id: str) -> List[Article]:
        current = self.list(user_id)
        updated = [a for a in current if a.id != article_id]
        self._persist(user_id, updated)
        return updated

    def titles(self, user_id: str) -> List[str]:
        return [a.title for a in self.list(user_id)]
