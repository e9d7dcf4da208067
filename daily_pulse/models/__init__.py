"""Typed models used across the application."""

from .article import Article, Source
from .user import FilterSettings, Session, User

__all__ = ["Article", "Source", "User", "Session", "FilterSettings"]
