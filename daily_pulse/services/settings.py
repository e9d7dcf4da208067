from __future__ import annotations

from typing import Callable, Optional

from ..models import FilterSettings
from ..storage import KeyValueStore, settings_key
from ..utils.config_loader import load_default_settings
from ..utils.logging import get_logger

logger = get_logger("pulse.services.settings")


class SettingsStore:
    """Per-user topics and sources. Every edit is persisted immediately."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        defaults: Optional[FilterSettings] = None,
        load_defaults: Callable[[], FilterSettings] = load_default_settings,
    ) -> None:
        self.store = store
        self._defaults = defaults
        self._load_defaults = load_defaults

    def defaults(self) -> FilterSettings:
        if self._defaults is None:
            self._defaults = self._load_defaults()
        return FilterSettings(
            active_topics=list(self._defaults.active_topics),
            custom_sources=list(self._defaults.custom_sources),
        )

    def get(self, user_id: str) -> FilterSettings:
        data = self.store.get(settings_key(user_id))
        if isinstance(data, dict):
            return FilterSettings.from_dict(data)
        if data is not None:
            logger.warning("Ignoring malformed settings for user %s", user_id)
        return self.defaults()

    def save(self, user_id: str, settings: FilterSettings) -> FilterSettings:
        self.store.set(settings_key(user_id), settings.to_dict())
        return settings

    def toggle_topic(self, user_id: str, topic: str) -> FilterSettings:
        settings = self.get(user_id)
        if topic in settings.active_topics:
            settings.active_topics = [t for t in settings.active_topics if t != topic]
        else:
            settings.active_topics = [*settings.active_topics, topic]
        return self.save(user_id, settings)

    def add_topic(self, user_id: str, topic: str) -> FilterSettings:
        settings = self.get(user_id)
        topic = topic.strip()
        if not topic or topic in settings.active_topics:
            return settings
        settings.active_topics = [*settings.active_topics, topic]
        return self.save(user_id, settings)

    def add_source(self, user_id: str, source: str) -> FilterSettings:
        settings = self.get(user_id)
        source = source.strip()
        if not source or source in settings.custom_sources:
            return settings
        settings.custom_sources = [*settings.custom_sources, source]
        return self.save(user_id, settings)

    def remove_source(self, user_id: str, source: str) -> FilterSettings:
        settings = self.get(user_id)
        settings.custom_sources = [s for s in settings.custom_sources if s != source]
        return self.save(user_id, settings)
