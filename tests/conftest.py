"""Shared fixtures for Daily Pulse tests."""

from typing import List

import pytest

from daily_pulse.models import FilterSettings
from daily_pulse.processors.ai import AIClient
from daily_pulse.services import ArticleRepository, IdentityService, SettingsStore
from daily_pulse.storage import MemoryStore


class FakeAIClient(AIClient):
    """Returns queued replies (or raises queued exceptions) in order."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.prompts: List[str] = []
        self.calls: List[dict] = []

    def generate(self, prompt, *, temperature=0.2, search=True):
        self.prompts.append(prompt)
        self.calls.append({"temperature": temperature, "search": search})
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def defaults():
    return FilterSettings(active_topics=["LLM", "Robotics"], custom_sources=["Hacker News"])


@pytest.fixture
def identity(store):
    # Low iteration count keeps hashing fast in tests
    return IdentityService(store, iterations=1_000)


@pytest.fixture
def settings_store(store, defaults):
    return SettingsStore(store, defaults=defaults)


@pytest.fixture
def repository(store):
    return ArticleRepository(store)


@pytest.fixture
def make_ai():
    return FakeAIClient
