"""
Pytest configuration and fixtures for all tests
"""

import pytest

from speedread.config import Settings, reset_settings
from speedread.services.clock import ManualClock
from speedread.services.progress_store import ProgressStore
from speedread.services.reader import ReaderController
from speedread.services.scheduler import PlaybackScheduler
from speedread.services.storage import InMemoryStore


class RecordingPresentation:
    """Presentation mode double that records enter/exit requests."""

    def __init__(self, fail_on_enter: bool = False):
        self.fail_on_enter = fail_on_enter
        self.calls = []

    def enter(self):
        self.calls.append("enter")
        if self.fail_on_enter:
            raise RuntimeError("fullscreen denied")

    def exit(self):
        self.calls.append("exit")


@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    """Reset config singleton and ignore the developer's environment."""
    for name in (
        "SPEEDREAD_DEFAULT_WPM",
        "SPEEDREAD_DEFAULT_THEME",
        "SPEEDREAD_LARGE_DOCUMENT_THRESHOLD",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def config():
    """Settings with defaults, unaffected by any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def presentation():
    return RecordingPresentation()


@pytest.fixture
def failing_presentation():
    """Presentation mode whose enter() request is denied."""
    return RecordingPresentation(fail_on_enter=True)


@pytest.fixture
def scheduler(clock):
    """A 300 wpm scheduler (200 ms per word) on a manual clock."""
    return PlaybackScheduler(clock, wpm=300)


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def progress_store(memory_store):
    return ProgressStore(memory_store)


@pytest.fixture
def reader(progress_store, clock, config):
    return ReaderController(store=progress_store, clock=clock, config=config)


@pytest.fixture
def sample_words():
    return ["The", "quick", "brown", "fox", "jumps", "over", "the", "lazy", "dog."]
