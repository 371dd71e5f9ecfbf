"""Shared fixtures: AnyIO backend, zero backoff, deterministic syllable counting."""

import pytest

from haiku_commit.haiku import syllables


@pytest.fixture
def anyio_backend() -> str:
    """Ensure AnyIO uses the asyncio event loop backend."""
    return "asyncio"


@pytest.fixture
def no_backoff(monkeypatch):
    """Make provider retries instant."""
    monkeypatch.setattr("haiku_commit.llm.base.RETRY_DELAYS", (0, 0))


@pytest.fixture(autouse=True)
def heuristic_counter():
    """Count syllables with the heuristic so tests don't depend on dictionary data."""
    previous = syllables.get_default_counter()
    counter = syllables.set_default_counter("heuristic")
    yield counter
    syllables.set_default_counter(previous)


# Classic 5-7-5 under both the heuristic and CMUdict
VALID_HAIKU = "an old silent pond\na frog jumps into the pond\nsplash silence again"
INVALID_HAIKU = "code flows\nrefactor\ntests pass"
