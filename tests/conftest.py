"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- HTTP clients bound to an isolated engine
- Deterministic clocks and random sources
- Small seed taxonomies
- Fresh in-memory engines
"""

from datetime import datetime, timezone
from typing import AsyncGenerator, List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from adaptive_highlighter.api.app import app
from adaptive_highlighter.api.dependencies import get_engine
from adaptive_highlighter.models.taxonomy import Category
from adaptive_highlighter.pipeline import AnnotationEngine
from adaptive_highlighter.storage import InMemoryStore
from tests.fixtures.clocks import FixedClock, SequenceRandom


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def never_explore() -> SequenceRandom:
    """Draws that never fall under any exploration rate below 0.99."""
    return SequenceRandom([0.99])


@pytest.fixture
def always_explore() -> SequenceRandom:
    return SequenceRandom([0.0])


@pytest.fixture
def lighting_only() -> List[Category]:
    return [Category(id="lighting", label="Lighting", seed_words=["light", "shadow"])]


@pytest.fixture
def film_categories() -> List[Category]:
    return [
        Category(id="lighting", label="Lighting", seed_words=["light", "shadow", "glow"]),
        Category(id="camera", label="Camera", seed_words=["lens", "shot", "dolly", "camera"]),
        Category(id="technical", label="Technical", seed_words=["depth", "field", "bokeh"]),
    ]


@pytest.fixture
def engine(film_categories, clock, never_explore) -> AnnotationEngine:
    """Fresh in-memory engine with deterministic clock and no exploration."""
    return AnnotationEngine(
        store=InMemoryStore(),
        categories=film_categories,
        rng=never_explore,
        clock=clock,
    )


@pytest_asyncio.fixture
async def async_client(engine) -> AsyncGenerator[AsyncClient, None]:
    """
    Create async HTTP client for testing FastAPI endpoints.

    The API's engine dependency is replaced with the isolated engine fixture.

    Yields:
        AsyncClient instance
    """
    app.dependency_overrides[get_engine] = lambda: engine
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


def pytest_configure(config):
    """
    Configure pytest with custom markers and settings.
    """
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (API, end-to-end)"
    )
    config.addinivalue_line(
        "markers", "slow: Slow tests that may take longer to run"
    )
