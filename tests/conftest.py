"""
Shared fixtures for the intent pipeline tests.
"""

from collections.abc import Callable

import pytest

from codegraph_intent.domain.models import AnalysisResult
from codegraph_intent.infrastructure import (
    FeatureExtractor,
    InMemorySessionState,
    IntentResolver,
    IntentScorer,
    StrategyRecommender,
)
from codegraph_intent.observability import get_metrics_collector
from codegraph_intent.service import QueryIntentService

MARKERS = {
    "unit": "single component, no I/O",
    "integration": "query in, envelope out, through the public entry points",
    "slow": "takes more than a second",
}


@pytest.fixture(autouse=True)
def reset_metrics():
    """Counters are process-global; isolate each test from the others"""
    collector = get_metrics_collector()
    collector.reset()
    yield collector
    collector.reset()


@pytest.fixture
def extractor() -> FeatureExtractor:
    return FeatureExtractor()


@pytest.fixture
def scorer() -> IntentScorer:
    return IntentScorer()


@pytest.fixture
def resolver() -> IntentResolver:
    return IntentResolver()


@pytest.fixture
def recommender() -> StrategyRecommender:
    return StrategyRecommender()


@pytest.fixture
def session_state() -> InMemorySessionState:
    return InMemorySessionState()


@pytest.fixture
def service(session_state) -> QueryIntentService:
    return QueryIntentService(session=session_state)


@pytest.fixture
def analyze(extractor) -> Callable[[str], AnalysisResult]:
    """query -> AnalysisResult"""
    return extractor.analyze


def pytest_configure(config):
    for name, description in MARKERS.items():
        config.addinivalue_line("markers", f"{name}: {description}")


def pytest_collection_modifyitems(config, items):
    """Mark tests by the directory they live in (tests/unit, tests/integration)"""
    for item in items:
        suite = item.path.parent.name
        if suite in ("unit", "integration"):
            item.add_marker(suite)
