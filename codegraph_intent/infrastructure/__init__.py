"""
Intent Infrastructure

Rule-based implementations of the analysis, scoring, resolution and
strategy stages.
"""

from .feature_extractor import FeatureExtractor
from .resolver import IntentResolver
from .scorer import IntentScorer
from .session_state import InMemorySessionState
from .strategy import StrategyRecommender

__all__ = [
    "FeatureExtractor",
    "IntentScorer",
    "IntentResolver",
    "StrategyRecommender",
    "InMemorySessionState",
]
