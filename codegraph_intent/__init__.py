"""
CodeGraph Intent

Rule-based intent classification for developer queries about a codebase:
feature extraction, multi-factor intent scoring and retrieval strategy
recommendation.
"""

from codegraph_intent.config import IntentSettings, ResolutionConfig, ScoringWeights
from codegraph_intent.domain import (
    AnalysisResult,
    IntentKind,
    ResolvedIntent,
    Sentiment,
    Strategy,
    StrategyRecommendation,
    ToolResponse,
)
from codegraph_intent.exceptions import (
    AnalysisStructureError,
    IntentError,
    IntentInternalError,
    QueryValidationError,
)
from codegraph_intent.infrastructure import (
    FeatureExtractor,
    InMemorySessionState,
    IntentResolver,
    IntentScorer,
    StrategyRecommender,
)
from codegraph_intent.service import QueryIntentService

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "FeatureExtractor",
    "IntentScorer",
    "IntentResolver",
    "StrategyRecommender",
    "QueryIntentService",
    "InMemorySessionState",
    # Models
    "AnalysisResult",
    "IntentKind",
    "ResolvedIntent",
    "Sentiment",
    "Strategy",
    "StrategyRecommendation",
    "ToolResponse",
    # Config
    "IntentSettings",
    "ResolutionConfig",
    "ScoringWeights",
    # Errors
    "IntentError",
    "QueryValidationError",
    "AnalysisStructureError",
    "IntentInternalError",
]
