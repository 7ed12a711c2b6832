"""Intent Domain"""

from .envelope import ToolMetadata, ToolResponse
from .models import (
    AnalysisMetrics,
    AnalysisResult,
    ComplexityAssessment,
    ComplexityLevel,
    EntityCounts,
    ExecutionPhase,
    ExecutionPlan,
    ExtractedEntities,
    IntentKind,
    KeywordHits,
    PhaseType,
    PrimaryIntent,
    QueryCharacteristics,
    QuestionPatterns,
    QuestionType,
    ResolvedIntent,
    ScoreMap,
    SecondaryIntent,
    Sentiment,
    Strategy,
    StrategyRecommendation,
)
from .ports import INTENT_CONFIDENCE_KEY, RESOLVED_INTENT_KEY, SessionStateSink

__all__ = [
    # Analysis
    "AnalysisMetrics",
    "AnalysisResult",
    "ComplexityAssessment",
    "ComplexityLevel",
    "EntityCounts",
    "ExtractedEntities",
    "KeywordHits",
    "QueryCharacteristics",
    "QuestionPatterns",
    "QuestionType",
    "Sentiment",
    # Intent
    "IntentKind",
    "PrimaryIntent",
    "ResolvedIntent",
    "ScoreMap",
    "SecondaryIntent",
    # Strategy
    "ExecutionPhase",
    "ExecutionPlan",
    "PhaseType",
    "Strategy",
    "StrategyRecommendation",
    # Envelope
    "ToolMetadata",
    "ToolResponse",
    # Ports
    "SessionStateSink",
    "RESOLVED_INTENT_KEY",
    "INTENT_CONFIDENCE_KEY",
]
