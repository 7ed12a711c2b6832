"""
Intent Resolver

Turns a query analysis into a primary intent, up to two secondary intents,
an explanation and an overall confidence.
"""

from codegraph_intent.config import DEFAULT_RESOLUTION, ResolutionConfig
from codegraph_intent.domain.models import (
    AnalysisResult,
    IntentKind,
    PrimaryIntent,
    QuestionType,
    ResolvedIntent,
    ScoreMap,
    SecondaryIntent,
    Sentiment,
)
from codegraph_intent.domain.ports import INTENT_CONFIDENCE_KEY, RESOLVED_INTENT_KEY, SessionStateSink
from codegraph_intent.exceptions import AnalysisStructureError, IntentError, IntentInternalError
from codegraph_intent.infrastructure.scorer import IntentScorer
from codegraph_intent.observability import get_logger
from codegraph_intent.utils import clamp

logger = get_logger(__name__)

INTENT_CLAUSES = {
    IntentKind.DEBUG_ISSUE: "Query indicates troubleshooting or error investigation.",
    IntentKind.UNDERSTAND_FLOW: "Query seeks to understand process or execution flow.",
    IntentKind.LOCATE_ENTITY: "Query aims to find or locate specific code entities.",
    IntentKind.COMPARE_ENTITIES: "Query requests comparison between multiple entities.",
    IntentKind.EXPLORE_ARCHITECTURE: "Query focuses on architectural understanding.",
    IntentKind.ANALYZE_PERFORMANCE: "Query relates to performance analysis or optimization.",
    IntentKind.GENERATE_DOCUMENTATION: "Query requests documentation or explanation generation.",
}
DEFAULT_CLAUSE = "Query seeks general understanding of code entities."

REQUIRED_PARTS = ("entities", "question_patterns", "complexity", "keywords", "metrics")


class IntentResolver:
    """
    Multi-factor intent resolver.

    Scoring is delegated to IntentScorer; this class picks the winner,
    the near-tied alternatives and the blended confidence.

    Example:
        ```python
        resolver = IntentResolver()
        resolved = resolver.resolve(extractor.analyze("What is the UserService class?"))
        resolved.primary.kind  # IntentKind.UNDERSTAND_ENTITY
        ```
    """

    def __init__(self, scorer: IntentScorer | None = None, config: ResolutionConfig | None = None):
        self.scorer = scorer or IntentScorer()
        self.config = config or DEFAULT_RESOLUTION

    def resolve(
        self,
        analysis: AnalysisResult,
        sentiment: Sentiment | None = None,
        session: SessionStateSink | None = None,
    ) -> ResolvedIntent:
        """
        Resolve the intent of an analysed query.

        Args:
            analysis: Output of FeatureExtractor.analyze
            sentiment: Overrides the sentiment detected during analysis
            session: Optional sink receiving the resolved intent and confidence

        Returns:
            ResolvedIntent

        Raises:
            AnalysisStructureError: If analysis is not an AnalysisResult or lacks a part
            IntentInternalError: On any unexpected fault while scoring
        """
        self._validate(analysis)

        try:
            if sentiment is None:
                sentiment = analysis.characteristics.sentiment if analysis.characteristics else Sentiment.NEUTRAL

            scores = self.scorer.score_all(analysis, sentiment)
            resolved = self._select(analysis, scores, sentiment)
        except IntentError:
            raise
        except Exception as e:
            raise IntentInternalError(f"Intent resolution failed: {e}") from e

        logger.info(
            "intent_resolved",
            intent=resolved.primary.kind.value,
            score=round(resolved.primary.confidence, 3),
            overall_confidence=round(resolved.overall_confidence, 3),
            secondary=[s.kind.value for s in resolved.secondary],
        )

        if session is not None:
            self._publish(session, resolved)

        return resolved

    def _validate(self, analysis: AnalysisResult) -> None:
        if not isinstance(analysis, AnalysisResult):
            raise AnalysisStructureError(f"Expected AnalysisResult, got {type(analysis).__name__}")

        for part in REQUIRED_PARTS:
            if getattr(analysis, part, None) is None:
                raise AnalysisStructureError(f"Analysis is missing '{part}'", missing=part)

    def _select(self, analysis: AnalysisResult, scores: ScoreMap, sentiment: Sentiment) -> ResolvedIntent:
        # max() keeps the first maximal element, so ties follow enum order
        primary_kind = max(IntentKind, key=lambda kind: scores[kind])
        primary_score = scores[primary_kind]
        question_type = analysis.question_patterns.primary_pattern

        return ResolvedIntent(
            primary=PrimaryIntent(
                kind=primary_kind,
                confidence=primary_score,
                explanation=self.explain(primary_kind, primary_score, question_type),
            ),
            secondary=self.secondary_intents(scores, primary_kind),
            all_scores=scores,
            overall_confidence=self.overall_confidence(primary_score, analysis.metrics.analysis_confidence),
            question_type=question_type,
            sentiment=sentiment,
        )

    def secondary_intents(self, scores: ScoreMap, primary_kind: IntentKind) -> tuple[SecondaryIntent, ...]:
        """Intents within the margin of the primary and above the floor, best first."""
        primary_score = scores[primary_kind]
        floor = primary_score - self.config.secondary_margin

        candidates = [
            kind
            for kind in IntentKind
            if kind != primary_kind and scores[kind] >= floor and scores[kind] > self.config.secondary_min_score
        ]
        candidates.sort(key=lambda kind: scores[kind], reverse=True)

        return tuple(
            SecondaryIntent(kind=kind, confidence=scores[kind], score_difference=primary_score - scores[kind])
            for kind in candidates[: self.config.max_secondary]
        )

    def overall_confidence(self, primary_score: float, analysis_confidence: float) -> float:
        blended = (
            primary_score * self.config.primary_score_weight
            + analysis_confidence * self.config.analysis_confidence_weight
        )
        return clamp(blended)

    @staticmethod
    def explain(kind: IntentKind, score: float, question_type: QuestionType) -> str:
        explanation = f"Resolved intent '{kind.humanized}' with {score * 100:.1f}% confidence. "
        explanation += INTENT_CLAUSES.get(kind, DEFAULT_CLAUSE)
        if question_type != QuestionType.UNKNOWN:
            explanation += f" Primary question type: {question_type.value}."
        return explanation

    @staticmethod
    def _publish(session: SessionStateSink, resolved: ResolvedIntent) -> None:
        try:
            session.put(RESOLVED_INTENT_KEY, resolved.primary.kind.value)
            session.put(INTENT_CONFIDENCE_KEY, resolved.overall_confidence)
        except Exception as e:
            logger.warning("session_state_write_failed", error=str(e), error_type=type(e).__name__)
