"""
Intent Scorer

Scores every intent kind independently by summing weighted signals taken from
a query analysis. Scores are additive and unnormalized.
"""

from codegraph_intent.config import DEFAULT_WEIGHTS, ScoringWeights
from codegraph_intent.domain.models import (
    AnalysisResult,
    ComplexityLevel,
    IntentKind,
    QuestionType,
    ScoreMap,
    Sentiment,
)
from codegraph_intent.infrastructure.vocabulary import contains_any

ERROR_TERMS = ("error", "exception", "fail", "bug", "crash", "nullpointer")
FLOW_TERMS = ("flow", "process", "works")
LOCATE_TERMS = ("find", "locate", "search")
COMPARE_TERMS = ("compare", "difference", "vs")
ARCHITECTURE_TERMS = ("architecture", "structure", "design")
PERFORMANCE_TERMS = ("performance", "slow", "optimize")
BOTTLENECK_TERMS = ("bottleneck", "fast")
DOCUMENTATION_TERMS = ("document", "explain", "describe")
SUMMARY_TERMS = ("summary", "overview")


class IntentScorer:
    """
    Weighted rule scorer.

    Example:
        ```python
        scorer = IntentScorer()
        scores = scorer.score_all(analysis, Sentiment.PROBLEM_FOCUSED)
        scores[IntentKind.DEBUG_ISSUE]  # 1.4
        ```
    """

    def __init__(self, weights: ScoringWeights | None = None):
        self.weights = weights or DEFAULT_WEIGHTS

    def score_all(self, analysis: AnalysisResult, sentiment: Sentiment) -> ScoreMap:
        """
        Score all intents.

        Args:
            analysis: Feature extraction output
            sentiment: Query sentiment to score against

        Returns:
            Raw score per intent kind, in IntentKind declaration order
        """
        query = analysis.normalized_query
        primary = analysis.question_patterns.primary_pattern
        entity_count = analysis.entities.total

        scores = {
            IntentKind.DEBUG_ISSUE: self._score_debug(analysis, query, primary, sentiment),
            IntentKind.UNDERSTAND_FLOW: self._score_flow(analysis, query, primary, entity_count),
            IntentKind.LOCATE_ENTITY: self._score_locate(query, primary, entity_count),
            IntentKind.COMPARE_ENTITIES: self._score_compare(query, entity_count),
            IntentKind.EXPLORE_ARCHITECTURE: self._score_architecture(analysis, query),
            IntentKind.ANALYZE_PERFORMANCE: self._score_performance(analysis, query),
            IntentKind.GENERATE_DOCUMENTATION: self._score_documentation(query, sentiment),
            IntentKind.UNDERSTAND_ENTITY: self._score_entity(primary, entity_count, sentiment),
        }
        return {kind: scores[kind] for kind in IntentKind}

    def _score_debug(self, analysis: AnalysisResult, query: str, primary: QuestionType, sentiment: Sentiment) -> float:
        w = self.weights
        score = 0.0
        if sentiment == Sentiment.PROBLEM_FOCUSED:
            score += w.debug_problem_sentiment
        if primary == QuestionType.WHY:
            score += w.debug_why_question
        if analysis.keywords.debug:
            score += w.debug_keyword
        if contains_any(query, ERROR_TERMS):
            score += w.debug_error_term
        return score

    def _score_flow(self, analysis: AnalysisResult, query: str, primary: QuestionType, entity_count: int) -> float:
        w = self.weights
        score = 0.0
        if primary == QuestionType.HOW:
            score += w.flow_how_question
        if contains_any(query, FLOW_TERMS):
            score += w.flow_term
        if entity_count > 1:
            score += w.flow_multiple_entities
        if analysis.keywords.flow:
            score += w.flow_keyword
        return score

    def _score_locate(self, query: str, primary: QuestionType, entity_count: int) -> float:
        w = self.weights
        score = 0.0
        if primary == QuestionType.WHERE:
            score += w.locate_where_question
        if contains_any(query, LOCATE_TERMS):
            score += w.locate_term
        if entity_count == 1:
            score += w.locate_single_entity
        return score

    def _score_compare(self, query: str, entity_count: int) -> float:
        w = self.weights
        score = 0.0
        if contains_any(query, COMPARE_TERMS):
            score += w.compare_term
        if entity_count >= 2:
            score += w.compare_multiple_entities
        if " and " in query and entity_count > 1:
            score += w.compare_conjunction
        return score

    def _score_architecture(self, analysis: AnalysisResult, query: str) -> float:
        w = self.weights
        score = 0.0
        if analysis.keywords.architecture:
            score += w.architecture_keyword
        if contains_any(query, ARCHITECTURE_TERMS):
            score += w.architecture_term
        if analysis.complexity.complexity_level == ComplexityLevel.COMPLEX:
            score += w.architecture_complex_query
        return score

    def _score_performance(self, analysis: AnalysisResult, query: str) -> float:
        w = self.weights
        score = 0.0
        if analysis.keywords.performance:
            score += w.performance_keyword
        if contains_any(query, PERFORMANCE_TERMS):
            score += w.performance_term
        if contains_any(query, BOTTLENECK_TERMS):
            score += w.performance_bottleneck_term
        return score

    def _score_documentation(self, query: str, sentiment: Sentiment) -> float:
        w = self.weights
        score = 0.0
        if contains_any(query, DOCUMENTATION_TERMS):
            score += w.documentation_term
        if sentiment == Sentiment.LEARNING_FOCUSED:
            score += w.documentation_learning_sentiment
        if contains_any(query, SUMMARY_TERMS):
            score += w.documentation_summary_term
        return score

    def _score_entity(self, primary: QuestionType, entity_count: int, sentiment: Sentiment) -> float:
        w = self.weights
        score = w.entity_base
        if primary == QuestionType.WHAT:
            score += w.entity_what_question
        if entity_count == 1:
            score += w.entity_single_entity
        if sentiment == Sentiment.LEARNING_FOCUSED:
            score += w.entity_learning_sentiment
        return score
