"""
Query Feature Extractor

Breaks a raw developer query into structured features: code entities,
question patterns, complexity, category keywords and analysis metrics.
"""

import re
from collections.abc import Mapping
from typing import Any

from codegraph_intent.domain.models import (
    AnalysisMetrics,
    AnalysisResult,
    ComplexityAssessment,
    ComplexityLevel,
    ExtractedEntities,
    KeywordHits,
    QueryCharacteristics,
    QuestionPatterns,
    QuestionType,
    Sentiment,
)
from codegraph_intent.exceptions import QueryValidationError
from codegraph_intent.infrastructure.vocabulary import (
    ARCHITECTURE_KEYWORDS,
    CLASS_PATTERN,
    CONJUNCTIONS,
    DEBUG_KEYWORDS,
    FLOW_KEYWORDS,
    IMPERATIVE_PREFIXES,
    LEARNING_TERMS,
    METHOD_PATTERN,
    NEGATIONS,
    PACKAGE_PATTERN,
    PERFORMANCE_KEYWORDS,
    PROBLEM_TERMS,
    QUESTION_PATTERNS,
    SENTENCE_SPLIT,
    contains_any,
)
from codegraph_intent.observability import get_logger
from codegraph_intent.utils import clamp

logger = get_logger(__name__)

SIMPLE_THRESHOLD = 0.3
COMPLEX_THRESHOLD = 0.7


class FeatureExtractor:
    """
    Rule-based query feature extractor.

    Stateless: one instance can serve concurrent callers.
    """

    def analyze(self, query: str, aux_context: Mapping[str, Any] | None = None) -> AnalysisResult:
        """
        Analyze a query.

        Args:
            query: Developer query in natural language
            aux_context: Optional caller context; only its keys are echoed back

        Returns:
            AnalysisResult for the query

        Raises:
            QueryValidationError: If query is None, not a string, or blank
        """
        if query is None or not isinstance(query, str) or not query.strip():
            raise QueryValidationError("Query cannot be empty", query=query if isinstance(query, str) else None)

        normalized = query.strip().lower()

        entities = self.extract_entities(query)
        patterns = self.detect_question_patterns(normalized)
        complexity = self.assess_complexity(query, entities.total)
        keywords = self.extract_keywords(normalized)
        characteristics = self.describe_characteristics(query, normalized)
        metrics = self.compute_metrics(query, entities, patterns, complexity.word_count)

        logger.debug(
            "query_analyzed",
            entities=entities.total,
            primary_pattern=patterns.primary_pattern.value,
            complexity=complexity.complexity_level.value,
            keywords=keywords.total_keywords,
        )

        return AnalysisResult(
            original_query=query,
            normalized_query=normalized,
            entities=entities,
            question_patterns=patterns,
            complexity=complexity,
            keywords=keywords,
            characteristics=characteristics,
            metrics=metrics,
            context_keys=tuple(aux_context.keys()) if aux_context else (),
        )

    def extract_entities(self, query: str) -> ExtractedEntities:
        """Extract class, method and package references from the raw query."""
        return ExtractedEntities(
            classes=self._unique_matches(CLASS_PATTERN, query),
            methods=self._unique_matches(METHOD_PATTERN, query),
            packages=self._unique_matches(PACKAGE_PATTERN, query),
        )

    def detect_question_patterns(self, normalized_query: str) -> QuestionPatterns:
        matched = {kind: bool(pattern.search(normalized_query)) for kind, pattern in QUESTION_PATTERNS.items()}
        return QuestionPatterns(
            what=matched[QuestionType.WHAT],
            how=matched[QuestionType.HOW],
            where=matched[QuestionType.WHERE],
            why=matched[QuestionType.WHY],
            when=matched[QuestionType.WHEN],
        )

    def assess_complexity(self, query: str, entity_count: int) -> ComplexityAssessment:
        """
        Score query complexity from size and entity density.

        score = words/50*0.4 + sentences/5*0.3 + entities/10*0.3, capped at 1.0
        """
        word_count = len(query.split())
        sentence_count = sum(1 for segment in SENTENCE_SPLIT.split(query) if segment.strip())

        score = clamp((word_count / 50.0) * 0.4 + (sentence_count / 5.0) * 0.3 + (entity_count / 10.0) * 0.3)

        if score < SIMPLE_THRESHOLD:
            level = ComplexityLevel.SIMPLE
        elif score < COMPLEX_THRESHOLD:
            level = ComplexityLevel.MODERATE
        else:
            level = ComplexityLevel.COMPLEX

        return ComplexityAssessment(
            word_count=word_count,
            sentence_count=sentence_count,
            entity_count=entity_count,
            complexity_score=score,
            complexity_level=level,
        )

    def extract_keywords(self, normalized_query: str) -> KeywordHits:
        def hits(vocabulary: tuple[str, ...]) -> tuple[str, ...]:
            return tuple(word for word in vocabulary if word in normalized_query)

        return KeywordHits(
            debug=hits(DEBUG_KEYWORDS),
            flow=hits(FLOW_KEYWORDS),
            architecture=hits(ARCHITECTURE_KEYWORDS),
            performance=hits(PERFORMANCE_KEYWORDS),
        )

    def describe_characteristics(self, query: str, normalized_query: str) -> QueryCharacteristics:
        return QueryCharacteristics(
            length=len(query),
            has_conjunctions=contains_any(normalized_query, CONJUNCTIONS),
            has_negation=contains_any(normalized_query, NEGATIONS),
            is_imperative=normalized_query.startswith(IMPERATIVE_PREFIXES),
            sentiment=self.detect_sentiment(normalized_query),
        )

    def detect_sentiment(self, normalized_query: str) -> Sentiment:
        if contains_any(normalized_query, PROBLEM_TERMS):
            return Sentiment.PROBLEM_FOCUSED
        if contains_any(normalized_query, LEARNING_TERMS):
            return Sentiment.LEARNING_FOCUSED
        return Sentiment.NEUTRAL

    def compute_metrics(
        self,
        query: str,
        entities: ExtractedEntities,
        patterns: QuestionPatterns,
        word_count: int,
    ) -> AnalysisMetrics:
        total = entities.total

        confidence = min(0.3, len(query) / 200.0)
        confidence += min(0.3, total / 10.0)
        if patterns.has_question_pattern:
            confidence += 0.2
        if total > 0:
            confidence += 0.2

        return AnalysisMetrics(
            analysis_confidence=clamp(confidence),
            entity_density=total / word_count if word_count else 0.0,
            question_pattern_count=patterns.pattern_count,
            analysis_complete=True,
            specificity=self.specificity(query.strip(), total),
            clarity=self.clarity(query.strip(), patterns.has_question_pattern),
        )

    @staticmethod
    def specificity(query: str, entity_count: int) -> float:
        """0.5 base, raised by named entities and quoted text."""
        score = 0.5
        if entity_count > 0:
            score += 0.3
        if entity_count > 2:
            score += 0.2
        if '"' in query or "'" in query:
            score += 0.2
        return min(1.0, score)

    @staticmethod
    def clarity(query: str, has_question_word: bool) -> float:
        score = 0.7 if has_question_word else 0.4
        if 10 <= len(query) <= 150:
            score += 0.2
        if query.endswith("?"):
            score += 0.1
        return min(1.0, score)

    @staticmethod
    def _unique_matches(pattern: re.Pattern[str], text: str) -> tuple[str, ...]:
        """All matches in first-occurrence order, duplicates removed."""
        return tuple(dict.fromkeys(match.group().strip() for match in pattern.finditer(text)))
