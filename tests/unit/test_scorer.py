"""
Tests for the weighted intent scorer.
"""

import pytest

from codegraph_intent.config import ScoringWeights
from codegraph_intent.domain.models import IntentKind, Sentiment
from codegraph_intent.infrastructure.scorer import IntentScorer


class TestScoreMap:
    """Shape of the score map."""

    def test_scores_every_intent_in_declaration_order(self, scorer, analyze):
        scores = scorer.score_all(analyze("hello"), Sentiment.NEUTRAL)

        assert list(scores) == list(IntentKind)

    def test_default_intent_has_base_score(self, scorer, analyze):
        scores = scorer.score_all(analyze("hello"), Sentiment.NEUTRAL)

        assert scores[IntentKind.UNDERSTAND_ENTITY] == pytest.approx(0.3)
        assert all(score == 0.0 for kind, score in scores.items() if kind != IntentKind.UNDERSTAND_ENTITY)

    def test_scores_are_not_normalized(self, scorer, analyze):
        analysis = analyze("Why does OrderProcessor throw a NullPointerException?")
        scores = scorer.score_all(analysis, Sentiment.PROBLEM_FOCUSED)

        assert scores[IntentKind.DEBUG_ISSUE] > 1.0
        assert sum(scores.values()) > 1.0


class TestIntentSignals:
    """Per-intent contributions."""

    def test_understand_entity(self, scorer, analyze):
        scores = scorer.score_all(analyze("What is the UserService class?"), Sentiment.NEUTRAL)

        # base + WHAT question + single entity
        assert scores[IntentKind.UNDERSTAND_ENTITY] == pytest.approx(0.8)
        assert scores[IntentKind.LOCATE_ENTITY] == pytest.approx(0.2)

    def test_understand_entity_learning_bonus(self, scorer, analyze):
        analysis = analyze("What is the UserService class?")

        neutral = scorer.score_all(analysis, Sentiment.NEUTRAL)
        learning = scorer.score_all(analysis, Sentiment.LEARNING_FOCUSED)

        assert learning[IntentKind.UNDERSTAND_ENTITY] - neutral[IntentKind.UNDERSTAND_ENTITY] == pytest.approx(0.1)
        doc = IntentKind.GENERATE_DOCUMENTATION
        assert learning[doc] - neutral[doc] == pytest.approx(0.2)

    def test_debug_issue_with_problem_sentiment(self, scorer, analyze):
        analysis = analyze("Why does OrderProcessor throw a NullPointerException?")

        scores = scorer.score_all(analysis, Sentiment.PROBLEM_FOCUSED)

        # sentiment + WHY + debug keywords + error term
        assert scores[IntentKind.DEBUG_ISSUE] == pytest.approx(1.4)
        assert scores[IntentKind.DEBUG_ISSUE] >= 1.1

    def test_debug_issue_without_sentiment(self, scorer, analyze):
        analysis = analyze("Why does OrderProcessor throw a NullPointerException?")

        scores = scorer.score_all(analysis, Sentiment.NEUTRAL)

        assert scores[IntentKind.DEBUG_ISSUE] == pytest.approx(1.0)

    def test_understand_flow(self, scorer, analyze):
        scores = scorer.score_all(analyze("How does the checkout process work?"), Sentiment.NEUTRAL)

        # HOW + "process" term + "process" flow keyword
        assert scores[IntentKind.UNDERSTAND_FLOW] == pytest.approx(0.9)

    def test_locate_entity(self, scorer, analyze):
        scores = scorer.score_all(analyze("Where is the PaymentService?"), Sentiment.NEUTRAL)

        # WHERE + single entity
        assert scores[IntentKind.LOCATE_ENTITY] == pytest.approx(0.7)

    def test_locate_terms(self, scorer, analyze):
        scores = scorer.score_all(analyze("find the login page"), Sentiment.NEUTRAL)

        assert scores[IntentKind.LOCATE_ENTITY] == pytest.approx(0.3)

    def test_compare_entities(self, scorer, analyze):
        scores = scorer.score_all(analyze("Compare OrderService and PaymentService"), Sentiment.NEUTRAL)

        assert scores[IntentKind.COMPARE_ENTITIES] == pytest.approx(1.0)
        assert scores[IntentKind.UNDERSTAND_FLOW] == pytest.approx(0.2)

    def test_compare_conjunction_needs_entities(self, scorer, analyze):
        scores = scorer.score_all(analyze("compare cats and dogs"), Sentiment.NEUTRAL)

        assert scores[IntentKind.COMPARE_ENTITIES] == pytest.approx(0.5)

    def test_explore_architecture(self, scorer, analyze):
        scores = scorer.score_all(analyze("show the architecture"), Sentiment.NEUTRAL)

        assert scores[IntentKind.EXPLORE_ARCHITECTURE] == pytest.approx(0.7)

    def test_architecture_complexity_bonus(self, scorer, analyze):
        query = ". ".join(["the layered architecture"] * 20)
        analysis = analyze(query)

        scores = scorer.score_all(analysis, Sentiment.NEUTRAL)

        assert analysis.complexity.complexity_level.value == "complex"
        assert scores[IntentKind.EXPLORE_ARCHITECTURE] == pytest.approx(0.9)

    def test_analyze_performance(self, scorer, analyze):
        scores = scorer.score_all(analyze("find the bottleneck making the cache slow"), Sentiment.NEUTRAL)

        assert scores[IntentKind.ANALYZE_PERFORMANCE] == pytest.approx(0.9)
        assert scores[IntentKind.LOCATE_ENTITY] == pytest.approx(0.3)

    def test_generate_documentation(self, scorer, analyze):
        scores = scorer.score_all(analyze("give me a summary to document the billing"), Sentiment.NEUTRAL)

        assert scores[IntentKind.GENERATE_DOCUMENTATION] == pytest.approx(0.5)


class TestCustomWeights:
    """Injected weight tables."""

    def test_weights_are_injectable(self, analyze):
        scorer = IntentScorer(ScoringWeights(compare_term=0.9))

        scores = scorer.score_all(analyze("Compare OrderService and PaymentService"), Sentiment.NEUTRAL)

        assert scores[IntentKind.COMPARE_ENTITIES] == pytest.approx(1.4)

    def test_default_weights_unchanged(self, scorer):
        assert scorer.weights == ScoringWeights()
